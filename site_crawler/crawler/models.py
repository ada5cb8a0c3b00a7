"""
Data models for the SiteCrawler crawl core.
"""
from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, Union


@dataclass(frozen=True, slots=True)
class Page:
    """A page awaiting a crawl, tagged with its recursion depth."""

    url: str
    depth: int


@dataclass(frozen=True, slots=True)
class Image:
    """A resource awaiting download."""

    url: str


Finding = Union[Page, Image]


class FailureKind(str, enum.Enum):
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    IO = "io"


@dataclass(frozen=True, slots=True)
class TaskFailure:
    """Why a Spider or Fetch task produced nothing for *url*."""

    url: str
    kind: FailureKind
    detail: str = ""

    def __str__(self) -> str:
        text = f"{self.kind.value} error for `{self.url}`"
        return f"{text}: {self.detail}" if self.detail else text


@dataclass(frozen=True, slots=True)
class SpiderResponse:
    """Findings discovered on the page *url* crawled at *depth*."""

    url: str
    depth: int
    findings: FrozenSet[Finding] = field(default_factory=frozenset)


@dataclass(slots=True)
class CrawlStats:
    """Counters collected by the dispatcher over one crawl."""

    passes: int = 0
    pages_crawled: int = 0
    resources_saved: int = 0
    failures: int = 0
    findings_discovered: int = 0
    duplicates_skipped: int = 0
    depth_limited: int = 0
    deferred: int = 0
    archive_size: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
