"""site_crawler.errors: exception hierarchy shared by the CLI, config and crawl core."""

from __future__ import annotations

from site_crawler.crawler.models import FailureKind, TaskFailure

__all__ = ["CrawlerError", "InvalidURLError", "HostlessURLError", "FetchError"]


class CrawlerError(Exception):
    """Base class for all SiteCrawler errors."""


class InvalidURLError(CrawlerError, ValueError):
    """A seed URL could not be parsed. Fatal at startup."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url}")
        self.url = url


class HostlessURLError(CrawlerError, RuntimeError):
    """A URL without a host reached code that keys on the host."""

    def __init__(self, url: str) -> None:
        super().__init__(f"url must have host: {url}")
        self.url = url


class FetchError(CrawlerError):
    """A single GET failed; carries the typed failure for the task that issued it."""

    def __init__(self, url: str, kind: FailureKind, detail: str = "") -> None:
        self.failure = TaskFailure(url=url, kind=kind, detail=detail)
        super().__init__(str(self.failure))

    @property
    def url(self) -> str:
        return self.failure.url

    @property
    def kind(self) -> FailureKind:
        return self.failure.kind
