"""
Append-only store of findings already dispatched or already known.
"""
from __future__ import annotations

from typing import Iterable, Iterator, Set

from site_crawler.crawler.models import Finding


class Archive:
    """Deduplication gate of the crawl. Grows for the life of the crawl and never shrinks."""

    def __init__(self) -> None:
        self._seen: Set[Finding] = set()

    def contains(self, finding: Finding) -> bool:
        return finding in self._seen

    __contains__ = contains

    def insert_all(self, findings: Iterable[Finding]) -> None:
        self._seen.update(findings)

    def difference(self, new: Iterable[Finding]) -> Set[Finding]:
        """Return the findings of *new* that are not archived yet."""
        return set(new) - self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self._seen)
