"""
Pending findings awaiting admission.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List

from site_crawler.crawler.models import Finding


class Frontier:
    """Unordered pending-work collection refilled on every scheduling pass."""

    def __init__(self, findings: Iterable[Finding] = ()) -> None:
        self._pending: List[Finding] = list(findings)

    def push(self, finding: Finding) -> None:
        self._pending.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        self._pending.extend(findings)

    def drain(self) -> List[Finding]:
        """Take every pending finding, leaving the frontier empty."""
        pending, self._pending = self._pending, []
        return pending

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self._pending)
