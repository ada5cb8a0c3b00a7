"""
Per-host admission control for the dispatcher.
"""
from __future__ import annotations

from typing import Dict, Optional


class HostThrottle:
    """
    Counts in-flight visits per host against a fixed ceiling.

    The ceiling is a hard cap: a host is denied once its count equals the
    ceiling, so at most ``ceiling`` visits to one host are ever in flight.
    """

    def __init__(self, ceiling: int) -> None:
        if ceiling < 1:
            raise ValueError("ceiling must be >= 1")
        self.ceiling = ceiling
        self._visits: Dict[str, int] = {}

    def try_admit(self, host: str) -> bool:
        visits = self._visits.get(host, 0)
        if visits >= self.ceiling:
            return False
        self._visits[host] = visits + 1
        return True

    def release(self, host: str) -> None:
        visits = self._visits.get(host, 0)
        if visits <= 0:
            raise RuntimeError(f"release of `{host}` without a matching admission")
        if visits == 1:
            del self._visits[host]
        else:
            self._visits[host] = visits - 1

    def in_flight(self, host: Optional[str] = None) -> int:
        """Visits in flight for *host*, or for all hosts when *host* is None."""
        if host is None:
            return sum(self._visits.values())
        return self._visits.get(host, 0)
