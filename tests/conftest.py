# File: tests/conftest.py
import asyncio
import logging
from typing import Dict, List, Optional, Union

import pytest

from site_crawler.crawler.models import FailureKind
from site_crawler.errors import FetchError


class FakeFetcher:
    """
    In-memory fetch capability for dispatcher and task tests.

    Unknown URLs answer like a 404. Tracks how many requests are in flight
    per call so tests can assert concurrency bounds.
    """

    def __init__(
        self,
        pages: Dict[str, Union[str, bytes]],
        failures: Optional[Dict[str, FailureKind]] = None,
        delay: float = 0.0,
    ) -> None:
        self.pages = pages
        self.failures = failures or {}
        self.delay = delay
        self.requests: List[str] = []
        self.active = 0
        self.peak = 0

    async def fetch(self, url: str) -> bytes:
        self.requests.append(url)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delay)
            if url in self.failures:
                raise FetchError(url, self.failures[url], "simulated")
            if url not in self.pages:
                raise FetchError(url, FailureKind.HTTP_STATUS, "HTTP 404")
            body = self.pages[url]
            return body.encode("utf-8") if isinstance(body, str) else body
        finally:
            self.active -= 1


@pytest.fixture()
def make_fetcher():
    """Return the FakeFetcher class so tests can build one per site."""
    return FakeFetcher


@pytest.fixture(autouse=True)
def reset_project_logger():
    """The CLI installs handlers bound to CliRunner streams; drop them after each test."""
    yield
    lg = logging.getLogger("SiteCrawler")
    lg.handlers.clear()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)
