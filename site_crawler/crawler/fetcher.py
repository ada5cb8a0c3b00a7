# site_crawler/crawler/fetcher.py
"""
Fetcher module: one GET per call, bounded by a per-request timeout.

The dispatcher only needs an object with ``async fetch(url) -> bytes`` that
raises :class:`~site_crawler.errors.FetchError` on failure; :class:`Fetcher`
is the aiohttp-backed implementation used by the engine.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_crawler.crawler.models import FailureKind
from site_crawler.errors import FetchError

__all__ = ("FetchCapability", "Fetcher")


class FetchCapability(Protocol):
    async def fetch(self, url: str) -> bytes: ...


class Fetcher:
    """Owns an aiohttp session; no retries, no robots.txt, no rate limiting."""

    def __init__(self, *, timeout: float, user_agent: str) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> Fetcher:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={"User-Agent": self.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> bytes:
        """
        Download the full body of *url*.

        Raises FetchError with kind ``timeout``, ``transport`` or
        ``http_status`` (any non-2xx answer).
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, FailureKind.HTTP_STATUS, f"HTTP {resp.status}")
                return await resp.read()
        except asyncio.TimeoutError:
            # aiohttp's own timeout errors subclass both; timeout wins
            raise FetchError(url, FailureKind.TIMEOUT, f"no answer within {self.timeout}s") from None
        except ClientError as exc:
            raise FetchError(url, FailureKind.TRANSPORT, str(exc) or type(exc).__name__) from exc
