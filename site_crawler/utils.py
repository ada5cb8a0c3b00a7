# File: site_crawler/utils.py
"""site_crawler.utils: URL helpers shared by the resolver, the throttle and the fetch task."""

from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import urlsplit, urlunsplit

from site_crawler.errors import HostlessURLError

__all__: Sequence[str] = (
    "normalize_url",
    "site_root",
    "extract_host",
    "last_path_segment",
)


def normalize_url(url: str) -> str:
    """Lowercase scheme and host, turn an empty path into ``/`` and drop the fragment."""
    parsed = urlsplit(url)
    path = parsed.path or "/"
    return urlunsplit((parsed.scheme.lower(), parsed.netloc.lower(), path, parsed.query, ""))


def site_root(url: str) -> str:
    """Strip path, query and fragment: ``https://host/blog/post?x=1`` -> ``https://host/``."""
    parsed = urlsplit(url)
    return urlunsplit((parsed.scheme, parsed.netloc, "/", "", ""))


def extract_host(url: str) -> str:
    """Return the throttle key of *url*: lowercase hostname plus ``:port`` when explicit."""
    parsed = urlsplit(url)
    host = parsed.hostname
    if not host:
        raise HostlessURLError(url)
    port = parsed.port
    return f"{host}:{port}" if port is not None else host


def last_path_segment(url: str) -> Optional[str]:
    """Return the final path segment of *url*, or None when it is empty."""
    segment = urlsplit(url).path.rsplit("/", 1)[-1]
    return segment or None
