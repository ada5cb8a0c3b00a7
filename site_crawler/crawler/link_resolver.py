# site_crawler/crawler/link_resolver.py
"""
Turns raw link candidates into absolute, crawlable URLs.

Relative links resolve against the *site-root* of the page they were found
on (``scheme://host/``), not against the page's own directory, so ``about``
found on ``https://host/blog/post1`` becomes ``https://host/about``.
"""
from __future__ import annotations

import ipaddress
import re
from typing import Iterable, Optional, Set
from urllib.parse import SplitResult, urljoin, urlsplit

from site_crawler.logger import logger
from site_crawler.utils import normalize_url, site_root

__all__ = ("parse_url", "resolve_link", "is_crawlable", "resolve_links")

_LABEL_RE = re.compile(r"^[a-z0-9_-]{1,63}$")


def _check_host(host: str) -> None:
    if ":" in host:
        ipaddress.ip_address(host)
        return
    try:
        ascii_host = host.rstrip(".").encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise ValueError(f"invalid host {host!r}: {exc}") from None
    labels = ascii_host.split(".")
    if len(ascii_host) > 253 or not all(_LABEL_RE.match(label) for label in labels):
        raise ValueError(f"invalid host {host!r}")


def parse_url(url: str) -> SplitResult:
    """
    Split *url* and validate its port and host.

    urlsplit itself accepts nearly anything, so a bad port, an empty label
    or a character a hostname cannot hold raises ValueError here.
    """
    parsed = urlsplit(url)
    port = parsed.port  # ValueError for a non-numeric or out-of-range port
    host = parsed.hostname
    if host:
        _check_host(host)
    elif port is not None:
        raise ValueError(f"port without host in {url!r}")
    return parsed


def resolve_link(raw: str, root: str) -> Optional[str]:
    """Resolve one candidate against *root*; None when the candidate is dropped."""
    candidate = raw.strip()
    try:
        parsed = parse_url(candidate)
    except ValueError as exc:
        logger.warning("Malformed link found: %s (%s)", raw, exc)
        return None

    if parsed.scheme:
        return normalize_url(candidate)

    try:
        absolute = urljoin(root, candidate)
        parse_url(absolute)
    except ValueError as exc:
        logger.debug("Could not resolve `%s` against `%s`: %s", raw, root, exc)
        return None
    return normalize_url(absolute)


def is_crawlable(url: str) -> bool:
    """Scheme must contain ``http`` (so ``https`` passes too) and a host must be present."""
    parsed = urlsplit(url)
    return "http" in parsed.scheme and bool(parsed.hostname)


def resolve_links(candidates: Iterable[str], page_url: str) -> Set[str]:
    """Resolve and filter all *candidates* found on *page_url*."""
    root = site_root(page_url)
    resolved: Set[str] = set()
    for raw in candidates:
        url = resolve_link(raw, root)
        if url is not None and is_crawlable(url):
            resolved.add(url)
    return resolved
