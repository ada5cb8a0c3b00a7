# site_crawler/crawler/tasks.py
"""
Units of work spawned by the dispatcher.

Both tasks only produce values: they never touch the archive or the host
throttle and never schedule further work themselves.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Set, Union

import aiofiles

from site_crawler.crawler.fetcher import FetchCapability
from site_crawler.crawler.link_extractor import extract_links
from site_crawler.crawler.link_resolver import resolve_links
from site_crawler.crawler.models import (
    FailureKind,
    Finding,
    Image,
    Page,
    SpiderResponse,
    TaskFailure,
)
from site_crawler.errors import FetchError
from site_crawler.logger import logger
from site_crawler.utils import last_path_segment

__all__ = ("collect_findings", "spider_page", "fetch_resource")


def collect_findings(body: Union[str, bytes], page_url: str, depth: int) -> Set[Finding]:
    """Pages found on a page crawled at *depth* are tagged ``depth + 1``; images carry no depth."""
    links = extract_links(body)
    findings: Set[Finding] = {
        Page(url, depth + 1) for url in resolve_links(links.page_candidates, page_url)
    }
    findings.update(Image(url) for url in resolve_links(links.resource_candidates, page_url))
    return findings


async def spider_page(
    fetcher: FetchCapability, url: str, depth: int
) -> Union[SpiderResponse, TaskFailure]:
    logger.info("crawling url `%s`", url)
    try:
        body = await fetcher.fetch(url)
    except FetchError as exc:
        return exc.failure
    findings = collect_findings(body, url, depth)
    logger.debug("found %d links on `%s`", len(findings), url)
    return SpiderResponse(url=url, depth=depth, findings=frozenset(findings))


async def fetch_resource(
    fetcher: FetchCapability, url: str, resource_dir: Path
) -> Union[Optional[Path], TaskFailure]:
    """
    Download *url* into ``resource_dir/<last path segment>``.

    Returns the written path, None when the URL has no path segment to name
    the file after, or a TaskFailure. Two resources sharing a last segment
    overwrite each other.
    """
    name = last_path_segment(url)
    if name is None:
        logger.debug("no file name in `%s`, skipping", url)
        return None

    logger.info("fetching `%s`", url)
    try:
        body = await fetcher.fetch(url)
    except FetchError as exc:
        return exc.failure

    target = Path(resource_dir) / name
    try:
        async with aiofiles.open(target, "wb") as fh:
            await fh.write(body)
    except OSError as exc:
        return TaskFailure(url=url, kind=FailureKind.IO, detail=str(exc))
    return target
