# === FILE: site_crawler/crawler/dispatcher.py ===
"""
The crawl dispatcher: turns the frontier into concurrent Spider and Fetch
tasks under per-host admission control, deduplicates what they find and
runs until nothing is pending or in flight.

Only the dispatcher mutates the archive, the throttle and the frontier.
Tasks report back through their return values, harvested first-completed
first-served between passes.
"""
from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from site_crawler.crawler.archive import Archive
from site_crawler.crawler.fetcher import FetchCapability
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.models import CrawlStats, Finding, Page, TaskFailure
from site_crawler.crawler.tasks import fetch_resource, spider_page
from site_crawler.crawler.throttle import HostThrottle
from site_crawler.logger import logger
from site_crawler.utils import extract_host

__all__ = ("Dispatcher",)

_InFlight = Dict[asyncio.Task, Tuple[str, Finding]]


class Dispatcher:
    """Scheduling loop of one crawl. ``run()`` returns once the crawl has drained."""

    def __init__(
        self,
        seeds: Iterable[str],
        fetcher: FetchCapability,
        *,
        max_depth: int,
        max_host_visits: int,
        resource_dir: Union[str, Path],
    ) -> None:
        self.seeds: List[str] = list(dict.fromkeys(seeds))
        self.fetcher = fetcher
        self.max_depth = max_depth
        self.resource_dir = Path(resource_dir)
        self.archive = Archive()
        self.throttle = HostThrottle(max_host_visits)
        self.frontier = Frontier()
        self.stats = CrawlStats()
        self._spiders: _InFlight = {}
        self._fetchers: _InFlight = {}

    @property
    def outstanding(self) -> int:
        return len(self._spiders) + len(self._fetchers)

    @property
    def drained(self) -> bool:
        return not self.frontier and not self.outstanding

    async def run(self) -> CrawlStats:
        logger.info("crawling these urls: %s", ", ".join(self.seeds))
        start = time.monotonic()
        seeds = [Page(url, 0) for url in self.seeds]
        self.archive.insert_all(seeds)
        self.frontier.extend(seeds)

        while not self.drained:
            self.stats.passes += 1
            self._admit()
            await self._wait_for_completion()
            self._harvest_spiders()
            self._harvest_fetchers()

        self.stats.archive_size = len(self.archive)
        logger.info(
            "crawl drained after %d passes in %.2f s: %d pages, %d resources, %d failures",
            self.stats.passes,
            time.monotonic() - start,
            self.stats.pages_crawled,
            self.stats.resources_saved,
            self.stats.failures,
        )
        return self.stats

    def _admit(self) -> None:
        deferred: List[Finding] = []
        for finding in self.frontier.drain():
            host = extract_host(finding.url)
            if not self.throttle.try_admit(host):
                logger.debug("too many visitors on `%s`, requeueing `%s`", host, finding.url)
                self.stats.deferred += 1
                deferred.append(finding)
                continue
            if isinstance(finding, Page):
                task = asyncio.create_task(spider_page(self.fetcher, finding.url, finding.depth))
                self._spiders[task] = (host, finding)
            else:
                task = asyncio.create_task(
                    fetch_resource(self.fetcher, finding.url, self.resource_dir)
                )
                self._fetchers[task] = (host, finding)
        self.frontier.extend(deferred)

    async def _wait_for_completion(self) -> None:
        in_flight = set(self._spiders) | set(self._fetchers)
        if not in_flight:
            if self.frontier:
                # throttle denied everything although no visit is in flight
                raise RuntimeError(f"{len(self.frontier)} findings stalled with nothing in flight")
            return
        await asyncio.wait(in_flight, return_when=asyncio.FIRST_COMPLETED)

    def _collect(self, tasks: _InFlight) -> List[Tuple[Finding, object]]:
        """Pop finished tasks, release their hosts and return (finding, outcome) pairs."""
        finished = [task for task in tasks if task.done()]
        results: List[Tuple[Finding, object]] = []
        for task in finished:
            host, finding = tasks.pop(task)
            try:
                outcome = task.result()
            except Exception:
                logger.exception("task for `%s` crashed", finding.url)
                self.stats.failures += 1
                continue
            finally:
                self.throttle.release(host)
            results.append((finding, outcome))
        return results

    def _harvest_spiders(self) -> None:
        for finding, outcome in self._collect(self._spiders):
            if isinstance(outcome, TaskFailure):
                logger.warning("%s", outcome)
                self.stats.failures += 1
                continue
            self.stats.pages_crawled += 1
            found = outcome.findings
            fresh = self.archive.difference(found)
            self.stats.findings_discovered += len(fresh)
            self.stats.duplicates_skipped += len(found) - len(fresh)
            self.archive.insert_all(fresh)
            for new in fresh:
                if isinstance(new, Page) and new.depth >= self.max_depth:
                    self.stats.depth_limited += 1
                    continue
                self.frontier.push(new)

    def _harvest_fetchers(self) -> None:
        for finding, outcome in self._collect(self._fetchers):
            if isinstance(outcome, TaskFailure):
                logger.warning("%s", outcome)
                self.stats.failures += 1
            elif outcome is not None:
                self.stats.resources_saved += 1
                logger.debug("saved `%s` to %s", finding.url, outcome)
