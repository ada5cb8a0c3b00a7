# File: site_crawler/engine.py
"""site_crawler.engine: wires configuration, the HTTP fetcher and the dispatcher together."""

from __future__ import annotations

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.dispatcher import Dispatcher
from site_crawler.crawler.fetcher import Fetcher
from site_crawler.crawler.models import CrawlStats
from site_crawler.logger import logger

__all__ = ["start_crawl"]


async def start_crawl(config: CrawlerConfig) -> CrawlStats:
    """
    Run one crawl to completion and return its statistics.

    Parameters
    ----------
    config : CrawlerConfig
        Seeds, depth limit, host-visit ceiling, request timeout and resource directory.
    """
    resource_dir = config.resource_dir
    resource_dir.mkdir(parents=True, exist_ok=True)
    logger.debug("resources go to %s", resource_dir.resolve())

    async with Fetcher(timeout=config.timeout, user_agent=config.user_agent) as fetcher:
        dispatcher = Dispatcher(
            config.seed_urls,
            fetcher,
            max_depth=config.max_depth,
            max_host_visits=config.max_host_visits,
            resource_dir=resource_dir,
        )
        return await dispatcher.run()
