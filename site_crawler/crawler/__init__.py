"""Crawl core: findings, frontier, archive, throttle, tasks and the dispatcher."""
