# File: site_crawler/report/__init__.py
"""site_crawler.report: crawl statistics reports used by the CLI."""

from site_crawler.report.json_report import render_json

__all__ = ["render_json"]
