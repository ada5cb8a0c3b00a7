# site_crawler/__init__.py
"""
SiteCrawler package initializer.
Defines package version; the CLI lives in :mod:`site_crawler.cli`.
"""
__version__ = "0.1.0"

__all__ = ["__version__"]
