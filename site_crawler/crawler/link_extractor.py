# site_crawler/crawler/link_extractor.py
"""
Candidate link extraction for SiteCrawler.

Only two kinds of start tags matter to the crawl: ``<a href>`` yields page
candidates and ``<img src>`` yields resource candidates. Values are returned
raw; resolution and filtering happen in :mod:`site_crawler.crawler.link_resolver`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from site_crawler.logger import logger

__all__ = ("ExtractedLinks", "extract_links")

# html.parser first, lxml when it chokes (e.g. bogus "<![msoffice9]>" sections)
_PARSERS = ("html.parser", "lxml")


@dataclass(slots=True)
class ExtractedLinks:
    """Raw attribute values found on one page, in document order."""

    page_candidates: List[str] = field(default_factory=list)
    resource_candidates: List[str] = field(default_factory=list)


def _attribute_values(soup: BeautifulSoup, tag_name: str, attr: str) -> List[str]:
    values: List[str] = []
    for tag in soup.find_all(tag_name):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(attr)
        # malformed tags may lose or duplicate attributes; skip anything odd
        if isinstance(value, str):
            values.append(value)
    return values


def _parse(body: Union[str, bytes]) -> Optional[BeautifulSoup]:
    for parser in _PARSERS:
        try:
            return BeautifulSoup(body, parser)
        except (AssertionError, ParserRejectedMarkup) as exc:
            logger.debug("%s rejected markup: %s", parser, exc)
    return None


def extract_links(body: Union[str, bytes]) -> ExtractedLinks:
    """
    Extract ``href`` of anchors and ``src`` of images from a page body.

    Never raises on broken markup: the lenient ``html.parser`` backend is
    tried first, then ``lxml``; a body neither can read yields no links.
    """
    soup = _parse(body)
    if soup is None:
        logger.warning("Unparseable page body, no links extracted")
        return ExtractedLinks()
    return ExtractedLinks(
        page_candidates=_attribute_values(soup, "a", "href"),
        resource_candidates=_attribute_values(soup, "img", "src"),
    )
