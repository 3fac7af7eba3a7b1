"""DOM normalization: permissive parse plus removal of non-content nodes."""

from __future__ import annotations

from typing import Iterable, Optional, Union
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from quizsource.scraper.rules import NOISE_SELECTORS

logger = structlog.get_logger(__name__)


def parse_html(html: Optional[Union[str, bytes]]) -> BeautifulSoup:
    """Parse *html* into a tree without ever raising.

    ``html.parser`` copes with unclosed tags and missing ``<html>``/``<body>``
    elements.  Markup the parser rejects outright yields an empty tree.
    """
    try:
        return BeautifulSoup(html or "", "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("html_rejected", reason=str(exc))
        return BeautifulSoup("", "html.parser")


def normalize(
    html: Optional[Union[str, bytes]],
    noise_selectors: Iterable[str] = NOISE_SELECTORS,
) -> BeautifulSoup:
    """Return a parsed tree with every noise node removed.

    Removal happens before any content selection so that navigation chrome
    and script bodies can never end up inside a candidate region.
    """
    soup = parse_html(html)
    removed = 0
    for selector in noise_selectors:
        for node in soup.select(selector):
            # A parent removed earlier in this loop already took the node out.
            if node.decomposed:
                continue
            node.decompose()
            removed += 1
    logger.debug("dom_normalized", removed_nodes=removed)
    return soup


def resolve_base_url(soup: BeautifulSoup, fetched_url: str) -> str:
    """Return the URL relative references in *soup* resolve against."""
    base = soup.find("base", href=True)
    if base is not None:
        href = str(base["href"]).strip()
        if href:
            return urljoin(fetched_url, href)
    return fetched_url
