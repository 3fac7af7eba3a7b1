"""Metadata extraction: title, author and publish date.

Runs over the whole normalized document, independent of which content rule
won, because bylines and dates often live outside the article container.
Every field except the title is optional.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup

from quizsource.scraper.fetcher import is_valid_url
from quizsource.scraper.models import Metadata
from quizsource.scraper.scorer import clean_fragment

UNTITLED = "Untitled Article"

_TITLE_META = (
    ("property", "og:title"),
    ("name", "twitter:title"),
)

_TITLE_SELECTORS = (
    "h1",
    ".entry-title",
    ".post-title",
    ".article-title",
    "[data-testid='headline']",
    ".headline",
)

_AUTHOR_META = (
    ("name", "author"),
    ("property", "article:author"),
    ("name", "byline"),
    ("name", "parsely-author"),
    ("name", "sailthru.author"),
    ("name", "dc.creator"),
)

_AUTHOR_SELECTORS = (
    ".author",
    ".byline",
    "[rel='author']",
    ".article-author",
    "[data-testid='author']",
)

_DATE_META = (
    ("property", "article:published_time"),
    ("property", "og:published_time"),
    ("name", "pubdate"),
    ("name", "publish_date"),
    ("name", "date"),
    ("name", "dc.date.issued"),
    ("itemprop", "datePublished"),
)

_DATE_SELECTORS = (
    ".publish-date",
    ".article-date",
    "[data-testid='publish-date']",
)

_BYLINE_RE = re.compile(
    r"^[Bb]y\s+(?![A-Z]\w*ing\b)"
    r"([A-Z][\w'\-.]+(?:\s+(?:[A-Z][\w'\-.]+|de|van|von|der|da|di|le|la)){0,3})"
    r"\s*(?:$|[|,·•\-]|on\b|\d)"
)
# Blocks a "By <Name>" line is read from; the match must start the block.
_BYLINE_TAGS = ("p", "div", "span", "li", "address", "small")
_AUTHOR_PREFIX_RE = re.compile(r"^(?:written\s+by|posted\s+by|by|author)\b\s*:?\s*", re.IGNORECASE)
_ISO_DATE_RE = re.compile(
    r"\b(\d{4}-\d{2}-\d{2}(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?)\b"
)
_URL_EXT_RE = re.compile(r"\.(html|htm|php|asp|aspx)$", re.IGNORECASE)


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    wanted = value.lower()
    for tag in soup.find_all("meta"):
        attr_value = tag.get(attr)
        if attr_value and str(attr_value).strip().lower() == wanted:
            content = clean_fragment(str(tag.get("content", "")))
            if content:
                return content
    return None


def _first_text(soup: BeautifulSoup, selectors: tuple[str, ...]) -> Optional[str]:
    for selector in selectors:
        element = soup.select_one(selector)
        if element is not None:
            text = clean_fragment(element.get_text(" "))
            if text:
                return text
    return None


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

def title_from_url(url: str) -> str:
    """Derive a readable title from the last path segment of *url*.

    ``/blog/my-first_post.html`` becomes ``My First Post``.
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return UNTITLED
    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return UNTITLED
    slug = _URL_EXT_RE.sub("", unquote(segments[-1]))
    words = re.sub(r"[-_]+", " ", slug).split()
    if not words:
        return UNTITLED
    return " ".join(word[:1].upper() + word[1:] for word in words)


def extract_title(soup: BeautifulSoup, url: str = "") -> str:
    if soup.title is not None:
        title = clean_fragment(soup.title.get_text())
        if title:
            return title
    for attr, value in _TITLE_META:
        title = _meta_content(soup, attr, value)
        if title:
            return title
    title = _first_text(soup, _TITLE_SELECTORS)
    if title:
        return title
    return title_from_url(url) if url else UNTITLED


# ---------------------------------------------------------------------------
# Author
# ---------------------------------------------------------------------------

def clean_author(raw: str) -> Optional[str]:
    name = _AUTHOR_PREFIX_RE.sub("", clean_fragment(raw)).strip(" .,;:|")
    return name or None


def extract_author(soup: BeautifulSoup) -> Optional[str]:
    for attr, value in _AUTHOR_META:
        content = _meta_content(soup, attr, value)
        # article:author is frequently a profile URL rather than a name.
        if content and not is_valid_url(content):
            author = clean_author(content)
            if author:
                return author
    text = _first_text(soup, _AUTHOR_SELECTORS)
    if text:
        author = clean_author(text)
        if author:
            return author
    body = soup.body or soup
    for element in body.find_all(list(_BYLINE_TAGS)):
        match = _BYLINE_RE.match(clean_fragment(element.get_text(" ")))
        if match:
            return clean_author(match.group(1))
    return None


# ---------------------------------------------------------------------------
# Publish date
# ---------------------------------------------------------------------------

def extract_publish_date(soup: BeautifulSoup) -> Optional[str]:
    for attr, value in _DATE_META:
        content = _meta_content(soup, attr, value)
        if content:
            return content
    time_tag = soup.select_one("time[datetime]")
    if time_tag is not None:
        value = clean_fragment(str(time_tag.get("datetime", ""))) or clean_fragment(time_tag.get_text())
        if value:
            return value
    for selector in _DATE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        value = clean_fragment(str(element.get("datetime", ""))) or clean_fragment(element.get_text(" "))
        if value:
            return value
    body = soup.body or soup
    match = _ISO_DATE_RE.search(body.get_text(" "))
    if match:
        return match.group(1)
    return None


def extract_metadata(soup: BeautifulSoup, url: str = "") -> Metadata:
    """Collect title, author and publish date from the whole document."""
    return Metadata(
        title=extract_title(soup, url),
        author=extract_author(soup),
        publish_date=extract_publish_date(soup),
    )
