"""Default selector cascade and noise denylist.

Both are immutable tuples.  Pipeline functions take them as arguments and
fall back to these defaults, so tests can inject short rule lists.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from quizsource.scraper.models import SelectorRule


def build_rules(selectors: Iterable[str]) -> Tuple[SelectorRule, ...]:
    """Turn an ordered list of CSS selectors into ranked rules (rank 1 first)."""
    return tuple(
        SelectorRule(selector=selector, rank=rank)
        for rank, selector in enumerate(selectors, start=1)
    )


# Site-family containers come first; generic containers last because they
# tend to match feedback forms and other boilerplate.
DEFAULT_SELECTORS: Tuple[str, ...] = (
    # AWS documentation
    "#main-content",
    "#main-col-body",
    ".awsdocs-view",
    "#awsdocs-content",
    # Articles and blogs
    "article",
    ".entry-content",
    ".post-content",
    ".article-content",
    '[data-testid="article-body"]',
    ".article-body",
    "main",
    ".main-content",
    ".post-body",
    ".article-text",
    "#content",
    ".page-content",
    ".text-content",
    # GitHub
    ".markdown-body",
    '[data-target="readme-toc.content"]',
    # Documentation sites
    ".doc-content",
    ".documentation-content",
    ".guide-content",
    # Generic
    ".content",
)

DEFAULT_RULES: Tuple[SelectorRule, ...] = build_rules(DEFAULT_SELECTORS)

NOISE_SELECTORS: Tuple[str, ...] = (
    "script",
    "style",
    "noscript",
    "nav",
    "header",
    "footer",
    "aside",
    ".advertisement",
    ".ads",
    ".social-share",
)

# Tags whose text the content scorer collects from a candidate region.
SCORED_TAGS: Tuple[str, ...] = ("p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "div")

# Tags swept from the whole body when the cascade falls back.
BODY_TAGS: Tuple[str, ...] = ("p", "h1", "h2", "h3", "h4", "h5", "h6", "li")
