"""Content scoring: turn one candidate element into measurable text."""

from __future__ import annotations

from typing import List, Optional, Sequence

from bs4 import Tag

from quizsource.config import settings
from quizsource.scraper.models import ContentCandidate, SelectorRule
from quizsource.scraper.rules import SCORED_TAGS

PARAGRAPH_SEPARATOR = "\n\n"


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in *text*."""
    return len(text.split())


def clean_fragment(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return " ".join(text.split())


def collect_fragments(
    element: Tag,
    min_chars: Optional[int] = None,
    tags: Sequence[str] = SCORED_TAGS,
) -> List[str]:
    """Return the text of every scored descendant of *element*, in document order.

    Fragments of *min_chars* characters or fewer (button labels, icon glyphs,
    one-word UI bits) are dropped.
    """
    if min_chars is None:
        min_chars = settings.fragment_min_chars
    fragments: List[str] = []
    for node in element.find_all(list(tags)):
        text = clean_fragment(node.get_text(" "))
        if len(text) > min_chars:
            fragments.append(text)
    return fragments


def score_element(element: Tag, rule: SelectorRule) -> ContentCandidate:
    """Score the region *rule* matched and return it as a candidate."""
    text = PARAGRAPH_SEPARATOR.join(collect_fragments(element))
    return ContentCandidate(
        selector=rule,
        extracted_text=text,
        char_length=len(text),
        word_count=count_words(text),
    )


def qualifies(candidate: ContentCandidate) -> bool:
    """A candidate is usable once it has more than ``qualify_min_chars`` characters."""
    return candidate.char_length > settings.qualify_min_chars


def is_strong(candidate: ContentCandidate) -> bool:
    """Diagnostic marker only; never changes which rule wins."""
    return candidate.char_length > settings.strong_min_chars
