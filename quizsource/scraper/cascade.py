"""Selector cascade: pick the content region for a normalized document.

The policy is greedy and priority-ordered.  Rules are tried in rank order and
the first one whose scored text qualifies wins, even if a later rule would
have produced more text.  Generic selectors such as ``.content`` sit at the
end of the default list for exactly that reason.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

import structlog
import trafilatura
from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from quizsource.config import settings
from quizsource.scraper.errors import NoContentFound
from quizsource.scraper.models import ContentCandidate, SelectorRule
from quizsource.scraper.rules import BODY_TAGS, DEFAULT_RULES
from quizsource.scraper.scorer import (
    PARAGRAPH_SEPARATOR,
    clean_fragment,
    collect_fragments,
    count_words,
    is_strong,
    qualifies,
    score_element,
)

logger = structlog.get_logger(__name__)


def ordered(rules: Sequence[SelectorRule]) -> List[SelectorRule]:
    """Rules sorted by rank; ties keep their configured order."""
    return sorted(rules, key=lambda rule: rule.rank)


def match_rule(tree: BeautifulSoup, rule: SelectorRule) -> Optional[Tag]:
    """Return the first element *rule* matches, or ``None``.

    An unparseable selector counts as "no match" so a bad entry can't take
    the whole cascade down.
    """
    try:
        return tree.select_one(rule.selector)
    except SelectorSyntaxError as exc:
        logger.warning("invalid_selector", selector=rule.selector, reason=str(exc))
        return None


def iter_candidates(
    tree: BeautifulSoup, rules: Sequence[SelectorRule] = DEFAULT_RULES
) -> Iterator[Tuple[SelectorRule, Optional[ContentCandidate]]]:
    """Yield ``(rule, candidate)`` for each rule in rank order.

    ``candidate`` is ``None`` when the rule matched nothing.
    """
    for rule in ordered(rules):
        element = match_rule(tree, rule)
        if element is None:
            yield rule, None
        else:
            yield rule, score_element(element, rule)


def select_best_candidate(
    tree: BeautifulSoup, rules: Sequence[SelectorRule] = DEFAULT_RULES
) -> ContentCandidate:
    """Return the first qualifying candidate.

    Raises:
        NoContentFound: every rule either matched nothing or fell below the
            qualification threshold.
    """
    for rule, candidate in iter_candidates(tree, rules):
        if candidate is None:
            logger.debug("selector_no_match", stage="scanning", selector=rule.selector, rank=rule.rank)
            continue
        logger.debug(
            "selector_scored",
            stage="scanning",
            selector=rule.selector,
            rank=rule.rank,
            char_length=candidate.char_length,
            word_count=candidate.word_count,
            strong=is_strong(candidate),
        )
        if qualifies(candidate):
            logger.info(
                "selector_qualified",
                stage="qualified",
                selector=rule.selector,
                rank=rule.rank,
                char_length=candidate.char_length,
            )
            return candidate
    raise NoContentFound()


# ---------------------------------------------------------------------------
# Fallback strategies (opt-in via settings.enable_fallbacks)
# ---------------------------------------------------------------------------

def _candidate(name: str, rank: int, fragments: List[str]) -> ContentCandidate:
    text = PARAGRAPH_SEPARATOR.join(fragments)
    return ContentCandidate(
        selector=SelectorRule(selector=name, rank=rank),
        extracted_text=text,
        char_length=len(text),
        word_count=count_words(text),
    )


def _line_fragments(text: str) -> List[str]:
    fragments = []
    for line in text.splitlines():
        line = clean_fragment(line)
        if len(line) > settings.fragment_min_chars:
            fragments.append(line)
    return fragments


def _paragraph_sweep(tree: BeautifulSoup) -> List[str]:
    return collect_fragments(tree, tags=("p",))


def _readability(tree: BeautifulSoup) -> List[str]:
    text = trafilatura.extract(
        str(tree),
        include_links=False,
        include_images=False,
        include_tables=True,
    )
    return _line_fragments(text or "")


def _substantial_div(tree: BeautifulSoup) -> List[str]:
    for div in tree.find_all("div"):
        text = div.get_text("\n").strip()
        if len(text) > 100 and count_words(text) > 20:
            return _line_fragments(text)
    return []


def _body_sweep(tree: BeautifulSoup) -> List[str]:
    return collect_fragments(tree.body or tree, tags=BODY_TAGS)


_FALLBACKS = (
    ("fallback:paragraphs", _paragraph_sweep),
    ("fallback:readability", _readability),
    ("fallback:substantial-div", _substantial_div),
    ("fallback:body", _body_sweep),
)


def select_fallback(
    tree: BeautifulSoup, rules: Sequence[SelectorRule] = DEFAULT_RULES
) -> ContentCandidate:
    """Last-resort extraction for pages no cascade rule could handle.

    Fallback candidates are ranked after the cascade rules so results stay
    explainable.  The same qualification threshold applies.

    Raises:
        NoContentFound: no strategy produced qualifying text either.
    """
    base_rank = max((rule.rank for rule in rules), default=0)
    for offset, (name, strategy) in enumerate(_FALLBACKS, start=1):
        candidate = _candidate(name, base_rank + offset, strategy(tree))
        logger.debug("fallback_scored", strategy=name, char_length=candidate.char_length)
        if qualifies(candidate):
            logger.info("fallback_qualified", stage="qualified", strategy=name, char_length=candidate.char_length)
            return candidate
    raise NoContentFound()
