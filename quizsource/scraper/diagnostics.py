"""Offline tuning aid: report what every cascade rule would extract.

Nothing here is on the production path.  Unlike the cascade, every rule is
evaluated even after a winner is found, so rules can be compared side by
side.
"""

from __future__ import annotations

import threading
from typing import Iterable, Optional, Sequence

import httpx
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from quizsource.scraper.cascade import iter_candidates
from quizsource.scraper.fetcher import fetch_url, looks_like_spa
from quizsource.scraper.models import DiagnosticReport, ProbeReport, SelectorReport, SelectorRule
from quizsource.scraper.normalizer import normalize
from quizsource.scraper.rules import DEFAULT_RULES, NOISE_SELECTORS
from quizsource.scraper.scorer import clean_fragment, count_words, is_strong, qualifies

PREVIEW_CHARS = 150


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _probe(tree: BeautifulSoup, selector: str) -> ProbeReport:
    try:
        elements = tree.select(selector)
    except SelectorSyntaxError:
        elements = []
    if not elements:
        return ProbeReport(selector=selector, matched=False)
    text = clean_fragment(" ".join(element.get_text(" ") for element in elements))
    return ProbeReport(
        selector=selector,
        matched=True,
        char_length=len(text),
        word_count=count_words(text),
        preview=preview(text, 200),
    )


def diagnose_html(
    html: str,
    url: str = "",
    *,
    rules: Sequence[SelectorRule] = DEFAULT_RULES,
    noise_selectors: Iterable[str] = NOISE_SELECTORS,
    probes: Iterable[str] = (),
) -> DiagnosticReport:
    """Evaluate every rule against *html* and mark the one the cascade would pick.

    *probes* are extra ad-hoc selectors; their raw text (all matches, no
    fragment filtering) is measured for comparison.
    """
    tree = normalize(html, noise_selectors)
    report = DiagnosticReport(url=url, likely_spa=looks_like_spa(html))
    winner_found = False
    for rule, candidate in iter_candidates(tree, rules):
        if candidate is None:
            report.reports.append(SelectorReport(rule=rule, matched=False))
            continue
        ok = qualifies(candidate)
        report.reports.append(
            SelectorReport(
                rule=rule,
                matched=True,
                char_length=candidate.char_length,
                word_count=candidate.word_count,
                preview=preview(candidate.extracted_text),
                qualifies=ok,
                strong=is_strong(candidate),
                winner=ok and not winner_found,
            )
        )
        winner_found = winner_found or ok
    report.probes = [_probe(tree, selector) for selector in probes]
    return report


def diagnose_url(
    url: str,
    *,
    cancel: Optional[threading.Event] = None,
    client: Optional[httpx.Client] = None,
    rules: Sequence[SelectorRule] = DEFAULT_RULES,
    noise_selectors: Iterable[str] = NOISE_SELECTORS,
    probes: Iterable[str] = (),
) -> DiagnosticReport:
    """Fetch *url* and run :func:`diagnose_html` on it."""
    raw = fetch_url(url, cancel=cancel, client=client)
    return diagnose_html(
        raw.html, raw.url, rules=rules, noise_selectors=noise_selectors, probes=probes
    )
