"""End-to-end extraction: URL in, :class:`ExtractionResult` out.

One call walks a fixed sequence of stages::

    fetching -> normalizing -> scanning(rule i) -> qualified -> assembling -> done
                                    |
                                    +-> every rule exhausted -> failed

Nothing is shared between calls apart from the read-only rule tuples and
settings, so concurrent extractions need no locking.
"""

from __future__ import annotations

import threading
from typing import Iterable, Optional, Sequence

import httpx
import structlog

from quizsource.config import settings
from quizsource.scraper.assembler import assemble
from quizsource.scraper.cascade import select_best_candidate, select_fallback
from quizsource.scraper.errors import Cancelled, NoContentFound
from quizsource.scraper.fetcher import fetch_url, looks_like_spa
from quizsource.scraper.metadata import extract_metadata
from quizsource.scraper.models import ContentCandidate, ExtractionResult, RawDocument, SelectorRule
from quizsource.scraper.normalizer import normalize, resolve_base_url
from quizsource.scraper.rules import DEFAULT_RULES, NOISE_SELECTORS

logger = structlog.get_logger(__name__)


def extract_document(
    raw: RawDocument,
    *,
    rules: Sequence[SelectorRule] = DEFAULT_RULES,
    noise_selectors: Iterable[str] = NOISE_SELECTORS,
    fallbacks: Optional[bool] = None,
) -> ExtractionResult:
    """Run normalization, the selector cascade and metadata extraction on *raw*.

    Raises:
        NoContentFound: no rule (and no fallback, when enabled) qualified.
    """
    log = logger.bind(url=raw.url)
    log.debug("normalizing", stage="normalizing")
    tree = normalize(raw.html, noise_selectors)
    raw.base_url = resolve_base_url(tree, raw.base_url)

    use_fallbacks = settings.enable_fallbacks if fallbacks is None else fallbacks
    candidate: Optional[ContentCandidate]
    try:
        candidate = select_best_candidate(tree, rules)
    except NoContentFound:
        candidate = None
    if candidate is None and use_fallbacks:
        log.info("cascade_exhausted_trying_fallbacks", stage="scanning")
        try:
            candidate = select_fallback(tree, rules)
        except NoContentFound:
            candidate = None
    if candidate is None:
        likely_spa = looks_like_spa(raw.html)
        log.warning("extraction_failed", stage="failed", likely_spa=likely_spa)
        raise NoContentFound(raw.url, likely_spa=likely_spa)

    metadata = extract_metadata(tree, raw.base_url)
    result = assemble(candidate, metadata, url=raw.url)
    log.info(
        "extraction_done",
        stage="done",
        selector=result.selector,
        word_count=result.word_count,
        low_confidence=result.low_confidence,
    )
    return result


def extract_html(
    html: str,
    url: str = "",
    *,
    rules: Sequence[SelectorRule] = DEFAULT_RULES,
    noise_selectors: Iterable[str] = NOISE_SELECTORS,
    fallbacks: Optional[bool] = None,
) -> ExtractionResult:
    """Extract from HTML that is already in hand (no network)."""
    raw = RawDocument(url=url, html=html, status_code=200)
    return extract_document(raw, rules=rules, noise_selectors=noise_selectors, fallbacks=fallbacks)


def extract_url(
    url: str,
    *,
    cancel: Optional[threading.Event] = None,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
    rules: Sequence[SelectorRule] = DEFAULT_RULES,
    noise_selectors: Iterable[str] = NOISE_SELECTORS,
    fallbacks: Optional[bool] = None,
) -> ExtractionResult:
    """Fetch *url* and extract its article content and metadata.

    Raises:
        InvalidUrlError, NetworkError, FetchError: from the fetch.
        NoContentFound: nothing on the page qualified as article content.
        Cancelled: *cancel* was set; no DOM work is done after that.
    """
    raw = fetch_url(url, cancel=cancel, timeout=timeout, client=client)
    if cancel is not None and cancel.is_set():
        raise Cancelled(url)
    return extract_document(raw, rules=rules, noise_selectors=noise_selectors, fallbacks=fallbacks)
