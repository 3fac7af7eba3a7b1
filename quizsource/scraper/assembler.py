"""Assemble the final :class:`ExtractionResult`."""

from __future__ import annotations

import structlog

from quizsource.scraper.errors import NoContentFound
from quizsource.scraper.models import ContentCandidate, ExtractionResult, Metadata
from quizsource.scraper.scorer import count_words

logger = structlog.get_logger(__name__)


def assemble(candidate: ContentCandidate, metadata: Metadata, url: str = "") -> ExtractionResult:
    """Combine the winning candidate with the document metadata.

    Short content is still returned; ``result.low_confidence`` tells the
    caller to decide whether it is usable.

    Raises:
        NoContentFound: the candidate carries no text at all.
    """
    content = candidate.extracted_text.strip()
    if not content:
        raise NoContentFound(url)

    result = ExtractionResult(
        title=metadata.title,
        content=content,
        word_count=count_words(content),
        author=metadata.author,
        publish_date=metadata.publish_date,
        url=url,
        selector=candidate.selector.selector,
    )
    if result.low_confidence:
        logger.warning("short_content", stage="assembling", url=url, word_count=result.word_count)
    return result
