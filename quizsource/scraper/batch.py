"""Run many extractions concurrently.

Each URL gets its own pipeline run on a worker thread.  Failures are recorded
per URL and never abort the rest of the batch.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence

import httpx
import structlog

from quizsource.config import settings
from quizsource.scraper.errors import Cancelled, ExtractionError
from quizsource.scraper.models import ExtractionResult
from quizsource.scraper.pipeline import extract_url

logger = structlog.get_logger(__name__)


@dataclass
class BatchItem:
    url: str
    result: Optional[ExtractionResult] = None
    error: Optional[ExtractionError] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def _run_one(url: str, client: httpx.Client, cancel: threading.Event) -> BatchItem:
    # Queued work that starts after cancellation must not touch the network.
    if cancel.is_set():
        return BatchItem(url=url, error=Cancelled(url))
    try:
        return BatchItem(url=url, result=extract_url(url, cancel=cancel, client=client))
    except ExtractionError as exc:
        return BatchItem(url=url, error=exc)


def extract_many(
    urls: Sequence[str],
    *,
    max_workers: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
) -> List[BatchItem]:
    """Extract every URL in *urls*; results come back in input order.

    Concurrency is bounded by *max_workers* (default
    ``settings.max_concurrent_extractions``).  Setting *cancel* stops
    in-flight downloads and skips URLs that have not started yet.
    """
    if not urls:
        return []
    cancel = cancel or threading.Event()
    workers = max(1, min(max_workers or settings.max_concurrent_extractions, len(urls)))
    items: List[Optional[BatchItem]] = [None] * len(urls)

    with httpx.Client(
        timeout=settings.request_timeout,
        follow_redirects=True,
        limits=httpx.Limits(max_connections=workers),
    ) as client:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            future_to_index = {
                pool.submit(_run_one, url, client, cancel): index
                for index, url in enumerate(urls)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                item = future.result()
                items[index] = item
                if item.ok:
                    logger.info("batch_item_done", url=item.url, word_count=item.result.word_count)
                else:
                    logger.warning("batch_item_failed", url=item.url, error=str(item.error))

    return [item for item in items if item is not None]
