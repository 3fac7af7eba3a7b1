"""HTTP fetcher that presents itself as a regular browser."""

from __future__ import annotations

import re
import threading
from typing import Optional

import httpx
import structlog

from quizsource.config import settings
from quizsource.scraper.errors import Cancelled, FetchError, InvalidUrlError, NetworkError
from quizsource.scraper.models import FetchRequest, RawDocument

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# SPA / JS-rendered page detection heuristics
# ---------------------------------------------------------------------------
_SPA_PATTERNS = [
    re.compile(r'<div[^>]+id=["\'](?:root|app)["\']', re.IGNORECASE),
    re.compile(r"window\.__NEXT_DATA__", re.IGNORECASE),
    re.compile(r"ng-version=", re.IGNORECASE),
    re.compile(r"data-reactroot", re.IGNORECASE),
]


def looks_like_spa(html: str) -> bool:
    """Return ``True`` if *html* looks like a JavaScript app shell.

    Only used as a hint when nothing qualifies; pages are never rendered.
    """
    for pattern in _SPA_PATTERNS:
        if pattern.search(html):
            return True
    # Very little visible text relative to total HTML size.  Script and style
    # bodies are stripped first so their source doesn't count as text.
    no_scripts = re.sub(
        r"<(script|style)[^>]*>.*?</(script|style)>", "", html, flags=re.IGNORECASE | re.DOTALL
    )
    stripped = re.sub(r"<[^>]+>", "", no_scripts).strip()
    return len(html) > 2000 and len(stripped) < 200


def is_valid_url(url: str) -> bool:
    """Return ``True`` for absolute ``http``/``https`` URLs with a host.

    Parsed with :class:`httpx.URL`, so a URL accepted here is one the client
    will also accept.
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError):
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def _check_cancel(cancel: Optional[threading.Event], url: str) -> None:
    if cancel is not None and cancel.is_set():
        raise Cancelled(url)


def fetch_url(
    url: str,
    *,
    cancel: Optional[threading.Event] = None,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> RawDocument:
    """Fetch *url* and return a :class:`RawDocument`.

    The body is streamed so that *cancel* is honoured between chunks.  A
    shared *client* may be passed in (batch runs); otherwise a short-lived
    one is created and closed here.

    Raises:
        InvalidUrlError: *url* is not an absolute http(s) URL.
        FetchError: The server returned a non-2xx status.
        NetworkError: DNS, connect, TLS or timeout failure.
        Cancelled: *cancel* was set before or during the download.
    """
    request = FetchRequest(url=url)
    if not is_valid_url(request.url):
        raise InvalidUrlError(request.url)
    _check_cancel(cancel, request.url)

    owns_client = client is None
    if client is None:
        client = httpx.Client(
            timeout=timeout if timeout is not None else settings.request_timeout,
            follow_redirects=True,
        )

    logger.info("fetch_started", url=request.url)
    try:
        with client.stream("GET", request.url, headers=settings.browser_headers) as response:
            if not response.is_success:
                logger.warning("fetch_failed", url=request.url, status=response.status_code)
                raise FetchError(request.url, response.status_code)
            parts: list[str] = []
            for part in response.iter_text():
                _check_cancel(cancel, request.url)
                parts.append(part)
            final_url = str(response.url)
            status_code = response.status_code
    except httpx.RequestError as exc:
        reason = str(exc) or exc.__class__.__name__
        logger.warning("fetch_network_error", url=request.url, reason=reason)
        raise NetworkError(request.url, reason) from exc
    finally:
        if owns_client:
            client.close()

    html = "".join(parts)
    logger.info("fetch_completed", url=request.url, status=status_code, length=len(html))
    return RawDocument(url=request.url, html=html, status_code=status_code, base_url=final_url)
