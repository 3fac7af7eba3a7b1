"""Exception hierarchy for the extraction pipeline.

Every failure reaches the caller as one of these types; the pipeline never
retries and never swallows them.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for all extraction failures."""


class InvalidUrlError(ExtractionError):
    """The URL is not an absolute ``http``/``https`` URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL (only absolute http/https URLs are supported): {url!r}")
        self.url = url


class NetworkError(ExtractionError):
    """Transport-level failure: DNS, connect, TLS, timeout."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Network error fetching {url}: {reason}")
        self.url = url
        self.reason = reason


class FetchError(ExtractionError):
    """The server answered with a non-2xx status."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"HTTP error {status} fetching {url}")
        self.url = url
        self.status = status


class NoContentFound(ExtractionError):
    """No selector rule produced a qualifying content region."""

    def __init__(self, url: str = "", likely_spa: bool = False) -> None:
        message = "No readable article content found"
        if url:
            message += f" at {url}"
        if likely_spa:
            message += " (page looks client-rendered)"
        super().__init__(message)
        self.url = url
        self.likely_spa = likely_spa


class Cancelled(ExtractionError):
    """The caller cancelled the extraction."""

    def __init__(self, url: str = "") -> None:
        super().__init__(f"Extraction cancelled{': ' + url if url else ''}")
        self.url = url
