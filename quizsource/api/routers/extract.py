"""Extraction endpoints.

Routes
------
POST /extract          Body: {"url": "https://...", "markdown": false}  → extract_url
POST /extract/debug    Body: {"url": "https://...", "probes": [...]}    → diagnose_url
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, HttpUrl

from quizsource.scraper import (
    Cancelled,
    ExtractionError,
    FetchError,
    InvalidUrlError,
    NetworkError,
    NoContentFound,
    diagnose_url,
    extract_url,
    render_markdown,
)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ExtractRequest(BaseModel):
    url: HttpUrl
    markdown: bool = False


class ExtractResponse(BaseModel):
    title: str
    author: Optional[str] = None
    publish_date: Optional[str] = None
    content: str
    word_count: int
    low_confidence: bool
    url: str
    selector: str
    markdown: Optional[str] = None


class DebugRequest(BaseModel):
    url: HttpUrl
    probes: list[str] = []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _http_error(exc: ExtractionError) -> HTTPException:
    """Map a pipeline failure onto an HTTP status."""
    if isinstance(exc, InvalidUrlError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, FetchError):
        return HTTPException(
            status_code=502,
            detail={"message": str(exc), "upstream_status": exc.status},
        )
    if isinstance(exc, NetworkError):
        return HTTPException(status_code=504, detail=str(exc))
    if isinstance(exc, NoContentFound):
        return HTTPException(
            status_code=422,
            detail={"message": str(exc), "likely_spa": exc.likely_spa},
        )
    if isinstance(exc, Cancelled):
        return HTTPException(status_code=499, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=ExtractResponse)
def extract_endpoint(body: ExtractRequest) -> dict[str, Any]:
    """Fetch the URL and return its article text and metadata.

    ``low_confidence`` is set when the text is short; the caller decides
    whether that is good enough.
    """
    try:
        result = extract_url(str(body.url))
    except ExtractionError as exc:
        raise _http_error(exc) from exc
    data = result.to_dict()
    if body.markdown:
        data["markdown"] = render_markdown(result)
    return data


@router.post("/debug")
def debug_endpoint(body: DebugRequest) -> dict[str, Any]:
    """Report what every selector rule would extract from the URL."""
    try:
        report = diagnose_url(str(body.url), probes=body.probes)
    except ExtractionError as exc:
        raise _http_error(exc) from exc
    return report.to_dict()
