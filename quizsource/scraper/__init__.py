"""Scraper package: fetch a URL and extract article text plus metadata."""

from quizsource.scraper.batch import BatchItem, extract_many
from quizsource.scraper.cascade import select_best_candidate, select_fallback
from quizsource.scraper.diagnostics import diagnose_html, diagnose_url
from quizsource.scraper.errors import (
    Cancelled,
    ExtractionError,
    FetchError,
    InvalidUrlError,
    NetworkError,
    NoContentFound,
)
from quizsource.scraper.fetcher import fetch_url, is_valid_url
from quizsource.scraper.markdown import render_markdown
from quizsource.scraper.models import (
    ContentCandidate,
    DiagnosticReport,
    ExtractionResult,
    RawDocument,
    SelectorRule,
)
from quizsource.scraper.pipeline import extract_document, extract_html, extract_url
from quizsource.scraper.rules import DEFAULT_RULES, NOISE_SELECTORS, build_rules

__all__ = [
    "extract_url",
    "extract_html",
    "extract_document",
    "extract_many",
    "BatchItem",
    "fetch_url",
    "is_valid_url",
    "select_best_candidate",
    "select_fallback",
    "diagnose_html",
    "diagnose_url",
    "render_markdown",
    "build_rules",
    "DEFAULT_RULES",
    "NOISE_SELECTORS",
    "RawDocument",
    "SelectorRule",
    "ContentCandidate",
    "ExtractionResult",
    "DiagnosticReport",
    "ExtractionError",
    "InvalidUrlError",
    "NetworkError",
    "FetchError",
    "NoContentFound",
    "Cancelled",
]
