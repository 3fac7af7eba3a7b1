"""Centralised settings for the quizsource extraction pipeline.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "10.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "USER_AGENT",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        )
    )
    accept_language: str = field(
        default_factory=lambda: os.environ.get("ACCEPT_LANGUAGE", "en-US,en;q=0.5")
    )

    # ------------------------------------------------------------------
    # Content scoring thresholds
    # ------------------------------------------------------------------
    qualify_min_chars: int = field(
        default_factory=lambda: int(os.environ.get("QUALIFY_MIN_CHARS", "50"))
    )
    strong_min_chars: int = field(
        default_factory=lambda: int(os.environ.get("STRONG_MIN_CHARS", "100"))
    )
    fragment_min_chars: int = field(
        default_factory=lambda: int(os.environ.get("FRAGMENT_MIN_CHARS", "10"))
    )
    low_confidence_words: int = field(
        default_factory=lambda: int(os.environ.get("LOW_CONFIDENCE_WORDS", "50"))
    )
    enable_fallbacks: bool = field(
        default_factory=lambda: _env_bool("ENABLE_FALLBACKS", "false")
    )

    # ------------------------------------------------------------------
    # Batch extraction
    # ------------------------------------------------------------------
    max_concurrent_extractions: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONCURRENT_EXTRACTIONS", "4"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    log_json: bool = field(default_factory=lambda: _env_bool("LOG_JSON", "false"))

    @property
    def browser_headers(self) -> dict[str, str]:
        """Header set sent with every fetch so servers treat us like a browser."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self.accept_language,
            "Accept-Encoding": "gzip, deflate",
            "Connection": "keep-alive",
        }


# Module-level singleton, import this everywhere:
#   from quizsource.config import settings
settings = Settings()
