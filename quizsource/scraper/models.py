"""Data models for the extraction pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional

from quizsource.config import settings


@dataclass(frozen=True)
class FetchRequest:
    """A single URL to fetch."""

    url: str


@dataclass
class RawDocument:
    """The raw HTTP response for a single URL fetch.

    ``base_url`` is the URL relative links resolve against: the final URL
    after redirects, or a ``<base href>`` found later during normalization.
    """

    url: str
    html: str
    status_code: int
    base_url: str = ""

    def __post_init__(self) -> None:
        if not self.base_url:
            self.base_url = self.url


@dataclass(frozen=True)
class SelectorRule:
    """One entry of the content-region cascade. Lower rank wins."""

    selector: str
    rank: int


@dataclass(frozen=True)
class ContentCandidate:
    """Text scored from the element one :class:`SelectorRule` matched."""

    selector: SelectorRule
    extracted_text: str
    char_length: int
    word_count: int


@dataclass(frozen=True)
class Metadata:
    title: str
    author: Optional[str] = None
    publish_date: Optional[str] = None


@dataclass(frozen=True)
class ExtractionResult:
    """Final, immutable output of one extraction."""

    title: str
    content: str
    word_count: int
    author: Optional[str] = None
    publish_date: Optional[str] = None
    url: str = ""
    selector: str = ""

    def __post_init__(self) -> None:
        if self.word_count != len(self.content.split()):
            raise ValueError("word_count does not match the content")

    @property
    def low_confidence(self) -> bool:
        """True when the content is too short to trust for quiz generation."""
        return self.word_count < settings.low_confidence_words

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["low_confidence"] = self.low_confidence
        return data


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

@dataclass
class SelectorReport:
    """What a single rule would extract, without committing to it."""

    rule: SelectorRule
    matched: bool
    char_length: int = 0
    word_count: int = 0
    preview: str = ""
    qualifies: bool = False
    strong: bool = False
    winner: bool = False


@dataclass
class ProbeReport:
    """Raw text statistics for an ad-hoc debug selector."""

    selector: str
    matched: bool
    char_length: int = 0
    word_count: int = 0
    preview: str = ""


@dataclass
class DiagnosticReport:
    url: str
    reports: List[SelectorReport] = field(default_factory=list)
    probes: List[ProbeReport] = field(default_factory=list)
    likely_spa: bool = False

    @property
    def winner(self) -> Optional[SelectorRule]:
        for report in self.reports:
            if report.winner:
                return report.rule
        return None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        winner = self.winner
        data["winner"] = winner.selector if winner else None
        return data
