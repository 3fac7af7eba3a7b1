"""Deterministic markdown rendering of an :class:`ExtractionResult`."""

from __future__ import annotations

import re
from typing import List

from quizsource.scraper.models import ExtractionResult

_NUMBERED_RE = re.compile(r"^\d+\.\s")
_BULLET_RE = re.compile(r"^[-•]\s")
_SENTENCE_END_RE = re.compile(r"[.!?]$")


def _is_heading(line: str) -> bool:
    """Short, capitalised lines without closing punctuation read as headings."""
    return (
        len(line) < 100
        and line[:1].isupper()
        and not _SENTENCE_END_RE.search(line)
        and len(line.split()) <= 10
    )


def _format_paragraph(paragraph: str) -> str:
    if _NUMBERED_RE.match(paragraph):
        return paragraph
    if _BULLET_RE.match(paragraph):
        return _BULLET_RE.sub("- ", paragraph, count=1)
    return paragraph.strip()


def render_markdown(result: ExtractionResult) -> str:
    """Return *result* as a markdown document.

    Layout: ``# title``, a metadata block, a rule, then the content with
    heading-like lines promoted to ``##``.
    """
    parts: List[str] = [f"# {result.title}"]

    meta: List[str] = []
    if result.author:
        meta.append(f"**Author:** {result.author}")
    if result.publish_date:
        meta.append(f"**Published:** {result.publish_date}")
    meta.append(f"**Word Count:** {result.word_count}")
    parts.append("  \n".join(meta))
    parts.append("---")

    paragraph: List[str] = []

    def flush() -> None:
        if paragraph:
            parts.append(_format_paragraph(" ".join(paragraph)))
            paragraph.clear()

    for line in (raw.strip() for raw in result.content.split("\n")):
        if not line:
            flush()
            continue
        if not paragraph and _is_heading(line):
            parts.append(f"## {line}")
        else:
            paragraph.append(line)
    flush()

    return "\n\n".join(parts) + "\n"
