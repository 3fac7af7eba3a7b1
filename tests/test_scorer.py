"""Tests for the content scorer."""

from __future__ import annotations

from quizsource.scraper.models import ContentCandidate, SelectorRule
from quizsource.scraper.normalizer import parse_html
from quizsource.scraper.scorer import (
    clean_fragment,
    collect_fragments,
    count_words,
    is_strong,
    qualifies,
    score_element,
)

_RULE = SelectorRule(selector="article", rank=1)


def _candidate(length: int) -> ContentCandidate:
    text = "x" * length
    return ContentCandidate(selector=_RULE, extracted_text=text, char_length=length, word_count=1)


class TestCountWords:
    def test_counts_whitespace_tokens(self) -> None:
        assert count_words("one two  three\n\nfour\tfive") == 5

    def test_empty(self) -> None:
        assert count_words("") == 0
        assert count_words("   \n  ") == 0


class TestCleanFragment:
    def test_collapses_whitespace(self) -> None:
        assert clean_fragment("  many\n   spaced\t words ") == "many spaced words"


class TestCollectFragments:
    def test_document_order_and_tags(self) -> None:
        soup = parse_html(
            "<article>"
            "<h2>Section heading text</h2>"
            "<p>First paragraph of the article body.</p>"
            "<ul><li>A list item with some words</li></ul>"
            "<span>Spans are not scored at all here</span>"
            "</article>"
        )
        fragments = collect_fragments(soup.article)
        assert fragments == [
            "Section heading text",
            "First paragraph of the article body.",
            "A list item with some words",
        ]

    def test_drops_short_fragments(self) -> None:
        soup = parse_html(
            "<article><p>Share</p><p>   Tweet   </p><li>0123456789</li>"
            "<p>This fragment is long enough to keep.</p></article>"
        )
        assert collect_fragments(soup.article) == ["This fragment is long enough to keep."]

    def test_element_itself_is_not_collected(self) -> None:
        soup = parse_html("<div id='x'>Direct text of the container only.</div>")
        assert collect_fragments(soup.find(id="x")) == []


class TestScoreElement:
    def test_joins_with_paragraph_separator(self) -> None:
        soup = parse_html(
            "<article><p>Alpha paragraph text.</p><p>Bravo paragraph text.</p></article>"
        )
        candidate = score_element(soup.article, _RULE)
        assert candidate.extracted_text == "Alpha paragraph text.\n\nBravo paragraph text."
        assert candidate.char_length == len(candidate.extracted_text)
        assert candidate.word_count == 6
        assert candidate.selector == _RULE

    def test_deterministic(self) -> None:
        html = "<article><p>Same input, same output, every single time.</p></article>"
        first = score_element(parse_html(html).article, _RULE)
        second = score_element(parse_html(html).article, _RULE)
        assert first == second


class TestThresholds:
    def test_qualifies_strictly_above_fifty(self) -> None:
        assert qualifies(_candidate(50)) is False
        assert qualifies(_candidate(51)) is True

    def test_strong_strictly_above_hundred(self) -> None:
        assert is_strong(_candidate(100)) is False
        assert is_strong(_candidate(101)) is True


class TestTagBoundaries:
    def test_adjacent_blocks_do_not_glue_words(self) -> None:
        soup = parse_html(
            "<article><div><p>Alpha paragraph text.</p><p>Bravo paragraph text.</p></div></article>"
        )
        fragments = collect_fragments(soup.article)
        assert fragments[0] == "Alpha paragraph text. Bravo paragraph text."
        assert all("text.Bravo" not in fragment for fragment in fragments)

    def test_inline_markup_keeps_word_boundaries(self) -> None:
        soup = parse_html("<article><p>Photovoltaic<br>cells <b>convert</b> light.</p></article>")
        assert collect_fragments(soup.article) == ["Photovoltaic cells convert light."]
