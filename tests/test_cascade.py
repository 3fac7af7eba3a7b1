"""Tests for the selector cascade (first qualifying rule wins)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from quizsource.scraper.cascade import iter_candidates, select_best_candidate, select_fallback
from quizsource.scraper.errors import NoContentFound
from quizsource.scraper.models import SelectorRule
from quizsource.scraper.normalizer import normalize
from quizsource.scraper.rules import DEFAULT_RULES, build_rules

_LONG_A = "Rank one container holds a long paragraph of genuine article prose."
_LONG_B = "Rank two container also holds a long paragraph of article prose."
_SHORT = "Too short to qualify."


class TestBuildRules:
    def test_ranks_follow_order(self) -> None:
        rules = build_rules(["#a", ".b", "main"])
        assert [r.rank for r in rules] == [1, 2, 3]
        assert [r.selector for r in rules] == ["#a", ".b", "main"]

    def test_default_rules_are_immutable_and_generic_last(self) -> None:
        assert isinstance(DEFAULT_RULES, tuple)
        assert DEFAULT_RULES[0].selector == "#main-content"
        assert DEFAULT_RULES[-1].selector == ".content"
        selectors = [r.selector for r in DEFAULT_RULES]
        assert selectors.index("article") < selectors.index("main") < selectors.index(".content")


class TestSelectBestCandidate:
    def test_no_rule_matches_raises(self) -> None:
        tree = normalize(f"<html><body><section><p>{_LONG_A}</p></section></body></html>")
        with pytest.raises(NoContentFound):
            select_best_candidate(tree, build_rules(["#missing", ".absent"]))

    def test_empty_body_raises_with_default_rules(self) -> None:
        with pytest.raises(NoContentFound):
            select_best_candidate(normalize("<html><body></body></html>"))

    def test_only_last_rule_matches(self) -> None:
        rules = build_rules(["#first", "#second", ".content"])
        tree = normalize(f"<div class='content'><p>{_LONG_A}</p></div>")
        candidate = select_best_candidate(tree, rules)
        assert candidate.selector.selector == ".content"
        assert candidate.extracted_text == _LONG_A

    def test_first_qualifying_not_first_matching(self) -> None:
        rules = build_rules(["#first", "#second"])
        tree = normalize(
            f"<div id='first'><p>{_SHORT}</p></div>"
            f"<div id='second'><p>{_LONG_B}</p></div>"
        )
        candidate = select_best_candidate(tree, rules)
        assert candidate.selector.rank == 2
        assert candidate.extracted_text == _LONG_B

    def test_higher_rank_wins_even_with_less_text(self) -> None:
        rules = build_rules(["#first", "#second"])
        tree = normalize(
            f"<div id='second'><p>{_LONG_B}</p><p>{_LONG_B}</p><p>{_LONG_B}</p></div>"
            f"<div id='first'><p>{_LONG_A}</p></div>"
        )
        assert select_best_candidate(tree, rules).selector.selector == "#first"

    def test_rules_are_tried_in_rank_order(self) -> None:
        rules = (SelectorRule("#second", 2), SelectorRule("#first", 1))
        tree = normalize(
            f"<div id='first'><p>{_LONG_A}</p></div><div id='second'><p>{_LONG_B}</p></div>"
        )
        assert select_best_candidate(tree, rules).selector.selector == "#first"

    def test_only_first_match_of_a_rule_is_scored(self) -> None:
        rules = build_rules([".post"])
        tree = normalize(
            f"<div class='post'><p>{_SHORT}</p></div><div class='post'><p>{_LONG_A}</p></div>"
        )
        with pytest.raises(NoContentFound):
            select_best_candidate(tree, rules)

    def test_invalid_selector_counts_as_no_match(self) -> None:
        rules = build_rules(["div[", "article"])
        tree = normalize(f"<article><p>{_LONG_A}</p></article>")
        assert select_best_candidate(tree, rules).selector.selector == "article"

    def test_noise_never_reaches_candidates(self) -> None:
        rules = build_rules(["#wrap"])
        tree = normalize(
            "<div id='wrap'>"
            "<nav><p>Navigation paragraph that is really long and chatty.</p></nav>"
            f"<p>{_LONG_A}</p>"
            "</div>"
        )
        candidate = select_best_candidate(tree, rules)
        assert "Navigation" not in candidate.extracted_text

    def test_same_tree_same_candidate(self) -> None:
        html = f"<main><p>{_LONG_A}</p><p>{_LONG_B}</p></main>"
        first = select_best_candidate(normalize(html))
        second = select_best_candidate(normalize(html))
        assert first == second


class TestIterCandidates:
    def test_reports_every_rule(self) -> None:
        rules = build_rules(["#missing", "article"])
        tree = normalize(f"<article><p>{_LONG_A}</p></article>")
        results = list(iter_candidates(tree, rules))
        assert [rule.selector for rule, _ in results] == ["#missing", "article"]
        assert results[0][1] is None
        assert results[1][1] is not None


class TestSelectFallback:
    def test_paragraph_sweep(self) -> None:
        tree = normalize(f"<section><p>{_LONG_A}</p><p>ok</p></section>")
        candidate = select_fallback(tree, build_rules(["#a", "#b"]))
        assert candidate.selector.selector == "fallback:paragraphs"
        assert candidate.selector.rank == 3
        assert candidate.extracted_text == _LONG_A

    def test_readability_strategy(self) -> None:
        tree = normalize("<section><span>nothing scoreable</span></section>")
        extracted = f"{_LONG_A}\nshort\n{_LONG_B}"
        with patch("quizsource.scraper.cascade.trafilatura.extract", return_value=extracted):
            candidate = select_fallback(tree, build_rules(["#a"]))
        assert candidate.selector.selector == "fallback:readability"
        assert candidate.extracted_text == f"{_LONG_A}\n\n{_LONG_B}"

    def test_substantial_div_strategy(self) -> None:
        words = " ".join(f"word{i}" for i in range(30))
        tree = normalize(f"<div>{words}</div>")
        with patch("quizsource.scraper.cascade.trafilatura.extract", return_value=None):
            candidate = select_fallback(tree, build_rules(["#a"]))
        assert candidate.selector.selector == "fallback:substantial-div"
        assert candidate.extracted_text == words

    def test_nothing_qualifies(self) -> None:
        tree = normalize("<html><body><span>tiny</span></body></html>")
        with patch("quizsource.scraper.cascade.trafilatura.extract", return_value=None):
            with pytest.raises(NoContentFound):
                select_fallback(tree, build_rules(["#a"]))
