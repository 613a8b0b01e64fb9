"""
Tests for text_match.py — normalisation and Levenshtein distance.
"""
import pytest
from mentor.utils.text_match import (
    answers_match, edit_distance, normalize_answer, strip_whitespace,
)


# ── normalize_answer ──────────────────────────────────────────────────────────

class TestNormalizeAnswer:
    def test_strips_outer_and_inner_whitespace(self):
        assert normalize_answer("  3 / 4 ") == "3/4"

    def test_case_folds(self):
        assert normalize_answer("X = 7") == "x=7"

    def test_tabs_and_newlines_removed(self):
        assert normalize_answer("1\t2\n3") == "123"

    def test_no_numeric_equivalence(self):
        # "0.5" and "1/2" are the model's call, not the normaliser's
        assert normalize_answer("0.5") != normalize_answer("1/2")
        assert not answers_match("0.5", "1/2")

    def test_none_and_empty(self):
        assert normalize_answer("") == ""
        assert strip_whitespace(None) == ""

    def test_answers_match(self):
        assert answers_match("-5 ", " -5")
        assert answers_match("ABC", "abc")


# ── edit_distance ─────────────────────────────────────────────────────────────

class TestEditDistance:
    def test_classic_example(self):
        assert edit_distance("kitten", "sitting") == 3

    def test_empty_strings(self):
        assert edit_distance("", "") == 0
        assert edit_distance("", "abc") == 3
        assert edit_distance("abc", "") == 3

    def test_single_substitution(self):
        assert edit_distance("42", "47") == 1

    def test_transposition_costs_two(self):
        # no transposition discount: swapped digits have their own check
        assert edit_distance("34", "43") == 2

    @pytest.mark.parametrize("a,b", [
        ("123", "1234"), ("abc", "xyz"), ("-5", "5"), ("3.14", "314"), ("", "z"),
    ])
    def test_symmetric(self, a, b):
        assert edit_distance(a, b) == edit_distance(b, a)

    @pytest.mark.parametrize("a,b", [("7", "7"), ("", ""), ("hello", "hello")])
    def test_zero_for_equal_strings(self, a, b):
        assert edit_distance(a, b) == 0

    @pytest.mark.parametrize("a,b", [("7", "8"), ("ab", "abc"), ("", "x")])
    def test_positive_for_different_strings(self, a, b):
        assert edit_distance(a, b) > 0
