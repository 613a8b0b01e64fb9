"""
Tests for answer_format.py — integer/fraction shapes and format typos.
"""
import pytest
from mentor.utils.answer_format import (
    Fraction,
    MSG_ENTER_NUMBER,
    MSG_INCOMPLETE_FRACTION,
    MSG_MALFORMED_FRACTION,
    MSG_NUMBERS_ONLY,
    detect_format_typo,
    is_fraction_format,
    is_integer_format,
    parse_fraction,
)


# ── Shape predicates ──────────────────────────────────────────────────────────

class TestShapes:
    @pytest.mark.parametrize("s", ["7", " -12 ", "0", "007"])
    def test_integer_shapes(self, s):
        assert is_integer_format(s)

    @pytest.mark.parametrize("s", ["1.5", "3/4", "", "-", "12a", "1 2"])
    def test_not_integer_shapes(self, s):
        assert not is_integer_format(s)

    @pytest.mark.parametrize("s", ["3/4", " -3 / -4 ", "10/3", "0/5"])
    def test_fraction_shapes(self, s):
        assert is_fraction_format(s)

    @pytest.mark.parametrize("s", ["3/", "/4", "3//4", "3/4/5", "a/b", "3"])
    def test_not_fraction_shapes(self, s):
        assert not is_fraction_format(s)


# ── parse_fraction ────────────────────────────────────────────────────────────

class TestParseFraction:
    def test_simple(self):
        assert parse_fraction("3/4") == Fraction(3, 4)

    def test_signs_and_spaces(self):
        assert parse_fraction(" -6 / 8 ") == Fraction(-6, 8)
        assert parse_fraction("6/-8") == Fraction(6, -8)

    def test_zero_denominator_is_invalid(self):
        assert parse_fraction("3/0") is None

    def test_zero_numerator_is_valid(self):
        assert parse_fraction("0/3") == Fraction(0, 3)

    @pytest.mark.parametrize("s", ["a/4", "3/b", "3", "", "3/4/5", "1.5/2"])
    def test_non_numeric_is_invalid(self, s):
        assert parse_fraction(s) is None


# ── detect_format_typo: fraction expected ─────────────────────────────────────

class TestFractionExpected:
    @pytest.mark.parametrize("student", ["3/", "/4", "3//4", " 3 / "])
    def test_broken_slash(self, student):
        result = detect_format_typo(student, "3/4")
        assert result.is_format_error is True
        assert result.message == MSG_INCOMPLETE_FRACTION

    def test_slash_but_not_a_fraction(self):
        result = detect_format_typo("3/4/5", "3/4")
        assert result.is_format_error is True
        assert result.message == MSG_MALFORMED_FRACTION

    def test_letters(self):
        result = detect_format_typo("three quarters", "3/4")
        assert result.is_format_error is True
        assert result.message == MSG_NUMBERS_ONLY

    def test_valid_fraction_is_fine(self):
        assert detect_format_typo("6/8", "3/4").is_format_error is False

    def test_integer_simplification_is_fine(self):
        assert detect_format_typo("2", "4/2").is_format_error is False

    def test_decimal_is_left_to_later_checks(self):
        assert detect_format_typo("0.75", "3/4").is_format_error is False


# ── detect_format_typo: integer expected ──────────────────────────────────────

class TestIntegerExpected:
    def test_equivalent_fraction_is_not_an_error(self):
        assert detect_format_typo("6/2", "3").is_format_error is False

    def test_incomplete_fraction_is_an_error(self):
        result = detect_format_typo("6/", "3")
        assert result.is_format_error is True
        assert result.message == MSG_INCOMPLETE_FRACTION

    def test_malformed_fraction_is_an_error(self):
        result = detect_format_typo("6/2/1", "3")
        assert result.is_format_error is True
        assert result.message == MSG_MALFORMED_FRACTION

    def test_letters(self):
        result = detect_format_typo("x", "3")
        assert result.is_format_error is True
        assert result.message == MSG_ENTER_NUMBER

    def test_decimal_is_fine(self):
        assert detect_format_typo("3.0", "3").is_format_error is False


# ── detect_format_typo: no expected shape ─────────────────────────────────────

class TestNoExpectedShape:
    @pytest.mark.parametrize("correct", ["x = 4", "0.5", "seven"])
    def test_anything_goes(self, correct):
        assert detect_format_typo("banana", correct).is_format_error is False


class TestMessagesNeverRevealAnswers:
    def test_messages_contain_no_digits(self):
        for msg in (MSG_INCOMPLETE_FRACTION, MSG_MALFORMED_FRACTION,
                    MSG_NUMBERS_ONLY, MSG_ENTER_NUMBER):
            assert not any(ch.isdigit() for ch in msg), msg
