"""Digit-count and digit-order slips — integer answers only."""

import re

from .base import AnswerPair, SlipCheck, SlipType

_SIGNED_INT_RE = re.compile(r"-?\d+")


def _both_integers(pair: AnswerPair) -> bool:
    return (
        _SIGNED_INT_RE.fullmatch(pair.student) is not None
        and _SIGNED_INT_RE.fullmatch(pair.correct) is not None
    )


def _digits(s: str) -> str:
    return s.lstrip("-")


class ExtraZeroCheck(SlipCheck):
    """Student appended a zero: 50 for 5, -120 for -12."""
    slip_type = SlipType.EXTRA_ZERO

    def matches(self, pair: AnswerPair) -> bool:
        return _both_integers(pair) and pair.student == pair.correct + "0"


class ExtraDigitCheck(SlipCheck):
    slip_type = SlipType.EXTRA_DIGIT

    def matches(self, pair: AnswerPair) -> bool:
        if not _both_integers(pair):
            return False
        student, correct = _digits(pair.student), _digits(pair.correct)
        if len(student) != len(correct) + 1:
            return False
        return student.startswith(correct) or student.endswith(correct)


class MissingDigitCheck(SlipCheck):
    slip_type = SlipType.MISSING_DIGIT

    def matches(self, pair: AnswerPair) -> bool:
        if not _both_integers(pair):
            return False
        student, correct = _digits(pair.student), _digits(pair.correct)
        if len(correct) != len(student) + 1:
            return False
        return correct.startswith(student) or correct.endswith(student)


class TransposedDigitsCheck(SlipCheck):
    """Same digits in a different order: 43 for 34."""
    slip_type = SlipType.TRANSPOSED_DIGITS

    def matches(self, pair: AnswerPair) -> bool:
        if not _both_integers(pair):
            return False
        student, correct = _digits(pair.student), _digits(pair.correct)
        if len(student) != len(correct) or len(student) < 2:
            return False
        return student != correct and sorted(student) == sorted(correct)
