"""Sign, decimal-point and near-miss arithmetic slips."""

import re

from .base import AnswerPair, SlipCheck, SlipType
from mentor.utils.text_match import edit_distance

_NUMERIC_RE = re.compile(r"-?\d+\.?\d*")

# Near-miss window for the arithmetic fallback
MAX_ARITHMETIC_LENGTH = 5
MAX_ARITHMETIC_DISTANCE = 2


class SignSlipCheck(SlipCheck):
    slip_type = SlipType.SIGN_SLIP

    def matches(self, pair: AnswerPair) -> bool:
        return pair.student == "-" + pair.correct or "-" + pair.student == pair.correct


class DecimalSlipCheck(SlipCheck):
    slip_type = SlipType.DECIMAL_SLIP

    def matches(self, pair: AnswerPair) -> bool:
        return (
            pair.student.replace(".", "") == pair.correct
            or pair.student == pair.correct.replace(".", "")
        )


class ArithmeticSlipCheck(SlipCheck):
    """Fallback: two short numbers within a couple of edits of each other."""
    slip_type = SlipType.ARITHMETIC_SLIP

    def matches(self, pair: AnswerPair) -> bool:
        if _NUMERIC_RE.fullmatch(pair.student) is None:
            return False
        if _NUMERIC_RE.fullmatch(pair.correct) is None:
            return False
        if len(pair.student) > MAX_ARITHMETIC_LENGTH or len(pair.correct) > MAX_ARITHMETIC_LENGTH:
            return False
        return edit_distance(pair.student, pair.correct) <= MAX_ARITHMETIC_DISTANCE
