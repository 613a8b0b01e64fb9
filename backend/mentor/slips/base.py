"""Base slip check contract for the review-error pipeline.

Every slip detector subclasses SlipCheck and overrides detect(). Checks are
independent of each other; precedence lives only in the ordering of
registry.SLIP_CHECKS.
"""
from enum import Enum
from typing import NamedTuple, Optional


class SlipType(str, Enum):
    FORMAT_TYPO = "format_typo"
    EXTRA_DIGIT = "extra_digit"
    MISSING_DIGIT = "missing_digit"
    EXTRA_ZERO = "extra_zero"
    SIGN_SLIP = "sign_slip"
    DECIMAL_SLIP = "decimal_slip"
    TRANSPOSED_DIGITS = "transposed_digits"
    ARITHMETIC_SLIP = "arithmetic_slip"


# Fixed templates, never interpolated with answer values.
SLIP_MESSAGES: dict[SlipType, str] = {
    SlipType.FORMAT_TYPO: "Looks like a typo or format slip. Double-check your answer format.",
    SlipType.EXTRA_DIGIT: (
        "Review error detected: likely a quick slip (extra digit). "
        "Double-check your number and try again."
    ),
    SlipType.MISSING_DIGIT: (
        "Review error detected: likely a quick slip (missing digit). "
        "Double-check your number and try again."
    ),
    SlipType.EXTRA_ZERO: (
        "Review error detected: likely a quick slip (extra zero). "
        "Double-check your answer and try again."
    ),
    SlipType.SIGN_SLIP: (
        "Review error detected: likely a quick slip (sign error). "
        "Check if your answer should be positive or negative."
    ),
    SlipType.DECIMAL_SLIP: (
        "Review error detected: likely a quick slip (decimal placement). "
        "Check your decimal point and try again."
    ),
    SlipType.TRANSPOSED_DIGITS: (
        "Review error detected: likely a quick slip (transposed digits). "
        "Check the order of your digits and try again."
    ),
    SlipType.ARITHMETIC_SLIP: (
        "Review error detected: likely a quick slip (arithmetic). "
        "Your answer is very close, so double-check your calculation."
    ),
}


class AnswerPair(NamedTuple):
    """
    student_raw / correct_raw: trimmed input as typed.
    student / correct: whitespace-stripped, case-folded forms.
    """
    student_raw: str
    correct_raw: str
    student: str
    correct: str


class SlipCheck:
    slip_type: SlipType

    def detect(self, pair: AnswerPair) -> Optional[str]:
        """
        Return the user-facing message on a hit, None otherwise.
        Default: the fixed template for this slip type when matches() holds.
        """
        if self.matches(pair):
            return SLIP_MESSAGES[self.slip_type]
        return None

    def matches(self, pair: AnswerPair) -> bool:
        return False
