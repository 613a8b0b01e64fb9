"""answer_format.py — shape checks for integer and fraction answers.

The expected shape is read from the correct answer. A student answer that
fits neither the expected shape nor its acceptable alternate is a format
slip, reported before any digit-level analysis runs.

Acceptable alternates:
  fraction expected → an integer (the student simplified to a whole number)
  integer expected  → a well-formed fraction (an equivalent-fraction answer)
"""
import re
from typing import NamedTuple, Optional

_INTEGER_RE = re.compile(r"\s*-?\d+\s*")
_FRACTION_RE = re.compile(r"\s*-?\d+\s*/\s*-?\d+\s*")
_FRACTION_PARTS_RE = re.compile(r"(-?\d+)\s*/\s*(-?\d+)")

# Leading slash, trailing slash, or two slashes with nothing between them
_BROKEN_SLASH_RE = re.compile(r"^\s*/|/\s*$|/\s*/")

_FRACTION_CHARSET_RE = re.compile(r"[\d\s/\-.]+")
_INTEGER_CHARSET_RE = re.compile(r"[\d\s\-.]+")

# Fixed wording only: a message must never carry the value of an answer.
MSG_INCOMPLETE_FRACTION = (
    "Looks like a typo or format slip. Make sure your fraction is complete "
    "(a number on top and a number on the bottom)."
)
MSG_MALFORMED_FRACTION = (
    "Looks like a typo or format slip. Check your fraction format "
    "(top number / bottom number)."
)
MSG_NUMBERS_ONLY = "Looks like a typo or format slip. Use only numbers for your answer."
MSG_ENTER_NUMBER = "Looks like a typo or format slip. Enter a number for your answer."


class Fraction(NamedTuple):
    numerator: int
    denominator: int


class FormatCheck(NamedTuple):
    is_format_error: bool
    message: Optional[str] = None


def is_integer_format(s: str) -> bool:
    return _INTEGER_RE.fullmatch(s or "") is not None


def is_fraction_format(s: str) -> bool:
    return _FRACTION_RE.fullmatch(s or "") is not None


def parse_fraction(s: str) -> Optional[Fraction]:
    """Return (numerator, denominator), or None when invalid or dividing by zero."""
    match = _FRACTION_PARTS_RE.fullmatch((s or "").strip())
    if not match:
        return None
    try:
        num = int(match.group(1))
        den = int(match.group(2))
    except ValueError:
        return None
    if den == 0:
        return None
    return Fraction(num, den)


def detect_format_typo(student_answer: str, correct_answer: str) -> FormatCheck:
    """
    Flag a student answer whose shape cannot be a deliberate answer.

    Sub-cases, first match wins:
      1. leading / trailing / doubled slash
      2. a slash that does not form a valid fraction
      3. characters outside the charset of the expected shape
    """
    student = (student_answer or "").strip()
    correct = (correct_answer or "").strip()

    if is_fraction_format(correct):
        charset = _FRACTION_CHARSET_RE
        charset_message = MSG_NUMBERS_ONLY
    elif is_integer_format(correct):
        charset = _INTEGER_CHARSET_RE
        charset_message = MSG_ENTER_NUMBER
    else:
        # Decimals, expressions, words: no shape to hold the student to
        return FormatCheck(False)

    if is_fraction_format(student) or is_integer_format(student):
        return FormatCheck(False)

    if _BROKEN_SLASH_RE.search(student):
        return FormatCheck(True, MSG_INCOMPLETE_FRACTION)
    if "/" in student:
        return FormatCheck(True, MSG_MALFORMED_FRACTION)
    if charset.fullmatch(student) is None:
        return FormatCheck(True, charset_message)

    return FormatCheck(False)
