"""
Slip Classifier — rule-based review-error detection, run before any model call.

A wrong answer is either a superficial slip (typo, swapped digits, dropped
sign) or a misconception. The checks in mentor.slips.registry are evaluated
in order and the first hit decides the slip type. A miss is not an error: it
is the signal to escalate the answer to the model for an equivalence and
misconception judgement.

Verdict messages describe the kind of discrepancy only. They are fixed
templates and never contain the correct answer.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Optional

from mentor.slips.base import AnswerPair, SlipType
from mentor.slips.registry import SLIP_CHECKS
from mentor.utils.text_match import normalize_answer

logger = logging.getLogger("mentor.slip_classifier")


@dataclass(frozen=True)
class SlipVerdict:
    is_slip: bool
    type: Optional[SlipType] = None
    message: Optional[str] = None

    def to_dict(self) -> dict:
        out = asdict(self)
        out["type"] = self.type.value if self.type else None
        return out


NO_SLIP = SlipVerdict(is_slip=False)


def _answer_pair(student_answer: str, correct_answer: str) -> AnswerPair:
    student_raw = (student_answer or "").strip()
    correct_raw = (correct_answer or "").strip()
    return AnswerPair(
        student_raw=student_raw,
        correct_raw=correct_raw,
        student=normalize_answer(student_raw),
        correct=normalize_answer(correct_raw),
    )


def detect_review_error(student_answer: str, correct_answer: str) -> SlipVerdict:
    """
    Walk the slip checks in priority order; first match wins.

    Total over any pair of strings. Equal-after-normalisation answers are
    never a slip, and neither is a pair with a blank side.
    """
    pair = _answer_pair(student_answer, correct_answer)
    if pair.student == pair.correct:
        return NO_SLIP
    if not pair.student or not pair.correct:
        return NO_SLIP

    for check in SLIP_CHECKS:
        message = check.detect(pair)
        if message:
            return SlipVerdict(is_slip=True, type=check.slip_type, message=message)

    return NO_SLIP


def classify_answer(student_answer: str, correct_answer: str) -> SlipVerdict:
    """Public entry point: classify a wrong answer as a slip or escalate it."""
    verdict = detect_review_error(student_answer, correct_answer)
    if verdict.is_slip:
        logger.debug("[slip_classifier] slip detected: %s", verdict.type.value)
    else:
        logger.debug("[slip_classifier] no slip pattern, escalate to model")
    return verdict
