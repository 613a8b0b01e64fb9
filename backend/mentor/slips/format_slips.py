"""Format typo — SlipCheck wrapper around the shape validator."""

from typing import Optional

from .base import AnswerPair, SlipCheck, SlipType, SLIP_MESSAGES
from mentor.utils.answer_format import detect_format_typo


class FormatTypoCheck(SlipCheck):
    slip_type = SlipType.FORMAT_TYPO

    def detect(self, pair: AnswerPair) -> Optional[str]:
        result = detect_format_typo(pair.student_raw, pair.correct_raw)
        if not result.is_format_error:
            return None
        return result.message or SLIP_MESSAGES[self.slip_type]
