"""Read-only slip registry — checks in evaluation order, first hit wins.

Format typos preempt digit analysis. Extra zero runs ahead of the
length-based digit rules so 50-for-5 is not reported as an extra digit.
"""

from .format_slips import FormatTypoCheck
from .digit_slips import ExtraZeroCheck, ExtraDigitCheck, MissingDigitCheck, TransposedDigitsCheck
from .value_slips import SignSlipCheck, DecimalSlipCheck, ArithmeticSlipCheck

SLIP_CHECKS = (
    FormatTypoCheck(),
    ExtraZeroCheck(),
    ExtraDigitCheck(),
    MissingDigitCheck(),
    TransposedDigitsCheck(),
    SignSlipCheck(),
    DecimalSlipCheck(),
    ArithmeticSlipCheck(),
)
