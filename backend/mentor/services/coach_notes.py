"""
Coach Note Generator — structured, personalised feedback after an attempt.

Builds a CoachNote from the student's own words and the assessment outcome:

  no meaningful text   → fixed "explain next time" note
  correct              → affirmations + "try a harder problem"
  review_error (slip)  → affirm the approach + slip-specific tip
  misconception_error  → keyword scan of the student's reasoning picks one
                         thing to fix and one thing to remember

When a thinking log is supplied its entries are merged into one labelled
narrative that replaces the raw explanation for analysis. Every branch
returns the full CoachNote shape so the UI can render it the same way.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Iterable, Optional, Sequence

from mentor.slips.base import SlipType

logger = logging.getLogger("mentor.coach_notes")

COACH_NOTE_TITLE = "Coach Notes (from your thinking)"

# Shorter combined text counts as "no explanation"
MIN_EXPLANATION_CHARS = 15
# Quoted student words: at most this many characters, ellipsis included
MAX_QUOTE_CHARS = 30


class ErrorClass(str, Enum):
    CORRECT = "correct"
    REVIEW_ERROR = "review_error"
    MISCONCEPTION_ERROR = "misconception_error"


class ThinkingKind(str, Enum):
    INITIAL = "initial"
    FOLLOWUP = "followup"
    TEACHBACK = "teachback"

    @classmethod
    def parse(cls, value: str) -> "ThinkingKind":
        """Accept both short kinds and the *_explanation names used by the client."""
        return cls(_KIND_ALIASES.get(value, value))


_KIND_ALIASES = {
    "initial_explanation": "initial",
    "followup_explanation": "followup",
}

_KIND_LABELS: dict[ThinkingKind, str] = {
    ThinkingKind.INITIAL: "Initial thinking",
    ThinkingKind.FOLLOWUP: "Follow-up thinking",
    ThinkingKind.TEACHBACK: "Teach-back response",
}


@dataclass(frozen=True)
class ThinkingEntry:
    kind: ThinkingKind
    text: str
    timestamp: float = 0.0


@dataclass
class CoachNote:
    title: str = COACH_NOTE_TITLE
    what_went_well: list[str] = field(default_factory=list)
    what_to_fix: list[str] = field(default_factory=list)
    remember: str = ""
    next_step: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Slip remediation tips (one per SlipType)
# ---------------------------------------------------------------------------

SLIP_TIPS: dict[SlipType, str] = {
    SlipType.FORMAT_TYPO: "Check your answer is written in the right format.",
    SlipType.EXTRA_DIGIT: "Watch for extra digits when writing your answer.",
    SlipType.MISSING_DIGIT: "Make sure you write all the digits in your answer.",
    SlipType.EXTRA_ZERO: "Count your zeros carefully.",
    SlipType.SIGN_SLIP: "Double-check positive vs negative signs.",
    SlipType.DECIMAL_SLIP: "Check your decimal point placement.",
    SlipType.TRANSPOSED_DIGITS: "Check the order of your digits.",
    SlipType.ARITHMETIC_SLIP: "Slow down on the final calculation.",
}


DEFAULT_SLIP_TIP = "Double-check your final answer."


# ---------------------------------------------------------------------------
# Keyword families (misconception branch)
# ---------------------------------------------------------------------------

# Families match at word starts, so inflections count ("firstly", "timed", "sooo").
_STEP_WORDS = re.compile(r"\bstep|\bfirst|\bthen")
_REASONING_WORDS = re.compile(r"\bi think|\bbecause|\bso")

_ADD_WORDS = re.compile(r"\badd")
_FRACTION_PART_WORDS = re.compile(r"\btop|\bnumerator|\bbottom|\bdenominator")
_BOTH_WORDS = re.compile(r"\bboth")
_MULTIPLY_WORDS = re.compile(r"\bmultipl|\btime")
_SIGN_WORDS = re.compile(r"\bpositive|\bnegative")
_SAME_WORDS = re.compile(r"\bsame|\bequal")

# (predicate, what_to_fix, remember), checked in order
_MISCONCEPTION_RULES = (
    (
        lambda t: _ADD_WORDS.search(t) and _FRACTION_PART_WORDS.search(t),
        "You mentioned adding tops and bottoms. That's a common trap!",
        "Only add numerators when denominators match.",
    ),
    (
        lambda t: _ADD_WORDS.search(t) and _BOTH_WORDS.search(t),
        "Check which parts should be added together.",
        "Not everything gets added the same way.",
    ),
    (
        lambda t: _MULTIPLY_WORDS.search(t),
        "Review when to multiply vs other operations.",
        "Check which operation the problem is asking for.",
    ),
    (
        lambda t: _SIGN_WORDS.search(t),
        "The sign rules need another look.",
        "Same signs give positive, different signs give negative.",
    ),
    (
        lambda t: _SAME_WORDS.search(t),
        "There's a step that got skipped or mixed up.",
        "Check each step against the rules.",
    ),
)

_GENERIC_FIX = "Your approach has a gap. Review the concept."
_GENERIC_REMEMBER = "Re-read the lesson, then try again."


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def combine_thinking_log(entries: Iterable[ThinkingEntry]) -> str:
    """Merge log entries into one labelled narrative, skipping empty text."""
    parts = []
    for entry in entries or ():
        text = (entry.text or "").strip()
        if not text:
            continue
        parts.append(f"{_KIND_LABELS[entry.kind]}: {text}")
    return "\n\n".join(parts)


def short_quote(text: str) -> str:
    """
    Quote the student's words, ellipsised to MAX_QUOTE_CHARS.

    Examples:
        "I added them"                        → '"I added them"'
        "I added the tops and then the bottoms" → '"I added the tops and then t..."'
    """
    text = " ".join((text or "").split())
    if len(text) > MAX_QUOTE_CHARS:
        text = text[: MAX_QUOTE_CHARS - 3] + "..."
    return f'"{text}"'


def _student_words(explanation: str, entries: Sequence[ThinkingEntry]) -> str:
    """First thing the student actually wrote, without the log labels."""
    for entry in entries:
        if (entry.text or "").strip():
            return entry.text
    return explanation


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_coach_note(
    explanation: Optional[str],
    thinking_log: Optional[Sequence[ThinkingEntry]],
    is_correct: bool,
    error_class: ErrorClass | str,
    slip_type: Optional[SlipType | str] = None,
) -> CoachNote:
    """
    Build the coach note for one attempt.

    Args:
        explanation:  free-text explanation typed with the answer.
        thinking_log: ordered thinking entries; supersedes explanation when
                      it combines to non-empty text.
        is_correct:   final correctness verdict.
        error_class:  correct | review_error | misconception_error.
        slip_type:    SlipType for review errors, if known.
    """
    error_class = ErrorClass(error_class)
    entries = list(thinking_log or [])
    explanation = (explanation or "").strip()

    combined = combine_thinking_log(entries) or explanation

    if len(combined) < MIN_EXPLANATION_CHARS:
        return CoachNote(
            what_went_well=[],
            what_to_fix=["I couldn't see your thinking this time."],
            remember="Explaining helps me coach you better!",
            next_step="Write 1 or 2 sentences next time so I can help with your specific approach.",
        )

    quote = short_quote(_student_words(explanation, entries) or combined)
    has_multiple_entries = len(entries) > 1

    if is_correct:
        well_done = [
            f"You explained: {quote}. Great thinking!",
            "Your reasoning led you to the right answer.",
        ]
        if has_multiple_entries:
            well_done.append("I can see you reflected on this problem. Nice persistence!")
        return CoachNote(
            what_went_well=well_done[:2],
            what_to_fix=[],
            remember="Keep explaining your thinking. It builds strong habits!",
            next_step="Try a harder problem to stretch your skills.",
        )

    if error_class is ErrorClass.REVIEW_ERROR:
        tip = DEFAULT_SLIP_TIP
        if slip_type:
            tip = SLIP_TIPS[SlipType(slip_type)]
        return CoachNote(
            what_went_well=[
                f"You wrote {quote}. Your approach makes sense.",
                "Just a small slip at the end!",
            ],
            what_to_fix=["The logic was right, but check your final answer carefully."],
            remember=tip,
            next_step="Before submitting, read your answer out loud to catch slips.",
        )

    return _misconception_note(combined, quote, has_multiple_entries)


def _misconception_note(text: str, quote: str, has_multiple_entries: bool) -> CoachNote:
    lowered = text.lower()

    what_went_well = []
    if _STEP_WORDS.search(lowered):
        what_went_well.append(f"You showed step-by-step thinking: {quote}")
    elif _REASONING_WORDS.search(lowered):
        what_went_well.append(f"You explained your reasoning: {quote}")
    else:
        what_went_well.append(f"Thanks for writing: {quote}")
    if has_multiple_entries:
        what_went_well.append("Great persistence. You kept working through this!")

    fix, remember = _GENERIC_FIX, _GENERIC_REMEMBER
    for predicate, rule_fix, rule_remember in _MISCONCEPTION_RULES:
        if predicate(lowered):
            fix, remember = rule_fix, rule_remember
            break
    else:
        logger.debug("[coach_notes] no keyword family matched, using generic gap note")

    return CoachNote(
        what_went_well=what_went_well[:2],
        what_to_fix=[fix],
        remember=remember,
        next_step="Review the solution steps, then try the follow-up question.",
    )
