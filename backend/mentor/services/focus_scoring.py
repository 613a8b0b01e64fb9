"""
Focus Scoring Engine — timed-practice ratings and adaptive nudge timing.

Three independent computations over caller-supplied attempt history:

  compute_efficiency_rating   rolling 0-100 rating folded over attempts in
                              chronological order (streak sensitive, so the
                              same attempts in another order can differ)
  compute_focus_scores        order-free accuracy and speed scores for display
  compute_adaptive_thresholds nudge delays scaled from the student's median
                              recent solve time

Nothing here keeps state between calls; the history store owns persistence.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Iterable, Optional, Sequence

# Target solve time per topic, seconds
FOCUS_TARGET_TIMES: dict[str, int] = {
    "fractions": 35,
    "negatives": 25,
    "linear-equations": 40,
    "mixed-review": 35,
}
DEFAULT_TARGET_SECONDS = 35

MIN_SPEED_FACTOR = 0.25
MAX_SPEED_FACTOR = 1.5

STARTING_RATING = 50
INCORRECT_PENALTY = 5

# Under this share of the target time counts as a fast answer
FAST_ANSWER_RATIO = 0.7

DEFAULT_BASELINE_MS = 30000
FIRST_NUDGE_RANGE_MS = (6000, 90000)
SECOND_NUDGE_MAX_MS = 150000
SECOND_NUDGE_GAP_MS = 6000

# (minimum rating, label), highest tier first
EFFICIENCY_LABELS: list[tuple[int, str]] = [
    (90, "Competition Ready"),
    (70, "Fast & Accurate"),
    (40, "Focused Learner"),
    (0, "Getting Started"),
]


@dataclass(frozen=True)
class TimedAttempt:
    is_correct: bool
    time_ms: float
    nudges: int = 0
    topic: str = ""


@dataclass(frozen=True)
class NudgeThresholds:
    first_nudge_ms: float
    second_nudge_ms: float
    baseline_ms: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class FocusScores:
    accuracy: int
    speed: int
    avg_time_seconds: Optional[int]
    total_attempts: int
    correct_attempts: int

    def to_dict(self) -> dict:
        return asdict(self)


def clamp(low: float, high: float, value: float) -> float:
    return min(high, max(low, value))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (4.5 → 5), unlike round()."""
    return int(math.floor(value + 0.5))


def target_seconds(topic: str) -> int:
    return FOCUS_TARGET_TIMES.get(topic, DEFAULT_TARGET_SECONDS)


def compute_speed_factor(topic: str, seconds: float) -> float:
    """target / actual, clamped to [0.25, 1.5]; actual is floored at 1 second."""
    actual = max(1.0, float(seconds))
    return clamp(MIN_SPEED_FACTOR, MAX_SPEED_FACTOR, target_seconds(topic) / actual)


def is_fast_answer(topic: str, seconds: float) -> bool:
    return seconds < target_seconds(topic) * FAST_ANSWER_RATIO


def _attempt_speed_factor(attempt: TimedAttempt) -> float:
    return compute_speed_factor(attempt.topic, attempt.time_ms / 1000)


def compute_efficiency_rating(attempts: Iterable[TimedAttempt]) -> int:
    """
    Fold attempts, oldest first, into a rating starting at 50.

    correct   +round(2 + 4 * speed_factor)   (+3 .. +8)
    incorrect -5
    each      -1 per nudge
    Clamped to [0, 100] after every step.
    """
    rating = STARTING_RATING
    for attempt in attempts:
        if attempt.is_correct:
            delta = round_half_up(2 + 4 * _attempt_speed_factor(attempt))
        else:
            delta = -INCORRECT_PENALTY
        delta -= max(0, int(attempt.nudges))
        rating = int(clamp(0, 100, rating + delta))
    return rating


def get_efficiency_label(rating: float) -> str:
    for minimum, label in EFFICIENCY_LABELS:
        if rating >= minimum:
            return label
    return EFFICIENCY_LABELS[-1][1]


def get_combined_efficiency_label(scores: FocusScores) -> str:
    """Label for a 60/40 blend of accuracy and speed."""
    return get_efficiency_label(scores.accuracy * 0.6 + scores.speed * 0.4)


def compute_average_focus_time(attempts: Sequence[TimedAttempt]) -> Optional[int]:
    """Mean time in whole seconds across all attempts, None when empty."""
    if not attempts:
        return None
    total_ms = sum(a.time_ms for a in attempts)
    return round_half_up(total_ms / len(attempts) / 1000)


def compute_focus_scores(attempts: Sequence[TimedAttempt]) -> FocusScores:
    """
    accuracy: round(100 * correct / total)
    speed:    mean speed factor of correct attempts mapped 0.25 → 0, 1.5 → 100
    avg_time_seconds: mean time of correct attempts, None without any
    """
    attempts = list(attempts)
    total = len(attempts)
    if total == 0:
        return FocusScores(
            accuracy=0, speed=0, avg_time_seconds=None, total_attempts=0, correct_attempts=0,
        )

    correct = [a for a in attempts if a.is_correct]
    accuracy = round_half_up(len(correct) / total * 100)

    speed = 0
    avg_time_seconds: Optional[int] = None
    if correct:
        avg_factor = sum(_attempt_speed_factor(a) for a in correct) / len(correct)
        span = MAX_SPEED_FACTOR - MIN_SPEED_FACTOR
        speed = round_half_up(clamp(0, 100, (avg_factor - MIN_SPEED_FACTOR) / span * 100))
        avg_time_seconds = compute_average_focus_time(correct)

    return FocusScores(
        accuracy=accuracy,
        speed=speed,
        avg_time_seconds=avg_time_seconds,
        total_attempts=total,
        correct_attempts=len(correct),
    )


def _median(values: Sequence[float]) -> float:
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def compute_adaptive_thresholds(recent_durations: Sequence[float]) -> NudgeThresholds:
    """
    Nudge delays from the median of recent solve times (30s with no history).

    first  = clamp(6s, 90s, 1.25 * baseline)
    second = clamp(first + 6s, 150s, 1.75 * baseline)
    """
    durations = [float(d) for d in recent_durations or []]
    baseline = _median(durations) if durations else float(DEFAULT_BASELINE_MS)

    low, high = FIRST_NUDGE_RANGE_MS
    first = clamp(low, high, baseline * 1.25)
    second = clamp(first + SECOND_NUDGE_GAP_MS, SECOND_NUDGE_MAX_MS, baseline * 1.75)
    return NudgeThresholds(first_nudge_ms=first, second_nudge_ms=second, baseline_ms=baseline)
