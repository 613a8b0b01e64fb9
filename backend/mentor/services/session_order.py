"""
Difficulty Session Orderer — reproducible practice order, easy to hard.

  1. Group questions by integer difficulty (1-10, default 5).
  2. Walk the groups in ascending difficulty.
  3. Shuffle inside each group with a seeded Fisher-Yates pass.

The generator is a plain linear-congruential stream created per call, so the
same questions and seed always give the same order and concurrent callers
share no state.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional

DEFAULT_DIFFICULTY = 5
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10

_LCG_MULTIPLIER = 1103515245
_LCG_INCREMENT = 12345
_LCG_MODULUS = 2 ** 31


def seeded_random(seed: int) -> Iterator[float]:
    """
    Infinite stream of floats in [0, 1) from a 31-bit LCG.

    seed = (seed * 1103515245 + 12345) mod 2^31, scaled by 1 / (2^31 - 1).
    """
    state = int(seed) % _LCG_MODULUS
    while True:
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        yield state / (_LCG_MODULUS - 1)


def _field(question: Any, name: str) -> Any:
    if isinstance(question, dict):
        return question.get(name)
    return getattr(question, name, None)


def question_difficulty(question: Any) -> int:
    """Integer difficulty of a question dict or object; 5 when missing, unreadable or outside 1-10."""
    value = _field(question, "difficulty")
    if value is None:
        return DEFAULT_DIFFICULTY
    try:
        level = int(value)
    except (TypeError, ValueError):
        return DEFAULT_DIFFICULTY
    if not MIN_DIFFICULTY <= level <= MAX_DIFFICULTY:
        return DEFAULT_DIFFICULTY
    return level


def group_by_difficulty(questions: Iterable[Any]) -> dict[int, list[str]]:
    """DifficultyGroup: difficulty level → question ids, in input order."""
    groups: dict[int, list[str]] = {}
    for q in questions:
        groups.setdefault(question_difficulty(q), []).append(str(_field(q, "id")))
    return groups


def _shuffle(items: list[str], rng: Iterator[float]) -> list[str]:
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(next(rng) * (i + 1))
        # 2^31 - 1 divisor can produce exactly 1.0 once per cycle
        j = min(j, i)
        out[i], out[j] = out[j], out[i]
    return out


def order_by_difficulty(questions: Iterable[Any], seed: int) -> list[str]:
    """
    Return question ids grouped by ascending difficulty, shuffled within each
    group by the seeded generator.

    One generator stream runs across all groups in ascending order, so every
    group's shuffle depends on the seed and on the groups before it.
    """
    groups = group_by_difficulty(questions)
    rng = seeded_random(seed)

    order: list[str] = []
    for level in sorted(groups):
        order.extend(_shuffle(groups[level], rng))
    return order


def difficulty_breakdown(questions: Iterable[Any]) -> dict:
    """
    Count questions per difficulty level for the session preview.

    Returns {"counts": {level: n}, "min_level": int | None, "max_level": int | None}.
    """
    counts: dict[int, int] = {}
    for q in questions:
        level = question_difficulty(q)
        counts[level] = counts.get(level, 0) + 1

    min_level: Optional[int] = min(counts) if counts else None
    max_level: Optional[int] = max(counts) if counts else None
    return {
        "counts": dict(sorted(counts.items())),
        "min_level": min_level,
        "max_level": max_level,
    }
