"""
Tests for the difficulty session orderer — determinism, grouping and the
seeded generator.
"""
from types import SimpleNamespace

import pytest

from mentor.services.session_order import (
    DEFAULT_DIFFICULTY,
    difficulty_breakdown,
    group_by_difficulty,
    order_by_difficulty,
    question_difficulty,
    seeded_random,
)


def _q(qid, difficulty=None):
    q = {"id": qid}
    if difficulty is not None:
        q["difficulty"] = difficulty
    return q


MIXED = [
    _q("h1", 9), _q("e1", 1), _q("m1", 5), _q("e2", 1), _q("h2", 9),
    _q("m2"), _q("e3", 1), _q("m3", 5), _q("x1", 3),
]


# ── Generator ─────────────────────────────────────────────────────────────────

class TestSeededRandom:
    def test_first_value_for_zero_seed(self):
        rng = seeded_random(0)
        assert next(rng) == 12345 / (2 ** 31 - 1)

    def test_same_seed_same_stream(self):
        a, b = seeded_random(42), seeded_random(42)
        assert [next(a) for _ in range(20)] == [next(b) for _ in range(20)]

    def test_values_in_unit_interval(self):
        rng = seeded_random(987654321)
        for _ in range(500):
            assert 0.0 <= next(rng) <= 1.0


# ── Difficulty lookup ─────────────────────────────────────────────────────────

class TestDifficulty:
    def test_missing_defaults_to_five(self):
        assert question_difficulty({"id": "a"}) == DEFAULT_DIFFICULTY == 5

    def test_none_defaults_to_five(self):
        assert question_difficulty({"id": "a", "difficulty": None}) == 5

    def test_object_questions(self):
        assert question_difficulty(SimpleNamespace(id="a", difficulty=7)) == 7
        assert question_difficulty(SimpleNamespace(id="a")) == 5

    @pytest.mark.parametrize("level", [0, -3, 11, 42])
    def test_out_of_range_defaults_to_five(self, level):
        assert question_difficulty({"id": "a", "difficulty": level}) == 5

    def test_range_edges_kept(self):
        assert question_difficulty({"id": "a", "difficulty": 1}) == 1
        assert question_difficulty({"id": "a", "difficulty": 10}) == 10

    def test_out_of_range_grouped_with_default(self):
        groups = group_by_difficulty([_q("a", 0), _q("b", 5), _q("c", 42)])
        assert groups == {5: ["a", "b", "c"]}

    def test_grouping_keeps_input_order(self):
        groups = group_by_difficulty(MIXED)
        assert groups[1] == ["e1", "e2", "e3"]
        assert groups[5] == ["m1", "m2", "m3"]
        assert groups[9] == ["h1", "h2"]


# ── Ordering ──────────────────────────────────────────────────────────────────

class TestOrderByDifficulty:
    def test_deterministic(self):
        assert order_by_difficulty(MIXED, 1234) == order_by_difficulty(MIXED, 1234)

    def test_is_a_permutation(self):
        order = order_by_difficulty(MIXED, 99)
        assert sorted(order) == sorted(q["id"] for q in MIXED)

    def test_ascending_difficulty(self):
        levels = {q["id"]: question_difficulty(q) for q in MIXED}
        for seed in (0, 1, 7, 2024, 2 ** 31 - 1):
            order = order_by_difficulty(MIXED, seed)
            ranks = [levels[qid] for qid in order]
            assert ranks == sorted(ranks)

    def test_default_difficulty_lands_in_middle(self):
        order = order_by_difficulty(MIXED, 5)
        assert set(order[:3]) == {"e1", "e2", "e3"}
        assert order[3] == "x1"
        assert set(order[4:7]) == {"m1", "m2", "m3"}
        assert set(order[7:]) == {"h1", "h2"}

    def test_known_two_item_shuffle(self):
        assert order_by_difficulty([_q("a", 1), _q("b", 1)], 0) == ["b", "a"]

    def test_single_item(self):
        assert order_by_difficulty([_q("only", 4)], 3) == ["only"]

    def test_empty(self):
        assert order_by_difficulty([], 42) == []

    def test_object_input(self):
        qs = [SimpleNamespace(id="b", difficulty=2), SimpleNamespace(id="a", difficulty=1)]
        assert order_by_difficulty(qs, 11) == ["a", "b"]

    def test_seed_changes_order_somewhere(self):
        pool = [_q(f"q{i}", 3) for i in range(10)]
        orders = {tuple(order_by_difficulty(pool, seed)) for seed in range(10)}
        assert len(orders) > 1


# ── Breakdown ─────────────────────────────────────────────────────────────────

class TestBreakdown:
    def test_counts(self):
        assert difficulty_breakdown(MIXED) == {
            "counts": {1: 3, 3: 1, 5: 3, 9: 2},
            "min_level": 1,
            "max_level": 9,
        }

    def test_empty(self):
        assert difficulty_breakdown([]) == {"counts": {}, "min_level": None, "max_level": None}
