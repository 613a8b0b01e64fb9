"""
Tests for the attempt history store — row parsing, the in-memory store,
the Supabase adapter (mocked) and store selection.
"""
from unittest.mock import MagicMock

from mentor.services.attempt_store import (
    ATTEMPT_STORE,
    FocusAttemptRecord,
    InMemoryAttemptStore,
    SupabaseAttemptStore,
    focus_attempt_from_row,
    get_attempt_store,
)
from mentor.services.focus_scoring import TimedAttempt


def _row(row_id, is_correct, time_ms, nudges=0, enabled=True, topic="fractions"):
    return {
        "id": row_id,
        "is_correct": is_correct,
        "topic": topic,
        "top_misconceptions": {
            "focus": {"enabled": enabled, "time_ms": time_ms, "pauses": 0, "nudges": nudges},
        },
    }


def _sb_returning(rows):
    sb = MagicMock()
    chain = sb.table.return_value.select.return_value.eq.return_value
    chain.order.return_value.limit.return_value.execute.return_value = MagicMock(data=rows)
    return sb


# ── Row parsing ───────────────────────────────────────────────────────────────

class TestRowParsing:
    def test_focus_row(self):
        assert focus_attempt_from_row(_row("r1", True, 12000, nudges=1)) == TimedAttempt(
            is_correct=True, time_ms=12000.0, nudges=1, topic="fractions",
        )

    def test_focus_disabled(self):
        assert focus_attempt_from_row(_row("r1", True, 12000, enabled=False)) is None

    def test_no_metadata(self):
        assert focus_attempt_from_row({"id": "r1", "is_correct": True}) is None
        assert focus_attempt_from_row({"id": "r1", "top_misconceptions": ["x"]}) is None

    def test_malformed_metadata(self):
        row = _row("r1", True, "fast")
        assert focus_attempt_from_row(row) is None


# ── In-memory store ───────────────────────────────────────────────────────────

class TestInMemoryStore:
    def test_recent_keeps_chronological_order(self):
        store = InMemoryAttemptStore()
        for t in (1000, 2000, 3000):
            store.add(FocusAttemptRecord("s1", TimedAttempt(True, t)))
        assert [a.time_ms for a in store.recent_focus_attempts("s1", 2)] == [2000, 3000]
        assert store.recent_durations("s1", 10) == [1000, 2000, 3000]

    def test_students_are_isolated(self):
        store = InMemoryAttemptStore()
        store.add(FocusAttemptRecord("s1", TimedAttempt(True, 1000)))
        assert store.recent_focus_attempts("s2") == []

    def test_zero_limit(self):
        store = InMemoryAttemptStore()
        store.add(FocusAttemptRecord("s1", TimedAttempt(True, 1000)))
        assert store.recent_focus_attempts("s1", 0) == []


# ── Supabase adapter ──────────────────────────────────────────────────────────

class TestSupabaseStore:
    def test_filters_and_reverses(self):
        rows = [  # newest first, as the query returns them
            _row("r3", False, 30000),
            {"id": "r2", "is_correct": True, "top_misconceptions": None},
            _row("r1", True, 10000),
        ]
        store = SupabaseAttemptStore(_sb_returning(rows))
        attempts = store.recent_focus_attempts("stu", 10)
        assert [a.time_ms for a in attempts] == [10000, 30000]
        assert [a.is_correct for a in attempts] == [True, False]

    def test_limit_applies_to_focus_rows(self):
        rows = [_row(f"r{i}", True, 1000 * i) for i in range(5, 0, -1)]
        store = SupabaseAttemptStore(_sb_returning(rows))
        assert [a.time_ms for a in store.recent_focus_attempts("stu", 2)] == [4000, 5000]

    def test_add_inserts_focus_row(self):
        sb = MagicMock()
        record = FocusAttemptRecord(
            "stu", TimedAttempt(True, 12000, 1, "negatives"),
            question_id="neg-3", answer_text="-4", pauses=2,
        )
        SupabaseAttemptStore(sb).add(record)

        sb.table.assert_called_with("attempts")
        row = sb.table.return_value.insert.call_args.args[0]
        assert row == {
            "user_id": "stu",
            "question_id": "neg-3",
            "topic": "negatives",
            "answer_text": "-4",
            "is_correct": True,
            "top_misconceptions": {
                "focus": {"enabled": True, "time_ms": 12000, "pauses": 2, "nudges": 1},
            },
        }

    def test_written_row_reads_back(self):
        attempt = TimedAttempt(False, 41000, 2, "fractions")
        row = FocusAttemptRecord("stu", attempt, question_id="frac-1").to_row()
        assert focus_attempt_from_row(row) == attempt

    def test_query_failure_returns_empty(self):
        sb = MagicMock()
        sb.table.side_effect = RuntimeError("connection refused")
        assert SupabaseAttemptStore(sb).recent_focus_attempts("stu") == []


class TestStoreSelection:
    def test_memory_by_default(self, monkeypatch):
        monkeypatch.delenv("MENTOR_ATTEMPT_STORE", raising=False)
        assert get_attempt_store() is ATTEMPT_STORE

    def test_supabase_unavailable_falls_back(self, monkeypatch):
        monkeypatch.setenv("MENTOR_ATTEMPT_STORE", "supabase")

        def _boom():
            raise RuntimeError("SUPABASE_URL is not set")

        monkeypatch.setattr("mentor.core.deps.get_supabase_client", _boom)
        assert get_attempt_store() is ATTEMPT_STORE

    def test_supabase_selected(self, monkeypatch):
        monkeypatch.setenv("MENTOR_ATTEMPT_STORE", "supabase")
        monkeypatch.setattr("mentor.core.deps.get_supabase_client", lambda: MagicMock())
        assert isinstance(get_attempt_store(), SupabaseAttemptStore)
