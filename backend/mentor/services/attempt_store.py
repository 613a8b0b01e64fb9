import logging
import os
from dataclasses import dataclass
from typing import Optional

from mentor.services.focus_scoring import TimedAttempt

logger = logging.getLogger("mentor.attempt_store")


@dataclass
class FocusAttemptRecord:
    student_id: str
    attempt: TimedAttempt
    question_id: str = ""
    answer_text: str = ""
    pauses: int = 0

    def to_row(self) -> dict:
        """`attempts` row carrying the Focus Mode metadata read back by focus_attempt_from_row."""
        return {
            "user_id": self.student_id,
            "question_id": self.question_id,
            "topic": self.attempt.topic,
            "answer_text": self.answer_text,
            "is_correct": self.attempt.is_correct,
            "top_misconceptions": {
                "focus": {
                    "enabled": True,
                    "time_ms": self.attempt.time_ms,
                    "pauses": self.pauses,
                    "nudges": self.attempt.nudges,
                },
            },
        }


def focus_attempt_from_row(row: dict) -> Optional[TimedAttempt]:
    """
    Build a TimedAttempt from an `attempts` row, or None when the row was not
    answered in Focus Mode. Focus metadata rides in the JSON column:
        top_misconceptions = {"focus": {"enabled": true, "time_ms": .., "nudges": ..}}
    """
    meta = row.get("top_misconceptions")
    if not isinstance(meta, dict):
        return None
    focus = meta.get("focus")
    if not isinstance(focus, dict) or not focus.get("enabled"):
        return None
    try:
        return TimedAttempt(
            is_correct=bool(row.get("is_correct")),
            time_ms=float(focus.get("time_ms") or 0),
            nudges=int(focus.get("nudges") or 0),
            topic=str(row.get("topic") or ""),
        )
    except (TypeError, ValueError):
        logger.warning("Skipping attempt row with malformed focus metadata: %s", row.get("id"))
        return None


class AttemptStore:
    def add(self, record: FocusAttemptRecord) -> None:
        raise NotImplementedError

    def recent_focus_attempts(self, student_id: str, limit: int = 20) -> list[TimedAttempt]:
        """Most recent Focus Mode attempts, oldest first."""
        raise NotImplementedError

    def recent_durations(self, student_id: str, limit: int = 10) -> list[float]:
        return [a.time_ms for a in self.recent_focus_attempts(student_id, limit)]


class InMemoryAttemptStore(AttemptStore):
    def __init__(self):
        self._data: dict[str, list[FocusAttemptRecord]] = {}

    def add(self, record: FocusAttemptRecord) -> None:
        self._data.setdefault(record.student_id, []).append(record)

    def recent_focus_attempts(self, student_id, limit=20):
        if limit <= 0:
            return []
        records = self._data.get(student_id, [])
        return [r.attempt for r in records[-limit:]]

    def clear(self) -> None:
        self._data.clear()


class SupabaseAttemptStore(AttemptStore):
    def __init__(self, supabase_client):
        self.sb = supabase_client

    def add(self, record: FocusAttemptRecord) -> None:
        self.sb.table("attempts").insert(record.to_row()).execute()

    def recent_focus_attempts(self, student_id, limit=20):
        if limit <= 0:
            return []
        try:
            r = (
                self.sb.table("attempts")
                .select("*")
                .eq("user_id", student_id)
                .order("created_at", desc=True)
                .limit(max(limit * 3, 30))
                .execute()
            )
        except Exception as e:
            logger.error("[attempt_store.recent_focus_attempts] %s", e, exc_info=True)
            return []
        rows = getattr(r, "data", None) or []
        out = []
        for row in rows:
            attempt = focus_attempt_from_row(row)
            if attempt is not None:
                out.append(attempt)
            if len(out) >= limit:
                break
        # newest first from the query; the rating folds oldest first
        out.reverse()
        return out


ATTEMPT_STORE = InMemoryAttemptStore()


def get_attempt_store() -> AttemptStore:
    use_db = os.getenv("MENTOR_ATTEMPT_STORE", "memory").lower()
    if use_db != "supabase":
        return ATTEMPT_STORE

    try:
        from mentor.core.deps import get_supabase_client
        return SupabaseAttemptStore(get_supabase_client())
    except Exception as exc:
        logger.warning("Supabase attempt store unavailable, using memory: %s", exc)
        return ATTEMPT_STORE
