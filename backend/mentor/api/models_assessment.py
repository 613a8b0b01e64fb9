from pydantic import BaseModel, Field, field_validator
from typing import Optional

from mentor.services.coach_notes import ThinkingEntry, ThinkingKind


class ThinkingEntryIn(BaseModel):
    kind: str
    text: str = ""
    timestamp: float = 0.0

    @field_validator("kind")
    @classmethod
    def _known_kind(cls, v: str) -> str:
        return ThinkingKind.parse(v.strip().lower()).value

    def to_entry(self) -> ThinkingEntry:
        return ThinkingEntry(kind=ThinkingKind(self.kind), text=self.text, timestamp=self.timestamp)


class CoachNoteOut(BaseModel):
    title: str
    what_went_well: list[str] = []
    what_to_fix: list[str] = []
    remember: str = ""
    next_step: str = ""


# ──────────────────────────────────────────────
# Evaluate / classify / coach notes
# ──────────────────────────────────────────────

class EvaluateRequest(BaseModel):
    question_prompt: str = ""
    correct_answer: str = ""
    student_answer: str = ""
    student_explanation: Optional[str] = None
    question_id: Optional[str] = None
    language: str = "en"
    thinking_log: list[ThinkingEntryIn] = []


class EvaluateResponse(BaseModel):
    is_correct: bool
    solution_steps: list[str] = []
    short_feedback: str
    error_class: str
    review_error_type: Optional[str] = None
    review_error_message: Optional[str] = None
    coach_notes: CoachNoteOut


class ClassifyRequest(BaseModel):
    student_answer: str
    correct_answer: str


class ClassifyResponse(BaseModel):
    is_slip: bool
    type: Optional[str] = None
    message: Optional[str] = None


class CoachNoteRequest(BaseModel):
    explanation: Optional[str] = None
    thinking_log: list[ThinkingEntryIn] = []
    is_correct: bool
    error_class: str
    slip_type: Optional[str] = None


# ──────────────────────────────────────────────
# Session ordering
# ──────────────────────────────────────────────

class QuestionIn(BaseModel):
    id: str
    difficulty: Optional[int] = Field(default=None, ge=1, le=10)


class SessionOrderRequest(BaseModel):
    questions: list[QuestionIn] = []
    seed: int


class SessionOrderResponse(BaseModel):
    order: list[str]
    counts: dict[int, int] = {}
    min_level: Optional[int] = None
    max_level: Optional[int] = None


# ──────────────────────────────────────────────
# Focus Mode
# ──────────────────────────────────────────────

class TimedAttemptIn(BaseModel):
    is_correct: bool
    time_ms: float = Field(ge=0)
    nudges: int = Field(default=0, ge=0)
    topic: str = ""


class FocusScoresRequest(BaseModel):
    attempts: list[TimedAttemptIn] = []


class FocusScoresResponse(BaseModel):
    rating: int
    label: str
    combined_label: str
    accuracy: int
    speed: int
    avg_time_seconds: Optional[int] = None
    total_attempts: int
    correct_attempts: int


class ThresholdsRequest(BaseModel):
    recent_durations_ms: list[float] = []


class ThresholdsResponse(BaseModel):
    first_nudge_ms: float
    second_nudge_ms: float
    baseline_ms: float


class RecordAttemptRequest(BaseModel):
    question_id: str
    answer_text: str = ""
    is_correct: bool
    time_ms: float = Field(ge=0)
    nudges: int = Field(default=0, ge=0)
    pauses: int = Field(default=0, ge=0)
    topic: str = ""
