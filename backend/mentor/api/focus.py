import logging
from fastapi import APIRouter, HTTPException, Query

from mentor.api.models_assessment import (
    FocusScoresRequest,
    FocusScoresResponse,
    RecordAttemptRequest,
    ThresholdsRequest,
    ThresholdsResponse,
)
from mentor.services.attempt_store import FocusAttemptRecord, get_attempt_store
from mentor.services.focus_scoring import (
    TimedAttempt,
    compute_adaptive_thresholds,
    compute_efficiency_rating,
    compute_focus_scores,
    get_combined_efficiency_label,
    get_efficiency_label,
)
from mentor.services.telemetry import emit_event, instrument

logger = logging.getLogger("mentor.api.focus")

router = APIRouter(prefix="/api/v1/focus", tags=["focus"])


def _summary(attempts: list[TimedAttempt]) -> dict:
    rating = compute_efficiency_rating(attempts)
    scores = compute_focus_scores(attempts)
    return {
        "rating": rating,
        "label": get_efficiency_label(rating),
        "combined_label": get_combined_efficiency_label(scores),
        **scores.to_dict(),
    }


@router.post("/scores", response_model=FocusScoresResponse)
def focus_scores_v1(req: FocusScoresRequest):
    attempts = [TimedAttempt(**a.model_dump()) for a in req.attempts]
    return _summary(attempts)


@router.post("/thresholds", response_model=ThresholdsResponse)
def focus_thresholds_v1(req: ThresholdsRequest):
    return compute_adaptive_thresholds(req.recent_durations_ms).to_dict()


@router.post("/{student_id}/attempts", response_model=FocusScoresResponse, status_code=201)
@instrument(route="/api/v1/focus/attempts", version="v1")
def record_focus_attempt_v1(student_id: str, req: RecordAttemptRequest):
    """Record one timed attempt and return the student's updated summary."""
    store = get_attempt_store()
    record = FocusAttemptRecord(
        student_id=student_id,
        attempt=TimedAttempt(
            is_correct=req.is_correct,
            time_ms=req.time_ms,
            nudges=req.nudges,
            topic=req.topic,
        ),
        question_id=req.question_id,
        answer_text=req.answer_text,
        pauses=req.pauses,
    )
    try:
        store.add(record)
    except Exception as e:
        logger.error("[focus.record_focus_attempt_v1] %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to record attempt. Please try again.")

    emit_event(
        "focus_attempt_recorded",
        route="/api/v1/focus/attempts",
        version="v1",
        student_id=student_id,
        question_id=req.question_id,
        topic=req.topic or None,
        ok=req.is_correct,
    )
    return _summary(store.recent_focus_attempts(student_id))


@router.get("/{student_id}/summary", response_model=FocusScoresResponse)
@instrument(route="/api/v1/focus/summary", version="v1")
def focus_summary_v1(student_id: str, limit: int = Query(20, ge=1, le=100)):
    attempts = get_attempt_store().recent_focus_attempts(student_id, limit)
    return _summary(attempts)


@router.get("/{student_id}/thresholds", response_model=ThresholdsResponse)
def focus_student_thresholds_v1(student_id: str, limit: int = Query(10, ge=1, le=50)):
    durations = get_attempt_store().recent_durations(student_id, limit)
    return compute_adaptive_thresholds(durations).to_dict()
