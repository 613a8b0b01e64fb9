import logging
from fastapi import APIRouter, HTTPException

from mentor.api.models_assessment import (
    ClassifyRequest,
    ClassifyResponse,
    CoachNoteOut,
    CoachNoteRequest,
    EvaluateRequest,
    EvaluateResponse,
    SessionOrderRequest,
    SessionOrderResponse,
)
from mentor.services.assessment import (
    AssessmentRequest,
    EvaluationError,
    InvalidAttemptError,
    assess_answer,
)
from mentor.services.coach_notes import build_coach_note
from mentor.services.session_order import difficulty_breakdown, order_by_difficulty
from mentor.services.slip_classifier import classify_answer
from mentor.services.telemetry import emit_event, instrument

logger = logging.getLogger("mentor.api.assessment")

router = APIRouter(prefix="/api/v1", tags=["assessment"])


@router.post("/evaluate", response_model=EvaluateResponse)
@instrument(route="/api/v1/evaluate", version="v1")
def evaluate_v1(req: EvaluateRequest):
    request = AssessmentRequest(
        question_prompt=req.question_prompt,
        correct_answer=req.correct_answer,
        student_answer=req.student_answer,
        student_explanation=req.student_explanation,
        thinking_log=tuple(e.to_entry() for e in req.thinking_log),
        question_id=req.question_id,
        language=req.language,
    )
    try:
        result = assess_answer(request)
    except InvalidAttemptError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EvaluationError as e:
        logger.error("[assessment.evaluate_v1] %s", e)
        raise HTTPException(
            status_code=500,
            detail="Failed to evaluate answer. Please try again.",
        )

    emit_event(
        "answer_assessed",
        route="/api/v1/evaluate",
        version="v1",
        question_id=req.question_id,
        error_class=result.error_class.value,
        error_type=result.review_error_type,
        ok=result.is_correct,
    )
    return result.to_dict()


@router.post("/classify", response_model=ClassifyResponse)
@instrument(route="/api/v1/classify", version="v1")
def classify_v1(req: ClassifyRequest):
    return classify_answer(req.student_answer, req.correct_answer).to_dict()


@router.post("/coach-notes", response_model=CoachNoteOut)
def coach_notes_v1(req: CoachNoteRequest):
    try:
        note = build_coach_note(
            req.explanation,
            [e.to_entry() for e in req.thinking_log],
            req.is_correct,
            req.error_class,
            req.slip_type,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return note.to_dict()


@router.post("/session/order", response_model=SessionOrderResponse)
def session_order_v1(req: SessionOrderRequest):
    questions = [q.model_dump() for q in req.questions]
    breakdown = difficulty_breakdown(questions)
    return {
        "order": order_by_difficulty(questions, req.seed),
        **breakdown,
    }
