"""
Assessment pipeline — decides how far an answer needs to travel.

  STEP 1 — exact match after normalisation        → correct, no model call
  STEP 2 — slip classifier                        → review_error, no model call
  STEP 3 — demo mode                              → canned misconception result
  STEP 4 — model judgement (equivalence + steps)  → correct | misconception_error

Every path ends in the coach note generator, so the response always carries
a complete CoachNote. The model call is the only collaborator that can fail;
its failures surface as EvaluationError and are never retried here.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Optional, Sequence

from mentor.core.config import Settings, get_settings
from mentor.services.coach_notes import CoachNote, ErrorClass, ThinkingEntry, build_coach_note
from mentor.services.slip_classifier import classify_answer
from mentor.utils.text_match import answers_match

logger = logging.getLogger("mentor.assessment")


class EvaluationError(Exception):
    """The model collaborator could not produce a verdict."""


class InvalidAttemptError(ValueError):
    """Required attempt fields are missing or blank."""


@dataclass(frozen=True)
class AssessmentRequest:
    question_prompt: str
    correct_answer: str
    student_answer: str
    student_explanation: Optional[str] = None
    thinking_log: Sequence[ThinkingEntry] = ()
    question_id: Optional[str] = None
    language: str = "en"


@dataclass
class EvaluationResult:
    is_correct: bool
    solution_steps: list[str]
    short_feedback: str
    error_class: ErrorClass
    review_error_type: Optional[str] = None
    review_error_message: Optional[str] = None
    coach_notes: CoachNote = field(default_factory=CoachNote)

    def to_dict(self) -> dict:
        out = asdict(self)
        out["error_class"] = self.error_class.value
        return out


# ---------------------------------------------------------------------------
# Prompt construction
# ---------------------------------------------------------------------------

_SYSTEM_PROMPT = """You are a math teacher evaluating a student's answer. Your task is to:
1. Determine if the student's answer is mathematically correct (equivalent to the expected answer)
2. If incorrect, provide a clear step-by-step solution
3. Provide brief feedback

{language_instruction}

You MUST respond with valid JSON only, no other text. Use this exact schema:
{{
  "is_correct": boolean,
  "solution_steps": ["step 1", "step 2", ...],
  "short_feedback": "brief encouraging feedback"
}}

Rules:
- "is_correct": true if the student's answer is mathematically equivalent to the correct answer (e.g., "0.5" = "1/2")
- "solution_steps": If correct, return ["Your answer is correct!"]. If incorrect, return 3-5 clear steps showing the solution.
- "short_feedback": 1-2 sentences. Be encouraging but honest.
- Keep all JSON keys in English (is_correct, solution_steps, short_feedback)."""


def _language_instruction(language: str) -> str:
    if not language or language == "en":
        return "Write all text values in English."
    return (
        f"Write all text values (solution_steps, short_feedback) in the language "
        f"with code '{language}'. Keep math notation unchanged."
    )


def build_evaluation_messages(request: AssessmentRequest) -> list[dict]:
    """Chat messages for the model call. The model does see the correct answer."""
    system = _SYSTEM_PROMPT.format(language_instruction=_language_instruction(request.language))
    lines = [
        f"Question: {request.question_prompt}",
        f"Correct answer: {request.correct_answer}",
        f"Student's answer: {request.student_answer}",
    ]
    if request.student_explanation:
        lines.append(f"Student's explanation: {request.student_explanation}")
    lines.append("")
    lines.append("Evaluate this answer and respond with JSON only.")
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": "\n".join(lines)},
    ]


def parse_evaluation_reply(content: str) -> tuple[bool, list[str], str]:
    """
    Read the model's JSON reply. Missing keys fall back to safe defaults;
    a reply that is not a JSON object raises EvaluationError.
    """
    if not content:
        raise EvaluationError("No response from model")
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise EvaluationError(f"Model reply is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise EvaluationError("Model reply is not a JSON object")

    is_correct = bool(parsed.get("is_correct"))
    steps = parsed.get("solution_steps")
    if not isinstance(steps, list):
        steps = ["Unable to generate solution steps"]
    feedback = parsed.get("short_feedback") or "Please review your answer."
    return is_correct, [str(s) for s in steps], str(feedback)


# ---------------------------------------------------------------------------
# Demo mode
# ---------------------------------------------------------------------------

_DEMO_RESPONSES: tuple[tuple[tuple[str, ...], list[str], str], ...] = (
    (
        ("fraction", "/"),
        [
            "Step 1: Identify the fractions in the problem.",
            "Step 2: Find a common denominator if needed.",
            "Step 3: Perform the operation on the numerators.",
            "Step 4: Simplify the result if possible.",
        ],
        "Remember to find a common denominator before adding or subtracting fractions!",
    ),
    (
        ("negative", "-"),
        [
            "Step 1: Identify all negative numbers in the problem.",
            "Step 2: Apply the rules for operations with negatives.",
            "Step 3: Remember: negative × negative = positive.",
        ],
        "Watch your signs! Operations with negatives follow specific rules.",
    ),
    (
        ("solve", "x"),
        [
            "Step 1: Identify what operation is being done to x.",
            "Step 2: Use the inverse operation on both sides.",
            "Step 3: Isolate x by performing the same operation on both sides.",
        ],
        "Remember: whatever you do to one side, do to the other!",
    ),
)

_DEMO_FALLBACK = (
    [
        "Step 1: Read the problem carefully.",
        "Step 2: Identify the operation needed.",
        "Step 3: Apply the correct mathematical rules.",
    ],
    "Not quite right, but keep practicing! Review the steps above.",
)


def demo_evaluation(request: AssessmentRequest) -> EvaluationResult:
    """Deterministic misconception verdict, flavoured by the question wording."""
    prompt = request.question_prompt.lower()
    steps, feedback = _DEMO_FALLBACK
    for keywords, demo_steps, demo_feedback in _DEMO_RESPONSES:
        if any(k in prompt for k in keywords):
            steps, feedback = demo_steps, demo_feedback
            break

    return EvaluationResult(
        is_correct=False,
        solution_steps=list(steps),
        short_feedback=feedback,
        error_class=ErrorClass.MISCONCEPTION_ERROR,
        coach_notes=build_coach_note(
            request.student_explanation,
            request.thinking_log,
            False,
            ErrorClass.MISCONCEPTION_ERROR,
        ),
    )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def _has_model_key(settings: Settings) -> bool:
    if settings.llm_provider == "gemini":
        return bool(settings.gemini_api_key)
    return bool(settings.openai_api_key)


def validate_request(request: AssessmentRequest) -> None:
    missing = [
        name
        for name in ("question_prompt", "correct_answer", "student_answer")
        if not (getattr(request, name) or "").strip()
    ]
    if missing:
        raise InvalidAttemptError(f"Missing required fields: {', '.join(missing)}")


def assess_answer(
    request: AssessmentRequest,
    ai_service=None,
    settings: Optional[Settings] = None,
) -> EvaluationResult:
    """
    Run one attempt through the pipeline.

    Args:
        request:    the attempt to assess.
        ai_service: object with generate_completion(prompt, system_prompt=...);
                    built from settings when omitted and needed.
        settings:   defaults to get_settings().
    """
    validate_request(request)
    settings = settings or get_settings()

    # ── STEP 1: exact match ───────────────────────────────────────────────
    if answers_match(request.student_answer, request.correct_answer):
        logger.info("[assessment] exact match (question=%s)", request.question_id)
        return EvaluationResult(
            is_correct=True,
            solution_steps=["Your answer is correct!"],
            short_feedback="Great job! You got it right.",
            error_class=ErrorClass.CORRECT,
            coach_notes=build_coach_note(
                request.student_explanation, request.thinking_log, True, ErrorClass.CORRECT,
            ),
        )

    # ── STEP 2: slip heuristics ───────────────────────────────────────────
    verdict = classify_answer(request.student_answer, request.correct_answer)
    if verdict.is_slip:
        logger.info(
            "[assessment] review error %s (question=%s)", verdict.type.value, request.question_id,
        )
        return EvaluationResult(
            is_correct=False,
            solution_steps=[],
            short_feedback=verdict.message or "Check your answer for a small error.",
            error_class=ErrorClass.REVIEW_ERROR,
            review_error_type=verdict.type.value,
            review_error_message=verdict.message,
            coach_notes=build_coach_note(
                request.student_explanation,
                request.thinking_log,
                False,
                ErrorClass.REVIEW_ERROR,
                verdict.type,
            ),
        )

    # ── STEP 3: demo mode ─────────────────────────────────────────────────
    if settings.demo_mode:
        logger.info("[assessment] demo mode verdict (question=%s)", request.question_id)
        return demo_evaluation(request)

    # ── STEP 4: model judgement ───────────────────────────────────────────
    if ai_service is None:
        if not _has_model_key(settings):
            raise EvaluationError(
                f"No API key configured for llm_provider={settings.llm_provider!r}; "
                "set one or enable DEMO_MODE"
            )
        from mentor.services.ai import AIService
        ai_service = AIService()

    system_msg, user_msg = build_evaluation_messages(request)
    try:
        content = ai_service.generate_completion(
            user_msg["content"], system_prompt=system_msg["content"],
        )
    except Exception as exc:
        logger.error("[assessment] model call failed: %s", exc, exc_info=True)
        raise EvaluationError(f"Failed to evaluate answer: {exc}") from exc

    is_correct, steps, feedback = parse_evaluation_reply(content)
    error_class = ErrorClass.CORRECT if is_correct else ErrorClass.MISCONCEPTION_ERROR
    logger.info(
        "[assessment] model verdict %s (question=%s)", error_class.value, request.question_id,
    )

    return EvaluationResult(
        is_correct=is_correct,
        solution_steps=steps,
        short_feedback=feedback,
        error_class=error_class,
        coach_notes=build_coach_note(
            request.student_explanation, request.thinking_log, is_correct, error_class,
        ),
    )
