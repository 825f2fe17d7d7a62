"""Session evaluation.

Scores a session's answers against its question set, derives label, reasons
and feedback, and folds the outcome back into the session record.
"""

import logging
from collections.abc import Iterable

from story_doctor.chains.interpret_result import interpret_result
from story_doctor.core.errors import NotFoundError, SessionMismatch, SessionNotCompleted
from story_doctor.core.feedback import tips_for, warnings_for
from story_doctor.core.logging import get_logger, log_with_context
from story_doctor.core.schemas_assessment import (
    Answer,
    EvaluationRequest,
    EvaluationResult,
    InterpretationResponse,
    Language,
    QuestionSet,
    utc_now,
)
from story_doctor.core.scoring import (
    DEFAULT_REASON_LIMIT,
    calculate_weighted_score,
    extract_top_reasons,
    index_answers,
    label_of,
)
from story_doctor.db.store import Store
from story_doctor.db.works import get_work_by_id

logger = get_logger(__name__)


def dedupe_answers(answers: Iterable[Answer]) -> list[Answer]:
    """One answer per question; the last one submitted wins."""
    return list(index_answers(answers).values())


def evaluate_answers(
    question_set: QuestionSet,
    answers: list[Answer],
    session_id: str,
) -> EvaluationResult:
    """
    Build the evaluation report for a fully answered question set.

    Args:
        question_set: Question set the answers belong to
        answers: Reader's answers
        session_id: Session being evaluated

    Returns:
        EvaluationResult with score, label, top reasons, tips and warnings

    Raises:
        MissingAnswer: If any question is unanswered
        TypeMismatch: If an answer's value type doesn't fit its question
        InvalidAnswerValue: If a likert5 answer is outside 1..5
    """
    score = calculate_weighted_score(question_set.questions, answers)
    label = label_of(score)
    top_reasons = extract_top_reasons(question_set.questions, answers, DEFAULT_REASON_LIMIT)

    return EvaluationResult(
        session_id=session_id,
        score=score,
        label=label,
        top_reasons=top_reasons,
        tips=tips_for(label, question_set.language),
        warnings=warnings_for(label, question_set.language),
        completed_at=utc_now(),
    )


def evaluate_session(store: Store, request: EvaluationRequest) -> EvaluationResult:
    """
    Evaluate submitted answers for a session and record the outcome.

    Args:
        store: Ephemeral store
        request: Session id, question set id and answers

    Returns:
        EvaluationResult

    Raises:
        NotFoundError: If the session or question set is unknown
        SessionMismatch: If the session was started for another question set
        ValidationError: If answers are missing, mistyped or out of range
    """
    session = store.sessions.get(request.session_id)
    if session is None:
        raise NotFoundError("Session", request.session_id)

    question_set = store.question_sets.get(request.question_set_id)
    if question_set is None:
        raise NotFoundError("Question set", request.question_set_id)

    if session.question_set_id != request.question_set_id:
        raise SessionMismatch(session.id, request.question_set_id)

    answers = dedupe_answers(request.answers)
    result = evaluate_answers(question_set, answers, session.id)

    updated = store.sessions.update(
        session.id,
        answers=answers,
        completed_at=result.completed_at,
        score=result.score,
        label=result.label,
        reasons=[r.content for r in result.top_reasons],
    )
    if updated is None:
        # Evicted between lookup and update
        logger.warning(
            f"Session disappeared before results were recorded: {session.id}",
            extra={"session_id": session.id},
        )

    log_with_context(
        logger,
        logging.INFO,
        f"Evaluation completed for session: {session.id}",
        session_id=session.id,
        question_set_id=question_set.id,
        score=result.score,
        label=result.label.value,
    )

    return result


def interpretation_cache_key(session_id: str, language: Language) -> str:
    return f"interpretation:{session_id}:{language}"


async def interpret_session(
    store: Store,
    session_id: str,
    language: Language,
    generator,
    timeout_seconds: float,
) -> InterpretationResponse:
    """
    Natural-language interpretation of a completed session.

    Successful interpretations are cached in the generic TTL cache; failures
    are not cached so a later call can retry.

    Raises:
        NotFoundError: If the session, its question set or its work is unknown
        SessionNotCompleted: If the session has not been evaluated
    """
    session = store.sessions.get(session_id)
    if session is None:
        raise NotFoundError("Session", session_id)
    if session.score is None:
        raise SessionNotCompleted(session_id)

    cache_key = interpretation_cache_key(session_id, language)
    cached = store.cache.get(cache_key)
    if cached is not None:
        return InterpretationResponse(
            session_id=session_id, language=language, interpretation=cached, available=True
        )

    question_set = store.question_sets.get(session.question_set_id)
    if question_set is None:
        raise NotFoundError("Question set", session.question_set_id)

    work = get_work_by_id(session.work_id)
    if work is None:
        raise NotFoundError("Work", session.work_id)

    top_reasons = extract_top_reasons(question_set.questions, session.answers)
    text = await interpret_result(
        work, session.score, top_reasons, language, generator, timeout_seconds
    )

    if text is not None:
        store.cache.set(cache_key, text)

    return InterpretationResponse(
        session_id=session_id,
        language=language,
        interpretation=text,
        available=text is not None,
    )
