"""API endpoints for answer evaluation and session lookup."""

from fastapi import APIRouter, Depends, HTTPException, Query

from story_doctor.api.deps import get_interpretation_generator, get_store
from story_doctor.core.config import get_settings
from story_doctor.core.errors import NotFoundError, ValidationError
from story_doctor.core.evaluation import evaluate_session, interpret_session
from story_doctor.core.logging import get_logger
from story_doctor.core.schemas_assessment import (
    EvaluationRequest,
    EvaluationResult,
    InterpretationResponse,
    Language,
    SessionDetail,
    SessionList,
)
from story_doctor.db.store import Store

logger = get_logger(__name__)

router = APIRouter()

MAX_LISTED_SESSIONS = 10


@router.post("/evaluate", response_model=EvaluationResult)
async def evaluate(
    body: EvaluationRequest,
    store: Store = Depends(get_store),  # noqa: B008
) -> EvaluationResult:
    """
    Score submitted answers and record the result on the session.

    Raises:
        HTTPException 400: Missing, mistyped or out-of-range answers, or a
            session/question set mismatch
        HTTPException 404: Unknown session or question set
        HTTPException 500: Unexpected failure
    """
    try:
        return evaluate_session(store, body)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e
    except ValidationError as e:
        logger.info(
            f"Rejected answers for session {body.session_id}: {e.message}",
            extra={"session_id": body.session_id},
        )
        raise HTTPException(status_code=400, detail=e.message) from e
    except Exception as e:
        logger.exception(f"Evaluation error for session {body.session_id}")
        raise HTTPException(status_code=500, detail="Failed to evaluate answers") from e


@router.get("/session/{session_id}", response_model=SessionDetail)
async def get_session(
    session_id: str,
    store: Store = Depends(get_store),  # noqa: B008
) -> SessionDetail:
    """Retrieve a session together with its question set, if still stored."""
    session = store.sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")

    return SessionDetail(
        session=session,
        question_set=store.question_sets.get(session.question_set_id),
    )


@router.get("/sessions", response_model=SessionList)
async def list_sessions(
    store: Store = Depends(get_store),  # noqa: B008
) -> SessionList:
    """List stored sessions (debug only, disabled in prod)."""
    if get_settings().STORY_DOCTOR_ENV == "prod":
        raise HTTPException(status_code=404, detail="Not Found")

    sessions = store.sessions.get_all()
    return SessionList(count=len(sessions), sessions=sessions[:MAX_LISTED_SESSIONS])


@router.post("/session/{session_id}/interpretation", response_model=InterpretationResponse)
async def interpret(
    session_id: str,
    lang: Language = Query("ko", description="Interpretation language"),
    store: Store = Depends(get_store),  # noqa: B008
    generator=Depends(get_interpretation_generator),  # noqa: B008
) -> InterpretationResponse:
    """
    Natural-language interpretation of a completed session.

    ``available`` is false when the generator could not produce one in time.

    Raises:
        HTTPException 400: Session not evaluated yet
        HTTPException 404: Unknown session
    """
    try:
        return await interpret_session(
            store,
            session_id,
            lang,
            generator,
            timeout_seconds=get_settings().llm_timeout_seconds,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
