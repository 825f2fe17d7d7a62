"""API endpoints for question set supply."""

from fastapi import APIRouter, Depends, HTTPException

from story_doctor.api.deps import get_question_supplier, get_store
from story_doctor.core.errors import NoQuestionsAvailable
from story_doctor.core.logging import get_logger
from story_doctor.core.question_supply import QuestionSupplier
from story_doctor.core.schemas_assessment import (
    QuestionSet,
    QuestionSetRequest,
    QuestionSetResponse,
    Session,
)
from story_doctor.db.store import Store
from story_doctor.db.works import get_work_by_id

logger = get_logger(__name__)

router = APIRouter()


@router.post("/question-set", response_model=QuestionSetResponse)
async def create_question_set(
    body: QuestionSetRequest,
    store: Store = Depends(get_store),  # noqa: B008
    supplier: QuestionSupplier = Depends(get_question_supplier),  # noqa: B008
) -> QuestionSetResponse:
    """
    Get questions for a work and open a new assessment session.

    Returns the cached question set for the work when one exists; otherwise
    generates one (falling back to the static set on failure).

    Raises:
        HTTPException 404: Unknown work, or no questions available for it
        HTTPException 500: Unexpected failure
    """
    work = get_work_by_id(body.work_id)
    if work is None:
        raise HTTPException(status_code=404, detail=f"Work not found: {body.work_id}")

    try:
        question_set = await supplier.supply_questions(work, body.lang)
    except NoQuestionsAvailable as e:
        raise HTTPException(status_code=404, detail=e.reason) from e
    except Exception as e:
        logger.exception(f"Question generation error for work {work.id}")
        raise HTTPException(status_code=500, detail="Failed to generate questions") from e

    session = Session(work_id=work.id, question_set_id=question_set.id)
    store.sessions.set(session)

    logger.info(
        f"Started session {session.id} for work {work.id}",
        extra={"session_id": session.id, "work_id": work.id, "question_set_id": question_set.id},
    )

    return QuestionSetResponse(question_set=question_set, session_id=session.id)


@router.get("/question-set/{question_set_id}", response_model=QuestionSet)
async def get_question_set(
    question_set_id: str,
    store: Store = Depends(get_store),  # noqa: B008
) -> QuestionSet:
    """Retrieve a stored question set."""
    question_set = store.question_sets.get(question_set_id)
    if question_set is None:
        raise HTTPException(
            status_code=404, detail=f"Question set not found: {question_set_id}"
        )
    return question_set
