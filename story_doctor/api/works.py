"""API endpoints for the work catalog."""

from fastapi import APIRouter, HTTPException

from story_doctor.core.schemas_assessment import Work
from story_doctor.db.works import get_work_by_id, list_works

router = APIRouter()


@router.get("/works", response_model=list[Work])
async def get_works() -> list[Work]:
    """All works available for assessment."""
    return list_works()


@router.get("/works/{work_id}", response_model=Work)
async def get_work(work_id: str) -> Work:
    work = get_work_by_id(work_id)
    if work is None:
        raise HTTPException(status_code=404, detail=f"Work not found: {work_id}")
    return work
