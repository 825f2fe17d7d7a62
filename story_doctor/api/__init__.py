"""API router for /api endpoints."""

from fastapi import APIRouter

from story_doctor.api import evaluate, question_sets, works

router = APIRouter()

# Work catalog
router.include_router(works.router, tags=["works"])

# Question supply + session start
router.include_router(question_sets.router, tags=["question_sets"])

# Evaluation, session lookup, interpretation
router.include_router(evaluate.router, tags=["evaluate"])
