"""FastAPI dependencies resolving the per-process service objects.

The objects are built once when the application module loads and kept on
``app.state``; tests swap them through ``app.dependency_overrides``.
"""

from fastapi import Request

from story_doctor.core.question_supply import QuestionSupplier
from story_doctor.db.store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_question_supplier(request: Request) -> QuestionSupplier:
    return request.app.state.question_supplier


def get_interpretation_generator(request: Request):
    return request.app.state.interpretation_generator
