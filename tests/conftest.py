"""Pytest configuration and fixtures."""

import os

import pytest

# Test modules import the app at collection time, before any fixture runs
os.environ["STORY_DOCTOR_ENV"] = "test"
os.environ.pop("OPENAI_API_KEY", None)

from story_doctor.core.schemas_assessment import (  # noqa: E402
    Question,
    QuestionSet,
    QuestionSource,
    QuestionType,
)
from story_doctor.db.fallback_questions import build_hong_gil_dong_questions  # noqa: E402
from story_doctor.db.store import Store  # noqa: E402
from story_doctor.db.works import HONG_GIL_DONG  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["STORY_DOCTOR_ENV"] = "test"
    os.environ["LLM_TIMEOUT_MS"] = "6000"


@pytest.fixture
def store():
    """Fresh ephemeral store."""
    return Store()


@pytest.fixture
def work():
    return HONG_GIL_DONG


@pytest.fixture
def hong_gil_dong_set():
    """Fallback question set for 홍길동전."""
    return build_hong_gil_dong_questions()


@pytest.fixture
def mixed_question_set():
    """Two-question set: one binary, one likert5."""
    return QuestionSet(
        work_id="hong-gil-dong",
        source=QuestionSource.LLM,
        questions=[
            Question(id="q-binary", content="권선징악을 좋아하시나요?", type=QuestionType.BINARY, weight=2.0),
            Question(id="q-likert", content="고전체 문장이 괜찮으신가요?", type=QuestionType.LIKERT5, weight=1.0),
        ],
    )
