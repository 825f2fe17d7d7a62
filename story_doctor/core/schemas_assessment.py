"""Pydantic models for the suitability assessment domain.

Python attributes are snake_case; the wire format is camelCase
(``questionId``, ``workId``...) so the web client payloads pass through
unchanged.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt
from pydantic.alias_generators import to_camel

Language = Literal["ko", "en"]


def new_id() -> str:
    """Fresh opaque identifier (UUID4 string)."""
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


# =============================================================================
# Enums
# =============================================================================


class QuestionType(str, Enum):
    """Answer format of a question."""

    BINARY = "binary"  # yes/no
    LIKERT5 = "likert5"  # 1..5 scale


class QuestionSource(str, Enum):
    """Where a question set came from."""

    LLM = "llm"
    FALLBACK = "fallback"


class SuitabilityLabel(str, Enum):
    """Categorical reading of a suitability score."""

    HIGHLY_SUITABLE = "highly_suitable"  # 80-100
    SUITABLE = "suitable"  # 60-79
    MODERATE = "moderate"  # 40-59
    UNSUITABLE = "unsuitable"  # 0-39


class Impact(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class CamelModel(BaseModel):
    """Base model serialising to camelCase and accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Reference data
# =============================================================================


class Work(CamelModel):
    """Literary work being assessed. Read-only reference data."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable work slug (e.g. 'hong-gil-dong')")
    title: str = Field(..., description="Display title")
    author: str | None = Field(None, description="Author, if known")
    genre: str | None = Field(None, description="Genre label, if known")
    summary: str = Field(..., description="Plot and style summary fed to the question prompt")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Open key/value bag")


# =============================================================================
# Questions
# =============================================================================


class Question(CamelModel):
    """Single assessment question."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    content: str = Field(..., min_length=1, description="Question text shown to the reader")
    type: QuestionType
    weight: float = Field(default=1.0, gt=0, description="Relative importance in aggregation")
    category: str | None = Field(None, description="theme/style/character/plot/romance...")


class QuestionSet(CamelModel):
    """Ordered question set produced for one work."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    work_id: str
    questions: list[Question] = Field(..., min_length=1, max_length=10)
    created_at: datetime = Field(default_factory=utc_now)
    source: QuestionSource = QuestionSource.LLM
    language: Language = "ko"


# =============================================================================
# Answers and sessions
# =============================================================================


class Answer(CamelModel):
    """Reader's answer to one question.

    ``value`` is a bool for binary questions and an int for likert5 questions.
    Both members are strict so JSON ``true`` never coerces to ``1``;
    compatibility with the question type is enforced by ``normalize``.
    """

    question_id: str
    value: StrictBool | StrictInt
    answered_at: datetime = Field(default_factory=utc_now)


class Session(CamelModel):
    """Assessment session for one reader, one work and one question set."""

    id: str = Field(default_factory=new_id)
    work_id: str
    question_set_id: str
    answers: list[Answer] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = None
    score: int | None = Field(None, ge=0, le=100)
    label: SuitabilityLabel | None = None
    reasons: list[str] | None = None


# =============================================================================
# Evaluation
# =============================================================================


class TopReason(CamelModel):
    """Explanatory factor behind a score.

    ``weight`` holds the weighted score (normalized value times question
    weight), not the raw question weight.
    """

    question_id: str
    content: str
    impact: Impact
    weight: float


class EvaluationResult(CamelModel):
    """Derived report for a completed session."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    score: int = Field(..., ge=0, le=100)
    label: SuitabilityLabel
    top_reasons: list[TopReason] = Field(default_factory=list, max_length=2)
    tips: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    completed_at: datetime = Field(default_factory=utc_now)


# =============================================================================
# API payloads
# =============================================================================


class QuestionSetRequest(CamelModel):
    work_id: str = Field(..., min_length=1)
    lang: Language = "ko"


class QuestionSetResponse(CamelModel):
    question_set: QuestionSet
    session_id: str


class EvaluationRequest(CamelModel):
    session_id: str
    question_set_id: str
    answers: list[Answer]


class SessionDetail(CamelModel):
    session: Session
    question_set: QuestionSet | None = None


class SessionList(CamelModel):
    count: int
    sessions: list[Session]


class InterpretationResponse(CamelModel):
    session_id: str
    language: Language
    interpretation: str | None = None
    available: bool = False
