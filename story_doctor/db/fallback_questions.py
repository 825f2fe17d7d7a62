"""Hand-authored question sets used when generation is unavailable.

Each builder returns a brand-new ``QuestionSet`` (fresh ids, fresh
timestamp) on every call.
"""

from collections.abc import Callable

from story_doctor.core.schemas_assessment import (
    Question,
    QuestionSet,
    QuestionSource,
    QuestionType,
)


def build_hong_gil_dong_questions() -> QuestionSet:
    """Fallback set for 홍길동전."""
    return QuestionSet(
        work_id="hong-gil-dong",
        source=QuestionSource.FALLBACK,
        language="ko",
        questions=[
            Question(
                content="권선징악의 통쾌한 전개를 좋아하시나요?",
                type=QuestionType.BINARY,
                weight=1.6,
                category="theme",
            ),
            Question(
                content="로맨스 비중이 낮아도 괜찮나요?",
                type=QuestionType.BINARY,
                weight=1.2,
                category="romance",
            ),
            Question(
                content="신분/가족 갈등 중심 서사를 선호하시나요?",
                type=QuestionType.LIKERT5,
                weight=1.4,
                category="conflict",
            ),
            Question(
                content="복수·응징 요소가 있는 이야기를 즐기시나요?",
                type=QuestionType.LIKERT5,
                weight=1.6,
                category="theme",
            ),
            Question(
                content="고전체 어투나 서술 톤에 거부감이 없으신가요?",
                type=QuestionType.LIKERT5,
                weight=1.3,
                category="style",
            ),
            Question(
                content="느릿한 로맨스 대신 도덕·가치 중심을 선호하시나요?",
                type=QuestionType.BINARY,
                weight=1.0,
                category="theme",
            ),
        ],
    )


FALLBACK_BUILDERS: dict[str, Callable[[], QuestionSet]] = {
    "hong-gil-dong": build_hong_gil_dong_questions,
}


def get_fallback_questions(work_id: str) -> QuestionSet | None:
    """
    Fresh fallback set for a work.

    Returns:
        New QuestionSet tagged source=fallback, or None if the work has none
    """
    builder = FALLBACK_BUILDERS.get(work_id)
    if builder is None:
        return None
    return builder()
