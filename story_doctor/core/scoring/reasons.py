"""Top explanatory factors behind a score."""

from collections.abc import Sequence

from story_doctor.core.schemas_assessment import Answer, Impact, Question, TopReason
from story_doctor.core.scoring.normalize import normalize
from story_doctor.core.scoring.score import index_answers

DEFAULT_REASON_LIMIT = 2


def extract_top_reasons(
    questions: Sequence[Question],
    answers: Sequence[Answer],
    limit: int = DEFAULT_REASON_LIMIT,
) -> list[TopReason]:
    """
    Pick the questions that moved the score the most.

    Salience is the distance of a question's weighted contribution from its
    neutral midpoint (0.5 * weight). Ties keep question order.

    Unanswered questions are skipped rather than rejected, so this can run
    on partially answered sets.

    Args:
        questions: Questions of the set
        answers: Reader's answers
        limit: Max number of reasons to return

    Returns:
        Up to ``limit`` reasons, most salient first
    """
    if limit <= 0:
        return []

    answer_map = index_answers(answers)
    scored: list[tuple[TopReason, float]] = []

    for question in questions:
        answer = answer_map.get(question.id)
        if answer is None:
            continue

        normalized = normalize(question, answer)
        weighted = normalized * question.weight
        salience = abs(weighted - 0.5 * question.weight)

        reason = TopReason(
            question_id=question.id,
            content=question.content,
            impact=Impact.POSITIVE if normalized >= 0.5 else Impact.NEGATIVE,
            weight=weighted,
        )
        scored.append((reason, salience))

    # list.sort is stable with reverse=True
    scored.sort(key=lambda item: item[1], reverse=True)
    return [reason for reason, _ in scored[:limit]]
