"""Weighted suitability score and label.

The score is the weighted mean of normalized answers expressed as a
percentage:

    score = round_half_up(100 * sum(normalized * weight) / sum(weight))

It is a pure function of the (question, answer) pairs, so reordering the
inputs never changes the result.
"""

import math
from collections.abc import Iterable, Sequence

from story_doctor.core.errors import MissingAnswer
from story_doctor.core.schemas_assessment import Answer, Question, SuitabilityLabel
from story_doctor.core.scoring.normalize import normalize

# Evaluated high to low; lower bound inclusive
LABEL_THRESHOLDS: tuple[tuple[int, SuitabilityLabel], ...] = (
    (80, SuitabilityLabel.HIGHLY_SUITABLE),
    (60, SuitabilityLabel.SUITABLE),
    (40, SuitabilityLabel.MODERATE),
)


def index_answers(answers: Iterable[Answer]) -> dict[str, Answer]:
    """Map question id to answer. Later answers for the same question win."""
    return {answer.question_id: answer for answer in answers}


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_weighted_score(questions: Sequence[Question], answers: Sequence[Answer]) -> int:
    """
    Compute the 0-100 suitability score.

    Args:
        questions: Questions of the set being scored
        answers: Reader's answers (one per question)

    Returns:
        Integer score in [0, 100]; 0 when the total weight is zero

    Raises:
        MissingAnswer: If any question has no answer
        TypeMismatch: If an answer's value type doesn't fit its question
        InvalidAnswerValue: If a likert5 answer is outside 1..5
    """
    answer_map = index_answers(answers)

    total_weighted = 0.0
    total_weight = 0.0

    for question in questions:
        answer = answer_map.get(question.id)
        if answer is None:
            raise MissingAnswer(question.id)

        total_weighted += normalize(question, answer) * question.weight
        total_weight += question.weight

    if total_weight == 0:
        return 0

    return round_half_up(total_weighted / total_weight * 100)


def label_of(score: int) -> SuitabilityLabel:
    """Map a score to its suitability label."""
    for threshold, label in LABEL_THRESHOLDS:
        if score >= threshold:
            return label
    return SuitabilityLabel.UNSUITABLE
