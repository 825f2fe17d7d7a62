"""Answer normalization onto the unit interval."""

from story_doctor.core.errors import InvalidAnswerValue, TypeMismatch
from story_doctor.core.schemas_assessment import Answer, Question, QuestionType

LIKERT_MIN = 1
LIKERT_MAX = 5


def normalize_binary(value: bool) -> float:
    """Map yes/no to 1.0/0.0."""
    return 1.0 if value else 0.0


def normalize_likert5(value: int, question_id: str = "") -> float:
    """
    Rescale a 5-point Likert answer linearly to [0, 1].

    1 -> 0.0, 2 -> 0.25, 3 -> 0.5, 4 -> 0.75, 5 -> 1.0

    Raises:
        InvalidAnswerValue: If value is outside 1..5
    """
    if value < LIKERT_MIN or value > LIKERT_MAX:
        raise InvalidAnswerValue(question_id, value)
    return (value - LIKERT_MIN) / (LIKERT_MAX - LIKERT_MIN)


def normalize(question: Question, answer: Answer) -> float:
    """
    Normalize an answer according to its question's type.

    The value type is checked before the range so a boolean sent for a
    likert5 question is reported as a mismatch, never as an out-of-range 0/1.

    Args:
        question: Question being answered
        answer: Reader's answer

    Returns:
        Value in [0, 1]

    Raises:
        TypeMismatch: If the value type doesn't match the question type
        InvalidAnswerValue: If a likert5 value is outside 1..5
    """
    value = answer.value

    if question.type == QuestionType.BINARY:
        if not isinstance(value, bool):
            raise TypeMismatch(question.id, "boolean", value)
        return normalize_binary(value)

    if question.type == QuestionType.LIKERT5:
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatch(question.id, "integer", value)
        return normalize_likert5(value, question.id)

    raise TypeMismatch(question.id, str(question.type), value)
