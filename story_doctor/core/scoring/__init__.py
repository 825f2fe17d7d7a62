"""Suitability scoring.

Turns a question set and a reader's answers into:
- a 0-100 weighted score
- a categorical label (highly_suitable / suitable / moderate / unsuitable)
- the top explanatory factors

Usage:
    from story_doctor.core.scoring import calculate_weighted_score, label_of

    score = calculate_weighted_score(question_set.questions, answers)
    print(f"{label_of(score).value} ({score}%)")
"""

from story_doctor.core.scoring.normalize import (
    normalize,
    normalize_binary,
    normalize_likert5,
)
from story_doctor.core.scoring.reasons import DEFAULT_REASON_LIMIT, extract_top_reasons
from story_doctor.core.scoring.score import (
    LABEL_THRESHOLDS,
    calculate_weighted_score,
    index_answers,
    label_of,
)

__all__ = [
    "normalize",
    "normalize_binary",
    "normalize_likert5",
    "calculate_weighted_score",
    "index_answers",
    "label_of",
    "extract_top_reasons",
    "LABEL_THRESHOLDS",
    "DEFAULT_REASON_LIMIT",
]
