"""Domain errors for assessment scoring and question supply.

Every error carries a stable, human-readable ``reason`` that the HTTP layer
passes through unchanged, plus the identifier of the offending entity where
one exists.
"""


class StoryDoctorError(Exception):
    """Base class for all domain errors."""

    reason: str = "Unexpected assessment error"

    def __init__(self, message: str | None = None):
        self.message = message or self.reason
        super().__init__(self.message)


# =============================================================================
# Validation (caller's fault)
# =============================================================================


class ValidationError(StoryDoctorError):
    """Malformed, missing or mistyped answer."""

    reason = "Invalid answers"

    def __init__(self, message: str | None = None, question_id: str | None = None):
        self.question_id = question_id
        super().__init__(message)


class MissingAnswer(ValidationError):
    reason = "Missing answer"

    def __init__(self, question_id: str):
        super().__init__(f"Missing answer for question: {question_id}", question_id=question_id)


class TypeMismatch(ValidationError):
    reason = "Answer type does not match question type"

    def __init__(self, question_id: str, expected: str, received: object):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Expected {expected} answer for question {question_id}, "
            f"got {type(received).__name__}",
            question_id=question_id,
        )


class InvalidAnswerValue(ValidationError):
    reason = "Answer value out of range"

    def __init__(self, question_id: str, value: object):
        self.value = value
        super().__init__(
            f"Invalid Likert value for question {question_id}: {value}. Must be between 1 and 5.",
            question_id=question_id,
        )


# =============================================================================
# Lookup and session state
# =============================================================================


class NotFoundError(StoryDoctorError):
    """Unknown work, session or question set."""

    reason = "Not found"

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class SessionMismatch(ValidationError):
    reason = "Session and question set mismatch"

    def __init__(self, session_id: str, question_set_id: str):
        self.session_id = session_id
        self.question_set_id = question_set_id
        super().__init__(self.reason)


class SessionNotCompleted(ValidationError):
    reason = "Session has not been evaluated yet"

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"{self.reason}: {session_id}")


# =============================================================================
# Question supply
# =============================================================================


class GenerationFailure(StoryDoctorError):
    """Provider error, timeout, empty or malformed output.

    Always recovered locally by the fallback path.
    """

    reason = "Question generation failed"


class NoQuestionsAvailable(StoryDoctorError):
    """Neither generation nor a fallback set could produce questions."""

    reason = "No questions available for this work"

    def __init__(self, work_id: str):
        self.work_id = work_id
        super().__init__(self.reason)
