"""Question supply orchestration.

Produces the question set for a work:

    cache hit? -> return cached set (no re-write)
    else race(generate, timeout)
        success          -> store and return (source=llm)
        failure/timeout  -> fallback set for the work?
                                yes -> store and return (source=fallback)
                                no  -> NoQuestionsAvailable

Generation failures never reach the caller; only the terminal
NoQuestionsAvailable does.
"""

import asyncio

from story_doctor.chains.generate_questions import (
    DEFAULT_QUESTION_COUNT,
    generate_question_set,
)
from story_doctor.core.errors import GenerationFailure, NoQuestionsAvailable
from story_doctor.core.logging import get_logger
from story_doctor.core.schemas_assessment import Language, QuestionSet, Work
from story_doctor.db.fallback_questions import get_fallback_questions
from story_doctor.db.store import Store

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 6.0


class QuestionSupplier:
    """Supplies question sets for works, caching them in the store."""

    def __init__(
        self,
        store: Store,
        generator,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        question_count: int = DEFAULT_QUESTION_COUNT,
    ):
        """
        Args:
            store: Ephemeral store holding question sets
            generator: Object exposing ``async generate(prompt) -> str``
            timeout_seconds: Budget for a single generation attempt
            question_count: Number of questions requested from the generator
        """
        self.store = store
        self.generator = generator
        self.timeout_seconds = timeout_seconds
        self.question_count = question_count

    async def supply_questions(self, work: Work, language: Language = "ko") -> QuestionSet:
        """
        Get the question set for a work, generating one if none is cached.

        Args:
            work: Work to assess
            language: Language for generated questions

        Returns:
            Cached, generated or fallback QuestionSet

        Raises:
            NoQuestionsAvailable: If generation failed and the work has no
                fallback set
        """
        cached = self.store.question_sets.get_by_work_id(work.id)
        if cached is not None:
            logger.info(
                f"Using cached questions for work: {work.id}",
                extra={"work_id": work.id, "question_set_id": cached.id},
            )
            return cached

        logger.info(f"Generating questions for work: {work.id}", extra={"work_id": work.id})

        try:
            question_set = await self._generate(work, language)
        except GenerationFailure as e:
            logger.warning(
                f"Question generation failed, using fallback: {e}",
                extra={"work_id": work.id},
            )
            question_set = get_fallback_questions(work.id)
            if question_set is None:
                logger.error(
                    f"No fallback questions for work: {work.id}",
                    extra={"work_id": work.id},
                )
                raise NoQuestionsAvailable(work.id) from e

        self.store.question_sets.set(question_set)

        logger.info(
            f"Stored {len(question_set.questions)} {question_set.source.value} questions "
            f"for work: {work.id}",
            extra={"work_id": work.id, "question_set_id": question_set.id},
        )
        return question_set

    async def _generate(self, work: Work, language: Language) -> QuestionSet:
        """Run one generation attempt bounded by the timeout.

        On timeout the pending call is cancelled; since generation has no side
        effects, a late reply could never be applied anyway.
        """
        try:
            return await asyncio.wait_for(
                generate_question_set(work, language, self.generator, self.question_count),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as e:
            raise GenerationFailure(
                f"Timeout after {int(self.timeout_seconds * 1000)}ms"
            ) from e
