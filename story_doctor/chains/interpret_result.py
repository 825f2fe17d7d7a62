"""Generate a short natural-language reading of an assessment result.

Optional garnish on top of the deterministic tips/warnings: on timeout or any
provider problem the chain returns None and the caller simply shows no
interpretation.
"""

import asyncio
from collections.abc import Sequence

from story_doctor.core.logging import get_logger
from story_doctor.core.schemas_assessment import Impact, Language, TopReason, Work

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 6.0


PROMPT_KO = """작품 "{title}"에 대한 독자 적합도 평가 결과를 해석해주세요.

적합도 점수: {score}점 (100점 만점)

주요 영향 요인:
{factors}

다음 내용을 포함하여 간단명료하게 작성해주세요:
1. 이 점수가 의미하는 바 (한 문장)
2. 독서 시 예상되는 경험 (2-3문장)
3. 추천 또는 주의사항 (1-2문장)

친근하고 격려하는 톤으로 작성해주세요."""

PROMPT_EN = """Interpret the reader suitability assessment result for "{title}".

Suitability Score: {score}/100

Key Factors:
{factors}

Please provide a concise interpretation including:
1. What this score means (one sentence)
2. Expected reading experience (2-3 sentences)
3. Recommendations or cautions (1-2 sentences)

Use a friendly and encouraging tone."""


def build_result_interpretation_prompt(
    work: Work,
    score: int,
    top_reasons: Sequence[TopReason],
    language: Language = "ko",
) -> str:
    """Build the interpretation prompt for a scored session."""
    if language == "ko":
        factors = "\n".join(
            f"- {r.content}: {'긍정적' if r.impact == Impact.POSITIVE else '부정적'} 영향"
            for r in top_reasons
        )
        return PROMPT_KO.format(title=work.title, score=score, factors=factors)

    factors = "\n".join(f"- {r.content}: {r.impact.value} impact" for r in top_reasons)
    return PROMPT_EN.format(title=work.title, score=score, factors=factors)


async def interpret_result(
    work: Work,
    score: int,
    top_reasons: Sequence[TopReason],
    language: Language,
    generator,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> str | None:
    """
    Ask the generator for a friendly interpretation of a result.

    Args:
        work: Assessed work
        score: Suitability score
        top_reasons: Explanatory factors from the evaluation
        language: Output language
        generator: Object exposing ``async generate(prompt) -> str``
        timeout_seconds: Budget for the call

    Returns:
        Interpretation text, or None if generation failed or timed out
    """
    prompt = build_result_interpretation_prompt(work, score, top_reasons, language)

    try:
        text = await asyncio.wait_for(generator.generate(prompt), timeout=timeout_seconds)
    except TimeoutError:
        logger.warning(
            f"Result interpretation timed out after {timeout_seconds}s",
            extra={"work_id": work.id},
        )
        return None
    except Exception as e:
        logger.warning(f"Result interpretation failed: {e}", extra={"work_id": work.id})
        return None

    text = (text or "").strip()
    return text or None
