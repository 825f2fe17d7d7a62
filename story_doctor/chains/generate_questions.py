"""LLM chain for generating suitability questions for a work.

Builds a provider-agnostic prompt from the work's title, author, genre and
summary, asks the generator for a small set of typed, weighted questions and
turns the JSON reply into a ``QuestionSet`` tagged ``source=llm``.

Any problem (provider error, empty reply, malformed JSON, invalid question)
is raised as ``GenerationFailure``; there is no partial credit.
"""

import json

from pydantic import ValidationError as PydanticValidationError

from story_doctor.core.errors import GenerationFailure
from story_doctor.core.llm import strip_llm_fences
from story_doctor.core.logging import get_logger
from story_doctor.core.schemas_assessment import (
    Language,
    Question,
    QuestionSet,
    QuestionSource,
    Work,
)

logger = get_logger(__name__)

DEFAULT_QUESTION_COUNT = 6
MAX_QUESTIONS = 10
MIN_WEIGHT = 0.5
MAX_WEIGHT = 2.0


PROMPT_KO = """당신은 웹소설 독자의 취향을 분석하는 전문가입니다.

다음 작품에 대한 독자 적합도를 평가할 수 있는 질문 {count}개를 생성해주세요.

작품 정보:
- 제목: {title}
- 작가: {author}
- 장르: {genre}
- 줄거리:
{summary}

요구사항:
1. 질문은 독자의 취향과 작품의 특성이 얼마나 잘 맞는지 평가해야 합니다
2. 각 질문은 binary(예/아니오) 또는 likert5(1-5점 척도) 형식이어야 합니다
3. 질문은 구체적이고 명확해야 합니다
4. 작품의 핵심 특징을 다루어야 합니다 (장르, 분위기, 주제, 문체 등)
5. 가중치(weight)는 질문의 중요도에 따라 0.5~2.0 사이로 설정하세요
6. "예" 또는 5점 응답이 이 작품과 잘 맞는 취향을 뜻하도록 질문을 작성하세요

다음 JSON 형식으로만 응답해주세요:
{{
  "questions": [
    {{
      "content": "질문 내용",
      "type": "binary" 또는 "likert5",
      "weight": 0.5~2.0 사이의 숫자,
      "category": "theme/style/character/plot/romance 중 하나"
    }}
  ]
}}

예시:
- binary: "액션 장면이 많은 작품을 좋아하시나요?"
- likert5: "복잡한 인물 관계를 얼마나 선호하시나요?" (1: 매우 싫어함 ~ 5: 매우 좋아함)"""

PROMPT_EN = """You are an expert in analyzing reader preferences for web novels.

Generate {count} questions to assess reader suitability for the following work:

Work Information:
- Title: {title}
- Author: {author}
- Genre: {genre}
- Summary:
{summary}

Requirements:
1. Questions should assess how well reader preferences match the work's characteristics
2. Each question must be either binary (yes/no) or likert5 (1-5 scale) format
3. Questions should be specific and clear
4. Cover core features of the work (genre, atmosphere, themes, writing style, etc.)
5. Set weight between 0.5-2.0 based on question importance
6. Phrase every question so that "yes" or 5 means the reader's taste fits this work

Respond ONLY in the following JSON format:
{{
  "questions": [
    {{
      "content": "Question text",
      "type": "binary" or "likert5",
      "weight": number between 0.5-2.0,
      "category": "one of theme/style/character/plot/romance"
    }}
  ]
}}"""


def build_question_generation_prompt(
    work: Work,
    language: Language = "ko",
    question_count: int = DEFAULT_QUESTION_COUNT,
) -> str:
    """
    Build the question generation prompt for a work.

    Args:
        work: Work to assess
        language: Language of the prompt and of the generated questions
        question_count: Number of questions to request

    Returns:
        Prompt text
    """
    if language == "ko":
        return PROMPT_KO.format(
            count=question_count,
            title=work.title,
            author=work.author or "미상",
            genre=work.genre or "미지정",
            summary=work.summary,
        )

    return PROMPT_EN.format(
        count=question_count,
        title=work.title,
        author=work.author or "Unknown",
        genre=work.genre or "Unspecified",
        summary=work.summary,
    )


def parse_generated_questions(raw_output: str) -> list[Question]:
    """
    Parse the generator's reply into questions with fresh ids.

    Accepts ``{"questions": [...]}`` or a bare JSON array. Weights are
    clamped to [0.5, 2.0] and missing weights default to 1.0. Replies with
    more than 10 questions are trimmed.

    Args:
        raw_output: Raw generator text (may be wrapped in code fences)

    Returns:
        Non-empty list of questions

    Raises:
        GenerationFailure: If the reply is empty, not JSON, has no question
            list, or any question is invalid
    """
    if not raw_output or not raw_output.strip():
        raise GenerationFailure("Empty response from generator")

    try:
        parsed = json.loads(strip_llm_fences(raw_output))
    except (ValueError, RecursionError) as e:
        raise GenerationFailure(f"Invalid JSON response from generator: {e}") from e

    # Handle both wrapped object and direct array
    if isinstance(parsed, dict):
        parsed = parsed.get("questions")

    if not isinstance(parsed, list):
        raise GenerationFailure("Invalid response format: missing questions array")
    if not parsed:
        raise GenerationFailure("Generator returned no questions")

    if len(parsed) > MAX_QUESTIONS:
        logger.info(f"Generated {len(parsed)} questions, trimming to {MAX_QUESTIONS}")
        parsed = parsed[:MAX_QUESTIONS]

    questions: list[Question] = []
    for item in parsed:
        if not isinstance(item, dict):
            raise GenerationFailure(f"Invalid question entry (not an object): {item!r}")

        weight = item.get("weight") or 1.0
        try:
            weight = min(MAX_WEIGHT, max(MIN_WEIGHT, float(weight)))
            questions.append(
                Question(
                    content=item.get("content"),
                    type=item.get("type"),
                    weight=weight,
                    category=item.get("category"),
                )
            )
        except (TypeError, ValueError, OverflowError, PydanticValidationError) as e:
            raise GenerationFailure(f"Invalid question entry: {e}") from e

    return questions


async def generate_question_set(
    work: Work,
    language: Language,
    generator,
    question_count: int = DEFAULT_QUESTION_COUNT,
) -> QuestionSet:
    """
    Generate a question set for a work via the generator.

    Has no side effects: the caller decides whether to keep the result.

    Args:
        work: Work to assess
        language: Question language
        generator: Object exposing ``async generate(prompt) -> str``
        question_count: Number of questions to request

    Returns:
        QuestionSet tagged source=llm

    Raises:
        GenerationFailure: On provider error or unusable output
    """
    prompt = build_question_generation_prompt(work, language, question_count)

    try:
        raw_output = await generator.generate(prompt)
    except GenerationFailure:
        raise
    except Exception as e:
        raise GenerationFailure(f"Generator error: {e}") from e

    logger.debug(f"Question generation raw output: {(raw_output or '')[:500]}")

    questions = parse_generated_questions(raw_output)

    return QuestionSet(
        work_id=work.id,
        questions=questions,
        source=QuestionSource.LLM,
        language=language,
    )
