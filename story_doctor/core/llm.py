"""LLM client utilities and the text-generation boundary.

The rest of the service only needs one capability from a model provider:

    await generator.generate(prompt) -> str

``ChatModelGenerator`` adapts a LangChain chat model to that shape. Tests and
alternative providers can pass any object with the same coroutine.
"""

import re

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

from story_doctor.core.config import Settings, get_settings
from story_doctor.core.errors import GenerationFailure


def get_llm(model: str | None = None, temperature: float | None = None) -> ChatOpenAI:
    """
    Get configured LLM instance for LangChain chains.

    Args:
        model: Model name override (defaults to config setting)
        temperature: Temperature override (defaults to config setting)

    Returns:
        ChatOpenAI instance configured with API key and model
    """
    settings = get_settings()

    return ChatOpenAI(
        api_key=settings.OPENAI_API_KEY,
        model=model or settings.QUESTION_MODEL,
        temperature=settings.QUESTION_TEMPERATURE if temperature is None else temperature,
    )


def strip_llm_fences(raw_output: str) -> str:
    """Strip markdown code fences from LLM output.

    Handles: ```json ... ```, ``` ... ```, leading/trailing whitespace.
    """
    cleaned = raw_output.strip()

    # Extract JSON from markdown code fences
    fence_match = re.search(r"```(?:json)?\s*\n?(.*?)```", cleaned, re.DOTALL)
    if fence_match:
        return fence_match.group(1).strip()

    # Unterminated fence
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


class ChatModelGenerator:
    """Text generator backed by a LangChain chat model."""

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    async def generate(self, prompt: str) -> str:
        response = await self.llm.ainvoke([{"role": "user", "content": prompt}])
        content = response.content

        # Some providers return a list of content blocks
        if isinstance(content, list):
            content = "".join(
                block.get("text", "") if isinstance(block, dict) else str(block)
                for block in content
            )
        return content or ""


class UnconfiguredGenerator:
    """Stand-in used when no provider credentials are configured.

    Every call fails immediately so callers take their fallback path.
    """

    async def generate(self, prompt: str) -> str:
        raise GenerationFailure("OPENAI_API_KEY not configured")


def build_text_generator(
    settings: Settings | None = None,
    temperature: float | None = None,
) -> ChatModelGenerator | UnconfiguredGenerator:
    """
    Build the generator used by the question and interpretation chains.

    Args:
        settings: Settings to read credentials from (defaults to cached settings)
        temperature: Sampling temperature override

    Returns:
        ChatModelGenerator when an API key is configured, otherwise an
        UnconfiguredGenerator
    """
    settings = settings or get_settings()
    if not settings.llm_configured:
        return UnconfiguredGenerator()
    return ChatModelGenerator(get_llm(temperature=temperature))
