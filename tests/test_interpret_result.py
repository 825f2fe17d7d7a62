"""Tests for the result interpretation chain."""

import pytest

from story_doctor.chains.interpret_result import (
    build_result_interpretation_prompt,
    interpret_result,
)
from story_doctor.core.schemas_assessment import Impact, TopReason
from tests.fakes.fake_generators import HangingGenerator, RaisingGenerator, ScriptedGenerator

REASONS = [
    TopReason(question_id="q1", content="권선징악을 좋아하시나요?", impact=Impact.POSITIVE, weight=1.6),
    TopReason(question_id="q2", content="로맨스가 적어도 괜찮나요?", impact=Impact.NEGATIVE, weight=0.0),
]


class TestBuildPrompt:
    def test_korean(self, work):
        prompt = build_result_interpretation_prompt(work, 72, REASONS, "ko")

        assert "홍길동전" in prompt
        assert "72점" in prompt
        assert "- 권선징악을 좋아하시나요?: 긍정적 영향" in prompt
        assert "- 로맨스가 적어도 괜찮나요?: 부정적 영향" in prompt

    def test_english(self, work):
        prompt = build_result_interpretation_prompt(work, 72, REASONS, "en")

        assert "Suitability Score: 72/100" in prompt
        assert "positive impact" in prompt
        assert "negative impact" in prompt


class TestInterpretResult:
    @pytest.mark.asyncio
    async def test_returns_stripped_text(self, work):
        text = await interpret_result(work, 90, REASONS, "ko", ScriptedGenerator(" 좋아요 \n"))
        assert text == "좋아요"

    @pytest.mark.asyncio
    async def test_blank_reply_is_none(self, work):
        assert await interpret_result(work, 90, REASONS, "ko", ScriptedGenerator("   ")) is None

    @pytest.mark.asyncio
    async def test_error_is_none(self, work):
        assert await interpret_result(work, 90, REASONS, "en", RaisingGenerator()) is None

    @pytest.mark.asyncio
    async def test_timeout_is_none(self, work):
        generator = HangingGenerator()

        result = await interpret_result(
            work, 90, REASONS, "en", generator, timeout_seconds=0.05
        )

        assert result is None
        assert generator.cancelled is True
