# =============================================================================
# TESTES - Content Gateway
# =============================================================================
# claude_agent_sdk.query substituido por geradores async fake
# =============================================================================

import asyncio
from dataclasses import dataclass, field
from unittest.mock import patch

import pytest


@dataclass
class MockTextBlock:
    text: str


@dataclass
class MockMessage:
    content: list = field(default_factory=list)


def _fake_query(*chunks, delay: float = 0):
    async def fake(prompt, options):
        if delay:
            await asyncio.sleep(delay)
        for chunk in chunks:
            yield MockMessage(content=[MockTextBlock(chunk)])

    return fake


class TestExtractJson:
    """Testes para extract_json."""

    def test_plain_json(self):
        from quiz.llm import extract_json

        assert extract_json('{"a": 1}') == {"a": 1}

    def test_markdown_fence(self):
        from quiz.llm import extract_json

        assert extract_json('```json\n{"a": 1}\n```') == {"a": 1}

    def test_preamble_before_object(self):
        from quiz.llm import extract_json

        assert extract_json('Here is your quiz: {"a": [1, 2]} Enjoy!') == {"a": [1, 2]}

    @pytest.mark.parametrize("text", ["no json here", "[1, 2, 3]", "{broken"])
    def test_invalid_raises_value_error(self, text):
        from quiz.llm import extract_json

        with pytest.raises(ValueError):
            extract_json(text)


class TestContentGateway:
    """Testes para ContentGateway."""

    @pytest.mark.asyncio
    async def test_generate_content_joins_blocks(self):
        from quiz.llm import ContentGateway

        with patch("quiz.llm.gateway.sdk_query", _fake_query('{"gradedAnswers": ', "[]}")):
            data = await ContentGateway().generate_content("grade")

        assert data == {"gradedAnswers": []}

    @pytest.mark.asyncio
    async def test_options_use_model_and_single_turn(self):
        from quiz.llm import ContentGateway
        from quiz.prompts import QUIZ_SYSTEM_PROMPT

        captured = {}

        async def fake(prompt, options):
            captured["options"] = options
            yield MockMessage(content=[MockTextBlock("{}")])

        with patch("quiz.llm.gateway.sdk_query", fake):
            await ContentGateway(model="sonnet").generate_content("p")

        assert captured["options"].model == "sonnet"
        assert captured["options"].max_turns == 1
        assert captured["options"].system_prompt == QUIZ_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_malformed_json_raises_provider_error(self):
        from quiz.errors import ProviderError
        from quiz.llm import ContentGateway

        with patch("quiz.llm.gateway.sdk_query", _fake_query("not json")):
            with pytest.raises(ProviderError):
                await ContentGateway().generate_content("p")

    @pytest.mark.asyncio
    async def test_empty_response_raises_provider_error(self):
        from quiz.errors import ProviderError
        from quiz.llm import ContentGateway

        with patch("quiz.llm.gateway.sdk_query", _fake_query()):
            with pytest.raises(ProviderError):
                await ContentGateway().generate_content("p")

    @pytest.mark.asyncio
    async def test_timeout_raises_provider_timeout(self):
        from quiz.errors import ProviderTimeoutError
        from quiz.llm import ContentGateway

        with patch("quiz.llm.gateway.sdk_query", _fake_query("{}", delay=1)):
            with pytest.raises(ProviderTimeoutError):
                await ContentGateway(timeout=0.01).generate_content("p")

    @pytest.mark.asyncio
    async def test_sdk_exception_wrapped(self):
        from quiz.errors import ProviderError
        from quiz.llm import ContentGateway

        async def broken(prompt, options):
            raise RuntimeError("connection reset")
            yield  # pragma: no cover

        with patch("quiz.llm.gateway.sdk_query", broken):
            with pytest.raises(ProviderError, match="connection reset"):
                await ContentGateway().generate_content("p")

    @pytest.mark.asyncio
    async def test_generate_text_strips(self):
        from quiz.llm import ContentGateway

        with patch("quiz.llm.gateway.sdk_query", _fake_query("  ## Insights\n", "text  ")):
            text = await ContentGateway().generate_text("p")

        assert text == "## Insights\ntext"
