"""Tests for the Anthropic LLM service and the model gateway."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from llm import AnthropicService, LLMError, RateLimitedError
from llm.prompts import DOCUMENT_QA_SYSTEM_PROMPT, SUMMARY_SYSTEM_PROMPT
from services.gateway import GatewayError, ModelGateway

API_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _completion(*texts, stop_reason="end_turn"):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=t) for t in texts],
        stop_reason=stop_reason,
    )


@pytest.fixture
def mock_client():
    """Mock AsyncAnthropic client."""
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=_completion("An answer."))
    return client


@pytest.fixture
def service(mock_settings, mock_client):
    return AnthropicService(settings=mock_settings, client=mock_client)


class TestAnthropicService:
    """Tests for AnthropicService.generate."""

    @pytest.mark.asyncio
    async def test_generate(self, service, mock_client, mock_settings):
        """Test the prompt is sent as a single user turn."""
        text = await service.generate("prompt", "system", temperature=0.0)

        assert text == "An answer."
        kwargs = mock_client.messages.create.await_args.kwargs
        assert kwargs["model"] == mock_settings.llm_model
        assert kwargs["system"] == "system"
        assert kwargs["temperature"] == 0.0
        assert kwargs["max_tokens"] == mock_settings.llm_max_tokens
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    @pytest.mark.asyncio
    async def test_joins_text_blocks(self, service, mock_client):
        """Test multiple text blocks are concatenated."""
        mock_client.messages.create.return_value = _completion("Part one, ", "two.")
        assert await service.generate("p", "s") == "Part one, two."

    @pytest.mark.asyncio
    async def test_empty_completion(self, service, mock_client):
        """Test an empty response is an error, not an empty answer."""
        mock_client.messages.create.return_value = _completion(
            "  ", stop_reason="max_tokens"
        )
        with pytest.raises(LLMError, match="empty response"):
            await service.generate("p", "s")

    @pytest.mark.asyncio
    async def test_connection_error(self, service, mock_client):
        """Test connection failures become LLMError."""
        mock_client.messages.create.side_effect = anthropic.APIConnectionError(
            request=API_REQUEST
        )
        with pytest.raises(LLMError, match="Could not reach"):
            await service.generate("p", "s")

    @pytest.mark.asyncio
    async def test_timeout(self, service, mock_client):
        """Test timeouts become LLMError."""
        mock_client.messages.create.side_effect = anthropic.APITimeoutError(
            request=API_REQUEST
        )
        with pytest.raises(LLMError, match="timed out"):
            await service.generate("p", "s")

    @pytest.mark.asyncio
    async def test_rate_limit(self, service, mock_client):
        """Test provider rate limits are reported separately."""
        mock_client.messages.create.side_effect = anthropic.RateLimitError(
            "slow down",
            response=httpx.Response(429, request=API_REQUEST),
            body=None,
        )
        with pytest.raises(RateLimitedError):
            await service.generate("p", "s")

    @pytest.mark.asyncio
    async def test_unexpected_error(self, service, mock_client):
        """Test anything else is wrapped."""
        mock_client.messages.create.side_effect = RuntimeError("boom")
        with pytest.raises(LLMError, match="boom"):
            await service.generate("p", "s")


class TestModelGateway:
    """Tests for ModelGateway."""

    @pytest.fixture
    def llm(self):
        llm = AsyncMock()
        llm.model = "test-model"
        llm.generate.return_value = "generated"
        return llm

    @pytest.mark.asyncio
    async def test_answer(self, llm, mock_settings):
        """Test answers use the Q&A system prompt and answer settings."""
        gateway = ModelGateway(llm, settings=mock_settings)

        assert await gateway.answer("prompt") == "generated"
        llm.generate.assert_awaited_once_with(
            "prompt",
            DOCUMENT_QA_SYSTEM_PROMPT,
            temperature=mock_settings.llm_temperature,
            max_tokens=mock_settings.llm_max_tokens,
        )

    @pytest.mark.asyncio
    async def test_summarize(self, llm, mock_settings):
        """Test summaries use the summary prompt and summary settings."""
        gateway = ModelGateway(llm, settings=mock_settings)

        assert await gateway.summarize("transcript prompt") == "generated"
        llm.generate.assert_awaited_once_with(
            "transcript prompt",
            SUMMARY_SYSTEM_PROMPT,
            temperature=0.3,
            max_tokens=400,
        )

    @pytest.mark.asyncio
    async def test_llm_error(self, llm, mock_settings):
        """Test provider errors surface as GatewayError with the message."""
        llm.generate.side_effect = LLMError("Could not reach the AI service.")
        gateway = ModelGateway(llm, settings=mock_settings)

        with pytest.raises(GatewayError) as exc_info:
            await gateway.answer("prompt")

        assert str(exc_info.value) == "Could not reach the AI service."

    @pytest.mark.asyncio
    async def test_rate_limited(self, llm, mock_settings):
        """Test provider rate limits keep their message through the gateway."""
        llm.generate.side_effect = RateLimitedError("Rate limit exceeded.")
        gateway = ModelGateway(llm, settings=mock_settings)

        with pytest.raises(GatewayError) as exc_info:
            await gateway.summarize("prompt")

        assert str(exc_info.value) == "Rate limit exceeded."
        assert isinstance(exc_info.value.__cause__, RateLimitedError)

    @pytest.mark.asyncio
    async def test_unknown_error(self, llm, mock_settings):
        """Test unexpected exceptions get a generic description."""
        llm.generate.side_effect = KeyError("x")
        gateway = ModelGateway(llm, settings=mock_settings)

        with pytest.raises(GatewayError, match="unknown error"):
            await gateway.answer("prompt")
