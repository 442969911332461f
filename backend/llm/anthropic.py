"""Anthropic Claude LLM implementation."""

import logging

import httpx
from anthropic import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AsyncAnthropic,
    AuthenticationError,
    RateLimitError,
)

from config import Settings, get_settings

from .base import BaseLLMService, LLMError

logger = logging.getLogger(__name__)


class RateLimitedError(LLMError):
    """Raised when the provider rejects a call for rate limiting."""


class AnthropicService(BaseLLMService):
    """Claude LLM service via Anthropic API."""

    def __init__(
        self,
        model: str | None = None,
        settings: Settings | None = None,
        client: AsyncAnthropic | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.model = model or settings.llm_model
        self.settings = settings

        self._client = client or AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=httpx.Timeout(
                timeout=settings.llm_timeout_seconds,
                connect=settings.llm_connect_timeout_seconds,
            ),
            max_retries=0,
        )

    async def generate(
        self,
        prompt: str,
        system: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a response using Claude."""
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens or self.settings.llm_max_tokens,
                temperature=temperature
                if temperature is not None
                else self.settings.llm_temperature,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except RateLimitError as e:
            logger.warning("Rate limit: %s", e)
            raise RateLimitedError("Rate limit exceeded. Please try again.") from e
        except APITimeoutError as e:
            logger.warning("Request timed out: %s", e)
            raise LLMError("The AI service timed out. Please try again.") from e
        except AuthenticationError as e:
            logger.error("Authentication failed: %s", e)
            raise LLMError("The AI service rejected the configured API key.") from e
        except APIConnectionError as e:
            logger.error("Connection error: %s", e)
            raise LLMError("Could not reach the AI service.") from e
        except APIError as e:
            logger.error("API error: %s", e)
            raise LLMError(f"LLM error: {e}") from e
        except Exception as e:
            logger.error("Unexpected error during LLM generation: %s", e)
            raise LLMError(f"Failed to generate answer: {e}") from e

        text = "".join(
            block.text
            for block in response.content
            if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            logger.error("Empty completion (stop_reason=%s)", response.stop_reason)
            raise LLMError("The AI service returned an empty response.")
        return text
