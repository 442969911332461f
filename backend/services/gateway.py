"""Model gateway: the two LLM operations the chat session needs.

Wraps the provider behind ``answer`` and ``summarize``. Both are single-shot
(no retries here) and every provider failure comes out as ``GatewayError``.
"""

import logging

from config import Settings, get_settings
from llm import BaseLLMService, LLMError
from llm.prompts import DOCUMENT_QA_SYSTEM_PROMPT, SUMMARY_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Raised when a call to the external model fails."""


class ModelGateway:
    """Thin adapter over an LLM service for answering and summarizing."""

    def __init__(
        self,
        llm: BaseLLMService,
        settings: Settings | None = None,
    ) -> None:
        self.llm = llm
        self.settings = settings or get_settings()

    async def answer(self, prompt: str) -> str:
        """Answer a context-grounded prompt.

        Raises:
            GatewayError: If the model call fails.
        """
        return await self._call(
            "answer",
            prompt,
            DOCUMENT_QA_SYSTEM_PROMPT,
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.llm_max_tokens,
        )

    async def summarize(self, prompt: str) -> str:
        """Summarize a transcript prompt.

        Raises:
            GatewayError: If the model call fails.
        """
        return await self._call(
            "summarize",
            prompt,
            SUMMARY_SYSTEM_PROMPT,
            temperature=self.settings.summary_temperature,
            max_tokens=self.settings.summary_max_tokens,
        )

    async def _call(
        self,
        operation: str,
        prompt: str,
        system: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        logger.debug(
            "%s: sending %d chars to %s", operation, len(prompt), self.llm.model
        )
        try:
            text = await self.llm.generate(
                prompt,
                system,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except LLMError as e:
            raise GatewayError(str(e)) from e
        except Exception as e:
            logger.exception("Unexpected error in %s", operation)
            raise GatewayError(
                f"An unknown error occurred while communicating with the AI: {e}"
            ) from e

        logger.debug("%s: received %d chars", operation, len(text))
        return text
