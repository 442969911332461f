"""Base LLM service interface.

Defines the contract that all LLM providers must implement.
"""

from abc import ABC, abstractmethod


class LLMError(Exception):
    """Raised when LLM generation fails."""


class BaseLLMService(ABC):
    """Abstract base class for LLM services.

    Providers only need single-shot completion: one prompt in, one text out.
    """

    model: str

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a single response.

        Args:
            prompt: User message.
            system: System instructions.
            temperature: Sampling temperature (0-1).
            max_tokens: Maximum tokens to generate.

        Returns:
            Generated text.

        Raises:
            LLMError: If the provider call fails for any reason.
        """
