"""LLM module - unified interface for language model interactions.

Usage:
    from llm import LLMService, LLMError

    llm = LLMService()
    response = await llm.generate(prompt, system)

Structure:
    - base.py: Abstract interface (BaseLLMService)
    - anthropic.py: Claude implementation (AnthropicService)
    - prompts/: Prompt templates for answering and summarizing
"""

from llm.anthropic import AnthropicService, RateLimitedError
from llm.base import BaseLLMService, LLMError

# Default provider - can be swapped by changing this alias
LLMService = AnthropicService

__all__ = [
    "BaseLLMService",
    "LLMService",
    "LLMError",
    "RateLimitedError",
    "AnthropicService",
]
