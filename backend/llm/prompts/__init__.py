"""LLM prompts for various use cases."""

from llm.prompts.base import InvalidInputError
from llm.prompts.document_qa import (
    DOCUMENT_QA_SYSTEM_PROMPT,
    NO_ANSWER_SENTENCE,
    compose_answer_prompt,
)
from llm.prompts.summary import (
    SUMMARY_SYSTEM_PROMPT,
    build_transcript,
    compose_summary_prompt,
)

__all__ = [
    "DOCUMENT_QA_SYSTEM_PROMPT",
    "SUMMARY_SYSTEM_PROMPT",
    "NO_ANSWER_SENTENCE",
    "InvalidInputError",
    "build_transcript",
    "compose_answer_prompt",
    "compose_summary_prompt",
]
