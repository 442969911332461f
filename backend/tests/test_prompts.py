"""Tests for the prompt templates."""

import pytest

from llm.prompts import (
    NO_ANSWER_SENTENCE,
    InvalidInputError,
    build_transcript,
    compose_answer_prompt,
    compose_summary_prompt,
)
from services.session import Message, Role


class TestAnswerPrompt:
    """Tests for compose_answer_prompt."""

    def test_embeds_context_and_query(self):
        """Test context and question appear verbatim between markers."""
        prompt = compose_answer_prompt("Clause 4: 30 days.", "Can I leave?")

        context_block = prompt.split("--- CONTEXT START ---")[1].split(
            "--- CONTEXT END ---"
        )[0]
        question_block = prompt.split("--- QUESTION START ---")[1].split(
            "--- QUESTION END ---"
        )[0]
        assert context_block.strip() == "Clause 4: 30 days."
        assert question_block.strip() == "Can I leave?"

    def test_contains_grounding_rules(self):
        """Test the instructions forbid outside knowledge and fix the fallback."""
        prompt = compose_answer_prompt("ctx", "q")

        assert NO_ANSWER_SENTENCE in prompt
        assert "outside knowledge" in prompt
        assert "same language as the user's question" in prompt

    def test_deterministic(self):
        """Test identical inputs give byte-identical prompts."""
        first = compose_answer_prompt("context text", "question?")
        second = compose_answer_prompt("context text", "question?")
        assert first == second

    def test_braces_in_user_text_are_kept(self):
        """Test template placeholders in user text are not expanded."""
        prompt = compose_answer_prompt("{query} in context", "what is {context}?")
        assert "{query} in context" in prompt
        assert "what is {context}?" in prompt

    def test_empty_context(self):
        """Test empty context is rejected and named."""
        with pytest.raises(InvalidInputError) as exc_info:
            compose_answer_prompt("", "question")
        assert exc_info.value.argument == "context"

    def test_empty_query(self):
        """Test blank query is rejected and named."""
        with pytest.raises(InvalidInputError) as exc_info:
            compose_answer_prompt("context", "   ")
        assert exc_info.value.argument == "query"


class TestSummaryPrompt:
    """Tests for compose_summary_prompt and build_transcript."""

    def test_embeds_transcript_and_language(self):
        """Test transcript and output language are included."""
        prompt = compose_summary_prompt("User: hi\nAssistant: hello", "Spanish")

        assert "User: hi\nAssistant: hello" in prompt
        assert "Write the summary in Spanish." in prompt
        assert "2 to 4 sentences" in prompt
        assert "Do not add any information" in prompt

    def test_deterministic(self):
        """Test identical inputs give identical prompts."""
        assert compose_summary_prompt("User: a", "English") == compose_summary_prompt(
            "User: a", "English"
        )

    def test_empty_transcript(self):
        """Test empty transcript is rejected."""
        with pytest.raises(InvalidInputError) as exc_info:
            compose_summary_prompt("", "English")
        assert exc_info.value.argument == "transcript"

    def test_build_transcript_skips_system_messages(self):
        """Test only user and model turns are linearized."""
        messages = [
            Message("system-initial", Role.SYSTEM, "Hello!"),
            Message("user-1", Role.USER, "Can I terminate early?"),
            Message("model-2", Role.MODEL, "Yes, with 30 days notice."),
            Message("system-error-3", Role.SYSTEM, "Error: boom"),
        ]

        assert build_transcript(messages) == (
            "User: Can I terminate early?\nAssistant: Yes, with 30 days notice."
        )

    def test_build_transcript_empty(self):
        """Test a log without conversation gives an empty transcript."""
        assert build_transcript([Message("system-initial", Role.SYSTEM, "Hi")]) == ""
