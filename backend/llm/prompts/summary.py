"""Prompts for summarizing a chat transcript."""

from collections.abc import Iterable

from llm.prompts.base import require_text

SUMMARY_SYSTEM_PROMPT = "You are a helpful assistant that summarizes conversations."

SUMMARY_TEMPLATE = """Summarize the following conversation between a user and a legal assistant in 2 to 4 sentences.

RULES:
1. Stay neutral and factual.
2. Do not add any information that is not in the conversation.
3. Write the summary in {language_name}.

--- TRANSCRIPT START ---
{transcript}
--- TRANSCRIPT END ---

Summary:"""

# Prefixes used when linearizing a conversation into a transcript
TRANSCRIPT_SPEAKERS = {
    "user": "User",
    "model": "Assistant",
}


def build_transcript(messages: Iterable) -> str:
    """Linearize user and model messages as ``Speaker: content`` lines.

    System messages are left out. Accepts anything with ``role`` and
    ``content`` attributes.
    """
    lines = []
    for message in messages:
        speaker = TRANSCRIPT_SPEAKERS.get(message.role)
        if speaker:
            lines.append(f"{speaker}: {message.content}")
    return "\n".join(lines)


def compose_summary_prompt(transcript: str, language_name: str) -> str:
    """Render the summary prompt.

    Raises:
        InvalidInputError: If ``transcript`` is empty.
    """
    require_text(transcript, "transcript")
    return SUMMARY_TEMPLATE.format(language_name=language_name, transcript=transcript)
