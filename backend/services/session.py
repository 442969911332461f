"""Chat session state machine.

A ``Session`` owns the message log, the loaded document context, the active
language and the session status. It changes only through the event methods
below; each method either applies completely or raises ``SessionStateError``
(or ``InvalidInputError``) without touching any state.

Event methods are synchronous, so on a single event loop every transition is
atomic. The async orchestrators (``load_documents``, ``send_query``,
``summarize``) suspend only while reading files or waiting on the model, and
always return the session to ``idle`` when their model call ends, even on
failure. Clearing the chat or changing language while a call is outstanding
supersedes it: the late result is dropped rather than written into the new log.
"""

import itertools
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from llm.prompts import (
    InvalidInputError,
    build_transcript,
    compose_answer_prompt,
    compose_summary_prompt,
)
from services.context_builder import (
    BuiltContext,
    ContextBuilder,
    ProgressCallback,
    ReadError,
    SourceDocument,
)
from services.gateway import GatewayError, ModelGateway
from services.translations import Translations, get_translations

logger = logging.getLogger(__name__)

INITIAL_MESSAGE_ID = "system-initial"
# Reserved id: at most one summarizing placeholder can exist at a time
SUMMARY_PLACEHOLDER_ID = "system-summarizing"

UNKNOWN_ERROR = "An unknown error occurred."


class Role(str, Enum):
    """Author of a message."""

    USER = "user"
    MODEL = "model"
    SYSTEM = "system"


class SessionStatus(str, Enum):
    """What the session is waiting on. Only one model call at a time."""

    IDLE = "idle"
    ANSWERING = "answering"
    SUMMARIZING = "summarizing"


@dataclass(frozen=True)
class Message:
    """One entry in the conversation log."""

    id: str
    role: Role
    content: str


class SessionStateError(Exception):
    """Raised when an event is not allowed in the current state."""


class SessionBusyError(SessionStateError):
    """Raised when a model call is already outstanding."""

    def __init__(self, status: SessionStatus) -> None:
        self.status = status
        super().__init__(f"Session is busy ({status.value}). Please wait.")


class NoContextError(SessionStateError):
    """Raised when a question is sent before any documents are loaded."""

    def __init__(self) -> None:
        super().__init__("Context is empty. Please upload files first.")


class NothingToSummarizeError(SessionStateError):
    """Raised when the conversation is too short to summarize."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            "At least one question and one answer are needed for a summary."
        )


class Session:
    """Live state of one conversation.

    Args:
        language: Initial locale.
        translations: Optional locale table; defaults to the built-in one.

    Raises:
        UnsupportedLanguageError: If ``language`` has no string table.
    """

    def __init__(
        self,
        language: str = "en",
        translations: Mapping[str, Translations] | None = None,
    ) -> None:
        self._table = translations
        self._strings = get_translations(language, translations)
        self._ids = itertools.count(1)

        self.language = language
        self.messages: list[Message] = [self._initial_message()]
        self.context = ""
        self.file_names: list[str] = []
        self.status = SessionStatus.IDLE
        self.last_error: str | None = None
        # Bumped when the log is reset; a model call started under an older
        # generation has been superseded and its result is dropped
        self._generation = 0

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def strings(self) -> Translations:
        return self._strings

    @property
    def answering(self) -> bool:
        return self.status is SessionStatus.ANSWERING

    @property
    def summarizing(self) -> bool:
        return self.status is SessionStatus.SUMMARIZING

    @property
    def has_context(self) -> bool:
        return bool(self.context)

    @property
    def conversation_length(self) -> int:
        """Number of user and model messages in the log."""
        return sum(1 for m in self.messages if m.role in (Role.USER, Role.MODEL))

    @property
    def can_send(self) -> bool:
        return self.status is SessionStatus.IDLE and self.has_context

    @property
    def can_clear(self) -> bool:
        return len(self.messages) > 1

    @property
    def can_summarize(self) -> bool:
        return self.status is SessionStatus.IDLE and self.conversation_length >= 2

    @property
    def input_placeholder(self) -> str:
        if self.has_context:
            return self._strings.placeholder_enabled
        return self._strings.placeholder_disabled

    # =========================================================================
    # Upload events
    # =========================================================================

    def upload_completed(self, built: BuiltContext) -> Message:
        """Replace the context with a freshly built one."""
        self.context = built.text
        self.file_names = list(built.file_names)
        self.last_error = None
        logger.info("Context loaded from %d file(s)", built.file_count)
        return self._append(
            Role.SYSTEM, self._strings.context_loaded(built.file_count), "system"
        )

    def upload_failed(self, error: Exception | str) -> None:
        """Record a failed upload; the previous context stays loaded."""
        self.last_error = _describe(error)
        logger.warning("Upload failed: %s", self.last_error)

    # =========================================================================
    # Question events
    # =========================================================================

    def begin_query(self, text: str) -> Message:
        """Accept a question and mark the session as answering.

        Raises:
            InvalidInputError: If the question is blank.
            SessionBusyError: If a model call is outstanding.
            NoContextError: If no documents are loaded.
        """
        if text is None or not text.strip():
            raise InvalidInputError(
                "query", "Query is empty. Please enter a question."
            )
        self._require_idle()
        if not self.has_context:
            raise NoContextError()

        message = self._append(Role.USER, text.strip(), "user")
        self.status = SessionStatus.ANSWERING
        self.last_error = None
        return message

    def answer_succeeded(self, text: str) -> Message | None:
        """Append the model's answer. Ignored unless answering."""
        if not self._expect(SessionStatus.ANSWERING, "answer"):
            return None
        self.status = SessionStatus.IDLE
        return self._append(Role.MODEL, text, "model")

    def answer_failed(self, error: Exception | str) -> Message | None:
        """Report a failed answer. Ignored unless answering."""
        if not self._expect(SessionStatus.ANSWERING, "answer failure"):
            return None
        self.status = SessionStatus.IDLE
        return self._append_error(error)

    # =========================================================================
    # Clear events
    # =========================================================================

    def request_clear(self) -> bool:
        """Whether a clear confirmation should be shown at all."""
        return self.can_clear

    def confirm_clear(self, retain_context: bool) -> None:
        """Reset the log, optionally keeping the loaded documents.

        Any outstanding model call is superseded: its result will be dropped.
        """
        self._supersede()
        self.messages = [
            self._initial_message(),
            self._new_message(Role.SYSTEM, self._strings.chat_cleared, "system"),
        ]
        if retain_context and self.has_context:
            self._append(
                Role.SYSTEM,
                self._strings.context_retained(len(self.file_names)),
                "system",
            )
        elif not retain_context:
            self.context = ""
            self.file_names = []
        logger.info("Chat cleared (retain_context=%s)", retain_context)

    def cancel_clear(self) -> None:
        logger.debug("Clear cancelled")

    # =========================================================================
    # Summary events
    # =========================================================================

    def begin_summary(self) -> str:
        """Mark the session as summarizing and show the placeholder.

        Returns:
            Transcript of the conversation taken before the placeholder.

        Raises:
            SessionBusyError: If a model call is outstanding.
            NothingToSummarizeError: If fewer than two user/model messages exist.
        """
        self._require_idle()
        count = self.conversation_length
        if count < 2:
            raise NothingToSummarizeError(count)

        transcript = build_transcript(self.messages)
        self.status = SessionStatus.SUMMARIZING
        self.messages.append(
            Message(SUMMARY_PLACEHOLDER_ID, Role.SYSTEM, self._strings.summarizing)
        )
        return transcript

    def summary_succeeded(self, text: str) -> Message | None:
        """Swap the placeholder for the summary. Ignored unless summarizing."""
        if not self._expect(SessionStatus.SUMMARIZING, "summary"):
            return None
        self._remove_placeholder()
        self.status = SessionStatus.IDLE
        return self._append(
            Role.MODEL, f"{self._strings.summary_title}\n\n{text}", "summary"
        )

    def summary_failed(self, error: Exception | str) -> Message | None:
        """Drop the placeholder and report the failure. Ignored unless summarizing."""
        if not self._expect(SessionStatus.SUMMARIZING, "summary failure"):
            return None
        self._remove_placeholder()
        self.status = SessionStatus.IDLE
        return self._append_error(error)

    # =========================================================================
    # Language
    # =========================================================================

    def change_language(self, language: str) -> None:
        """Switch locale and restart the log; documents stay loaded.

        Raises:
            UnsupportedLanguageError: If ``language`` has no string table.
        """
        self._strings = get_translations(language, self._table)
        self._supersede()
        self.language = language
        self.messages = [self._initial_message()]
        logger.info("Language changed to %s", language)

    # =========================================================================
    # Orchestration
    # =========================================================================

    async def load_documents(
        self,
        builder: ContextBuilder,
        documents: Sequence[SourceDocument],
        on_progress: ProgressCallback | None = None,
    ) -> BuiltContext:
        """Build a context from ``documents`` and load it.

        Raises:
            ReadError: If any document could not be read (recorded first).
            ValueError: If the batch is empty or too large (recorded first).
        """
        try:
            built = await builder.build(documents, on_progress)
        except (ReadError, ValueError) as e:
            self.upload_failed(e)
            raise
        self.upload_completed(built)
        return built

    async def send_query(self, text: str, gateway: ModelGateway) -> None:
        """Ask a question about the loaded context.

        Precondition failures raise before anything changes. Once accepted,
        every failure ends up as a system message and ``last_error``.
        """
        question = self.begin_query(text)
        generation = self._generation
        try:
            prompt = compose_answer_prompt(self.context, question.content)
            answer = await gateway.answer(prompt)
        except (InvalidInputError, GatewayError) as e:
            if self._current(generation, "answer failure"):
                self.answer_failed(e)
        except Exception as e:
            logger.exception("Unexpected error while answering")
            if self._current(generation, "answer failure"):
                self.answer_failed(e)
        else:
            if self._current(generation, "answer"):
                self.answer_succeeded(answer)
        finally:
            if (
                generation == self._generation
                and self.status is SessionStatus.ANSWERING
            ):
                self.status = SessionStatus.IDLE

    async def summarize(self, gateway: ModelGateway) -> None:
        """Summarize the conversation so far.

        Precondition failures raise before anything changes. Once accepted,
        the placeholder is always removed and failures become system messages.
        """
        transcript = self.begin_summary()
        generation = self._generation
        try:
            prompt = compose_summary_prompt(transcript, self._strings.language_name)
            summary = await gateway.summarize(prompt)
        except (InvalidInputError, GatewayError) as e:
            if self._current(generation, "summary failure"):
                self.summary_failed(e)
        except Exception as e:
            logger.exception("Unexpected error while summarizing")
            if self._current(generation, "summary failure"):
                self.summary_failed(e)
        else:
            if self._current(generation, "summary"):
                self.summary_succeeded(summary)
        finally:
            if (
                generation == self._generation
                and self.status is SessionStatus.SUMMARIZING
            ):
                self._remove_placeholder()
                self.status = SessionStatus.IDLE

    # =========================================================================
    # Internals
    # =========================================================================

    def _initial_message(self) -> Message:
        return Message(INITIAL_MESSAGE_ID, Role.SYSTEM, self._strings.initial_message)

    def _new_message(self, role: Role, content: str, tag: str) -> Message:
        return Message(f"{tag}-{next(self._ids)}", role, content)

    def _append(self, role: Role, content: str, tag: str) -> Message:
        message = self._new_message(role, content, tag)
        self.messages.append(message)
        return message

    def _append_error(self, error: Exception | str) -> Message:
        self.last_error = _describe(error)
        logger.warning("Model call failed: %s", self.last_error)
        return self._append(
            Role.SYSTEM,
            f"{self._strings.error_prefix} {self.last_error}",
            "system-error",
        )

    def _remove_placeholder(self) -> None:
        # Found by its reserved id, never by content. Usually last, but an
        # upload finishing mid-summary appends after it, so scan from the end
        for index in range(len(self.messages) - 1, -1, -1):
            if self.messages[index].id == SUMMARY_PLACEHOLDER_ID:
                del self.messages[index]
                return

    def _require_idle(self) -> None:
        if self.status is not SessionStatus.IDLE:
            raise SessionBusyError(self.status)

    def _supersede(self) -> None:
        if self.status is not SessionStatus.IDLE:
            logger.info("Superseding outstanding %s call", self.status.value)
        self._generation += 1
        self.status = SessionStatus.IDLE

    def _current(self, generation: int, event: str) -> bool:
        if generation == self._generation:
            return True
        logger.warning("Ignoring %s from a superseded request", event)
        return False

    def _expect(self, status: SessionStatus, event: str) -> bool:
        if self.status is status:
            return True
        logger.warning("Ignoring stale %s (status=%s)", event, self.status.value)
        return False


def _describe(error: Exception | str) -> str:
    text = str(error).strip()
    return text or UNKNOWN_ERROR
