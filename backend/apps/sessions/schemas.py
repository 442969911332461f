"""API schemas describing a chat session to the browser."""

from pydantic import BaseModel, Field

from services.session import Session


class MessageOut(BaseModel):
    """A message in the session log."""

    id: str = Field(..., description="Message ID, unique within the session")
    role: str = Field(..., description="Message role: user, model or system")
    content: str = Field(..., description="Message text, rendered verbatim")


class SessionSnapshot(BaseModel):
    """Everything the browser needs to render the chat."""

    messages: list[MessageOut]
    language: str
    file_names: list[str] = Field(
        default_factory=list, description="Documents contributing to the context"
    )
    has_context: bool
    answering: bool
    summarizing: bool
    last_error: str | None = None
    can_send: bool = Field(..., description="Whether a question can be sent now")
    can_clear: bool = Field(..., description="Whether clearing should be offered")
    can_summarize: bool = Field(..., description="Whether summarizing is enabled")
    input_placeholder: str

    @classmethod
    def from_session(cls, session: Session) -> "SessionSnapshot":
        return cls(
            messages=[
                MessageOut(id=m.id, role=m.role.value, content=m.content)
                for m in session.messages
            ],
            language=session.language,
            file_names=list(session.file_names),
            has_context=session.has_context,
            answering=session.answering,
            summarizing=session.summarizing,
            last_error=session.last_error,
            can_send=session.can_send,
            can_clear=session.can_clear,
            can_summarize=session.can_summarize,
            input_placeholder=session.input_placeholder,
        )


def snapshot_data(session: Session) -> dict:
    """Snapshot as JSON-ready data for the response envelope."""
    return SessionSnapshot.from_session(session).model_dump(mode="json")
