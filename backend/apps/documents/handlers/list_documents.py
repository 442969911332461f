"""GET /documents - Documents currently loaded as context."""

from fastapi import Depends
from pydantic import BaseModel, Field

from dependencies import get_session
from services.session import Session

# --- Response Schema ---


class DocumentListResponse(BaseModel):
    """Loaded documents for the session."""

    file_names: list[str] = Field(..., description="Files in the context, in order")
    total_count: int = Field(..., description="Number of loaded files")
    context_chars: int = Field(..., description="Size of the combined context")


# --- Handler ---


async def list_documents(
    session: Session = Depends(get_session),
) -> DocumentListResponse:
    """List the documents that make up the current context."""
    return DocumentListResponse(
        file_names=list(session.file_names),
        total_count=len(session.file_names),
        context_chars=len(session.context),
    )
