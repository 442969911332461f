"""POST /chat/clear - Clear the chat after the user confirmed."""

import logging

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.sessions.helpers import set_session_cookie
from apps.sessions.schemas import snapshot_data
from dependencies import get_session
from responses import ResponseCode, success_response
from services.session import Session

logger = logging.getLogger(__name__)


# --- Request Schema ---


class ClearRequest(BaseModel):
    """Request body for clearing the chat."""

    retain_context: bool = Field(
        default=True,
        description="Keep the uploaded documents loaded after clearing",
    )


# --- Handler ---


async def clear_chat(
    body: ClearRequest,
    request: Request,
    session: Session = Depends(get_session),
) -> JSONResponse:
    """Reset the conversation, optionally keeping the document context."""
    request_id = getattr(request.state, "request_id", None)
    logger.info(
        "[%s] Clear chat (retain_context=%s)", request_id, body.retain_context
    )

    session.confirm_clear(body.retain_context)

    resp = success_response(
        ResponseCode.CHAT_CLEARED, snapshot_data(session), request_id
    )
    return set_session_cookie(resp, request.state.session_id)
