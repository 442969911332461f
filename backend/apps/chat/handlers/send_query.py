"""POST /chat - Ask a question about the loaded documents."""

import logging

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.chat.errors import REJECTIONS, rejection_response
from apps.sessions.helpers import set_session_cookie
from apps.sessions.schemas import snapshot_data
from dependencies import get_model_gateway, get_session
from responses import ResponseCode, success_response
from services.gateway import ModelGateway
from services.session import Session

logger = logging.getLogger(__name__)


# --- Request Schema ---


class ChatRequest(BaseModel):
    """Request body for chat endpoint."""

    question: str = Field(
        ...,
        max_length=2000,
        description="Natural language question about the documents",
    )


# --- Handler ---


async def send_query(
    body: ChatRequest,
    request: Request,
    session: Session = Depends(get_session),
    gateway: ModelGateway = Depends(get_model_gateway),
) -> JSONResponse:
    """Send a question and wait for the answer.

    A failed model call is not an HTTP error: the returned snapshot carries
    the error notice and ``last_error``.
    """
    request_id = getattr(request.state, "request_id", None)
    logger.info("[%s] Chat request: %s", request_id, body.question[:100])

    try:
        await session.send_query(body.question, gateway)
    except REJECTIONS as e:
        return rejection_response(e, request_id)

    resp = success_response(ResponseCode.ANSWERED, snapshot_data(session), request_id)
    return set_session_cookie(resp, request.state.session_id)
