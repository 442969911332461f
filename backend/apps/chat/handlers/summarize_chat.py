"""POST /chat/summarize - Summarize the conversation."""

import logging

from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from apps.chat.errors import REJECTIONS, rejection_response
from apps.sessions.helpers import set_session_cookie
from apps.sessions.schemas import snapshot_data
from dependencies import get_model_gateway, get_session
from responses import ResponseCode, success_response
from services.gateway import ModelGateway
from services.session import Session

logger = logging.getLogger(__name__)


async def summarize_chat(
    request: Request,
    session: Session = Depends(get_session),
    gateway: ModelGateway = Depends(get_model_gateway),
) -> JSONResponse:
    """Summarize the conversation and append the summary."""
    request_id = getattr(request.state, "request_id", None)
    logger.info(
        "[%s] Summarize request (%d messages)", request_id, len(session.messages)
    )

    try:
        await session.summarize(gateway)
    except REJECTIONS as e:
        return rejection_response(e, request_id)

    resp = success_response(
        ResponseCode.SUMMARIZED, snapshot_data(session), request_id
    )
    return set_session_cookie(resp, request.state.session_id)
