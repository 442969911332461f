"""PUT /session/language - Switch the session language."""

import logging

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.sessions.helpers import set_session_cookie
from apps.sessions.schemas import snapshot_data
from dependencies import get_session
from responses import ResponseCode, error_response, success_response
from services.session import Session
from services.translations import UnsupportedLanguageError

logger = logging.getLogger(__name__)


# --- Request Schema ---


class LanguageRequest(BaseModel):
    """Request body for changing language."""

    language: str = Field(
        ..., min_length=2, max_length=16, description="Locale identifier, e.g. 'en'"
    )


# --- Handler ---


async def change_language(
    body: LanguageRequest,
    request: Request,
    session: Session = Depends(get_session),
) -> JSONResponse:
    """Change language; the chat restarts but loaded documents are kept."""
    request_id = getattr(request.state, "request_id", None)
    language = body.language.strip().lower()

    try:
        session.change_language(language)
    except UnsupportedLanguageError as e:
        logger.warning("[%s] %s", request_id, e)
        return error_response(ResponseCode.UNSUPPORTED_LANGUAGE, str(e), request_id)

    resp = success_response(
        ResponseCode.LANGUAGE_CHANGED, snapshot_data(session), request_id
    )
    return set_session_cookie(resp, request.state.session_id)
