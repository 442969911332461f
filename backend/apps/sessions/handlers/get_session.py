"""GET /session - Current state of the browser's chat session."""

from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from apps.sessions.helpers import set_session_cookie
from apps.sessions.schemas import snapshot_data
from dependencies import get_session
from responses import ResponseCode, success_response
from services.session import Session


async def get_session_state(
    request: Request,
    session: Session = Depends(get_session),
) -> JSONResponse:
    """Return the session snapshot, creating the session on first visit."""
    request_id = getattr(request.state, "request_id", None)
    resp = success_response(ResponseCode.SUCCESS, snapshot_data(session), request_id)
    return set_session_cookie(resp, request.state.session_id)
