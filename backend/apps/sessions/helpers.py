"""Session cookie utilities."""

import uuid

from fastapi import Cookie, Request
from fastapi.responses import Response

from config import get_settings

SESSION_COOKIE = "session_id"


def set_session_cookie(response: Response, session_id: str) -> Response:
    """Set session cookie on response."""
    settings = get_settings()
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session_id,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=False,  # Set True in production with HTTPS
    )
    return response


def get_or_create_session(
    request: Request,
    session_id: str | None = Cookie(default=None),
) -> str:
    """Get existing session ID from cookie or create new one.

    The id is stashed on ``request.state`` so handlers can echo it back as a
    cookie.
    """
    if not session_id:
        session_id = str(uuid.uuid4())
    request.state.session_id = session_id
    return session_id
