"""GET /session/translations - UI strings for the session language."""

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.sessions.helpers import set_session_cookie
from dependencies import get_session
from responses import ResponseCode, success_response
from services.session import Session
from services.translations import supported_languages

# --- Response Schema ---


class TranslationsResponse(BaseModel):
    """UI strings for one language."""

    language: str
    supported_languages: list[str]
    strings: dict[str, str] = Field(
        ..., description="String table, counts filled from the loaded files"
    )


# --- Handler ---


async def get_translations(
    request: Request,
    session: Session = Depends(get_session),
) -> JSONResponse:
    """Return the clear-dialog texts, placeholders and other UI strings."""
    request_id = getattr(request.state, "request_id", None)
    data = TranslationsResponse(
        language=session.language,
        supported_languages=supported_languages(),
        strings=session.strings.as_dict(len(session.file_names)),
    )
    resp = success_response(ResponseCode.SUCCESS, data.model_dump(), request_id)
    return set_session_cookie(resp, request.state.session_id)
