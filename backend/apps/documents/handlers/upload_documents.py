"""POST /documents/upload - Build the session context from uploaded files."""

import logging

from fastapi import Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse

from apps.documents.handlers.common import (
    UPLOAD_ERRORS,
    read_uploads,
    upload_error_code,
)
from apps.sessions.helpers import set_session_cookie
from apps.sessions.schemas import snapshot_data
from dependencies import get_context_builder, get_session
from responses import ResponseCode, error_response, success_response
from services.context_builder import ContextBuilder, ReadError
from services.session import Session

logger = logging.getLogger(__name__)


async def upload_documents(
    request: Request,
    files: list[UploadFile] = File(...),
    session: Session = Depends(get_session),
    builder: ContextBuilder = Depends(get_context_builder),
) -> JSONResponse:
    """Upload a batch of text documents and load them as the context.

    Flow:
    1. Read every file in upload order
    2. Decode and combine them (all or nothing)
    3. Replace the session context and announce it
    """
    request_id = getattr(request.state, "request_id", None)
    logger.info("[%s] Upload: %d file(s)", request_id, len(files))

    def on_progress(completed: int, total: int) -> None:
        logger.debug("[%s] Read %d/%d", request_id, completed, total)

    try:
        try:
            documents = await read_uploads(files)
        except ReadError as e:
            session.upload_failed(e)
            raise
        await session.load_documents(builder, documents, on_progress)

    except UPLOAD_ERRORS as e:
        code = upload_error_code(e)
        logger.warning("[%s] %s: %s", request_id, type(e).__name__, e)
        details = {"filename": e.filename} if isinstance(e, ReadError) else None
        return error_response(code, str(e), request_id, details)

    resp = success_response(
        ResponseCode.CONTEXT_LOADED, snapshot_data(session), request_id
    )
    return set_session_cookie(resp, request.state.session_id)
