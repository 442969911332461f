"""POST /documents/upload/stream - Upload with Server-Sent Events progress."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Depends, File, Request, UploadFile
from fastapi.responses import StreamingResponse

from apps.documents.handlers.common import (
    UPLOAD_ERRORS,
    read_uploads,
    upload_error_code,
)
from apps.sessions.helpers import set_session_cookie
from apps.sessions.schemas import snapshot_data
from dependencies import get_context_builder, get_session
from responses import ResponseCode
from services.context_builder import ContextBuilder, ReadError
from services.session import Session

logger = logging.getLogger(__name__)


def _event(payload: dict[str, Any]) -> str:
    return f"data: {json.dumps(payload)}\n\n"


async def stream_upload(
    request: Request,
    files: list[UploadFile] = File(...),
    session: Session = Depends(get_session),
    builder: ContextBuilder = Depends(get_context_builder),
) -> StreamingResponse:
    """Upload documents and stream progress.

    Returns Server-Sent Events (SSE) stream with chunks:
    - type: "progress" - ``completed``/``total`` documents read
    - type: "done" - Context loaded, ``session`` holds the snapshot
    - type: "error" - Upload failed, context unchanged
    """
    request_id = getattr(request.state, "request_id", None)
    logger.info("[%s] Streaming upload: %d file(s)", request_id, len(files))

    # Read bodies now; UploadFile objects are closed once the handler returns
    try:
        documents = await read_uploads(files)
        read_error = None
    except ReadError as e:
        documents, read_error = [], e

    async def event_generator() -> AsyncGenerator[str, None]:
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

        def on_progress(completed: int, total: int) -> None:
            queue.put_nowait(
                {"type": "progress", "completed": completed, "total": total}
            )

        async def run() -> dict[str, Any]:
            try:
                if read_error is not None:
                    session.upload_failed(read_error)
                    raise read_error
                await session.load_documents(builder, documents, on_progress)
            except UPLOAD_ERRORS as e:
                logger.warning("[%s] %s: %s", request_id, type(e).__name__, e)
                return {
                    "type": "error",
                    "code": upload_error_code(e).value,
                    "error": str(e),
                }
            return {"type": "done", "session": snapshot_data(session)}

        task = asyncio.create_task(run())
        while not task.done() or not queue.empty():
            getter = asyncio.ensure_future(queue.get())
            done, _ = await asyncio.wait(
                {getter, task}, return_when=asyncio.FIRST_COMPLETED
            )
            if getter in done:
                yield _event(getter.result())
            else:
                getter.cancel()

        try:
            yield _event(task.result())
        except Exception as e:
            logger.exception("[%s] Upload stream error", request_id)
            yield _event(
                {
                    "type": "error",
                    "code": ResponseCode.INTERNAL_ERROR.value,
                    "error": str(e),
                }
            )

    response = StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Request-ID": request_id or "",
        },
    )
    set_session_cookie(response, request.state.session_id)
    return response
