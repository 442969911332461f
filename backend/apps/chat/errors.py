"""Mapping of rejected session events to API responses."""

import logging

from fastapi.responses import JSONResponse

from llm.prompts import InvalidInputError
from responses import ResponseCode, error_response
from services.session import (
    NoContextError,
    NothingToSummarizeError,
    SessionBusyError,
    SessionStateError,
)

logger = logging.getLogger(__name__)

REJECTION_ERROR_MAP = {
    InvalidInputError: ResponseCode.INVALID_INPUT,
    NoContextError: ResponseCode.NO_CONTEXT,
    SessionBusyError: ResponseCode.SESSION_BUSY,
    NothingToSummarizeError: ResponseCode.NOTHING_TO_SUMMARIZE,
}

REJECTIONS = (InvalidInputError, SessionStateError)


def rejection_response(
    error: InvalidInputError | SessionStateError,
    request_id: str | None,
) -> JSONResponse:
    """Build the error response for an event the session refused."""
    code = REJECTION_ERROR_MAP.get(type(error), ResponseCode.VALIDATION_ERROR)
    logger.info("[%s] Rejected: %s", request_id, error)
    return error_response(code, str(error), request_id)
