"""Standardized response infrastructure for API endpoints.

Provides consistent response format with structured codes and messages.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from fastapi.responses import JSONResponse


class ResponseCode(str, Enum):
    """Response codes for API responses.

    Ranges: 0xxx=Success, 1xxx=Client Error, 2xxx=Server Error, 3xxx=External Service
    """

    # Success codes
    SUCCESS = "0000"
    CONTEXT_LOADED = "0001"
    ANSWERED = "0002"
    SUMMARIZED = "0003"
    CHAT_CLEARED = "0004"
    LANGUAGE_CHANGED = "0005"

    # Client errors
    VALIDATION_ERROR = "1000"
    READ_ERROR = "1001"
    FILE_TOO_LARGE = "1002"
    INVALID_INPUT = "1003"
    NO_CONTEXT = "1004"
    SESSION_BUSY = "1005"
    NOTHING_TO_SUMMARIZE = "1006"
    UNSUPPORTED_LANGUAGE = "1007"
    NOT_FOUND = "1008"

    # Server errors
    INTERNAL_ERROR = "2000"

    # External service errors
    LLM_RATE_LIMIT = "3001"


# Response messages mapped to codes
RESPONSE_MESSAGES: dict[ResponseCode, str] = {
    ResponseCode.SUCCESS: "Operation completed successfully",
    ResponseCode.CONTEXT_LOADED: "Documents loaded into context",
    ResponseCode.ANSWERED: "Question processed",
    ResponseCode.SUMMARIZED: "Conversation summary processed",
    ResponseCode.CHAT_CLEARED: "Chat cleared",
    ResponseCode.LANGUAGE_CHANGED: "Language changed",
    ResponseCode.VALIDATION_ERROR: "Request validation failed",
    ResponseCode.READ_ERROR: "A document could not be read as text",
    ResponseCode.FILE_TOO_LARGE: "File exceeds maximum allowed size",
    ResponseCode.INVALID_INPUT: "Input must not be empty",
    ResponseCode.NO_CONTEXT: "Please upload documents first",
    ResponseCode.SESSION_BUSY: "A request is already in progress",
    ResponseCode.NOTHING_TO_SUMMARIZE: "Not enough conversation to summarize",
    ResponseCode.UNSUPPORTED_LANGUAGE: "Unsupported language",
    ResponseCode.NOT_FOUND: "Not found",
    ResponseCode.INTERNAL_ERROR: "An internal error occurred",
    ResponseCode.LLM_RATE_LIMIT: "Rate limit exceeded. Please wait and retry",
}

# HTTP status codes for each response code
HTTP_STATUS_MAP: dict[ResponseCode, int] = {
    ResponseCode.SUCCESS: 200,
    ResponseCode.CONTEXT_LOADED: 200,
    ResponseCode.ANSWERED: 200,
    ResponseCode.SUMMARIZED: 200,
    ResponseCode.CHAT_CLEARED: 200,
    ResponseCode.LANGUAGE_CHANGED: 200,
    ResponseCode.VALIDATION_ERROR: 422,
    ResponseCode.READ_ERROR: 400,
    ResponseCode.FILE_TOO_LARGE: 413,
    ResponseCode.INVALID_INPUT: 400,
    ResponseCode.NO_CONTEXT: 409,
    ResponseCode.SESSION_BUSY: 409,
    ResponseCode.NOTHING_TO_SUMMARIZE: 409,
    ResponseCode.UNSUPPORTED_LANGUAGE: 400,
    ResponseCode.NOT_FOUND: 404,
    ResponseCode.INTERNAL_ERROR: 500,
    ResponseCode.LLM_RATE_LIMIT: 429,
}


def get_message(code: ResponseCode) -> str:
    """Get the message for a response code."""
    return RESPONSE_MESSAGES.get(code, "Unknown error")


def get_http_status(code: ResponseCode) -> int:
    """Get HTTP status code for a response code."""
    return HTTP_STATUS_MAP.get(code, 500)


def success_dict(
    code: ResponseCode,
    data: Any = None,
    custom_message: str | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build a standardized success response dictionary."""
    return {
        "code": code.value,
        "success": True,
        "message": custom_message or get_message(code),
        "timestamp": datetime.now(UTC).isoformat(),
        "request_id": request_id,
        "data": data,
    }


def error_dict(
    code: ResponseCode,
    custom_message: str | None = None,
    error_details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build a standardized error response dictionary."""
    return {
        "code": code.value,
        "success": False,
        "message": custom_message or get_message(code),
        "timestamp": datetime.now(UTC).isoformat(),
        "request_id": request_id,
        "error_details": error_details,
    }


# --- JSONResponse helpers ---


def success_response(
    code: ResponseCode,
    data: Any = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Create a JSONResponse with success format."""
    return JSONResponse(
        content=success_dict(code, data, request_id=request_id),
        status_code=get_http_status(code),
    )


def error_response(
    code: ResponseCode,
    custom_message: str | None = None,
    request_id: str | None = None,
    error_details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a JSONResponse with error format."""
    return JSONResponse(
        content=error_dict(code, custom_message, error_details, request_id),
        status_code=get_http_status(code),
    )
