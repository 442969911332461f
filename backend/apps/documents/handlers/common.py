"""Helpers shared by the upload handlers."""

import logging

from fastapi import UploadFile

from responses import ResponseCode
from services.context_builder import FileTooLargeError, ReadError, SourceDocument

logger = logging.getLogger(__name__)

# --- Error mapping ---

UPLOAD_ERROR_MAP = {
    FileTooLargeError: ResponseCode.FILE_TOO_LARGE,
    ReadError: ResponseCode.READ_ERROR,
    ValueError: ResponseCode.VALIDATION_ERROR,
}

UPLOAD_ERRORS = tuple(UPLOAD_ERROR_MAP.keys())


def upload_error_code(error: Exception) -> ResponseCode:
    """Most specific response code for an upload failure."""
    for error_type, code in UPLOAD_ERROR_MAP.items():
        if isinstance(error, error_type):
            return code
    return ResponseCode.INTERNAL_ERROR


async def read_uploads(files: list[UploadFile]) -> list[SourceDocument]:
    """Read every uploaded file into memory, in upload order.

    Raises:
        ReadError: If a file cannot be read from the request.
    """
    documents = []
    for file in files:
        name = file.filename or "document"
        try:
            content = await file.read()
        except Exception as e:
            logger.warning("Failed to read upload %s: %s", name, e)
            raise ReadError(name, str(e)) from e
        finally:
            await file.close()
        documents.append(SourceDocument(name=name, content=content))
    return documents
