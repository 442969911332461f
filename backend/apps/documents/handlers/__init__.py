"""Document handlers."""

from apps.documents.handlers.list_documents import list_documents
from apps.documents.handlers.stream_upload import stream_upload
from apps.documents.handlers.upload_documents import upload_documents

__all__ = [
    "upload_documents",
    "stream_upload",
    "list_documents",
]
