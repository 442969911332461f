"""Document routes - registers all document endpoints."""

from fastapi import APIRouter

from apps.documents.handlers import list_documents, stream_upload, upload_documents
from apps.documents.handlers.list_documents import DocumentListResponse

router = APIRouter(prefix="/documents", tags=["Documents"])

# POST /documents/upload - Upload documents and build context
router.post("/upload")(upload_documents)

# POST /documents/upload/stream - Same, with SSE progress
router.post("/upload/stream")(stream_upload)

# GET /documents - List loaded documents
router.get("", response_model=DocumentListResponse)(list_documents)
