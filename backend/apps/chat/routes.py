"""Chat routes - registers all chat endpoints."""

from fastapi import APIRouter

from apps.chat.handlers import clear_chat, send_query, summarize_chat

router = APIRouter(prefix="/chat", tags=["Chat"])

# POST /chat - Ask a question
router.post("")(send_query)

# POST /chat/summarize - Summarize the conversation
router.post("/summarize")(summarize_chat)

# POST /chat/clear - Clear the chat (after confirmation)
router.post("/clear")(clear_chat)
