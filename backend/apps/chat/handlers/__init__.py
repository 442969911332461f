"""Chat handlers."""

from apps.chat.handlers.clear_chat import clear_chat
from apps.chat.handlers.send_query import send_query
from apps.chat.handlers.summarize_chat import summarize_chat

__all__ = [
    "send_query",
    "summarize_chat",
    "clear_chat",
]
