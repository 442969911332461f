"""Session handlers."""

from apps.sessions.handlers.change_language import change_language
from apps.sessions.handlers.get_session import get_session_state
from apps.sessions.handlers.get_translations import get_translations

__all__ = [
    "get_session_state",
    "get_translations",
    "change_language",
]
