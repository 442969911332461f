"""Services module for the chat session's business logic.

Contains:
- Context building from uploaded documents
- Model gateway over the LLM provider
- Session state machine and in-memory session store
- Per-locale UI strings

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from services.context_builder import (
    BuiltContext,
    ContextBuilder,
    FileTooLargeError,
    ReadError,
    SourceDocument,
)
from services.gateway import GatewayError, ModelGateway
from services.session import (
    Message,
    NoContextError,
    NothingToSummarizeError,
    Role,
    Session,
    SessionBusyError,
    SessionStateError,
    SessionStatus,
)
from services.session_store import SessionStore
from services.translations import (
    TRANSLATIONS,
    Translations,
    UnsupportedLanguageError,
    get_translations,
    validate_translations,
)

__all__ = [
    # Context building
    "BuiltContext",
    "ContextBuilder",
    "FileTooLargeError",
    "ReadError",
    "SourceDocument",
    # Model gateway
    "GatewayError",
    "ModelGateway",
    # Session
    "Message",
    "NoContextError",
    "NothingToSummarizeError",
    "Role",
    "Session",
    "SessionBusyError",
    "SessionStateError",
    "SessionStatus",
    "SessionStore",
    # Translations
    "TRANSLATIONS",
    "Translations",
    "UnsupportedLanguageError",
    "get_translations",
    "validate_translations",
]
