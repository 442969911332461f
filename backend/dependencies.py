"""FastAPI dependency injection for services.

Services are cached with @lru_cache() to avoid recreation per request.
"""

from functools import lru_cache

from fastapi import Depends

from apps.sessions.helpers import get_or_create_session
from llm import BaseLLMService, LLMService
from services.context_builder import ContextBuilder
from services.gateway import ModelGateway
from services.session import Session
from services.session_store import SessionStore

# --- Cached Singletons ---
# These are created once and reused across all requests


@lru_cache
def get_llm_service() -> BaseLLMService:
    """Get cached LLM service (expensive - has API client)."""
    return LLMService()


@lru_cache
def get_session_store() -> SessionStore:
    """Get the process-wide in-memory session store."""
    return SessionStore()


# --- Lightweight Services (per-request is fine) ---


def get_context_builder() -> ContextBuilder:
    """Get context builder (stateless, cheap to create)."""
    return ContextBuilder()


# --- Composed Services ---
# Use Depends() for proper FastAPI DI chaining


def get_model_gateway(
    llm: BaseLLMService = Depends(get_llm_service),
) -> ModelGateway:
    """Get model gateway over the cached LLM service."""
    return ModelGateway(llm)


def get_session(
    session_id: str = Depends(get_or_create_session),
    store: SessionStore = Depends(get_session_store),
) -> Session:
    """Get the chat session bound to the request's session cookie."""
    return store.get_or_create(session_id)
