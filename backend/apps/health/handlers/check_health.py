"""GET /health - Check health of the service."""

from datetime import UTC, datetime

from fastapi import Depends
from pydantic import BaseModel, Field

from config import APP_CONFIG, get_settings
from dependencies import get_session_store
from services.session_store import SessionStore
from services.translations import supported_languages

# --- Response Schemas ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status: healthy or unhealthy")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    llm_model: str = Field(..., description="Configured Claude model")
    active_sessions: int = Field(..., description="Sessions held in memory")
    languages: list[str] = Field(..., description="Supported UI languages")
    timestamp: datetime


# --- Handler ---


async def check_health(
    store: SessionStore = Depends(get_session_store),
) -> HealthResponse:
    """Report service status and configuration."""
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=APP_CONFIG["version"],
        environment=settings.environment,
        llm_model=settings.llm_model,
        active_sessions=len(store),
        languages=supported_languages(),
        timestamp=datetime.now(UTC),
    )
