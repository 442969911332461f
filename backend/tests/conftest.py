"""Pytest configuration and fixtures for Legal Remedy Agent tests."""

import os
import sys

# Set required env vars BEFORE any imports that might trigger Settings
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("RATE_LIMIT_BURST", "10000")
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "10000")
os.environ.setdefault("RATE_LIMIT_PER_HOUR", "100000")

from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


LEASE_NAME = "lease.txt"
LEASE_TEXT = "Clause 4: tenant may terminate with 30 days notice."


@pytest.fixture
def mock_settings():
    """Mock application settings."""
    settings = MagicMock()
    settings.anthropic_api_key = "test-anthropic-key"
    settings.environment = "test"
    settings.debug = True
    settings.default_language = "en"
    settings.max_file_size_mb = 1
    settings.max_file_size_bytes = 1024 * 1024
    settings.max_files_per_upload = 20
    settings.llm_model = "claude-sonnet-4-20250514"
    settings.llm_temperature = 0.2
    settings.llm_max_tokens = 2048
    settings.summary_temperature = 0.3
    settings.summary_max_tokens = 400
    settings.llm_timeout_seconds = 60.0
    settings.llm_connect_timeout_seconds = 10.0
    settings.session_ttl_hours = 24
    return settings


@pytest.fixture
def mock_gateway():
    """Mock model gateway that answers and summarizes successfully."""
    gateway = AsyncMock()
    gateway.answer.return_value = "You may terminate with 30 days notice."
    gateway.summarize.return_value = "The user asked about early termination."
    return gateway


@pytest.fixture
def session():
    """Fresh English session."""
    from services.session import Session

    return Session(language="en")


@pytest.fixture
def lease_context():
    """Built context for the single lease document."""
    from services.context_builder import BuiltContext, format_document

    return BuiltContext(
        text=format_document(LEASE_NAME, LEASE_TEXT), file_names=[LEASE_NAME]
    )


@pytest.fixture
def loaded_session(session, lease_context):
    """Session with the lease document loaded."""
    session.upload_completed(lease_context)
    return session
