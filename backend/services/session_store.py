"""In-memory store of chat sessions keyed by browser session id.

Sessions live only in process memory; idle sessions are dropped after
``session_ttl_hours``.
"""

import logging
import time
from collections.abc import Callable

from config import get_settings
from services.session import Session, SessionStatus

logger = logging.getLogger(__name__)


class SessionStore:
    """Maps a session id (cookie value) to its live ``Session``."""

    def __init__(
        self,
        default_language: str | None = None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        settings = get_settings()
        self.default_language = default_language or settings.default_language
        self.ttl_seconds = (
            ttl_seconds
            if ttl_seconds is not None
            else settings.session_ttl_hours * 3600
        )
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._last_seen: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get_or_create(self, session_id: str) -> Session:
        """Return the session for ``session_id``, creating it on first use."""
        now = self._clock()
        self._evict_expired(now)

        session = self._sessions.get(session_id)
        if session is None:
            session = Session(language=self.default_language)
            self._sessions[session_id] = session
            logger.info("Created session %s", session_id[:8])

        self._last_seen[session_id] = now
        return session

    def drop(self, session_id: str) -> bool:
        """Forget a session. Returns True if it existed."""
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None) is not None

    def _evict_expired(self, now: float) -> None:
        expired = [
            sid
            for sid, seen in self._last_seen.items()
            if now - seen > self.ttl_seconds
            and self._sessions[sid].status is SessionStatus.IDLE
        ]
        for sid in expired:
            self.drop(sid)
        if expired:
            logger.info("Evicted %d idle session(s)", len(expired))
