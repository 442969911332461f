"""Tests for the in-memory session store."""

from services.session import SessionStatus
from services.session_store import SessionStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestSessionStore:
    """Tests for SessionStore."""

    def setup_method(self):
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.store = SessionStore(
            default_language="en", ttl_seconds=60, clock=self.clock
        )

    def test_get_or_create_reuses_session(self):
        """Test the same id returns the same session."""
        first = self.store.get_or_create("abc")
        assert self.store.get_or_create("abc") is first
        assert len(self.store) == 1
        assert "abc" in self.store

    def test_sessions_are_isolated(self):
        """Test different ids get independent sessions."""
        a = self.store.get_or_create("a")
        b = self.store.get_or_create("b")

        a.change_language("es")

        assert a is not b
        assert b.language == "en"

    def test_default_language(self):
        """Test new sessions use the configured language."""
        store = SessionStore(default_language="fr", ttl_seconds=60)
        assert store.get_or_create("x").language == "fr"

    def test_drop(self):
        """Test dropping forgets the session."""
        self.store.get_or_create("abc")

        assert self.store.drop("abc")
        assert not self.store.drop("abc")
        assert "abc" not in self.store

    def test_idle_sessions_expire(self):
        """Test sessions unused past the TTL are evicted."""
        old = self.store.get_or_create("old")
        self.clock.now += 61

        self.store.get_or_create("new")

        assert "old" not in self.store
        assert self.store.get_or_create("old") is not old

    def test_access_refreshes_ttl(self):
        """Test using a session keeps it alive."""
        self.store.get_or_create("kept")
        self.clock.now += 40
        self.store.get_or_create("kept")
        self.clock.now += 40

        self.store.get_or_create("other")

        assert "kept" in self.store

    def test_busy_sessions_not_evicted(self):
        """Test a session waiting on the model is never evicted."""
        session = self.store.get_or_create("busy")
        session.status = SessionStatus.ANSWERING
        self.clock.now += 120

        self.store.get_or_create("other")

        assert "busy" in self.store
