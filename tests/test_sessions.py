"""
Tests for the session store and cookie signing.

Tests cover:
- Session expiry
- Overwrite on re-login with the same id
- Cookie signature verification
"""
from datetime import UTC, datetime, timedelta

import pytest

from services import AuthService, SessionStore


def _create(store: SessionStore, user_id: str = "1", **kwargs):
    return store.create(
        user_id=user_id, username="u", avatar_hash=None, is_developer=False, **kwargs
    )


class TestSessionStore:
    """Tests for SessionStore."""

    def test_create_and_get(self):
        store = SessionStore(expire_days=7)
        session = _create(store)
        assert store.get(session.session_id) == session
        assert session.expires_at - session.created_at == timedelta(days=7)

    def test_expired_session_is_dropped(self):
        store = SessionStore()
        session = _create(store)
        session.expires_at = datetime.now(UTC) - timedelta(seconds=1)
        assert store.get(session.session_id) is None
        assert len(store) == 0

    def test_same_id_overwrites_whole_record(self):
        store = SessionStore()
        first = store.create(
            user_id="1", username="a", avatar_hash="h", is_developer=True, global_name="A"
        )
        second = _create(store, user_id="2", session_id=first.session_id)
        stored = store.get(first.session_id)
        assert stored == second
        assert stored.avatar_hash is None
        assert stored.global_name is None
        assert stored.is_developer is False

    def test_destroy(self):
        store = SessionStore()
        session = _create(store)
        assert store.destroy(session.session_id) is True
        assert store.destroy(session.session_id) is False
        assert store.get(None) is None


class TestAuthService:
    """Tests for AuthService."""

    def test_round_trip(self):
        auth = AuthService("secret")
        token = auth.create_session_token("sid-1", datetime.now(UTC) + timedelta(days=1))
        assert auth.verify_token(token) == "sid-1"

    def test_wrong_secret_rejected(self):
        token = AuthService("secret").create_session_token(
            "sid-1", datetime.now(UTC) + timedelta(days=1)
        )
        assert AuthService("other").verify_token(token) is None

    def test_expired_cookie_rejected(self):
        auth = AuthService("secret")
        token = auth.create_session_token("sid-1", datetime.now(UTC) - timedelta(seconds=5))
        assert auth.verify_token(token) is None

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            AuthService("")
