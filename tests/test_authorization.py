"""
Tests for the ownership gate.

Tests cover:
- authorize() decision table
- 401 / 403 responses on every mutating endpoint
- Reads stay public
"""
from datetime import UTC, datetime, timedelta

import pytest

from services.authorization import CAPABILITY_SESSION, authorize
from shared.models import Session
from tests.conftest import OTHER_USER_ID, OWNER_ID, login, set_owner

MUTATIONS = [
    ("post", "/api/commands", {"name": "poll", "description": "d", "category": "Utilidade"}),
    ("patch", "/api/commands/1", {"enabled": False}),
    ("delete", "/api/commands/1", None),
    ("put", "/api/settings", {"prefix": "?"}),
    ("post", "/api/bot/languages", {"languages": ["python"]}),
]


def _session(user_id: str) -> Session:
    now = datetime.now(UTC)
    return Session(
        session_id="sid",
        user_id=user_id,
        username="u",
        avatar_hash=None,
        is_developer=False,
        created_at=now,
        expires_at=now + timedelta(days=7),
    )


def _call(client, method, path, body):
    if body is None:
        return getattr(client, method)(path)
    return getattr(client, method)(path, json=body)


class TestAuthorize:
    """Tests for authorize()."""

    def test_no_session_is_unauthenticated(self):
        assert authorize(None, OWNER_ID).reason == "unauthenticated"

    def test_unset_owner_is_bot_not_configured(self):
        assert authorize(_session(OWNER_ID), None).reason == "bot_not_configured"

    def test_other_user_is_forbidden(self):
        assert authorize(_session(OTHER_USER_ID), OWNER_ID).reason == "forbidden"

    def test_owner_is_allowed(self):
        assert authorize(_session(OWNER_ID), OWNER_ID).allowed

    def test_session_capability_ignores_owner(self):
        assert authorize(_session(OTHER_USER_ID), None, CAPABILITY_SESSION).allowed


class TestMutatingEndpoints:
    """HTTP-level enforcement."""

    @pytest.mark.parametrize("method,path,body", MUTATIONS)
    def test_no_session_returns_401(self, client, store, method, path, body):
        set_owner(store)
        response = _call(client, method, path, body)
        assert response.status_code == 401
        assert response.json()["reason"] == "unauthenticated"

    @pytest.mark.parametrize("method,path,body", MUTATIONS)
    def test_non_owner_returns_403(self, client, store, fake_discord, method, path, body):
        set_owner(store)
        login(client, fake_discord, user_id=OTHER_USER_ID)
        response = _call(client, method, path, body)
        assert response.status_code == 403
        assert response.json()["reason"] == "forbidden"

    @pytest.mark.parametrize("method,path,body", MUTATIONS)
    def test_unset_owner_returns_403_even_for_logged_in_user(
        self, client, fake_discord, method, path, body
    ):
        login(client, fake_discord, user_id=OWNER_ID)
        response = _call(client, method, path, body)
        assert response.status_code == 403
        assert response.json()["reason"] == "bot_not_configured"

    def test_owner_passes_gate(self, client, store, fake_discord):
        set_owner(store)
        login(client, fake_discord, user_id=OWNER_ID)
        response = client.put("/api/settings", json={"prefix": "?"})
        assert response.status_code == 200

    @pytest.mark.parametrize(
        "path", ["/api/commands", "/api/settings", "/api/logs", "/api/servers", "/api/bot/stats"]
    )
    def test_reads_need_no_session(self, client, path):
        assert client.get(path).status_code == 200
