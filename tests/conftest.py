"""
Pytest fixtures for dashboard API tests.

Provides a fake Discord REST backend (httpx.MockTransport), settings that
never read a local .env, a service container around a fresh store, and a
TestClient with helpers to log a user in.
"""
from urllib.parse import unquote

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Settings
from core.dependencies import build_services
from services import DiscordAPIClient, DiscordBotClient
from services.bot_client import DISCORD_API_URL
from shared.repositories import BotConfigRepository
from shared.store import MemoryStore

OWNER_ID = "111111111111111111"
OTHER_USER_ID = "222222222222222222"
VALID_TOKEN = "v" * 60
OTHER_VALID_TOKEN = "w" * 60


class FakeDiscord:
    """In-memory stand-in for the Discord HTTP API.

    ``guilds``/``commands``/``bot_user`` set to None make the matching
    endpoint answer 503, which the services treat as unreachable.
    """

    def __init__(self):
        self.applications = {
            VALID_TOKEN: {"id": "app1", "name": "Orbital", "owner": {"id": OWNER_ID}},
            OTHER_VALID_TOKEN: {"id": "app2", "name": "Other", "owner": {"id": OTHER_USER_ID}},
        }
        self.guilds = None
        self.commands = None
        self.bot_user = None
        self.token_status = 200
        self.profile_status = 200
        # raw bodies served with a 200 in place of the JSON payloads
        self.token_raw: str | None = None
        self.profile_raw: str | None = None
        self.profile = {
            "id": OWNER_ID,
            "username": "owner",
            "global_name": "The Owner",
            "avatar": "abc123",
            "public_flags": 0,
        }
        self.requests: list[httpx.Request] = []

    def use_profile(self, user_id: str, username: str = "someone", flags: int = 0):
        self.profile = {
            "id": user_id,
            "username": username,
            "global_name": None,
            "avatar": None,
            "public_flags": flags,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = unquote(request.url.path)
        auth = request.headers.get("authorization", "")

        if path.endswith("/oauth2/token"):
            if self.token_raw is not None:
                return httpx.Response(200, text=self.token_raw)
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "user-access", "token_type": "Bearer"})

        if auth.startswith("Bearer "):
            if self.profile_raw is not None:
                return httpx.Response(200, text=self.profile_raw)
            if path.endswith("/users/@me") and self.profile_status == 200:
                return httpx.Response(200, json=self.profile)
            return httpx.Response(self.profile_status or 401, json={"message": "401: Unauthorized"})

        token = auth.removeprefix("Bot ")
        application = self.applications.get(token)
        if application is None:
            return httpx.Response(401, json={"message": "401: Unauthorized"})

        if path.endswith("/applications/@me"):
            return httpx.Response(200, json=application)
        if path.endswith("/users/@me/guilds"):
            if self.guilds is None:
                return httpx.Response(503, json={"message": "unavailable"})
            return httpx.Response(200, json=self.guilds)
        if path.endswith(f"/applications/{application['id']}/commands"):
            if self.commands is None:
                return httpx.Response(503, json={"message": "unavailable"})
            return httpx.Response(200, json=self.commands)
        if path.endswith("/users/@me"):
            if self.bot_user is None:
                return httpx.Response(503, json={"message": "unavailable"})
            return httpx.Response(200, json=self.bot_user)
        return httpx.Response(404, json={"message": "Unknown"})


def make_settings(**overrides) -> Settings:
    values = {
        "discord_client_id": "client-id",
        "discord_client_secret": "client-secret",
        "session_secret": "test-session-secret",
        "environment": "test",
        "seed_demo_data": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def fake_discord():
    return FakeDiscord()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def bot_client(fake_discord):
    transport = httpx.MockTransport(fake_discord.handler)
    return DiscordBotClient(http=httpx.AsyncClient(transport=transport, base_url=DISCORD_API_URL))


@pytest.fixture
def discord_api(fake_discord):
    transport = httpx.MockTransport(fake_discord.handler)
    return DiscordAPIClient(
        client_id="client-id",
        client_secret="client-secret",
        http=httpx.AsyncClient(transport=transport),
    )


@pytest.fixture
def services(settings, store, discord_api, bot_client):
    return build_services(settings, store=store, discord_api=discord_api, bot_client=bot_client)


@pytest.fixture
def client(settings, services):
    app = create_app(settings, services)
    with TestClient(app) as test_client:
        yield test_client


def set_owner(store: MemoryStore, owner_id: str = OWNER_ID, token: str = VALID_TOKEN) -> None:
    """Establish ownership directly, as a validated token would."""
    BotConfigRepository(store).set_credential(token, owner_id)


def login(client: TestClient, fake_discord: FakeDiscord, user_id: str = OWNER_ID, flags: int = 0):
    """Run the OAuth callback for ``user_id``; the session cookie lands in the client jar."""
    fake_discord.use_profile(user_id, username=f"user-{user_id[:4]}", flags=flags)
    response = client.get("/api/auth/callback", params={"code": "auth-code"}, follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/"
    return response
