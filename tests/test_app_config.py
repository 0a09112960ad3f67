"""
Tests for configuration, startup checks and rate limiting.

Tests cover:
- Production session secret enforcement
- Sliding window limiter
- Auth endpoint limit counting only failed requests
- Client address taken from the proxy-appended X-Forwarded-For entry
- Failed OAuth callbacks counted against the auth limit
- Security headers
"""
import logging

import pytest
from fastapi.testclient import TestClient
from rich.logging import RichHandler

from app import create_app
from core.config import DEFAULT_SESSION_SECRET
from core.dependencies import build_services
from core.logging import setup_logging
from core.rate_limit import SlidingWindowLimiter
from tests.conftest import login, make_settings


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestProductionSafety:
    """Tests for Settings.ensure_production_safe."""

    def test_default_secret_aborts_in_production(self):
        settings = make_settings(environment="production", session_secret=DEFAULT_SESSION_SECRET)
        with pytest.raises(RuntimeError):
            create_app(settings)

    def test_custom_secret_allowed_in_production(self):
        make_settings(environment="production", session_secret="long-random").ensure_production_safe()

    def test_default_secret_allowed_in_development(self):
        make_settings(environment="development", session_secret=DEFAULT_SESSION_SECRET).ensure_production_safe()

    def test_log_level_normalised(self):
        assert make_settings(log_level="debug").log_level == "DEBUG"
        assert make_settings(log_level="nonsense").log_level == "INFO"


class TestSlidingWindowLimiter:
    """Tests for SlidingWindowLimiter."""

    def test_limits_after_threshold_and_recovers(self):
        clock = FakeClock()
        limiter = SlidingWindowLimiter(limit=2, window=60, clock=clock)
        limiter.hit("ip")
        limiter.hit("ip")
        assert limiter.is_limited("ip")
        assert not limiter.is_limited("other")

        clock.now = 61
        assert not limiter.is_limited("ip")


class TestRateLimitMiddleware:
    """HTTP-level rate limiting."""

    def test_failed_auth_requests_are_limited(self, store, bot_client):
        settings = make_settings(discord_client_id="", discord_client_secret="", rate_limit_auth=3)
        services = build_services(settings, store=store, bot_client=bot_client)
        with TestClient(create_app(settings, services)) as client:
            statuses = [
                client.get("/api/auth/discord", follow_redirects=False).status_code
                for _ in range(4)
            ]
        assert statuses == [503, 503, 503, 429]

    def test_successful_auth_requests_not_counted(self, store, discord_api, bot_client, fake_discord):
        settings = make_settings(rate_limit_auth=2)
        services = build_services(settings, store=store, discord_api=discord_api, bot_client=bot_client)
        with TestClient(create_app(settings, services)) as client:
            for _ in range(4):
                login(client, fake_discord)

    def test_general_limit(self, store, bot_client):
        settings = make_settings(rate_limit_general=3)
        services = build_services(settings, store=store, bot_client=bot_client)
        with TestClient(create_app(settings, services)) as client:
            statuses = [client.get("/api/settings").status_code for _ in range(4)]
            assert client.get("/health").status_code == 200
        assert statuses == [200, 200, 200, 429]

    def test_failed_callbacks_are_limited(self, store, discord_api, bot_client, fake_discord):
        fake_discord.token_status = 400
        settings = make_settings(rate_limit_auth=3)
        services = build_services(settings, store=store, discord_api=discord_api, bot_client=bot_client)
        with TestClient(create_app(settings, services)) as client:
            responses = [
                client.get("/api/auth/callback", params={"code": "bad"}, follow_redirects=False)
                for _ in range(4)
            ]
        assert [r.status_code for r in responses] == [302, 302, 302, 429]
        assert responses[0].headers["location"] == "/login?error=exchange_failed"

    def test_client_supplied_forwarded_for_is_ignored(self, store, bot_client):
        settings = make_settings(rate_limit_general=3)
        services = build_services(settings, store=store, bot_client=bot_client)
        with TestClient(create_app(settings, services)) as client:
            statuses = [
                client.get(
                    "/api/settings",
                    headers={"x-forwarded-for": f"10.0.0.{i}, 203.0.113.7"},
                ).status_code
                for i in range(5)
            ]
        assert statuses == [200, 200, 200, 429, 429]

    def test_forwarded_for_from_proxy_separates_clients(self, store, bot_client):
        settings = make_settings(rate_limit_general=1)
        services = build_services(settings, store=store, bot_client=bot_client)
        with TestClient(create_app(settings, services)) as client:
            first = client.get("/api/settings", headers={"x-forwarded-for": "203.0.113.7"})
            second = client.get("/api/settings", headers={"x-forwarded-for": "203.0.113.8"})
        assert (first.status_code, second.status_code) == (200, 200)


class TestSecurityHeaders:
    def test_headers_present(self, client):
        response = client.get("/api/settings")
        assert response.headers["x-content-type-options"] == "nosniff"
        assert "default-src 'self'" in response.headers["content-security-policy"]


class TestLoggingSetup:
    def test_single_rich_handler_at_configured_level(self):
        setup_logging(make_settings(log_level="warning"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert [type(h) for h in root.handlers] == [RichHandler]
        assert logging.getLogger("httpx").level == logging.WARNING
