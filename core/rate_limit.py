"""Per-IP sliding window rate limiting for the /api surface."""

import logging
import time
from collections import deque
from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.config import Settings

logger = logging.getLogger(__name__)

AUTH_PATHS = frozenset({"/api/auth/discord", "/api/auth/login", "/api/auth/callback"})


class SlidingWindowLimiter:
    """Counts hits per key inside a rolling window of ``window`` seconds."""

    def __init__(self, limit: int, window: float, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}

    def _prune(self, key: str) -> deque[float]:
        hits = self._hits.setdefault(key, deque())
        cutoff = self._clock() - self.window
        while hits and hits[0] <= cutoff:
            hits.popleft()
        return hits

    def is_limited(self, key: str) -> bool:
        return len(self._prune(key)) >= self.limit

    def hit(self, key: str) -> None:
        self._prune(key).append(self._clock())

    def reset(self) -> None:
        self._hits.clear()


def client_ip(request: Request) -> str:
    """Address appended by the single trusted proxy, else the socket peer.

    Earlier X-Forwarded-For entries come from the client and are ignored.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[-1].strip()
    return request.client.host if request.client else "unknown"


def install_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Register the general and auth limiters as HTTP middleware."""
    general = SlidingWindowLimiter(settings.rate_limit_general, settings.rate_limit_window_seconds)
    auth = SlidingWindowLimiter(settings.rate_limit_auth, settings.rate_limit_window_seconds)
    app.state.rate_limiters = {"general": general, "auth": auth}

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        path = request.url.path
        if not path.startswith("/api/"):
            return await call_next(request)

        ip = client_ip(request)
        if general.is_limited(ip):
            logger.warning(f"Rate limit exceeded for {ip} on {path}")
            return JSONResponse(
                status_code=429,
                content={"error": "Muitas requisições, tente novamente mais tarde"},
            )
        general.hit(ip)

        if path not in AUTH_PATHS:
            return await call_next(request)

        if auth.is_limited(ip):
            logger.warning(f"Auth rate limit exceeded for {ip}")
            return JSONResponse(
                status_code=429,
                content={"error": "Muitas tentativas de login, tente novamente mais tarde"},
            )
        response = await call_next(request)
        # successful requests do not count against the auth budget;
        # failed OAuth callbacks redirect, so they flag request.state instead
        if response.status_code >= 400 or getattr(request.state, "auth_failed", False):
            auth.hit(ip)
        return response
