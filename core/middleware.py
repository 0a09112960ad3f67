"""Request logging and security header middleware"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("dashboard.http")

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' 'unsafe-eval'; "
        "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
        "font-src 'self' https://fonts.gstatic.com; "
        "img-src 'self' data: https:; "
        "connect-src 'self' https://discord.com; "
        "frame-src 'none'; object-src 'none'"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


def install_http_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_and_secure(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)

        if request.url.path.startswith("/api"):
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} in {duration_ms}ms"
            )
        return response
