"""Error taxonomy and FastAPI exception handlers.

Every handler answers with ``{"error": ...}`` so the dashboard client can
show a single message field.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class DashboardError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DashboardError):
    status_code = 400


class NotFoundError(DashboardError):
    status_code = 404


class AuthError(DashboardError):
    """Authentication or authorization failure.

    ``reason`` is a stable code: unauthenticated, bot_not_configured,
    forbidden, or one of the OAuth callback codes (provider_error, no_code,
    exchange_failed, profile_fetch_failed).
    """

    STATUS_BY_REASON = {
        "unauthenticated": 401,
        "bot_not_configured": 403,
        "forbidden": 403,
    }

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason
        self.status_code = self.STATUS_BY_REASON.get(reason, 401)


class UpstreamUnavailable(DashboardError):
    """Discord could not be reached or rejected the request.

    Read paths never let this escape; the credential path reports it as 400.
    """

    status_code = 400


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    body: dict = {"error": exc.message}
    if isinstance(exc, AuthError):
        body["reason"] = exc.reason
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_errors(exc)},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, dashboard_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
