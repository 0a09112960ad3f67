"""Authentication API routes"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse

from core.dependencies import (
    ServiceContainer,
    get_current_session,
    get_services,
    get_session_id,
    require_session,
)
from core.errors import AuthError
from routers.bot_router import BotUserResponse
from services.discord_api import get_avatar_url
from shared.models import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])

LOGIN_PAGE = "/login"
DASHBOARD_PAGE = "/"


# ============================================
# Helpers
# ============================================


def callback_url(request: Request) -> str:
    """OAuth redirect URI for the host/scheme the browser actually used.

    Must match the URL registered with Discord exactly. Forwarded headers
    from the single trusted proxy take precedence.
    """
    scheme = request.headers.get("x-forwarded-proto", request.url.scheme).split(",")[0].strip()
    host = request.headers.get("x-forwarded-host") or request.headers.get("host") or request.url.netloc
    return f"{scheme}://{host.split(',')[0].strip()}/api/auth/callback"


def _login_error_redirect(reason: str) -> RedirectResponse:
    return RedirectResponse(url=f"{LOGIN_PAGE}?error={quote(reason, safe='')}", status_code=302)


# ============================================
# Endpoints
# ============================================


async def start_login(request: Request, services: ServiceContainer = Depends(get_services)):
    """Redirect the browser to Discord's consent screen"""
    if not services.discord_api.is_configured:
        raise HTTPException(status_code=503, detail="Discord OAuth is not configured")
    return RedirectResponse(url=services.login.login_url(callback_url(request)), status_code=302)


router.add_api_route("/discord", start_login, methods=["GET"], include_in_schema=True)
router.add_api_route("/login", start_login, methods=["GET"], include_in_schema=False)


@router.get("/callback")
async def oauth_callback(
    request: Request,
    code: str | None = None,
    error: str | None = None,
    services: ServiceContainer = Depends(get_services),
):
    """Handle Discord OAuth callback"""
    existing_session_id = get_session_id(request)
    if existing_session_id and services.sessions.get(existing_session_id) is None:
        existing_session_id = None

    try:
        session = await services.login.handle_callback(
            code,
            error,
            callback_url(request),
            existing_session_id=existing_session_id,
        )
    except AuthError as e:
        request.state.auth_failed = True
        return _login_error_redirect(e.reason)

    settings = services.settings
    response = RedirectResponse(url=DASHBOARD_PAGE, status_code=302)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=services.auth.create_session_token(session.session_id, session.expires_at),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.session_expire_days * 24 * 60 * 60,
    )
    return response


@router.get("/me", response_model=BotUserResponse)
async def get_me(session: Session = Depends(require_session)) -> BotUserResponse:
    """Current session user (401 when not logged in)"""
    return BotUserResponse(
        id=session.user_id,
        username=session.username,
        display_name=session.global_name or session.username,
        avatar=get_avatar_url(session.user_id, session.avatar_hash),
        is_developer=session.is_developer,
    )


@router.get("/logout")
async def logout(
    request: Request,
    session: Session | None = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    """Destroy the session and clear the cookie"""
    if session is not None:
        services.login.logout(session.session_id)
        logger.info(f"User logged out: {session.username} ({session.user_id})")

    response = JSONResponse(content={"success": True})
    response.delete_cookie(
        key=services.settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=services.settings.is_production,
        samesite="lax",
    )
    return response
