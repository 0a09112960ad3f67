"""Bot status, credential and identity API routes"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field

from core.dependencies import (
    ServiceContainer,
    get_current_session,
    get_services,
    require_bot_owner,
    require_session,
)
from routers.models import CamelModel
from shared.models import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bot"])


# ============================================
# Response / Request Models
# ============================================


class BotStatsResponse(CamelModel):
    server_count: int
    user_count: int
    uptime: int
    commands_today: int
    messages_processed: int
    active_channels: int


class ChartPointResponse(CamelModel):
    date: str
    commands: int
    messages: int


class BotUserResponse(CamelModel):
    id: str
    username: str
    display_name: str
    avatar: str | None = None
    is_developer: bool


class BotLanguageResponse(CamelModel):
    language: str
    badge: str
    color: str


class BotInfoResponse(CamelModel):
    languages: list[BotLanguageResponse]


class BotTokenUpdate(CamelModel):
    bot_token: str = Field(min_length=50)
    languages: list[str] | None = None


class BotTokenResponse(CamelModel):
    success: bool
    owner_id: str
    is_owner: bool


class BotLanguagesUpdate(CamelModel):
    languages: list[str]


def _bot_info(languages) -> BotInfoResponse:
    return BotInfoResponse(languages=[BotLanguageResponse(**asdict(lang)) for lang in languages])


# ============================================
# Stats
# ============================================


@router.get("/bot/stats", response_model=BotStatsResponse)
async def get_bot_stats(
    services: ServiceContainer = Depends(get_services),
) -> BotStatsResponse:
    """Aggregate bot statistics"""
    try:
        stats = await services.stats.get_stats()
        return BotStatsResponse(**asdict(stats))
    except Exception as e:
        logger.exception(f"Failed to fetch bot stats: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch bot stats") from None


@router.get("/bot/chart", response_model=list[ChartPointResponse])
async def get_bot_chart(
    services: ServiceContainer = Depends(get_services),
) -> list[ChartPointResponse]:
    """Seven-day activity series, oldest first"""
    try:
        return [ChartPointResponse(**asdict(point)) for point in services.stats.get_chart()]
    except Exception as e:
        logger.exception(f"Failed to fetch chart data: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch chart data") from None


# ============================================
# Credential & Languages
# ============================================


@router.post("/bot/token", response_model=BotTokenResponse)
async def update_bot_token(
    body: BotTokenUpdate,
    session: Session = Depends(require_session),
    services: ServiceContainer = Depends(get_services),
) -> BotTokenResponse:
    """Validate a bot token with Discord and establish the bot owner"""
    owner_id = await services.bot.set_bot_token(
        body.bot_token, session, languages=body.languages
    )
    return BotTokenResponse(success=True, owner_id=owner_id, is_owner=owner_id == session.user_id)


@router.get("/bot/languages", response_model=BotInfoResponse)
async def get_bot_languages(
    services: ServiceContainer = Depends(get_services),
) -> BotInfoResponse:
    """Language badges shown on the dashboard"""
    return _bot_info(services.bot.get_languages())


@router.post("/bot/languages", response_model=BotInfoResponse)
async def update_bot_languages(
    body: BotLanguagesUpdate,
    session: Session = Depends(require_bot_owner),
    services: ServiceContainer = Depends(get_services),
) -> BotInfoResponse:
    """Replace the language badges (unknown languages are ignored)"""
    return _bot_info(services.bot.update_languages(body.languages, session))


# ============================================
# Identity
# ============================================


@router.get("/user", response_model=BotUserResponse)
async def get_dashboard_user(
    session: Session | None = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> BotUserResponse:
    """Header identity: logged-in user first, bot identity as fallback"""
    try:
        user = await services.bot.current_user(session)
        return BotUserResponse(**asdict(user))
    except Exception as e:
        logger.exception(f"Failed to fetch user: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch user") from None
