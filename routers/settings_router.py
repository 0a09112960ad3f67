"""Bot settings API routes"""

import logging
from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException

from core.dependencies import ServiceContainer, get_services, require_bot_owner
from routers.models import CamelModel
from shared.models import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])

BotStatus = Literal["online", "idle", "dnd", "invisible"]
ActivityType = Literal["playing", "watching", "listening", "competing"]


class SettingsResponse(CamelModel):
    prefix: str
    status: BotStatus
    activity: str
    activity_type: ActivityType
    auto_response: bool
    logging_enabled: bool
    moderation_enabled: bool


class SettingsUpdate(CamelModel):
    prefix: str | None = None
    status: BotStatus | None = None
    activity: str | None = None
    activity_type: ActivityType | None = None
    auto_response: bool | None = None
    logging_enabled: bool | None = None
    moderation_enabled: bool | None = None


@router.get("", response_model=SettingsResponse)
async def get_settings(
    services: ServiceContainer = Depends(get_services),
) -> SettingsResponse:
    """Get the bot settings"""
    try:
        return SettingsResponse(**asdict(services.bot_settings.get()))
    except Exception as e:
        logger.exception(f"Failed to fetch settings: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch settings") from None


@router.put("", response_model=SettingsResponse)
async def update_settings(
    body: SettingsUpdate,
    session: Session = Depends(require_bot_owner),
    services: ServiceContainer = Depends(get_services),
) -> SettingsResponse:
    """Merge the given fields over the current settings"""
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    settings = services.bot_settings.update(changes, actor=session)
    return SettingsResponse(**asdict(settings))
