"""Server (guild) API routes"""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException

from core.dependencies import ServiceContainer, get_services
from routers.models import CamelModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/servers", tags=["servers"])


class ServerResponse(CamelModel):
    id: str
    name: str
    icon: str | None = None
    member_count: int
    status: Literal["online", "offline", "error"]
    joined_at: datetime


@router.get("", response_model=list[ServerResponse])
async def get_servers(
    services: ServiceContainer = Depends(get_services),
) -> list[ServerResponse]:
    """Guilds the bot is in (live from Discord, cached copy as fallback)"""
    try:
        servers = await services.servers.list_servers()
        return [ServerResponse(**asdict(server)) for server in servers]
    except Exception as e:
        logger.exception(f"Failed to fetch servers: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch servers") from None
