"""Activity log API routes"""

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException

from core.dependencies import ServiceContainer, get_services
from routers.models import CamelModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/logs", tags=["logs"])


class ActivityLogResponse(CamelModel):
    id: str
    timestamp: datetime
    type: Literal["command", "join", "leave", "error", "config"]
    description: str
    server_id: str | None = None
    server_name: str | None = None
    user_id: str | None = None
    username: str | None = None
    details: str | None = None


@router.get("", response_model=list[ActivityLogResponse])
async def get_logs(
    services: ServiceContainer = Depends(get_services),
) -> list[ActivityLogResponse]:
    """Activity log, newest first"""
    try:
        return [ActivityLogResponse(**asdict(log)) for log in services.logs.list_logs()]
    except Exception as e:
        logger.exception(f"Failed to fetch logs: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch logs") from None
