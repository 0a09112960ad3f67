"""Command API routes"""

import logging
from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field

from core.dependencies import ServiceContainer, get_services, require_bot_owner
from core.errors import DashboardError
from routers.models import CamelModel
from shared.models import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/commands", tags=["commands"])


# ============================================
# Response / Request Models
# ============================================


class CommandResponse(CamelModel):
    id: str
    name: str
    description: str
    category: str
    usage_count: int
    enabled: bool
    last_used: datetime | None = None


class CommandCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str
    category: str
    enabled: bool = True


class CommandUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = None
    usage_count: int | None = Field(default=None, ge=0)
    enabled: bool | None = None
    last_used: datetime | None = None


class DeleteResponse(CamelModel):
    success: bool


# ============================================
# Endpoints
# ============================================


@router.get("", response_model=list[CommandResponse])
async def get_commands(
    services: ServiceContainer = Depends(get_services),
) -> list[CommandResponse]:
    """List commands, synced with Discord when it is reachable"""
    try:
        commands = await services.commands.list_commands()
        return [CommandResponse(**asdict(cmd)) for cmd in commands]
    except Exception as e:
        logger.exception(f"Failed to fetch commands: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch commands") from None


@router.post("", response_model=CommandResponse, status_code=201)
async def create_command(
    body: CommandCreate,
    session: Session = Depends(require_bot_owner),
    services: ServiceContainer = Depends(get_services),
) -> CommandResponse:
    """Create a command"""
    command = services.commands.create(
        body.name,
        body.description,
        body.category,
        enabled=body.enabled,
        actor=session,
    )
    return CommandResponse(**asdict(command))


@router.patch("/{command_id}", response_model=CommandResponse)
async def update_command(
    command_id: str,
    body: CommandUpdate,
    session: Session = Depends(require_bot_owner),
    services: ServiceContainer = Depends(get_services),
) -> CommandResponse:
    """Partially update a command (e.g. toggle enabled)"""
    changes = body.model_dump(exclude_unset=True)
    for field in ("name", "description", "category", "usage_count", "enabled"):
        if field in changes and changes[field] is None:
            del changes[field]
    try:
        command = services.commands.update(command_id, changes, actor=session)
    except DashboardError:
        raise
    except Exception as e:
        logger.exception(f"Failed to update command {command_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update command") from None
    return CommandResponse(**asdict(command))


@router.delete("/{command_id}", response_model=DeleteResponse)
async def delete_command(
    command_id: str,
    session: Session = Depends(require_bot_owner),
    services: ServiceContainer = Depends(get_services),
) -> DeleteResponse:
    """Delete a command; deleting an unknown id reports success=false"""
    success = services.commands.delete(command_id, actor=session)
    return DeleteResponse(success=success)
