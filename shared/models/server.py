"""Data model for the Discord guild mirror."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Server:
    """Read-only mirror of a guild the bot is in."""

    id: str
    name: str
    icon: str | None
    member_count: int
    status: str  # 'online' | 'offline' | 'error'
    joined_at: datetime
