"""Data model for the audit/activity log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

LOG_TYPES = ("command", "join", "leave", "error", "config")


@dataclass(frozen=True)
class ActivityLog:
    """Append-only audit entry."""

    id: str
    timestamp: datetime
    type: str  # one of LOG_TYPES
    description: str
    server_id: str | None = None
    server_name: str | None = None
    user_id: str | None = None
    username: str | None = None
    details: str | None = None
