"""Data model for server-side login sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass
class Session:
    """Authenticated browser session, referenced by an opaque cookie value."""

    session_id: str
    user_id: str
    username: str
    avatar_hash: str | None
    is_developer: bool
    created_at: datetime
    expires_at: datetime
    global_name: str | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at
