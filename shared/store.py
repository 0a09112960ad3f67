"""Process-scoped in-memory system of record.

Nothing here survives a restart. One ``MemoryStore`` is built by the app
factory and handed to repositories; there are no module-level globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from shared.models import (
    ActivityLog,
    BotLanguage,
    BotSettings,
    Command,
    OwnershipRecord,
    Server,
)


@dataclass
class MemoryStore:
    commands: dict[str, Command] = field(default_factory=dict)
    servers: dict[str, Server] = field(default_factory=dict)
    logs: dict[str, ActivityLog] = field(default_factory=dict)
    settings: BotSettings = field(default_factory=BotSettings)
    ownership: OwnershipRecord = field(default_factory=OwnershipRecord)
    bot_token: str | None = None
    languages: list[BotLanguage] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
