"""Repository for the append-only activity log."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime

from shared.models import LOG_TYPES, ActivityLog
from shared.store import MemoryStore


class ActivityLogRepository:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def list_logs(self) -> list[ActivityLog]:
        """All entries, newest first."""
        return sorted(self.store.logs.values(), key=lambda log: log.timestamp, reverse=True)

    def get(self, log_id: str) -> ActivityLog | None:
        return self.store.logs.get(log_id)

    def create(
        self,
        type: str,
        description: str,
        *,
        server_id: str | None = None,
        server_name: str | None = None,
        user_id: str | None = None,
        username: str | None = None,
        details: str | None = None,
        timestamp: datetime | None = None,
    ) -> ActivityLog:
        if type not in LOG_TYPES:
            raise ValueError(f"Invalid log type: {type}")
        log = ActivityLog(
            id=str(uuid.uuid4()),
            timestamp=timestamp or datetime.now(UTC),
            type=type,
            description=description,
            server_id=server_id,
            server_name=server_name,
            user_id=user_id,
            username=username,
            details=details,
        )
        self.store.logs[log.id] = log
        return log

    def count_on(self, day: date, type: str | None = None) -> int:
        """Count entries whose UTC timestamp falls on ``day``."""
        return sum(
            1
            for log in self.store.logs.values()
            if log.timestamp.astimezone(UTC).date() == day and (type is None or log.type == type)
        )
