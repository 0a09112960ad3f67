"""Repository for commands, including the Discord sync merge."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace

from shared.models import Command, ExternalCommand
from shared.store import MemoryStore

logger = logging.getLogger(__name__)

# Fields a partial update may touch. ``id`` is never rewritten.
UPDATABLE_FIELDS = ("name", "description", "category", "usage_count", "enabled", "last_used")


def merge_external(existing: Command | None, external: ExternalCommand) -> Command:
    """Combine a Discord command definition with local state.

    Discord owns name/description/category. The dashboard owns enabled,
    usage_count and last_used; a brand-new id starts enabled with no usage.
    """
    if existing is None:
        return Command(
            id=external.id,
            name=external.name,
            description=external.description,
            category=external.category,
            usage_count=0,
            enabled=True,
            last_used=None,
        )
    return Command(
        id=external.id,
        name=external.name,
        description=external.description,
        category=external.category,
        usage_count=existing.usage_count,
        enabled=existing.enabled,
        last_used=existing.last_used,
    )


class CommandRepository:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def list_commands(self) -> list[Command]:
        return list(self.store.commands.values())

    def get(self, command_id: str) -> Command | None:
        return self.store.commands.get(command_id)

    def create(self, name: str, description: str, category: str, enabled: bool = True) -> Command:
        """Insert a locally created command with a fresh id."""
        command = Command(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            category=category,
            usage_count=0,
            enabled=enabled,
            last_used=None,
        )
        self.store.commands[command.id] = command
        return command

    def update(self, command_id: str, **fields) -> Command | None:
        """Shallow-merge the given fields. Returns None if the id is unknown."""
        existing = self.store.commands.get(command_id)
        if existing is None:
            return None
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        updated = replace(existing, **fields)
        self.store.commands[command_id] = updated
        return updated

    def delete(self, command_id: str) -> bool:
        return self.store.commands.pop(command_id, None) is not None

    def sync(self, external: list[ExternalCommand]) -> list[Command]:
        """Reconcile the store with the commands Discord currently reports.

        Discord is authoritative for which ids exist; local ids missing from
        ``external`` are removed.
        """
        merged: dict[str, Command] = {}
        for ext in external:
            merged[ext.id] = merge_external(self.store.commands.get(ext.id), ext)

        removed = [cid for cid in self.store.commands if cid not in merged]
        added = [cid for cid in merged if cid not in self.store.commands]
        self.store.commands = merged

        logger.debug(
            f"Command sync: {len(merged)} total, {len(added)} new, {len(removed)} removed"
        )
        return list(merged.values())
