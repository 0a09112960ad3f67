"""Repository for the bot settings singleton."""

from __future__ import annotations

from dataclasses import fields, replace

from shared.models import BotSettings
from shared.store import MemoryStore

SETTINGS_FIELDS = tuple(f.name for f in fields(BotSettings))


class SettingsRepository:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def get(self) -> BotSettings:
        return self.store.settings

    def update(self, **changes) -> BotSettings:
        """Shallow merge over the current settings; omitted fields are kept."""
        unknown = set(changes) - set(SETTINGS_FIELDS)
        if unknown:
            raise ValueError(f"Unknown settings fields: {', '.join(sorted(unknown))}")
        self.store.settings = replace(self.store.settings, **changes)
        return self.store.settings
