"""Repository for bot credential, ownership and language badges."""

from __future__ import annotations

from shared.models import LANGUAGE_OPTIONS, BotLanguage
from shared.store import MemoryStore


class BotConfigRepository:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    @property
    def owner_id(self) -> str | None:
        return self.store.ownership.owner_id

    @property
    def bot_token(self) -> str | None:
        return self.store.bot_token

    def set_credential(self, token: str, owner_id: str) -> None:
        """Store a validated token and the owner it belongs to (overwrites)."""
        self.store.bot_token = token
        self.store.ownership.owner_id = owner_id

    def get_languages(self) -> list[BotLanguage]:
        return list(self.store.languages)

    def set_languages(self, keys: list[str]) -> list[BotLanguage]:
        """Replace badges; unknown keys are dropped, lookup is case-insensitive."""
        self.store.languages = [
            LANGUAGE_OPTIONS[key.lower()] for key in keys if key.lower() in LANGUAGE_OPTIONS
        ]
        return list(self.store.languages)
