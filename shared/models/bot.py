"""Data models for bot identity, ownership and language badges."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class OwnershipRecord:
    """Which Discord identity owns the configured bot (unset until a token is validated)."""

    owner_id: str | None = None

    @property
    def is_set(self) -> bool:
        return self.owner_id is not None


@dataclass
class BotUser:
    """Identity shown in the dashboard header."""

    id: str
    username: str
    display_name: str
    avatar: str | None
    is_developer: bool = False


@dataclass(frozen=True)
class BotLanguage:
    language: str
    badge: str
    color: str


LANGUAGE_OPTIONS: dict[str, BotLanguage] = {
    "typescript": BotLanguage("TypeScript", "TS", "#3178c6"),
    "javascript": BotLanguage("JavaScript", "JS", "#f7df1e"),
    "python": BotLanguage("Python", "PY", "#3776ab"),
    "java": BotLanguage("Java", "JAVA", "#007396"),
    "cpp": BotLanguage("C++", "C++", "#00599c"),
    "csharp": BotLanguage("C#", "C#", "#239120"),
    "go": BotLanguage("Go", "GO", "#00add8"),
    "rust": BotLanguage("Rust", "RS", "#ce422b"),
}
