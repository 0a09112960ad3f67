"""Data model for the bot settings singleton."""

from __future__ import annotations

from dataclasses import dataclass

BOT_STATUSES = ("online", "idle", "dnd", "invisible")
ACTIVITY_TYPES = ("playing", "watching", "listening", "competing")


@dataclass
class BotSettings:
    prefix: str = "!"
    status: str = "online"
    activity: str = "com os comandos"
    activity_type: str = "playing"
    auto_response: bool = True
    logging_enabled: bool = True
    moderation_enabled: bool = False
