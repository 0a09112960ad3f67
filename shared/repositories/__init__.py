"""Repository layer over the in-memory store."""

from .activity_log import ActivityLogRepository
from .bot_config import BotConfigRepository
from .command import CommandRepository
from .server import ServerRepository
from .settings import SettingsRepository

__all__ = [
    "ActivityLogRepository",
    "BotConfigRepository",
    "CommandRepository",
    "ServerRepository",
    "SettingsRepository",
]
