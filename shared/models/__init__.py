"""Shared data models for the dashboard backend."""

from .activity_log import LOG_TYPES, ActivityLog
from .bot import LANGUAGE_OPTIONS, BotLanguage, BotUser, OwnershipRecord
from .command import Command, ExternalCommand
from .server import Server
from .session import Session
from .settings import ACTIVITY_TYPES, BOT_STATUSES, BotSettings
from .stats import BotStats, ChartPoint

__all__ = [
    "ACTIVITY_TYPES",
    "ActivityLog",
    "BOT_STATUSES",
    "BotLanguage",
    "BotSettings",
    "BotStats",
    "BotUser",
    "ChartPoint",
    "Command",
    "ExternalCommand",
    "LANGUAGE_OPTIONS",
    "LOG_TYPES",
    "OwnershipRecord",
    "Server",
    "Session",
]
