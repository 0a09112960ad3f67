"""Services layer - Business logic

This module provides service classes for handling business logic.
Services are built once per application and reached through dependency injection.
"""

from .auth_service import AuthService
from .bot_client import DiscordBotClient, FetchResult
from .bot_service import BotService
from .command_service import CommandService
from .discord_api import DiscordAPIClient, OAuthResult
from .login_service import LoginService
from .server_service import ServerService
from .session_store import SessionStore
from .settings_service import SettingsService
from .stats_service import StatsService

__all__ = [
    "AuthService",
    "BotService",
    "CommandService",
    "DiscordAPIClient",
    "DiscordBotClient",
    "FetchResult",
    "LoginService",
    "OAuthResult",
    "ServerService",
    "SessionStore",
    "SettingsService",
    "StatsService",
]
