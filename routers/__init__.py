"""API Routers package

This package contains all API route handlers.
Routers are organized by feature domain.
"""

from . import auth_router, bot_router, commands_router, logs_router, servers_router, settings_router

__all__ = [
    "auth_router",
    "bot_router",
    "commands_router",
    "logs_router",
    "servers_router",
    "settings_router",
]
