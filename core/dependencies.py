"""Dependency injection utilities for FastAPI

All stateful services live in one ``ServiceContainer`` built by the app
factory and stored on ``app.state``; route dependencies read it from the
request rather than from module globals.
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, Request

from core.config import Settings
from core.errors import AuthError
from services import (
    AuthService,
    BotService,
    CommandService,
    DiscordAPIClient,
    DiscordBotClient,
    LoginService,
    ServerService,
    SessionStore,
    SettingsService,
    StatsService,
)
from services.authorization import CAPABILITY_OWNER, CAPABILITY_SESSION, authorize
from shared.models import Session
from shared.repositories import (
    ActivityLogRepository,
    BotConfigRepository,
    CommandRepository,
    ServerRepository,
    SettingsRepository,
)
from shared.seed import seed_demo_data
from shared.store import MemoryStore

logger = logging.getLogger(__name__)

AUTH_MESSAGES = {
    "unauthenticated": "Not authenticated",
    "bot_not_configured": "Bot not configured: set a bot token first",
    "forbidden": "Only the bot owner can do this",
}


# ============================================
# Service Container
# ============================================


@dataclass
class ServiceContainer:
    settings: Settings
    store: MemoryStore
    sessions: SessionStore
    auth: AuthService
    discord_api: DiscordAPIClient
    bot_client: DiscordBotClient
    login: LoginService
    bot: BotService
    commands: CommandService
    servers: ServerService
    stats: StatsService
    bot_settings: SettingsService
    logs: ActivityLogRepository

    async def close(self) -> None:
        """Close shared HTTP clients. Call on app shutdown."""
        await self.discord_api.close()
        await self.bot_client.close()


def build_services(
    settings: Settings,
    *,
    store: MemoryStore | None = None,
    discord_api: DiscordAPIClient | None = None,
    bot_client: DiscordBotClient | None = None,
) -> ServiceContainer:
    """Wire repositories and services around a single store"""
    if store is None:
        store = MemoryStore()
        if settings.seed_demo_data:
            seed_demo_data(store)

    discord_api = discord_api or DiscordAPIClient(
        client_id=settings.discord_client_id,
        client_secret=settings.discord_client_secret,
        timeout=settings.discord_timeout,
    )
    bot_client = bot_client or DiscordBotClient(timeout=settings.discord_timeout)

    sessions = SessionStore(expire_days=settings.session_expire_days)
    command_repo = CommandRepository(store)
    server_repo = ServerRepository(store)
    log_repo = ActivityLogRepository(store)
    settings_repo = SettingsRepository(store)
    config_repo = BotConfigRepository(store)

    if settings.discord_bot_token and config_repo.bot_token is None:
        # owner stays unset until the token is validated from the dashboard
        store.bot_token = settings.discord_bot_token

    return ServiceContainer(
        settings=settings,
        store=store,
        sessions=sessions,
        auth=AuthService(secret_key=settings.session_secret),
        discord_api=discord_api,
        bot_client=bot_client,
        login=LoginService(discord_api, sessions),
        bot=BotService(config_repo, log_repo, bot_client),
        commands=CommandService(command_repo, log_repo, config_repo, bot_client),
        servers=ServerService(server_repo, log_repo, config_repo, bot_client),
        stats=StatsService(store, server_repo, log_repo, config_repo, bot_client),
        bot_settings=SettingsService(settings_repo, log_repo),
        logs=log_repo,
    )


def get_services(request: Request) -> ServiceContainer:
    """Get the application's service container (dependency injection)"""
    return request.app.state.services


# ============================================
# Authentication Dependencies
# ============================================


def get_session_id(request: Request) -> str | None:
    """Verify the session cookie and return the session id it carries"""
    services = get_services(request)
    cookie = request.cookies.get(services.settings.session_cookie_name)
    if not cookie:
        return None
    return services.auth.verify_token(cookie)


async def get_current_session(request: Request) -> Session | None:
    """Return the live session for this request, or None"""
    services = get_services(request)
    return services.sessions.get(get_session_id(request))


def _enforce(session: Session | None, owner_id: str | None, capability: str) -> Session:
    decision = authorize(session, owner_id, capability)
    if not decision.allowed or session is None:
        reason = decision.reason or "unauthenticated"
        logger.warning(
            f"Authorization denied ({reason}) for {session.user_id if session else 'anonymous'}"
        )
        raise AuthError(reason, AUTH_MESSAGES.get(reason))
    return session


async def require_session(
    request: Request,
    session: Session | None = Depends(get_current_session),
) -> Session:
    """Require a logged-in session"""
    services = get_services(request)
    return _enforce(session, services.bot.owner_id, CAPABILITY_SESSION)


async def require_bot_owner(
    request: Request,
    session: Session | None = Depends(get_current_session),
) -> Session:
    """Require the session user to be the configured bot owner"""
    services = get_services(request)
    return _enforce(session, services.bot.owner_id, CAPABILITY_OWNER)
