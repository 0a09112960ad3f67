"""Discord REST client authenticated with the bot token.

Every fetch returns a ``FetchResult`` instead of raising, so callers decide
explicitly whether to fall back to stored data. One attempt per call; the
only time bound is the HTTP client timeout.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

import httpx

from shared.models import BotUser, ExternalCommand, Server

logger = logging.getLogger(__name__)

T = TypeVar("T")

DISCORD_API_URL = "https://discord.com/api/v10"
DISCORD_CDN_URL = "https://cdn.discordapp.com"

# Discord application command types -> dashboard category
COMMAND_CATEGORIES = {
    1: "Slash",
    2: "Usuário",
    3: "Mensagem",
}


@dataclass
class FetchResult(Generic[T]):
    """Result of a single upstream call."""

    ok: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, data: T) -> "FetchResult[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "FetchResult[T]":
        return cls(ok=False, error=error)


def application_owner_id(application: dict[str, Any]) -> str | None:
    """Owner identity from application metadata (team owner wins for team apps)."""
    team = application.get("team")
    if team and team.get("owner_user_id"):
        return str(team["owner_user_id"])
    owner = application.get("owner") or {}
    owner_id = owner.get("id")
    return str(owner_id) if owner_id else None


def guild_icon_url(guild_id: str, icon_hash: str | None) -> str | None:
    if not icon_hash:
        return None
    ext = "gif" if icon_hash.startswith("a_") else "png"
    return f"{DISCORD_CDN_URL}/icons/{guild_id}/{icon_hash}.{ext}"


class DiscordBotClient:
    """Read-only view of the bot's Discord state."""

    def __init__(self, timeout: float = 10.0, http: httpx.AsyncClient | None = None):
        self._http = http or httpx.AsyncClient(base_url=DISCORD_API_URL, timeout=timeout)

    async def close(self) -> None:
        """Close the shared HTTP client. Call on app shutdown."""
        await self._http.aclose()

    async def _get(self, token: str | None, path: str, **params: Any) -> FetchResult[Any]:
        if not token:
            return FetchResult.failure("bot_not_configured")
        try:
            response = await self._http.get(
                path,
                params=params or None,
                headers={"Authorization": f"Bot {token}"},
            )
        except httpx.TimeoutException:
            logger.warning(f"Discord request timed out: GET {path}")
            return FetchResult.failure("timeout")
        except httpx.HTTPError as e:
            logger.warning(f"Discord request failed: GET {path}: {type(e).__name__}: {e}")
            return FetchResult.failure("network_error")

        if response.status_code in (401, 403):
            logger.warning(f"Discord rejected bot token on GET {path}: {response.status_code}")
            return FetchResult.failure("unauthorized")
        if response.status_code != 200:
            logger.warning(f"Discord GET {path} returned {response.status_code}")
            return FetchResult.failure(f"http_{response.status_code}")

        try:
            return FetchResult.success(response.json())
        except ValueError:
            return FetchResult.failure("invalid_json")

    async def get_application(self, token: str | None) -> FetchResult[dict[str, Any]]:
        """Application metadata for the bot (used for credential validation)."""
        result = await self._get(token, "/applications/@me")
        if result.ok and not isinstance(result.data, dict):
            return FetchResult.failure("invalid_payload")
        return result

    async def fetch_guilds(self, token: str | None) -> FetchResult[list[Server]]:
        result = await self._get(token, "/users/@me/guilds", with_counts="true")
        if not result.ok:
            return FetchResult.failure(result.error or "unknown")
        if not isinstance(result.data, list) or not result.data:
            return FetchResult.failure("empty_result")

        now = datetime.now(UTC)
        servers = [
            Server(
                id=str(guild["id"]),
                name=guild.get("name", ""),
                icon=guild_icon_url(str(guild["id"]), guild.get("icon")),
                member_count=int(guild.get("approximate_member_count") or 0),
                status="offline" if guild.get("unavailable") else "online",
                joined_at=now,
            )
            for guild in result.data
            if isinstance(guild, dict) and guild.get("id")
        ]
        if not servers:
            return FetchResult.failure("empty_result")
        return FetchResult.success(servers)

    async def fetch_commands(self, token: str | None) -> FetchResult[list[ExternalCommand]]:
        app_result = await self.get_application(token)
        if not app_result.ok or not app_result.data:
            return FetchResult.failure(app_result.error or "unknown")
        application_id = app_result.data.get("id")
        if not application_id:
            return FetchResult.failure("invalid_payload")

        result = await self._get(token, f"/applications/{application_id}/commands")
        if not result.ok:
            return FetchResult.failure(result.error or "unknown")
        if not isinstance(result.data, list) or not result.data:
            return FetchResult.failure("empty_result")

        commands = [
            ExternalCommand(
                id=str(cmd["id"]),
                name=cmd.get("name", ""),
                description=cmd.get("description", ""),
                category=COMMAND_CATEGORIES.get(cmd.get("type", 1), "Slash"),
            )
            for cmd in result.data
            if isinstance(cmd, dict) and cmd.get("id")
        ]
        if not commands:
            return FetchResult.failure("empty_result")
        return FetchResult.success(commands)

    async def fetch_bot_user(self, token: str | None) -> FetchResult[BotUser]:
        result = await self._get(token, "/users/@me")
        if not result.ok:
            return FetchResult.failure(result.error or "unknown")
        data = result.data
        if not isinstance(data, dict) or not data.get("id"):
            return FetchResult.failure("invalid_payload")

        user_id = str(data["id"])
        avatar_hash = data.get("avatar")
        return FetchResult.success(
            BotUser(
                id=user_id,
                username=data.get("username", ""),
                display_name=data.get("global_name") or data.get("username", ""),
                avatar=f"{DISCORD_CDN_URL}/avatars/{user_id}/{avatar_hash}.png"
                if avatar_hash
                else None,
                is_developer=False,
            )
        )
