"""Discord OAuth2 client service"""

import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import httpx

logger = logging.getLogger(__name__)

# User flag bits that mark a developer account
VERIFIED_BOT_DEVELOPER = 1 << 17
ACTIVE_DEVELOPER = 1 << 22


def has_developer_flag(profile: dict[str, Any]) -> bool:
    """Check the profile flag bitmask against the two developer bits"""
    flags = profile.get("public_flags")
    if flags is None:
        flags = profile.get("flags")
    flags = int(flags or 0)
    return bool(flags & VERIFIED_BOT_DEVELOPER) or bool(flags & ACTIVE_DEVELOPER)


@dataclass
class OAuthResult:
    """Outcome of the code exchange + profile fetch."""

    success: bool
    error: str | None = None
    profile: dict[str, Any] = field(default_factory=dict)


class DiscordAPIClient:
    """Client for the Discord OAuth2 authorization-code flow"""

    OAUTH_SCOPES = [
        "identify",
        "email",
        "guilds",
    ]

    DISCORD_API_URL = "https://discord.com/api/v10"
    DISCORD_OAUTH_URL = "https://discord.com/api/oauth2"
    DISCORD_AUTHORIZE_URL = "https://discord.com/oauth2/authorize"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret

        # Shared HTTP client, reused across requests
        self._http = http or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close the shared HTTP client. Call on app shutdown."""
        await self._http.aclose()

    @property
    def is_configured(self) -> bool:
        """Check if Discord OAuth is configured"""
        return bool(self.client_id and self.client_secret)

    def generate_oauth_url(self, redirect_uri: str, state: str | None = None) -> str:
        """Generate Discord OAuth authorization URL

        ``redirect_uri`` must match the URL registered with Discord exactly,
        otherwise the later code exchange is rejected.
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.OAUTH_SCOPES),
        }
        if state:
            params["state"] = state
        return f"{self.DISCORD_AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str, redirect_uri: str) -> OAuthResult:
        """Exchange an OAuth code for a token and fetch the user's profile.

        Single attempt, no retry. Errors are reported as ``exchange_failed``
        or ``profile_fetch_failed``.
        """
        access_token = await self._exchange_code_for_token(code, redirect_uri)
        if not access_token:
            return OAuthResult(success=False, error="exchange_failed")

        profile = await self._get_user_info(access_token)
        if not profile or not profile.get("id"):
            return OAuthResult(success=False, error="profile_fetch_failed")

        logger.debug(f"Token exchanged for Discord user: {profile.get('id')}")
        return OAuthResult(success=True, profile=profile)

    async def _exchange_code_for_token(self, code: str, redirect_uri: str) -> str | None:
        try:
            token_response = await self._http.post(
                f"{self.DISCORD_OAUTH_URL}/token",
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": redirect_uri,
                },
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                auth=(self.client_id, self.client_secret),
            )
        except httpx.HTTPError as e:
            logger.error(f"HTTP error while exchanging code for token: {type(e).__name__}: {e}")
            return None

        if token_response.status_code != 200:
            logger.error(f"Failed to exchange code: {token_response.status_code}")
            logger.debug(f"Response: {token_response.text}")
            return None

        try:
            payload = token_response.json()
        except ValueError:
            logger.error("Token response is not JSON")
            return None

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            logger.error("No access_token in response")
            return None
        return str(access_token)

    async def _get_user_info(self, access_token: str) -> dict[str, Any] | None:
        """Get user info from access token"""
        try:
            response = await self._http.get(
                f"{self.DISCORD_API_URL}/users/@me",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"HTTP error getting user info: {type(e).__name__}: {e}")
            return None

        if response.status_code != 200:
            logger.error(f"Failed to get user info: {response.status_code}")
            return None

        try:
            data = response.json()
        except ValueError:
            logger.error("User info response is not JSON")
            return None
        if not isinstance(data, dict):
            logger.error(f"Unexpected user info payload: {type(data).__name__}")
            return None
        return data


def get_avatar_url(user_id: str, avatar_hash: str | None) -> str:
    """Generate Discord avatar URL"""
    if avatar_hash:
        ext = "gif" if avatar_hash.startswith("a_") else "png"
        return f"https://cdn.discordapp.com/avatars/{user_id}/{avatar_hash}.{ext}"
    # Default avatar
    try:
        default_avatar_index = (int(user_id) >> 22) % 6
    except ValueError:
        default_avatar_index = 0
    return f"https://cdn.discordapp.com/embed/avatars/{default_avatar_index}.png"
