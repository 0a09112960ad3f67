"""OAuth callback handling: turns a Discord authorization code into a session."""

import logging

from core.errors import AuthError
from services.discord_api import DiscordAPIClient, has_developer_flag
from services.session_store import SessionStore
from shared.models import Session

logger = logging.getLogger(__name__)


class LoginService:
    def __init__(self, discord_api: DiscordAPIClient, sessions: SessionStore) -> None:
        self.discord_api = discord_api
        self.sessions = sessions

    def login_url(self, redirect_uri: str) -> str:
        return self.discord_api.generate_oauth_url(redirect_uri)

    async def handle_callback(
        self,
        code: str | None,
        error: str | None,
        redirect_uri: str,
        existing_session_id: str | None = None,
    ) -> Session:
        """Finish the OAuth flow.

        Raises ``AuthError`` with reason provider_error, no_code,
        exchange_failed or profile_fetch_failed; the session store is
        untouched in every failure case.
        """
        if error:
            logger.error(f"OAuth error from Discord: {error}")
            raise AuthError("provider_error", error)

        if not code:
            logger.error("No OAuth code received from Discord")
            raise AuthError("no_code")

        result = await self.discord_api.exchange_code(code, redirect_uri)
        if not result.success:
            logger.error(f"Discord login failed: {result.error}")
            raise AuthError(result.error or "exchange_failed")

        profile = result.profile
        session = self.sessions.create(
            user_id=str(profile["id"]),
            username=profile.get("username", ""),
            avatar_hash=profile.get("avatar"),
            is_developer=has_developer_flag(profile),
            global_name=profile.get("global_name"),
            session_id=existing_session_id,
        )
        logger.info(f"Discord user logged in: {session.username} ({session.user_id})")
        return session

    def logout(self, session_id: str | None) -> bool:
        return self.sessions.destroy(session_id)
