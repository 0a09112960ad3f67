"""Bot credential, ownership, language badges and header identity."""

import logging

from core.errors import AuthError, UpstreamUnavailable
from services.authorization import authorize
from services.bot_client import DiscordBotClient, application_owner_id
from services.discord_api import get_avatar_url
from shared.models import BotLanguage, BotUser, Session
from shared.repositories import ActivityLogRepository, BotConfigRepository

logger = logging.getLogger(__name__)

PLACEHOLDER_USER = BotUser(
    id="0",
    username="bot",
    display_name="Bot",
    avatar=None,
    is_developer=False,
)


class BotService:
    def __init__(
        self,
        config_repo: BotConfigRepository,
        log_repo: ActivityLogRepository,
        bot_client: DiscordBotClient,
    ) -> None:
        self.config_repo = config_repo
        self.log_repo = log_repo
        self.bot_client = bot_client

    @property
    def owner_id(self) -> str | None:
        return self.config_repo.owner_id

    @property
    def bot_token(self) -> str | None:
        return self.config_repo.bot_token

    async def set_bot_token(
        self,
        token: str,
        session: Session,
        languages: list[str] | None = None,
    ) -> str:
        """Validate ``token`` with Discord and make its application owner the bot owner.

        Once an owner exists only that owner may replace the credential.
        Nothing is changed when validation fails. Returns the owner id.
        """
        if self.owner_id is not None:
            decision = authorize(session, self.owner_id)
            if not decision.allowed:
                raise AuthError(decision.reason or "forbidden")

        result = await self.bot_client.get_application(token)
        if not result.ok or not result.data:
            logger.warning(f"Bot token validation failed: {result.error}")
            raise UpstreamUnavailable("Invalid bot token or Discord unavailable")

        owner_id = application_owner_id(result.data)
        if not owner_id:
            raise UpstreamUnavailable("Discord application has no owner")

        previous = self.owner_id
        self.config_repo.set_credential(token, owner_id)
        if languages is not None:
            self.config_repo.set_languages(languages)

        self.log_repo.create(
            "config",
            "Token do bot atualizado",
            user_id=session.user_id,
            username=session.username,
            details=f"Aplicação: {result.data.get('name', '')}",
        )
        if previous != owner_id:
            logger.info(f"Bot owner set to {owner_id} (was {previous})")
        return owner_id

    def get_languages(self) -> list[BotLanguage]:
        return self.config_repo.get_languages()

    def update_languages(self, keys: list[str], session: Session) -> list[BotLanguage]:
        languages = self.config_repo.set_languages(keys)
        self.log_repo.create(
            "config",
            "Linguagens do bot atualizadas",
            user_id=session.user_id,
            username=session.username,
            details=", ".join(lang.badge for lang in languages) or None,
        )
        return languages

    async def current_user(self, session: Session | None) -> BotUser:
        """Header identity: the session user, else the live bot user, else a placeholder."""
        if session is not None:
            return BotUser(
                id=session.user_id,
                username=session.username,
                display_name=session.global_name or session.username,
                avatar=get_avatar_url(session.user_id, session.avatar_hash),
                is_developer=session.is_developer,
            )

        result = await self.bot_client.fetch_bot_user(self.bot_token)
        if result.ok and result.data:
            return result.data

        logger.debug(f"Bot identity unavailable ({result.error}), using placeholder")
        return PLACEHOLDER_USER
