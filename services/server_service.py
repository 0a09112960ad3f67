"""Guild list: live from Discord when possible, cached copy otherwise."""

import logging

from services.bot_client import DiscordBotClient
from shared.models import Server
from shared.repositories import ActivityLogRepository, BotConfigRepository, ServerRepository

logger = logging.getLogger(__name__)


class ServerService:
    def __init__(
        self,
        server_repo: ServerRepository,
        log_repo: ActivityLogRepository,
        config_repo: BotConfigRepository,
        bot_client: DiscordBotClient,
    ) -> None:
        self.server_repo = server_repo
        self.log_repo = log_repo
        self.config_repo = config_repo
        self.bot_client = bot_client

    async def list_servers(self) -> list[Server]:
        result = await self.bot_client.fetch_guilds(self.config_repo.bot_token)
        if not result.ok or not result.data:
            logger.debug(f"Guild fetch unavailable ({result.error}), serving cached servers")
            return self.server_repo.list_servers()

        servers = result.data
        self.server_repo.replace_all(servers)
        self.log_repo.create(
            "config",
            f"Dados de {len(servers)} servidor(es) carregados do Discord",
        )
        return servers
