"""Command service: Discord reconciliation plus dashboard mutations."""

import logging

from core.errors import NotFoundError
from services.bot_client import DiscordBotClient
from shared.models import Command, Session
from shared.repositories import ActivityLogRepository, BotConfigRepository, CommandRepository

logger = logging.getLogger(__name__)


class CommandService:
    def __init__(
        self,
        command_repo: CommandRepository,
        log_repo: ActivityLogRepository,
        config_repo: BotConfigRepository,
        bot_client: DiscordBotClient,
    ) -> None:
        self.command_repo = command_repo
        self.log_repo = log_repo
        self.config_repo = config_repo
        self.bot_client = bot_client

    async def list_commands(self) -> list[Command]:
        """Commands after a best-effort sync with Discord.

        If Discord can't be reached (or has nothing registered) the stored
        list is returned as-is.
        """
        result = await self.bot_client.fetch_commands(self.config_repo.bot_token)
        if result.ok and result.data:
            return self.command_repo.sync(result.data)

        logger.debug(f"Command sync skipped ({result.error}), serving stored commands")
        return self.command_repo.list_commands()

    def create(
        self,
        name: str,
        description: str,
        category: str,
        enabled: bool = True,
        actor: Session | None = None,
    ) -> Command:
        command = self.command_repo.create(name, description, category, enabled)
        self.log_repo.create(
            "config",
            f"Comando /{command.name} criado",
            user_id=actor.user_id if actor else None,
            username=actor.username if actor else None,
            details=f"Categoria: {command.category}",
        )
        logger.info(f"Command created: /{command.name} ({command.id})")
        return command

    def update(self, command_id: str, changes: dict, actor: Session | None = None) -> Command:
        command = self.command_repo.update(command_id, **changes)
        if command is None:
            raise NotFoundError(f"Command {command_id} not found")

        self.log_repo.create(
            "config",
            f"Comando /{command.name} atualizado",
            user_id=actor.user_id if actor else None,
            username=actor.username if actor else None,
            details="Ativado" if command.enabled else "Desativado",
        )
        logger.info(f"Command updated: /{command.name} -> {sorted(changes)}")
        return command

    def delete(self, command_id: str, actor: Session | None = None) -> bool:
        """Idempotent delete; logs only when something was removed."""
        command = self.command_repo.get(command_id)
        deleted = self.command_repo.delete(command_id)
        if deleted and command is not None:
            self.log_repo.create(
                "config",
                f"Comando /{command.name} removido",
                user_id=actor.user_id if actor else None,
                username=actor.username if actor else None,
            )
            logger.info(f"Command deleted: /{command.name} ({command_id})")
        return deleted
