"""Bot settings singleton."""

import logging

from shared.models import BotSettings, Session
from shared.repositories import ActivityLogRepository, SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, settings_repo: SettingsRepository, log_repo: ActivityLogRepository) -> None:
        self.settings_repo = settings_repo
        self.log_repo = log_repo

    def get(self) -> BotSettings:
        return self.settings_repo.get()

    def update(self, changes: dict, actor: Session | None = None) -> BotSettings:
        """Merge ``changes`` over the stored settings; omitted fields keep their value."""
        settings = self.settings_repo.update(**changes)
        self.log_repo.create(
            "config",
            "Configurações do bot atualizadas",
            user_id=actor.user_id if actor else None,
            username=actor.username if actor else None,
            details=f"Prefixo: {settings.prefix}, Status: {settings.status}",
        )
        logger.info(f"Bot settings updated: {sorted(changes)}")
        return settings
