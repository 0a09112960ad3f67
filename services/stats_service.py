"""Dashboard statistics and the 7-day activity chart.

``commands_today`` has a single definition: the number of ``command``
activity log entries timestamped on the current UTC day. It never depends
on whether Discord was reachable.
"""

import logging
from datetime import UTC, datetime, timedelta

from services.bot_client import DiscordBotClient
from shared.models import BotStats, ChartPoint
from shared.repositories import ActivityLogRepository, BotConfigRepository, ServerRepository
from shared.store import MemoryStore

logger = logging.getLogger(__name__)

CHART_DAYS = 7


class StatsService:
    def __init__(
        self,
        store: MemoryStore,
        server_repo: ServerRepository,
        log_repo: ActivityLogRepository,
        config_repo: BotConfigRepository,
        bot_client: DiscordBotClient,
    ) -> None:
        self.store = store
        self.server_repo = server_repo
        self.log_repo = log_repo
        self.config_repo = config_repo
        self.bot_client = bot_client

    async def get_stats(self, now: datetime | None = None) -> BotStats:
        now = now or datetime.now(UTC)

        result = await self.bot_client.fetch_guilds(self.config_repo.bot_token)
        if result.ok and result.data:
            servers = result.data
        else:
            servers = self.server_repo.list_servers()

        today = now.date()
        return BotStats(
            server_count=len(servers),
            user_count=sum(server.member_count for server in servers),
            uptime=max(0, int((now - self.store.started_at).total_seconds())),
            commands_today=self.log_repo.count_on(today, "command"),
            messages_processed=self.log_repo.count_on(today),
            active_channels=sum(1 for server in servers if server.status == "online"),
        )

    def get_chart(self, now: datetime | None = None) -> list[ChartPoint]:
        """Per-day counts for the last seven days, oldest first."""
        now = now or datetime.now(UTC)
        points = []
        for offset in range(CHART_DAYS - 1, -1, -1):
            day = (now - timedelta(days=offset)).date()
            points.append(
                ChartPoint(
                    date=day.strftime("%d %b"),
                    commands=self.log_repo.count_on(day, "command"),
                    messages=self.log_repo.count_on(day),
                )
            )
        return points
