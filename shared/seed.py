"""Demo data loaded at startup so the dashboard has something to show
before a bot token is configured."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

from shared.models import ActivityLog, Command, Server
from shared.store import MemoryStore

logger = logging.getLogger(__name__)

# (id, name, description, category, usage_count, enabled, last_used seconds ago)
SAMPLE_COMMANDS: list[tuple[str, str, str, str, int, bool, int]] = [
    ("1", "help", "Exibe todos os comandos disponíveis", "Utilidade", 1250, True, 3600),
    ("2", "ping", "Verifica a latência do bot", "Utilidade", 892, True, 7200),
    ("3", "kick", "Expulsa um membro do servidor", "Moderação", 45, True, 86400),
    ("4", "ban", "Bane um membro do servidor", "Moderação", 23, True, 172800),
    ("5", "mute", "Silencia um membro temporariamente", "Moderação", 67, False, 259200),
    ("6", "play", "Reproduz música no canal de voz", "Música", 3421, True, 1800),
    ("7", "skip", "Pula para a próxima música", "Música", 2156, True, 2400),
    ("8", "queue", "Mostra a fila de músicas", "Música", 1534, True, 3000),
    ("9", "avatar", "Mostra o avatar de um usuário", "Diversão", 432, True, 14400),
    ("10", "poll", "Cria uma enquete", "Utilidade", 189, True, 43200),
]

# (id, name, member_count, joined days ago)
SAMPLE_SERVERS: list[tuple[str, str, int, int]] = [
    ("guild1", "Servidor Geral", 1250, 90),
    ("guild2", "Servidor de Música", 850, 60),
    ("guild3", "Comunidade Gaming", 2100, 30),
    ("guild4", "Dev Squad", 420, 15),
    ("guild5", "Anime Lovers", 1890, 10),
]

# (id, minutes ago, type, description, server_name, user_id, username, details)
SAMPLE_LOGS: list[tuple[str, int, str, str, str | None, str | None, str | None, str | None]] = [
    ("log1", 10, "command", "Comando /help executado", "Servidor Geral",
     "user123", "João#1234", "Categoria: Utilidade"),
    ("log2", 20, "command", "Comando /play executado", "Servidor de Música",
     "user456", "Maria#5678", "Música: Never Gonna Give You Up"),
    ("log3", 30, "join", "Bot adicionado a um novo servidor", "Comunidade Gaming",
     None, None, "150 membros"),
    ("log4", 60, "config", "Prefixo alterado de ! para /", None,
     "admin789", "Admin#0001", None),
    ("log5", 120, "command", "Comando /kick executado", "Servidor Geral",
     "mod123", "Moderador#9999", "Usuário expulso: Spam#1111"),
    ("log6", 180, "error", "Erro ao conectar ao canal de voz", "Servidor de Música",
     None, None, "Permissões insuficientes"),
    ("log7", 240, "command", "Comando /queue executado", "Servidor de Música",
     "user789", "Pedro#4321", "5 músicas na fila"),
    ("log8", 360, "config", "Status do bot alterado para 'Ouvindo música'", None,
     "admin789", "Admin#0001", None),
]


def seed_demo_data(store: MemoryStore, now: datetime | None = None) -> None:
    """Populate an empty store with sample commands, servers and logs."""
    now = now or datetime.now(UTC)

    for cmd_id, name, description, category, usage, enabled, ago in SAMPLE_COMMANDS:
        store.commands[cmd_id] = Command(
            id=cmd_id,
            name=name,
            description=description,
            category=category,
            usage_count=usage,
            enabled=enabled,
            last_used=now - timedelta(seconds=ago),
        )

    for guild_id, name, members, days in SAMPLE_SERVERS:
        store.servers[guild_id] = Server(
            id=guild_id,
            name=name,
            icon=None,
            member_count=members,
            status="online",
            joined_at=now - timedelta(days=days),
        )

    for log_id, minutes, log_type, description, server_name, user_id, username, details in SAMPLE_LOGS:
        store.logs[log_id] = ActivityLog(
            id=log_id,
            timestamp=now - timedelta(minutes=minutes),
            type=log_type,
            description=description,
            server_name=server_name,
            user_id=user_id,
            username=username,
            details=details,
        )

    logger.info(
        f"Seeded demo data: {len(store.commands)} commands, "
        f"{len(store.servers)} servers, {len(store.logs)} logs"
    )
