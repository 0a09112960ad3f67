"""Repository for the cached guild list."""

from __future__ import annotations

from shared.models import Server
from shared.store import MemoryStore


class ServerRepository:
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def list_servers(self) -> list[Server]:
        return list(self.store.servers.values())

    def get(self, server_id: str) -> Server | None:
        return self.store.servers.get(server_id)

    def replace_all(self, servers: list[Server]) -> None:
        """Swap the cached list for a fresh one (no merge)."""
        self.store.servers = {server.id: server for server in servers}
