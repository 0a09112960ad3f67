"""
Tests for the command repository.

Tests cover:
- Merging Discord definitions with local state
- Sync removal of ids Discord no longer reports
- Create / partial update / idempotent delete
"""
from datetime import UTC, datetime

import pytest

from shared.models import Command, ExternalCommand
from shared.repositories import CommandRepository
from shared.repositories.command import merge_external
from shared.store import MemoryStore

LAST_USED = datetime(2026, 1, 5, 12, 0, tzinfo=UTC)


@pytest.fixture
def repo():
    store = MemoryStore()
    store.commands["9"] = Command(
        id="9",
        name="avatar",
        description="Mostra o avatar de um usuário",
        category="Diversão",
        usage_count=432,
        enabled=False,
        last_used=LAST_USED,
    )
    store.commands["local"] = Command(
        id="local", name="poll", description="Cria uma enquete", category="Utilidade"
    )
    return CommandRepository(store)


class TestMergeExternal:
    """Tests for merge_external."""

    def test_new_command_gets_defaults(self):
        merged = merge_external(None, ExternalCommand("5", "ping", "Latency", "Slash"))
        assert merged.enabled is True
        assert merged.usage_count == 0
        assert merged.last_used is None
        assert merged.name == "ping"

    def test_existing_command_keeps_local_state(self):
        existing = Command("9", "old", "old desc", "Old", usage_count=7, enabled=False, last_used=LAST_USED)
        merged = merge_external(existing, ExternalCommand("9", "avatar", "new desc", "Slash"))
        assert (merged.enabled, merged.usage_count, merged.last_used) == (False, 7, LAST_USED)
        assert (merged.name, merged.description, merged.category) == ("avatar", "new desc", "Slash")


class TestSync:
    """Tests for CommandRepository.sync."""

    def test_sync_preserves_sticky_fields_and_updates_definition(self, repo):
        repo.sync([ExternalCommand("9", "avatar", "Avatar de alguém", "Slash")])

        command = repo.get("9")
        assert command.enabled is False
        assert command.usage_count == 432
        assert command.last_used == LAST_USED
        assert command.description == "Avatar de alguém"
        assert command.category == "Slash"

    def test_sync_removes_ids_missing_from_discord(self, repo):
        repo.sync([ExternalCommand("9", "avatar", "d", "Slash")])
        assert repo.get("local") is None
        assert [c.id for c in repo.list_commands()] == ["9"]

    def test_sync_adds_new_ids_enabled_with_no_usage(self, repo):
        repo.sync(
            [
                ExternalCommand("9", "avatar", "d", "Slash"),
                ExternalCommand("42", "ban", "Bane", "Slash"),
            ]
        )
        new = repo.get("42")
        assert new.enabled is True
        assert new.usage_count == 0
        assert new.last_used is None


class TestMutations:
    """Tests for create, update and delete."""

    def test_create_assigns_fresh_id(self, repo):
        first = repo.create("echo", "Repete", "Utilidade")
        second = repo.create("echo", "Repete", "Utilidade")
        assert first.id != second.id
        assert first.usage_count == 0
        assert first.last_used is None

    def test_update_is_shallow_merge(self, repo):
        updated = repo.update("9", enabled=True)
        assert updated.enabled is True
        assert updated.usage_count == 432
        assert updated.name == "avatar"

    def test_update_unknown_id_returns_none(self, repo):
        assert repo.update("missing", enabled=True) is None

    def test_update_rejects_id_change(self, repo):
        with pytest.raises(ValueError):
            repo.update("9", id="10")

    def test_delete_is_idempotent(self, repo):
        assert repo.delete("9") is True
        assert repo.delete("9") is False
