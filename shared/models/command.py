"""Data models for bot commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Command:
    """Command record as the dashboard sees it.

    ``name``, ``description`` and ``category`` may be overwritten by a sync
    with Discord. ``enabled``, ``usage_count`` and ``last_used`` are owned by
    the dashboard and survive every sync.
    """

    id: str
    name: str
    description: str
    category: str
    usage_count: int = 0
    enabled: bool = True
    last_used: datetime | None = None


@dataclass
class ExternalCommand:
    """Command definition as returned by Discord (no local state)."""

    id: str
    name: str
    description: str
    category: str
