"""Data models for dashboard statistics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BotStats:
    server_count: int
    user_count: int
    uptime: int
    commands_today: int
    messages_processed: int
    active_channels: int


@dataclass
class ChartPoint:
    date: str
    commands: int
    messages: int
