"""Shared test helpers."""

from datetime import datetime, timezone


def at(hour: int, minute: int = 0, day: int = 12) -> datetime:
    """A UTC timestamp in May 2025."""
    return datetime(2025, 5, day, hour, minute, tzinfo=timezone.utc)
