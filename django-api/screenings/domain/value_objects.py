"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Self


@dataclass(frozen=True)
class _IntegerId:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"{type(self).__name__} must be an integer")
        if self.value < 1:
            raise ValueError(f"{type(self).__name__} must be positive")

    @classmethod
    def parse(cls, value: int | str) -> Self:
        """Build an identifier from an int or a decimal string."""
        if isinstance(value, str):
            value = value.strip()
            if not value.isdigit():
                raise ValueError(f"Invalid {cls.__name__}: {value!r}")
            value = int(value)
        return cls(value=value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ScreeningId(_IntegerId):
    """Unique identifier for a Screening."""


@dataclass(frozen=True)
class RoomId(_IntegerId):
    """Unique identifier for a Room."""


@dataclass(frozen=True)
class MovieId(_IntegerId):
    """Unique identifier for a Movie."""


@dataclass(frozen=True)
class TicketId(_IntegerId):
    """Unique identifier for a Ticket."""


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class Runtime:
    """Length of a movie in milliseconds."""

    milliseconds: int

    def __post_init__(self) -> None:
        if self.milliseconds < 0:
            raise ValueError("Runtime cannot be negative")

    def as_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.milliseconds)


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [starts_at, ends_at)."""

    starts_at: datetime
    ends_at: datetime

    def __post_init__(self) -> None:
        if self.ends_at <= self.starts_at:
            raise ValueError("A time window must end after it starts")

    def overlaps(self, other: "TimeWindow") -> bool:
        """Touching windows (one ends exactly when the other starts) do not overlap."""
        return self.starts_at < other.ends_at and other.starts_at < self.ends_at


class TicketKind(Enum):
    """Ticket types and how many screenings each may be used for."""

    CLASSIC = "classic"
    SUPER = "super"

    @property
    def max_screenings(self) -> int:
        return 10 if self is TicketKind.SUPER else 1
