"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in screenings/models.py (persistence layer).
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from screenings.domain.value_objects import (
    Capacity,
    MovieId,
    RoomId,
    Runtime,
    ScreeningId,
    TicketId,
    TicketKind,
    TimeWindow,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Room:
    """Domain representation of a Room."""

    id: RoomId
    name: str
    capacity: Capacity
    maintenance: bool = False


@dataclass(frozen=True)
class Movie:
    """Domain representation of a Movie."""

    id: MovieId
    title: str
    runtime: Runtime


@dataclass(frozen=True)
class Screening:
    """Domain representation of a Screening.

    ``id`` is None until the screening has been saved.
    """

    id: ScreeningId | None
    room_id: RoomId
    movie_id: MovieId
    starts_at: datetime
    ends_at: datetime

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(starts_at=self.starts_at, ends_at=self.ends_at)


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a Ticket and the screenings it is used for."""

    id: TicketId
    kind: TicketKind
    screening_ids: frozenset[ScreeningId] = frozenset()

    @property
    def uses(self) -> int:
        return len(self.screening_ids)

    @property
    def remaining_uses(self) -> int:
        return max(self.kind.max_screenings - self.uses, 0)


@dataclass(frozen=True)
class Occupancy:
    """Attached tickets versus seats for one screening."""

    screening_id: ScreeningId
    attached: int
    capacity: int

    @property
    def is_full(self) -> bool:
        return self.attached >= self.capacity

    @property
    def available(self) -> int:
        return max(self.capacity - self.attached, 0)


@dataclass(frozen=True)
class ScreeningFilter:
    """Listing criteria. Time bounds are inclusive."""

    room_id: RoomId | None = None
    movie_id: MovieId | None = None
    starts_after: datetime | None = None
    starts_before: datetime | None = None
    ends_after: datetime | None = None
    ends_before: datetime | None = None

    def matches(self, screening: Screening) -> bool:
        if self.room_id is not None and screening.room_id != self.room_id:
            return False
        if self.movie_id is not None and screening.movie_id != self.movie_id:
            return False
        if self.starts_after is not None and screening.starts_at < self.starts_after:
            return False
        if self.starts_before is not None and screening.starts_at > self.starts_before:
            return False
        if self.ends_after is not None and screening.ends_at < self.ends_after:
            return False
        if self.ends_before is not None and screening.ends_at > self.ends_before:
            return False
        return True


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing."""

    items: tuple[T, ...]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)
