"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from screenings.domain import (
    Movie,
    MovieId,
    Room,
    RoomId,
    Screening,
    ScreeningFilter,
    ScreeningId,
    Ticket,
    TicketId,
    TicketKind,
    TimeWindow,
)


class RoomDirectory(ABC):
    """Read-only lookup of rooms."""

    @abstractmethod
    def get_by_id(self, room_id: RoomId) -> Room | None:
        ...

    @abstractmethod
    def get_by_name(self, name: str) -> Room | None:
        """Return the room with this exact name, or None."""
        ...


class MovieCatalog(ABC):
    """Read-only lookup of movies."""

    @abstractmethod
    def get_movie(self, movie_id: MovieId) -> Movie | None:
        ...


class ScreeningRepository(ABC):
    """Interface for screening persistence operations."""

    @abstractmethod
    def get_screening(self, screening_id: ScreeningId) -> Screening | None:
        """Return a screening by ID, or None if not found."""
        ...

    @abstractmethod
    def find_overlapping(
        self,
        room_id: RoomId,
        window: TimeWindow,
        exclude: ScreeningId | None = None,
    ) -> list[Screening]:
        """Return screenings in the room whose window overlaps ``window``.

        The screening with id ``exclude`` is never returned.
        """
        ...

    @abstractmethod
    def save(self, screening: Screening) -> Screening:
        """Insert (id is None) or update a screening and return the stored copy."""
        ...

    @abstractmethod
    def delete(self, screening_id: ScreeningId) -> bool:
        """Delete a screening. Return False if nothing was deleted."""
        ...

    @abstractmethod
    def list_screenings(
        self, filters: ScreeningFilter, offset: int, limit: int
    ) -> tuple[list[Screening], int]:
        """Return one slice of matching screenings ordered by starts_at, and the total count."""
        ...

    @abstractmethod
    def lock_room(self, room_id: RoomId) -> AbstractContextManager[None]:
        """Serialize scan-then-write sequences on one room."""
        ...


class TicketStore(ABC):
    """Interface for tickets and their attached screenings."""

    @abstractmethod
    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        ...

    @abstractmethod
    def count_for_screening(self, screening_id: ScreeningId) -> int:
        """Return how many tickets are attached to a screening."""
        ...

    @abstractmethod
    def add_screening(self, ticket_id: TicketId, screening_id: ScreeningId) -> Ticket:
        ...

    @abstractmethod
    def set_kind(self, ticket_id: TicketId, kind: TicketKind) -> Ticket:
        ...

    @abstractmethod
    def lock_screening(self, screening_id: ScreeningId) -> AbstractContextManager[None]:
        """Serialize attachments to one screening."""
        ...

    @abstractmethod
    def lock_ticket(self, ticket_id: TicketId) -> AbstractContextManager[None]:
        """Serialize changes to one ticket."""
        ...
