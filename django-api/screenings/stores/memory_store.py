"""In-memory implementations of the stores.

Used by the service unit tests; behaves like the Django stores without a
database.
"""

import itertools
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from screenings.domain import (
    Capacity,
    Movie,
    MovieId,
    Room,
    RoomId,
    Runtime,
    Screening,
    ScreeningFilter,
    ScreeningId,
    Ticket,
    TicketId,
    TicketKind,
    TimeWindow,
)
from screenings.stores.interfaces import (
    MovieCatalog,
    RoomDirectory,
    ScreeningRepository,
    TicketStore,
)
from screenings.stores.locks import KeyedLocks


class InMemoryRoomDirectory(RoomDirectory):
    def __init__(self) -> None:
        self._rooms: dict[RoomId, Room] = {}
        self._ids = itertools.count(1)

    def add_room(self, name: str, capacity: int, maintenance: bool = False) -> Room:
        room = Room(
            id=RoomId(next(self._ids)),
            name=name,
            capacity=Capacity(capacity),
            maintenance=maintenance,
        )
        self._rooms[room.id] = room
        return room

    def get_by_id(self, room_id: RoomId) -> Room | None:
        return self._rooms.get(room_id)

    def get_by_name(self, name: str) -> Room | None:
        return next((room for room in self._rooms.values() if room.name == name), None)


class InMemoryMovieCatalog(MovieCatalog):
    def __init__(self) -> None:
        self._movies: dict[MovieId, Movie] = {}
        self._ids = itertools.count(1)

    def add_movie(self, title: str, duration_ms: int) -> Movie:
        movie = Movie(id=MovieId(next(self._ids)), title=title, runtime=Runtime(duration_ms))
        self._movies[movie.id] = movie
        return movie

    def get_movie(self, movie_id: MovieId) -> Movie | None:
        return self._movies.get(movie_id)


class InMemoryScreeningRepository(ScreeningRepository):
    def __init__(self) -> None:
        self._screenings: dict[ScreeningId, Screening] = {}
        self._ids = itertools.count(1)
        self._guard = threading.Lock()
        self._locks = KeyedLocks()

    def get_screening(self, screening_id: ScreeningId) -> Screening | None:
        return self._screenings.get(screening_id)

    def find_overlapping(
        self,
        room_id: RoomId,
        window: TimeWindow,
        exclude: ScreeningId | None = None,
    ) -> list[Screening]:
        return [
            screening
            for screening in self.all()
            if screening.room_id == room_id
            and screening.id != exclude
            and screening.window.overlaps(window)
        ]

    def save(self, screening: Screening) -> Screening:
        with self._guard:
            if screening.id is None:
                screening = replace(screening, id=ScreeningId(next(self._ids)))
            self._screenings[screening.id] = screening
        return screening

    def delete(self, screening_id: ScreeningId) -> bool:
        with self._guard:
            return self._screenings.pop(screening_id, None) is not None

    def list_screenings(
        self, filters: ScreeningFilter, offset: int, limit: int
    ) -> tuple[list[Screening], int]:
        matching = sorted(
            (screening for screening in self.all() if filters.matches(screening)),
            key=lambda screening: (screening.starts_at, screening.id.value),
        )
        return matching[offset : offset + limit], len(matching)

    def all(self) -> list[Screening]:
        with self._guard:
            return list(self._screenings.values())

    @contextmanager
    def lock_room(self, room_id: RoomId) -> Iterator[None]:
        with self._locks.hold(("room", room_id.value)):
            yield


class InMemoryTicketStore(TicketStore):
    def __init__(self) -> None:
        self._tickets: dict[TicketId, Ticket] = {}
        self._ids = itertools.count(1)
        self._guard = threading.Lock()
        self._locks = KeyedLocks()

    def add_ticket(self, kind: TicketKind = TicketKind.CLASSIC) -> Ticket:
        ticket = Ticket(id=TicketId(next(self._ids)), kind=kind)
        with self._guard:
            self._tickets[ticket.id] = ticket
        return ticket

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        return self._tickets.get(ticket_id)

    def count_for_screening(self, screening_id: ScreeningId) -> int:
        with self._guard:
            return sum(screening_id in ticket.screening_ids for ticket in self._tickets.values())

    def add_screening(self, ticket_id: TicketId, screening_id: ScreeningId) -> Ticket:
        with self._guard:
            ticket = self._tickets[ticket_id]
            ticket = replace(ticket, screening_ids=ticket.screening_ids | {screening_id})
            self._tickets[ticket_id] = ticket
        return ticket

    def set_kind(self, ticket_id: TicketId, kind: TicketKind) -> Ticket:
        with self._guard:
            ticket = replace(self._tickets[ticket_id], kind=kind)
            self._tickets[ticket_id] = ticket
        return ticket

    @contextmanager
    def lock_screening(self, screening_id: ScreeningId) -> Iterator[None]:
        with self._locks.hold(("screening", screening_id.value)):
            yield

    @contextmanager
    def lock_ticket(self, ticket_id: TicketId) -> Iterator[None]:
        with self._locks.hold(("ticket", ticket_id.value)):
            yield
