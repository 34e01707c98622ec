"""Django ORM implementation of the stores.

Locks combine a process-wide KeyedLocks entry with a row lock taken by
select_for_update inside transaction.atomic(), so scan-then-write sequences
are serialized within the process and, on databases with row locks, across
processes.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from django.db import transaction

from screenings import models
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

_locks = KeyedLocks()


def _room_to_domain(record: models.Room) -> Room:
    return Room(
        id=RoomId(record.pk),
        name=record.name,
        capacity=Capacity(record.capacity),
        maintenance=record.maintenance,
    )


def _screening_to_domain(record: models.Screening) -> Screening:
    return Screening(
        id=ScreeningId(record.pk),
        room_id=RoomId(record.room_id),
        movie_id=MovieId(record.movie_id),
        starts_at=record.starts_at,
        ends_at=record.ends_at,
    )


def _ticket_to_domain(record: models.Ticket) -> Ticket:
    screening_ids = record.screenings.values_list("pk", flat=True)
    return Ticket(
        id=TicketId(record.pk),
        kind=TicketKind(record.kind),
        screening_ids=frozenset(ScreeningId(pk) for pk in screening_ids),
    )


class DjangoRoomDirectory(RoomDirectory):
    """Room lookups backed by the rooms table."""

    def get_by_id(self, room_id: RoomId) -> Room | None:
        record = models.Room.objects.filter(pk=room_id.value).first()
        return _room_to_domain(record) if record else None

    def get_by_name(self, name: str) -> Room | None:
        record = models.Room.objects.filter(name=name).first()
        return _room_to_domain(record) if record else None


class DjangoMovieCatalog(MovieCatalog):
    """Movie lookups backed by the movies table."""

    def get_movie(self, movie_id: MovieId) -> Movie | None:
        record = models.Movie.objects.filter(pk=movie_id.value).first()
        if record is None:
            return None
        return Movie(
            id=MovieId(record.pk),
            title=record.title,
            runtime=Runtime(record.duration_ms),
        )


class DjangoScreeningRepository(ScreeningRepository):
    """Screening persistence using Django ORM."""

    def get_screening(self, screening_id: ScreeningId) -> Screening | None:
        record = models.Screening.objects.filter(pk=screening_id.value).first()
        return _screening_to_domain(record) if record else None

    def find_overlapping(
        self,
        room_id: RoomId,
        window: TimeWindow,
        exclude: ScreeningId | None = None,
    ) -> list[Screening]:
        queryset = models.Screening.objects.filter(
            room_id=room_id.value,
            starts_at__lt=window.ends_at,
            ends_at__gt=window.starts_at,
        )
        if exclude is not None:
            queryset = queryset.exclude(pk=exclude.value)
        return [_screening_to_domain(record) for record in queryset]

    def save(self, screening: Screening) -> Screening:
        if screening.id is None:
            record = models.Screening(
                room_id=screening.room_id.value,
                movie_id=screening.movie_id.value,
                starts_at=screening.starts_at,
                ends_at=screening.ends_at,
            )
        else:
            record = models.Screening.objects.get(pk=screening.id.value)
            record.room_id = screening.room_id.value
            record.movie_id = screening.movie_id.value
            record.starts_at = screening.starts_at
            record.ends_at = screening.ends_at
        record.save()
        return _screening_to_domain(record)

    def delete(self, screening_id: ScreeningId) -> bool:
        deleted, _ = models.Screening.objects.filter(pk=screening_id.value).delete()
        return deleted > 0

    def list_screenings(
        self, filters: ScreeningFilter, offset: int, limit: int
    ) -> tuple[list[Screening], int]:
        queryset = models.Screening.objects.order_by("starts_at", "id")
        if filters.room_id is not None:
            queryset = queryset.filter(room_id=filters.room_id.value)
        if filters.movie_id is not None:
            queryset = queryset.filter(movie_id=filters.movie_id.value)
        if filters.starts_after is not None:
            queryset = queryset.filter(starts_at__gte=filters.starts_after)
        if filters.starts_before is not None:
            queryset = queryset.filter(starts_at__lte=filters.starts_before)
        if filters.ends_after is not None:
            queryset = queryset.filter(ends_at__gte=filters.ends_after)
        if filters.ends_before is not None:
            queryset = queryset.filter(ends_at__lte=filters.ends_before)
        total = queryset.count()
        records = queryset[offset : offset + limit]
        return [_screening_to_domain(record) for record in records], total

    @contextmanager
    def lock_room(self, room_id: RoomId) -> Iterator[None]:
        with _locks.hold(("room", room_id.value)), transaction.atomic():
            list(
                models.Room.objects.select_for_update()
                .filter(pk=room_id.value)
                .values_list("pk", flat=True)
            )
            yield


class DjangoTicketStore(TicketStore):
    """Ticket persistence using Django ORM."""

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        record = models.Ticket.objects.filter(pk=ticket_id.value).first()
        return _ticket_to_domain(record) if record else None

    def count_for_screening(self, screening_id: ScreeningId) -> int:
        return models.Ticket.objects.filter(screenings=screening_id.value).count()

    def add_screening(self, ticket_id: TicketId, screening_id: ScreeningId) -> Ticket:
        record = models.Ticket.objects.get(pk=ticket_id.value)
        record.screenings.add(screening_id.value)
        record.save(update_fields=["updated_at"])
        return _ticket_to_domain(record)

    def set_kind(self, ticket_id: TicketId, kind: TicketKind) -> Ticket:
        record = models.Ticket.objects.get(pk=ticket_id.value)
        record.kind = kind.value
        record.save(update_fields=["kind", "updated_at"])
        return _ticket_to_domain(record)

    @contextmanager
    def lock_screening(self, screening_id: ScreeningId) -> Iterator[None]:
        with _locks.hold(("screening", screening_id.value)), transaction.atomic():
            list(
                models.Screening.objects.select_for_update()
                .filter(pk=screening_id.value)
                .values_list("pk", flat=True)
            )
            yield

    @contextmanager
    def lock_ticket(self, ticket_id: TicketId) -> Iterator[None]:
        with _locks.hold(("ticket", ticket_id.value)), transaction.atomic():
            list(
                models.Ticket.objects.select_for_update()
                .filter(pk=ticket_id.value)
                .values_list("pk", flat=True)
            )
            yield
