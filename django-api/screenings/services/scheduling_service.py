"""Screening scheduler - all scheduling business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Every check runs before the first write, and the overlap scan and the write
happen under the target room's lock.
"""

import logging
from dataclasses import replace
from datetime import datetime

from screenings.domain import (
    Movie,
    MovieId,
    Page,
    Room,
    RoomId,
    SchedulingPolicy,
    Screening,
    ScreeningFilter,
    ScreeningId,
    TimeWindow,
)
from screenings.domain.errors import (
    ConcurrentModificationError,
    InvalidPaginationError,
    InvalidRoomReferenceError,
    MovieNotFoundError,
    OutsideOperatingHoursError,
    RoomNotFoundError,
    ScheduleConflictError,
    ScreeningHasTicketsError,
    ScreeningNotFoundError,
)
from screenings.services.common import parse_id, parse_timestamp
from screenings.stores.interfaces import (
    MovieCatalog,
    RoomDirectory,
    ScreeningRepository,
    TicketStore,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class ScreeningService:
    """Places screenings into rooms without overlaps and inside operating hours."""

    def __init__(
        self,
        screenings: ScreeningRepository,
        rooms: RoomDirectory,
        movies: MovieCatalog,
        tickets: TicketStore,
        policy: SchedulingPolicy | None = None,
    ) -> None:
        self._screenings = screenings
        self._rooms = rooms
        self._movies = movies
        self._tickets = tickets
        self._policy = policy or SchedulingPolicy()

    @property
    def policy(self) -> SchedulingPolicy:
        return self._policy

    def get_screening(self, screening_id: ScreeningId | int | str) -> Screening:
        """Return a screening by ID.

        Raises:
            InvalidIdentifierError: If the screening_id is not a positive integer.
            ScreeningNotFoundError: If the screening does not exist.
        """
        return self._get(parse_id(ScreeningId, screening_id, "screening ID"))

    def list_screenings(
        self,
        room_id: RoomId | int | str | None = None,
        room_name: str | None = None,
        movie_id: MovieId | int | str | None = None,
        starts_after: datetime | None = None,
        starts_before: datetime | None = None,
        ends_after: datetime | None = None,
        ends_before: datetime | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Screening]:
        """Return one page of screenings ordered by start time.

        An unknown room_name matches nothing. Naive time bounds are read in the
        policy's time zone.
        """
        if page < 1 or not 1 <= limit <= MAX_PAGE_SIZE:
            raise InvalidPaginationError()

        resolved_room_id = parse_id(RoomId, room_id, "room ID") if room_id is not None else None
        if room_name is not None:
            room = self._rooms.get_by_name(room_name)
            if room is None or (resolved_room_id is not None and room.id != resolved_room_id):
                return Page(items=(), total=0, page=page, limit=limit)
            resolved_room_id = room.id

        filters = ScreeningFilter(
            room_id=resolved_room_id,
            movie_id=parse_id(MovieId, movie_id, "movie ID") if movie_id is not None else None,
            starts_after=self._localize(starts_after),
            starts_before=self._localize(starts_before),
            ends_after=self._localize(ends_after),
            ends_before=self._localize(ends_before),
        )
        items, total = self._screenings.list_screenings(filters, (page - 1) * limit, limit)
        return Page(items=tuple(items), total=total, page=page, limit=limit)

    def create_screening(
        self,
        starts_at: datetime | str,
        movie_id: MovieId | int | str,
        room_id: RoomId | int | str | None = None,
        room_name: str | None = None,
    ) -> Screening:
        """Schedule a movie in a room.

        Raises:
            InvalidStartTimeError: If starts_at is not a valid timestamp.
            InvalidRoomReferenceError: Unless exactly one of room_id / room_name is given.
            MovieNotFoundError / RoomNotFoundError: If a reference does not resolve.
            OutsideOperatingHoursError: If the window leaves the operating hours.
            ScheduleConflictError: If another screening in the room overlaps.
        """
        if (room_id is None) == (room_name is None):
            raise InvalidRoomReferenceError()

        start = self._parse_start(starts_at)
        movie = self._get_movie(movie_id)
        room = self._resolve_room(room_id, room_name)
        window = self._policy.window_for(start, movie.runtime)
        self._check_operating_hours(window)

        with self._screenings.lock_room(room.id):
            self._check_no_overlap(room.id, window)
            screening = self._screenings.save(
                Screening(
                    id=None,
                    room_id=room.id,
                    movie_id=movie.id,
                    starts_at=window.starts_at,
                    ends_at=window.ends_at,
                )
            )

        logger.info(
            "Scheduled screening %s of movie %s in room %s from %s to %s",
            screening.id,
            movie.id,
            room.id,
            screening.starts_at.isoformat(),
            screening.ends_at.isoformat(),
        )
        return screening

    def patch_screening(
        self,
        screening_id: ScreeningId | int | str,
        starts_at: datetime | str | None = None,
        movie_id: MovieId | int | str | None = None,
        room_id: RoomId | int | str | None = None,
        room_name: str | None = None,
    ) -> Screening:
        """Change the start, movie or room of a screening.

        Omitted fields keep their stored value. The end time is recomputed
        when the start or the movie is given. The screening never conflicts
        with itself.

        Raises:
            ScreeningNotFoundError: If the screening does not exist.
            ScreeningHasTicketsError: If tickets are attached and the schedule changes.
            ConcurrentModificationError: If the screening changed while validating.
            plus every error create_screening raises.
        """
        if room_id is not None and room_name is not None:
            raise InvalidRoomReferenceError()

        sid = parse_id(ScreeningId, screening_id, "screening ID")
        current = self._get(sid)

        start = self._parse_start(starts_at) if starts_at is not None else current.starts_at
        target_room_id = current.room_id
        if room_id is not None or room_name is not None:
            target_room_id = self._resolve_room(room_id, room_name).id

        target_movie_id = current.movie_id
        window = current.window
        if starts_at is not None or movie_id is not None:
            movie = self._get_movie(movie_id if movie_id is not None else current.movie_id)
            target_movie_id = movie.id
            window = self._policy.window_for(start, movie.runtime)
        self._check_operating_hours(window)

        updated = replace(
            current,
            room_id=target_room_id,
            movie_id=target_movie_id,
            starts_at=window.starts_at,
            ends_at=window.ends_at,
        )

        with self._screenings.lock_room(target_room_id), self._tickets.lock_screening(sid):
            fresh = self._screenings.get_screening(sid)
            if fresh is None:
                raise ScreeningNotFoundError(sid)
            if fresh != current:
                raise ConcurrentModificationError(sid)
            if updated != current and self._tickets.count_for_screening(sid) > 0:
                logger.warning("Refused to reschedule screening %s with tickets attached", sid)
                raise ScreeningHasTicketsError(sid)
            self._check_no_overlap(target_room_id, window, exclude=sid)
            screening = self._screenings.save(updated)

        logger.info(
            "Updated screening %s: room %s, movie %s, from %s to %s",
            sid,
            screening.room_id,
            screening.movie_id,
            screening.starts_at.isoformat(),
            screening.ends_at.isoformat(),
        )
        return screening

    def delete_screening(self, screening_id: ScreeningId | int | str) -> None:
        """Delete a screening that has no tickets attached.

        Raises:
            ScreeningNotFoundError: If the screening does not exist.
            ScreeningHasTicketsError: If tickets are attached.
        """
        sid = parse_id(ScreeningId, screening_id, "screening ID")
        current = self._get(sid)

        with self._screenings.lock_room(current.room_id), self._tickets.lock_screening(sid):
            if self._tickets.count_for_screening(sid) > 0:
                logger.warning("Refused to delete screening %s with tickets attached", sid)
                raise ScreeningHasTicketsError(sid)
            if not self._screenings.delete(sid):
                raise ScreeningNotFoundError(sid)

        logger.info("Deleted screening %s", sid)

    def _get(self, screening_id: ScreeningId) -> Screening:
        screening = self._screenings.get_screening(screening_id)
        if screening is None:
            raise ScreeningNotFoundError(screening_id)
        return screening

    def _parse_start(self, starts_at: datetime | str) -> datetime:
        return self._localize(parse_timestamp(starts_at))

    def _localize(self, moment: datetime | None) -> datetime | None:
        if moment is not None and moment.tzinfo is None:
            # naive input is wall-clock time in the cinema's zone
            return moment.replace(tzinfo=self._policy.time_zone)
        return moment

    def _get_movie(self, movie_id: MovieId | int | str) -> Movie:
        mid = parse_id(MovieId, movie_id, "movie ID")
        movie = self._movies.get_movie(mid)
        if movie is None:
            raise MovieNotFoundError(mid)
        return movie

    def _resolve_room(self, room_id: RoomId | int | str | None, room_name: str | None) -> Room:
        if room_id is not None:
            rid = parse_id(RoomId, room_id, "room ID")
            room = self._rooms.get_by_id(rid)
            if room is None:
                raise RoomNotFoundError(rid)
            return room
        room = self._rooms.get_by_name(room_name)
        if room is None:
            raise RoomNotFoundError(room_name)
        return room

    def _check_operating_hours(self, window: TimeWindow) -> None:
        if not self._policy.within_operating_hours(window):
            raise OutsideOperatingHoursError(self._policy.opening_hour, self._policy.closing_hour)

    def _check_no_overlap(
        self,
        room_id: RoomId,
        window: TimeWindow,
        exclude: ScreeningId | None = None,
    ) -> None:
        conflicts = self._screenings.find_overlapping(room_id, window, exclude=exclude)
        if conflicts:
            conflicting_ids = [screening.id for screening in conflicts]
            logger.warning(
                "Schedule conflict in room %s for %s-%s with screenings %s",
                room_id,
                window.starts_at.isoformat(),
                window.ends_at.isoformat(),
                ", ".join(str(sid) for sid in conflicting_ids),
            )
            raise ScheduleConflictError(room_id, conflicting_ids)
