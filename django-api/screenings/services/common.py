"""Input coercion shared by the services."""

from datetime import datetime
from typing import TypeVar

from django.utils.dateparse import parse_datetime

from screenings.domain.errors import InvalidIdentifierError, InvalidStartTimeError
from screenings.domain.value_objects import MovieId, RoomId, ScreeningId, TicketId

IdT = TypeVar("IdT", ScreeningId, RoomId, MovieId, TicketId)


def parse_id(id_type: type[IdT], value: IdT | int | str, field: str) -> IdT:
    """Coerce a raw identifier, raising InvalidIdentifierError if malformed."""
    if isinstance(value, id_type):
        return value
    try:
        return id_type.parse(value)
    except (TypeError, ValueError):
        raise InvalidIdentifierError(field) from None


def parse_timestamp(value: datetime | str) -> datetime:
    """Accept a datetime or an ISO 8601 string."""
    if isinstance(value, datetime):
        return value
    try:
        parsed = parse_datetime(value) if isinstance(value, str) else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidStartTimeError()
    return parsed
