"""Domain error codes for the screenings module.

Every concrete error derives from exactly one kind (NotFoundError,
InvalidRequestError or ConflictError) so callers can render the three
categories differently without inspecting codes.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SCREENING_NOT_FOUND = "SCREENING_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    MOVIE_NOT_FOUND = "MOVIE_NOT_FOUND"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_START_TIME = "INVALID_START_TIME"
    INVALID_ROOM_REFERENCE = "INVALID_ROOM_REFERENCE"
    OUTSIDE_OPERATING_HOURS = "OUTSIDE_OPERATING_HOURS"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    INVALID_TICKET_TYPE = "INVALID_TICKET_TYPE"
    SCHEDULE_CONFLICT = "SCHEDULE_CONFLICT"
    TICKET_ALREADY_ATTACHED = "TICKET_ALREADY_ATTACHED"
    TICKET_EXHAUSTED = "TICKET_EXHAUSTED"
    SCREENING_FULL = "SCREENING_FULL"
    ILLEGAL_DOWNGRADE = "ILLEGAL_DOWNGRADE"
    SCREENING_HAS_TICKETS = "SCREENING_HAS_TICKETS"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """A referenced screening, room, movie or ticket does not exist."""


class InvalidRequestError(DomainError):
    """The request is malformed or violates a scheduling rule on its own."""


class ConflictError(DomainError):
    """The request clashes with the current state."""


class ScreeningNotFoundError(NotFoundError):
    def __init__(self, screening_id: object) -> None:
        super().__init__(
            code=ErrorCode.SCREENING_NOT_FOUND,
            message="Screening not found",
        )
        self.screening_id = screening_id


class RoomNotFoundError(NotFoundError):
    def __init__(self, room_ref: object) -> None:
        super().__init__(code=ErrorCode.ROOM_NOT_FOUND, message="Room not found")
        self.room_ref = room_ref


class MovieNotFoundError(NotFoundError):
    def __init__(self, movie_id: object) -> None:
        super().__init__(code=ErrorCode.MOVIE_NOT_FOUND, message="Movie not found")
        self.movie_id = movie_id


class TicketNotFoundError(NotFoundError):
    def __init__(self, ticket_id: object) -> None:
        super().__init__(code=ErrorCode.TICKET_NOT_FOUND, message="Ticket not found")
        self.ticket_id = ticket_id


class InvalidIdentifierError(InvalidRequestError):
    """Raised when an identifier is not a positive integer."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_IDENTIFIER,
            message=f"Invalid {field} format",
        )
        self.field = field


class InvalidStartTimeError(InvalidRequestError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_START_TIME,
            message="startsAt should be an ISO 8601 timestamp",
        )


class InvalidRoomReferenceError(InvalidRequestError):
    """Raised when a room is referenced by both id and name, or by neither."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ROOM_REFERENCE,
            message="Exactly one of roomId or roomName must be given",
        )


class OutsideOperatingHoursError(InvalidRequestError):
    def __init__(self, opening_hour: int, closing_hour: int) -> None:
        super().__init__(
            code=ErrorCode.OUTSIDE_OPERATING_HOURS,
            message=(
                f"Screenings must start at {opening_hour}:00 or later "
                f"and end before {closing_hour + 1}:00"
            ),
        )


class InvalidPaginationError(InvalidRequestError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PAGINATION,
            message="page must be >= 1 and limit between 1 and 100",
        )


class InvalidTicketTypeError(InvalidRequestError):
    def __init__(self, value: object) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TICKET_TYPE,
            message="Ticket type must be classic or super",
        )
        self.value = value


class ScheduleConflictError(ConflictError):
    """Raised when a screening would overlap another one in the same room."""

    def __init__(self, room_id: object, conflicting_ids: Iterable[object]) -> None:
        super().__init__(
            code=ErrorCode.SCHEDULE_CONFLICT,
            message="A screening is already planned in this room in this time slot",
        )
        self.room_id = room_id
        self.conflicting_ids = tuple(conflicting_ids)


class TicketAlreadyAttachedError(ConflictError):
    def __init__(self, ticket_id: object, screening_id: object) -> None:
        super().__init__(
            code=ErrorCode.TICKET_ALREADY_ATTACHED,
            message="Ticket is already used for this screening",
        )
        self.ticket_id = ticket_id
        self.screening_id = screening_id


class TicketExhaustedError(ConflictError):
    def __init__(self, ticket_id: object) -> None:
        super().__init__(
            code=ErrorCode.TICKET_EXHAUSTED,
            message="Ticket already used",
        )
        self.ticket_id = ticket_id


class ScreeningFullError(ConflictError):
    def __init__(self, screening_id: object) -> None:
        super().__init__(
            code=ErrorCode.SCREENING_FULL,
            message="Screening is full",
        )
        self.screening_id = screening_id


class IllegalDowngradeError(ConflictError):
    """Raised when a super ticket used more than once would become classic."""

    def __init__(self, ticket_id: object) -> None:
        super().__init__(
            code=ErrorCode.ILLEGAL_DOWNGRADE,
            message="Super ticket is already used more than once, it cannot become classic",
        )
        self.ticket_id = ticket_id


class ScreeningHasTicketsError(ConflictError):
    def __init__(self, screening_id: object) -> None:
        super().__init__(
            code=ErrorCode.SCREENING_HAS_TICKETS,
            message="Screening has tickets attached and cannot be moved or deleted",
        )
        self.screening_id = screening_id


class ConcurrentModificationError(ConflictError):
    def __init__(self, screening_id: object) -> None:
        super().__init__(
            code=ErrorCode.CONCURRENT_MODIFICATION,
            message="Screening was modified concurrently, retry the request",
        )
        self.screening_id = screening_id
