from screenings.domain.models import (
    Movie,
    Occupancy,
    Page,
    Room,
    Screening,
    ScreeningFilter,
    Ticket,
)
from screenings.domain.policy import CLEANING_BUFFER, SchedulingPolicy
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

__all__ = [
    "Movie",
    "Occupancy",
    "Page",
    "Room",
    "Screening",
    "ScreeningFilter",
    "Ticket",
    "CLEANING_BUFFER",
    "SchedulingPolicy",
    "Capacity",
    "MovieId",
    "RoomId",
    "Runtime",
    "ScreeningId",
    "TicketId",
    "TicketKind",
    "TimeWindow",
]
