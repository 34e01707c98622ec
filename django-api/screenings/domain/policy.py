"""Scheduling rules: end-time arithmetic and the operating-hours window."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, tzinfo

from screenings.domain.value_objects import Runtime, TimeWindow

CLEANING_BUFFER = timedelta(minutes=30)
OPENING_HOUR = 9
CLOSING_HOUR = 20


@dataclass(frozen=True)
class SchedulingPolicy:
    """How long a screening occupies a room and when rooms are open.

    Operating hours only look at the wall-clock hour of each end of the
    window: a screening may start from ``opening_hour``:00 and may end
    anywhere inside ``closing_hour`` (20:59 is accepted, 21:00 is not).
    Aware timestamps are read in ``time_zone``; naive ones are taken as
    already local.
    """

    opening_hour: int = OPENING_HOUR
    closing_hour: int = CLOSING_HOUR
    cleaning_buffer: timedelta = CLEANING_BUFFER
    time_zone: tzinfo = field(default=timezone.utc)

    def __post_init__(self) -> None:
        if not 0 <= self.opening_hour <= self.closing_hour <= 23:
            raise ValueError("Operating hours must satisfy 0 <= opening <= closing <= 23")
        if self.cleaning_buffer < timedelta(0):
            raise ValueError("Cleaning buffer cannot be negative")

    def compute_ends_at(self, starts_at: datetime, runtime: Runtime) -> datetime:
        return starts_at + runtime.as_timedelta() + self.cleaning_buffer

    def window_for(self, starts_at: datetime, runtime: Runtime) -> TimeWindow:
        return TimeWindow(starts_at=starts_at, ends_at=self.compute_ends_at(starts_at, runtime))

    def local_hour(self, moment: datetime) -> int:
        if moment.tzinfo is None:
            return moment.hour
        return moment.astimezone(self.time_zone).hour

    def within_operating_hours(self, window: TimeWindow) -> bool:
        return (
            self.local_hour(window.starts_at) >= self.opening_hour
            and self.local_hour(window.ends_at) <= self.closing_hour
        )
