"""Wire services to the Django stores using project settings."""

from datetime import timedelta
from zoneinfo import ZoneInfo

from django.conf import settings

from screenings.domain import SchedulingPolicy
from screenings.services.scheduling_service import ScreeningService
from screenings.services.ticket_service import TicketService
from screenings.stores.django_store import (
    DjangoMovieCatalog,
    DjangoRoomDirectory,
    DjangoScreeningRepository,
    DjangoTicketStore,
)


def policy_from_settings() -> SchedulingPolicy:
    config = getattr(settings, "SCREENINGS", {})
    return SchedulingPolicy(
        opening_hour=config.get("OPENING_HOUR", 9),
        closing_hour=config.get("CLOSING_HOUR", 20),
        cleaning_buffer=timedelta(minutes=config.get("CLEANING_BUFFER_MINUTES", 30)),
        time_zone=ZoneInfo(settings.TIME_ZONE),
    )


def build_screening_service() -> ScreeningService:
    return ScreeningService(
        screenings=DjangoScreeningRepository(),
        rooms=DjangoRoomDirectory(),
        movies=DjangoMovieCatalog(),
        tickets=DjangoTicketStore(),
        policy=policy_from_settings(),
    )


def build_ticket_service() -> TicketService:
    return TicketService(
        tickets=DjangoTicketStore(),
        screenings=DjangoScreeningRepository(),
        rooms=DjangoRoomDirectory(),
    )
