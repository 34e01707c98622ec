from screenings.handlers.views import (
    ScreeningDetailView,
    ScreeningListView,
    ScreeningTicketsView,
    TicketDetailView,
)

__all__ = [
    "ScreeningDetailView",
    "ScreeningListView",
    "ScreeningTicketsView",
    "TicketDetailView",
]
