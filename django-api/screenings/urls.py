from django.urls import path

from screenings.handlers import (
    ScreeningDetailView,
    ScreeningListView,
    ScreeningTicketsView,
    TicketDetailView,
)

urlpatterns = [
    path("screenings", ScreeningListView.as_view(), name="screening-list"),
    path(
        "screenings/<str:screening_id>",
        ScreeningDetailView.as_view(),
        name="screening-detail",
    ),
    path(
        "screenings/<str:screening_id>/tickets",
        ScreeningTicketsView.as_view(),
        name="screening-tickets",
    ),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
]
