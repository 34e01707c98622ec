from screenings.services.scheduling_service import ScreeningService
from screenings.services.ticket_service import TicketService

__all__ = ["ScreeningService", "TicketService"]
