"""Ticket-capacity gate.

Decides whether a ticket may be used for a screening and records the
attachment. A classic ticket is good for one screening, a super ticket for
ten, and no screening takes more tickets than its room has seats.
"""

import logging

from screenings.domain import (
    Occupancy,
    Screening,
    ScreeningId,
    Ticket,
    TicketId,
    TicketKind,
)
from screenings.domain.errors import (
    ConflictError,
    IllegalDowngradeError,
    InvalidTicketTypeError,
    RoomNotFoundError,
    ScreeningFullError,
    ScreeningNotFoundError,
    TicketAlreadyAttachedError,
    TicketExhaustedError,
    TicketNotFoundError,
)
from screenings.services.common import parse_id
from screenings.stores.interfaces import RoomDirectory, ScreeningRepository, TicketStore

logger = logging.getLogger(__name__)


class TicketService:
    """Service for attaching tickets to screenings."""

    def __init__(
        self,
        tickets: TicketStore,
        screenings: ScreeningRepository,
        rooms: RoomDirectory,
    ) -> None:
        self._tickets = tickets
        self._screenings = screenings
        self._rooms = rooms

    def get_ticket(self, ticket_id: TicketId | int | str) -> Ticket:
        return self._get_ticket(parse_id(TicketId, ticket_id, "ticket ID"))

    def occupancy(self, screening_id: ScreeningId | int | str) -> Occupancy:
        """Return attached tickets and seats for a screening.

        Raises:
            ScreeningNotFoundError: If the screening does not exist.
            RoomNotFoundError: If its room has disappeared from the directory.
        """
        screening = self._get_screening(parse_id(ScreeningId, screening_id, "screening ID"))
        return self._occupancy(screening)

    def is_full(self, screening_id: ScreeningId | int | str) -> bool:
        return self.occupancy(screening_id).is_full

    def can_attach(
        self,
        screening_id: ScreeningId | int | str,
        ticket_id: TicketId | int | str,
    ) -> bool:
        """Return True if attach_ticket would currently succeed."""
        screening = self._get_screening(parse_id(ScreeningId, screening_id, "screening ID"))
        ticket = self._get_ticket(parse_id(TicketId, ticket_id, "ticket ID"))
        try:
            self._check_attachable(screening, ticket)
        except ConflictError:
            return False
        return True

    def attach_ticket(
        self,
        screening_id: ScreeningId | int | str,
        ticket_id: TicketId | int | str,
    ) -> Ticket:
        """Use a ticket for a screening.

        Raises:
            ScreeningNotFoundError / TicketNotFoundError: If a reference does not resolve.
            TicketAlreadyAttachedError: If the ticket is already used for this screening.
            TicketExhaustedError: If the ticket has no uses left.
            ScreeningFullError: If the screening has reached its room's capacity.
        """
        sid = parse_id(ScreeningId, screening_id, "screening ID")
        tid = parse_id(TicketId, ticket_id, "ticket ID")

        with self._tickets.lock_screening(sid), self._tickets.lock_ticket(tid):
            screening = self._get_screening(sid)
            ticket = self._get_ticket(tid)
            try:
                self._check_attachable(screening, ticket)
            except ConflictError as exc:
                logger.warning(
                    "Refused ticket %s for screening %s: %s", tid, sid, exc.code.value
                )
                raise
            ticket = self._tickets.add_screening(tid, sid)

        logger.info(
            "Attached %s ticket %s to screening %s (%d use(s) left)",
            ticket.kind.value,
            tid,
            sid,
            ticket.remaining_uses,
        )
        return ticket

    def change_ticket_type(
        self,
        ticket_id: TicketId | int | str,
        new_type: TicketKind | str,
    ) -> Ticket:
        """Switch a ticket between classic and super.

        Raises:
            InvalidTicketTypeError: If new_type is not a known ticket type.
            TicketNotFoundError: If the ticket does not exist.
            IllegalDowngradeError: If a super ticket already used more than once
                would become classic.
        """
        try:
            kind = TicketKind(new_type)
        except ValueError:
            raise InvalidTicketTypeError(new_type) from None
        tid = parse_id(TicketId, ticket_id, "ticket ID")

        with self._tickets.lock_ticket(tid):
            ticket = self._get_ticket(tid)
            if ticket.kind is kind:
                return ticket
            if ticket.uses > kind.max_screenings:
                logger.warning(
                    "Refused to make ticket %s %s: used %d times", tid, kind.value, ticket.uses
                )
                raise IllegalDowngradeError(tid)
            ticket = self._tickets.set_kind(tid, kind)

        logger.info("Ticket %s is now %s", tid, kind.value)
        return ticket

    def _check_attachable(self, screening: Screening, ticket: Ticket) -> None:
        if screening.id in ticket.screening_ids:
            raise TicketAlreadyAttachedError(ticket.id, screening.id)
        if ticket.uses >= ticket.kind.max_screenings:
            raise TicketExhaustedError(ticket.id)
        if self._occupancy(screening).is_full:
            raise ScreeningFullError(screening.id)

    def _occupancy(self, screening: Screening) -> Occupancy:
        room = self._rooms.get_by_id(screening.room_id)
        if room is None:
            raise RoomNotFoundError(screening.room_id)
        return Occupancy(
            screening_id=screening.id,
            attached=self._tickets.count_for_screening(screening.id),
            capacity=room.capacity.value,
        )

    def _get_screening(self, screening_id: ScreeningId) -> Screening:
        screening = self._screenings.get_screening(screening_id)
        if screening is None:
            raise ScreeningNotFoundError(screening_id)
        return screening

    def _get_ticket(self, ticket_id: TicketId) -> Ticket:
        ticket = self._tickets.get_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket
