"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from screenings.cache import cache_ttl, screening_cache_key
from screenings.domain import ScreeningId
from screenings.domain.errors import DomainError
from screenings.handlers.errors import domain_error_response, validation_error_response
from screenings.handlers.serializers import (
    AttachTicketSerializer,
    CreateScreeningSerializer,
    ListScreeningsSerializer,
    OccupancySerializer,
    PatchScreeningSerializer,
    ScreeningSerializer,
    TicketSerializer,
    UpdateTicketSerializer,
)
from screenings.services.common import parse_id
from screenings.services.factory import build_screening_service, build_ticket_service


class DomainAPIView(APIView):
    """APIView that renders domain errors as JSON error responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return domain_error_response(exc)
        return super().handle_exception(exc)


class ScreeningListView(DomainAPIView):
    """Handler for GET/POST /api/screenings"""

    def get(self, request: Request) -> Response:
        params = ListScreeningsSerializer(data=request.query_params)
        if not params.is_valid():
            return validation_error_response(params.errors)
        data = params.validated_data

        page = build_screening_service().list_screenings(
            room_id=data.get("roomId"),
            room_name=data.get("roomName"),
            movie_id=data.get("movieId"),
            starts_after=data.get("startsAfter"),
            starts_before=data.get("startsBefore"),
            ends_after=data.get("endsAfter"),
            ends_before=data.get("endsBefore"),
            page=data["page"],
            limit=data["limit"],
        )
        return Response(
            {
                "data": ScreeningSerializer(page.items, many=True).data,
                "meta": {
                    "total": page.total,
                    "page": page.page,
                    "limit": page.limit,
                    "totalPages": page.total_pages,
                },
            }
        )

    def post(self, request: Request) -> Response:
        body = CreateScreeningSerializer(data=request.data)
        if not body.is_valid():
            return validation_error_response(body.errors)
        data = body.validated_data

        screening = build_screening_service().create_screening(
            starts_at=data["startsAt"],
            movie_id=data["movieId"],
            room_id=data.get("roomId"),
            room_name=data.get("roomName"),
        )
        return Response(ScreeningSerializer(screening).data, status=status.HTTP_201_CREATED)


class ScreeningDetailView(DomainAPIView):
    """Handler for GET/PATCH/DELETE /api/screenings/{screening_id}"""

    def get(self, request: Request, screening_id: str) -> Response:
        sid = parse_id(ScreeningId, screening_id, "screening ID")
        key = screening_cache_key(sid.value)
        payload = cache.get(key)
        if payload is None:
            screening = build_screening_service().get_screening(sid)
            occupancy = build_ticket_service().occupancy(sid)
            payload = {
                **ScreeningSerializer(screening).data,
                "occupancy": dict(OccupancySerializer(occupancy).data),
            }
            cache.set(key, payload, cache_ttl())
        return Response(payload)

    def patch(self, request: Request, screening_id: str) -> Response:
        body = PatchScreeningSerializer(data=request.data)
        if not body.is_valid():
            return validation_error_response(body.errors)
        data = body.validated_data

        screening = build_screening_service().patch_screening(
            screening_id,
            starts_at=data.get("startsAt"),
            movie_id=data.get("movieId"),
            room_id=data.get("roomId"),
            room_name=data.get("roomName"),
        )
        return Response(ScreeningSerializer(screening).data)

    def delete(self, request: Request, screening_id: str) -> Response:
        build_screening_service().delete_screening(screening_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ScreeningTicketsView(DomainAPIView):
    """Handler for POST /api/screenings/{screening_id}/tickets"""

    def post(self, request: Request, screening_id: str) -> Response:
        body = AttachTicketSerializer(data=request.data)
        if not body.is_valid():
            return validation_error_response(body.errors)

        ticket = build_ticket_service().attach_ticket(screening_id, body.validated_data["ticketId"])
        return Response(TicketSerializer(ticket).data)


class TicketDetailView(DomainAPIView):
    """Handler for GET/PATCH /api/tickets/{ticket_id}"""

    def get(self, request: Request, ticket_id: str) -> Response:
        ticket = build_ticket_service().get_ticket(ticket_id)
        return Response(TicketSerializer(ticket).data)

    def patch(self, request: Request, ticket_id: str) -> Response:
        body = UpdateTicketSerializer(data=request.data)
        if not body.is_valid():
            return validation_error_response(body.errors)

        ticket = build_ticket_service().change_ticket_type(ticket_id, body.validated_data["type"])
        return Response(TicketSerializer(ticket).data)
