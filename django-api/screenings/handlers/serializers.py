"""Serializers for request validation and for transforming domain models to API responses."""

from rest_framework import serializers

from screenings.domain import TicketKind
from screenings.services.scheduling_service import MAX_PAGE_SIZE


class CreateScreeningSerializer(serializers.Serializer):
    """Body of POST /api/screenings. Exactly one of roomId / roomName."""

    startsAt = serializers.DateTimeField()
    movieId = serializers.IntegerField(min_value=1)
    roomId = serializers.IntegerField(min_value=1, required=False)
    roomName = serializers.CharField(required=False)

    def validate(self, attrs):
        if ("roomId" in attrs) == ("roomName" in attrs):
            raise serializers.ValidationError("Exactly one of roomId or roomName must be given.")
        return attrs


class PatchScreeningSerializer(serializers.Serializer):
    """Body of PATCH /api/screenings/{id}. roomId and roomName are mutually exclusive."""

    startsAt = serializers.DateTimeField(required=False)
    movieId = serializers.IntegerField(min_value=1, required=False)
    roomId = serializers.IntegerField(min_value=1, required=False)
    roomName = serializers.CharField(required=False)

    def validate(self, attrs):
        if "roomId" in attrs and "roomName" in attrs:
            raise serializers.ValidationError("roomId and roomName cannot be given together.")
        return attrs


class ListScreeningsSerializer(serializers.Serializer):
    """Query parameters of GET /api/screenings."""

    startsAfter = serializers.DateTimeField(required=False)
    startsBefore = serializers.DateTimeField(required=False)
    endsAfter = serializers.DateTimeField(required=False)
    endsBefore = serializers.DateTimeField(required=False)
    roomId = serializers.IntegerField(min_value=1, required=False)
    roomName = serializers.CharField(required=False)
    movieId = serializers.IntegerField(min_value=1, required=False)
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=MAX_PAGE_SIZE, default=10)


class AttachTicketSerializer(serializers.Serializer):
    ticketId = serializers.IntegerField(min_value=1)


class UpdateTicketSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=[kind.value for kind in TicketKind])


class ScreeningSerializer(serializers.Serializer):
    """Serializer for Screening domain model."""

    id = serializers.IntegerField(source="id.value")
    startsAt = serializers.DateTimeField(source="starts_at")
    endsAt = serializers.DateTimeField(source="ends_at")
    roomId = serializers.IntegerField(source="room_id.value")
    movieId = serializers.IntegerField(source="movie_id.value")


class OccupancySerializer(serializers.Serializer):
    """Serializer for Occupancy domain model."""

    attached = serializers.IntegerField()
    capacity = serializers.IntegerField()
    available = serializers.IntegerField()
    isFull = serializers.BooleanField(source="is_full")


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    id = serializers.IntegerField(source="id.value")
    type = serializers.CharField(source="kind.value")
    screeningIds = serializers.SerializerMethodField()
    remainingUses = serializers.IntegerField(source="remaining_uses")

    def get_screeningIds(self, ticket) -> list[int]:
        return sorted(screening_id.value for screening_id in ticket.screening_ids)
