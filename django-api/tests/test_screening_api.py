"""Integration tests for the screening and ticket endpoints.

These run the handlers against the Django ORM stores.
Run with: pytest tests/test_screening_api.py -v
"""

import pytest
from rest_framework.test import APIClient

from screenings import models


@pytest.fixture
def horizon(db) -> models.Room:
    return models.Room.objects.create(name="Horizon", type="IMAX", capacity=30)


@pytest.fixture
def cosmos(db) -> models.Room:
    return models.Room.objects.create(name="Cosmos", type="IMAX", capacity=1)


@pytest.fixture
def interstellar(db) -> models.Movie:
    return models.Movie.objects.create(title="Interstellar", duration_ms=10_140_000)


@pytest.fixture
def matinee(db) -> models.Movie:
    return models.Movie.objects.create(title="Matinee", duration_ms=7_800_000)


@pytest.fixture
def short_film(db) -> models.Movie:
    return models.Movie.objects.create(title="Short Film", duration_ms=35 * 60_000)


def create(client: APIClient, **body):
    return client.post("/api/screenings", body, format="json")


@pytest.mark.django_db
class TestCreateScreening:
    """Tests for POST /api/screenings"""

    def test_creates_screening_with_computed_end(self, api_client, horizon, interstellar):
        response = create(
            api_client, startsAt="2025-05-12T10:00:00Z", movieId=interstellar.pk, roomName="Horizon"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["startsAt"] == "2025-05-12T10:00:00Z"
        assert body["endsAt"] == "2025-05-12T13:19:00Z"
        assert body["roomId"] == horizon.pk
        assert body["movieId"] == interstellar.pk
        assert models.Screening.objects.count() == 1

    def test_overlap_returns_409(self, api_client, horizon, interstellar, short_film):
        create(api_client, startsAt="2025-05-12T10:00:00Z", movieId=interstellar.pk, roomId=horizon.pk)

        response = create(api_client, startsAt="2025-05-12T12:00:00Z", movieId=short_film.pk, roomId=horizon.pk)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SCHEDULE_CONFLICT"

    def test_back_to_back_is_accepted(self, api_client, horizon, matinee, short_film):
        first = create(api_client, startsAt="2025-05-12T10:00:00Z", movieId=matinee.pk, roomId=horizon.pk)
        assert first.json()["endsAt"] == "2025-05-12T12:40:00Z"

        response = create(api_client, startsAt="2025-05-12T12:40:00Z", movieId=short_film.pk, roomId=horizon.pk)

        assert response.status_code == 201

    def test_outside_operating_hours_returns_400(self, api_client, horizon, short_film):
        response = create(api_client, startsAt="2025-05-12T08:59:00Z", movieId=short_film.pk, roomId=horizon.pk)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "OUTSIDE_OPERATING_HOURS"

    def test_unknown_room_returns_404(self, api_client, interstellar):
        response = create(api_client, startsAt="2025-05-12T10:00:00Z", movieId=interstellar.pk, roomName="Nowhere")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ROOM_NOT_FOUND"

    def test_unknown_movie_returns_404(self, api_client, horizon):
        response = create(api_client, startsAt="2025-05-12T10:00:00Z", movieId=999, roomId=horizon.pk)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "MOVIE_NOT_FOUND"

    @pytest.mark.parametrize(
        "body",
        [
            {"startsAt": "2025-05-12T10:00:00Z", "movieId": 1},
            {"startsAt": "2025-05-12T10:00:00Z", "movieId": 1, "roomId": 1, "roomName": "Horizon"},
            {"startsAt": "yesterday", "movieId": 1, "roomId": 1},
            {"movieId": 1, "roomId": 1},
        ],
    )
    def test_malformed_body_returns_400(self, api_client, body):
        response = api_client.post("/api/screenings", body, format="json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.django_db
class TestScreeningDetail:
    """Tests for GET/PATCH/DELETE /api/screenings/{id}"""

    @pytest.fixture
    def screening_id(self, api_client, horizon, interstellar) -> int:
        response = create(api_client, startsAt="2025-05-12T10:00:00Z", movieId=interstellar.pk, roomId=horizon.pk)
        return response.json()["id"]

    def test_get_includes_occupancy(self, api_client, screening_id):
        response = api_client.get(f"/api/screenings/{screening_id}")

        assert response.status_code == 200
        assert response.json()["occupancy"] == {
            "attached": 0,
            "capacity": 30,
            "available": 30,
            "isFull": False,
        }

    def test_get_not_found(self, api_client, db):
        response = api_client.get("/api/screenings/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SCREENING_NOT_FOUND"

    def test_get_invalid_id_format(self, api_client, db):
        response = api_client.get("/api/screenings/abc")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_IDENTIFIER"

    def test_patch_to_same_start_does_not_self_conflict(self, api_client, screening_id):
        response = api_client.patch(
            f"/api/screenings/{screening_id}", {"startsAt": "2025-05-12T10:00:00Z"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["endsAt"] == "2025-05-12T13:19:00Z"

    def test_patch_moves_screening(self, api_client, screening_id, cosmos, short_film):
        response = api_client.patch(
            f"/api/screenings/{screening_id}",
            {"startsAt": "2025-05-12T19:31:00Z", "movieId": short_film.pk, "roomName": "Cosmos"},
            format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["roomId"] == cosmos.pk
        assert body["endsAt"] == "2025-05-12T20:36:00Z"

    def test_patch_with_both_room_references_is_rejected(self, api_client, screening_id, cosmos):
        response = api_client.patch(
            f"/api/screenings/{screening_id}",
            {"roomId": cosmos.pk, "roomName": "Cosmos"},
            format="json",
        )

        assert response.status_code == 400

    def test_delete(self, api_client, screening_id):
        response = api_client.delete(f"/api/screenings/{screening_id}")

        assert response.status_code == 204
        assert not models.Screening.objects.filter(pk=screening_id).exists()
        assert api_client.delete(f"/api/screenings/{screening_id}").status_code == 404


@pytest.mark.django_db
class TestScreeningList:
    """Tests for GET /api/screenings"""

    def test_list_is_paginated_and_filtered(self, api_client, horizon, cosmos, short_film):
        for hour in (10, 12, 14):
            create(api_client, startsAt=f"2025-05-12T{hour}:00:00Z", movieId=short_film.pk, roomId=horizon.pk)
        create(api_client, startsAt="2025-05-12T10:00:00Z", movieId=short_film.pk, roomId=cosmos.pk)

        response = api_client.get("/api/screenings", {"roomName": "Horizon", "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert [item["startsAt"] for item in body["data"]] == [
            "2025-05-12T10:00:00Z",
            "2025-05-12T12:00:00Z",
        ]
        assert body["meta"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}

    def test_list_filters_by_start_range(self, api_client, horizon, short_film):
        for hour in (10, 12, 14):
            create(api_client, startsAt=f"2025-05-12T{hour}:00:00Z", movieId=short_film.pk, roomId=horizon.pk)

        response = api_client.get(
            "/api/screenings",
            {"startsAfter": "2025-05-12T11:00:00Z", "startsBefore": "2025-05-12T12:00:00Z"},
        )

        assert [item["startsAt"] for item in response.json()["data"]] == ["2025-05-12T12:00:00Z"]

    def test_list_rejects_oversized_limit(self, api_client, db):
        response = api_client.get("/api/screenings", {"limit": 500})

        assert response.status_code == 400


@pytest.mark.django_db
class TestTickets:
    """Tests for POST /api/screenings/{id}/tickets and /api/tickets/{id}"""

    @pytest.fixture
    def screenings(self, api_client, horizon, cosmos, short_film) -> list[int]:
        ids = []
        for hour in (10, 12):
            response = create(api_client, startsAt=f"2025-05-12T{hour}:00:00Z", movieId=short_film.pk, roomId=horizon.pk)
            ids.append(response.json()["id"])
        response = create(api_client, startsAt="2025-05-12T10:00:00Z", movieId=short_film.pk, roomId=cosmos.pk)
        ids.append(response.json()["id"])
        return ids

    def test_attach_classic_ticket_once(self, api_client, screenings):
        ticket = models.Ticket.objects.create(kind=models.Ticket.Kind.CLASSIC)

        first = api_client.post(f"/api/screenings/{screenings[0]}/tickets", {"ticketId": ticket.pk}, format="json")
        second = api_client.post(f"/api/screenings/{screenings[1]}/tickets", {"ticketId": ticket.pk}, format="json")

        assert first.status_code == 200
        assert first.json() == {
            "id": ticket.pk,
            "type": "classic",
            "screeningIds": [screenings[0]],
            "remainingUses": 0,
        }
        assert second.status_code == 409
        assert second.json()["error"]["code"] == "TICKET_EXHAUSTED"

    def test_full_screening_returns_409(self, api_client, screenings):
        # Cosmos seats one
        cosmos_screening = screenings[2]
        first = models.Ticket.objects.create(kind=models.Ticket.Kind.SUPER)
        second = models.Ticket.objects.create(kind=models.Ticket.Kind.SUPER)

        assert api_client.post(
            f"/api/screenings/{cosmos_screening}/tickets", {"ticketId": first.pk}, format="json"
        ).status_code == 200
        response = api_client.post(
            f"/api/screenings/{cosmos_screening}/tickets", {"ticketId": second.pk}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SCREENING_FULL"
        assert api_client.get(f"/api/screenings/{cosmos_screening}").json()["occupancy"]["isFull"] is True

    def test_downgrade_guard(self, api_client, screenings):
        ticket = models.Ticket.objects.create(kind=models.Ticket.Kind.SUPER)
        for screening_id in screenings[:2]:
            api_client.post(f"/api/screenings/{screening_id}/tickets", {"ticketId": ticket.pk}, format="json")

        response = api_client.patch(f"/api/tickets/{ticket.pk}", {"type": "classic"}, format="json")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ILLEGAL_DOWNGRADE"
        ticket.refresh_from_db()
        assert ticket.kind == "super"

    def test_upgrade_and_get_ticket(self, api_client, db):
        ticket = models.Ticket.objects.create()

        response = api_client.patch(f"/api/tickets/{ticket.pk}", {"type": "super"}, format="json")

        assert response.status_code == 200
        assert api_client.get(f"/api/tickets/{ticket.pk}").json()["type"] == "super"

    def test_delete_with_tickets_attached_returns_409(self, api_client, screenings):
        ticket = models.Ticket.objects.create()
        api_client.post(f"/api/screenings/{screenings[0]}/tickets", {"ticketId": ticket.pk}, format="json")

        response = api_client.delete(f"/api/screenings/{screenings[0]}")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SCREENING_HAS_TICKETS"
