"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from screenings.services import ScreeningService, TicketService
from screenings.stores.memory_store import (
    InMemoryMovieCatalog,
    InMemoryRoomDirectory,
    InMemoryScreeningRepository,
    InMemoryTicketStore,
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def rooms() -> InMemoryRoomDirectory:
    directory = InMemoryRoomDirectory()
    directory.add_room("Horizon", capacity=30)
    directory.add_room("Cosmos", capacity=28)
    directory.add_room("Studio 1", capacity=2)
    return directory


@pytest.fixture
def movies() -> InMemoryMovieCatalog:
    catalog = InMemoryMovieCatalog()
    catalog.add_movie("Interstellar", duration_ms=10_140_000)  # 169 min
    catalog.add_movie("Short Film", duration_ms=35 * 60_000)
    catalog.add_movie("Feature", duration_ms=90 * 60_000)
    catalog.add_movie("Matinee", duration_ms=7_800_000)  # 130 min
    return catalog


@pytest.fixture
def screening_repo() -> InMemoryScreeningRepository:
    return InMemoryScreeningRepository()


@pytest.fixture
def ticket_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def scheduler(screening_repo, rooms, movies, ticket_store) -> ScreeningService:
    return ScreeningService(screening_repo, rooms, movies, ticket_store)


@pytest.fixture
def ticket_service(ticket_store, screening_repo, rooms) -> TicketService:
    return TicketService(ticket_store, screening_repo, rooms)
