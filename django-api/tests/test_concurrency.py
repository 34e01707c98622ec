"""Races between concurrent requests on the in-memory stores.

The slow store subclasses widen the gap between the check and the write so
that an unlocked implementation would double-book.
Run with: pytest tests/test_concurrency.py -v
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from helpers import at
from screenings.domain import TicketKind
from screenings.domain.errors import ConflictError
from screenings.services import ScreeningService, TicketService
from screenings.stores.locks import KeyedLocks
from screenings.stores.memory_store import InMemoryScreeningRepository, InMemoryTicketStore

HORIZON, STUDIO = 1, 3
FEATURE = 3
WORKERS = 8


class SlowScreeningRepository(InMemoryScreeningRepository):
    def find_overlapping(self, room_id, window, exclude=None):
        found = super().find_overlapping(room_id, window, exclude)
        time.sleep(0.01)
        return found


class SlowTicketStore(InMemoryTicketStore):
    def count_for_screening(self, screening_id):
        count = super().count_for_screening(screening_id)
        time.sleep(0.01)
        return count


def run_concurrently(calls):
    """Start every call at the same moment; return (successes, conflicts)."""
    barrier = threading.Barrier(len(calls))

    def run(call):
        barrier.wait()
        try:
            return call()
        except ConflictError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        results = list(pool.map(run, calls))
    successes = [result for result in results if not isinstance(result, ConflictError)]
    conflicts = [result for result in results if isinstance(result, ConflictError)]
    return successes, conflicts


@pytest.fixture
def slow_repo() -> SlowScreeningRepository:
    return SlowScreeningRepository()


@pytest.fixture
def slow_tickets() -> SlowTicketStore:
    return SlowTicketStore()


@pytest.fixture
def slow_scheduler(slow_repo, rooms, movies, slow_tickets) -> ScreeningService:
    return ScreeningService(slow_repo, rooms, movies, slow_tickets)


@pytest.fixture
def slow_gate(slow_tickets, slow_repo, rooms) -> TicketService:
    return TicketService(slow_tickets, slow_repo, rooms)


class TestKeyedLocks:
    def test_same_key_is_exclusive(self):
        locks = KeyedLocks()
        inside = []
        overlap = []

        def work():
            with locks.hold(("room", 1)):
                inside.append(1)
                if len(inside) > 1:
                    overlap.append(True)
                time.sleep(0.005)
                inside.pop()

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            for _ in range(WORKERS):
                pool.submit(work)

        assert overlap == []

    def test_different_keys_do_not_block_each_other(self):
        locks = KeyedLocks()
        with locks.hold(("room", 1)):
            acquired = threading.Event()

            def other():
                with locks.hold(("room", 2)):
                    acquired.set()

            thread = threading.Thread(target=other)
            thread.start()
            assert acquired.wait(timeout=1)
            thread.join()

    def test_entry_is_dropped_after_last_release(self):
        locks = KeyedLocks()

        with locks.hold(("screening", 1)):
            assert len(locks) == 1

        assert len(locks) == 0

    def test_registry_is_empty_after_contention(self):
        locks = KeyedLocks()

        def work(key):
            with locks.hold(key):
                time.sleep(0.001)

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            list(pool.map(work, [("ticket", index % 3) for index in range(WORKERS * 4)]))

        assert len(locks) == 0


class TestConcurrentScheduling:
    def test_only_one_of_simultaneous_bookings_wins(self, slow_scheduler, slow_repo):
        calls = [
            lambda: slow_scheduler.create_screening(at(10), FEATURE, room_id=HORIZON)
            for _ in range(WORKERS)
        ]

        successes, conflicts = run_concurrently(calls)

        assert len(successes) == 1
        assert len(conflicts) == WORKERS - 1
        assert len(slow_repo.all()) == 1

    def test_simultaneous_patches_into_one_slot(self, slow_scheduler, slow_repo):
        screenings = [
            slow_scheduler.create_screening(at(9 + 2 * index, 0, day=20), FEATURE, room_id=HORIZON)
            for index in range(4)
        ]
        calls = [
            lambda screening=screening: slow_scheduler.patch_screening(
                screening.id, starts_at=at(10, 0, day=21)
            )
            for screening in screenings
        ]

        successes, conflicts = run_concurrently(calls)

        assert len(successes) == 1
        assert len(conflicts) == 3
        day_21 = [s for s in slow_repo.all() if s.starts_at.day == 21]
        assert len(day_21) == 1


class TestConcurrentAttachments:
    def test_capacity_holds_under_simultaneous_purchases(
        self, slow_scheduler, slow_gate, slow_tickets
    ):
        # Studio 1 seats two
        screening = slow_scheduler.create_screening(at(10), FEATURE, room_id=STUDIO)
        tickets = [slow_tickets.add_ticket() for _ in range(WORKERS)]
        calls = [
            lambda ticket=ticket: slow_gate.attach_ticket(screening.id, ticket.id)
            for ticket in tickets
        ]

        successes, conflicts = run_concurrently(calls)

        assert len(successes) == 2
        assert len(conflicts) == WORKERS - 2
        assert slow_gate.occupancy(screening.id).attached == 2

    def test_classic_ticket_used_once_under_race(self, slow_scheduler, slow_gate, slow_tickets):
        screenings = [
            slow_scheduler.create_screening(at(10, 0, day=day), FEATURE, room_id=HORIZON)
            for day in range(12, 12 + WORKERS)
        ]
        ticket = slow_tickets.add_ticket(TicketKind.CLASSIC)
        calls = [
            lambda screening=screening: slow_gate.attach_ticket(screening.id, ticket.id)
            for screening in screenings
        ]

        successes, conflicts = run_concurrently(calls)

        assert len(successes) == 1
        assert slow_tickets.get_ticket(ticket.id).uses == 1
