# backend/modules/bookings/tests/test_booking_concurrency.py

"""
Competing bookings for the last seat must produce exactly one winner.
"""

import threading
import pytest
from datetime import timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.database import Base
from ..exceptions import SlotUnavailable
from ..models.booking_models import Booking, BookingStatus, ManagementMode
from ..schemas import AvailabilitySettingsUpdate, DaySchedule, SimpleTable
from ..services import AvailabilityService, BookingCommitGuard, BookingService


@pytest.fixture
def file_engine(tmp_path):
    """File-backed database so each thread gets its own connection"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'bookings.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(file_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=file_engine)


@pytest.fixture
def last_seat(session_factory, clock, monday):
    """A slot with exactly one guest of room left"""
    session = session_factory()
    AvailabilityService(session, clock=clock).set_availability(
        "bistro",
        AvailabilitySettingsUpdate(
            schedule={"Monday": DaySchedule(slots=["19:00"], capacity_per_slot=3)},
        ),
    )
    session.add(
        Booking(
            restaurant_id="bistro",
            user_id="regular",
            booking_date=monday,
            booking_time="19:00",
            party_size=2,
            status=BookingStatus.CONFIRMED,
        )
    )
    session.commit()
    session.close()


@pytest.fixture
def last_table(session_factory, clock, monday):
    """Table-based restaurant where only one table fits a party of three"""
    session = session_factory()
    AvailabilityService(session, clock=clock).set_availability(
        "trattoria",
        AvailabilitySettingsUpdate(
            management_mode=ManagementMode.TABLE_BASED,
            schedule={"Monday": DaySchedule(slots=["19:00"])},
            table_turning_time=90,
            tables=[
                SimpleTable(id="t4", name="Window", capacity=4),
                SimpleTable(id="t2", name="Bar", capacity=2),
            ],
        ),
    )
    session.close()


def race(session_factory, clock, guard_for, requests):
    """Run one create_booking per request in its own thread and session"""
    barrier = threading.Barrier(len(requests))
    outcomes = [None] * len(requests)

    def attempt(index, request):
        session = session_factory()
        service = BookingService(session, commit_guard=guard_for(index), clock=clock)
        try:
            barrier.wait()
            outcomes[index] = service.create_booking(request).id
        except SlotUnavailable as e:
            outcomes[index] = e
        finally:
            session.close()

    threads = [
        threading.Thread(target=attempt, args=(i, request))
        for i, request in enumerate(requests)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    return outcomes


class TestLastSeatRace:
    def test_shared_guard_admits_exactly_one(
        self, session_factory, clock, last_seat, booking_request
    ):
        guard = BookingCommitGuard()
        requests = [
            booking_request(party_size=1, user_id=f"racer-{i}") for i in range(2)
        ]

        outcomes = race(session_factory, clock, lambda i: guard, requests)

        winners = [o for o in outcomes if isinstance(o, str)]
        losers = [o for o in outcomes if isinstance(o, SlotUnavailable)]
        assert len(winners) == 1
        assert len(losers) == 1

        session = session_factory()
        live = session.query(Booking).filter(
            Booking.restaurant_id == "bistro",
            Booking.status != BookingStatus.CANCELLED,
        ).all()
        assert sum(b.party_size for b in live) == 3
        session.close()

    def test_many_racers_never_overbook(
        self, session_factory, clock, last_seat, booking_request
    ):
        guard = BookingCommitGuard()
        requests = [
            booking_request(party_size=1, user_id=f"racer-{i}") for i in range(6)
        ]

        outcomes = race(session_factory, clock, lambda i: guard, requests)

        assert sum(isinstance(o, str) for o in outcomes) == 1
        assert sum(isinstance(o, SlotUnavailable) for o in outcomes) == 5

    def test_lost_revision_is_revalidated(
        self, session_factory, clock, last_seat, booking_request, monday
    ):
        """A writer holding a stale snapshot is pushed back to re-check"""
        stale_session = session_factory()
        stale = BookingService(stale_session, commit_guard=BookingCommitGuard(), clock=clock)
        seen = stale._read_revision("bistro", monday)
        stale_session.rollback()

        fresh_session = session_factory()
        BookingService(
            fresh_session, commit_guard=BookingCommitGuard(), clock=clock
        ).create_booking(
            booking_request(party_size=1, user_id="fresh")
        )
        fresh_session.close()

        assert stale._advance_revision("bistro", monday, seen) is False
        stale_session.rollback()

        with pytest.raises(SlotUnavailable):
            stale.create_booking(booking_request(party_size=1, user_id="stale"))
        stale_session.close()


class TestLastTableRace:
    def test_one_winner_takes_the_only_fitting_table(
        self, session_factory, clock, last_table, booking_request
    ):
        guard = BookingCommitGuard()
        requests = [
            booking_request(restaurant_id="trattoria", party_size=3, user_id=f"racer-{i}")
            for i in range(2)
        ]

        outcomes = race(session_factory, clock, lambda i: guard, requests)

        winners = [o for o in outcomes if isinstance(o, str)]
        assert len(winners) == 1
        assert sum(isinstance(o, SlotUnavailable) for o in outcomes) == 1

        session = session_factory()
        booking = session.query(Booking).filter_by(id=winners[0]).one()
        assert booking.table_id == "t4"
        assert session.query(Booking).filter_by(restaurant_id="trattoria").count() == 1
        session.close()


class TestCommitGuard:
    def test_registry_empties_after_hold(self, monday):
        guard = BookingCommitGuard()

        for offset in range(50):
            with guard.hold("bistro", monday + timedelta(days=offset)):
                assert guard.active_keys() == 1

        assert guard.active_keys() == 0

    def test_registry_empties_when_holder_raises(self, monday):
        guard = BookingCommitGuard()

        with pytest.raises(SlotUnavailable):
            with guard.hold("bistro", monday):
                raise SlotUnavailable("bistro", monday, "19:00", 2)

        assert guard.active_keys() == 0

    def test_waiter_keeps_entry_until_it_leaves(self, monday):
        guard = BookingCommitGuard()
        entered = threading.Event()
        order = []

        def waiter():
            entered.set()
            with guard.hold("bistro", monday):
                order.append("waiter")

        with guard.hold("bistro", monday):
            thread = threading.Thread(target=waiter)
            thread.start()
            entered.wait(timeout=5)
            order.append("holder")
        thread.join(timeout=5)

        assert order == ["holder", "waiter"]
        assert guard.active_keys() == 0
