# backend/modules/bookings/tests/conftest.py

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from core.database import get_db
from ..models.booking_models import Booking, BookingStatus, ManagementMode
from ..schemas import AvailabilitySettingsUpdate, BookingCreate, DaySchedule, SimpleTable
from ..services import AvailabilityService, BookingCommitGuard, BookingService


@pytest.fixture
def today(clock) -> date:
    return clock().date()


@pytest.fixture
def monday(today) -> date:
    """First Monday after today"""
    return today + timedelta(days=(7 - today.weekday()) % 7 or 7)


@pytest.fixture
def commit_guard() -> BookingCommitGuard:
    return BookingCommitGuard()


@pytest.fixture
def availability_service(db_session: Session, clock) -> AvailabilityService:
    return AvailabilityService(db_session, clock=clock)


@pytest.fixture
def booking_service(db_session: Session, commit_guard, clock) -> BookingService:
    return BookingService(db_session, commit_guard=commit_guard, clock=clock)


@pytest.fixture
def guest_count_restaurant(availability_service, monday):
    """Open Mondays with 10 guests per slot, closed Sundays"""
    return availability_service.set_availability(
        "bistro",
        AvailabilitySettingsUpdate(
            management_mode=ManagementMode.GUEST_COUNT,
            schedule={
                monday.strftime("%A"): DaySchedule(
                    slots=["18:00", "19:00", "20:00"], capacity_per_slot=10
                ),
                "Sunday": DaySchedule(is_open=False),
            },
            default_capacity_per_slot=20,
            advance_booking_days=30,
        ),
    )


@pytest.fixture
def table_restaurant(availability_service, monday):
    """Table-based restaurant with a 90 minute turning time"""
    return availability_service.set_availability(
        "trattoria",
        AvailabilitySettingsUpdate(
            management_mode=ManagementMode.TABLE_BASED,
            schedule={
                monday.strftime("%A"): DaySchedule(
                    slots=["18:00", "18:30", "19:00", "19:30", "20:00"]
                ),
            },
            advance_booking_days=30,
            table_turning_time=90,
            tables=[
                SimpleTable(id="t6", name="Booth", capacity=6),
                SimpleTable(id="t4b", name="Patio", capacity=4),
                SimpleTable(id="t4a", name="Window", capacity=4),
                SimpleTable(id="t2", name="Bar", capacity=2),
                SimpleTable(id="t8", name="Private", capacity=8, is_active=False),
            ],
        ),
    )


@pytest.fixture
def booking_request(monday):
    """Factory for BookingCreate payloads"""
    def _make(**overrides) -> BookingCreate:
        data = {
            "restaurant_id": "bistro",
            "restaurant_name": "Bistro",
            "user_id": "user-1",
            "user_name": "Guest One",
            "user_email": "guest@example.com",
            "user_phone": "+97699000000",
            "booking_date": monday,
            "booking_time": "19:00",
            "party_size": 2,
        }
        data.update(overrides)
        return BookingCreate(**data)

    return _make


@pytest.fixture
def client(db_session: Session, clock, monkeypatch):
    """Test client bound to the test session and fixed clock"""
    from app.main import app
    from ..services import availability_service as availability_module
    from ..services import booking_service as booking_module
    from ..services import stats_service as stats_module

    def _override_get_db():
        yield db_session

    for module in (availability_module, booking_module, stats_module):
        monkeypatch.setattr(module, "utcnow", clock)

    app.dependency_overrides[get_db] = _override_get_db
    app.state.commit_guard = BookingCommitGuard()

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def add_booking(db_session: Session, monday):
    """Insert a booking row directly, bypassing placement checks"""
    def _add(restaurant_id="bistro", booking_time="19:00", party_size=2,
             status=BookingStatus.CONFIRMED, table_id=None, booking_date=None,
             user_id="seed-user") -> Booking:
        booking = Booking(
            restaurant_id=restaurant_id,
            user_id=user_id,
            booking_date=booking_date or monday,
            booking_time=booking_time,
            party_size=party_size,
            status=status,
            table_id=table_id,
        )
        db_session.add(booking)
        db_session.commit()
        return booking

    return _add
