# backend/modules/bookings/services/availability_service.py

"""
Service for computing slot availability and managing availability configs.

The module-level functions are the decision logic: they take a snapshot
(config, tables, bookings) and return plain values, with no database access.
``AvailabilityService`` loads the snapshot from the session and delegates to
them.
"""

from sqlalchemy.orm import Session
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Protocol, Sequence, Set, Tuple
import logging

from core.config import settings
from core.mixins import utcnow
from modules.floorplans.services.floor_plan_service import FloorPlanService
from ..exceptions import InvalidInput
from ..models.booking_models import Booking, ManagementMode, RestaurantAvailability
from ..schemas.booking_schemas import (
    AvailabilitySettingsUpdate,
    DayAvailability,
    DaySchedule,
    RestaurantAvailabilityConfig,
    TimeSlot,
)
from ..state_machine import OCCUPYING_STATUSES
from ..utils.time_utils import (
    is_within_booking_window,
    parse_time_string,
    weekday_name,
    windows_overlap,
)

logger = logging.getLogger(__name__)


class SeatingTable(Protocol):
    id: str
    capacity: int
    is_active: bool


def resolve_day_schedule(
    config: RestaurantAvailabilityConfig, target_date: date
) -> Optional[DaySchedule]:
    """Special-date override if present, otherwise the weekday schedule"""
    special = config.special_dates.get(target_date)
    if special is not None:
        return special
    return config.schedule.get(weekday_name(target_date))


def slot_capacity(day: DaySchedule, config: RestaurantAvailabilityConfig) -> int:
    if day.capacity_per_slot is not None:
        return day.capacity_per_slot
    return config.default_capacity_per_slot


def fitting_tables(tables: Iterable[SeatingTable], party_size: int) -> List[SeatingTable]:
    """Active tables that seat the party, smallest capacity first, then by id"""
    return sorted(
        (t for t in tables if t.is_active and t.capacity >= party_size),
        key=lambda t: (t.capacity, t.id),
    )


def occupied_table_ids(
    bookings: Iterable[Booking], slot_time: str, turning_time: int
) -> Set[str]:
    """Tables held by a booking whose turning window overlaps the slot's"""
    slot_start = parse_time_string(slot_time)
    occupied = set()
    for booking in bookings:
        if not booking.table_id:
            continue
        if windows_overlap(parse_time_string(booking.booking_time), slot_start, turning_time):
            occupied.add(booking.table_id)
    return occupied


def guest_count_slot(
    slot_time: str, capacity: int, bookings: Iterable[Booking], party_size: int
) -> TimeSlot:
    booked = sum(b.party_size for b in bookings if b.booking_time == slot_time)
    return TimeSlot(
        time=slot_time,
        available=booked + party_size <= capacity,
        capacity=capacity,
        booked=booked,
    )


def table_slot(
    slot_time: str,
    tables: Sequence[SeatingTable],
    bookings: Iterable[Booking],
    party_size: int,
    turning_time: int,
) -> Tuple[TimeSlot, Optional[SeatingTable]]:
    """Slot occupancy counted in fitting tables, plus the table a booking would get"""
    candidates = fitting_tables(tables, party_size)
    occupied = occupied_table_ids(bookings, slot_time, turning_time)
    free = [t for t in candidates if t.id not in occupied]
    slot = TimeSlot(
        time=slot_time,
        available=bool(free),
        capacity=len(candidates),
        booked=len(candidates) - len(free),
    )
    return slot, (free[0] if free else None)


def evaluate_slot(
    config: RestaurantAvailabilityConfig,
    day: DaySchedule,
    tables: Sequence[SeatingTable],
    bookings: Sequence[Booking],
    slot_time: str,
    party_size: int,
) -> Tuple[TimeSlot, Optional[SeatingTable]]:
    if config.management_mode == ManagementMode.TABLE_BASED:
        return table_slot(slot_time, tables, bookings, party_size, config.table_turning_time)
    slot = guest_count_slot(slot_time, slot_capacity(day, config), bookings, party_size)
    return slot, None


def compute_day_availability(
    config: RestaurantAvailabilityConfig,
    tables: Sequence[SeatingTable],
    bookings: Sequence[Booking],
    target_date: date,
    party_size: int,
    today: date,
) -> DayAvailability:
    """Occupancy of every configured slot on ``target_date``.

    ``bookings`` may contain any bookings of the restaurant; only those on the
    target date in an occupying status are counted.
    """
    closed = DayAvailability(date=target_date, is_open=False, slots=[])

    if not is_within_booking_window(target_date, today, config.advance_booking_days):
        return closed

    day = resolve_day_schedule(config, target_date)
    if day is None or not day.is_open:
        return closed

    live = [
        b for b in bookings
        if b.booking_date == target_date and b.status in OCCUPYING_STATUSES
    ]
    slots = [
        evaluate_slot(config, day, tables, live, slot_time, party_size)[0]
        for slot_time in day.slots
    ]
    return DayAvailability(date=target_date, is_open=True, slots=slots)


class AvailabilityService:
    """Loads availability snapshots and answers availability queries"""

    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.clock = clock or utcnow

    def today(self) -> date:
        return self.clock().date()

    def get_config(self, restaurant_id: str) -> RestaurantAvailabilityConfig:
        row = self.db.query(RestaurantAvailability).filter_by(
            restaurant_id=restaurant_id
        ).first()
        if not row:
            raise InvalidInput(
                f"Unknown restaurant: {restaurant_id}", "restaurant_id", restaurant_id
            )
        return RestaurantAvailabilityConfig.model_validate(row)

    def get_tables(self, config: RestaurantAvailabilityConfig) -> List[SeatingTable]:
        """Tables listed in the config, else the latest floor plan's tables"""
        if config.tables:
            return [t for t in config.tables if t.is_active]
        return FloorPlanService(self.db).get_active_tables(config.restaurant_id)

    def get_occupying_bookings(self, restaurant_id: str, target_date: date) -> List[Booking]:
        return self.db.query(Booking).filter(
            Booking.restaurant_id == restaurant_id,
            Booking.booking_date == target_date,
            Booking.status.in_(list(OCCUPYING_STATUSES)),
        ).all()

    def get_availability(
        self, restaurant_id: str, target_date: date, party_size: int
    ) -> DayAvailability:
        """Bookable slots for a date and party size"""
        if party_size < 1:
            raise InvalidInput("Party size must be at least 1", "party_size", party_size)

        config = self.get_config(restaurant_id)
        today = self.today()

        if not is_within_booking_window(target_date, today, config.advance_booking_days):
            logger.debug(
                f"{target_date} outside booking window for restaurant {restaurant_id}"
            )
            return DayAvailability(date=target_date, is_open=False, slots=[])

        tables = []
        if config.management_mode == ManagementMode.TABLE_BASED:
            tables = self.get_tables(config)

        bookings = self.get_occupying_bookings(restaurant_id, target_date)
        return compute_day_availability(
            config, tables, bookings, target_date, party_size, today
        )

    def get_availability_config(self, restaurant_id: str) -> RestaurantAvailabilityConfig:
        return self.get_config(restaurant_id)

    def set_availability(
        self, restaurant_id: str, data: AvailabilitySettingsUpdate
    ) -> RestaurantAvailabilityConfig:
        """Create or replace a restaurant's availability config"""
        payload = data.model_dump(mode="json")
        if payload["default_capacity_per_slot"] is None:
            payload["default_capacity_per_slot"] = settings.default_capacity_per_slot
        if payload["advance_booking_days"] is None:
            payload["advance_booking_days"] = settings.default_advance_booking_days
        if payload["table_turning_time"] is None:
            payload["table_turning_time"] = settings.default_table_turning_time
        payload["management_mode"] = data.management_mode

        now = self.clock()
        row = self.db.query(RestaurantAvailability).filter_by(
            restaurant_id=restaurant_id
        ).first()
        if row is None:
            row = RestaurantAvailability(restaurant_id=restaurant_id, created_at=now)
            self.db.add(row)

        for field, value in payload.items():
            setattr(row, field, value)
        row.updated_at = now

        self.db.commit()
        self.db.refresh(row)

        logger.info(
            f"Saved availability for restaurant {restaurant_id} "
            f"({row.management_mode.value}, {len(row.schedule)} weekdays, "
            f"{len(row.special_dates)} special dates)"
        )
        return RestaurantAvailabilityConfig.model_validate(row)
