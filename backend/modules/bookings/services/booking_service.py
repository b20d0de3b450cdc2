# backend/modules/bookings/services/booking_service.py

"""
Booking service: placement, lifecycle transitions and lookups.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy import update
from datetime import date, datetime
from typing import Callable, List, Optional
import random
import string
import logging

from core.config import settings
from core.mixins import utcnow
from ..exceptions import BookingNotFound, InvalidInput, InvalidTransition, SlotUnavailable
from ..models.booking_models import Booking, BookingRevision, BookingStatus, ManagementMode
from ..schemas.booking_schemas import (
    BookingCreate,
    BookingFilters,
    BookingUpdate,
    RestaurantAvailabilityConfig,
)
from ..utils.time_utils import is_within_booking_window
from ..state_machine import OCCUPYING_STATUSES, can_transition
from .availability_service import (
    AvailabilityService,
    evaluate_slot,
    occupied_table_ids,
    resolve_day_schedule,
)
from .commit_guard import BookingCommitGuard

logger = logging.getLogger(__name__)


class BookingService:
    """Service for managing bookings"""

    def __init__(
        self,
        db: Session,
        commit_guard: BookingCommitGuard,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.clock = clock or utcnow
        self.commit_guard = commit_guard
        self.availability_service = AvailabilityService(db, clock=self.clock)

    def generate_confirmation_code(self) -> str:
        """Generate a unique confirmation code"""
        alphabet = string.ascii_uppercase + string.digits
        while True:
            code = "".join(random.choices(alphabet, k=settings.confirmation_code_length))
            if not self.db.query(Booking).filter_by(confirmation_code=code).first():
                return code

    def create_booking(self, booking_data: BookingCreate) -> Booking:
        """Place a booking after re-checking the slot against live bookings.

        Raises InvalidInput for a bad party size, unknown restaurant or a date
        outside the booking window, and SlotUnavailable when the slot (or every
        fitting table) is taken at commit time.
        """
        if booking_data.party_size < 1:
            raise InvalidInput(
                "Party size must be at least 1", "party_size", booking_data.party_size
            )

        config = self.availability_service.get_config(booking_data.restaurant_id)
        today = self.availability_service.today()
        if not is_within_booking_window(
            booking_data.booking_date, today, config.advance_booking_days
        ):
            raise InvalidInput(
                f"Bookings are accepted from {today.isoformat()} up to "
                f"{config.advance_booking_days} days ahead",
                "booking_date",
                booking_data.booking_date,
            )

        with self.commit_guard.hold(booking_data.restaurant_id, booking_data.booking_date):
            for attempt in range(1, settings.booking_commit_attempts + 1):
                booking = self._try_commit(config, booking_data)
                if booking is not None:
                    return booking
                logger.info(
                    f"Booking revision for {booking_data.restaurant_id} on "
                    f"{booking_data.booking_date} moved during commit "
                    f"(attempt {attempt}); re-validating"
                )

        logger.warning(
            f"Gave up booking {booking_data.restaurant_id} {booking_data.booking_date} "
            f"{booking_data.booking_time} after {settings.booking_commit_attempts} attempts"
        )
        raise SlotUnavailable(
            booking_data.restaurant_id,
            booking_data.booking_date,
            booking_data.booking_time,
            booking_data.party_size,
            reason="Slot is being booked by someone else",
        )

    def _try_commit(
        self, config: RestaurantAvailabilityConfig, booking_data: BookingCreate
    ) -> Optional[Booking]:
        """One validate-then-write pass; None when the revision CAS is lost"""
        restaurant_id = booking_data.restaurant_id
        booking_date = booking_data.booking_date
        seen_version = self._read_revision(restaurant_id, booking_date)

        table = self._claimable_table(config, booking_data)

        if not self._advance_revision(restaurant_id, booking_date, seen_version):
            self.db.rollback()
            return None

        now = self.clock()
        booking = Booking(
            restaurant_id=restaurant_id,
            restaurant_name=booking_data.restaurant_name,
            user_id=booking_data.user_id,
            user_name=booking_data.user_name,
            user_email=booking_data.user_email,
            user_phone=booking_data.user_phone,
            booking_date=booking_date,
            booking_time=booking_data.booking_time,
            party_size=booking_data.party_size,
            special_requests=booking_data.special_requests,
            status=BookingStatus.PENDING,
            confirmation_code=self.generate_confirmation_code(),
            table_id=table.id if table else None,
            table_number=(table.name or table.id) if table else None,
            created_at=now,
            updated_at=now,
        )

        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)

        logger.info(
            f"Created booking {booking.id} for user {booking.user_id} at "
            f"{restaurant_id} on {booking_date} {booking.booking_time} "
            f"(party of {booking.party_size}, table {booking.table_id or '-'})"
        )
        return booking

    def _claimable_table(
        self, config: RestaurantAvailabilityConfig, booking_data: BookingCreate
    ):
        """Re-check the slot against live bookings.

        Returns the table to assign in table-based mode (None in guest-count
        mode) or raises SlotUnavailable.
        """
        def unavailable(reason: str) -> SlotUnavailable:
            logger.warning(
                f"Rejected booking at {booking_data.restaurant_id} on "
                f"{booking_data.booking_date} {booking_data.booking_time}: {reason}"
            )
            return SlotUnavailable(
                booking_data.restaurant_id,
                booking_data.booking_date,
                booking_data.booking_time,
                booking_data.party_size,
                reason=reason,
            )

        day = resolve_day_schedule(config, booking_data.booking_date)
        if day is None or not day.is_open:
            raise unavailable("Restaurant is closed on this date")
        if booking_data.booking_time not in day.slots:
            raise unavailable("Time is not a bookable slot")

        tables = []
        if config.management_mode == ManagementMode.TABLE_BASED:
            tables = self.availability_service.get_tables(config)
        bookings = self.availability_service.get_occupying_bookings(
            booking_data.restaurant_id, booking_data.booking_date
        )
        slot, table = evaluate_slot(
            config, day, tables, bookings, booking_data.booking_time, booking_data.party_size
        )
        if not slot.available:
            raise unavailable(
                f"Slot is full ({slot.booked} of {slot.capacity} taken)"
            )
        return table

    def _read_revision(self, restaurant_id: str, booking_date: date) -> Optional[int]:
        return self.db.query(BookingRevision.version).filter_by(
            restaurant_id=restaurant_id, booking_date=booking_date
        ).scalar()

    def _advance_revision(
        self, restaurant_id: str, booking_date: date, seen_version: Optional[int]
    ) -> bool:
        """Compare-and-swap the (restaurant, date) revision"""
        if seen_version is None:
            self.db.add(
                BookingRevision(
                    restaurant_id=restaurant_id, booking_date=booking_date, version=1
                )
            )
            try:
                self.db.flush()
            except IntegrityError:
                return False
            return True

        result = self.db.execute(
            update(BookingRevision)
            .where(
                BookingRevision.restaurant_id == restaurant_id,
                BookingRevision.booking_date == booking_date,
                BookingRevision.version == seen_version,
            )
            .values(version=seen_version + 1)
        )
        return result.rowcount == 1

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.db.query(Booking).filter_by(id=booking_id).first()
        if not booking:
            raise BookingNotFound(booking_id)
        return booking

    def get_booking_by_confirmation_code(self, code: str) -> Booking:
        booking = self.db.query(Booking).filter_by(confirmation_code=code.upper()).first()
        if not booking:
            raise BookingNotFound(code)
        return booking

    def list_bookings(self, filters: BookingFilters) -> List[Booking]:
        query = self.db.query(Booking)

        if filters.restaurant_id:
            query = query.filter(Booking.restaurant_id == filters.restaurant_id)
        if filters.user_id:
            query = query.filter(Booking.user_id == filters.user_id)
        if filters.booking_date:
            query = query.filter(Booking.booking_date == filters.booking_date)
        if filters.status:
            query = query.filter(Booking.status.in_(filters.status))

        return query.order_by(Booking.created_at.desc(), Booking.id).all()

    def update_booking_status(self, booking_id: str, new_status: BookingStatus) -> Booking:
        """Move a booking through its lifecycle.

        Cancelled and no-show bookings stop counting toward occupancy, so no
        separate release step is needed.
        """
        booking = self.get_booking(booking_id)
        self._apply_status(booking, new_status)
        booking.updated_at = self.clock()

        self.db.commit()
        self.db.refresh(booking)
        return booking

    def _apply_status(self, booking: Booking, new_status: BookingStatus) -> None:
        old_status = booking.status
        if not can_transition(old_status, new_status):
            logger.warning(
                f"Rejected status change for booking {booking.id}: "
                f"{old_status.value} -> {new_status.value}"
            )
            raise InvalidTransition(booking.id, old_status.value, new_status.value)

        booking.status = new_status
        logger.info(
            f"Booking {booking.id} status {old_status.value} -> {new_status.value}"
        )

    def update_booking(self, booking_id: str, update_data: BookingUpdate) -> Booking:
        """Staff edit: status, manual table assignment, special requests.

        Moving a live booking onto another table is refused with
        SlotUnavailable when that table is held by another booking within the
        turning time.
        """
        booking = self.get_booking(booking_id)
        changes = update_data.model_dump(exclude_unset=True)

        new_status = changes.pop("status", None)
        if new_status is not None and new_status != booking.status:
            self._apply_status(booking, new_status)

        new_table_id = changes.get("table_id")
        if (
            new_table_id
            and new_table_id != booking.table_id
            and booking.status in OCCUPYING_STATUSES
        ):
            with self.commit_guard.hold(booking.restaurant_id, booking.booking_date):
                seen_version = self._read_revision(booking.restaurant_id, booking.booking_date)
                self._ensure_table_free(booking, new_table_id)
                if not self._advance_revision(
                    booking.restaurant_id, booking.booking_date, seen_version
                ):
                    self.db.rollback()
                    raise self._table_unavailable(
                        booking, new_table_id, "Bookings changed during the update"
                    )
                return self._save_changes(booking, changes)

        return self._save_changes(booking, changes)

    def _ensure_table_free(self, booking: Booking, table_id: str) -> None:
        config = self.availability_service.get_config(booking.restaurant_id)
        others = [
            b for b in self.availability_service.get_occupying_bookings(
                booking.restaurant_id, booking.booking_date
            )
            if b.id != booking.id
        ]
        if table_id in occupied_table_ids(
            others, booking.booking_time, config.table_turning_time
        ):
            self.db.rollback()
            raise self._table_unavailable(
                booking, table_id, f"Table {table_id} is held by another booking"
            )

    def _table_unavailable(
        self, booking: Booking, table_id: str, reason: str
    ) -> SlotUnavailable:
        logger.warning(
            f"Refused moving booking {booking.id} to table {table_id}: {reason}"
        )
        return SlotUnavailable(
            booking.restaurant_id,
            booking.booking_date,
            booking.booking_time,
            booking.party_size,
            reason=reason,
        )

    def _save_changes(self, booking: Booking, changes: dict) -> Booking:
        for field, value in changes.items():
            setattr(booking, field, value)

        booking.updated_at = self.clock()
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def cancel_booking(self, booking_id: str, user_id: str) -> Booking:
        """Cancellation requested by the guest who made the booking"""
        booking = self.get_booking(booking_id)
        if booking.user_id != user_id:
            raise BookingNotFound(booking_id)
        return self.update_booking_status(booking_id, BookingStatus.CANCELLED)
