# backend/modules/bookings/models/booking_models.py

"""
Booking and availability models.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Date, Text, Enum, JSON, Index
)
import enum
import uuid

from core.database import Base
from core.mixins import TimestampMixin, utcnow


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class ManagementMode(str, enum.Enum):
    """How a restaurant tracks slot occupancy"""
    GUEST_COUNT = "guest-count"
    TABLE_BASED = "table-based"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def _new_booking_id() -> str:
    return f"booking_{uuid.uuid4().hex}"


class RestaurantAvailability(Base, TimestampMixin):
    """Staff-maintained booking configuration, one row per restaurant"""
    __tablename__ = "restaurant_availability"

    restaurant_id = Column(String(64), primary_key=True)
    management_mode = Column(
        Enum(ManagementMode, values_callable=_enum_values, name="management_mode"),
        default=ManagementMode.GUEST_COUNT,
        nullable=False,
    )

    # {"Monday": {"is_open": true, "slots": ["18:00"], "capacity_per_slot": 20}}
    schedule = Column(JSON, default=dict, nullable=False)
    # {"2026-12-31": {...same shape...}}
    special_dates = Column(JSON, default=dict, nullable=False)

    default_capacity_per_slot = Column(Integer, nullable=False)
    advance_booking_days = Column(Integer, nullable=False)
    table_turning_time = Column(Integer, nullable=False)  # minutes

    # [{"id": "t1", "name": "Window", "capacity": 4, "is_active": true}]
    tables = Column(JSON, default=list, nullable=False)

    def __repr__(self):
        return f"<RestaurantAvailability {self.restaurant_id} ({self.management_mode})>"


class Booking(Base):
    """A reservation; never deleted, only moved through its statuses"""
    __tablename__ = "bookings"

    id = Column(String(64), primary_key=True, default=_new_booking_id)
    restaurant_id = Column(String(64), nullable=False, index=True)
    restaurant_name = Column(String(200), nullable=False, default="")

    # Guest details
    user_id = Column(String(64), nullable=False, index=True)
    user_name = Column(String(200), nullable=False, default="")
    user_email = Column(String(200), nullable=False, default="")
    user_phone = Column(String(50), nullable=False, default="")

    # Slot
    booking_date = Column(Date, nullable=False)
    booking_time = Column(String(5), nullable=False)  # HH:MM
    party_size = Column(Integer, nullable=False)

    status = Column(
        Enum(BookingStatus, values_callable=_enum_values, name="booking_status"),
        default=BookingStatus.PENDING,
        nullable=False,
        index=True,
    )
    special_requests = Column(Text)
    confirmation_code = Column(String(16), unique=True, index=True)

    # Table assignment (table-based mode or manual staff assignment)
    table_id = Column(String(64))
    table_number = Column(String(50))

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_booking_restaurant_date_time", "restaurant_id", "booking_date", "booking_time"),
        Index("idx_booking_restaurant_status", "restaurant_id", "status"),
    )

    def __repr__(self):
        return (
            f"<Booking {self.id} - {self.restaurant_id} on {self.booking_date} "
            f"at {self.booking_time} ({self.status})>"
        )


class BookingRevision(Base):
    """Version counter per restaurant and date.

    Every booking commit bumps the counter with a compare-and-swap, so two
    writers that validated against the same snapshot cannot both commit.
    """
    __tablename__ = "booking_revisions"

    restaurant_id = Column(String(64), primary_key=True)
    booking_date = Column(Date, primary_key=True)
    version = Column(Integer, nullable=False, default=0)
