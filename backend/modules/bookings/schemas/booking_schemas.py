# backend/modules/bookings/schemas/booking_schemas.py

"""
Pydantic schemas for the booking system.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import date, datetime
from typing import Dict, List, Optional

from ..models.booking_models import BookingStatus, ManagementMode
from ..utils.time_utils import normalize_time_string, normalize_weekday


class DaySchedule(BaseModel):
    """Opening configuration for one weekday or one special date"""

    is_open: bool = True
    slots: List[str] = []
    capacity_per_slot: Optional[int] = Field(None, ge=0)

    @field_validator("slots")
    @classmethod
    def validate_slots(cls, v):
        # Keep the configured order; it is the order slots are displayed in.
        return [normalize_time_string(slot) for slot in v]


class SimpleTable(BaseModel):
    """Seating unit as listed in the availability config"""

    id: str = Field(..., min_length=1, max_length=64)
    name: str = ""
    capacity: int = Field(..., ge=1)
    is_active: bool = True


def _normalize_schedule_keys(schedule: Dict[str, DaySchedule]) -> Dict[str, DaySchedule]:
    normalized = {}
    for key, day in schedule.items():
        weekday = normalize_weekday(key)
        if weekday is None:
            raise ValueError(f"Unknown weekday in schedule: {key!r}")
        normalized[weekday] = day
    return normalized


class AvailabilitySettingsUpdate(BaseModel):
    """Staff input for saving a restaurant's availability config"""

    management_mode: ManagementMode = ManagementMode.GUEST_COUNT
    schedule: Dict[str, DaySchedule] = {}
    special_dates: Dict[date, DaySchedule] = {}
    default_capacity_per_slot: Optional[int] = Field(None, ge=0)
    advance_booking_days: Optional[int] = Field(None, ge=0)
    table_turning_time: Optional[int] = Field(None, ge=1)
    tables: List[SimpleTable] = []

    @field_validator("schedule")
    @classmethod
    def validate_schedule(cls, v):
        return _normalize_schedule_keys(v)


class RestaurantAvailabilityConfig(BaseModel):
    """Complete availability config as read by the engine"""

    model_config = ConfigDict(from_attributes=True)

    restaurant_id: str
    management_mode: ManagementMode
    schedule: Dict[str, DaySchedule] = {}
    special_dates: Dict[date, DaySchedule] = {}
    default_capacity_per_slot: int = Field(..., ge=0)
    advance_booking_days: int = Field(..., ge=0)
    table_turning_time: int = Field(..., ge=1)
    tables: List[SimpleTable] = []
    updated_at: Optional[datetime] = None

    @field_validator("schedule")
    @classmethod
    def validate_schedule(cls, v):
        return _normalize_schedule_keys(v)


class TimeSlot(BaseModel):
    """Computed occupancy of one configured slot"""

    time: str
    available: bool
    capacity: int
    booked: int


class DayAvailability(BaseModel):
    """Bookable slots for a date and party size"""

    date: date
    is_open: bool
    slots: List[TimeSlot] = []

    @model_validator(mode="after")
    def closed_days_have_no_slots(self):
        if not self.is_open and self.slots:
            raise ValueError("A closed day cannot expose slots")
        return self


class BookingCreate(BaseModel):
    """Schema for creating a new booking"""

    restaurant_id: str = Field(..., min_length=1, max_length=64)
    restaurant_name: str = Field("", max_length=200)
    user_id: str = Field(..., min_length=1, max_length=64)
    user_name: str = Field("", max_length=200)
    user_email: str = Field("", max_length=200)
    user_phone: str = Field("", max_length=50)
    booking_date: date
    booking_time: str
    # Range is enforced by the service so it surfaces as INVALID_INPUT.
    party_size: int
    special_requests: Optional[str] = Field(None, max_length=500)

    @field_validator("booking_time")
    @classmethod
    def validate_time(cls, v):
        return normalize_time_string(v)


class BookingUpdate(BaseModel):
    """Schema for updating a booking"""

    status: Optional[BookingStatus] = None
    table_id: Optional[str] = Field(None, max_length=64)
    table_number: Optional[str] = Field(None, max_length=50)
    special_requests: Optional[str] = Field(None, max_length=500)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingResponse(BaseModel):
    """Schema for booking response"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    restaurant_name: str
    user_id: str
    user_name: str
    user_email: str
    user_phone: str
    booking_date: date
    booking_time: str
    party_size: int
    status: BookingStatus
    special_requests: Optional[str] = None
    confirmation_code: Optional[str] = None
    table_id: Optional[str] = None
    table_number: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BookingFilters(BaseModel):
    restaurant_id: Optional[str] = None
    user_id: Optional[str] = None
    booking_date: Optional[date] = None
    status: Optional[List[BookingStatus]] = None


class RestaurantBookingStats(BaseModel):
    """Aggregate booking figures for one restaurant"""

    restaurant_id: str
    total_bookings: int
    today_bookings: int
    upcoming_bookings: int
    completed_bookings: int
    cancelled_bookings: int
    no_show_rate: float
    average_party_size: float
    by_status: Dict[BookingStatus, int]
