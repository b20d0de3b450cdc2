from .booking_schemas import (
    AvailabilitySettingsUpdate,
    BookingCreate,
    BookingFilters,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
    DayAvailability,
    DaySchedule,
    RestaurantAvailabilityConfig,
    RestaurantBookingStats,
    SimpleTable,
    TimeSlot,
)

__all__ = [
    "AvailabilitySettingsUpdate",
    "BookingCreate",
    "BookingFilters",
    "BookingResponse",
    "BookingStatusUpdate",
    "BookingUpdate",
    "DayAvailability",
    "DaySchedule",
    "RestaurantAvailabilityConfig",
    "RestaurantBookingStats",
    "SimpleTable",
    "TimeSlot",
]
