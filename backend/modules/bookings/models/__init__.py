from .booking_models import (
    Booking,
    BookingRevision,
    BookingStatus,
    ManagementMode,
    RestaurantAvailability,
)

__all__ = [
    "Booking",
    "BookingRevision",
    "BookingStatus",
    "ManagementMode",
    "RestaurantAvailability",
]
