# backend/modules/bookings/exceptions.py

"""
Structured failures raised by the booking engine.

Every exception carries an error code and a ``details`` dict describing the
request that failed, so callers can present or log them without parsing the
message text.
"""

from datetime import date
from typing import Any, Optional

from fastapi import status

from core.exceptions import DomainError


class BookingError(DomainError):
    """Base exception for all booking errors"""


class SlotUnavailable(BookingError):
    """The requested slot has no room left at commit time"""

    status_code = status.HTTP_409_CONFLICT

    def __init__(
        self,
        restaurant_id: str,
        booking_date: date,
        booking_time: str,
        party_size: int,
        reason: str = "No availability for the selected time",
    ):
        details = {
            "restaurant_id": restaurant_id,
            "date": booking_date.isoformat(),
            "time": booking_time,
            "party_size": party_size,
            "reason": reason,
        }
        super().__init__(
            f"Slot {booking_date.isoformat()} {booking_time} is unavailable: {reason}",
            "SLOT_UNAVAILABLE",
            details,
        )


class InvalidTransition(BookingError):
    """A status change that the booking lifecycle does not allow"""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, booking_id: str, current_status: str, requested_status: str):
        details = {
            "booking_id": booking_id,
            "current_status": current_status,
            "requested_status": requested_status,
        }
        super().__init__(
            f"Cannot move booking {booking_id} from '{current_status}' "
            f"to '{requested_status}'",
            "INVALID_TRANSITION",
            details,
        )


class InvalidInput(BookingError):
    """Malformed request: bad party size, out-of-window date, unknown restaurant"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        details = {"field": field, "value": value if value is None else str(value)}
        super().__init__(message, "INVALID_INPUT", details)


class BookingNotFound(BookingError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, booking_id: str):
        super().__init__(
            f"Booking {booking_id} not found",
            "BOOKING_NOT_FOUND",
            {"booking_id": booking_id},
        )
