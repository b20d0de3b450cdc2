# backend/modules/bookings/state_machine.py

"""
Booking lifecycle.

    pending    -> confirmed, cancelled
    confirmed  -> seated, cancelled, no-show
    seated     -> completed
    completed, cancelled, no-show are terminal
"""

from typing import Dict, FrozenSet

from .models.booking_models import BookingStatus

ALLOWED_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.SEATED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.SEATED: frozenset({BookingStatus.COMPLETED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)

# Statuses whose bookings hold capacity when availability is computed
OCCUPYING_STATUSES = frozenset(
    {
        BookingStatus.PENDING,
        BookingStatus.CONFIRMED,
        BookingStatus.SEATED,
        BookingStatus.COMPLETED,
    }
)


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]
