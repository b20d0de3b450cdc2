# backend/modules/bookings/tests/test_status_transitions.py

"""
Exhaustive check of the booking lifecycle table.
"""

import itertools
import pytest

from ..exceptions import InvalidTransition
from ..models.booking_models import BookingStatus
from ..state_machine import ALLOWED_TRANSITIONS, TERMINAL_STATUSES, can_transition

ALLOWED = {
    (BookingStatus.PENDING, BookingStatus.CONFIRMED),
    (BookingStatus.PENDING, BookingStatus.CANCELLED),
    (BookingStatus.CONFIRMED, BookingStatus.SEATED),
    (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
    (BookingStatus.CONFIRMED, BookingStatus.NO_SHOW),
    (BookingStatus.SEATED, BookingStatus.COMPLETED),
}


@pytest.mark.parametrize(
    "current,target", list(itertools.product(BookingStatus, BookingStatus))
)
def test_transition_table(current, target):
    assert can_transition(current, target) is ((current, target) in ALLOWED)


@pytest.mark.parametrize(
    "current,target", list(itertools.product(BookingStatus, BookingStatus))
)
def test_service_enforces_transition_table(
    current, target, booking_service, add_booking, db_session
):
    booking = add_booking(status=current)

    if (current, target) in ALLOWED:
        updated = booking_service.update_booking_status(booking.id, target)
        assert updated.status == target
    else:
        with pytest.raises(InvalidTransition):
            booking_service.update_booking_status(booking.id, target)
        db_session.refresh(booking)
        assert booking.status == current


def test_every_status_has_an_entry():
    assert set(ALLOWED_TRANSITIONS) == set(BookingStatus)


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
        BookingStatus.NO_SHOW,
    }
