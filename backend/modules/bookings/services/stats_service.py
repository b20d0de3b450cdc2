# backend/modules/bookings/services/stats_service.py

"""
Booking statistics for restaurant dashboards.
"""

from sqlalchemy.orm import Session
from datetime import date, datetime
from typing import Callable, Iterable, Optional
from collections import Counter

from core.mixins import utcnow
from ..models.booking_models import Booking, BookingStatus
from ..schemas.booking_schemas import RestaurantBookingStats

UPCOMING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


def summarize_bookings(
    restaurant_id: str, bookings: Iterable[Booking], today: date
) -> RestaurantBookingStats:
    """Aggregate counts and rates over a restaurant's bookings.

    no_show_rate = no-show / (completed + no-show + cancelled), 0 when there
    are no finished bookings; average_party_size ignores cancelled bookings.
    """
    bookings = list(bookings)
    by_status = Counter(b.status for b in bookings)

    finished = (
        by_status[BookingStatus.COMPLETED]
        + by_status[BookingStatus.NO_SHOW]
        + by_status[BookingStatus.CANCELLED]
    )
    no_show_rate = by_status[BookingStatus.NO_SHOW] / finished if finished else 0.0

    party_sizes = [b.party_size for b in bookings if b.status != BookingStatus.CANCELLED]
    average_party_size = sum(party_sizes) / len(party_sizes) if party_sizes else 0.0

    return RestaurantBookingStats(
        restaurant_id=restaurant_id,
        total_bookings=len(bookings),
        today_bookings=sum(1 for b in bookings if b.booking_date == today),
        upcoming_bookings=sum(
            1 for b in bookings
            if b.booking_date >= today and b.status in UPCOMING_STATUSES
        ),
        completed_bookings=by_status[BookingStatus.COMPLETED],
        cancelled_bookings=by_status[BookingStatus.CANCELLED],
        no_show_rate=no_show_rate,
        average_party_size=average_party_size,
        by_status={status: by_status[status] for status in BookingStatus},
    )


class BookingStatsService:
    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.clock = clock or utcnow

    def compute_stats(self, restaurant_id: str) -> RestaurantBookingStats:
        bookings = self.db.query(Booking).filter(
            Booking.restaurant_id == restaurant_id
        ).all()
        return summarize_bookings(restaurant_id, bookings, self.clock().date())
