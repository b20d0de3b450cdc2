# backend/modules/bookings/tests/test_stats_service.py

import pytest
from datetime import timedelta

from ..models.booking_models import BookingStatus
from ..services import BookingStatsService
from ..services.stats_service import summarize_bookings


class TestBookingStats:
    @pytest.fixture
    def stats_service(self, db_session, clock):
        return BookingStatsService(db_session, clock=clock)

    def test_empty_restaurant(self, stats_service):
        stats = stats_service.compute_stats("bistro")

        assert stats.total_bookings == 0
        assert stats.no_show_rate == 0.0
        assert stats.average_party_size == 0.0
        assert all(count == 0 for count in stats.by_status.values())
        assert set(stats.by_status) == set(BookingStatus)

    def test_aggregates(self, stats_service, add_booking, today, monday):
        add_booking(party_size=2, status=BookingStatus.COMPLETED, booking_date=today)
        add_booking(party_size=4, status=BookingStatus.COMPLETED, booking_date=today)
        add_booking(party_size=6, status=BookingStatus.NO_SHOW, booking_date=today)
        add_booking(party_size=8, status=BookingStatus.CANCELLED)
        add_booking(party_size=3, status=BookingStatus.PENDING)
        add_booking(party_size=5, status=BookingStatus.CONFIRMED)
        add_booking(
            party_size=2, status=BookingStatus.CONFIRMED,
            booking_date=today - timedelta(days=3),
        )
        add_booking(restaurant_id="elsewhere", party_size=10)

        stats = stats_service.compute_stats("bistro")

        assert stats.total_bookings == 7
        assert stats.today_bookings == 3
        assert stats.upcoming_bookings == 2
        assert stats.completed_bookings == 2
        assert stats.cancelled_bookings == 1
        assert stats.no_show_rate == pytest.approx(1 / 4)
        assert stats.average_party_size == pytest.approx((2 + 4 + 6 + 3 + 5 + 2) / 6)
        assert stats.by_status[BookingStatus.CONFIRMED] == 2

    def test_summarize_is_pure(self, add_booking, today):
        bookings = [add_booking(party_size=4, status=BookingStatus.CANCELLED)]

        stats = summarize_bookings("bistro", bookings, today)

        assert stats.cancelled_bookings == 1
        assert stats.no_show_rate == 0.0
        assert stats.average_party_size == 0.0
