from .availability_service import AvailabilityService
from .booking_service import BookingService
from .commit_guard import BookingCommitGuard
from .stats_service import BookingStatsService

__all__ = [
    "AvailabilityService",
    "BookingService",
    "BookingCommitGuard",
    "BookingStatsService",
]
