# backend/modules/bookings/routes/booking_routes.py

"""
Booking lifecycle API routes.
"""

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from core.database import get_db
from ..models.booking_models import BookingStatus
from ..services import BookingCommitGuard, BookingService, BookingStatsService
from ..schemas import (
    BookingCreate,
    BookingFilters,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
    RestaurantBookingStats,
)

router = APIRouter()


def get_commit_guard(request: Request) -> BookingCommitGuard:
    """The process-wide guard created at application start"""
    return request.app.state.commit_guard


def get_booking_service(
    db: Session = Depends(get_db),
    commit_guard: BookingCommitGuard = Depends(get_commit_guard),
) -> BookingService:
    return BookingService(db, commit_guard=commit_guard)


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Place a booking.

    - Re-checks the slot against live bookings at commit time
    - Assigns the smallest fitting free table in table-based mode
    - Returns 409 SLOT_UNAVAILABLE when the slot filled up meanwhile
    """
    return service.create_booking(booking_data)


@router.get("/", response_model=List[BookingResponse])
def list_bookings(
    restaurant_id: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
    booking_date: Optional[date] = Query(None, alias="date"),
    status_filter: Optional[List[BookingStatus]] = Query(None, alias="status"),
    service: BookingService = Depends(get_booking_service),
):
    filters = BookingFilters(
        restaurant_id=restaurant_id,
        user_id=user_id,
        booking_date=booking_date,
        status=status_filter,
    )
    return service.list_bookings(filters)


@router.get("/stats/{restaurant_id}", response_model=RestaurantBookingStats)
def get_booking_stats(restaurant_id: str, db: Session = Depends(get_db)):
    service = BookingStatsService(db)
    return service.compute_stats(restaurant_id)


@router.get("/confirmation/{confirmation_code}", response_model=BookingResponse)
def get_booking_by_confirmation_code(
    confirmation_code: str,
    service: BookingService = Depends(get_booking_service),
):
    return service.get_booking_by_confirmation_code(confirmation_code)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
):
    return service.get_booking(booking_id)


@router.patch("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: str,
    update_data: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
):
    """Staff edit of status, table assignment or special requests"""
    return service.update_booking(booking_id, update_data)


@router.post("/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: str,
    status_update: BookingStatusUpdate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Move a booking through its lifecycle.

    Transitions outside pending -> confirmed/cancelled, confirmed ->
    seated/cancelled/no-show and seated -> completed return 409
    INVALID_TRANSITION.
    """
    return service.update_booking_status(booking_id, status_update.status)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: str,
    user_id: str = Query(..., description="Guest who made the booking"),
    service: BookingService = Depends(get_booking_service),
):
    return service.cancel_booking(booking_id, user_id)
