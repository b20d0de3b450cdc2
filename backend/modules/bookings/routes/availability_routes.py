# backend/modules/bookings/routes/availability_routes.py

"""
Availability queries and per-restaurant availability configuration.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date

from core.database import get_db
from ..services import AvailabilityService
from ..schemas import (
    AvailabilitySettingsUpdate,
    DayAvailability,
    RestaurantAvailabilityConfig,
)

router = APIRouter()


@router.get("/availability", response_model=DayAvailability)
def get_availability(
    restaurant_id: str = Query(..., description="Restaurant to check"),
    booking_date: date = Query(..., alias="date", description="Date to check"),
    party_size: int = Query(..., description="Number of guests"),
    db: Session = Depends(get_db),
):
    """
    Get bookable time slots for a date.

    Dates outside the restaurant's booking window, closed weekdays and
    closed special dates come back with `is_open=false` and no slots.
    """
    service = AvailabilityService(db)
    return service.get_availability(restaurant_id, booking_date, party_size)


@router.get(
    "/availability/{restaurant_id}/config",
    response_model=RestaurantAvailabilityConfig,
)
def get_availability_config(restaurant_id: str, db: Session = Depends(get_db)):
    service = AvailabilityService(db)
    return service.get_availability_config(restaurant_id)


@router.put(
    "/availability/{restaurant_id}/config",
    response_model=RestaurantAvailabilityConfig,
)
def set_availability_config(
    restaurant_id: str,
    data: AvailabilitySettingsUpdate,
    db: Session = Depends(get_db),
):
    """Create or replace the restaurant's schedule, special dates and tables"""
    service = AvailabilityService(db)
    return service.set_availability(restaurant_id, data)
