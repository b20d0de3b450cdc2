from fastapi import APIRouter
from .availability_routes import router as availability_router
from .booking_routes import router as booking_router

# Availability paths are registered first so "/availability" is not
# captured by "/{booking_id}".
router = APIRouter(prefix="/bookings", tags=["Bookings"])

router.include_router(availability_router, tags=["Availability"])
router.include_router(booking_router)

__all__ = ["router"]
