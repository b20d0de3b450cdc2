from fastapi import APIRouter
from .hours_routes import router as hours_router

router = APIRouter(prefix="/restaurants", tags=["Restaurants"])

router.include_router(hours_router)

__all__ = ["router"]
