from fastapi import APIRouter
from .floor_plan_routes import router as floor_plan_router

router = APIRouter(prefix="/floor-plans", tags=["Floor Plans"])

router.include_router(floor_plan_router)

__all__ = ["router"]
