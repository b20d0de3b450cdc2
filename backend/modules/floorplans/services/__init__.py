from .floor_plan_service import FloorPlanService

__all__ = ["FloorPlanService"]
