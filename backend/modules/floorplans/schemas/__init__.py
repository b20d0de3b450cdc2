from .floor_plan_schemas import (
    FloorPlanCreate,
    FloorPlanElement,
    FloorPlanResponse,
    FloorPlanTable,
    FloorPlanUpdate,
)

__all__ = [
    "FloorPlanCreate",
    "FloorPlanElement",
    "FloorPlanResponse",
    "FloorPlanTable",
    "FloorPlanUpdate",
]
