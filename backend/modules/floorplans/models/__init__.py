from .floor_plan_models import ElementType, FloorPlan, TableShape

__all__ = ["ElementType", "FloorPlan", "TableShape"]
