# backend/modules/floorplans/exceptions.py

from fastapi import status

from core.exceptions import DomainError


class FloorPlanNotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, floor_plan_id: str):
        super().__init__(
            f"Floor plan {floor_plan_id} not found",
            "FLOOR_PLAN_NOT_FOUND",
            {"floor_plan_id": floor_plan_id},
        )
