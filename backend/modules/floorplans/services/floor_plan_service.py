# backend/modules/floorplans/services/floor_plan_service.py

"""
Service for managing restaurant floor plans.
"""

from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from core.mixins import utcnow
from ..exceptions import FloorPlanNotFound
from ..models.floor_plan_models import FloorPlan
from ..schemas.floor_plan_schemas import (
    FloorPlanCreate, FloorPlanTable, FloorPlanUpdate
)

logger = logging.getLogger(__name__)


class FloorPlanService:
    """Service for floor plan CRUD"""

    def __init__(self, db: Session):
        self.db = db

    def list_floor_plans(self, restaurant_id: str) -> List[FloorPlan]:
        return (
            self.db.query(FloorPlan)
            .filter(FloorPlan.restaurant_id == restaurant_id)
            .order_by(FloorPlan.updated_at.desc())
            .all()
        )

    def get_floor_plan(self, floor_plan_id: str) -> FloorPlan:
        floor_plan = self.db.query(FloorPlan).filter_by(id=floor_plan_id).first()
        if not floor_plan:
            raise FloorPlanNotFound(floor_plan_id)
        return floor_plan

    def create_floor_plan(self, data: FloorPlanCreate) -> FloorPlan:
        payload = data.model_dump(mode="json")
        now = utcnow()
        floor_plan = FloorPlan(**payload, created_at=now, updated_at=now)

        self.db.add(floor_plan)
        self.db.commit()
        self.db.refresh(floor_plan)

        logger.info(
            f"Created floor plan {floor_plan.id} for restaurant {floor_plan.restaurant_id} "
            f"with {len(floor_plan.tables)} tables"
        )
        return floor_plan

    def update_floor_plan(self, floor_plan_id: str, data: FloorPlanUpdate) -> FloorPlan:
        floor_plan = self.get_floor_plan(floor_plan_id)

        for field, value in data.model_dump(mode="json", exclude_unset=True).items():
            if value is None:
                continue
            setattr(floor_plan, field, value)
        floor_plan.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(floor_plan)

        logger.info(f"Updated floor plan {floor_plan_id}")
        return floor_plan

    def delete_floor_plan(self, floor_plan_id: str) -> None:
        floor_plan = self.get_floor_plan(floor_plan_id)
        self.db.delete(floor_plan)
        self.db.commit()
        logger.info(f"Deleted floor plan {floor_plan_id}")

    def get_active_tables(self, restaurant_id: str) -> List[FloorPlanTable]:
        """Active tables of the most recently updated floor plan"""
        latest: Optional[FloorPlan] = (
            self.db.query(FloorPlan)
            .filter(FloorPlan.restaurant_id == restaurant_id)
            .order_by(FloorPlan.updated_at.desc())
            .first()
        )
        if not latest:
            return []

        tables = [FloorPlanTable.model_validate(raw) for raw in latest.tables or []]
        return [table for table in tables if table.is_active]
