# backend/modules/floorplans/models/floor_plan_models.py

from sqlalchemy import Column, Integer, String, JSON, Index
import enum
import uuid

from core.database import Base
from core.mixins import TimestampMixin


class TableShape(str, enum.Enum):
    SQUARE = "square"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    ROUND = "round"


class ElementType(str, enum.Enum):
    """Non-seating items drawn on a floor plan"""
    WALL = "wall"
    ENTRANCE = "entrance"
    BAR = "bar"
    KITCHEN = "kitchen"
    RESTROOM = "restroom"
    DECORATION = "decoration"


def _new_floor_plan_id() -> str:
    return f"fp_{uuid.uuid4().hex}"


class FloorPlan(Base, TimestampMixin):
    """Restaurant layout: positioned tables plus decorative elements"""
    __tablename__ = "floor_plans"

    id = Column(String(64), primary_key=True, default=_new_floor_plan_id)
    restaurant_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    # Canvas size
    width = Column(Integer, nullable=False, default=1000)
    height = Column(Integer, nullable=False, default=800)

    # Stored as JSON documents; see FloorPlanTable / FloorPlanElement schemas
    tables = Column(JSON, default=list, nullable=False)
    elements = Column(JSON, default=list, nullable=False)

    __table_args__ = (
        Index("idx_floor_plan_restaurant_updated", "restaurant_id", "updated_at"),
    )

    def __repr__(self):
        return f"<FloorPlan {self.id} '{self.name}' for {self.restaurant_id}>"
