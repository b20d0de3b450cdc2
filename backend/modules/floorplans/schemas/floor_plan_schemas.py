# backend/modules/floorplans/schemas/floor_plan_schemas.py

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.floor_plan_models import ElementType, TableShape


class FloorPlanTable(BaseModel):
    """Positioned table on a floor plan"""

    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., max_length=50)
    capacity: int = Field(..., ge=1)
    shape: TableShape = TableShape.RECTANGLE
    x: float = 0
    y: float = 0
    width: float = Field(80, gt=0)
    height: float = Field(80, gt=0)
    rotation: Optional[float] = None
    is_active: bool = True


class FloorPlanElement(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    type: ElementType
    x: float = 0
    y: float = 0
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    rotation: Optional[float] = None
    label: Optional[str] = Field(None, max_length=100)


def _unique_table_ids(tables: List[FloorPlanTable]) -> List[FloorPlanTable]:
    seen = set()
    for table in tables:
        if table.id in seen:
            raise ValueError(f"Duplicate table id: {table.id}")
        seen.add(table.id)
    return tables


class FloorPlanBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    width: int = Field(1000, gt=0)
    height: int = Field(800, gt=0)
    tables: List[FloorPlanTable] = []
    elements: List[FloorPlanElement] = []

    @field_validator("tables")
    @classmethod
    def validate_tables(cls, v):
        return _unique_table_ids(v)


class FloorPlanCreate(FloorPlanBase):
    restaurant_id: str = Field(..., min_length=1, max_length=64)


class FloorPlanUpdate(BaseModel):
    """Partial update; restaurant ownership cannot change"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    width: Optional[int] = Field(None, gt=0)
    height: Optional[int] = Field(None, gt=0)
    tables: Optional[List[FloorPlanTable]] = None
    elements: Optional[List[FloorPlanElement]] = None

    @field_validator("tables")
    @classmethod
    def validate_tables(cls, v):
        if v is None:
            return v
        return _unique_table_ids(v)


class FloorPlanResponse(FloorPlanBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    created_at: datetime
    updated_at: datetime
