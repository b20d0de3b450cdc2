# backend/modules/floorplans/routes/floor_plan_routes.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from ..services import FloorPlanService
from ..schemas import FloorPlanCreate, FloorPlanResponse, FloorPlanUpdate

router = APIRouter()


@router.get("/", response_model=List[FloorPlanResponse])
def list_floor_plans(
    restaurant_id: str = Query(..., description="Restaurant whose plans to list"),
    db: Session = Depends(get_db),
):
    """List a restaurant's floor plans, most recently updated first"""
    return FloorPlanService(db).list_floor_plans(restaurant_id)


@router.post("/", response_model=FloorPlanResponse, status_code=status.HTTP_201_CREATED)
def create_floor_plan(data: FloorPlanCreate, db: Session = Depends(get_db)):
    return FloorPlanService(db).create_floor_plan(data)


@router.get("/{floor_plan_id}", response_model=FloorPlanResponse)
def get_floor_plan(floor_plan_id: str, db: Session = Depends(get_db)):
    return FloorPlanService(db).get_floor_plan(floor_plan_id)


@router.put("/{floor_plan_id}", response_model=FloorPlanResponse)
def update_floor_plan(
    floor_plan_id: str, data: FloorPlanUpdate, db: Session = Depends(get_db)
):
    """
    Update a floor plan.

    When the restaurant's availability config lists no tables, the most
    recently updated plan's active tables are used for table-based booking.
    """
    return FloorPlanService(db).update_floor_plan(floor_plan_id, data)


@router.delete("/{floor_plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_floor_plan(floor_plan_id: str, db: Session = Depends(get_db)):
    FloorPlanService(db).delete_floor_plan(floor_plan_id)
