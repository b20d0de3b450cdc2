# backend/modules/restaurants/schemas/hours_schemas.py

from typing import Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field


class DayTranslations(BaseModel):
    """Localized day names keyed by canonical English day name"""

    full: Dict[str, str] = {}
    short: Dict[str, str] = {}


class HoursFormatRequest(BaseModel):
    hours: str = Field("", max_length=1000)
    language: Optional[str] = Field(None, max_length=10)
    at: Optional[datetime] = Field(
        None, description="Moment to evaluate the open-now flag at; defaults to now"
    )


class HoursFormatResponse(BaseModel):
    hours: str
    formatted: str
    is_open: bool
