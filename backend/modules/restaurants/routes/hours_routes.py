# backend/modules/restaurants/routes/hours_routes.py

from fastapi import APIRouter

from core.config import settings
from ..schemas import DayTranslations, HoursFormatRequest, HoursFormatResponse
from ..utils import get_day_translations, group_hours, is_restaurant_open

router = APIRouter()


@router.post("/hours/format", response_model=HoursFormatResponse)
def format_hours(request: HoursFormatRequest):
    """
    Render free-form weekly hours as a grouped summary.

    Day labels follow `language` (default from settings); text that cannot
    be parsed is returned unchanged.
    """
    day_names = get_day_translations(request.language or settings.default_language)
    return HoursFormatResponse(
        hours=request.hours,
        formatted=group_hours(request.hours, day_names),
        is_open=is_restaurant_open(request.hours, request.at),
    )


@router.get("/hours/day-names/{language}", response_model=DayTranslations)
def get_day_names(language: str):
    return get_day_translations(language)
