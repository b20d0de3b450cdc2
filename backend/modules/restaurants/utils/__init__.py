from .day_names import get_day_translations
from .hours_utils import group_hours, is_restaurant_open, parse_weekly_hours

__all__ = [
    "get_day_translations",
    "group_hours",
    "is_restaurant_open",
    "parse_weekly_hours",
]
