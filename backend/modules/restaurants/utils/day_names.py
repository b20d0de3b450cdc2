# backend/modules/restaurants/utils/day_names.py

from ..schemas.hours_schemas import DayTranslations

DAY_TRANSLATIONS = {
    "en": {
        "full": {
            "Monday": "Monday",
            "Tuesday": "Tuesday",
            "Wednesday": "Wednesday",
            "Thursday": "Thursday",
            "Friday": "Friday",
            "Saturday": "Saturday",
            "Sunday": "Sunday",
        },
        "short": {
            "Monday": "Mon",
            "Tuesday": "Tue",
            "Wednesday": "Wed",
            "Thursday": "Thu",
            "Friday": "Fri",
            "Saturday": "Sat",
            "Sunday": "Sun",
        },
    },
    "mn": {
        "full": {
            "Monday": "Даваа",
            "Tuesday": "Мягмар",
            "Wednesday": "Лхагва",
            "Thursday": "Пүрэв",
            "Friday": "Баасан",
            "Saturday": "Бямба",
            "Sunday": "Ням",
        },
        "short": {
            "Monday": "Да",
            "Tuesday": "Мя",
            "Wednesday": "Лх",
            "Thursday": "Пү",
            "Friday": "Ба",
            "Saturday": "Бя",
            "Sunday": "Ня",
        },
    },
}


def get_day_translations(language: str) -> DayTranslations:
    """Day names for a language code; unknown languages get empty maps"""
    names = DAY_TRANSLATIONS.get(language.lower(), {})
    return DayTranslations(**names)
