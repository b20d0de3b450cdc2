from .hours_schemas import DayTranslations, HoursFormatRequest, HoursFormatResponse

__all__ = ["DayTranslations", "HoursFormatRequest", "HoursFormatResponse"]
