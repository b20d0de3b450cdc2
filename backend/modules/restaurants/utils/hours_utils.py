# backend/modules/restaurants/utils/hours_utils.py

"""
Parsing and formatting of free-form weekly opening hours.

Restaurants enter hours as text such as ``"Monday - Friday: 9am-5pm,
Saturday: 10am-2pm"``. ``parse_weekly_hours`` turns that into a
day -> time-text map, ``group_hours`` renders the map back as a compact
localized summary and ``is_restaurant_open`` answers whether a given moment
falls inside the day's hours.

Text that matches none of the recognised shapes is dropped (logged at DEBUG)
rather than rejected; formatting never raises.
"""

import re
import logging
from datetime import datetime
from typing import Dict, List, Optional

from modules.bookings.utils.time_utils import WEEKDAYS
from ..schemas.hours_schemas import DayTranslations

logger = logging.getLogger(__name__)

RANGE_PATTERN = re.compile(
    r"([A-Za-z]+)\s*-\s*([A-Za-z]+)\s*:\s*(.+?)(?=,|$|\||\n)", re.IGNORECASE
)
# Time text may contain hyphens ("10am-2pm"); range entries never match here
# because their first day is followed by "-", not ":".
INDIVIDUAL_PATTERN = re.compile(
    r"(?:^|[,|\n])\s*([A-Za-z]+)\s*:\s*([^,|\n]+)", re.IGNORECASE
)
LINE_SPLIT_PATTERN = re.compile(r"[\n,|]")
CLOSED_PATTERN = re.compile(r"closed|хаалттай", re.IGNORECASE)
TIME_RANGE_PATTERN = re.compile(
    r"(\d{1,2}):(\d{2})\s*(AM|PM)?\s*[-–—]\s*(\d{1,2}):(\d{2})\s*(AM|PM)?",
    re.IGNORECASE,
)


def match_day(token: str) -> Optional[str]:
    """First canonical day (Monday first) that starts with ``token``"""
    token = token.strip().lower()
    if not token:
        return None
    for day in WEEKDAYS:
        if day.lower().startswith(token):
            return day
    return None


def _expand_range(start: str, end: str, wrap_week: bool) -> List[str]:
    start_idx = WEEKDAYS.index(start)
    end_idx = WEEKDAYS.index(end)
    if start_idx <= end_idx:
        return WEEKDAYS[start_idx:end_idx + 1]
    if wrap_week:
        return WEEKDAYS[start_idx:] + WEEKDAYS[:end_idx + 1]
    return []


def _parse_lines(hours: str) -> Dict[str, str]:
    day_times: Dict[str, str] = {}
    lines = [line.strip() for line in LINE_SPLIT_PATTERN.split(hours)]

    for line in filter(None, lines):
        for day in WEEKDAYS:
            match = re.match(rf"^{day}:?\s*(.+)$", line, re.IGNORECASE)
            if not match:
                match = re.match(rf"^{day[:3]}:?\s*(.+)$", line, re.IGNORECASE)
            if match:
                day_times[day] = match.group(1).strip()
                break
        else:
            logger.debug(f"Dropped unrecognised hours text: {line!r}")

    return day_times


def parse_weekly_hours(hours: str, wrap_week: bool = False) -> Dict[str, str]:
    """Map canonical day names to their time text.

    Day ranges (``"Mon - Fri: ..."``) are applied first and individual
    ``"Sat: ..."`` entries override them. When the text holds no range at all
    it is parsed line by line instead (lines split on newline, comma or pipe,
    each starting with a full or three-letter day name). A range whose end
    precedes its start is ignored unless ``wrap_week`` is set, in which case
    it runs through the end of the week.
    """
    if not hours:
        return {}

    range_matches = list(RANGE_PATTERN.finditer(hours))
    if not range_matches:
        return _parse_lines(hours)

    day_times: Dict[str, str] = {}
    for match in range_matches:
        start = match_day(match.group(1))
        end = match_day(match.group(2))
        if not start or not end:
            logger.debug(f"Ignored day range with unknown day: {match.group(0)!r}")
            continue
        for day in _expand_range(start, end, wrap_week):
            day_times[day] = match.group(3).strip()

    for match in INDIVIDUAL_PATTERN.finditer(hours):
        day = match_day(match.group(1))
        if day:
            day_times[day] = match.group(2).strip()

    return day_times


def _render_run(days: List[str], time_text: str, day_names: DayTranslations) -> str:
    labels = [day_names.short.get(day) or day[:3] for day in days]
    if len(labels) == 1:
        return f"{labels[0]}: {time_text}"
    if len(labels) == 2:
        return f"{labels[0]}, {labels[1]}: {time_text}"
    return f"{labels[0]} - {labels[-1]}: {time_text}"


def group_hours(hours: str, day_names: Optional[DayTranslations] = None) -> str:
    """
    Collapse weekly hours into runs of days with equal hours.

    >>> group_hours("Monday - Friday: 9am-5pm, Saturday: 10am-2pm")
    'Mon - Fri: 9am-5pm, Sat: 10am-2pm'

    Input that yields no day at all is returned unchanged.
    """
    day_names = day_names or DayTranslations()
    day_times = parse_weekly_hours(hours)
    if not day_times:
        return hours

    # Days without hours are skipped, not run breakers: "Mon: 9-5, Wed: 9-5"
    # renders as "Mon, Wed: 9-5".
    runs: List[List] = []
    for day in WEEKDAYS:
        time_text = day_times.get(day)
        if not time_text:
            continue
        if runs and runs[-1][1] == time_text:
            runs[-1][0].append(day)
        else:
            runs.append([[day], time_text])

    return ", ".join(_render_run(days, time_text, day_names) for days, time_text in runs)


def _minutes(hour: str, minute: str, meridiem: Optional[str]) -> int:
    value = int(hour)
    if meridiem:
        meridiem = meridiem.lower()
        if meridiem == "pm" and value != 12:
            value += 12
        elif meridiem == "am" and value == 12:
            value = 0
    return value * 60 + int(minute)


def is_restaurant_open(hours: str, at: Optional[datetime] = None) -> bool:
    """Whether ``at`` (local time, default now) falls within the day's hours.

    Closing times earlier than the opening time run past midnight.
    """
    if not hours or not hours.strip():
        return False

    at = at or datetime.now()
    today = WEEKDAYS[at.weekday()]
    today_hours = parse_weekly_hours(hours, wrap_week=True).get(today)

    if not today_hours:
        logger.debug(f"No hours listed for {today} in {hours!r}")
        return False
    if CLOSED_PATTERN.search(today_hours):
        return False

    match = TIME_RANGE_PATTERN.search(today_hours)
    if not match:
        logger.debug(f"Unrecognised time range for {today}: {today_hours!r}")
        return False

    opens = _minutes(match.group(1), match.group(2), match.group(3))
    closes = _minutes(match.group(4), match.group(5), match.group(6))
    now = at.hour * 60 + at.minute

    if closes < opens:
        return now >= opens or now < closes
    return opens <= now < closes
