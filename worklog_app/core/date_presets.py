"""Date range presets (sprints, month, trailing days) and API date helpers."""

from __future__ import annotations

import calendar
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pytz

from .config import API_DATE_FORMAT, LAST_N_DAYS, TIMEZONE
from .models import DateRange


def today_local() -> date:
    return datetime.now(tz=pytz.timezone(TIMEZONE)).date()


def format_date_for_api(value: date) -> str:
    return value.strftime(API_DATE_FORMAT)


def parse_api_date(text: str) -> date:
    return datetime.strptime(text, API_DATE_FORMAT).date()


def _sprint_number(day: date, sprint_start: date, sprint_length_days: int) -> int:
    days_since_start = (day - sprint_start).days
    if days_since_start < 0:
        return 0
    return days_since_start // sprint_length_days


def _sprint_range(sprint_start: date, number: int, sprint_length_days: int) -> DateRange:
    start = sprint_start + timedelta(days=number * sprint_length_days)
    return DateRange(start, start + timedelta(days=sprint_length_days - 1))


def this_sprint(sprint_start_date: str, sprint_length_days: int, today: date | None = None) -> DateRange:
    """Sprint containing ``today``; the first sprint when today precedes it."""
    sprint_start = parse_api_date(sprint_start_date)
    number = _sprint_number(today or today_local(), sprint_start, sprint_length_days)
    return _sprint_range(sprint_start, number, sprint_length_days)


def last_sprint(sprint_start_date: str, sprint_length_days: int, today: date | None = None) -> DateRange:
    """Sprint before the current one, never earlier than the first sprint."""
    sprint_start = parse_api_date(sprint_start_date)
    current = _sprint_number(today or today_local(), sprint_start, sprint_length_days)
    return _sprint_range(sprint_start, max(0, current - 1), sprint_length_days)


def this_month(today: date | None = None) -> DateRange:
    day = today or today_local()
    last_day = calendar.monthrange(day.year, day.month)[1]
    return DateRange(day.replace(day=1), day.replace(day=last_day))


def last_30_days(today: date | None = None) -> DateRange:
    """Trailing window ending today, today included."""
    day = today or today_local()
    return DateRange(day - timedelta(days=LAST_N_DAYS - 1), day)


def date_ranges_equal(a: DateRange, b: DateRange) -> bool:
    return format_date_for_api(a.start_date) == format_date_for_api(b.start_date) and format_date_for_api(
        a.end_date
    ) == format_date_for_api(b.end_date)


def cache_key(date_range: DateRange) -> str:
    return f"{format_date_for_api(date_range.start_date)}|{format_date_for_api(date_range.end_date)}"


@dataclass(slots=True, frozen=True)
class PresetOption:
    id: str
    label: str
    get_range: Callable[[str, int], DateRange]


PRESET_OPTIONS: tuple[PresetOption, ...] = (
    PresetOption("this-sprint", "This Sprint", lambda start, length: this_sprint(start, length)),
    PresetOption("last-sprint", "Last Sprint", lambda start, length: last_sprint(start, length)),
    PresetOption("this-month", "This Month", lambda start, length: this_month()),
    PresetOption("last-30", "Last 30 Days", lambda start, length: last_30_days()),
)
