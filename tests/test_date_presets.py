from datetime import date

from worklog_app.core.date_presets import (
    PRESET_OPTIONS,
    cache_key,
    date_ranges_equal,
    format_date_for_api,
    last_30_days,
    last_sprint,
    parse_api_date,
    this_month,
    this_sprint,
)
from worklog_app.core.models import DateRange

SPRINT_START = "2025-01-06"


def test_api_date_round_trip():
    assert format_date_for_api(date(2025, 3, 7)) == "2025-03-07"
    assert parse_api_date("2025-03-07") == date(2025, 3, 7)


def test_this_sprint_mid_sprint():
    # 2025-01-22 is day 16 -> sprint 1 (Jan 20 - Feb 2)
    assert this_sprint(SPRINT_START, 14, today=date(2025, 1, 22)) == DateRange(date(2025, 1, 20), date(2025, 2, 2))


def test_this_sprint_before_first_sprint():
    assert this_sprint(SPRINT_START, 14, today=date(2024, 12, 1)) == DateRange(date(2025, 1, 6), date(2025, 1, 19))


def test_last_sprint():
    assert last_sprint(SPRINT_START, 14, today=date(2025, 1, 22)) == DateRange(date(2025, 1, 6), date(2025, 1, 19))
    # Never earlier than the first sprint
    assert last_sprint(SPRINT_START, 14, today=date(2025, 1, 8)) == DateRange(date(2025, 1, 6), date(2025, 1, 19))


def test_this_month_handles_leap_year():
    assert this_month(today=date(2024, 2, 10)) == DateRange(date(2024, 2, 1), date(2024, 2, 29))


def test_last_30_days_includes_today():
    assert last_30_days(today=date(2025, 3, 30)) == DateRange(date(2025, 3, 1), date(2025, 3, 30))


def test_range_equality_and_cache_key():
    a = DateRange(date(2025, 1, 1), date(2025, 1, 31))
    b = DateRange(date(2025, 1, 1), date(2025, 1, 31))
    assert date_ranges_equal(a, b)
    assert not date_ranges_equal(a, DateRange(date(2025, 1, 2), date(2025, 1, 31)))
    assert cache_key(a) == "2025-01-01|2025-01-31"


def test_preset_options():
    assert [p.id for p in PRESET_OPTIONS] == ["this-sprint", "last-sprint", "this-month", "last-30"]
    for preset in PRESET_OPTIONS:
        selected = preset.get_range(SPRINT_START, 14)
        assert selected.start_date <= selected.end_date
