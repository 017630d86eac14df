"""Seconds-to-hours conversion and display formatting (pure functions)."""

from __future__ import annotations

import math

from worklog_app.core.config import SECONDS_PER_HOUR


def seconds_to_hours(seconds: float) -> float:
    """Convert seconds to hours rounded to two decimal places.

    Halves round away from zero on the value scaled by 100, so 0.125h -> 0.13h.
    Each aggregation level rounds its own seconds total, so a project total may
    differ by up to 0.01 per ticket from the sum of its rounded ticket totals.
    """
    scaled = seconds / SECONDS_PER_HOUR * 100
    rounded = math.floor(abs(scaled) + 0.5)
    return math.copysign(rounded, scaled) / 100


def format_hours(hours: float) -> str:
    """Format hours for display (e.g. "12.5h", "0.25h", "2h")."""
    value = float(hours)
    if value.is_integer():
        return f"{int(value)}h"
    return f"{value}h"
