"""Shared grouping helpers for worklog aggregations."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import TypeVar

from worklog_app.analytics.metrics.hours import seconds_to_hours
from worklog_app.core.models import WorklogEntry

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


def group_entries(
    entries: Iterable[WorklogEntry],
    key: Callable[[WorklogEntry], K],
) -> dict[K, list[WorklogEntry]]:
    """Group entries by ``key``; groups and members keep first-appearance order."""
    grouped: dict[K, list[WorklogEntry]] = {}
    for entry in entries:
        grouped.setdefault(key(entry), []).append(entry)
    return grouped


def unique_in_order(values: Iterable[T]) -> list[T]:
    # dict keys preserve insertion order
    return list(dict.fromkeys(values))


def total_hours(entries: Sequence[WorklogEntry]) -> float:
    return seconds_to_hours(sum(e.time_spent_seconds for e in entries))


def sort_by_hours(items: Iterable[T]) -> list[T]:
    """Sort aggregates by total_hours descending; ties keep their order."""
    return sorted(items, key=lambda item: item.total_hours, reverse=True)
