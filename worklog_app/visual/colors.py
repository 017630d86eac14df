"""Stable per-project colours shared by every chart."""

from __future__ import annotations

from collections.abc import Iterable

from worklog_app.core.config import CHART_COLORS

_REGISTRY: dict[str, str] = {}


def hash_string(text: str) -> int:
    """31-multiplier string hash wrapped to a signed 32-bit int, then made positive."""
    value = 0
    for ch in text:
        value = ((value << 5) - value + ord(ch)) & 0xFFFFFFFF
    if value & 0x80000000:
        value -= 0x100000000
    return abs(value)


def get_color(index: int) -> str:
    return CHART_COLORS[index % len(CHART_COLORS)]


def get_project_color(project_key: str) -> str:
    """Colour for ``project_key``; fixed once assigned."""
    existing = _REGISTRY.get(project_key)
    if existing:
        return existing
    color = CHART_COLORS[hash_string(project_key) % len(CHART_COLORS)]
    _REGISTRY[project_key] = color
    return color


def register_projects(project_keys: Iterable[str]) -> None:
    for key in project_keys:
        if key not in _REGISTRY:
            get_project_color(key)


def get_project_color_map() -> dict[str, str]:
    return dict(_REGISTRY)


def clear_project_colors() -> None:
    _REGISTRY.clear()
