"""Load dashboard settings from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .config import (
    CACHE_TTL_SECONDS,
    DEFAULT_PROJECT_KEYS,
    DEFAULT_SPRINT_LENGTH_DAYS,
    DEFAULT_SPRINT_START_DATE,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DashboardConfig:
    project_keys: list[str] = field(default_factory=lambda: list(DEFAULT_PROJECT_KEYS))
    sprint_start_date: str = DEFAULT_SPRINT_START_DATE
    sprint_length_days: int = DEFAULT_SPRINT_LENGTH_DAYS
    cache_ttl_seconds: float = CACHE_TTL_SECONDS


_CACHE: DashboardConfig | None = None


def load_dashboard_config(base_path: str | Path | None = None, *, reload: bool = False) -> DashboardConfig:
    """Read ``dashboard.yaml`` from ``base_path`` (project root by default).

    Missing files, unreadable YAML and absent keys all fall back to defaults.
    """
    global _CACHE
    if _CACHE is not None and not reload and base_path is None:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent.parent)
    yaml_path = base / "dashboard.yaml"
    config = DashboardConfig()
    if yaml_path.exists():
        try:
            data = yaml.safe_load(yaml_path.read_text()) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable %s: %s", yaml_path, exc)
            data = {}
        jira = data.get("jira") or {}
        sprint = data.get("sprint") or {}
        cache = data.get("cache") or {}
        keys = jira.get("project_keys")
        if keys:
            config.project_keys = [str(k).strip() for k in keys if str(k).strip()]
        if sprint.get("start_date"):
            config.sprint_start_date = str(sprint["start_date"])
        if sprint.get("length_days"):
            config.sprint_length_days = int(sprint["length_days"])
        if cache.get("ttl_seconds"):
            config.cache_ttl_seconds = float(cache["ttl_seconds"])
    if base_path is None:
        _CACHE = config
    return config
