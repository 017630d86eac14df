"""Central configuration, constants, and tuning knobs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_CLOUD_SUFFIX = ".atlassian.net"
TIMEZONE = "UTC"
DEFAULT_PROJECT_KEYS: Sequence[str] = ()

SEARCH_FIELDS: Sequence[str] = ("summary", "status", "assignee", "project")

# =============================================================================
# Request Tuning
# =============================================================================
MAX_RETRIES = 3
REQUEST_TIMEOUT_SECONDS = 30.0
RETRY_BACKOFF_BASE_SECONDS = 1.0  # delay = base * 2**attempt
SEARCH_PAGE_SIZE = 50
WORKLOG_PAGE_SIZE = 1000

# =============================================================================
# Aggregation Fallbacks
# =============================================================================
SECONDS_PER_HOUR = 3600
UNASSIGNED_LABEL = "Unassigned"
UNKNOWN_STATUS_LABEL = "Unknown"

# =============================================================================
# Caching
# =============================================================================
CACHE_TTL_SECONDS: float = 300.0  # fetch results keyed by date range

# =============================================================================
# Date Presets
# =============================================================================
API_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_SPRINT_START_DATE = "2025-01-06"
DEFAULT_SPRINT_LENGTH_DAYS = 14
LAST_N_DAYS = 30

# =============================================================================
# Charts
# =============================================================================
# 12-colour palette, ordered for visual distinction when shown side-by-side
CHART_COLORS: Sequence[str] = (
    "#2563eb",  # blue
    "#16a34a",  # green
    "#ea580c",  # orange
    "#9333ea",  # purple
    "#dc2626",  # red
    "#0891b2",  # cyan
    "#ca8a04",  # yellow
    "#db2777",  # pink
    "#4f46e5",  # indigo
    "#059669",  # emerald
    "#d97706",  # amber
    "#7c3aed",  # violet
)
MAX_CHART_MEMBERS = 20
CHART_ROW_HEIGHT = 32
CHART_MIN_HEIGHT = 200

# =============================================================================
# Tables
# =============================================================================
DISPLAY_ORDER_TICKETS: Sequence[str] = (
    "Ticket",
    "summary",
    "total_hours",
    "assignee",
    "status",
    "worklog_count",
)

DISPLAY_ORDER_PROJECTS: Sequence[str] = (
    "project_key",
    "project_name",
    "total_hours",
    "ticket_count",
    "contributors",
)

DISPLAY_ORDER_MEMBERS: Sequence[str] = (
    "display_name",
    "total_hours",
    "project_count",
    "worklog_count",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"


SETTINGS = AppSettings()
