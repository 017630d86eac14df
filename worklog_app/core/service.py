"""WorklogService: orchestrates fetching, normalization, aggregation, and caching."""

from __future__ import annotations

import logging
import time
from typing import Any

from worklog_app.analytics.aggregations.project import aggregate_by_project
from worklog_app.analytics.aggregations.team_member import aggregate_by_team_member

from .config import CACHE_TTL_SECONDS
from .date_presets import cache_key, format_date_for_api
from .jira_client import JiraAPI, ProgressCallback
from .mappers import worklog_entries_from_raw
from .models import DateRange, WorklogData

logger = logging.getLogger(__name__)


def build_worklog_data(
    issues: list[dict[str, Any]],
    worklogs_by_issue_key: dict[str, list[dict[str, Any]]],
) -> WorklogData:
    """Normalize raw Jira payloads and compute every aggregate the pages need."""
    entries = worklog_entries_from_raw(issues, worklogs_by_issue_key)
    raw_count = sum(len(v) for v in worklogs_by_issue_key.values())
    if raw_count != len(entries):
        logger.debug("Dropped %d worklog(s) without a matching issue", raw_count - len(entries))
    return WorklogData(
        projects=aggregate_by_project(entries, issues),
        team_members=aggregate_by_team_member(entries),
        issues=issues,
        entries=entries,
    )


class WorklogService:
    """Fetch-and-aggregate state holder for the dashboard.

    ``data`` and ``error`` only ever reflect the most recently requested date
    range: each uncached fetch takes a new request generation, and a result is
    committed only if no newer request started while it was in flight.
    """

    def __init__(self, api: JiraAPI, cache_ttl: float = CACHE_TTL_SECONDS):
        self.api = api
        self.data: WorklogData | None = None
        self.error: str | None = None
        self.is_loading = False
        # Simple in-memory cache: {"start|end": (timestamp, data)}
        self._cache: dict[str, tuple[float, WorklogData]] = {}
        self._cache_ttl = cache_ttl
        self._generation = 0

    # ------------------ Cache ------------------
    def clear_cache(self) -> None:
        self._cache.clear()

    def cached(self, date_range: DateRange) -> WorklogData | None:
        key = cache_key(date_range)
        hit = self._cache.get(key)
        if hit is None:
            return None
        stored_at, data = hit
        if time.time() - stored_at > self._cache_ttl:
            del self._cache[key]
            return None
        return data

    def _store(self, date_range: DateRange, data: WorklogData) -> None:
        self._cache[cache_key(date_range)] = (time.time(), data)

    # ------------------ Request generations ------------------
    def begin_request(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    # ------------------ Fetch ------------------
    def fetch_data(
        self,
        date_range: DateRange,
        *,
        progress: ProgressCallback | None = None,
    ) -> WorklogData | None:
        """Load aggregates for ``date_range``, serving from cache when fresh.

        Returns the committed data, or None when the fetch failed or was
        superseded by a newer request.
        """
        hit = self.cached(date_range)
        if hit is not None:
            # Supersede any fetch still in flight
            self.begin_request()
            self.is_loading = False
            self.data = hit
            self.error = None
            return hit

        generation = self.begin_request()
        self.is_loading = True
        self.error = None
        start = format_date_for_api(date_range.start_date)
        end = format_date_for_api(date_range.end_date)
        try:
            issues, worklogs = self.api.fetch_worklogs(start, end, progress=progress)
            data = build_worklog_data(issues, worklogs)
            self._store(date_range, data)
            if not self.is_current(generation):
                logger.debug("Discarding superseded result for %s..%s", start, end)
                return None
            self.data = data
            return data
        except Exception as exc:
            if self.is_current(generation):
                logger.warning("Worklog fetch for %s..%s failed: %s", start, end, exc)
                self.error = str(exc) or "An error occurred"
            return None
        finally:
            if self.is_current(generation):
                self.is_loading = False

    def clear_error(self) -> None:
        self.error = None
