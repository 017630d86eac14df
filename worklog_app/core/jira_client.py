"""Jira API client wrapper (REST v3 enhanced search + per-issue worklog pagination)."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime
from datetime import time as dt_time
from typing import Any
from urllib.parse import quote

import pandas as pd
import pytz
import requests
from jira import JIRA, JIRAError

from .config import (
    JIRA_CLOUD_SUFFIX,
    MAX_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_BACKOFF_BASE_SECONDS,
    SEARCH_FIELDS,
    SEARCH_PAGE_SIZE,
    TIMEZONE,
    WORKLOG_PAGE_SIZE,
)
from .date_presets import parse_api_date

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]

AUTH_FAILED = "AUTH_FAILED"
RATE_LIMITED = "RATE_LIMITED"
NETWORK_ERROR = "NETWORK_ERROR"
TIMEOUT = "TIMEOUT"
MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
UNKNOWN = "UNKNOWN"


class JiraApiError(RuntimeError):
    """Classified Jira failure; ``code`` is one of the module-level error codes."""

    def __init__(self, code: str, message: str, status: int | None = None):
        super().__init__(message)
        self.code = code
        self.status = status


def normalize_server(domain: str) -> str:
    """Turn ``acme``, ``acme.atlassian.net`` or a full URL into the site base URL."""
    host = re.sub(r"^https?://", "", domain.strip()).rstrip("/")
    if host.endswith(JIRA_CLOUD_SUFFIX):
        host = host[: -len(JIRA_CLOUD_SUFFIX)]
    return f"https://{host}{JIRA_CLOUD_SUFFIX}"


def build_worklog_jql(project_keys: Sequence[str], start_date: str, end_date: str) -> str:
    clauses = []
    if project_keys:
        project_list = ", ".join(f'"{k}"' for k in project_keys)
        clauses.append(f"project IN ({project_list})")
    clauses.append(f'worklogDate >= "{start_date}"')
    clauses.append(f'worklogDate <= "{end_date}"')
    return " AND ".join(clauses)


def _require(payload: Any, keys: Iterable[str], what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise JiraApiError(MALFORMED_RESPONSE, f"Unexpected {what} payload type: {type(payload).__name__}")
    missing = [k for k in keys if k not in payload]
    if missing:
        raise JiraApiError(MALFORMED_RESPONSE, f"Malformed {what}: missing {', '.join(missing)}")
    return payload


def window_bounds(start_date: str, end_date: str, tz_name: str = TIMEZONE) -> tuple[datetime, datetime]:
    """Inclusive bounds: start of the first day through end of the last day."""
    tz = pytz.timezone(tz_name)
    start: date = parse_api_date(start_date)
    end: date = parse_api_date(end_date)
    return (
        tz.localize(datetime.combine(start, dt_time.min)),
        tz.localize(datetime.combine(end, dt_time.max)),
    )


def started_within(worklog: dict[str, Any], lower: datetime, upper: datetime) -> bool:
    ts = pd.to_datetime(worklog.get("started"), utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return False
    return lower <= ts.to_pydatetime() <= upper


class JiraAPI:
    def __init__(self, domain: str, email: str, token: str, project_keys: Sequence[str] = ()):
        self.server = normalize_server(domain)
        self.project_keys = list(project_keys)
        try:
            self.client = JIRA(
                basic_auth=(email, token),
                options={"server": self.server, "rest_api_version": "3"},
                get_server_info=False,
                max_retries=0,
            )
        except JIRAError as exc:  # pragma: no cover - network error path
            raise JiraApiError(UNKNOWN, f"Failed to create Jira client: {exc}", exc.status_code) from exc

    # ------------------ Core request wrapper ------------------
    def _backoff(self, attempt: int) -> None:
        delay = RETRY_BACKOFF_BASE_SECONDS * (2**attempt)
        logger.debug("Retrying Jira request in %.1fs (attempt %d)", delay, attempt + 1)
        time.sleep(delay)

    def _request(self, path: str, params: dict[str, Any] | None = None) -> Any:
        session = getattr(self.client, "_session", None)
        if session is None:
            raise JiraApiError(UNKNOWN, "JIRA session unavailable")
        url = f"{self.server}{path}"
        last_error: Exception | None = None
        for attempt in range(MAX_RETRIES + 1):
            try:
                resp = session.get(
                    url,
                    params=params,
                    headers={"Accept": "application/json"},
                    timeout=REQUEST_TIMEOUT_SECONDS,
                )
                status = resp.status_code
            except JIRAError as exc:
                # ResilientSession raises for HTTP errors instead of returning them
                resp = None
                status = exc.status_code
                if status is None:
                    last_error = exc
                    if attempt < MAX_RETRIES:
                        self._backoff(attempt)
                        continue
                    break
            except requests.Timeout as exc:
                raise JiraApiError(
                    TIMEOUT, f"Request timed out after {REQUEST_TIMEOUT_SECONDS:g} seconds."
                ) from exc
            except requests.RequestException as exc:
                last_error = exc
                if attempt < MAX_RETRIES:
                    self._backoff(attempt)
                    continue
                break

            if resp is not None and status < 400:
                try:
                    return resp.json()
                except ValueError as exc:
                    raise JiraApiError(MALFORMED_RESPONSE, f"Invalid JSON from {path}", status) from exc
            if status in (401, 403):
                raise JiraApiError(
                    AUTH_FAILED,
                    "Authentication failed. Check your domain, email, and API token.",
                    status,
                )
            if status == 429:
                if attempt < MAX_RETRIES:
                    self._backoff(attempt)
                    continue
                raise JiraApiError(RATE_LIMITED, "Jira API rate limit exceeded. Try again later.", 429)
            raise JiraApiError(UNKNOWN, f"Jira API returned HTTP {status}", status)

        raise JiraApiError(NETWORK_ERROR, f"Network error: {last_error}")

    # ------------------ Public methods ------------------
    def test_connection(self) -> dict[str, Any]:
        """Validate credentials via GET /rest/api/3/myself."""
        data = self._request("/rest/api/3/myself")
        return _require(data, ("accountId", "displayName"), "myself response")

    def search_issues(
        self,
        jql: str,
        next_page_token: str | None = None,
        max_results: int = SEARCH_PAGE_SIZE,
    ) -> dict[str, Any]:
        """Single page of the enhanced JQL search."""
        params: dict[str, Any] = {
            "jql": jql,
            "fields": ",".join(SEARCH_FIELDS),
            "maxResults": max_results,
        }
        if next_page_token:
            params["nextPageToken"] = next_page_token
        data = _require(self._request("/rest/api/3/search/jql", params), ("issues",), "search response")
        for issue in data["issues"]:
            _require(issue, ("key", "fields"), "issue")
        return data

    def search_all(self, jql: str) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        token = None
        while True:
            page = self.search_issues(jql, token)
            out.extend(page["issues"])
            token = page.get("nextPageToken")
            if not token or page.get("isLast") is True:
                break
        return out

    def fetch_issue_worklogs(self, issue_key: str) -> list[dict[str, Any]]:
        """All worklogs of one issue, following startAt pagination."""
        worklogs: list[dict[str, Any]] = []
        start_at = 0
        while True:
            data = self._request(
                f"/rest/api/3/issue/{quote(issue_key, safe='')}/worklog",
                {"startAt": start_at, "maxResults": WORKLOG_PAGE_SIZE},
            )
            page = _require(data, ("worklogs", "total"), "worklog response")
            for wl in page["worklogs"]:
                _require(wl, ("id", "author", "timeSpentSeconds", "started"), "worklog")
            worklogs.extend(page["worklogs"])
            if len(worklogs) >= page["total"] or not page["worklogs"]:
                break
            start_at = len(worklogs)
        return worklogs

    def fetch_worklogs(
        self,
        start_date: str,
        end_date: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> tuple[list[dict[str, Any]], dict[str, list[dict[str, Any]]]]:
        """Issues with worklogs in the window plus their window-filtered worklogs.

        Only issues with at least one worklog inside ``[start_date, end_date]``
        (end date inclusive to end of day) appear as keys in the mapping.
        """
        jql = build_worklog_jql(self.project_keys, start_date, end_date)
        if progress:
            progress("Searching issues with logged time", None, None)
        issues = self.search_all(jql)
        lower, upper = window_bounds(start_date, end_date)

        worklog_map: dict[str, list[dict[str, Any]]] = {}
        total = len(issues)
        for idx, issue in enumerate(issues, start=1):
            key = issue["key"]
            in_window = [wl for wl in self.fetch_issue_worklogs(key) if started_within(wl, lower, upper)]
            if in_window:
                worklog_map[key] = in_window
            if progress:
                progress("Loading worklogs", idx, total)
        logger.debug("Fetched %d issues, %d with worklogs in window", total, len(worklog_map))
        return issues, worklog_map
