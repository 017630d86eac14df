"""Ticket-level worklog aggregation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from worklog_app.core.config import UNASSIGNED_LABEL, UNKNOWN_STATUS_LABEL
from worklog_app.core.mappers import index_issues
from worklog_app.core.models import TicketTimeData, WorklogEntry

from .grouping import group_entries, sort_by_hours, total_hours


def _issue_assignee(issue: dict[str, Any] | None) -> str:
    if issue is None:
        return UNASSIGNED_LABEL
    assignee = issue.get("fields", {}).get("assignee") or {}
    name = assignee.get("displayName")
    return UNASSIGNED_LABEL if name is None else name


def _issue_status(issue: dict[str, Any] | None) -> str:
    if issue is None:
        return UNKNOWN_STATUS_LABEL
    status = issue.get("fields", {}).get("status") or {}
    return status.get("name", UNKNOWN_STATUS_LABEL)


def aggregate_by_ticket(
    entries: Sequence[WorklogEntry],
    issues: Iterable[dict[str, Any]],
) -> list[TicketTimeData]:
    """Group entries by issue key and compute per-ticket totals.

    Assignee and status are issue-level fields not carried on entries, so they
    are looked up in ``issues``. An issue missing from that list falls back to
    "Unassigned" / "Unknown". Results are sorted by total_hours descending.
    """
    if not entries:
        return []
    issue_by_key = index_issues(issues)
    results: list[TicketTimeData] = []
    for issue_key, worklogs in group_entries(entries, lambda e: e.issue_key).items():
        issue = issue_by_key.get(issue_key)
        results.append(
            TicketTimeData(
                issue_key=issue_key,
                summary=worklogs[0].issue_summary,
                total_hours=total_hours(worklogs),
                assignee=_issue_assignee(issue),
                status=_issue_status(issue),
                worklogs=worklogs,
            )
        )
    return sort_by_hours(results)
