"""Project-level worklog aggregation with nested tickets."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from worklog_app.core.models import ProjectTimeData, WorklogEntry

from .grouping import group_entries, sort_by_hours, total_hours, unique_in_order
from .ticket import aggregate_by_ticket


def aggregate_by_project(
    entries: Sequence[WorklogEntry],
    issues: Sequence[dict[str, Any]],
) -> list[ProjectTimeData]:
    """Group entries by project key; each project nests its own ticket breakdown.

    ``ticket_count`` counts distinct issue keys, not worklogs. Results are
    sorted by total_hours descending.
    """
    if not entries:
        return []
    results: list[ProjectTimeData] = []
    for project_key, project_entries in group_entries(entries, lambda e: e.project_key).items():
        results.append(
            ProjectTimeData(
                project_key=project_key,
                project_name=project_entries[0].project_name,
                total_hours=total_hours(project_entries),
                ticket_count=len({e.issue_key for e in project_entries}),
                contributors=unique_in_order(e.author.display_name for e in project_entries),
                tickets=aggregate_by_ticket(project_entries, issues),
            )
        )
    return sort_by_hours(results)
