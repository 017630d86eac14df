"""Team-member-level worklog aggregation and entry filtering."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from worklog_app.core.models import ProjectHours, TeamMemberTimeData, WorklogEntry

from .grouping import group_entries, sort_by_hours, total_hours, unique_in_order


def aggregate_by_team_member(entries: Sequence[WorklogEntry]) -> list[TeamMemberTimeData]:
    """Group entries by author account id and compute per-person totals.

    The display name comes from the first entry seen for an account; later
    entries never rename it. Results are sorted by total_hours descending.
    """
    if not entries:
        return []
    results: list[TeamMemberTimeData] = []
    for account_id, worklogs in group_entries(entries, lambda e: e.author.account_id).items():
        results.append(
            TeamMemberTimeData(
                account_id=account_id,
                display_name=worklogs[0].author.display_name,
                total_hours=total_hours(worklogs),
                project_keys=unique_in_order(w.project_key for w in worklogs),
                worklogs=worklogs,
            )
        )
    return sort_by_hours(results)


def project_hours_for_member(member: TeamMemberTimeData) -> list[ProjectHours]:
    """Split one member's logged time per project, in first-appearance order."""
    out: list[ProjectHours] = []
    for project_key, worklogs in group_entries(member.worklogs, lambda e: e.project_key).items():
        out.append(
            ProjectHours(
                project_key=project_key,
                project_name=worklogs[0].project_name,
                hours=total_hours(worklogs),
            )
        )
    return out


def filter_entries_by_member(
    entries: Iterable[WorklogEntry],
    account_id: str | None,
) -> list[WorklogEntry]:
    """Entries logged by ``account_id``; all entries when no member is selected."""
    if account_id is None:
        return list(entries)
    return [e for e in entries if e.author.account_id == account_id]
