"""Pure helpers to build the time dashboard context (no Streamlit)."""

from __future__ import annotations

from dataclasses import dataclass, field

from worklog_app.analytics.aggregations.grouping import total_hours
from worklog_app.analytics.aggregations.project import aggregate_by_project
from worklog_app.analytics.aggregations.team_member import (
    aggregate_by_team_member,
    filter_entries_by_member,
)
from worklog_app.core.models import (
    ProjectTimeData,
    TeamMemberTimeData,
    WorklogData,
    WorklogEntry,
)


@dataclass(slots=True)
class MemberOption:
    account_id: str
    display_name: str


@dataclass(slots=True)
class DashboardContext:
    projects: list[ProjectTimeData]
    team_members: list[TeamMemberTimeData]
    entries: list[WorklogEntry]
    member_options: list[MemberOption] = field(default_factory=list)
    selected_account_id: str | None = None
    total_hours: float = 0.0
    ticket_count: int = 0


def member_options(members: list[TeamMemberTimeData]) -> list[MemberOption]:
    """Filter choices sorted alphabetically by display name."""
    options = [MemberOption(m.account_id, m.display_name) for m in members]
    return sorted(options, key=lambda o: o.display_name.casefold())


def find_project(projects: list[ProjectTimeData], project_key: str | None) -> ProjectTimeData | None:
    for project in projects:
        if project.project_key == project_key:
            return project
    return None


def build_dashboard_context(data: WorklogData | None, selected_account_id: str | None = None) -> DashboardContext:
    """Scope the aggregates to one team member, or pass them through unfiltered.

    A member filter re-aggregates projects from that member's entries only;
    the member list itself is never filtered so the selector keeps every option.
    """
    if data is None or not data.entries:
        return DashboardContext([], [], [])

    options = member_options(data.team_members)
    known = {o.account_id for o in options}
    if selected_account_id not in known:
        selected_account_id = None

    if selected_account_id is None:
        entries = data.entries
        projects = data.projects
        members = data.team_members
    else:
        entries = filter_entries_by_member(data.entries, selected_account_id)
        projects = aggregate_by_project(entries, data.issues)
        members = aggregate_by_team_member(entries)

    return DashboardContext(
        projects=projects,
        team_members=members,
        entries=entries,
        member_options=options,
        selected_account_id=selected_account_id,
        total_hours=total_hours(entries),
        ticket_count=len({e.issue_key for e in entries}),
    )
