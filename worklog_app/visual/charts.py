"""Chart builders (Altair) for project and team member breakdowns."""

from __future__ import annotations

import json
from collections.abc import Sequence

import altair as alt
import pandas as pd

from worklog_app.analytics.aggregations.grouping import unique_in_order
from worklog_app.analytics.aggregations.team_member import project_hours_for_member
from worklog_app.core.config import CHART_MIN_HEIGHT, CHART_ROW_HEIGHT, MAX_CHART_MEMBERS
from worklog_app.core.models import ProjectTimeData, TeamMemberTimeData

from .colors import get_project_color, register_projects


def _chart_height(rows: int) -> int:
    return max(CHART_MIN_HEIGHT, rows * CHART_ROW_HEIGHT)


def project_breakdown_frame(projects: Sequence[ProjectTimeData]) -> pd.DataFrame:
    rows = [
        {
            "project_key": p.project_key,
            "project": f"{p.project_name} ({p.project_key})",
            "total_hours": p.total_hours,
            "ticket_count": p.ticket_count,
            "contributor_count": len(p.contributors),
        }
        for p in projects
    ]
    return pd.DataFrame(rows, columns=["project_key", "project", "total_hours", "ticket_count", "contributor_count"])


def project_breakdown_chart(projects: Sequence[ProjectTimeData]):
    """Horizontal bar per project, keeping the aggregate's hours-descending order."""
    if not projects:
        return None, pd.DataFrame()
    chart_df = project_breakdown_frame(projects)
    keys = chart_df["project_key"].tolist()
    register_projects(keys)
    chart = (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            y=alt.Y("project:N", sort=chart_df["project"].tolist(), title="Project"),
            x=alt.X("total_hours:Q", title="Hours Logged"),
            color=alt.Color(
                "project_key:N",
                scale=alt.Scale(domain=keys, range=[get_project_color(k) for k in keys]),
                legend=None,
            ),
            tooltip=[
                alt.Tooltip("project:N", title="Project"),
                alt.Tooltip("total_hours:Q", title="Hours", format=".2f"),
                alt.Tooltip("ticket_count:Q", title="Tickets"),
                alt.Tooltip("contributor_count:Q", title="Contributors"),
            ],
        )
        .properties(height=_chart_height(len(chart_df)))
    )
    return chart, chart_df


def team_member_frame(members: Sequence[TeamMemberTimeData]) -> pd.DataFrame:
    """Long-form member x project hours with each slice's share of the member total."""
    rows = []
    for member in members:
        for ph in project_hours_for_member(member):
            share = ph.hours / member.total_hours * 100 if member.total_hours > 0 else 0.0
            rows.append(
                {
                    "account_id": member.account_id,
                    "member": member.display_name,
                    "project_key": ph.project_key,
                    "project_name": ph.project_name,
                    "hours": ph.hours,
                    "member_total": member.total_hours,
                    "percent": round(share, 1),
                }
            )
    return pd.DataFrame(
        rows, columns=["account_id", "member", "project_key", "project_name", "hours", "member_total", "percent"]
    )


def _member_label_expr(members: Sequence[TeamMemberTimeData]) -> str:
    """Vega expression mapping an account id axis value to its display name."""
    expr = "datum.value"
    for member in reversed(members):
        expr = f"datum.value === {json.dumps(member.account_id)} ? {json.dumps(member.display_name)} : {expr}"
    return expr


def team_member_chart(members: Sequence[TeamMemberTimeData], max_members: int = MAX_CHART_MEMBERS):
    """Stacked bar per member split by project; only the top ``max_members`` are drawn.

    Returns ``(chart, frame, truncated)``.
    """
    if not members:
        return None, pd.DataFrame(), False
    truncated = len(members) > max_members
    shown = list(members[:max_members])
    chart_df = team_member_frame(shown)
    keys = unique_in_order(k for m in shown for k in m.project_keys)
    register_projects(keys)
    order = [m.account_id for m in shown]
    chart = (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            y=alt.Y(
                "account_id:N",
                sort=order,
                title="Team Member",
                axis=alt.Axis(labelExpr=_member_label_expr(shown)),
            ),
            x=alt.X("sum(hours):Q", title="Hours Logged", stack="zero"),
            color=alt.Color(
                "project_key:N",
                scale=alt.Scale(domain=keys, range=[get_project_color(k) for k in keys]),
                title="Project",
            ),
            tooltip=[
                alt.Tooltip("member:N", title="Team Member"),
                alt.Tooltip("project_name:N", title="Project"),
                alt.Tooltip("hours:Q", title="Hours", format=".2f"),
                alt.Tooltip("percent:Q", title="% of Member Total", format=".1f"),
            ],
        )
        .properties(height=_chart_height(len(shown)))
    )
    return chart, chart_df, truncated
