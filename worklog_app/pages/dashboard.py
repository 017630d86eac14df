"""Time dashboard page.

Fetches worklogs for the chosen date range (or reuses cached results) and
shows hours by project and by team member, with an optional member filter
that re-aggregates the project view over that member's entries.
"""

from __future__ import annotations

from datetime import date

import streamlit as st

from worklog_app.analytics.metrics.hours import format_hours
from worklog_app.app import register_page
from worklog_app.core.config import MAX_CHART_MEMBERS, SETTINGS
from worklog_app.core.dashboard_config import load_dashboard_config
from worklog_app.core.date_presets import PRESET_OPTIONS, date_ranges_equal, last_30_days
from worklog_app.core.models import DateRange, ProjectTimeData
from worklog_app.core.service import WorklogService
from worklog_app.features.time_dashboard.context import build_dashboard_context, find_project
from worklog_app.visual.charts import project_breakdown_chart, team_member_chart
from worklog_app.visual.column_metadata import apply_column_metadata
from worklog_app.visual.progress import FetchProgress
from worklog_app.visual.tables import entries_frame, members_frame, prepare_ticket_table, projects_frame

ALL_MEMBERS = "All Team Members"
CUSTOM_RANGE = "Custom"


def _select_date_range() -> DateRange:
    cfg = load_dashboard_config()
    labels = [p.label for p in PRESET_OPTIONS] + [CUSTOM_RANGE]
    choice = st.sidebar.selectbox("Date range", labels, index=0, key="date_preset")
    if choice != CUSTOM_RANGE:
        preset = next(p for p in PRESET_OPTIONS if p.label == choice)
        selected = preset.get_range(cfg.sprint_start_date, cfg.sprint_length_days)
        st.sidebar.caption(f"{selected.start_date:%Y-%m-%d} to {selected.end_date:%Y-%m-%d}")
        return selected
    default = last_30_days()
    picked = st.sidebar.date_input(
        "From / To",
        value=(default.start_date, default.end_date),
        key="custom_range",
    )
    if isinstance(picked, (tuple, list)) and len(picked) == 2:
        start, end = picked
    else:
        # Range picker mid-selection returns a single date
        start = end = picked[0] if isinstance(picked, (tuple, list)) else picked
    if isinstance(start, date) and isinstance(end, date) and start > end:
        start, end = end, start
    return DateRange(start, end)


def _render_error(service: WorklogService) -> None:
    if not service.error:
        return
    st.error(service.error)
    if st.button("Dismiss", key="dismiss_error"):
        service.clear_error()
        st.rerun()


def _render_project_drilldown(project: ProjectTimeData, server: str) -> None:
    st.subheader(f"{project.project_name} ({project.project_key})")
    plural = "" if project.ticket_count == 1 else "s"
    st.write(f"**{format_hours(project.total_hours)}** logged across **{project.ticket_count}** ticket{plural}")
    if project.contributors:
        st.caption("Contributors: " + ", ".join(project.contributors))
    table, cols, cfg = prepare_ticket_table(project.tickets, server)
    if table.empty:
        st.info("No tickets for this project.")
        return
    st.dataframe(
        table[cols].head(SETTINGS.max_table_rows),
        hide_index=True,
        column_config=apply_column_metadata(cols, cfg),
    )


@register_page("Time Dashboard")
def dashboard_page():
    st.title("Jira Time Logging Dashboard")
    service: WorklogService | None = st.session_state.get("worklog_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    date_range = _select_date_range()
    loaded = st.session_state.get("loaded_range")
    changed = loaded is None or not date_ranges_equal(loaded, date_range)
    if st.sidebar.button("Fetch Worklogs", type="primary") or changed:
        st.session_state["loaded_range"] = date_range
        reporter = FetchProgress(
            f"Fetching worklogs {date_range.start_date:%Y-%m-%d} to {date_range.end_date:%Y-%m-%d}"
        )
        data = service.fetch_data(date_range, progress=reporter.callback)
        if data is None:
            reporter.error("Fetch failed.")
        else:
            reporter.complete(f"Loaded {len(data.entries)} worklog(s).")

    _render_error(service)

    data = service.data
    if data is None or not data.entries:
        st.info("No time has been logged for the selected period.")
        return

    labels = {ALL_MEMBERS: None}
    base_ctx = build_dashboard_context(data)
    for option in base_ctx.member_options:
        label = option.display_name
        if label in labels:
            label = f"{option.display_name} ({option.account_id})"
        labels[label] = option.account_id
    member_label = st.sidebar.selectbox("Team member", list(labels.keys()), key="member_filter")
    ctx = build_dashboard_context(data, labels.get(member_label))

    c1, c2, c3 = st.columns(3)
    c1.metric("Hours Logged", format_hours(ctx.total_hours))
    c2.metric("Tickets", ctx.ticket_count)
    c3.metric("Projects", len(ctx.projects))

    server = st.session_state.get("jira_server", "")
    tab_projects, tab_members = st.tabs(["Projects", "Team Members"])

    with tab_projects:
        chart, _ = project_breakdown_chart(ctx.projects)
        if chart is not None:
            st.altair_chart(chart, use_container_width=True)
        summary = projects_frame(ctx.projects)
        st.dataframe(
            summary,
            hide_index=True,
            column_config=apply_column_metadata(summary.columns),
        )
        project_labels = {f"{p.project_name} ({p.project_key})": p.project_key for p in ctx.projects}
        picked = st.selectbox("Project details", ["(none)", *project_labels.keys()], key="drilldown")
        project = find_project(ctx.projects, project_labels.get(picked))
        if project is not None:
            st.markdown("---")
            _render_project_drilldown(project, server)

    with tab_members:
        chart, _, truncated = team_member_chart(ctx.team_members)
        if chart is None:
            st.info("No team member data.")
        else:
            st.altair_chart(chart, use_container_width=True)
            if truncated:
                st.caption(f"Showing top {MAX_CHART_MEMBERS} of {len(ctx.team_members)} team members")
        table = members_frame(ctx.team_members)
        st.dataframe(table, hide_index=True, column_config=apply_column_metadata(table.columns))

    csv = entries_frame(ctx.entries).to_csv(index=False).encode(SETTINGS.download_encoding)
    st.download_button(
        "Download Worklogs CSV",
        data=csv,
        file_name=f"worklogs_{date_range.start_date:%Y%m%d}_{date_range.end_date:%Y%m%d}.csv",
        mime="text/csv",
    )
