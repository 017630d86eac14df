"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd
import streamlit as st

from worklog_app.analytics.metrics.hours import seconds_to_hours
from worklog_app.core.config import DISPLAY_ORDER_MEMBERS, DISPLAY_ORDER_PROJECTS, DISPLAY_ORDER_TICKETS
from worklog_app.core.models import ProjectTimeData, TeamMemberTimeData, TicketTimeData, WorklogEntry


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "issue_key", label: str = "Ticket"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="medium",
        )
    }
    return out, cfg


def tickets_frame(tickets: Sequence[TicketTimeData]) -> pd.DataFrame:
    rows = [
        {
            "issue_key": t.issue_key,
            "summary": t.summary,
            "total_hours": t.total_hours,
            "assignee": t.assignee,
            "status": t.status,
            "worklog_count": len(t.worklogs),
        }
        for t in tickets
    ]
    return pd.DataFrame(rows, columns=["issue_key", "summary", "total_hours", "assignee", "status", "worklog_count"])


def projects_frame(projects: Sequence[ProjectTimeData]) -> pd.DataFrame:
    rows = [
        {
            "project_key": p.project_key,
            "project_name": p.project_name,
            "total_hours": p.total_hours,
            "ticket_count": p.ticket_count,
            "contributors": ", ".join(p.contributors),
        }
        for p in projects
    ]
    return pd.DataFrame(rows, columns=list(DISPLAY_ORDER_PROJECTS))


def members_frame(members: Sequence[TeamMemberTimeData]) -> pd.DataFrame:
    rows = [
        {
            "display_name": m.display_name,
            "total_hours": m.total_hours,
            "project_count": len(m.project_keys),
            "worklog_count": len(m.worklogs),
        }
        for m in members
    ]
    return pd.DataFrame(rows, columns=list(DISPLAY_ORDER_MEMBERS))


def entries_frame(entries: Sequence[WorklogEntry]) -> pd.DataFrame:
    """Flat worklog rows for CSV export."""
    rows = [
        {
            "id": e.id,
            "issue_key": e.issue_key,
            "issue_summary": e.issue_summary,
            "project_key": e.project_key,
            "project_name": e.project_name,
            "author": e.author.display_name,
            "account_id": e.author.account_id,
            "started": e.started,
            "hours": seconds_to_hours(e.time_spent_seconds),
            "comment": e.comment or "",
        }
        for e in entries
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "id",
            "issue_key",
            "issue_summary",
            "project_key",
            "project_name",
            "author",
            "account_id",
            "started",
            "hours",
            "comment",
        ],
    )


def prepare_ticket_table(
    tickets: Sequence[TicketTimeData],
    server: str,
) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    df = tickets_frame(tickets)
    if df.empty:
        return df, [], {}
    table, cfg = add_ticket_link(df, server)
    display_cols = [col for col in DISPLAY_ORDER_TICKETS if col in table.columns]
    return table, display_cols, cfg
