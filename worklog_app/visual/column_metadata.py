"""Central column metadata and helpers for table rendering."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import streamlit as st

# Mapping of raw column keys to (label, help text, format key)
# format key: "int" -> integer, "hours" -> 2 decimal float, None -> default text column
COLUMN_METADATA: dict[str, tuple[str, str, str | None]] = {
    "summary": ("Summary", "Issue summary from Jira.", None),
    "assignee": ("Assignee", "Current owner of the issue, or Unassigned.", None),
    "status": ("Status", "Current Jira workflow status.", None),
    "total_hours": ("Hours", "Time logged within the selected date range.", "hours"),
    "worklog_count": ("Worklogs", "Number of worklog entries in the range.", "int"),
    "project_key": ("Key", "Jira project key.", None),
    "project_name": ("Project", "Jira project name.", None),
    "ticket_count": ("Tickets", "Distinct tickets with time logged in the range.", "int"),
    "contributors": ("Contributors", "People who logged time in the range.", None),
    "display_name": ("Team Member", "Worklog author.", None),
    "project_count": ("Projects", "Distinct projects the member logged time against.", "int"),
}


def apply_column_metadata(
    columns: Iterable[str],
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return a column_config dictionary with human labels and hover help."""

    config: dict[str, Any] = dict(existing or {})
    for col in columns:
        if col in config:
            continue
        meta = COLUMN_METADATA.get(col)
        if not meta:
            continue
        label, help_text, fmt = meta
        if fmt == "int":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%d")
        elif fmt == "hours":
            config[col] = st.column_config.NumberColumn(label, help=help_text, format="%.2f")
        else:
            config[col] = st.column_config.Column(label, help=help_text)
    return config
