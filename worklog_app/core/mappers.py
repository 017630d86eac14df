"""Mapping raw Jira issue and worklog JSON into WorklogEntry instances."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .models import WorklogAuthor, WorklogEntry


def index_issues(issues: Iterable[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Lookup from issue key to raw issue; later duplicates win."""
    return {issue.get("key"): issue for issue in issues}


def map_author(raw_author: dict[str, Any] | None) -> WorklogAuthor:
    author = raw_author or {}
    return WorklogAuthor(
        account_id=author.get("accountId"),
        display_name=author.get("displayName"),
        email_address=author.get("emailAddress"),
    )


def map_worklog(issue_key: str, issue: dict[str, Any], raw: dict[str, Any]) -> WorklogEntry:
    fields = issue.get("fields", {})
    project = fields.get("project") or {}
    comment = raw.get("comment")
    return WorklogEntry(
        id=raw.get("id"),
        issue_key=issue_key,
        issue_summary=fields.get("summary"),
        project_key=project.get("key"),
        project_name=project.get("name"),
        author=map_author(raw.get("author")),
        time_spent_seconds=raw.get("timeSpentSeconds"),
        started=raw.get("started"),
        # Jira Cloud v3 returns ADF documents here; only plain strings are kept
        comment=comment if isinstance(comment, str) else None,
    )


def worklog_entries_from_raw(
    issues: Iterable[dict[str, Any]],
    worklogs_by_issue_key: Mapping[str, Iterable[dict[str, Any]]],
) -> list[WorklogEntry]:
    """Join issue context onto each worklog, producing flat entries.

    Entries keep the mapping's iteration order, then each issue's worklog
    order. Worklog groups whose issue key has no matching issue are skipped.
    """
    issue_by_key = index_issues(issues)
    entries: list[WorklogEntry] = []
    for issue_key, worklogs in worklogs_by_issue_key.items():
        issue = issue_by_key.get(issue_key)
        if issue is None:
            continue
        for raw in worklogs:
            entries.append(map_worklog(issue_key, issue, raw))
    return entries
