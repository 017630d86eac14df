"""Builders for raw Jira issue/worklog payloads used across tests."""

from __future__ import annotations

ALICE = {"accountId": "user-1", "displayName": "Alice", "active": True}
BOB = {"accountId": "user-2", "displayName": "Bob", "active": True}


def make_issue(
    key: str,
    *,
    summary: str | None = None,
    status: str = "In Progress",
    assignee: dict | None = ALICE,
    project_key: str = "PROJ",
    project_name: str = "Project Alpha",
) -> dict:
    return {
        "id": key,
        "self": f"https://test.atlassian.net/rest/api/3/issue/{key}",
        "key": key,
        "fields": {
            "summary": summary or f"Summary for {key}",
            "status": {"name": status, "statusCategory": {"key": "indeterminate"}},
            "assignee": assignee,
            "project": {"id": "10001", "key": project_key, "name": project_name},
        },
    }


def make_worklog(
    wl_id: str,
    seconds: int = 3600,
    *,
    author: dict = ALICE,
    started: str = "2025-01-15T09:00:00.000+0000",
    comment=None,
) -> dict:
    raw = {
        "self": "",
        "id": wl_id,
        "issueId": "10001",
        "author": dict(author),
        "updateAuthor": dict(author),
        "started": started,
        "timeSpent": "1h",
        "timeSpentSeconds": seconds,
        "updated": started,
    }
    if comment is not None:
        raw["comment"] = comment
    return raw
