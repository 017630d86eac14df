"""Domain data models for worklog entries and their aggregates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(slots=True, frozen=True)
class WorklogAuthor:
    account_id: str
    display_name: str
    email_address: str | None = None


@dataclass(slots=True, frozen=True)
class WorklogEntry:
    """One worklog flattened with its issue's project/summary context."""

    id: str
    issue_key: str
    issue_summary: str
    project_key: str
    project_name: str
    author: WorklogAuthor
    time_spent_seconds: int
    started: str
    comment: str | None = None


@dataclass(slots=True)
class TicketTimeData:
    issue_key: str
    summary: str
    total_hours: float
    assignee: str
    status: str
    worklogs: list[WorklogEntry] = field(default_factory=list)


@dataclass(slots=True)
class ProjectTimeData:
    project_key: str
    project_name: str
    total_hours: float
    ticket_count: int
    contributors: list[str] = field(default_factory=list)
    tickets: list[TicketTimeData] = field(default_factory=list)


@dataclass(slots=True)
class TeamMemberTimeData:
    account_id: str
    display_name: str
    total_hours: float
    project_keys: list[str] = field(default_factory=list)
    worklogs: list[WorklogEntry] = field(default_factory=list)


@dataclass(slots=True)
class ProjectHours:
    project_key: str
    project_name: str
    hours: float


@dataclass(slots=True, frozen=True)
class DateRange:
    start_date: date
    end_date: date


@dataclass(slots=True)
class JiraConfig:
    domain: str
    email: str
    api_token: str
    project_keys: list[str] = field(default_factory=list)


@dataclass(slots=True)
class WorklogData:
    """Everything a page needs after one fetch: aggregates plus the raw inputs."""

    projects: list[ProjectTimeData]
    team_members: list[TeamMemberTimeData]
    issues: list[dict[str, Any]]
    entries: list[WorklogEntry]
