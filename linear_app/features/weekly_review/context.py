"""Pure helpers to build the weekly review context (no UI)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from linear_app.analytics.metrics.business_days import now_local, start_of_day, to_local
from linear_app.core.config import WEEKLY_REVIEW_DAYS
from linear_app.core.models import Issue, User

EPIC_OR_PHASE = re.compile(r"phase|epic", re.IGNORECASE)
CODE_HOSTS = ("github.com", "gitlab.com")


@dataclass(slots=True)
class CompletedIssue:
    issue: Issue
    completed_date: datetime
    # Calendar days from start to completion; None when never started
    cycle_time_days: float | None


@dataclass(slots=True)
class DayGroup:
    date: str
    issues: list[CompletedIssue] = field(default_factory=list)


@dataclass(slots=True)
class AssigneeSummary:
    user: User | None
    count: int = 0
    total_estimate: float = 0.0


@dataclass(slots=True)
class WeeklyReviewContext:
    """Context data for the weekly review page."""

    start: datetime
    end: datetime
    completed: list[CompletedIssue] = field(default_factory=list)
    day_groups: list[DayGroup] = field(default_factory=list)
    assignees: list[AssigneeSummary] = field(default_factory=list)
    total_count: int = 0
    total_points: float = 0.0
    average_cycle_time: float | None = None


def review_window_start(now: datetime, days: int = WEEKLY_REVIEW_DAYS) -> datetime:
    """Midnight (dashboard timezone) ``days`` days before ``now``."""
    return start_of_day((to_local(now) - timedelta(days=days)).date())


def _calendar_days(start: datetime | None, end: datetime) -> float | None:
    if start is None:
        return None
    return max((to_local(end) - to_local(start)).total_seconds() / 86400.0, 0.0)


def build_weekly_review(issues: list[Issue], *, now: datetime | None = None) -> WeeklyReviewContext:
    """Summarize issues completed during the last week.

    Parameters
    ----------
    issues : list[Issue]
        Team issues.
    now : datetime, optional
        End of the review window; defaults to the current time.

    Returns
    -------
    WeeklyReviewContext
        Completed issues (newest first), grouped by completion day, with a
        per-assignee summary sorted by completed count.
    """
    now = to_local(now or now_local())
    start = review_window_start(now)

    completed = [
        CompletedIssue(
            issue=issue,
            completed_date=issue.completed_at,
            cycle_time_days=_calendar_days(issue.started_at, issue.completed_at),
        )
        for issue in issues
        if issue.completed_at is not None and start <= to_local(issue.completed_at) <= now
    ]
    completed.sort(key=lambda c: to_local(c.completed_date), reverse=True)

    groups: dict[str, DayGroup] = {}
    summaries: dict[str, AssigneeSummary] = {}
    for item in completed:
        key = to_local(item.completed_date).date().isoformat()
        groups.setdefault(key, DayGroup(date=key)).issues.append(item)

        assignee = item.issue.assignee
        summary = summaries.setdefault(assignee.id if assignee else "__unassigned__", AssigneeSummary(user=assignee))
        summary.count += 1
        summary.total_estimate += item.issue.estimate or 0

    with_cycle_time = [c.cycle_time_days for c in completed if c.cycle_time_days is not None]
    return WeeklyReviewContext(
        start=start,
        end=now,
        completed=completed,
        day_groups=list(groups.values()),
        assignees=sorted(summaries.values(), key=lambda s: s.count, reverse=True),
        total_count=len(completed),
        total_points=sum(c.issue.estimate or 0 for c in completed),
        average_cycle_time=sum(with_cycle_time) / len(with_cycle_time) if with_cycle_time else None,
    )


def _pr_urls(issue: Issue) -> list[str]:
    return [a.url for a in issue.attachments if any(host in a.url for host in CODE_HOSTS)]


def _issue_lines(issue: Issue, category: str) -> list[str]:
    lines = [f"  - {issue.title}", f"    - [Linear]({issue.url})"]
    lines.extend(f"    - [PR]({url})" for url in _pr_urls(issue))
    if issue.assignee is not None:
        if category == "todo":
            lines.append(f"    - owned by {issue.assignee.name}")
        elif category == "in_progress":
            lines.append(f"    - {issue.assignee.name} -> {issue.state.name}")
    return lines


def weekly_markdown(issues: list[Issue], *, now: datetime | None = None) -> str:
    """Markdown progress list (ToDo / InProgress / Done) for a status meeting.

    Phase and epic issues are left out; Done only covers the review window.
    """
    now = to_local(now or now_local())
    start = review_window_start(now)
    regular = [i for i in issues if not EPIC_OR_PHASE.search(i.title)]

    todo = [i for i in regular if i.state.type == "unstarted" and i.assignee is not None]
    in_progress = [i for i in regular if i.state.type == "started"]
    done = [
        i
        for i in regular
        if i.state.type == "completed" and i.completed_at is not None and start <= to_local(i.completed_at) <= now
    ]

    lines: list[str] = []
    for heading, category, bucket in (
        ("ToDo", "todo", todo),
        ("InProgress", "in_progress", in_progress),
        ("Done", "done", done),
    ):
        if not bucket:
            continue
        lines.append(f"- **{heading}:**")
        for issue in bucket:
            lines.extend(_issue_lines(issue, category))
    return "\n".join(lines)
