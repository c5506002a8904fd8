"""Risk detection over open issues."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from linear_app.analytics.metrics.business_days import business_days_between, now_local, to_local
from linear_app.core.config import HIGH_PRIORITIES, STALE_WIP_BUSINESS_DAYS, priority_label
from linear_app.core.models import Issue, RiskIssue
from linear_app.core.status import is_open, is_started_state, is_unstarted_state

OVERDUE = "overdue"
STALE_WIP = "stale_wip"
HIGH_PRIORITY_UNSTARTED = "high_priority_unstarted"


def _short_date(value: datetime) -> str:
    local = to_local(value)
    return f"{local.month}/{local.day}"


def issue_risks(issue: Issue, now: datetime) -> list[RiskIssue]:
    """All risk flags raised by a single issue (one entry per reason)."""
    if not is_open(issue):
        return []
    now = to_local(now)
    risks: list[RiskIssue] = []

    if issue.due_date is not None and to_local(issue.due_date) < now:
        risks.append(RiskIssue(issue, OVERDUE, f"Due {_short_date(issue.due_date)} passed"))

    if is_started_state(issue) and issue.started_at is not None:
        days_in_progress = business_days_between(issue.started_at, now)
        if days_in_progress >= STALE_WIP_BUSINESS_DAYS:
            risks.append(RiskIssue(issue, STALE_WIP, f"{days_in_progress} business days in progress"))

    if issue.priority in HIGH_PRIORITIES and is_unstarted_state(issue):
        label = issue.priority_label or priority_label(issue.priority)
        risks.append(RiskIssue(issue, HIGH_PRIORITY_UNSTARTED, f"{label} priority not started"))

    return risks


def detect_risk_issues(issues: Iterable[Issue], *, now: datetime | None = None) -> list[RiskIssue]:
    """Flag overdue, stale in-progress, and unstarted high-priority issues.

    Completed, canceled, and archived issues are never flagged. Results are
    ordered by ascending priority value; ties keep input order.
    """
    now = to_local(now or now_local())
    risks: list[RiskIssue] = []
    for issue in issues:
        risks.extend(issue_risks(issue, now))
    return sorted(risks, key=lambda r: r.issue.priority)
