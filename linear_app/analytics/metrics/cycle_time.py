"""Per-issue cycle time and lead time (pure functions)."""

from __future__ import annotations

from collections.abc import Iterable

from linear_app.core.models import CycleTimeDataPoint, Issue

from .business_days import business_days_between, to_local


def cycle_time(issue: Issue) -> int | None:
    """Business days from start (or creation, if never started) to completion.

    Returns None for issues without a completion timestamp. The timestamp is
    trusted even when the state type disagrees.
    """
    if issue.completed_at is None:
        return None
    start = issue.started_at or issue.created_at
    return business_days_between(start, issue.completed_at)


def lead_time(issue: Issue) -> int | None:
    """Business days from creation to completion; None while incomplete."""
    if issue.completed_at is None:
        return None
    return business_days_between(issue.created_at, issue.completed_at)


def mean_cycle_time(issues: Iterable[Issue]) -> float | None:
    times = [ct for ct in (cycle_time(i) for i in issues) if ct is not None]
    if not times:
        return None
    return sum(times) / len(times)


def cycle_time_scatter(issues: Iterable[Issue]) -> list[CycleTimeDataPoint]:
    points = [
        CycleTimeDataPoint(
            issue_id=issue.id,
            identifier=issue.identifier,
            title=issue.title,
            completed_at=issue.completed_at,
            cycle_time_days=cycle_time(issue) or 0,
        )
        for issue in issues
        if issue.completed_at is not None
    ]
    points = [p for p in points if p.cycle_time_days > 0]
    return sorted(points, key=lambda p: to_local(p.completed_at))
