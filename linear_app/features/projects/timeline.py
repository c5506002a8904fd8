"""Project timeline bars (pure helpers, no UI)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from linear_app.analytics.metrics.business_days import now_local, to_local
from linear_app.core.config import TIMELINE_END_FALLBACK_DAYS, TIMELINE_START_FALLBACK_DAYS
from linear_app.core.models import Project


@dataclass(slots=True)
class TimelineBar:
    project: Project
    start: datetime
    end: datetime
    is_overdue: bool


def _sort_key(project: Project) -> float:
    anchor = to_local(project.started_at or project.target_date)
    return anchor.timestamp() if anchor is not None else float("inf")


def timeline_bar(project: Project, now: datetime) -> TimelineBar:
    """Bar extent for one project, filling missing dates with fixed offsets.

    A target date without a start is drawn from 90 days before the target; an
    open-ended project runs until 30 days from now.
    """
    now = to_local(now)
    started_at = to_local(project.started_at)
    target_date = to_local(project.target_date)
    completed_at = to_local(project.completed_at)

    if started_at is not None:
        start = started_at
    elif target_date is not None:
        start = target_date - timedelta(days=TIMELINE_START_FALLBACK_DAYS)
    else:
        start = now

    if completed_at is not None:
        end = completed_at
    elif target_date is not None:
        end = target_date
    else:
        end = now + timedelta(days=TIMELINE_END_FALLBACK_DAYS)

    is_overdue = (
        target_date is not None and target_date < now and project.state.lower() != "completed"
    )
    return TimelineBar(project=project, start=min(start, end), end=max(start, end), is_overdue=is_overdue)


def build_project_timeline(projects: Iterable[Project], *, now: datetime | None = None) -> list[TimelineBar]:
    """Bars for projects with at least one known date, earliest start first."""
    now = now or now_local()
    dated = [p for p in projects if p.started_at or p.target_date or p.completed_at]
    dated.sort(key=_sort_key)
    return [timeline_bar(p, now) for p in dated]
