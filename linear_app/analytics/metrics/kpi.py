"""Headline KPI bundle for the overview page."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

from linear_app.core.config import CYCLE_TIME_WINDOW_DAYS, THROUGHPUT_WINDOW_DAYS
from linear_app.core.models import Cycle, Issue, KpiMetrics

from .business_days import now_local, to_local
from .cycle_time import mean_cycle_time

logger = logging.getLogger(__name__)


def _completed_within(issues: Sequence[Issue], after: datetime, until: datetime | None = None) -> list[Issue]:
    """Issues completed in ``(after, until]``; ``until=None`` leaves the window open-ended."""
    out = []
    for issue in issues:
        done = to_local(issue.completed_at)
        if done is None or done <= after:
            continue
        if until is not None and done > until:
            continue
        out.append(issue)
    return out


def carryover_rate(cycle: Cycle | None) -> float:
    """Percentage of the cycle's final scope left incomplete.

    Uses the last snapshot of the scope and completed-scope histories; 0 when
    the cycle is missing, has no history, or ended with zero scope.
    """
    if cycle is None:
        return 0.0
    if not cycle.scope_history or not cycle.completed_scope_history:
        return 0.0
    total = cycle.scope_history[-1]
    completed = cycle.completed_scope_history[-1]
    if total <= 0:
        return 0.0
    return (total - completed) / total * 100


def calculate_kpi_metrics(
    issues: Sequence[Issue],
    current_cycle: Cycle | None,
    previous_cycle: Cycle | None,
    *,
    now: datetime | None = None,
) -> KpiMetrics:
    """Compute the KPI bundle with a "previous period" value for each KPI.

    Each KPI keeps its own comparison window:

    - completion rate: current vs previous cycle progress
    - average cycle time: trailing 30 days vs the 30-60 days before
    - weekly throughput: trailing 7 days vs the 7-14 days before
    - carryover: previous cycle only, no earlier comparison
    """
    now = to_local(now or now_local())
    week_ago = now - timedelta(days=THROUGHPUT_WINDOW_DAYS)
    two_weeks_ago = now - timedelta(days=2 * THROUGHPUT_WINDOW_DAYS)
    month_ago = now - timedelta(days=CYCLE_TIME_WINDOW_DAYS)
    two_months_ago = now - timedelta(days=2 * CYCLE_TIME_WINDOW_DAYS)

    completion_rate = current_cycle.progress * 100 if current_cycle else 0.0
    previous_completion_rate = previous_cycle.progress * 100 if previous_cycle else None

    recent = _completed_within(issues, month_ago)
    average_cycle_time = mean_cycle_time(recent) or 0.0
    previous_average_cycle_time = mean_cycle_time(_completed_within(issues, two_months_ago, month_ago))

    weekly_throughput = len(_completed_within(issues, week_ago))
    previous_weekly_throughput = len(_completed_within(issues, two_weeks_ago, week_ago))

    logger.debug(
        "KPI: %d issues completed in 30d window, throughput %d/%d",
        len(recent),
        weekly_throughput,
        previous_weekly_throughput,
    )
    return KpiMetrics(
        completion_rate=completion_rate,
        average_cycle_time=average_cycle_time,
        weekly_throughput=weekly_throughput,
        carryover_rate=carryover_rate(previous_cycle),
        previous_completion_rate=previous_completion_rate,
        previous_average_cycle_time=previous_average_cycle_time,
        previous_weekly_throughput=previous_weekly_throughput,
        previous_carryover_rate=None,
    )
