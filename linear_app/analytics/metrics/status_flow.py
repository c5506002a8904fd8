"""Workflow flow analysis: cumulative flow and status dwell time.

Linear does not expose a state-transition log in the data we fetch, so both
views classify issues by their *current* workflow state. For the cumulative
flow diagram this means present-day classification is applied retroactively
to every past snapshot; bands show where today's issues sit, not where they
sat on that day.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

import pandas as pd

from linear_app.core.config import DEFAULT_CFD_DAYS
from linear_app.core.models import CfdDataPoint, Issue, StatusDwellTime, WorkflowState
from linear_app.core.status import is_active, order_states

from .business_days import end_of_day, now_local, to_local
from .cycle_time import cycle_time

logger = logging.getLogger(__name__)

ANOMALY_MULTIPLIER = 2


def snapshot_state(issue: Issue, snapshot: datetime) -> str | None:
    """State name an issue is counted under at ``snapshot``, or None if excluded.

    Issues not yet created, or canceled by the snapshot, are excluded. A
    completion on or before the snapshot takes precedence over cancellation.
    """
    snapshot = to_local(snapshot)
    if to_local(issue.created_at) > snapshot:
        return None
    completed = to_local(issue.completed_at)
    if completed is not None and completed <= snapshot:
        return issue.state.name
    canceled = to_local(issue.canceled_at)
    if canceled is not None and canceled <= snapshot:
        return None
    return issue.state.name


def calculate_cfd(
    issues: Sequence[Issue],
    states: Sequence[WorkflowState],
    days: int = DEFAULT_CFD_DAYS,
    *,
    now: datetime | None = None,
) -> list[CfdDataPoint]:
    """Daily issue counts per workflow state over the trailing ``days`` days.

    Parameters
    ----------
    issues : Sequence[Issue]
        Team issues; archived ones are included.
    states : Sequence[WorkflowState]
        Workflow states; every state appears in each point, ordered by position.
    days : int
        Window length ending today (default 30).
    now : datetime, optional
        Reference instant; defaults to the current time.

    Returns
    -------
    list[CfdDataPoint]
        Oldest day first, one point per day.
    """
    today = to_local(now or now_local()).date()
    state_names = [s.name for s in order_states(states)]

    points: list[CfdDataPoint] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        snapshot = end_of_day(day)
        counts = dict.fromkeys(state_names, 0)
        for issue in issues:
            name = snapshot_state(issue, snapshot)
            if name is None:
                continue
            counts[name] = counts.get(name, 0) + 1
        points.append(CfdDataPoint(date=day.isoformat(), counts=counts))
    return points


def cfd_to_dataframe(points: Sequence[CfdDataPoint]) -> pd.DataFrame:
    """Wide frame (one column per state, indexed by date) for stacked-area charts."""
    if not points:
        return pd.DataFrame()
    frame = pd.DataFrame([p.counts for p in points], index=pd.to_datetime([p.date for p in points]))
    frame.index.name = "date"
    return frame.fillna(0).astype(int)


def calculate_status_dwell_time(
    issues: Sequence[Issue],
    states: Sequence[WorkflowState],
) -> list[StatusDwellTime]:
    """Average cycle time of completed issues per current workflow state.

    A state is flagged as an anomaly when its average exceeds twice the mean
    of the non-zero state averages.
    """
    totals: dict[str, list[float]] = {s.name: [] for s in states}
    for issue in issues:
        ct = cycle_time(issue)
        if ct is None or issue.state.name not in totals:
            continue
        totals[issue.state.name].append(ct)

    occupancy: dict[str, int] = {}
    for issue in issues:
        if is_active(issue):
            occupancy[issue.state.name] = occupancy.get(issue.state.name, 0) + 1

    results: list[StatusDwellTime] = []
    for state in states:
        values = totals[state.name]
        results.append(
            StatusDwellTime(
                name=state.name,
                color=state.color,
                average_days=sum(values) / len(values) if values else 0.0,
                issue_count=occupancy.get(state.name, 0),
            )
        )

    contributing = max(sum(1 for r in results if r.average_days > 0), 1)
    overall = sum(r.average_days for r in results) / contributing
    for r in results:
        r.is_anomaly = r.average_days > overall * ANOMALY_MULTIPLIER
    logger.debug("Dwell time over %d states, overall average %.2f", len(results), overall)
    return results
