"""Cycle-level series: velocity, burndown/burnup, and scope creep."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from linear_app.core.models import BurndownDataPoint, Cycle, VelocityDataPoint

from .business_days import now_local, to_local


def _last(history: Sequence[float]) -> float:
    return history[-1] if history else 0


def _at(history: Sequence[float], idx: int) -> float:
    return history[idx] if idx < len(history) else 0


def cycle_display_name(cycle: Cycle) -> str:
    return cycle.name or f"Cycle {cycle.number}"


def calculate_velocity(cycles: Sequence[Cycle]) -> list[VelocityDataPoint]:
    """One point per cycle from the final snapshot of each history.

    Cycles are expected sorted ascending by number; no cross-cycle smoothing.
    """
    return [
        VelocityDataPoint(
            cycle_number=cycle.number,
            cycle_name=cycle_display_name(cycle),
            completed_points=_last(cycle.completed_scope_history),
            total_points=_last(cycle.scope_history),
            completed_issues=int(_last(cycle.completed_issue_count_history)),
            total_issues=int(_last(cycle.issue_count_history)),
        )
        for cycle in cycles
    ]


def calculate_burndown(cycle: Cycle) -> list[BurndownDataPoint]:
    """Daily burndown/burnup points for a cycle.

    The ideal line ramps linearly from the initial scope on day 1 to 0 on the
    last recorded day. Fewer than two snapshots yield an empty series.
    """
    scope_history = cycle.scope_history
    days = len(scope_history)
    if days <= 1:
        return []

    initial_scope = scope_history[0]
    start = to_local(cycle.starts_at)
    slope = initial_scope / (days - 1)
    points: list[BurndownDataPoint] = []
    for idx, scope in enumerate(scope_history):
        completed = _at(cycle.completed_scope_history, idx)
        points.append(
            BurndownDataPoint(
                day=idx + 1,
                date=(start + timedelta(days=idx)).date().isoformat(),
                remaining=scope - completed,
                ideal=max(initial_scope - slope * idx, 0),
                scope=scope,
                completed=completed,
                in_progress=_at(cycle.in_progress_scope_history, idx),
            )
        )
    return points


def calculate_scope_creep(cycle: Cycle) -> float:
    """Percentage growth of total scope from the first to the latest snapshot."""
    history = cycle.scope_history
    if len(history) < 2:
        return 0.0
    initial = history[0]
    if initial <= 0:
        return 0.0
    return (history[-1] - initial) / initial * 100


def active_cycle(cycles: Sequence[Cycle], *, now: datetime | None = None) -> Cycle | None:
    """The cycle whose ``[starts_at, ends_at]`` window contains ``now``."""
    now = to_local(now or now_local())
    for cycle in cycles:
        if to_local(cycle.starts_at) <= now <= to_local(cycle.ends_at):
            return cycle
    return None


def previous_cycle(cycles: Sequence[Cycle], current: Cycle | None) -> Cycle | None:
    """The cycle immediately preceding ``current`` by sequence number."""
    if current is None:
        return None
    earlier = [c for c in cycles if c.number < current.number]
    if not earlier:
        return None
    return max(earlier, key=lambda c: c.number)
