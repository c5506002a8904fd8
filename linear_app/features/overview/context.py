"""Pure helpers to build the dashboard overview context (no UI)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from linear_app.analytics.aggregations.assignee import calculate_member_workload
from linear_app.analytics.aggregations.distribution import (
    calculate_priority_distribution,
    calculate_status_distribution,
)
from linear_app.analytics.insights import generate_insights
from linear_app.analytics.metrics.binning import calculate_lead_time_histogram
from linear_app.analytics.metrics.business_days import now_local
from linear_app.analytics.metrics.cycle_time import cycle_time_scatter
from linear_app.analytics.metrics.cycles import (
    active_cycle,
    calculate_burndown,
    calculate_scope_creep,
    calculate_velocity,
    previous_cycle,
)
from linear_app.analytics.metrics.kpi import calculate_kpi_metrics
from linear_app.analytics.metrics.status_flow import calculate_cfd, calculate_status_dwell_time
from linear_app.analytics.segments.risk import detect_risk_issues
from linear_app.core.config import DEFAULT_CFD_DAYS, DEFAULT_HISTOGRAM_BINS
from linear_app.core.models import (
    BurndownDataPoint,
    CfdDataPoint,
    Cycle,
    CycleTimeDataPoint,
    InsightMessage,
    Issue,
    KpiMetrics,
    LeadTimeHistogram,
    MemberWorkload,
    PriorityDistribution,
    RiskIssue,
    StatusDistribution,
    StatusDwellTime,
    User,
    VelocityDataPoint,
    WorkflowState,
)


@dataclass(slots=True)
class OverviewContext:
    """Every derived metric the dashboard pages render."""

    kpi: KpiMetrics
    current_cycle: Cycle | None
    previous_cycle: Cycle | None
    scope_creep: float
    velocity: list[VelocityDataPoint] = field(default_factory=list)
    burndown: list[BurndownDataPoint] = field(default_factory=list)
    status_distribution: list[StatusDistribution] = field(default_factory=list)
    priority_distribution: list[PriorityDistribution] = field(default_factory=list)
    workload: list[MemberWorkload] = field(default_factory=list)
    cycle_times: list[CycleTimeDataPoint] = field(default_factory=list)
    cfd: list[CfdDataPoint] = field(default_factory=list)
    dwell_times: list[StatusDwellTime] = field(default_factory=list)
    lead_time_histogram: LeadTimeHistogram | None = None
    risks: list[RiskIssue] = field(default_factory=list)
    insights: list[InsightMessage] = field(default_factory=list)


def build_overview_context(
    issues: Sequence[Issue],
    cycles: Sequence[Cycle],
    members: Sequence[User],
    states: Sequence[WorkflowState],
    *,
    now: datetime | None = None,
    cfd_days: int = DEFAULT_CFD_DAYS,
    histogram_bins: int = DEFAULT_HISTOGRAM_BINS,
) -> OverviewContext:
    """Compute the full metric set for one team snapshot.

    Parameters
    ----------
    issues, cycles, members, states : Sequence
        Team data as fetched from the API.
    now : datetime, optional
        Reference instant for every time-window metric.
    cfd_days : int
        Trailing window of the cumulative flow diagram.
    histogram_bins : int
        Bin count of the lead-time histogram.

    Returns
    -------
    OverviewContext
        Assembled metrics; cycle-dependent fields are empty when no cycle is
        active.
    """
    now = now or now_local()
    ordered_cycles = sorted(cycles, key=lambda c: c.number)
    current = active_cycle(ordered_cycles, now=now)
    previous = previous_cycle(ordered_cycles, current)

    kpi = calculate_kpi_metrics(issues, current, previous, now=now)
    scope_creep = calculate_scope_creep(current) if current else 0.0

    return OverviewContext(
        kpi=kpi,
        current_cycle=current,
        previous_cycle=previous,
        scope_creep=scope_creep,
        velocity=calculate_velocity(ordered_cycles),
        burndown=calculate_burndown(current) if current else [],
        status_distribution=calculate_status_distribution(issues),
        priority_distribution=calculate_priority_distribution(issues),
        workload=calculate_member_workload(issues, members),
        cycle_times=cycle_time_scatter(issues),
        cfd=calculate_cfd(issues, states, cfd_days, now=now),
        dwell_times=calculate_status_dwell_time(issues, states),
        lead_time_histogram=calculate_lead_time_histogram(issues, histogram_bins),
        risks=detect_risk_issues(issues, now=now),
        insights=generate_insights(kpi, scope_creep, issues, members),
    )
