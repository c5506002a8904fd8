"""Domain data models for Linear teams, issues, cycles, and derived metrics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# =============================================================================
# Input records (snapshots fetched from the Linear API)
# =============================================================================


@dataclass(slots=True)
class User:
    id: str
    name: str
    email: str | None = None
    avatar_url: str | None = None
    display_name: str | None = None


@dataclass(slots=True)
class WorkflowState:
    id: str
    name: str
    type: str
    color: str
    position: float = 0.0


@dataclass(slots=True)
class Label:
    id: str
    name: str
    color: str | None = None


@dataclass(slots=True)
class Attachment:
    id: str
    url: str
    title: str | None = None


@dataclass(slots=True)
class Issue:
    id: str
    identifier: str
    title: str
    priority: int
    state: WorkflowState
    created_at: datetime
    updated_at: datetime | None = None
    estimate: float | None = None
    assignee: User | None = None
    labels: list[Label] = field(default_factory=list)
    started_at: datetime | None = None
    completed_at: datetime | None = None
    canceled_at: datetime | None = None
    archived_at: datetime | None = None
    due_date: datetime | None = None
    priority_label: str | None = None
    description: str | None = None
    project_id: str | None = None
    cycle_id: str | None = None
    url: str = ""
    attachments: list[Attachment] = field(default_factory=list)


@dataclass(slots=True)
class Cycle:
    id: str
    number: int
    starts_at: datetime
    ends_at: datetime
    progress: float = 0.0
    name: str | None = None
    # Parallel day-indexed snapshots; index i is the end of day i + 1
    scope_history: list[float] = field(default_factory=list)
    completed_scope_history: list[float] = field(default_factory=list)
    in_progress_scope_history: list[float] = field(default_factory=list)
    issue_count_history: list[int] = field(default_factory=list)
    completed_issue_count_history: list[int] = field(default_factory=list)


@dataclass(slots=True)
class Project:
    id: str
    name: str
    state: str
    progress: float = 0.0
    started_at: datetime | None = None
    target_date: datetime | None = None
    completed_at: datetime | None = None
    lead: User | None = None
    description: str | None = None
    url: str = ""


@dataclass(slots=True)
class Team:
    id: str
    name: str
    key: str
    members: list[User] = field(default_factory=list)
    states: list[WorkflowState] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)


# =============================================================================
# Derived records (computed by the metrics engine)
# =============================================================================


@dataclass(slots=True)
class KpiMetrics:
    completion_rate: float
    average_cycle_time: float
    weekly_throughput: int
    carryover_rate: float
    previous_completion_rate: float | None = None
    previous_average_cycle_time: float | None = None
    previous_weekly_throughput: int | None = None
    previous_carryover_rate: float | None = None


@dataclass(slots=True)
class VelocityDataPoint:
    cycle_number: int
    cycle_name: str
    completed_points: float
    total_points: float
    completed_issues: int
    total_issues: int


@dataclass(slots=True)
class StatusDistribution:
    name: str
    type: str
    color: str
    count: int


@dataclass(slots=True)
class PriorityDistribution:
    priority: int
    label: str
    count: int
    color: str


@dataclass(slots=True)
class BurndownDataPoint:
    day: int
    date: str
    remaining: float
    ideal: float
    scope: float
    completed: float
    in_progress: float


@dataclass(slots=True)
class MemberWorkload:
    user: User
    assigned_count: int
    completed_count: int
    in_progress_count: int
    total_estimate: float
    completed_estimate: float
    average_cycle_time: float | None


@dataclass(slots=True)
class CycleTimeDataPoint:
    issue_id: str
    identifier: str
    title: str
    completed_at: datetime
    cycle_time_days: int


@dataclass(slots=True)
class CfdDataPoint:
    date: str
    # State name -> issue count, ordered by workflow position
    counts: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class StatusDwellTime:
    name: str
    color: str
    average_days: float
    issue_count: int
    is_anomaly: bool = False


@dataclass(slots=True)
class LeadTimeHistogramBin:
    range: str
    min: int
    max: int
    count: int


@dataclass(slots=True)
class LeadTimeHistogram:
    bins: list[LeadTimeHistogramBin]
    median: float
    p85: float
    p95: float


@dataclass(slots=True)
class RiskIssue:
    issue: Issue
    reason: str  # overdue | stale_wip | high_priority_unstarted
    detail: str


@dataclass(slots=True)
class InsightMessage:
    type: str  # danger | warning | info | success
    title: str
    message: str
