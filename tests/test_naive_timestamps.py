"""Naive datetimes are read as UTC wherever the engine compares timestamps."""

from datetime import UTC, datetime

from linear_app.analytics.metrics.cycle_time import cycle_time_scatter
from linear_app.analytics.metrics.cycles import active_cycle
from linear_app.analytics.metrics.kpi import calculate_kpi_metrics
from linear_app.analytics.metrics.status_flow import calculate_cfd
from linear_app.analytics.segments.risk import OVERDUE, detect_risk_issues
from linear_app.core.models import Project
from linear_app.features.projects.timeline import build_project_timeline
from linear_app.features.weekly_review import build_weekly_review, weekly_markdown


def test_kpi_with_naive_issue(make_issue):
    issue = make_issue("Done", created_at=datetime(2024, 1, 1), completed_at=datetime(2024, 1, 5))

    kpi = calculate_kpi_metrics([issue], None, None, now=datetime(2024, 1, 8, tzinfo=UTC))
    assert kpi.weekly_throughput == 1
    assert kpi.average_cycle_time == 4

    naive_now = calculate_kpi_metrics([issue], None, None, now=datetime(2024, 1, 8))
    assert naive_now.weekly_throughput == 1


def test_risks_with_naive_dates(make_issue):
    issue = make_issue("Todo", created_at=datetime(2024, 1, 1), due_date=datetime(2024, 1, 5))
    risks = detect_risk_issues([issue], now=datetime(2024, 1, 10, tzinfo=UTC))
    assert [(r.reason, r.detail) for r in risks] == [(OVERDUE, "Due 1/5 passed")]
    assert len(detect_risk_issues([issue], now=datetime(2024, 1, 10))) == 1


def test_cfd_with_naive_dates(make_issue, workflow_states):
    issues = [
        make_issue("Done", created_at=datetime(2024, 1, 1), completed_at=datetime(2024, 1, 9, 12)),
        make_issue("Canceled", created_at=datetime(2024, 1, 1), canceled_at=datetime(2024, 1, 10, 8)),
    ]
    points = calculate_cfd(issues, workflow_states, days=2, now=datetime(2024, 1, 10, 12, tzinfo=UTC))
    assert [p.counts["Done"] for p in points] == [1, 1]
    assert [p.counts["Canceled"] for p in points] == [1, 0]


def test_active_cycle_with_naive_bounds(make_cycle):
    cycle = make_cycle(1, starts_at=datetime(2024, 1, 1), ends_at=datetime(2024, 1, 15))
    assert active_cycle([cycle], now=datetime(2024, 1, 8, tzinfo=UTC)) is cycle
    assert active_cycle([cycle], now=datetime(2024, 1, 20)) is None


def test_scatter_mixes_naive_and_aware(make_issue):
    naive = make_issue("Done", created_at=datetime(2024, 1, 1), completed_at=datetime(2024, 1, 10))
    aware = make_issue("Done", completed_at=datetime(2024, 1, 5, tzinfo=UTC))
    points = cycle_time_scatter([naive, aware])
    assert [p.identifier for p in points] == [aware.identifier, naive.identifier]


def test_weekly_review_with_naive_completion(make_issue, alice):
    issue = make_issue(
        "Done",
        title="Fix login",
        assignee=alice,
        created_at=datetime(2024, 1, 1),
        started_at=datetime(2024, 1, 7),
        completed_at=datetime(2024, 1, 8, 12),
    )
    now = datetime(2024, 1, 10, 12, tzinfo=UTC)

    ctx = build_weekly_review([issue], now=now)
    assert ctx.total_count == 1
    assert ctx.average_cycle_time == 1.5
    assert "  - Fix login" in weekly_markdown([issue], now=now).splitlines()


def test_timeline_with_naive_dates():
    projects = [
        Project(id="late", name="Late", state="started", started_at=datetime(2024, 3, 1)),
        Project(id="early", name="Early", state="planned", target_date=datetime(2024, 2, 1, tzinfo=UTC)),
    ]
    bars = build_project_timeline(projects, now=datetime(2024, 6, 1, tzinfo=UTC))
    assert [b.project.id for b in bars] == ["early", "late"]
    assert bars[0].is_overdue
