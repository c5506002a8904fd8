from datetime import UTC, datetime

import pytest

from linear_app.analytics.metrics.cycles import (
    active_cycle,
    calculate_burndown,
    calculate_scope_creep,
    calculate_velocity,
    previous_cycle,
)


def test_velocity_uses_final_snapshot(make_cycle):
    cycles = [
        make_cycle(1, name="Sprint A", scope_history=[5, 8], completed_scope_history=[0, 6],
                   issue_count_history=[3, 4], completed_issue_count_history=[0, 3]),
        make_cycle(2),
    ]
    points = calculate_velocity(cycles)

    assert points[0].cycle_name == "Sprint A"
    assert (points[0].completed_points, points[0].total_points) == (6, 8)
    assert (points[0].completed_issues, points[0].total_issues) == (3, 4)
    assert points[1].cycle_name == "Cycle 2"
    assert points[1].completed_points == 0 and points[1].total_issues == 0


def test_burndown_series(make_cycle):
    cycle = make_cycle(
        1,
        scope_history=[10, 10, 12, 12],
        completed_scope_history=[0, 2, 5, 9],
        in_progress_scope_history=[1, 3],
    )
    points = calculate_burndown(cycle)

    assert len(points) == 4
    assert [p.day for p in points] == [1, 2, 3, 4]
    assert points[0].date == "2024-01-01"
    assert points[3].date == "2024-01-04"
    assert points[0].ideal == pytest.approx(10)
    assert points[-1].ideal == pytest.approx(0)
    assert points[3].remaining == 3
    assert [p.in_progress for p in points] == [1, 3, 0, 0]
    ideals = [p.ideal for p in points]
    assert ideals == sorted(ideals, reverse=True)


def test_burndown_needs_two_snapshots(make_cycle):
    assert calculate_burndown(make_cycle(1)) == []
    assert calculate_burndown(make_cycle(1, scope_history=[10], completed_scope_history=[0])) == []


def test_scope_creep(make_cycle):
    assert calculate_scope_creep(make_cycle(1, scope_history=[10, 10, 12, 12])) == pytest.approx(20)
    assert calculate_scope_creep(make_cycle(1, scope_history=[10])) == 0
    assert calculate_scope_creep(make_cycle(1, scope_history=[0, 5])) == 0


def test_active_and_previous_cycle(make_cycle):
    first = make_cycle(1, starts_at=datetime(2024, 1, 1, tzinfo=UTC), ends_at=datetime(2024, 1, 15, tzinfo=UTC))
    second = make_cycle(2, starts_at=datetime(2024, 1, 15, tzinfo=UTC), ends_at=datetime(2024, 1, 29, tzinfo=UTC))
    third = make_cycle(3, starts_at=datetime(2024, 1, 29, tzinfo=UTC), ends_at=datetime(2024, 2, 12, tzinfo=UTC))
    cycles = [first, second, third]

    current = active_cycle(cycles, now=datetime(2024, 1, 20, tzinfo=UTC))
    assert current is second
    assert previous_cycle(cycles, current) is first
    assert previous_cycle(cycles, first) is None
    assert previous_cycle(cycles, None) is None
    assert active_cycle(cycles, now=datetime(2025, 1, 1, tzinfo=UTC)) is None
