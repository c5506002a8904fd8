from datetime import UTC, datetime

import pytest

from linear_app.features.overview.context import build_overview_context

NOW = datetime(2024, 1, 20, 12, tzinfo=UTC)


def _dt(*args):
    return datetime(*args, tzinfo=UTC)


def test_overview_context(make_issue, make_cycle, workflow_states, alice):
    cycles = [
        make_cycle(2, starts_at=_dt(2024, 1, 15), ends_at=_dt(2024, 1, 29), progress=0.25,
                   scope_history=[10, 10, 13], completed_scope_history=[0, 1, 3]),
        make_cycle(1, starts_at=_dt(2024, 1, 1), ends_at=_dt(2024, 1, 15), progress=0.9,
                   scope_history=[8, 10], completed_scope_history=[2, 6]),
    ]
    issues = [
        make_issue("Done", assignee=alice, started_at=_dt(2024, 1, 15, 9), completed_at=_dt(2024, 1, 18, 9)),
        make_issue("In Progress", assignee=alice, started_at=_dt(2024, 1, 16, 9)),
        make_issue("Todo", priority=1),
    ]

    ctx = build_overview_context(issues, cycles, [alice], workflow_states, now=NOW, cfd_days=5, histogram_bins=4)

    assert ctx.current_cycle.number == 2
    assert ctx.previous_cycle.number == 1
    assert ctx.kpi.completion_rate == 25
    assert ctx.kpi.carryover_rate == pytest.approx(40)
    assert ctx.scope_creep == pytest.approx(30)
    assert [v.cycle_number for v in ctx.velocity] == [1, 2]
    assert len(ctx.burndown) == 3
    assert len(ctx.cfd) == 5
    assert len(ctx.lead_time_histogram.bins) == 4
    assert ctx.workload[0].assigned_count == 2
    assert [r.issue.priority for r in ctx.risks] == [1]
    assert {i.title for i in ctx.insights} == {"High carryover rate", "Scope creep detected"}


def test_overview_without_active_cycle(make_issue, workflow_states):
    ctx = build_overview_context([make_issue("Todo")], [], [], workflow_states, now=NOW)
    assert ctx.current_cycle is None
    assert ctx.burndown == []
    assert ctx.scope_creep == 0
    assert ctx.kpi.completion_rate == 0
    assert [i.type for i in ctx.insights] == ["success"]
