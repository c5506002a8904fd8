from datetime import UTC, datetime, timedelta

from linear_app.core.models import Project
from linear_app.features.projects.timeline import build_project_timeline, timeline_bar

NOW = datetime(2024, 6, 1, tzinfo=UTC)


def _dt(*args):
    return datetime(*args, tzinfo=UTC)


def test_bar_uses_known_dates():
    project = Project(id="p1", name="Alpha", state="started", started_at=_dt(2024, 1, 1), target_date=_dt(2024, 7, 1))
    bar = timeline_bar(project, NOW)
    assert (bar.start, bar.end) == (_dt(2024, 1, 1), _dt(2024, 7, 1))
    assert not bar.is_overdue


def test_bar_fallbacks():
    target_only = Project(id="p1", name="A", state="planned", target_date=_dt(2024, 5, 1))
    bar = timeline_bar(target_only, NOW)
    assert bar.start == _dt(2024, 5, 1) - timedelta(days=90)
    assert bar.end == _dt(2024, 5, 1)
    assert bar.is_overdue

    started_only = Project(id="p2", name="B", state="started", started_at=_dt(2024, 5, 1))
    bar = timeline_bar(started_only, NOW)
    assert bar.end == NOW + timedelta(days=30)


def test_completed_project_not_overdue():
    project = Project(
        id="p1",
        name="Done",
        state="completed",
        started_at=_dt(2024, 1, 1),
        target_date=_dt(2024, 2, 1),
        completed_at=_dt(2024, 3, 1),
    )
    bar = timeline_bar(project, NOW)
    assert bar.end == _dt(2024, 3, 1)
    assert not bar.is_overdue


def test_inverted_dates_are_swapped():
    project = Project(id="p1", name="X", state="started", started_at=_dt(2024, 4, 1), completed_at=_dt(2024, 3, 1))
    bar = timeline_bar(project, NOW)
    assert bar.start < bar.end


def test_timeline_order_and_filter():
    projects = [
        Project(id="late", name="Late", state="started", started_at=_dt(2024, 3, 1)),
        Project(id="undated", name="Undated", state="planned"),
        Project(id="early", name="Early", state="planned", target_date=_dt(2024, 2, 1)),
    ]
    bars = build_project_timeline(projects, now=NOW)
    assert [b.project.id for b in bars] == ["early", "late"]
