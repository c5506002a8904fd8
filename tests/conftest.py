"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import linear_app` works. Also provides small factories
for building issues, states, and cycles.
"""

from __future__ import annotations

import itertools
import sys
from datetime import UTC, datetime
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from linear_app.core.models import Cycle, Issue, Label, User, WorkflowState  # noqa: E402

# Monday
BASE = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

_ids = itertools.count(1)

STATE_ROWS = [
    ("Triage", "triage", "#fc7840", 0),
    ("Backlog", "backlog", "#bec2c8", 1),
    ("Todo", "unstarted", "#e2e2e2", 2),
    ("In Progress", "started", "#f2c94c", 3),
    ("In Review", "started", "#5e6ad2", 4),
    ("Done", "completed", "#5e6ad2", 5),
    ("Canceled", "canceled", "#95a2b3", 6),
]


def business_days_after(start: datetime, days: int) -> datetime:
    return (pd.Timestamp(start) + pd.offsets.BDay(days)).to_pydatetime()


def make_state_obj(name: str) -> WorkflowState:
    for state_name, state_type, color, position in STATE_ROWS:
        if state_name == name:
            return WorkflowState(id=f"state-{position}", name=state_name, type=state_type, color=color, position=position)
    raise KeyError(name)


def build_issue(
    state: str = "Todo",
    *,
    created_at: datetime = BASE,
    priority: int = 3,
    **kwargs,
) -> Issue:
    n = next(_ids)
    labels = [Label(id=f"label-{name}", name=name) for name in kwargs.pop("labels", [])]
    return Issue(
        id=f"issue-{n}",
        identifier=f"ENG-{n}",
        title=kwargs.pop("title", f"Issue {n}"),
        priority=priority,
        state=make_state_obj(state),
        created_at=created_at,
        labels=labels,
        **kwargs,
    )


def build_cycle(number: int = 1, **kwargs) -> Cycle:
    return Cycle(
        id=f"cycle-{number}",
        number=number,
        starts_at=kwargs.pop("starts_at", BASE),
        ends_at=kwargs.pop("ends_at", datetime(2024, 1, 15, 9, 0, tzinfo=UTC)),
        **kwargs,
    )


@pytest.fixture
def make_issue():
    return build_issue


@pytest.fixture
def make_cycle():
    return build_cycle


@pytest.fixture
def workflow_states() -> list[WorkflowState]:
    # Deliberately out of position order
    return [make_state_obj(entry[0]) for entry in reversed(STATE_ROWS)]


@pytest.fixture
def alice() -> User:
    return User(id="u-alice", name="Alice", email="alice@example.com")


@pytest.fixture
def bob() -> User:
    return User(id="u-bob", name="Bob", email="bob@example.com")
