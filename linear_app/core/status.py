"""Workflow state categorization utilities.

Centralized helpers for reasoning about an issue's workflow state type, reused
across the metric calculators. They rely on the state configuration in
config.py (STATE_TYPES, UNSTARTED_STATE_TYPES, TERMINAL_STATE_TYPES).
"""

from __future__ import annotations

from collections.abc import Iterable

from .config import STATE_TYPES, TERMINAL_STATE_TYPES, UNSTARTED_STATE_TYPES
from .models import Issue, WorkflowState


def normalize_state_type(value: str | None) -> str:
    """Map a raw state type onto a known workflow type.

    Parameters
    ----------
    value : str | None
        Raw state type string from the API.

    Returns
    -------
    str
        One of STATE_TYPES, or "unknown" for empty or unmapped values.

    Examples
    --------
    >>> normalize_state_type("Started")
    'started'
    >>> normalize_state_type("cancelled")
    'canceled'
    >>> normalize_state_type(None)
    'unknown'
    """
    if not value:
        return "unknown"
    text = str(value).strip().lower()
    if text == "cancelled":
        return "canceled"
    if text in STATE_TYPES:
        return text
    return "unknown"


def is_active(issue: Issue) -> bool:
    """True when the issue has not been archived."""
    return issue.archived_at is None


def is_open(issue: Issue) -> bool:
    """True for non-archived issues whose state is neither completed nor canceled."""
    return is_active(issue) and issue.state.type not in TERMINAL_STATE_TYPES


def is_completed_state(issue: Issue) -> bool:
    return issue.state.type == "completed"


def is_started_state(issue: Issue) -> bool:
    return issue.state.type == "started"


def is_unstarted_state(issue: Issue) -> bool:
    return issue.state.type in UNSTARTED_STATE_TYPES


def order_states(states: Iterable[WorkflowState]) -> list[WorkflowState]:
    """Return states left-to-right as they appear on the board (ascending position)."""
    return sorted(states, key=lambda s: s.position)
