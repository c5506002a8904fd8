"""Mapping raw Linear GraphQL payloads into model instances."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

import pandas as pd

from .config import normalize_priority, priority_label
from .models import Attachment, Cycle, Issue, Label, Project, Team, User, WorkflowState
from .status import normalize_state_type

logger = logging.getLogger(__name__)


def parse_dt(val) -> datetime | None:
    """Parse an ISO timestamp (or date) into a UTC-aware datetime.

    Returns None for empty or unparseable values.
    """
    if not val:
        return None
    if isinstance(val, datetime) and val.tzinfo is not None:
        return val
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        logger.warning("Unparseable timestamp %r", val)
        return None
    return ts.to_pydatetime()


def _nodes(value: Any) -> list[dict[str, Any]]:
    """Unwrap a GraphQL connection (``{"nodes": [...]}``) or a plain list."""
    if isinstance(value, dict):
        value = value.get("nodes")
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _require_id(raw: dict[str, Any], kind: str) -> str:
    ident = raw.get("id")
    if not ident:
        raise ValueError(f"{kind} payload without id: {raw!r}")
    return str(ident)


def map_user(raw: dict[str, Any] | None) -> User | None:
    if not raw:
        return None
    return User(
        id=_require_id(raw, "User"),
        name=raw.get("name") or raw.get("displayName") or "",
        email=raw.get("email"),
        avatar_url=raw.get("avatarUrl"),
        display_name=raw.get("displayName"),
    )


def map_state(raw: dict[str, Any]) -> WorkflowState:
    return WorkflowState(
        id=_require_id(raw, "WorkflowState"),
        name=raw.get("name") or "Unknown",
        type=normalize_state_type(raw.get("type")),
        color=raw.get("color") or "",
        position=float(raw.get("position") or 0),
    )


def map_label(raw: dict[str, Any]) -> Label:
    return Label(id=_require_id(raw, "Label"), name=raw.get("name") or "", color=raw.get("color"))


def _to_float(value) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def map_issue(raw: dict[str, Any]) -> Issue:
    priority = normalize_priority(raw.get("priority"))
    created = parse_dt(raw.get("createdAt"))
    if created is None:
        raise ValueError(f"Issue {raw.get('identifier')!r} has no createdAt")
    project = raw.get("project") or {}
    return Issue(
        id=_require_id(raw, "Issue"),
        identifier=raw.get("identifier") or "",
        title=raw.get("title") or "",
        priority=priority,
        priority_label=raw.get("priorityLabel") or priority_label(priority),
        state=map_state(raw.get("state") or {"id": "unknown"}),
        created_at=created,
        updated_at=parse_dt(raw.get("updatedAt")),
        estimate=_to_float(raw.get("estimate")),
        assignee=map_user(raw.get("assignee")),
        labels=[map_label(node) for node in _nodes(raw.get("labels"))],
        started_at=parse_dt(raw.get("startedAt")),
        completed_at=parse_dt(raw.get("completedAt")),
        canceled_at=parse_dt(raw.get("canceledAt")),
        archived_at=parse_dt(raw.get("archivedAt")),
        due_date=parse_dt(raw.get("dueDate")),
        description=raw.get("description"),
        project_id=project.get("id"),
        cycle_id=raw.get("cycleId") or (raw.get("cycle") or {}).get("id"),
        url=raw.get("url") or "",
        attachments=[
            Attachment(id=str(node.get("id") or ""), url=node.get("url") or "", title=node.get("title"))
            for node in _nodes(raw.get("attachments"))
        ],
    )


def map_cycle(raw: dict[str, Any]) -> Cycle:
    starts_at = parse_dt(raw.get("startsAt"))
    ends_at = parse_dt(raw.get("endsAt"))
    if starts_at is None or ends_at is None:
        raise ValueError(f"Cycle {raw.get('number')!r} is missing startsAt/endsAt")

    def history(key: str) -> list:
        return list(raw.get(key) or [])

    return Cycle(
        id=_require_id(raw, "Cycle"),
        number=int(raw.get("number") or 0),
        name=raw.get("name"),
        starts_at=starts_at,
        ends_at=ends_at,
        progress=float(raw.get("progress") or 0.0),
        scope_history=history("scopeHistory"),
        completed_scope_history=history("completedScopeHistory"),
        in_progress_scope_history=history("inProgressScopeHistory"),
        issue_count_history=history("issueCountHistory"),
        completed_issue_count_history=history("completedIssueCountHistory"),
    )


def map_project(raw: dict[str, Any]) -> Project:
    return Project(
        id=_require_id(raw, "Project"),
        name=raw.get("name") or "",
        state=str(raw.get("state") or "planned").lower(),
        progress=float(raw.get("progress") or 0.0),
        started_at=parse_dt(raw.get("startedAt")),
        target_date=parse_dt(raw.get("targetDate")),
        completed_at=parse_dt(raw.get("completedAt")),
        lead=map_user(raw.get("lead")),
        description=raw.get("description"),
        url=raw.get("url") or "",
    )


def map_team(raw: dict[str, Any]) -> Team:
    return Team(
        id=_require_id(raw, "Team"),
        name=raw.get("name") or "",
        key=raw.get("key") or "",
        members=[m for m in (map_user(node) for node in _nodes(raw.get("members"))) if m is not None],
        states=[map_state(node) for node in _nodes(raw.get("states"))],
        labels=[map_label(node) for node in _nodes(raw.get("labels"))],
    )


def issues_to_dataframe(issues: Iterable[Issue]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "id": i.id,
                "identifier": i.identifier,
                "title": i.title,
                "priority": i.priority,
                "priority_label": i.priority_label or priority_label(i.priority),
                "estimate": i.estimate,
                "state_name": i.state.name,
                "state_type": i.state.type,
                "state_color": i.state.color,
                "assignee_id": i.assignee.id if i.assignee else None,
                "assignee": i.assignee.name if i.assignee else "Unassigned",
                "created_at": i.created_at,
                "updated_at": i.updated_at,
                "started_at": i.started_at,
                "completed_at": i.completed_at,
                "canceled_at": i.canceled_at,
                "archived_at": i.archived_at,
                "due_date": i.due_date,
                "labels": [label.name for label in i.labels],
            }
        )
    df = pd.DataFrame(rows)
    if "labels" in df.columns:

        def _format_labels(val):
            if not val:
                return ""
            unique = {v for v in val if v}
            return ", ".join(sorted(unique, key=lambda s: s.lower()))

        df["labels"] = df["labels"].apply(_format_labels)
    for col in ("created_at", "updated_at", "started_at", "completed_at", "canceled_at", "archived_at", "due_date"):
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], utc=True, errors="coerce")
    return df
