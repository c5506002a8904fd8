"""Assignee-based aggregations."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from linear_app.analytics.metrics.cycle_time import cycle_time
from linear_app.core.mappers import issues_to_dataframe
from linear_app.core.models import Issue, MemberWorkload, User


def _workload_frame(issues: Sequence[Issue]) -> pd.DataFrame:
    df = issues_to_dataframe(issues)
    if df.empty:
        return df
    out = df[df["archived_at"].isna() & df["assignee_id"].notna()].copy()
    out["cycle_time"] = pd.Series([cycle_time(i) for i in issues], index=df.index, dtype=float)
    out["estimate_value"] = pd.to_numeric(out["estimate"], errors="coerce").fillna(0)
    out["is_completed"] = out["state_type"].eq("completed")
    out["is_started"] = out["state_type"].eq("started")
    out["completed_estimate"] = out["estimate_value"].where(out["is_completed"], 0)
    out["completed_cycle_time"] = out["cycle_time"].where(out["is_completed"])
    return out


def aggregate_by_assignee(issues: Sequence[Issue]) -> pd.DataFrame:
    """Per-assignee counts and estimate sums over non-archived issues, indexed by user id."""
    out = _workload_frame(issues)
    if out.empty:
        return pd.DataFrame()
    return out.groupby("assignee_id").agg(
        assigned=("id", "count"),
        completed=("is_completed", "sum"),
        in_progress=("is_started", "sum"),
        total_estimate=("estimate_value", "sum"),
        completed_estimate=("completed_estimate", "sum"),
        average_cycle_time=("completed_cycle_time", "mean"),
    )


def calculate_member_workload(issues: Sequence[Issue], members: Sequence[User]) -> list[MemberWorkload]:
    agg = aggregate_by_assignee(list(issues))
    out: list[MemberWorkload] = []
    for member in members:
        if member.id not in agg.index:
            out.append(MemberWorkload(member, 0, 0, 0, 0.0, 0.0, None))
            continue
        row = agg.loc[member.id]
        average = row["average_cycle_time"]
        out.append(
            MemberWorkload(
                user=member,
                assigned_count=int(row["assigned"]),
                completed_count=int(row["completed"]),
                in_progress_count=int(row["in_progress"]),
                total_estimate=float(row["total_estimate"]),
                completed_estimate=float(row["completed_estimate"]),
                average_cycle_time=None if pd.isna(average) else float(average),
            )
        )
    return out


def wip_by_member(issues: Sequence[Issue]) -> pd.Series:
    """Started-state issue count per assignee id (unassigned issues skipped)."""
    df = issues_to_dataframe(issues)
    if df.empty:
        return pd.Series(dtype=int)
    started = df[df["state_type"].eq("started") & df["assignee_id"].notna()]
    return started.groupby("assignee_id")["id"].count()
