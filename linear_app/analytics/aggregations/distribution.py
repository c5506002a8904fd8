"""Status and priority distributions of the team's issues."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from linear_app.core.config import PRIORITY_CONFIG, PRIORITY_DISPLAY_ORDER, TERMINAL_STATE_TYPES
from linear_app.core.mappers import issues_to_dataframe
from linear_app.core.models import Issue, PriorityDistribution, StatusDistribution


def _active(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return df
    return df[df["archived_at"].isna()]


def calculate_status_distribution(issues: Iterable[Issue]) -> list[StatusDistribution]:
    """Count non-archived issues per workflow state name.

    Output follows first-seen order; type and color come from the first issue
    seen in each state.
    """
    active = _active(issues_to_dataframe(issues))
    if active.empty:
        return []
    agg = (
        active.groupby("state_name", sort=False)
        .agg(
            state_type=("state_type", "first"),
            state_color=("state_color", "first"),
            issues=("id", "count"),
        )
        .reset_index()
    )
    return [
        StatusDistribution(name=row.state_name, type=row.state_type, color=row.state_color, count=int(row.issues))
        for row in agg.itertuples(index=False)
    ]


def calculate_priority_distribution(issues: Iterable[Issue]) -> list[PriorityDistribution]:
    """Count open issues per priority in the fixed Urgent..Low, None order."""
    active = _active(issues_to_dataframe(issues))
    if active.empty:
        return []
    open_df = active[~active["state_type"].isin(TERMINAL_STATE_TYPES)]
    counts = open_df["priority"].value_counts().reindex(list(PRIORITY_DISPLAY_ORDER), fill_value=0)
    return [
        PriorityDistribution(
            priority=int(priority),
            label=PRIORITY_CONFIG[priority]["label"],
            count=int(count),
            color=PRIORITY_CONFIG[priority]["color"],
        )
        for priority, count in counts.items()
        if count > 0
    ]
