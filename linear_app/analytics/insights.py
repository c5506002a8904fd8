"""Rule-based advisory messages derived from the computed metrics.

Each rule is independent and compares one metric against the fixed
THRESHOLDS in config.py. When no rule fires a single success message is
returned so the dashboard always has something to show.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from linear_app.analytics.aggregations.assignee import wip_by_member
from linear_app.core.config import BUG_LABEL, THRESHOLDS
from linear_app.core.models import InsightMessage, Issue, KpiMetrics, User
from linear_app.core.status import is_completed_state

logger = logging.getLogger(__name__)

DANGER = "danger"
WARNING = "warning"
INFO = "info"
SUCCESS = "success"


def carryover_insight(carryover_rate: float) -> InsightMessage | None:
    limits = THRESHOLDS["carryover_rate"]
    if carryover_rate > limits["danger"]:
        return InsightMessage(
            DANGER,
            "High carryover rate",
            f"Carryover rate is {carryover_rate:.0f}%. Consider revisiting estimation accuracy.",
        )
    if carryover_rate > limits["warning"]:
        return InsightMessage(
            WARNING,
            "Watch the carryover rate",
            f"Carryover rate is {carryover_rate:.0f}%. Review how tasks are prioritized.",
        )
    return None


def scope_creep_insight(scope_creep: float) -> InsightMessage | None:
    limits = THRESHOLDS["scope_creep"]
    if scope_creep > limits["danger"]:
        return InsightMessage(
            DANGER,
            "Scope creep detected",
            f"Scope grew by {scope_creep:.0f}% during the cycle. Consider clarifying requirements.",
        )
    if scope_creep > limits["warning"]:
        return InsightMessage(
            WARNING,
            "Scope is trending up",
            f"Scope grew by {scope_creep:.0f}% during the cycle.",
        )
    return None


def wip_insights(issues: Sequence[Issue], members: Sequence[User]) -> list[InsightMessage]:
    """One danger message per member holding more started issues than the WIP limit."""
    limit = THRESHOLDS["wip_per_member"]["danger"]
    names = {m.id: m.name for m in members}
    out = []
    for member_id, wip in wip_by_member(issues).items():
        if wip > limit:
            name = names.get(member_id) or "A member"
            out.append(
                InsightMessage(
                    DANGER,
                    "WIP limit exceeded",
                    f"{name} has {wip} issues in progress. Consider redistributing the work.",
                )
            )
    return out


def cycle_time_insight(average: float, previous: float | None) -> InsightMessage | None:
    if not previous:
        return None
    if average < previous * THRESHOLDS["cycle_time_multiplier"]["warning"]:
        return None
    increase = (average / previous) * 100 - 100
    return InsightMessage(
        WARNING,
        "Cycle time is increasing",
        f"Average cycle time is up {increase:.0f}% on the previous period. Check for blockers.",
    )


def bug_rate(issues: Sequence[Issue]) -> float:
    """Percentage of completed-state issues labelled as bugs (0 when none completed)."""
    completed = [i for i in issues if is_completed_state(i)]
    if not completed:
        return 0.0
    bugs = [i for i in completed if any(label.name.lower() == BUG_LABEL for label in i.labels)]
    return len(bugs) / len(completed) * 100


def bug_rate_insight(rate: float) -> InsightMessage | None:
    if rate > THRESHOLDS["bug_rate"]["danger"]:
        return InsightMessage(
            DANGER,
            "High bug rate",
            f"Bugs make up {rate:.0f}% of completed work. Consider quality improvements.",
        )
    return None


def generate_insights(
    kpi: KpiMetrics,
    scope_creep: float,
    issues: Sequence[Issue],
    members: Sequence[User],
) -> list[InsightMessage]:
    insights: list[InsightMessage] = []
    for insight in (
        carryover_insight(kpi.carryover_rate),
        scope_creep_insight(scope_creep),
    ):
        if insight is not None:
            insights.append(insight)
    insights.extend(wip_insights(issues, members))
    for insight in (
        cycle_time_insight(kpi.average_cycle_time, kpi.previous_average_cycle_time),
        bug_rate_insight(bug_rate(issues)),
    ):
        if insight is not None:
            insights.append(insight)

    if not insights:
        insights.append(
            InsightMessage(
                SUCCESS,
                "All metrics normal",
                "All current metrics are within normal ranges. Keep it up.",
            )
        )
    logger.debug("Generated %d insights", len(insights))
    return insights
