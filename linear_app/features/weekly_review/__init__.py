"""Weekly review feature module: last week's completed work and progress notes."""

from linear_app.features.weekly_review.context import (
    AssigneeSummary,
    CompletedIssue,
    DayGroup,
    WeeklyReviewContext,
    build_weekly_review,
    review_window_start,
    weekly_markdown,
)

__all__ = [
    "AssigneeSummary",
    "CompletedIssue",
    "DayGroup",
    "WeeklyReviewContext",
    "build_weekly_review",
    "review_window_start",
    "weekly_markdown",
]
