"""Central configuration, constants, and thresholds shared by the metrics engine."""

from __future__ import annotations

from collections.abc import Sequence

# =============================================================================
# Time Settings
# =============================================================================
# Wall-clock zone used for weekday checks and day boundaries
TIMEZONE = "UTC"

# =============================================================================
# Workflow State Configuration
# =============================================================================
STATE_TYPES: Sequence[str] = (
    "triage",
    "backlog",
    "unstarted",
    "started",
    "completed",
    "canceled",
)

# State types that count as "not yet started"
UNSTARTED_STATE_TYPES: frozenset[str] = frozenset({"triage", "backlog", "unstarted"})

# State types that close an issue
TERMINAL_STATE_TYPES: frozenset[str] = frozenset({"completed", "canceled"})

STATUS_COLORS: dict[str, str] = {
    "triage": "hsl(var(--chart-5))",
    "backlog": "hsl(var(--muted-foreground))",
    "unstarted": "hsl(var(--chart-1))",
    "started": "hsl(var(--chart-3))",
    "completed": "hsl(var(--chart-2))",
    "canceled": "hsl(var(--destructive))",
}

# =============================================================================
# Priority Configuration
# =============================================================================
PRIORITY_CONFIG: dict[int, dict[str, str]] = {
    0: {"label": "No Priority", "color": "hsl(var(--muted-foreground))"},
    1: {"label": "Urgent", "color": "hsl(0, 84%, 60%)"},
    2: {"label": "High", "color": "hsl(25, 95%, 53%)"},
    3: {"label": "Normal", "color": "hsl(221, 83%, 53%)"},
    4: {"label": "Low", "color": "hsl(var(--muted-foreground))"},
}

# Urgent first, "No Priority" last
PRIORITY_DISPLAY_ORDER: Sequence[int] = (1, 2, 3, 4, 0)

HIGH_PRIORITIES: frozenset[int] = frozenset({1, 2})


def normalize_priority(value) -> int:
    """Coerce a raw priority value onto the 0-4 scale.

    Parameters
    ----------
    value : int, str or None
        Raw priority from the API.

    Returns
    -------
    int
        The priority, or 0 ("No Priority") for missing or out-of-range values.
    """
    if value is None:
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    return number if number in PRIORITY_CONFIG else 0


def priority_label(priority: int) -> str:
    return PRIORITY_CONFIG[normalize_priority(priority)]["label"]


# =============================================================================
# Insight Thresholds
# =============================================================================
THRESHOLDS: dict[str, dict[str, float]] = {
    "carryover_rate": {"warning": 20, "danger": 30},
    "scope_creep": {"warning": 10, "danger": 20},
    "wip_per_member": {"warning": 3, "danger": 5},
    "cycle_time_multiplier": {"warning": 1.5, "danger": 2.0},
    "bug_rate": {"warning": 20, "danger": 30},
}

BUG_LABEL = "bug"

# =============================================================================
# Metric Windows (days)
# =============================================================================
THROUGHPUT_WINDOW_DAYS: int = 7
CYCLE_TIME_WINDOW_DAYS: int = 30
DEFAULT_CFD_DAYS: int = 30
DEFAULT_HISTOGRAM_BINS: int = 10
STALE_WIP_BUSINESS_DAYS: int = 5
WEEKLY_REVIEW_DAYS: int = 7

# Timeline fallbacks for projects missing dates
TIMELINE_START_FALLBACK_DAYS: int = 90
TIMELINE_END_FALLBACK_DAYS: int = 30

# =============================================================================
# Refresh Configuration (milliseconds)
# =============================================================================
REFRESH_INTERVALS: dict[str, int] = {
    "auto": 5 * 60 * 1000,
    "stale_time": 2 * 60 * 1000,
    "gc_time": 10 * 60 * 1000,
}

REFRESH_OPTIONS: Sequence[tuple[int, str]] = (
    (60_000, "1 min"),
    (300_000, "5 min"),
    (900_000, "15 min"),
    (0, "Disabled"),
)

# =============================================================================
# Auth Lifetimes (seconds)
# =============================================================================
OAUTH_STATE_TTL: int = 10 * 60
SESSION_TTL: int = 7 * 24 * 60 * 60
