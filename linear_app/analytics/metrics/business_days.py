"""Business-day arithmetic (pure functions).

Every "N days" metric in the dashboard is measured in business days: weekends
never count and no holiday calendar is applied.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta

import numpy as np
import pytz

from linear_app.core.config import TIMEZONE

ONE_DAY = timedelta(days=1)


def local_tz(tz=None):
    if tz is None:
        return pytz.timezone(TIMEZONE)
    if isinstance(tz, str):
        return pytz.timezone(tz)
    return tz


def to_local(value: datetime | None, tz=None) -> datetime | None:
    """Convert a datetime into the dashboard timezone.

    Naive values are assumed to be UTC. Returns None for None.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = pytz.UTC.localize(value)
    return value.astimezone(local_tz(tz))


def now_local(tz=None) -> datetime:
    return datetime.now(tz=local_tz(tz))


def business_days_between(start: datetime | None, end: datetime | None, *, tz=None) -> int:
    """Count weekdays stepped over when walking from ``start`` towards ``end``.

    Starting at ``start`` and advancing one calendar day at a time while the
    cursor is still before ``end``, each cursor position that falls on Monday
    to Friday (in the dashboard timezone) counts once.

    Parameters
    ----------
    start, end : datetime or None
        Span boundaries. Missing values yield 0.
    tz : timezone or str, optional
        Zone used to decide weekdays; defaults to config.TIMEZONE.

    Returns
    -------
    int
        Number of business days, 0 when ``start >= end``.

    Examples
    --------
    >>> from datetime import datetime
    >>> business_days_between(datetime(2024, 1, 1), datetime(2024, 1, 8))
    5
    """
    if start is None or end is None:
        return 0
    start_local = to_local(start, tz)
    end_local = to_local(end, tz)
    if start_local >= end_local:
        return 0
    # Day steps keep the start's wall-clock time
    span = end_local.replace(tzinfo=None) - start_local.replace(tzinfo=None)
    if span <= timedelta(0):
        return 0
    whole_days, remainder = divmod(span, ONE_DAY)
    steps = whole_days + (1 if remainder else 0)
    first = np.datetime64(start_local.date(), "D")
    return int(np.busday_count(first, first + np.timedelta64(steps, "D")))


def start_of_day(day, tz=None) -> datetime:
    """Midnight of ``day`` in the dashboard timezone."""
    return local_tz(tz).localize(datetime.combine(day, time.min))


def end_of_day(day, tz=None) -> datetime:
    """Last representable instant of ``day`` in the dashboard timezone."""
    return local_tz(tz).localize(datetime.combine(day, time.max))
