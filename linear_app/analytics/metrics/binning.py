"""Percentile and histogram binning utilities.

This module provides the linear-interpolated percentile used across the
dashboard and the fixed-width lead-time histogram built on top of it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

import numpy as np

from linear_app.core.config import DEFAULT_HISTOGRAM_BINS
from linear_app.core.models import Issue, LeadTimeHistogram, LeadTimeHistogramBin

from .cycle_time import lead_time

logger = logging.getLogger(__name__)


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Linear-interpolated percentile of an ascending sequence.

    The rank is ``(p / 100) * (n - 1)`` (0-indexed). A rank landing exactly on
    an index returns that element; otherwise the value is interpolated
    between the floor and ceiling neighbours.

    Parameters
    ----------
    sorted_values : Sequence[float]
        Values already sorted ascending.
    p : float
        Percentile in [0, 100].

    Returns
    -------
    float
        The interpolated value.

    Raises
    ------
    ValueError
        If ``sorted_values`` is empty.
    """
    if len(sorted_values) == 0:
        raise ValueError("percentile of an empty sequence is undefined")
    return float(np.percentile(np.asarray(sorted_values, dtype=float), p, method="linear"))


def determine_bin_width(
    values: Sequence[float],
    *,
    target_bins: int = DEFAULT_HISTOGRAM_BINS,
    min_step: int = 1,
) -> int | None:
    """Calculate an integer bin width covering the observed range.

    Parameters
    ----------
    values : Sequence[float]
        Numeric values to bin (e.g., lead times in days).
    target_bins : int
        Desired number of bins.
    min_step : int
        Minimum bin width (default 1).

    Returns
    -------
    int or None
        ``max(ceil((max - min) / target_bins), min_step)``, or None if values
        are empty.
    """
    if len(values) == 0:
        return None
    value_range = float(max(values) - min(values))
    bins = max(target_bins, 1)
    return max(math.ceil(value_range / bins), min_step)


def calculate_lead_time_histogram(
    issues: Iterable[Issue],
    bin_count: int = DEFAULT_HISTOGRAM_BINS,
) -> LeadTimeHistogram:
    """Bucket lead times of completed issues into ``bin_count`` equal-width bins.

    Issues without a completion timestamp or with a zero lead time are
    ignored. Bins are half-open ``[min, max)`` intervals starting at the
    shortest observed lead time.
    """
    lead_times = sorted(lt for lt in (lead_time(i) for i in issues) if lt is not None and lt > 0)
    if not lead_times:
        return LeadTimeHistogram(bins=[], median=0, p85=0, p95=0)

    width = determine_bin_width(lead_times, target_bins=bin_count)
    low = lead_times[0]
    values = np.asarray(lead_times)
    bins: list[LeadTimeHistogramBin] = []
    for idx in range(bin_count):
        bin_min = low + idx * width
        bin_max = bin_min + width
        count = int(((values >= bin_min) & (values < bin_max)).sum())
        bins.append(LeadTimeHistogramBin(range=f"{bin_min}-{bin_max}", min=bin_min, max=bin_max, count=count))

    logger.debug("Lead-time histogram over %d issues, bin width %d", len(lead_times), width)
    return LeadTimeHistogram(
        bins=bins,
        median=percentile(lead_times, 50),
        p85=percentile(lead_times, 85),
        p95=percentile(lead_times, 95),
    )
