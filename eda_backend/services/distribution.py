"""
Histogram binning for numeric columns.

Bins are uniform-width over [min, max] of the column's numbers. The bin
count grows with the square root of the value count, clamped to
[HISTOGRAM_MIN_BINS, HISTOGRAM_MAX_BINS].
"""
import math
from typing import List

from eda_backend import config
from eda_backend.models import Histogram, HistogramBin, ProfileResult
from eda_backend.services.inference import numeric_values


def bin_count(value_count: int) -> int:
    """Number of bins for a column holding value_count numbers."""
    # Round half up, as the dashboard does
    suggested = int(math.floor(math.sqrt(value_count) + 0.5))
    return min(config.HISTOGRAM_MAX_BINS, max(config.HISTOGRAM_MIN_BINS, suggested))


def histogram_bins(values: List[float]) -> List[HistogramBin]:
    """
    Count values into uniform-width bins.

    The maximum value lands in the last bin. When all values are equal the
    width is zero and every value lands in the first bin.

    Args:
        values: Numbers to bin

    Returns:
        List of HistogramBin, empty when there are no values
    """
    if not values:
        return []

    lo = min(values)
    hi = max(values)
    bins = bin_count(len(values))
    width = (hi - lo) / bins

    counts = [0] * bins
    for value in values:
        index = math.floor((value - lo) / width) if width > 0 else 0
        counts[min(index, bins - 1)] += 1

    result = []
    for i, count in enumerate(counts):
        start = lo + i * width
        end = lo + (i + 1) * width
        result.append(
            HistogramBin(
                label=f"{start:.2f}-{end:.2f}",
                start=start,
                end=end,
                midpoint=lo + (i + 0.5) * width,
                count=count,
            )
        )
    return result


def build_histogram(result: ProfileResult, column: str) -> Histogram:
    """
    Build the histogram of one numeric column of a profile.

    Raises:
        KeyError: If the column is not a numeric column of the profile
    """
    if column not in result.numeric_columns:
        raise KeyError(column)

    values = numeric_values(result.rows, column)
    return Histogram(column=column, value_count=len(values), bins=histogram_bins(values))


def build_histograms(result: ProfileResult) -> List[Histogram]:
    """One histogram per numeric column, in column order."""
    return [build_histogram(result, col) for col in result.numeric_columns]
