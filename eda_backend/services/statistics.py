"""
Per-column summary statistics.

For every column this module computes counts (non-null, null, distinct) and:
- Numeric columns: mean, median, population standard deviation, min, max
- Categorical columns: mode (most frequent value)

Text values inside a numeric column are counted but left out of the
numeric statistics.
"""
from typing import Dict, List, Optional, Sequence
import numpy as np

from eda_backend.models import ColumnStats, ColumnType, TypedRow, TypedValue
from eda_backend.services.inference import column_values, display_value, value_key


def median_upper(values: Sequence[float]) -> float:
    """
    Middle element of the sorted values, at index floor(n / 2).

    For an even count this is the upper of the two middle elements, not
    their average.
    """
    ordered = np.sort(np.asarray(values, dtype=float))
    return float(ordered[len(ordered) // 2])


def numeric_summary(values: Sequence[float]) -> Dict[str, float]:
    """
    Compute mean, median, std, min and max of a non-empty list of numbers.

    Args:
        values: Numbers of the column (at least one)

    Returns:
        Dictionary with keys "mean", "median", "std", "min", "max"
    """
    arr = np.asarray(values, dtype=float)
    lo = float(arr.min())
    hi = float(arr.max())
    # Rounding can push the mean of near-equal values just outside [min, max]
    mean = float(np.clip(arr.mean(), lo, hi))
    # Population standard deviation (divide by n)
    std = float(np.sqrt(np.mean((arr - mean) ** 2)))

    return {
        "mean": mean,
        "median": median_upper(arr),
        "std": std,
        "min": lo,
        "max": hi,
    }


def find_mode(values: Sequence[TypedValue]) -> Optional[str]:
    """
    Most frequent non-null value, compared by its displayed text.

    All values are counted first. The counts are then scanned in order of
    first appearance, so on a tie the value seen first in the column wins.

    Args:
        values: Typed values of the column, nulls included

    Returns:
        Displayed text of the mode, or None when there are no values
    """
    frequency: Dict[str, int] = {}
    for value in values:
        if value is None:
            continue
        key = display_value(value)
        frequency[key] = frequency.get(key, 0) + 1

    mode: Optional[str] = None
    max_count = 0
    for key, count in frequency.items():
        if count > max_count:
            max_count = count
            mode = key

    return mode


def column_stats(name: str, values: Sequence[TypedValue], column_type: ColumnType) -> ColumnStats:
    """
    Build the ColumnStats of one column.

    Args:
        name: Column name
        values: All typed values of the column, in row order
        column_type: Classification of the column

    Returns:
        ColumnStats; numeric fields are left unset when the column has no numbers
    """
    present = [value for value in values if value is not None]
    fields = {
        "name": name,
        "type": column_type,
        "count": len(present),
        "null_count": len(values) - len(present),
        "unique_count": len({value_key(value) for value in present}),
    }

    if column_type == ColumnType.NUMERIC:
        numbers = [value for value in present if isinstance(value, float)]
        if numbers:
            fields.update(numeric_summary(numbers))
    else:
        fields["mode"] = find_mode(present)

    return ColumnStats(**fields)


def compute_column_stats(
    rows: Sequence[TypedRow],
    columns: Sequence[str],
    assignment: Dict[str, ColumnType],
) -> List[ColumnStats]:
    """
    Compute statistics for every column, in column order.

    Args:
        rows: Typed rows of the dataset
        columns: Column names in original order
        assignment: Column name -> ColumnType

    Returns:
        One ColumnStats per column
    """
    return [column_stats(col, column_values(rows, col), assignment[col]) for col in columns]
