"""
Pairwise Pearson correlation between numeric columns.

The matrix is materialized in full (both triangles and the diagonal) so the
heatmap and the CSV export can read any cell directly.

Each pair uses the first n numeric values of each column, in row order,
where n is the smaller of the two columns' numeric counts. Nulls are not
matched up row by row, so when two columns have nulls on different rows the
paired values can come from different rows.
"""
from typing import Sequence
import numpy as np

from eda_backend.models import CorrelationMatrix, TypedRow
from eda_backend.services.inference import numeric_values


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient over the first min(len(x), len(y)) values.

    Returns 0.0 when fewer than two values can be paired or when either
    side has zero variance.

    Args:
        x: Numbers of the first column
        y: Numbers of the second column

    Returns:
        Correlation in [-1, 1], or 0.0 for the degenerate cases
    """
    n = min(len(x), len(y))
    if n < 2:
        return 0.0

    xs = np.asarray(x[:n], dtype=float)
    ys = np.asarray(y[:n], dtype=float)
    x_diff = xs - xs.mean()
    y_diff = ys - ys.mean()

    numerator = float(np.sum(x_diff * y_diff))
    denominator = float(np.sqrt(np.sum(x_diff * x_diff) * np.sum(y_diff * y_diff)))
    if denominator == 0:
        return 0.0
    # Rounding can land a hair outside [-1, 1] for perfectly linear data
    return max(-1.0, min(1.0, numerator / denominator))


def compute_correlations(rows: Sequence[TypedRow], numeric_columns: Sequence[str]) -> CorrelationMatrix:
    """
    Build the full correlation matrix over the numeric columns.

    The diagonal is exactly 1.0 regardless of the data. Off-diagonal cells
    are computed independently for each ordered pair.

    Args:
        rows: Typed rows of the dataset
        numeric_columns: Names of the numeric columns, in column order

    Returns:
        Nested dict: column -> column -> coefficient
    """
    values = {col: numeric_values(rows, col) for col in numeric_columns}

    matrix: CorrelationMatrix = {}
    for col1 in numeric_columns:
        matrix[col1] = {}
        for col2 in numeric_columns:
            if col1 == col2:
                matrix[col1][col2] = 1.0
            else:
                matrix[col1][col2] = pearson(values[col1], values[col2])
    return matrix
