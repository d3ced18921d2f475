"""
Dataset profiling entry point.

This module runs the whole analysis over parsed CSV records:
- Type inference and column classification
- Per-column summary statistics
- Pairwise correlations between numeric columns

The result is a new, immutable ProfileResult on every call. Nothing is
cached between uploads.
"""
from typing import Sequence

from eda_backend.models import ColumnType, ProfileResult, RawRecord
from eda_backend.services.correlation import compute_correlations
from eda_backend.services.inference import infer_types
from eda_backend.services.statistics import compute_column_stats


def profile(records: Sequence[RawRecord]) -> ProfileResult:
    """
    Profile a dataset.

    Pure and deterministic: the same records in the same order always give
    an equal result. Records are not modified.

    Args:
        records: Parsed CSV rows (column name -> cell text). The column set
                 is taken from the first record.

    Returns:
        ProfileResult with typed rows, column partition, stats and correlations.
        An empty input gives the empty result.
    """
    # Handle empty input
    if not records:
        return ProfileResult.empty()

    columns, rows, assignment = infer_types(records)

    numeric_columns = [col for col in columns if assignment[col] == ColumnType.NUMERIC]
    categorical_columns = [col for col in columns if assignment[col] == ColumnType.CATEGORICAL]

    stats = compute_column_stats(rows, columns, assignment)
    correlations = compute_correlations(rows, numeric_columns)

    return ProfileResult(
        rows=rows,
        columns=columns,
        numeric_columns=numeric_columns,
        categorical_columns=categorical_columns,
        stats=stats,
        correlations=correlations,
    )
