"""
Cell type coercion and column classification.

This module turns parsed CSV records into typed rows:
- Each cell becomes a Number (float), Text (str) or Null (None)
- Each column is classified as numeric or categorical from the share of
  its non-null values that are numbers

The column set is taken from the first record; later records missing a key
are treated as holding Null for that column.
"""
import math
from decimal import Decimal
import re
from typing import Any, Dict, List, Sequence, Tuple

from eda_backend import config
from eda_backend.models import ColumnType, RawRecord, TypedRow, TypedValue

# Full decimal numeral: optional sign, digits with optional fraction, optional exponent
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

NUMBER_TAG = "number"
TEXT_TAG = "text"


def coerce_cell(raw: Any) -> TypedValue:
    """
    Coerce a raw cell into a typed value.

    Empty strings, missing values and float NaN become None. A value whose
    text (ignoring surrounding whitespace) is a complete, finite decimal
    numeral becomes a float. Anything else is kept as its original text.

    Args:
        raw: Cell value from the parser (usually a string)

    Returns:
        float, str or None
    """
    if raw is None:
        return None
    if isinstance(raw, float) and math.isnan(raw):
        return None

    text = raw if isinstance(raw, str) else str(raw)
    if text == "":
        return None

    candidate = text.strip()
    if _DECIMAL_PATTERN.fullmatch(candidate):
        number = float(candidate)
        # "1e999" overflows to inf and stays text
        if math.isfinite(number):
            return number
    return text


def value_key(value: TypedValue) -> Tuple[str, Any]:
    """
    Build the composite (tag, value) key used to count distinct values.

    Keeps the number 3.0 and the text "3" apart.
    """
    if isinstance(value, float):
        return (NUMBER_TAG, value)
    return (TEXT_TAG, value)


def display_value(value: TypedValue) -> str:
    """
    Render a typed value the way the dashboard shows it.

    Integral numbers drop the trailing ".0" (3.0 -> "3"). Exponent notation
    is only used below 1e-6 or from 1e21 up, written without padding
    (1.5e-07 -> "1.5e-7", 1e+21 -> "1e+21").
    """
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        text = repr(value)
        if "e" not in text:
            return text
        mantissa, exponent = text.split("e")
        power = int(exponent)
        if -7 < power < 21:
            return format(Decimal(text), "f")
        return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
    return "" if value is None else value


def derive_columns(records: Sequence[RawRecord]) -> List[str]:
    """Column names of the dataset, in the first record's key order."""
    if not records:
        return []
    return list(records[0].keys())


def type_rows(records: Sequence[RawRecord], columns: Sequence[str]) -> List[TypedRow]:
    """Coerce every cell of every record, keeping row order."""
    return [{col: coerce_cell(record.get(col)) for col in columns} for record in records]


def column_values(rows: Sequence[TypedRow], column: str) -> List[TypedValue]:
    return [row.get(column) for row in rows]


def numeric_values(rows: Sequence[TypedRow], column: str) -> List[float]:
    """Non-null Number values of a column, in row order."""
    return [value for value in column_values(rows, column) if isinstance(value, float)]


def classify_column(values: Sequence[TypedValue]) -> ColumnType:
    """
    Classify a column from its typed values.

    A column is numeric only when it has at least one non-null value and
    strictly more than NUMERIC_RATIO_THRESHOLD of its non-null values are
    numbers. Exactly 80% numeric is categorical.

    Args:
        values: All typed values of the column, nulls included

    Returns:
        ColumnType.NUMERIC or ColumnType.CATEGORICAL
    """
    present = [value for value in values if value is not None]
    numbers = [value for value in present if isinstance(value, float)]

    if present and len(numbers) > len(present) * config.NUMERIC_RATIO_THRESHOLD:
        return ColumnType.NUMERIC
    return ColumnType.CATEGORICAL


def classify_columns(rows: Sequence[TypedRow], columns: Sequence[str]) -> Dict[str, ColumnType]:
    """Assign a ColumnType to every column, preserving column order."""
    return {col: classify_column(column_values(rows, col)) for col in columns}


def infer_types(
    records: Sequence[RawRecord],
) -> Tuple[List[str], List[TypedRow], Dict[str, ColumnType]]:
    """
    Type a whole dataset.

    Args:
        records: Parsed CSV records (column name -> raw cell)

    Returns:
        Tuple of (columns, typed rows, column type assignment).
        An empty input yields three empty structures.
    """
    columns = derive_columns(records)
    rows = type_rows(records, columns)
    assignment = classify_columns(rows, columns)
    return columns, rows, assignment
