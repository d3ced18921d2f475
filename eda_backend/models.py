"""
Pydantic models for data structures used throughout the application.

These models define the schema for:
- Typed cell values and column type assignments
- Per-column summary statistics and the correlation matrix
- The profile result consumed by the dashboard and export layers
- Histogram and preview API response models
"""
from enum import Enum
from typing import List, Optional, Dict, Any, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# A raw record as produced by the CSV parser: column name -> cell text
RawRecord = Dict[str, Any]

# float is Number, str is Text, None is Null
TypedValue = Union[float, str, None]
TypedRow = Dict[str, TypedValue]

# Outer key and inner key are both numeric column names
CorrelationMatrix = Dict[str, Dict[str, float]]


class ColumnType(str, Enum):
    """Classification of a column based on its value composition."""
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class _FrozenModel(BaseModel):
    """Immutable model serialised with camelCase keys for the dashboard."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ColumnStats(_FrozenModel):
    """Summary statistics for a single column.

    Numeric fields stay None for categorical columns and for numeric columns
    without any numeric value; mode stays None for numeric columns.
    """
    name: str
    type: ColumnType
    count: int
    null_count: int
    unique_count: int
    mean: Optional[float] = None
    median: Optional[float] = None
    std: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    mode: Optional[str] = None


class ProfileResult(_FrozenModel):
    """Everything the dashboard renders for one uploaded dataset.

    Fields cannot be reassigned, but the freeze is shallow: the row dicts and
    the nested correlation dicts are plain containers. Each profile() call
    builds its own copies, so a consumer editing them affects only that result.
    """
    rows: List[TypedRow] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    numeric_columns: List[str] = Field(default_factory=list)
    categorical_columns: List[str] = Field(default_factory=list)
    stats: List[ColumnStats] = Field(default_factory=list)
    correlations: CorrelationMatrix = Field(default_factory=dict)

    @classmethod
    def empty(cls) -> "ProfileResult":
        return cls()

    def stats_for(self, column: str) -> ColumnStats:
        """Look up the stats of a column by name."""
        for stat in self.stats:
            if stat.name == column:
                return stat
        raise KeyError(column)


# ============================================================================
# Distribution Models
# ============================================================================

class HistogramBin(_FrozenModel):
    label: str
    start: float
    end: float
    midpoint: float
    count: int


class Histogram(_FrozenModel):
    column: str
    value_count: int
    bins: List[HistogramBin] = Field(default_factory=list)


# ============================================================================
# API Response Models
# ============================================================================

class RowPage(_FrozenModel):
    """One page of the typed row preview."""
    rows: List[TypedRow]
    page: int
    per_page: int
    total_pages: int
    total_rows: int
