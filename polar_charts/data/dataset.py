"""
Ingestion of the data to be plotted.

This module turns the caller's data (a pandas DataFrame, an xarray object or
plain records) into a `Dataset`: a DataFrame whose coordinate columns carry
the canonical names `lat` and `lon`, together with the statistical type of
every column, determined once here and carried explicitly afterwards.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional

import pandas as pd
import xarray as xr
from pandas.api import types as ptypes

from ..constants import COORDINATE_ALIASES, LAT_COLUMN, LON_COLUMN
from ..exceptions import SchemaError

logger = logging.getLogger("polar_charts.data.dataset")


class ColumnKind(Enum):
    """Statistical type of a column, which drives the choice of colour scale."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


def classify_column(values: pd.Series) -> Optional[ColumnKind]:
    """
    Determine the statistical type of a column.

    Booleans are treated as categorical. Columns of any other type (dates,
    durations, ...) are left unclassified and get no automatic colour scale.

    Args:
        values: Column to classify

    Returns:
        ColumnKind, or None when the column is neither numeric nor categorical
    """
    if isinstance(values.dtype, pd.CategoricalDtype):
        return ColumnKind.CATEGORICAL
    if ptypes.is_bool_dtype(values):
        return ColumnKind.CATEGORICAL
    if ptypes.is_numeric_dtype(values):
        return ColumnKind.NUMERIC
    if ptypes.is_object_dtype(values) or ptypes.is_string_dtype(values):
        return ColumnKind.CATEGORICAL
    return None


def as_dataframe(data: Any) -> pd.DataFrame:
    """
    Convert supported inputs to a DataFrame with one row per record.

    Accepts a DataFrame (copied), an xarray Dataset or named DataArray
    (coordinates become columns) or anything pandas can build a frame from
    (list of dicts, dict of columns, ...).

    Raises:
        SchemaError: If the input cannot be interpreted as a table
    """
    if isinstance(data, pd.DataFrame):
        return data.copy()
    if isinstance(data, xr.DataArray):
        name = data.name if data.name is not None else "value"
        return data.to_dataframe(name=name).reset_index()
    if isinstance(data, xr.Dataset):
        return data.to_dataframe().reset_index()
    try:
        return pd.DataFrame(data)
    except (TypeError, ValueError) as e:
        raise SchemaError(f"Cannot build a table from {type(data).__name__}: {e}") from e


def normalize_coordinates(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Rename latitude/longitude columns to the canonical `lat` and `lon`.

    Column names are matched case-insensitively against the accepted
    aliases ("lat"/"latitude", "lon"/"long"/"longitude").

    Raises:
        SchemaError: If either coordinate cannot be found, or is found more
            than once. The message lists the actual column names.
    """
    columns = [str(c) for c in frame.columns]
    renames: Dict[Any, str] = {}

    for canonical, aliases in COORDINATE_ALIASES.items():
        matches = [c for c, name in zip(frame.columns, columns) if name.lower() in aliases]
        if len(matches) > 1:
            raise SchemaError(
                f"Several columns could be {canonical}: {', '.join(map(str, matches))}\n"
                f"You have {', '.join(columns)}"
            )
        if matches:
            renames[matches[0]] = canonical

    if set(renames.values()) != {LAT_COLUMN, LON_COLUMN}:
        raise SchemaError(
            "Need two columns named lat and lon to be able to plot\n"
            f"You have {', '.join(columns)}"
        )

    return frame.rename(columns=renames)


def require_coordinates(frame: pd.DataFrame) -> None:
    """Raise SchemaError if the canonical coordinate columns are missing."""
    missing = [c for c in (LAT_COLUMN, LON_COLUMN) if c not in frame.columns]
    if missing:
        raise SchemaError(
            f"Missing coordinate column(s) {', '.join(missing)}. "
            f"You have {', '.join(map(str, frame.columns))}"
        )


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Records to plot, with canonical coordinate names and typed columns.

    Attributes:
        frame: One row per record, with `lat` and `lon` columns
        kinds: Statistical type of every column (None when unclassified)
    """

    frame: pd.DataFrame
    kinds: Mapping[str, Optional[ColumnKind]] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, data: Any) -> "Dataset":
        """Ingest raw data: convert, normalise coordinate names and classify columns."""
        frame = normalize_coordinates(as_dataframe(data))
        kinds = {str(c): classify_column(frame[c]) for c in frame.columns}
        logger.debug(
            f"Ingested {len(frame)} records with columns "
            f"{', '.join(f'{c}:{k.value if k else None}' for c, k in kinds.items())}"
        )
        return cls(frame=frame, kinds=kinds)

    def with_frame(self, frame: pd.DataFrame) -> "Dataset":
        """Return a Dataset over a filtered frame, keeping the column kinds."""
        require_coordinates(frame)
        return Dataset(frame=frame, kinds=self.kinds)

    def kind_of(self, column: str) -> Optional[ColumnKind]:
        return self.kinds.get(column)

    def require_columns(self, columns: Iterable[str]) -> None:
        """
        Check that every column exists.

        Raises:
            SchemaError: Listing the missing and the actual columns
        """
        missing = [c for c in columns if c not in self.frame.columns]
        if missing:
            raise SchemaError(
                f"Mapped column(s) not found: {', '.join(missing)}\n"
                f"You have {', '.join(map(str, self.frame.columns))}"
            )

    @property
    def is_empty(self) -> bool:
        return len(self.frame) == 0

    def __len__(self) -> int:
        return len(self.frame)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return dict(self.kinds) == dict(other.kinds) and self.frame.equals(other.frame)
