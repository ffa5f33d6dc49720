"""
Precision-based spatial subsampling.

When a coarser precision than the one of the data is requested for latitude
or longitude, only the records lying on multiples of that precision are kept.
Values are never modified or combined: this is a filter, not a regridding or
an aggregation. When the requested precision is finer than the data, nothing
changes.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from ..constants import LAT_COLUMN, LON_COLUMN
from ..data.dataset import require_coordinates
from ..exceptions import InvalidParameterError

logger = logging.getLogger("polar_charts.calculations.subsample")

# Snapped values are rounded to this many decimals so that e.g. 3 * 0.1
# compares equal to 0.3 in the data.
SNAP_DECIMALS = 10


@dataclass(frozen=True)
class Precision:
    """
    Precision (in degrees) at which latitude and longitude are considered.

    None on an axis means that axis is left untouched.
    """

    lat: Optional[float] = None
    lon: Optional[float] = None

    def __post_init__(self):
        for axis, value in ((LAT_COLUMN, self.lat), (LON_COLUMN, self.lon)):
            if value is None:
                continue
            if not np.isfinite(value) or value <= 0:
                raise InvalidParameterError(f"{axis} precision must be a positive number, got {value}")

    @property
    def is_set(self) -> bool:
        return self.lat is not None or self.lon is not None


def round_any(values, accuracy: float) -> np.ndarray:
    """
    Round values to the nearest multiple of `accuracy`.

    Ties are rounded away from zero (0.25 -> 0.5 and -0.25 -> -0.5 for an
    accuracy of 0.5). NaN stays NaN.

    Example:
        >>> round_any([-77.3, -76.1, 12.5], 1.0)
        array([-77., -76.,  13.])
    """
    values = np.asarray(values, dtype=float)
    snapped = np.sign(values) * np.floor(np.abs(values) / accuracy + 0.5) * accuracy
    return np.round(snapped, SNAP_DECIMALS)


def _filter_axis(frame: pd.DataFrame, column: str, precision: float) -> pd.DataFrame:
    values = frame[column].to_numpy(dtype=float)
    distinct = pd.unique(values)
    # NB: when the precision in the original data is coarser, nothing changes
    snapped = np.unique(round_any(distinct, precision))
    # compare at the snapping resolution, records keep their original values
    kept = frame[np.isin(np.round(values, SNAP_DECIMALS), snapped)]
    logger.debug(
        f"{column} precision {precision}: {len(distinct)} distinct values, "
        f"{len(snapped)} on the grid, kept {len(kept)}/{len(frame)} records"
    )
    return kept


def subsample(frame: pd.DataFrame, precision: Optional[Precision] = None) -> pd.DataFrame:
    """
    Keep only the records lying on the requested lat/lon precision.

    For each axis with a precision, the distinct coordinate values are
    rounded to the nearest multiple of the precision and the records whose
    coordinate is one of those rounded values are kept. Latitude is filtered
    first, then longitude on what remains.

    Args:
        frame: Records with canonical `lat` and `lon` columns
        precision: Precision per axis; None or an unset axis leaves it untouched

    Returns:
        Filtered copy of the records, in their original order and index

    Raises:
        SchemaError: If lat/lon columns are missing

    Example:
        >>> sub = subsample(df, Precision(lat=2.0))
        >>> len(sub) <= len(df)
        True
    """
    require_coordinates(frame)

    if precision is None or not precision.is_set:
        return frame.copy()

    result = frame
    if precision.lat is not None:
        result = _filter_axis(result, LAT_COLUMN, precision.lat)
    if precision.lon is not None:
        result = _filter_axis(result, LON_COLUMN, precision.lon)

    logger.info(f"Subsampled data to {len(result)} of {len(frame)} records")
    return result.copy()
