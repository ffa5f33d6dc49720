"""
Coastline clipping around the plotted data.

The world coastline is cut down to the part surrounding the data before it
is drawn. The cut is a vertex filter: vertices outside the (padded) box are
dropped and become breaks in the path, no vertex is added on the box edges.

Only an upper latitude bound is applied by default, as the plots look at
the South Pole and the coastline further south is always wanted.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..constants import COAST_EXPAND, COASTLINE_COLOR, COASTLINE_LINEWIDTH, LAT_COLUMN, LON_COLUMN
from ..exceptions import SchemaError

logger = logging.getLogger("polar_charts.calculations.coastline")


@dataclass(frozen=True)
class DataExtent:
    """Range of the data: (min, max) of latitude and longitude."""

    lat_range: Tuple[float, float]
    lon_range: Tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    """
    Box used to cut the coastline.

    `lat_min` is None unless symmetric clipping is requested.
    """

    lon_min: float
    lon_max: float
    lat_max: float
    lat_min: Optional[float] = None

    def contains(self, lon: np.ndarray, lat: np.ndarray) -> np.ndarray:
        """Boolean mask of the vertices inside the box (NaN is never inside)."""
        inside = (lat <= self.lat_max) & (lon >= self.lon_min) & (lon <= self.lon_max)
        if self.lat_min is not None:
            inside &= lat >= self.lat_min
        return inside


def data_extent(frame: pd.DataFrame) -> Optional[DataExtent]:
    """
    Compute the lat/lon range of the records.

    Returns:
        DataExtent, or None when there is no finite coordinate to measure
    """
    lats = frame[LAT_COLUMN].to_numpy(dtype=float)
    lons = frame[LON_COLUMN].to_numpy(dtype=float)
    ok = np.isfinite(lats) & np.isfinite(lons)
    if not ok.any():
        return None
    return DataExtent(
        lat_range=(float(lats[ok].min()), float(lats[ok].max())),
        lon_range=(float(lons[ok].min()), float(lons[ok].max())),
    )


def padded_bbox(extent: DataExtent, expand: float = COAST_EXPAND, symmetric: bool = False) -> BoundingBox:
    """
    Add `expand` degrees of wiggle room around the data extent.

    Example:
        >>> padded_bbox(DataExtent((-80, -60), (0, 30)))
        BoundingBox(lon_min=-2.0, lon_max=32.0, lat_max=-58.0, lat_min=None)
    """
    return BoundingBox(
        lon_min=extent.lon_range[0] - expand,
        lon_max=extent.lon_range[1] + expand,
        lat_max=extent.lat_range[1] + expand,
        lat_min=extent.lat_range[0] - expand if symmetric else None,
    )


def _split_runs(lon: np.ndarray, lat: np.ndarray, keep: np.ndarray) -> List[np.ndarray]:
    """Split kept vertices into runs of vertices adjacent in the source."""
    idx = np.flatnonzero(keep)
    if idx.size == 0:
        return []
    runs = np.split(idx, np.flatnonzero(np.diff(idx) != 1) + 1)
    return [np.column_stack((lon[run], lat[run])) for run in runs]


def clip_coastline(
    source: pd.DataFrame,
    extent: Optional[DataExtent],
    expand: float = COAST_EXPAND,
    symmetric: bool = False,
) -> List[np.ndarray]:
    """
    Restrict the coastline to what is needed given the data.

    Args:
        source: World coastline, `lon`/`lat` columns with NaN rows between
            paths. It is only read.
        extent: Extent of the data; None (no data) gives no segments
        expand: Padding in degrees around the data extent
        symmetric: Also cut below the data's minimum latitude

    Returns:
        List of (n, 2) arrays of (lon, lat) vertices, one per drawable path

    Raises:
        SchemaError: If the source has no lon/lat columns
    """
    if LON_COLUMN not in source.columns or LAT_COLUMN not in source.columns:
        raise SchemaError(
            f"Coastline source needs lon and lat columns, "
            f"has {', '.join(map(str, source.columns))}"
        )

    if extent is None:
        logger.warning("No data extent, coastline left empty")
        return []

    bbox = padded_bbox(extent, expand=expand, symmetric=symmetric)
    lon = source[LON_COLUMN].to_numpy(dtype=float)
    lat = source[LAT_COLUMN].to_numpy(dtype=float)
    segments = _split_runs(lon, lat, bbox.contains(lon, lat))

    logger.debug(
        f"Clipped coastline to {bbox}: {sum(len(s) for s in segments)} of {len(source)} "
        f"vertices in {len(segments)} segments"
    )
    return segments


@dataclass(frozen=True, eq=False)
class CoastlineOverlay:
    """
    Drawable coastline: independent paths, drawn above the data.

    Attributes:
        segments: (n, 2) arrays of (lon, lat) vertices; never joined together
        colour: Line colour
        linewidth: Line width
    """

    segments: Tuple[np.ndarray, ...] = ()
    colour: str = COASTLINE_COLOR
    linewidth: float = COASTLINE_LINEWIDTH

    @property
    def vertex_count(self) -> int:
        return sum(len(s) for s in self.segments)

    def to_frame(self) -> pd.DataFrame:
        """Vertices as a lon/lat table with NaN rows separating the paths."""
        gap = np.full((1, 2), np.nan)
        pieces = []
        for segment in self.segments:
            if pieces:
                pieces.append(gap)
            pieces.append(segment)
        vertices = np.vstack(pieces) if pieces else np.empty((0, 2))
        return pd.DataFrame({LON_COLUMN: vertices[:, 0], LAT_COLUMN: vertices[:, 1]})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoastlineOverlay):
            return NotImplemented
        return (
            self.colour == other.colour
            and self.linewidth == other.linewidth
            and len(self.segments) == len(other.segments)
            and all(np.array_equal(a, b) for a, b in zip(self.segments, other.segments))
        )


def build_coastline_overlay(
    source: pd.DataFrame,
    extent: Optional[DataExtent],
    expand: float = COAST_EXPAND,
    symmetric: bool = False,
    colour: str = COASTLINE_COLOR,
    linewidth: float = COASTLINE_LINEWIDTH,
) -> CoastlineOverlay:
    """Clip the coastline source and wrap it as a drawable overlay."""
    segments: Sequence[np.ndarray] = clip_coastline(source, extent, expand=expand, symmetric=symmetric)
    return CoastlineOverlay(segments=tuple(segments), colour=colour, linewidth=linewidth)
