"""
World coastline source for the coastline overlay.

The coastline is read from cartopy's Natural Earth `coastline` feature and
flattened into a table of (lon, lat) vertices in which a row of NaN marks the
end of one path and the start of the next. The table is built once per
resolution and shared read-only between calls.
"""

import logging
from functools import lru_cache
from typing import Iterable

import numpy as np
import pandas as pd
import cartopy.feature as cfeature

from ..constants import COASTLINE_RESOLUTIONS, LAT_COLUMN, LON_COLUMN
from ..exceptions import InvalidParameterError

logger = logging.getLogger("polar_charts.data.coastline")


def _line_coordinates(geometry) -> Iterable[np.ndarray]:
    """Yield an (n, 2) lon/lat array for every line making up a geometry."""
    geom_type = geometry.geom_type
    if geom_type == "LineString" or geom_type == "LinearRing":
        yield np.asarray(geometry.coords, dtype=float)[:, :2]
    elif geom_type == "Polygon":
        yield from _line_coordinates(geometry.exterior)
        for ring in geometry.interiors:
            yield from _line_coordinates(ring)
    elif hasattr(geometry, "geoms"):
        for part in geometry.geoms:
            yield from _line_coordinates(part)
    else:
        logger.debug(f"Skipping coastline geometry of type {geom_type}")


def coastline_frame_from_geometries(geometries: Iterable) -> pd.DataFrame:
    """
    Flatten shapely line geometries into a NaN-separated vertex table.

    Args:
        geometries: Iterable of shapely geometries (lines, rings, polygons or
            multi-part collections of those)

    Returns:
        DataFrame with `lon` and `lat` columns, paths separated by NaN rows
    """
    gap = np.full((1, 2), np.nan)
    pieces = []
    for geometry in geometries:
        for coords in _line_coordinates(geometry):
            if len(coords) == 0:
                continue
            if pieces:
                pieces.append(gap)
            pieces.append(coords)

    if not pieces:
        return pd.DataFrame({LON_COLUMN: pd.Series(dtype=float), LAT_COLUMN: pd.Series(dtype=float)})

    vertices = np.vstack(pieces)
    return pd.DataFrame({LON_COLUMN: vertices[:, 0], LAT_COLUMN: vertices[:, 1]})


@lru_cache(maxsize=None)
def _natural_earth_coastline(resolution: str) -> pd.DataFrame:
    feature = cfeature.NaturalEarthFeature(
        category='physical',
        name='coastline',
        scale=resolution,
    )
    frame = coastline_frame_from_geometries(feature.geometries())
    logger.info(f"Loaded {resolution} Natural Earth coastline: {len(frame)} vertices")
    return frame


def natural_earth_coastline(resolution: str = "110m") -> pd.DataFrame:
    """
    Get the whole world coastline as a NaN-separated (lon, lat) table.

    Natural Earth files are downloaded by cartopy on first use. The result
    is cached per resolution; callers get a copy so the cached table is
    never modified.

    Args:
        resolution: Natural Earth scale, '110m', '50m' or '10m'

    Raises:
        InvalidParameterError: If the resolution is not supported
    """
    if resolution not in COASTLINE_RESOLUTIONS:
        raise InvalidParameterError(
            f"Unknown coastline resolution '{resolution}'. "
            f"Available resolutions: {', '.join(COASTLINE_RESOLUTIONS)}"
        )
    return _natural_earth_coastline(resolution).copy()
