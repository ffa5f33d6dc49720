"""
Data preparation for PolarCharts.

This module provides the two transformations applied to the data and its
geographic context before a scene is composed:
- Precision-based subsampling of the records (a filter, never an average)
- Clipping of the world coastline to the surroundings of the data

Main Functions:
    From subsample module:
        - subsample: Keep records lying on a requested lat/lon precision
        - round_any: Round to the nearest multiple, ties away from zero

    From coastline module:
        - data_extent: Lat/lon range of the records
        - clip_coastline: Cut the coastline to the padded data extent
        - build_coastline_overlay: Clip and wrap as a drawable overlay

Example:
    >>> from polar_charts.calculations import Precision, subsample, data_extent, clip_coastline
    >>> sub = subsample(df, Precision(lat=1.0, lon=2.0))
    >>> segments = clip_coastline(coast, data_extent(sub))
"""

from .subsample import Precision, round_any, subsample
from .coastline import (
    BoundingBox,
    CoastlineOverlay,
    DataExtent,
    build_coastline_overlay,
    clip_coastline,
    data_extent,
    padded_bbox,
)

__all__ = [
    "Precision",
    "round_any",
    "subsample",
    "BoundingBox",
    "CoastlineOverlay",
    "DataExtent",
    "build_coastline_overlay",
    "clip_coastline",
    "data_extent",
    "padded_bbox",
]
