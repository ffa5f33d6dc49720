"""
Data ingestion for PolarCharts.

This module turns caller data into typed, normalised datasets and provides
the world coastline used as geographic reference.

Main Classes:
    Dataset: Records to plot with canonical `lat`/`lon` columns
    ColumnKind: Statistical type of a column (numeric or categorical)

Example:
    >>> import pandas as pd
    >>> from polar_charts.data import Dataset
    >>>
    >>> df = pd.DataFrame({"Latitude": [-70, -65], "LONG": [10, 20], "sst": [1.2, 0.4]})
    >>> ds = Dataset.from_raw(df)
    >>> list(ds.frame.columns)
    ['lat', 'lon', 'sst']
"""

from .dataset import (
    ColumnKind,
    Dataset,
    as_dataframe,
    classify_column,
    normalize_coordinates,
)
from .coastline import coastline_frame_from_geometries, natural_earth_coastline

__all__ = [
    "ColumnKind",
    "Dataset",
    "as_dataframe",
    "classify_column",
    "normalize_coordinates",
    "coastline_frame_from_geometries",
    "natural_earth_coastline",
]
