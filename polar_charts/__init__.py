"""
PolarCharts - Lightweight Python package for plotting data viewed from the South Pole.

This package projects point or gridded geospatial records onto a
stereographic map centred on the South Pole, optionally subsamples them to a
coarser lat/lon precision, cuts the world coastline around the data and
chooses ColorBrewer colour scales from the type of the mapped variables.

Quick Start:
    >>> from polar_charts import create_polar_chart
    >>>
    >>> # Plot a table with lat, lon and temperature columns
    >>> create_polar_chart(
    ...     df,
    ...     {"fill": "temperature"},
    ...     lat_precision=1.0,
    ...     output_path="temperature.png"
    ... )

Advanced Usage:
    >>> # Direct access to components
    >>> from polar_charts import Config, polar_plot, PolarChart
    >>>
    >>> # Custom configuration
    >>> config = Config(continuous_palette="RdYlBu", coast_expand=5.0)
    >>>
    >>> # Manual workflow
    >>> scene = polar_plot(df, {"colour": "water_mass"}, geom="tile", config=config)
    >>> chart = PolarChart(config)
    >>> fig, ax = chart.render_chart(scene)
"""

__version__ = "0.1.0"

# Initialize logging with default settings
from .logging_config import setup_logging
setup_logging()

# Core constants and configuration
from .constants import BREWER_PALETTES, GEOMETRIES
from .config import Config

# Data ingestion
from .data import Dataset, natural_earth_coastline

# Calculations
from . import calculations
from .calculations import Precision, CoastlineOverlay, subsample, clip_coastline

# Rendering components
from .rendering import PolarBasemap, PolarChart, Scene, compose_scene, select_scale

# User-facing API
from .api import polar_plot, create_polar_chart

# Exceptions
from .exceptions import (
    PolarChartsError,
    SchemaError,
    UnsupportedGeometryError,
    PaletteSelectionError,
    InvalidParameterError,
    RenderError,
)

__all__ = [
    # Version info
    "__version__",

    # Constants and config
    "BREWER_PALETTES",
    "GEOMETRIES",
    "Config",

    # Core components
    "Dataset",
    "natural_earth_coastline",
    "calculations",
    "Precision",
    "CoastlineOverlay",
    "subsample",
    "clip_coastline",
    "PolarBasemap",
    "PolarChart",
    "Scene",
    "compose_scene",
    "select_scale",

    # User-facing API
    "polar_plot",
    "create_polar_chart",

    # Exceptions
    "PolarChartsError",
    "SchemaError",
    "UnsupportedGeometryError",
    "PaletteSelectionError",
    "InvalidParameterError",
    "RenderError",
]
