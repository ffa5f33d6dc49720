"""
Custom exceptions for PolarCharts package.

This module defines exception classes for better error handling and messaging
across the package, particularly in data ingestion, scene composition and
rendering workflows.
"""


class PolarChartsError(Exception):
    """Base exception class for all PolarCharts errors."""
    pass


class SchemaError(PolarChartsError):
    """
    Raised when the input data does not have the expected columns.

    This typically occurs when no latitude/longitude column can be found
    under any accepted alias, or when the aesthetic mapping refers to a
    column that is not in the data. The message lists the actual columns.
    """
    pass


class UnsupportedGeometryError(PolarChartsError):
    """
    Raised when the requested geometry is neither "point" nor "tile".
    """
    pass


class PaletteSelectionError(PolarChartsError):
    """
    Raised when a palette name or index cannot be resolved.

    Only relevant when the caller overrides the default palettes, since
    the built-in defaults always exist in the palette table.
    """
    pass


class InvalidParameterError(PolarChartsError):
    """
    Raised for invalid user inputs.

    This exception is used for parameter validation failures such as
    non-positive precisions, unknown projections, unsupported aesthetics
    or incompatible configuration options.
    """
    pass


class RenderError(PolarChartsError):
    """
    Raised when drawing or saving a scene fails.

    This can occur due to invalid data, coordinate system issues, or
    matplotlib/cartopy errors during the rendering process.
    """
    pass
