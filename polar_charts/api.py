"""
Main API module for PolarCharts package.

This module provides simplified user-facing functions that abstract away the
composition and rendering steps. `polar_plot()` builds the scene of data
viewed from the South Pole, and `create_polar_chart()` handles the complete
workflow from the data to the saved chart in a single call.

Example:
    >>> from polar_charts import polar_plot, create_polar_chart
    >>>
    >>> # Describe the chart
    >>> scene = polar_plot(df, {"fill": "sst"}, lat_precision=1.0)
    >>>
    >>> # Draw and save it
    >>> create_polar_chart(df, {"fill": "sst"}, output_path="sst.png")

    >>> # Interactive use (returns figure and axes)
    >>> fig, ax = create_polar_chart(df, {"colour": "water_mass"}, geom="tile")
    >>> plt.show()
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import matplotlib.pyplot as plt
import pandas as pd

from .calculations import CoastlineOverlay, Precision
from .config import Config
from .rendering import PolarChart, Scene, compose_scene
from .exceptions import PolarChartsError, RenderError

logger = logging.getLogger(__name__)


def polar_plot(
    data: Any,
    mapping: Optional[Mapping[str, str]] = None,
    geom: str = "point",
    lat_precision: Optional[float] = None,
    lon_precision: Optional[float] = None,
    coast: Optional[CoastlineOverlay] = None,
    config: Optional[Config] = None,
    coastline_source: Optional[pd.DataFrame] = None,
    **geom_options: Any
) -> Scene:
    """
    Plot data viewed from the South Pole.

    Args:
        data: Records with latitude and longitude columns and the variables to plot
        mapping: Aesthetic (fill, colour, size, alpha, ...) -> column name
        geom: "point" (the default) or "tile"
        lat_precision: Precision at which latitude is considered. If coarser
            than the data, the data is subsampled: some records are dropped.
        lon_precision: Same for longitude
        coast: Coastline overlay to use; if None, it is cut around the data
        config: Optional Config object; if None, uses default configuration
        coastline_source: World coastline to cut instead of Natural Earth's
        **geom_options: Passed to the Matplotlib call drawing the geometry

    Returns:
        Scene ready for rendering with PolarChart

    Raises:
        InvalidParameterError: If a precision is not a positive number
        UnsupportedGeometryError: If geom is not "point" or "tile"
        SchemaError: If lat/lon or a mapped column cannot be found

    Example:
        >>> scene = polar_plot(df, {"colour": "depth"}, lat_precision=2, lon_precision=5)
    """
    precision = Precision(lat=lat_precision, lon=lon_precision)
    return compose_scene(
        data,
        mapping=mapping,
        geom=geom,
        precision=precision,
        coast=coast,
        geom_options=geom_options,
        config=config,
        coastline_source=coastline_source,
    )


def create_polar_chart(
    data: Any,
    mapping: Optional[Mapping[str, str]] = None,
    geom: str = "point",
    lat_precision: Optional[float] = None,
    lon_precision: Optional[float] = None,
    coast: Optional[CoastlineOverlay] = None,
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None,
    coastline_source: Optional[pd.DataFrame] = None,
    **geom_options: Any
) -> Union[str, Tuple[plt.Figure, plt.Axes]]:
    """
    Create a polar chart from data.

    This is the primary API function that handles the complete workflow:
    1. Compose the scene with polar_plot()
    2. Initialize PolarChart renderer
    3. Render the scene
    4. Save to file or return figure/axes for interactive use

    Args:
        data, mapping, geom, lat_precision, lon_precision, coast,
        coastline_source, geom_options: As for polar_plot()
        output_path: Output file path; if None, returns (fig, ax) for interactive use
        config: Optional Config object; if None, uses default configuration

    Returns:
        If output_path provided: path to saved chart file
        If output_path is None: tuple of (figure, axes) for interactive use

    Raises:
        PolarChartsError: If the scene cannot be composed
        RenderError: If chart rendering or saving fails

    Example:
        >>> path = create_polar_chart(df, {"fill": "sst"}, output_path="sst.png")
        >>> print(f"Chart saved to {path}")
    """
    if config is None:
        config = Config()
        logger.debug("Using default configuration")

    # Step 1: Compose
    scene = polar_plot(
        data,
        mapping=mapping,
        geom=geom,
        lat_precision=lat_precision,
        lon_precision=lon_precision,
        coast=coast,
        config=config,
        coastline_source=coastline_source,
        **geom_options
    )

    # Step 2: Render chart
    chart = PolarChart(config=config)
    logger.info("Rendering chart")
    try:
        fig, ax = chart.render_chart(scene)
    except PolarChartsError:
        raise
    except Exception as e:
        raise RenderError(f"Failed to render chart: {e}") from e

    logger.info("Chart rendering complete")

    # Step 3: Save or return
    if output_path is not None:
        output_path = Path(output_path)
        logger.info(f"Saving chart to {output_path}")

        try:
            # Create parent directory if it doesn't exist
            output_path.parent.mkdir(parents=True, exist_ok=True)
            saved_path = chart.save_chart(str(output_path))
        except PolarChartsError:
            raise
        except Exception as e:
            raise RenderError(f"Failed to save chart to {output_path}: {e}") from e
        finally:
            plt.close(fig)

        logger.info(f"Chart saved successfully to {saved_path}")
        return saved_path
    else:
        logger.info("Returning figure and axes for interactive use")
        return fig, ax
