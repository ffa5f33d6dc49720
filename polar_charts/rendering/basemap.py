"""
Basemap rendering for polar charts using Cartopy and Matplotlib.

This module provides easy access to a suitable polar projection (viewed from
the South Pole by default) and the PolarBasemap class that creates the
figure and axes and applies the blank, black-and-white theme of the charts.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import cartopy.crs as ccrs
from cartopy.mpl.gridliner import LATITUDE_FORMATTER

from ..config import Config
from ..constants import (
    AXIS_LABEL_SIZE,
    DEFAULT_ORIENTATION,
    DEFAULT_PROJECTION,
    GRID_COLOR,
    GRID_LINESTYLE,
    GRID_LINEWIDTH,
    THEME_NAME,
    X_AXIS_LABEL,
    Y_AXIS_LABEL,
)
from ..exceptions import InvalidParameterError

logger = logging.getLogger("polar_charts.rendering.basemap")

# Azimuthal projections that can be centred on a pole
PROJECTIONS = {
    "stereographic": ccrs.Stereographic,
    "orthographic": ccrs.Orthographic,
    "azimuthalequidistant": ccrs.AzimuthalEquidistant,
    "lambertazimuthal": ccrs.LambertAzimuthalEqualArea,
}

# Latitude grid spacing in degrees
GRID_SPACING = 10.0


@dataclass(frozen=True)
class ProjectionSpec:
    """
    Map projection of a scene.

    Attributes:
        name: Key of PROJECTIONS
        orientation: (latitude, longitude, rotation) of the projection centre
    """

    name: str = DEFAULT_PROJECTION
    orientation: Tuple[float, float, float] = DEFAULT_ORIENTATION

    def to_crs(self) -> ccrs.Projection:
        """
        Build the cartopy projection.

        Cartopy's azimuthal projections have no rotation parameter; at a pole
        a rotation is a shift of the central longitude, so it is applied that
        way there and ignored elsewhere.
        """
        latitude, longitude, rotation = self.orientation
        if rotation:
            if abs(latitude) == 90:
                longitude = longitude - rotation
            else:
                logger.warning(f"Rotation {rotation} ignored away from the poles")
        return PROJECTIONS[self.name](central_latitude=latitude, central_longitude=longitude)


def polar_projection(
    projection: str = DEFAULT_PROJECTION,
    orientation: Sequence[float] = DEFAULT_ORIENTATION
) -> ProjectionSpec:
    """
    Easy access to a suitable polar projection.

    NB: the default orientation views the data from the South Pole (-90).

    Args:
        projection: One of "stereographic", "orthographic",
            "azimuthalequidistant", "lambertazimuthal"
        orientation: (latitude, longitude, rotation) of the projection centre

    Returns:
        ProjectionSpec

    Raises:
        InvalidParameterError: If the projection is unknown or the
            orientation does not have three values

    Example:
        >>> polar_projection().to_crs()  # doctest: +SKIP
        <cartopy.crs.Stereographic object>
    """
    name = projection.lower()
    if name not in PROJECTIONS:
        raise InvalidParameterError(
            f"Unknown projection '{projection}'. "
            f"Available projections: {', '.join(PROJECTIONS)}"
        )
    orientation = tuple(float(v) for v in orientation)
    if len(orientation) != 3:
        raise InvalidParameterError(
            f"orientation must be (latitude, longitude, rotation), got {orientation}"
        )
    return ProjectionSpec(name=name, orientation=orientation)


@dataclass(frozen=True)
class Theme:
    """
    Visual theme of a scene.

    Polar plots make longitude ticks meaningless, so the x axis text and
    title are hidden by default.
    """

    name: str = THEME_NAME
    hide_x_text: bool = True
    hide_x_title: bool = True
    y_label: str = Y_AXIS_LABEL
    x_label: str = X_AXIS_LABEL


class PolarBasemap:
    """
    Create the figure and projected axes of a polar chart.

    Attributes:
        projection: ProjectionSpec of the map
        config: Configuration object with display settings

    Example:
        >>> basemap = PolarBasemap(polar_projection(), Config())
        >>> fig, ax = basemap.create_basemap()
        >>> basemap.apply_theme(ax, Theme())
    """

    def __init__(self, projection: ProjectionSpec, config: Optional[Config] = None):
        self.projection = projection
        self.config = config if config is not None else Config()

    def create_basemap(self, ax: Optional[plt.Axes] = None) -> Tuple[plt.Figure, plt.Axes]:
        """
        Create a figure and axes with the projection, or reuse `ax`.

        An existing axes must already carry a cartopy projection.
        """
        if ax is not None:
            logger.debug("Drawing on caller-supplied axes")
            return ax.figure, ax

        fig = plt.figure(
            figsize=(self.config.figure_width, self.config.figure_height),
            dpi=self.config.default_dpi
        )
        ax = fig.add_subplot(1, 1, 1, projection=self.projection.to_crs())

        logger.debug(
            f"Created figure: size=({self.config.figure_width}x{self.config.figure_height}), "
            f"dpi={self.config.default_dpi}, projection={self.projection.name} "
            f"{self.projection.orientation}"
        )
        return fig, ax

    def apply_theme(self, ax: plt.Axes, theme: Theme) -> None:
        """
        Apply the black and white theme: white background, light grid lines,
        latitude labels only and a y axis title. The x axis title is drawn
        only when the theme does not hide it.
        """
        logger.info(f"Applying '{theme.name}' theme")

        ax.set_facecolor("white")
        ax.figure.patch.set_facecolor("white")

        gl = ax.gridlines(
            draw_labels=True,
            linewidth=GRID_LINEWIDTH,
            color=GRID_COLOR,
            linestyle=GRID_LINESTYLE,
        )
        gl.ylocator = mticker.MultipleLocator(GRID_SPACING)
        gl.yformatter = LATITUDE_FORMATTER
        gl.ylabel_style = {'size': AXIS_LABEL_SIZE - 2}
        if theme.hide_x_text:
            gl.xlabel_style = {'visible': False}

        if theme.y_label:
            ax.text(
                -0.06, 0.5, theme.y_label,
                rotation='vertical',
                va='center',
                ha='center',
                fontsize=AXIS_LABEL_SIZE,
                transform=ax.transAxes,
            )

        if theme.x_label and not theme.hide_x_title:
            ax.text(
                0.5, -0.06, theme.x_label,
                va='center',
                ha='center',
                fontsize=AXIS_LABEL_SIZE,
                transform=ax.transAxes,
            )
