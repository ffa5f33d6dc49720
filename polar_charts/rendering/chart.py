"""
Orchestration module for polar chart rendering.

This module provides the PolarChart class that draws a composed Scene with
Matplotlib and Cartopy and saves it. It manages the rendering workflow from
the declarative scene to the finished figure.
"""

import logging
import os
from typing import Any, Dict, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
import cartopy.crs as ccrs

from .annotations import add_guides
from .basemap import PolarBasemap
from .layers import build_colour_mapping, render_coastline, render_points, render_tiles
from .scene import Scene
from ..config import Config
from ..constants import COLOUR_AESTHETICS, LAT_COLUMN, LON_COLUMN
from ..exceptions import PolarChartsError, RenderError

logger = logging.getLogger("polar_charts.rendering.chart")

# Degrees added around a single point so that the map has an extent
MIN_HALF_EXTENT = 1.0


class PolarChart:
    """
    Render polar chart scenes.

    The rendering workflow:
    1. Create the figure and projected axes
    2. Draw the data layer, points or tiles (zorder=2)
    3. Draw the coastline above it (zorder=5)
    4. Zoom on the data and coastline
    5. Add colour guides
    6. Apply the theme

    Attributes:
        config: Configuration object with display settings
        fig: Matplotlib Figure (None until render_chart called)
        ax: Matplotlib Axes (None until render_chart called)

    Example:
        >>> from polar_charts import compose_scene, PolarChart
        >>>
        >>> scene = compose_scene(df, {"fill": "sst"})
        >>> chart = PolarChart()
        >>> fig, ax = chart.render_chart(scene)
        >>> chart.save_chart("sst.png")
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config if config is not None else Config()

        self.fig = None
        self.ax = None

        # Track rendered layers for external access
        self._rendered_layers = {}
        self._guides = {}

    def render_chart(self, scene: Scene, ax: Optional[plt.Axes] = None) -> Tuple[plt.Figure, plt.Axes]:
        """
        Draw a scene.

        Args:
            scene: Scene from compose_scene()
            ax: Optional existing axes with a cartopy projection to draw on

        Returns:
            Tuple of (figure, axes) with the rendered chart

        Raises:
            RenderError: If Matplotlib or Cartopy fail to draw the scene
        """
        layer = scene.geom_layer
        logger.info(f"Rendering {layer.geom} chart of {len(scene.data)} records")

        basemap = PolarBasemap(scene.projection, self.config)
        self._rendered_layers = {}

        try:
            self.fig, self.ax = basemap.create_basemap(ax)
            frame = scene.data.frame

            colour_maps = {
                aesthetic: build_colour_mapping(
                    frame, aesthetic, layer.mapping[aesthetic], scene.scale_for(aesthetic)
                )
                for aesthetic in COLOUR_AESTHETICS
                if aesthetic in layer.mapping
            }

            if layer.geom == "point":
                self._rendered_layers["data"] = render_points(
                    self.ax, frame, layer.mapping, colour_maps,
                    scene.size_scale, self.config.point_scale, layer.options
                )
            else:
                self._rendered_layers["data"] = render_tiles(self.ax, frame, colour_maps, layer.options)

            self._rendered_layers["coastline"] = render_coastline(self.ax, scene.coastline)

            self._set_extent(scene)
            self._guides = add_guides(self.fig, self.ax, scene, colour_maps)
            basemap.apply_theme(self.ax, scene.theme)

        except PolarChartsError:
            raise
        except Exception as e:
            logger.error(f"Error during chart rendering: {e}", exc_info=True)
            raise RenderError(f"Failed to render chart: {e}") from e

        logger.info("Polar chart rendering complete")
        return self.fig, self.ax

    def _set_extent(self, scene: Scene) -> None:
        """Zoom on the data and the coastline drawn around it."""
        frame = scene.data.frame
        lons = [frame[LON_COLUMN].to_numpy(dtype=float)]
        lats = [frame[LAT_COLUMN].to_numpy(dtype=float)]
        for segment in scene.coastline.segments:
            lons.append(segment[:, 0])
            lats.append(segment[:, 1])

        lons = np.concatenate(lons)
        lats = np.concatenate(lats)
        ok = np.isfinite(lons) & np.isfinite(lats)
        if not ok.any():
            logger.warning("Nothing to zoom on, showing the whole globe")
            self.ax.set_global()
            return

        west, east = float(lons[ok].min()), float(lons[ok].max())
        south, north = float(lats[ok].min()), float(lats[ok].max())
        if east - west < 2 * MIN_HALF_EXTENT:
            west, east = west - MIN_HALF_EXTENT, east + MIN_HALF_EXTENT
        if north - south < 2 * MIN_HALF_EXTENT:
            south, north = max(south - MIN_HALF_EXTENT, -90.0), min(north + MIN_HALF_EXTENT, 90.0)

        extent = [west, east, south, north]
        self.ax.set_extent(extent, crs=ccrs.PlateCarree())
        logger.debug(f"Set map extent: {extent}")

    def get_rendered_layers(self) -> Dict[str, Any]:
        """
        Get dictionary of rendered layers for external access.

        Returns:
            Copy of the rendered artists: 'data' (PathCollection or QuadMesh)
            and 'coastline' (list of Line2D)
        """
        return self._rendered_layers.copy()

    def get_guides(self) -> Dict[str, Any]:
        """Colour bars and legends added, by aesthetic."""
        return self._guides.copy()

    def save_chart(
        self,
        output_path: str,
        dpi: Optional[int] = None,
        bbox_inches: str = 'tight',
        pad_inches: float = 0.05
    ) -> str:
        """
        Save rendered chart to file.

        Args:
            output_path: Path or string for output file
            dpi: Optional DPI override (uses config.default_dpi if None)
            bbox_inches: Bbox setting for savefig (default: 'tight')
            pad_inches: Padding (inches) around tight bbox (default: 0.05)

        Returns:
            Path to saved file

        Raises:
            ValueError: If chart has not been rendered yet
            RenderError: If matplotlib cannot write the file
        """
        if self.fig is None:
            raise ValueError("Chart has not been rendered yet. Call render_chart() first.")

        if dpi is None:
            dpi = self.config.default_dpi

        logger.info(f"Saving chart to {output_path} (dpi={dpi})")
        try:
            self.fig.savefig(output_path, dpi=dpi, bbox_inches=bbox_inches, pad_inches=pad_inches)
        except Exception as e:
            raise RenderError(f"Failed to save chart to {output_path}: {e}") from e

        try:
            file_size = os.path.getsize(output_path)
            logger.info(f"Chart saved: {output_path} ({file_size / 1024:.1f} KB)")
        except OSError:
            logger.info(f"Chart saved: {output_path}")

        return output_path

    def close(self) -> None:
        """Close the figure to release its memory."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None
