"""
Rendering subsystem for PolarCharts.

This module composes polar chart scenes and draws them with Cartopy and
Matplotlib. Composition and drawing are separate: `compose_scene` builds a
declarative Scene (projection, data layer, coastline overlay, colour scales,
theme) and `PolarChart` renders it.

Main Classes:
    Scene: Renderable description of a chart
    PolarChart: Draws and saves scenes
    PolarBasemap: Figure, projected axes and theme

Key Features:
    - Stereographic projection viewed from the South Pole
    - Implicit size-by-latitude for points, to better cover the space
    - ColorBrewer colour scales chosen from the type of the data
    - Coastline drawn above the data

Coordinate System:
    - Data and coastline are in lon/lat, drawn with transform=ccrs.PlateCarree()

Example:
    >>> from polar_charts.rendering import compose_scene, PolarChart
    >>>
    >>> scene = compose_scene(df, {"colour": "water_mass"}, geom="tile")
    >>> fig, ax = PolarChart().render_chart(scene)
    >>> fig.savefig("water_masses.png")
"""

from .basemap import PolarBasemap, ProjectionSpec, Theme, polar_projection
from .scales import (
    ScaleDescriptor,
    ScaleKind,
    SizeScale,
    continuous_scale_by_index,
    continuous_scale_by_name,
    discrete_brewer_scale,
    palette_by_index,
    palette_by_name,
    palette_colors,
    select_scale,
)
from .scene import GeomLayer, Scene, compose_scene, get_geometry_policy
from .layers import render_coastline, render_points, render_tiles
from .annotations import add_guides
from .chart import PolarChart

__all__ = [
    "PolarBasemap",
    "ProjectionSpec",
    "Theme",
    "polar_projection",
    "ScaleDescriptor",
    "ScaleKind",
    "SizeScale",
    "continuous_scale_by_index",
    "continuous_scale_by_name",
    "discrete_brewer_scale",
    "palette_by_index",
    "palette_by_name",
    "palette_colors",
    "select_scale",
    "GeomLayer",
    "Scene",
    "compose_scene",
    "get_geometry_policy",
    "render_coastline",
    "render_points",
    "render_tiles",
    "add_guides",
    "PolarChart",
]
