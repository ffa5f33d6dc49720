"""
Individual rendering functions for polar chart layers.

This module provides low-level functions drawing the layers of a Scene on
cartopy axes: points, tiles and the coastline. Each function handles the
coordinate transform, the colour scales and the styling of its layer. Data
is given in lon/lat and drawn with transform=ccrs.PlateCarree().
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import matplotlib.cm as mcm
import matplotlib.colors as mcolors
import cartopy.crs as ccrs
from pandas.api import types as ptypes

from .scales import ScaleDescriptor, SizeScale
from ..calculations.coastline import CoastlineOverlay
from ..constants import DEFAULT_CATEGORICAL_CMAP, LAT_COLUMN, LON_COLUMN

logger = logging.getLogger("polar_charts.rendering.layers")

NA_COLOUR = "#7F7F7F"  # grey50
DEFAULT_POINT_COLOUR = "black"
DEFAULT_TILE_COLOUR = "#595959"  # grey35
DEFAULT_SIZE_RANGE = (1.0, 6.0)
ALPHA_RANGE = (0.1, 1.0)

DATA_ZORDER = 2
COASTLINE_ZORDER = 5


def _levels(values: pd.Series) -> Tuple[Any, ...]:
    """Levels of a discrete variable: declared categories, else sorted unique values."""
    if isinstance(values.dtype, pd.CategoricalDtype):
        return tuple(values.cat.categories)
    unique = pd.unique(values.dropna())
    try:
        return tuple(sorted(unique))
    except TypeError:
        # Mixed types cannot be ordered; keep the order of appearance.
        return tuple(unique)


def default_categorical_colours(n: int) -> Tuple[str, ...]:
    """Evenly spaced hues for variables with too many levels for a ColorBrewer palette."""
    if n <= 0:
        return ()
    cmap = plt.get_cmap(DEFAULT_CATEGORICAL_CMAP)
    return tuple(mcolors.to_hex(cmap(x)) for x in np.linspace(0.0, 1.0, n, endpoint=False))


@dataclass
class ColourMapping:
    """
    How the values of one column become colours.

    Continuous variables go through `norm` and a gradient colormap; discrete
    ones are turned into level codes first, one colour per level.
    """

    aesthetic: str
    column: str
    continuous: bool
    cmap: mcolors.Colormap
    norm: mcolors.Normalize
    levels: Tuple[Any, ...] = ()
    level_colours: Tuple[str, ...] = ()

    def scalars(self, values: pd.Series) -> np.ndarray:
        """Values for continuous variables, level codes (NaN when missing) otherwise."""
        if self.continuous:
            return values.to_numpy(dtype=float)
        codes = pd.Categorical(values, categories=list(self.levels)).codes.astype(float)
        codes[codes < 0] = np.nan
        return codes

    def colours(self, values: pd.Series) -> np.ndarray:
        """RGBA colour of every value; missing values are grey."""
        return self.cmap(self.norm(np.ma.masked_invalid(self.scalars(values))))

    def mappable(self) -> mcm.ScalarMappable:
        return mcm.ScalarMappable(norm=self.norm, cmap=self.cmap)


def build_colour_mapping(
    frame: pd.DataFrame,
    aesthetic: str,
    column: str,
    scale: Optional[ScaleDescriptor]
) -> ColourMapping:
    """
    Turn a colour scale into the colormap used to draw a column.

    Without a scale (data neither numeric nor categorical) the column is
    drawn as a discrete variable with the default colours.
    """
    values = frame[column]

    if scale is not None and scale.is_continuous:
        numeric = values.to_numpy(dtype=float)
        finite = numeric[np.isfinite(numeric)]
        vmin, vmax = (float(finite.min()), float(finite.max())) if finite.size else (0.0, 1.0)
        cmap = mcolors.LinearSegmentedColormap.from_list(
            f"{scale.palette_name}_{aesthetic}", list(scale.palette_colors)
        ).with_extremes(bad=NA_COLOUR)
        logger.debug(f"{aesthetic} gradient over [{vmin}, {vmax}]")
        return ColourMapping(aesthetic, column, True, cmap, mcolors.Normalize(vmin=vmin, vmax=vmax))

    levels = _levels(values)
    if scale is not None and scale.palette_colors:
        palette = scale.palette_colors
        colours = tuple(palette[i % len(palette)] for i in range(len(levels)))
    else:
        colours = default_categorical_colours(len(levels))

    cmap = mcolors.ListedColormap(list(colours) or [NA_COLOUR]).with_extremes(bad=NA_COLOUR)
    # Level code i lands in the middle of the i-th colour bin
    norm = mcolors.Normalize(vmin=-0.5, vmax=max(len(levels), 1) - 0.5)
    logger.debug(f"{aesthetic}: {len(levels)} levels")
    return ColourMapping(aesthetic, column, False, cmap, norm, levels, colours)


def _rescale(values: np.ndarray, out_range: Tuple[float, float]) -> np.ndarray:
    """Linearly map the range of the values onto out_range; NaN goes to the low end."""
    values = np.asarray(values, dtype=float)
    low, high = out_range
    finite = values[np.isfinite(values)]
    if finite.size == 0 or finite.max() == finite.min():
        return np.full(values.shape, (low + high) / 2.0)
    scaled = low + (values - finite.min()) / (finite.max() - finite.min()) * (high - low)
    return np.where(np.isfinite(scaled), scaled, low)


def _numeric_column(frame: pd.DataFrame, mapping: Mapping[str, str], aesthetic: str) -> Optional[np.ndarray]:
    column = mapping.get(aesthetic)
    if column is None:
        return None
    values = frame[column]
    if ptypes.is_bool_dtype(values) or not ptypes.is_numeric_dtype(values):
        logger.warning(f"{aesthetic} needs a numeric column, '{column}' is {values.dtype}; ignored")
        return None
    return values.to_numpy(dtype=float)


def point_sizes(
    frame: pd.DataFrame,
    mapping: Mapping[str, str],
    size_scale: Optional[SizeScale],
    point_scale: float
) -> np.ndarray:
    """
    Marker areas (points^2) of the records.

    The size variable is mapped linearly onto the size scale range, then
    squared and multiplied by `point_scale` to get a Matplotlib marker area.
    """
    size_range = size_scale.range if size_scale is not None else DEFAULT_SIZE_RANGE
    values = _numeric_column(frame, mapping, "size")
    if values is None:
        diameters = np.full(len(frame), (size_range[0] + size_range[1]) / 2.0)
    else:
        diameters = _rescale(values, size_range)
    return diameters ** 2 * point_scale


def render_points(
    ax: plt.Axes,
    frame: pd.DataFrame,
    mapping: Mapping[str, str],
    colour_maps: Dict[str, ColourMapping],
    size_scale: Optional[SizeScale],
    point_scale: float,
    options: Optional[Mapping[str, Any]] = None
) -> Any:
    """
    Draw the records as points.

    Points are filled with the fill colour if mapped, else the colour
    colour. When both are mapped, colour draws the marker edges.

    Args:
        ax: Matplotlib axes with cartopy projection
        frame: Records with lat/lon columns
        mapping: Aesthetic -> column
        colour_maps: ColourMapping per mapped colour aesthetic
        size_scale: Size scale of the layer
        point_scale: Size units to marker area factor
        options: Passed verbatim to ax.scatter

    Returns:
        PathCollection, or None when there is nothing to draw
    """
    if len(frame) == 0:
        logger.warning("No points to draw")
        return None

    logger.info(f"Rendering {len(frame)} points")

    face = colour_maps.get("fill") or colour_maps.get("colour")
    edge = colour_maps.get("colour") if "fill" in colour_maps else None

    if face is not None:
        face_colours = face.colours(frame[face.column])
    else:
        face_colours = np.tile(mcolors.to_rgba(DEFAULT_POINT_COLOUR), (len(frame), 1))

    alphas = _numeric_column(frame, mapping, "alpha")
    if alphas is not None:
        face_colours[:, 3] = _rescale(alphas, ALPHA_RANGE)

    kwargs = {
        "s": point_sizes(frame, mapping, size_scale, point_scale),
        "c": face_colours,
        "linewidths": 0.0,
        "transform": ccrs.PlateCarree(),
        "zorder": DATA_ZORDER,
    }
    if edge is not None:
        kwargs["edgecolors"] = edge.colours(frame[edge.column])
        kwargs["linewidths"] = 0.8
    kwargs.update(options or {})

    return ax.scatter(
        frame[LON_COLUMN].to_numpy(dtype=float),
        frame[LAT_COLUMN].to_numpy(dtype=float),
        **kwargs
    )


def render_tiles(
    ax: plt.Axes,
    frame: pd.DataFrame,
    colour_maps: Dict[str, ColourMapping],
    options: Optional[Mapping[str, Any]] = None
) -> Any:
    """
    Draw the records as tiles centred on their lat/lon.

    Tiles are laid on the grid formed by the distinct latitudes and
    longitudes of the data; cells without a record stay empty.

    Returns:
        QuadMesh, or None when there is nothing to draw
    """
    lats = frame[LAT_COLUMN].to_numpy(dtype=float)
    lons = frame[LON_COLUMN].to_numpy(dtype=float)
    ok = np.isfinite(lats) & np.isfinite(lons)
    if not ok.any():
        logger.warning("No tiles to draw")
        return None

    logger.info(f"Rendering {int(ok.sum())} tiles")

    grid_lats = np.unique(lats[ok])
    grid_lons = np.unique(lons[ok])
    rows = np.searchsorted(grid_lats, lats[ok])
    cols = np.searchsorted(grid_lons, lons[ok])
    grid = np.full((grid_lats.size, grid_lons.size), np.nan)

    face = colour_maps.get("fill") or colour_maps.get("colour")
    if "fill" in colour_maps and "colour" in colour_maps:
        logger.warning("Tiles are coloured by fill only, colour mapping not drawn")

    if face is None:
        grid[rows, cols] = 0.0
        cmap = mcolors.ListedColormap([DEFAULT_TILE_COLOUR])
        norm = mcolors.Normalize(vmin=-0.5, vmax=0.5)
    else:
        grid[rows, cols] = face.scalars(frame[face.column])[ok]
        cmap, norm = face.cmap, face.norm

    kwargs = {
        "cmap": cmap,
        "norm": norm,
        "shading": "nearest",
        "transform": ccrs.PlateCarree(),
        "zorder": DATA_ZORDER,
    }
    kwargs.update(options or {})

    return ax.pcolormesh(grid_lons, grid_lats, np.ma.masked_invalid(grid), **kwargs)


def render_coastline(ax: plt.Axes, overlay: CoastlineOverlay) -> List[Any]:
    """
    Draw the coastline above the data, each segment as its own path.

    Returns:
        List of Line2D, one per segment with at least two vertices
    """
    lines = []
    for segment in overlay.segments:
        if len(segment) < 2:
            continue
        lines.extend(ax.plot(
            segment[:, 0], segment[:, 1],
            color=overlay.colour,
            linewidth=overlay.linewidth,
            transform=ccrs.PlateCarree(),
            zorder=COASTLINE_ZORDER,
        ))

    if lines:
        logger.info(f"Rendered coastline: {len(lines)} paths")
    else:
        logger.warning("No coastline to draw")
    return lines
