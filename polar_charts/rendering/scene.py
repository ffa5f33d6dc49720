"""
Composition of polar chart scenes.

A Scene is the complete, declarative description of a chart: the data, the
projection, the geometry layer with its aesthetic mapping, the coastline
overlay drawn on top, the scales and the theme. Composing a scene never
draws anything nor touches files; `PolarChart` renders it with Matplotlib.

The composition workflow:
1. Normalise the coordinate columns of the data
2. Subsample the data if a precision is requested
3. Cut the world coastline around the data (unless an overlay is given)
4. Build the geometry layer from the per-geometry policy
5. Put the coastline above the data
6. Choose colour scales for fill and colour
7. Apply the theme
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

import pandas as pd

from .basemap import ProjectionSpec, Theme, polar_projection
from .scales import ScaleDescriptor, SizeScale, normalize_aesthetic, select_scale
from ..calculations.coastline import CoastlineOverlay, build_coastline_overlay, data_extent
from ..calculations.subsample import Precision, subsample
from ..config import Config
from ..constants import COLOUR_AESTHETICS, COORDINATE_ALIASES, GEOMETRIES, GEOMETRY_POLICIES
from ..data.coastline import natural_earth_coastline
from ..data.dataset import Dataset
from ..exceptions import UnsupportedGeometryError

logger = logging.getLogger("polar_charts.rendering.scene")


@dataclass(frozen=True)
class GeometryPolicy:
    """
    What a geometry adds to the caller's mapping.

    Attributes:
        implicit_mapping: Aesthetics bound by default; the caller's bindings win
        size_range: Range of the size scale, None for no size scale
        size_guide: Whether the size scale has a legend
    """

    implicit_mapping: Mapping[str, str] = field(default_factory=dict)
    size_range: Optional[Tuple[float, float]] = None
    size_guide: bool = False


def get_geometry_policy(geom: str) -> GeometryPolicy:
    """
    Look up the policy of a geometry.

    Raises:
        UnsupportedGeometryError: If geom is neither "point" nor "tile"
    """
    if geom not in GEOMETRY_POLICIES:
        raise UnsupportedGeometryError(
            f"Unsupported geometry '{geom}'. Available geometries: {', '.join(GEOMETRIES)}"
        )
    return GeometryPolicy(**GEOMETRY_POLICIES[geom])


@dataclass(frozen=True)
class GeomLayer:
    """
    Data layer of a scene.

    Attributes:
        geom: "point" or "tile"
        mapping: Aesthetic name -> column name, implicit bindings included
        options: Passed verbatim to the Matplotlib drawing call
    """

    geom: str
    mapping: Mapping[str, str]
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class Scene:
    """
    Renderable description of a polar chart.

    Layers are drawn in order: the geometry layer, then the coastline.
    """

    data: Dataset
    projection: ProjectionSpec
    geom_layer: GeomLayer
    coastline: CoastlineOverlay
    scales: Tuple[ScaleDescriptor, ...] = ()
    size_scale: Optional[SizeScale] = None
    theme: Theme = field(default_factory=Theme)

    @property
    def layers(self) -> Tuple[Any, ...]:
        return (self.geom_layer, self.coastline)

    def scale_for(self, aesthetic: str) -> Optional[ScaleDescriptor]:
        for scale in self.scales:
            if scale.aesthetic == aesthetic:
                return scale
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scene):
            return NotImplemented
        return (
            self.data == other.data
            and self.projection == other.projection
            and self.geom_layer == other.geom_layer
            and self.coastline == other.coastline
            and self.scales == other.scales
            and self.size_scale == other.size_scale
            and self.theme == other.theme
        )


def _normalize_mapping(mapping: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Normalise aesthetic names, and coordinate aliases among the mapped columns."""
    aliases = {
        alias: canonical
        for canonical, names in COORDINATE_ALIASES.items()
        for alias in names
    }
    return {
        normalize_aesthetic(k): aliases.get(str(v).lower(), v)
        for k, v in (mapping or {}).items()
    }


def compose_scene(
    data: Any,
    mapping: Optional[Mapping[str, str]] = None,
    geom: str = "point",
    precision: Optional[Precision] = None,
    coast: Optional[CoastlineOverlay] = None,
    geom_options: Optional[Mapping[str, Any]] = None,
    config: Optional[Config] = None,
    coastline_source: Optional[pd.DataFrame] = None,
) -> Scene:
    """
    Compose the scene of data viewed from the South Pole.

    Args:
        data: Records with latitude and longitude columns (any accepted
            alias) and the variables to plot; a DataFrame, an xarray object,
            plain records or an already ingested Dataset
        mapping: Aesthetic (fill, colour, size, alpha, ...) -> column name
        geom: "point" (the default) or "tile"
        precision: Precision at which lat and lon are considered. If coarser
            than the data, the data is *subsampled*: some records are dropped.
        coast: Coastline overlay to use verbatim; if None, the world
            coastline is cut around the data
        geom_options: Passed to the geometry's drawing call
        config: Configuration (palettes, coastline, sizes, projection)
        coastline_source: World coastline to cut instead of Natural Earth's

    Returns:
        Scene ready for rendering

    Raises:
        UnsupportedGeometryError: If geom is not supported
        SchemaError: If lat/lon cannot be identified or a mapped column is missing
        PaletteSelectionError: If a configured palette does not exist

    Example:
        >>> scene = compose_scene(df, {"fill": "sst"}, geom="point")
        >>> scene.scale_for("fill").kind
        <ScaleKind.CONTINUOUS: 'continuous'>
    """
    config = config if config is not None else Config()
    policy = get_geometry_policy(geom)

    dataset = data if isinstance(data, Dataset) else Dataset.from_raw(data)
    user_mapping = _normalize_mapping(mapping)
    dataset.require_columns(user_mapping.values())

    logger.info(
        f"Composing {geom} scene of {len(dataset)} records, "
        f"mapping={user_mapping or '{}'}"
    )

    # if new precisions are specified for lat or lon, subsample the data
    if precision is not None and precision.is_set:
        dataset = dataset.with_frame(subsample(dataset.frame, precision))

    if dataset.is_empty:
        logger.warning("No data to plot, the scene will be empty")

    # get and re-cut the coastline if none is provided
    if coast is None:
        source = (
            coastline_source
            if coastline_source is not None
            else natural_earth_coastline(config.coastline_resolution)
        )
        coast = build_coastline_overlay(
            source,
            data_extent(dataset.frame),
            expand=config.coast_expand,
            symmetric=config.symmetric_coast_clip,
            colour=config.coastline_colour,
            linewidth=config.coastline_linewidth,
        )
        logger.info(
            f"Coastline cut to {coast.vertex_count} vertices in {len(coast.segments)} segments"
        )
    else:
        logger.debug("Using caller-supplied coastline overlay")

    geom_layer = GeomLayer(
        geom=geom,
        mapping={**policy.implicit_mapping, **user_mapping},
        options=dict(geom_options or {}),
    )

    size_scale = None
    if policy.size_range is not None:
        size_scale = SizeScale(range=tuple(config.point_size_range), guide_visible=policy.size_guide)

    # use nice ColorBrewer colours
    scales = []
    for aesthetic in COLOUR_AESTHETICS:
        if aesthetic not in user_mapping:
            continue
        column = user_mapping[aesthetic]
        scale = select_scale(
            dataset.frame[column],
            aesthetic,
            dataset.kind_of(column),
            continuous_palette=config.continuous_palette,
            continuous_size=config.continuous_palette_size,
            categorical_palette=config.categorical_palette,
            max_levels=config.max_brewer_levels,
        )
        if scale is not None:
            scales.append(scale)

    scene = Scene(
        data=dataset,
        projection=polar_projection(config.projection, config.orientation),
        geom_layer=geom_layer,
        coastline=coast,
        scales=tuple(scales),
        size_scale=size_scale,
        theme=Theme(y_label=config.y_label),
    )
    logger.info(
        f"Scene composed: {geom} layer, {len(scales)} colour scale(s), "
        f"size scale={'yes' if size_scale else 'no'}"
    )
    return scene
