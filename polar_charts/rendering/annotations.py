"""
Annotation module for polar chart guides.

This module adds the guides of the colour scales to a rendered chart: a
colour bar for continuous scales and a legend for discrete ones. The size
scale of point charts never has a guide.
"""

import logging
from typing import Any, Dict

import matplotlib.pyplot as plt
from matplotlib.lines import Line2D

from .layers import ColourMapping
from .scene import Scene
from ..constants import COLORBAR_LABEL_SIZE, LEGEND_FONT_SIZE

logger = logging.getLogger("polar_charts.rendering.annotations")

LEGEND_MARKERS = {
    "point": "o",
    "tile": "s",
}


def add_colorbar(fig: plt.Figure, ax: plt.Axes, mapping: ColourMapping) -> Any:
    """
    Add a vertical colour bar for a continuous colour mapping.

    Returns:
        Colorbar object
    """
    cbar = fig.colorbar(mapping.mappable(), ax=ax, shrink=0.6, pad=0.08)
    cbar.set_label(mapping.column, fontsize=COLORBAR_LABEL_SIZE + 2)
    cbar.ax.tick_params(labelsize=COLORBAR_LABEL_SIZE)
    logger.debug(f"Colour bar added for {mapping.aesthetic}={mapping.column}")
    return cbar


def add_legend(ax: plt.Axes, mapping: ColourMapping, geom: str, position: int = 0) -> Any:
    """
    Add a legend with one entry per level of a discrete colour mapping.

    Legends are stacked to the right of the map, `position` counting from
    the top.
    """
    marker = LEGEND_MARKERS.get(geom, "o")
    handles = [
        Line2D(
            [], [],
            marker=marker,
            linestyle="",
            markerfacecolor=colour,
            markeredgecolor=colour,
            label=str(level),
        )
        for level, colour in zip(mapping.levels, mapping.level_colours)
    ]
    legend = ax.legend(
        handles=handles,
        title=mapping.column,
        loc="upper left",
        bbox_to_anchor=(1.02, 1.0 - 0.5 * position),
        fontsize=LEGEND_FONT_SIZE,
        title_fontsize=LEGEND_FONT_SIZE + 1,
        frameon=False,
    )
    # keep earlier legends when adding another one
    ax.add_artist(legend)
    logger.debug(f"Legend added for {mapping.aesthetic}={mapping.column} ({len(handles)} levels)")
    return legend


def add_guides(
    fig: plt.Figure,
    ax: plt.Axes,
    scene: Scene,
    colour_maps: Dict[str, ColourMapping]
) -> Dict[str, Any]:
    """
    Add the guide of every colour mapping whose scale shows one.

    Args:
        fig: Matplotlib figure
        ax: Map axes
        scene: Scene being rendered
        colour_maps: ColourMapping per mapped colour aesthetic

    Returns:
        Dictionary aesthetic -> Colorbar or Legend
    """
    guides = {}
    legends = 0
    for aesthetic, mapping in colour_maps.items():
        scale = scene.scale_for(aesthetic)
        if scale is not None and not scale.guide_visible:
            continue
        if mapping.continuous:
            guides[aesthetic] = add_colorbar(fig, ax, mapping)
        elif mapping.levels:
            guides[aesthetic] = add_legend(ax, mapping, scene.geom_layer.geom, position=legends)
            legends += 1

    logger.info(f"Added {len(guides)} guide(s)")
    return guides
