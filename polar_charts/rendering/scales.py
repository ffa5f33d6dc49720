"""
Colour and size scales for polar charts.

This module chooses a ColorBrewer-based colour scale from the statistical
type of the mapped variable:
- numeric data gets a continuous, diverging gradient (Spectral, 6 colours,
  reversed so that the direction matches the data better)
- categorical data gets the qualitative Set3 palette when it has at most 12
  levels, and the default categorical colours of the renderer otherwise

http://colorbrewer2.org/
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors

from ..constants import (
    AESTHETIC_ALIASES,
    BREWER_PALETTES,
    COLOUR_AESTHETICS,
    CONTINUOUS_PALETTE_SIZE,
    CONTINUOUS_PALETTE_TYPES,
    DEFAULT_CATEGORICAL_PALETTE,
    DEFAULT_CONTINUOUS_PALETTE,
    MAX_BREWER_LEVELS,
)
from ..data.dataset import ColumnKind
from ..exceptions import InvalidParameterError, PaletteSelectionError

logger = logging.getLogger("polar_charts.rendering.scales")


class ScaleKind(Enum):
    CONTINUOUS = "continuous"
    DISCRETE_BREWER = "discrete-brewer"
    DISCRETE_DEFAULT = "discrete-default"


@dataclass(frozen=True)
class ScaleDescriptor:
    """
    Colour scale attached to the fill or colour aesthetic.

    Attributes:
        aesthetic: "fill" or "colour"
        kind: Continuous gradient, ColorBrewer palette or renderer default
        palette_colors: Hex colours, in the order they are used. Empty for
            the renderer default.
        guide: "colorbar", "legend" or None when hidden
        palette_name: ColorBrewer palette the colours come from
    """

    aesthetic: str
    kind: ScaleKind
    palette_colors: Tuple[str, ...] = ()
    guide: Optional[str] = None
    palette_name: Optional[str] = None

    @property
    def guide_visible(self) -> bool:
        return self.guide is not None

    @property
    def is_continuous(self) -> bool:
        return self.kind is ScaleKind.CONTINUOUS


@dataclass(frozen=True)
class SizeScale:
    """Linear size scale mapping the data range onto `range`."""

    range: Tuple[float, float] = (0.5, 1.5)
    guide_visible: bool = False
    aesthetic: str = "size"


def normalize_aesthetic(name: str) -> str:
    """Accept the American spelling of colour."""
    return AESTHETIC_ALIASES.get(name, name)


def _check_colour_aesthetic(aesthetic: str) -> str:
    aesthetic = normalize_aesthetic(aesthetic)
    if aesthetic not in COLOUR_AESTHETICS:
        raise InvalidParameterError(
            f"Colour scales apply to {' or '.join(COLOUR_AESTHETICS)}, not '{aesthetic}'"
        )
    return aesthetic


# ============================================================================
# Palette table
# ============================================================================

def palette_by_name(name: str, categories: Tuple[str, ...] = ("div", "qual", "seq")) -> str:
    """
    Look a palette up by name.

    Args:
        name: ColorBrewer palette name (e.g. "Spectral", "Set3")
        categories: Palette categories accepted

    Returns:
        The palette name

    Raises:
        PaletteSelectionError: If no palette of an accepted category has that name
    """
    info = BREWER_PALETTES.get(name)
    if info is None or info["category"] not in categories:
        available = [n for n, i in BREWER_PALETTES.items() if i["category"] in categories]
        raise PaletteSelectionError(
            f"Unknown palette '{name}'. Available palettes: {', '.join(available)}"
        )
    return name


def palette_by_index(index: int, palette_type: str = "div") -> str:
    """
    Look a continuous palette up by its position in the ColorBrewer table.

    Args:
        index: Zero-based position among the palettes of `palette_type`
        palette_type: "div" (diverging) or "seq" (sequential)

    Returns:
        The palette name

    Raises:
        PaletteSelectionError: If the type is unknown or the index out of range
    """
    if palette_type not in CONTINUOUS_PALETTE_TYPES:
        raise PaletteSelectionError(
            f"Palette type must be one of {', '.join(CONTINUOUS_PALETTE_TYPES)}, got '{palette_type}'"
        )
    names = [n for n, i in BREWER_PALETTES.items() if i["category"] == palette_type]
    if not 0 <= index < len(names):
        raise PaletteSelectionError(
            f"Palette index {index} out of range for type '{palette_type}' (0-{len(names) - 1})"
        )
    return names[index]


def palette_colors(name: str, n: int) -> Tuple[str, ...]:
    """
    Get `n` colours of a ColorBrewer palette as hex strings.

    Qualitative palettes return their first `n` colours; diverging and
    sequential ones are sampled evenly from end to end. Asking for more
    colours than a palette has returns all of them.
    """
    palette_by_name(name)
    max_colors = BREWER_PALETTES[name]["max_colors"]
    if n > max_colors:
        logger.warning(f"Palette {name} has {max_colors} colours at most, {n} requested")
        n = max_colors

    cmap = plt.get_cmap(name)
    if BREWER_PALETTES[name]["category"] == "qual":
        colors = cmap.colors[:n]
    else:
        colors = [cmap(x) for x in np.linspace(0.0, 1.0, n)]
    return tuple(mcolors.to_hex(c) for c in colors)


# ============================================================================
# Scale constructors
# ============================================================================

def continuous_scale_by_name(
    aesthetic: str,
    name: str = DEFAULT_CONTINUOUS_PALETTE,
    n_colours: int = CONTINUOUS_PALETTE_SIZE,
    guide: Optional[str] = "colorbar",
) -> ScaleDescriptor:
    """
    Continuous colour scale based on a diverging or sequential ColorBrewer palette.

    Only a few colours are sampled: using the maximum number of colours
    gives palettes that are a little too saturated to behave well in a
    continuous gradient. The colours are reversed because that matches the
    direction of the data better.

    Example:
        >>> scale = continuous_scale_by_name("fill", "Spectral")
        >>> len(scale.palette_colors)
        6
    """
    aesthetic = _check_colour_aesthetic(aesthetic)
    name = palette_by_name(name, categories=CONTINUOUS_PALETTE_TYPES)
    colours = palette_colors(name, n_colours)[::-1]
    return ScaleDescriptor(
        aesthetic=aesthetic,
        kind=ScaleKind.CONTINUOUS,
        palette_colors=colours,
        guide=guide,
        palette_name=name,
    )


def continuous_scale_by_index(
    aesthetic: str,
    index: int,
    palette_type: str = "div",
    n_colours: int = CONTINUOUS_PALETTE_SIZE,
    guide: Optional[str] = "colorbar",
) -> ScaleDescriptor:
    """Continuous colour scale using the `index`-th palette of `palette_type`."""
    name = palette_by_index(index, palette_type)
    return continuous_scale_by_name(aesthetic, name, n_colours=n_colours, guide=guide)


def discrete_brewer_scale(
    aesthetic: str,
    name: str = DEFAULT_CATEGORICAL_PALETTE,
    guide: Optional[str] = "legend",
) -> ScaleDescriptor:
    """Discrete colour scale using the full set of colours of a ColorBrewer palette."""
    aesthetic = _check_colour_aesthetic(aesthetic)
    name = palette_by_name(name)
    return ScaleDescriptor(
        aesthetic=aesthetic,
        kind=ScaleKind.DISCRETE_BREWER,
        palette_colors=palette_colors(name, BREWER_PALETTES[name]["max_colors"]),
        guide=guide,
        palette_name=name,
    )


def discrete_default_scale(aesthetic: str) -> ScaleDescriptor:
    """Defer to the renderer's default categorical colours."""
    aesthetic = _check_colour_aesthetic(aesthetic)
    return ScaleDescriptor(aesthetic=aesthetic, kind=ScaleKind.DISCRETE_DEFAULT, guide="legend")


def count_levels(values: pd.Series) -> int:
    """Number of levels of a categorical column (declared categories if any)."""
    if isinstance(values.dtype, pd.CategoricalDtype):
        return len(values.cat.categories)
    return int(values.nunique(dropna=True))


def select_scale(
    values: pd.Series,
    aesthetic: str,
    kind: Optional[ColumnKind],
    continuous_palette: str = DEFAULT_CONTINUOUS_PALETTE,
    continuous_size: int = CONTINUOUS_PALETTE_SIZE,
    categorical_palette: str = DEFAULT_CATEGORICAL_PALETTE,
    max_levels: int = MAX_BREWER_LEVELS,
) -> Optional[ScaleDescriptor]:
    """
    Choose a nice ColorBrewer scale for the data mapped to fill or colour.

    Args:
        values: Data mapped to the aesthetic
        aesthetic: "fill" or "colour"
        kind: Statistical type of the data, determined at ingestion
        continuous_palette: Palette used for numeric data
        continuous_size: Number of colours sampled for numeric data
        categorical_palette: Palette used for categorical data
        max_levels: Largest number of levels drawn with the categorical
            palette (also capped by the number of colours of the palette)

    Returns:
        ScaleDescriptor, or None when the data is neither numeric nor categorical

    Raises:
        InvalidParameterError: If the aesthetic is not a colour aesthetic
        PaletteSelectionError: If a palette name is unknown
    """
    aesthetic = _check_colour_aesthetic(aesthetic)

    if kind is ColumnKind.NUMERIC:
        # continuous, diverging scale
        scale = continuous_scale_by_name(aesthetic, continuous_palette, n_colours=continuous_size)
    elif kind is ColumnKind.CATEGORICAL:
        # ColorBrewer scale only when possible, otherwise the default colours
        palette = palette_by_name(categorical_palette)
        limit = min(max_levels, BREWER_PALETTES[palette]["max_colors"])
        n_levels = count_levels(values)
        if n_levels <= limit:
            scale = discrete_brewer_scale(aesthetic, palette)
        else:
            scale = discrete_default_scale(aesthetic)
        logger.debug(f"{aesthetic}: {n_levels} levels (brewer limit {limit})")
    else:
        logger.debug(f"No colour scale for {aesthetic}: data of type {values.dtype}")
        return None

    logger.debug(f"Selected {scale.kind.value} scale for {aesthetic} ({scale.palette_name})")
    return scale
