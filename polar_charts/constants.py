"""
Constants and fixed parameters for PolarCharts package.

This module defines the column aliases accepted for coordinates, the
ColorBrewer palette table, the per-geometry aesthetic policies and the
styling constants used throughout the package.
"""

# ============================================================================
# Coordinate Columns
# ============================================================================

LAT_COLUMN = "lat"
LON_COLUMN = "lon"

# Lower-cased aliases mapped onto the canonical column names.
COORDINATE_ALIASES = {
    LAT_COLUMN: ("lat", "latitude"),
    LON_COLUMN: ("lon", "long", "longitude"),
}

# ============================================================================
# Aesthetics
# ============================================================================

COLOUR_AESTHETICS = ("fill", "colour")

AESTHETIC_ALIASES = {
    "color": "colour",
}

# ============================================================================
# ColorBrewer Palette Table
# ============================================================================

# name -> category ("div", "qual" or "seq") and maximum number of classes.
# Order within each category follows the ColorBrewer reference table, which
# is what palette indices refer to.
BREWER_PALETTES = {
    # Diverging
    "BrBG": {"category": "div", "max_colors": 11},
    "PiYG": {"category": "div", "max_colors": 11},
    "PRGn": {"category": "div", "max_colors": 11},
    "PuOr": {"category": "div", "max_colors": 11},
    "RdBu": {"category": "div", "max_colors": 11},
    "RdGy": {"category": "div", "max_colors": 11},
    "RdYlBu": {"category": "div", "max_colors": 11},
    "RdYlGn": {"category": "div", "max_colors": 11},
    "Spectral": {"category": "div", "max_colors": 11},
    # Qualitative
    "Accent": {"category": "qual", "max_colors": 8},
    "Dark2": {"category": "qual", "max_colors": 8},
    "Paired": {"category": "qual", "max_colors": 12},
    "Pastel1": {"category": "qual", "max_colors": 9},
    "Pastel2": {"category": "qual", "max_colors": 8},
    "Set1": {"category": "qual", "max_colors": 9},
    "Set2": {"category": "qual", "max_colors": 8},
    "Set3": {"category": "qual", "max_colors": 12},
    # Sequential
    "Blues": {"category": "seq", "max_colors": 9},
    "BuGn": {"category": "seq", "max_colors": 9},
    "BuPu": {"category": "seq", "max_colors": 9},
    "GnBu": {"category": "seq", "max_colors": 9},
    "Greens": {"category": "seq", "max_colors": 9},
    "Greys": {"category": "seq", "max_colors": 9},
    "Oranges": {"category": "seq", "max_colors": 9},
    "OrRd": {"category": "seq", "max_colors": 9},
    "PuBu": {"category": "seq", "max_colors": 9},
    "PuBuGn": {"category": "seq", "max_colors": 9},
    "PuRd": {"category": "seq", "max_colors": 9},
    "Purples": {"category": "seq", "max_colors": 9},
    "RdPu": {"category": "seq", "max_colors": 9},
    "Reds": {"category": "seq", "max_colors": 9},
    "YlGn": {"category": "seq", "max_colors": 9},
    "YlGnBu": {"category": "seq", "max_colors": 9},
    "YlOrBr": {"category": "seq", "max_colors": 9},
    "YlOrRd": {"category": "seq", "max_colors": 9},
}

CONTINUOUS_PALETTE_TYPES = ("div", "seq")

DEFAULT_CONTINUOUS_PALETTE = "Spectral"
DEFAULT_CATEGORICAL_PALETTE = "Set3"
# Using the full range of a palette gives gradients that are too saturated.
CONTINUOUS_PALETTE_SIZE = 6
MAX_BREWER_LEVELS = 12

# Colormap sampled by the renderer for categorical data with too many levels
# for a ColorBrewer palette.
DEFAULT_CATEGORICAL_CMAP = "hsv"

# ============================================================================
# Geometry Policies
# ============================================================================

GEOMETRIES = ("point", "tile")

# Aesthetics injected for each geometry unless the caller binds them, and the
# scales that come with them.
GEOMETRY_POLICIES = {
    "point": {
        "implicit_mapping": {"size": LAT_COLUMN},
        "size_range": (0.5, 1.5),
        "size_guide": False,
    },
    "tile": {
        "implicit_mapping": {},
        "size_range": None,
        "size_guide": False,
    },
}

# ============================================================================
# Projection
# ============================================================================

DEFAULT_PROJECTION = "stereographic"
# View from the South Pole: (latitude, longitude, rotation)
DEFAULT_ORIENTATION = (-90.0, 0.0, 0.0)

# ============================================================================
# Coastline
# ============================================================================

COAST_EXPAND = 2.0  # degrees of wiggle room around the data
COASTLINE_COLOR = "#7F7F7F"  # grey50
COASTLINE_LINEWIDTH = 0.5
COASTLINE_RESOLUTIONS = ("110m", "50m", "10m")

# ============================================================================
# Styling Constants
# ============================================================================

THEME_NAME = "bw"
Y_AXIS_LABEL = "Latitude"
X_AXIS_LABEL = "Longitude"

GRID_COLOR = "#CCCCCC"
GRID_LINEWIDTH = 0.3
GRID_LINESTYLE = "--"

AXIS_LABEL_SIZE = 10
COLORBAR_LABEL_SIZE = 8
LEGEND_FONT_SIZE = 8
