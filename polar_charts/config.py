"""
Configuration management for PolarCharts package.

This module provides configuration options for polar chart generation
including coastline clipping, palettes, point sizing, projection and
figure output settings.
"""

import json
import yaml
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Tuple

from .constants import (
    BREWER_PALETTES,
    CONTINUOUS_PALETTE_TYPES,
    COAST_EXPAND,
    COASTLINE_COLOR,
    COASTLINE_LINEWIDTH,
    COASTLINE_RESOLUTIONS,
    CONTINUOUS_PALETTE_SIZE,
    DEFAULT_CATEGORICAL_PALETTE,
    DEFAULT_CONTINUOUS_PALETTE,
    DEFAULT_ORIENTATION,
    DEFAULT_PROJECTION,
    MAX_BREWER_LEVELS,
    Y_AXIS_LABEL,
)
from .exceptions import InvalidParameterError


@dataclass
class Config:
    """Configuration for polar chart generation.

    Attributes:
        coast_expand: Degrees added around the data extent when cutting the
            coastline.
        symmetric_coast_clip: Also apply a lower latitude bound when cutting
            the coastline. Off by default, only the upper bound is applied.
        coastline_resolution: Natural Earth scale of the default coastline
            ('110m', '50m' or '10m').
        coastline_colour: Colour of the coastline path.
        coastline_linewidth: Line width of the coastline path.
        point_size_range: Output range of the implicit size-by-latitude scale.
        point_scale: Multiplier from size units to matplotlib marker area.
        continuous_palette: ColorBrewer palette for numeric variables.
        continuous_palette_size: Number of colours sampled from it.
        categorical_palette: ColorBrewer palette for categorical variables.
        max_brewer_levels: Largest number of levels drawn with the categorical
            palette; beyond that the renderer's default colours are used.
        projection: Map projection name.
        orientation: (latitude, longitude, rotation) of the projection centre.
        y_label: Title of the y axis.
        default_dpi: Resolution for output images (dots per inch).
        figure_width: Width of generated figures in inches.
        figure_height: Height of generated figures in inches.
    """

    coast_expand: float = COAST_EXPAND
    symmetric_coast_clip: bool = False
    coastline_resolution: str = "110m"
    coastline_colour: str = COASTLINE_COLOR
    coastline_linewidth: float = COASTLINE_LINEWIDTH
    point_size_range: Tuple[float, float] = (0.5, 1.5)
    point_scale: float = 20.0
    continuous_palette: str = DEFAULT_CONTINUOUS_PALETTE
    continuous_palette_size: int = CONTINUOUS_PALETTE_SIZE
    categorical_palette: str = DEFAULT_CATEGORICAL_PALETTE
    max_brewer_levels: int = MAX_BREWER_LEVELS
    projection: str = DEFAULT_PROJECTION
    orientation: Tuple[float, float, float] = DEFAULT_ORIENTATION
    y_label: str = Y_AXIS_LABEL
    default_dpi: int = 90
    figure_width: float = 12.0
    figure_height: float = 9.0

    def __post_init__(self):
        """Normalise values loaded from text formats."""
        # YAML and JSON give lists
        self.point_size_range = tuple(self.point_size_range)
        self.orientation = tuple(self.orientation)

    @classmethod
    def load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a YAML or JSON file.

        Args:
            path: Path to configuration file (.yaml, .yml, or .json).

        Returns:
            Config instance with loaded settings.

        Raises:
            ValueError: If file format is not supported.
            FileNotFoundError: If file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r') as f:
            if path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif path.suffix == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

        return cls(**(data or {}))

    def save_to_file(self, path: Path) -> None:
        """Save configuration to a YAML or JSON file.

        Args:
            path: Path where configuration should be saved.

        Raises:
            ValueError: If file format is not supported.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = asdict(self)
        data['point_size_range'] = list(data['point_size_range'])
        data['orientation'] = list(data['orientation'])

        with open(path, 'w') as f:
            if path.suffix in ['.yaml', '.yml']:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            elif path.suffix == '.json':
                json.dump(data, f, indent=2)
            else:
                raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

    def validate(self) -> bool:
        """Validate configuration parameters.

        Returns:
            True if configuration is valid.

        Raises:
            InvalidParameterError: If any configuration parameter is invalid.
        """
        if self.coast_expand < 0:
            raise InvalidParameterError("coast_expand must be non-negative")

        if not isinstance(self.symmetric_coast_clip, bool):
            raise InvalidParameterError("symmetric_coast_clip must be a boolean")

        if self.coastline_resolution not in COASTLINE_RESOLUTIONS:
            raise InvalidParameterError(
                f"coastline_resolution must be one of {COASTLINE_RESOLUTIONS}"
            )

        if self.coastline_linewidth <= 0:
            raise InvalidParameterError("coastline_linewidth must be positive")

        if len(self.point_size_range) != 2 or not (0 < self.point_size_range[0] <= self.point_size_range[1]):
            raise InvalidParameterError("point_size_range must be (low, high) with 0 < low <= high")

        if self.point_scale <= 0:
            raise InvalidParameterError("point_scale must be positive")

        continuous = BREWER_PALETTES.get(self.continuous_palette)
        if continuous is None or continuous["category"] not in CONTINUOUS_PALETTE_TYPES:
            raise InvalidParameterError(
                f"continuous_palette must be a diverging or sequential ColorBrewer palette, "
                f"got '{self.continuous_palette}'"
            )

        if not isinstance(self.continuous_palette_size, int) or self.continuous_palette_size < 2:
            raise InvalidParameterError("continuous_palette_size must be an integer >= 2")

        if self.categorical_palette not in BREWER_PALETTES:
            raise InvalidParameterError(
                f"categorical_palette '{self.categorical_palette}' is not a ColorBrewer palette"
            )

        if not isinstance(self.max_brewer_levels, int) or self.max_brewer_levels < 1:
            raise InvalidParameterError("max_brewer_levels must be an integer >= 1")

        if len(self.orientation) != 3:
            raise InvalidParameterError("orientation must be (latitude, longitude, rotation)")

        if self.default_dpi <= 0:
            raise InvalidParameterError("default_dpi must be positive")

        if self.figure_width <= 0 or self.figure_height <= 0:
            raise InvalidParameterError("Figure dimensions must be positive")

        return True
