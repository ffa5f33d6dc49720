"""
Basic Polar Chart Example

This example demonstrates how to plot data viewed from the South Pole using
the PolarCharts package. It builds a synthetic table of sea surface
temperatures and water masses south of 50S, then draws it three ways: points
coloured by a numeric variable, the same points subsampled to a coarser
precision, and tiles coloured by a categorical variable.

Output: Three PNG files in output/.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from polar_charts import Config, PolarChartsError, create_polar_chart, polar_plot

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# ============================================================================
# Synthetic Data
# ============================================================================

# 1 degree grid from 80S to 50S over a 90 degree sector
lats = np.arange(-80.0, -49.0, 1.0)
lons = np.arange(-30.0, 61.0, 1.0)
lon2d, lat2d = np.meshgrid(lons, lats)

data = pd.DataFrame({
    "latitude": lat2d.ravel(),
    "longitude": lon2d.ravel(),
})
data["sst"] = -1.8 + (data["latitude"] + 80.0) * 0.3 + np.sin(np.radians(data["longitude"] * 4))
data["water_mass"] = pd.cut(
    data["sst"],
    bins=[-np.inf, 0.0, 2.0, 5.0, np.inf],
    labels=["AASW", "WW", "SASW", "STW"],
)

print(f"Synthetic data: {len(data)} records")
print()

Path("output").mkdir(parents=True, exist_ok=True)
config = Config(figure_width=8.0, figure_height=8.0)

# ============================================================================
# Inspect the Scene
# ============================================================================

scene = polar_plot(data, {"colour": "sst"}, config=config)

print("Scene")
print("-" * 60)
print(f"Geometry: {scene.geom_layer.geom}")
print(f"Mapping: {dict(scene.geom_layer.mapping)}")
for scale in scene.scales:
    print(f"Scale {scale.aesthetic}: {scale.kind.value} {scale.palette_name} {scale.palette_colors}")
print(f"Coastline: {scene.coastline.vertex_count} vertices in {len(scene.coastline.segments)} segments")
print()

# ============================================================================
# Draw the Charts
# ============================================================================

charts = [
    ("points coloured by SST", dict(mapping={"colour": "sst"}), "output/sst_points.png"),
    (
        "points subsampled to 5 x 10 degrees",
        dict(mapping={"colour": "sst"}, lat_precision=5, lon_precision=10),
        "output/sst_points_subsampled.png",
    ),
    ("tiles by water mass", dict(mapping={"fill": "water_mass"}, geom="tile"), "output/water_masses.png"),
]

for title, kwargs, output_path in charts:
    print(f"Creating chart: {title}...")
    try:
        saved = create_polar_chart(data, output_path=output_path, config=config, **kwargs)
        print(f"  Success: {saved}")
    except PolarChartsError as e:
        print(f"  Error: {e}")

print()
print("=" * 60)
print("Polar charts complete!")
