"""
shared fixtures for the polar_charts tests
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402


@pytest.fixture
def world_coastline():
    """parallels every degree from -89 to 89, each a path over all longitudes (2 degree steps)"""
    lons = np.arange(-180.0, 181.0, 2.0)
    pieces = []
    for lat in np.arange(-89.0, 90.0, 1.0):
        if pieces:
            pieces.append(np.full((1, 2), np.nan))
        pieces.append(np.column_stack((lons, np.full(lons.size, lat))))
    vertices = np.vstack(pieces)
    return pd.DataFrame({"lon": vertices[:, 0], "lat": vertices[:, 1]})


@pytest.fixture
def transect():
    """18 records from (-85, 10) to (-60, 40) with a numeric variable v from 1.0 to 9.5"""
    n = 18
    return pd.DataFrame(
        {
            "lat": np.linspace(-85.0, -60.0, n),
            "lon": np.linspace(10.0, 40.0, n),
            "v": np.linspace(1.0, 9.5, n),
        }
    )


@pytest.fixture
def grid():
    """regular 0.5 degree lat/lon grid south of 60S with numeric and categorical variables"""
    lats = np.arange(-80.0, -59.5, 0.5)
    lons = np.arange(0.0, 30.5, 0.5)
    lon2d, lat2d = np.meshgrid(lons, lats)
    lat = lat2d.ravel()
    lon = lon2d.ravel()
    return pd.DataFrame(
        {
            "lat": lat,
            "lon": lon,
            "temp": np.cos(np.radians(lat)) * 10 + lon / 10,
            "zone": np.where(lat < -70, "inner", "outer"),
        }
    )


@pytest.fixture(autouse=True)
def close_figures():
    """close all figures opened by a test"""
    yield
    plt.close("all")
