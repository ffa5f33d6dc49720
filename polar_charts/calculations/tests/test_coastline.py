"""
test of polar_charts.calculations.coastline
"""

import numpy as np
import pandas as pd
import pytest

from polar_charts.calculations.coastline import (
    BoundingBox,
    CoastlineOverlay,
    DataExtent,
    build_coastline_overlay,
    clip_coastline,
    data_extent,
    padded_bbox,
)
from polar_charts.exceptions import SchemaError

nan = np.nan

# Three paths: one crossing the upper latitude bound, one outside the
# longitude window, one entering it from the west.
SMALL_COAST = pd.DataFrame(
    {
        "lon": [10.0, 10.0, 10.0, 10.0, nan, 50.0, 50.0, nan, -5.0, 0.0, 5.0],
        "lat": [-89.0, -70.0, -55.0, -65.0, nan, -70.0, -75.0, nan, -70.0, -70.0, -70.0],
    }
)

EXTENT = DataExtent(lat_range=(-80.0, -60.0), lon_range=(0.0, 30.0))


def test_clip_bounds(world_coastline):
    """test no kept vertex lies outside the padded box, and no lower latitude bound"""
    segments = clip_coastline(world_coastline, EXTENT)
    assert segments

    vertices = np.vstack(segments)
    assert vertices[:, 0].min() >= -2.0
    assert vertices[:, 0].max() <= 32.0
    assert vertices[:, 1].max() <= -58.0

    # a vertex at lat = -89 within the lon window is kept
    assert vertices[:, 1].min() == -89.0
    assert ((vertices[:, 1] == -89.0) & (vertices[:, 0] == 10.0)).any()


def test_clip_segments():
    """test dropped vertices split the paths and runs are kept in order"""
    segments = clip_coastline(SMALL_COAST, EXTENT)

    assert len(segments) == 3
    np.testing.assert_array_equal(segments[0], [[10.0, -89.0], [10.0, -70.0]])
    np.testing.assert_array_equal(segments[1], [[10.0, -65.0]])
    np.testing.assert_array_equal(segments[2], [[0.0, -70.0], [5.0, -70.0]])


def test_clip_symmetric():
    """test the opt-in lower latitude bound"""
    segments = clip_coastline(SMALL_COAST, EXTENT, symmetric=True)

    vertices = np.vstack(segments)
    assert vertices[:, 1].min() >= -82.0
    np.testing.assert_array_equal(segments[0], [[10.0, -70.0]])


def test_clip_expand():
    """test the padding around the data"""
    segments = clip_coastline(SMALL_COAST, EXTENT, expand=0.0)
    vertices = np.vstack(segments)
    assert vertices[:, 1].max() <= -60.0
    assert vertices[:, 0].min() >= 0.0


def test_clip_does_not_modify_source():
    """test the coastline source is only read"""
    source = SMALL_COAST.copy()
    segments = clip_coastline(source, EXTENT)
    segments[0][:] = 0.0
    pd.testing.assert_frame_equal(source, SMALL_COAST)


def test_clip_without_extent():
    """test no data gives no coastline"""
    assert clip_coastline(SMALL_COAST, None) == []


def test_clip_needs_lon_lat():
    """test a source without lon/lat is a schema error"""
    with pytest.raises(SchemaError):
        clip_coastline(pd.DataFrame({"x": [1.0], "y": [2.0]}), EXTENT)


def test_data_extent():
    """test the extent ignores missing coordinates"""
    df = pd.DataFrame({"lat": [-80.0, nan, -60.0], "lon": [0.0, 45.0, 30.0]})
    extent = data_extent(df)
    assert extent == DataExtent(lat_range=(-80.0, -60.0), lon_range=(0.0, 30.0))

    empty = pd.DataFrame({"lat": pd.Series(dtype=float), "lon": pd.Series(dtype=float)})
    assert data_extent(empty) is None


def test_padded_bbox():
    """test the box is the extent widened by expand degrees"""
    assert padded_bbox(EXTENT) == BoundingBox(lon_min=-2.0, lon_max=32.0, lat_max=-58.0)
    assert padded_bbox(EXTENT, expand=5.0, symmetric=True) == BoundingBox(
        lon_min=-5.0, lon_max=35.0, lat_max=-55.0, lat_min=-85.0
    )


def test_bbox_contains():
    """test NaN vertices are never inside"""
    bbox = BoundingBox(lon_min=0.0, lon_max=10.0, lat_max=-50.0)
    inside = bbox.contains(np.array([5.0, nan, 5.0, 11.0]), np.array([-89.0, -60.0, -49.0, -60.0]))
    assert list(inside) == [True, False, False, False]


def test_overlay():
    """test the overlay keeps the segments apart"""
    overlay = build_coastline_overlay(SMALL_COAST, EXTENT, colour="black", linewidth=1.0)

    assert overlay.vertex_count == 5
    assert overlay.colour == "black"
    assert overlay.linewidth == 1.0

    frame = overlay.to_frame()
    assert len(frame) == 5 + 2
    assert frame["lat"].isna().sum() == 2

    assert overlay == build_coastline_overlay(SMALL_COAST, EXTENT, colour="black", linewidth=1.0)
    assert overlay != build_coastline_overlay(SMALL_COAST, EXTENT, symmetric=True)


def test_empty_overlay():
    """test an overlay without segments"""
    overlay = CoastlineOverlay()
    assert overlay.vertex_count == 0
    assert len(overlay.to_frame()) == 0
