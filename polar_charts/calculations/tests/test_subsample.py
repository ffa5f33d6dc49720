"""
test of polar_charts.calculations.subsample
"""

import numpy as np
import pandas as pd
import pytest

from polar_charts.calculations.subsample import Precision, round_any, subsample
from polar_charts.exceptions import InvalidParameterError, SchemaError


@pytest.mark.parametrize(
    "values,accuracy,expected",
    [
        ([0.25, -0.25, 0.75], 0.5, [0.5, -0.5, 1.0]),
        ([2.5, -2.5, 3.5], 1.0, [3.0, -3.0, 4.0]),
        ([-77.3, -76.1, 12.4], 1.0, [-77.0, -76.0, 12.0]),
        ([-71.0, -73.0, 14.0], 5.0, [-70.0, -75.0, 15.0]),
        ([0.3, 0.7], 0.1, [0.3, 0.7]),
    ],
)
def test_round_any(values, accuracy, expected):
    """test rounding to a multiple, ties away from zero"""
    np.testing.assert_array_equal(round_any(values, accuracy), expected)


def test_round_any_keeps_nan():
    """test NaN is not rounded to a number"""
    result = round_any([np.nan, 1.2], 1.0)
    assert np.isnan(result[0])
    assert result[1] == 1.0


def test_absent_axis_is_identity(grid):
    """test an axis without precision drops no rows"""
    result = subsample(grid, Precision(lat=None, lon=None))
    pd.testing.assert_frame_equal(result, grid)

    result = subsample(grid, None)
    pd.testing.assert_frame_equal(result, grid)

    # only lat is filtered: each kept lat keeps all its longitudes
    result = subsample(grid, Precision(lat=1.0))
    n_lon = grid["lon"].nunique()
    assert (result.groupby("lat").size() == n_lon).all()


@pytest.mark.parametrize("p", [0.5, 0.25, 0.1])
def test_fine_precision_is_identity(grid, p):
    """test a precision finer than or equal to the grid spacing changes nothing"""
    result = subsample(grid, Precision(lat=p, lon=p))
    pd.testing.assert_frame_equal(result, grid)


@pytest.mark.parametrize("p", [1.0, 2.0, 5.0])
def test_coarse_precision_filters(grid, p):
    """test coarse precision drops rows and kept values are on the rounded set"""
    result = subsample(grid, Precision(lat=p, lon=p))

    assert len(result) <= len(grid)
    assert len(result) < len(grid)

    rounded_lats = set(round_any(grid["lat"].unique(), p))
    rounded_lons = set(round_any(grid["lon"].unique(), p))
    assert set(round_any(result["lat"].unique(), p)) <= rounded_lats
    assert set(result["lat"]) <= rounded_lats
    assert set(result["lon"]) <= rounded_lons


def test_subsample_filters_not_averages():
    """test kept records are the original records, untouched"""
    df = pd.DataFrame(
        {
            "lat": [-70.0, -70.5, -71.0, -71.5],
            "lon": [0.0, 0.0, 0.0, 0.0],
            "v": [1.0, 2.0, 3.0, 4.0],
        }
    )
    result = subsample(df, Precision(lat=1.0))

    # -70.5 rounds to -71 and -71.5 to -72: only exact -70 and -71 survive
    assert list(result["lat"]) == [-70.0, -71.0]
    assert list(result["v"]) == [1.0, 3.0]
    assert list(result.index) == [0, 2]


def test_subsample_tolerates_float_noise():
    """test values like 0.3 are found on a 0.1 grid"""
    df = pd.DataFrame({"lat": [-60.3, -60.35, -60.4], "lon": [0.3, 0.3, 0.3]})
    result = subsample(df, Precision(lat=0.1, lon=0.1))
    assert list(result["lat"]) == [-60.3, -60.4]


@pytest.mark.parametrize(
    "column,values",
    [
        ("lat", np.arange(-70, -69, 0.1)),
        ("lon", np.linspace(0, 3, 31)),
    ],
)
def test_generated_grid_at_native_spacing_is_identity(column, values):
    """test arange/linspace grids keep every record at their own spacing"""
    df = pd.DataFrame({"lat": -65.0, "lon": 10.0, "v": np.arange(len(values), dtype=float)})
    df[column] = values

    result = subsample(df, Precision(**{column: 0.1}))

    # the original values are kept, not their rounded counterparts
    pd.testing.assert_frame_equal(result, df)


def test_subsample_lat_then_lon():
    """test both axes are filtered"""
    df = pd.DataFrame(
        {
            "lat": [-70.0, -70.0, -70.5, -70.5],
            "lon": [10.0, 10.5, 10.0, 10.5],
        }
    )
    result = subsample(df, Precision(lat=1.0, lon=1.0))
    assert list(zip(result["lat"], result["lon"])) == [(-70.0, 10.0)]


def test_subsample_does_not_modify_input(grid):
    """test the input frame is left unchanged"""
    before = grid.copy()
    result = subsample(grid, Precision(lat=2.0, lon=2.0))
    result["temp"] = 0.0
    pd.testing.assert_frame_equal(grid, before)


def test_subsample_needs_coordinates():
    """test missing lat/lon is a schema error"""
    with pytest.raises(SchemaError):
        subsample(pd.DataFrame({"x": [1.0], "lon": [2.0]}), Precision(lat=1.0))


@pytest.mark.parametrize(
    "kwargs",
    [{"lat": 0.0}, {"lon": -1.0}, {"lat": float("nan")}, {"lon": float("inf")}],
)
def test_invalid_precision(kwargs):
    """test non-positive or non-finite precisions are rejected"""
    with pytest.raises(InvalidParameterError):
        Precision(**kwargs)


def test_precision_is_set():
    """test is_set reflects whether any axis has a precision"""
    assert not Precision().is_set
    assert Precision(lat=1.0).is_set
    assert Precision(lon=1.0).is_set
