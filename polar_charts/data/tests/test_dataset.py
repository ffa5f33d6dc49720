"""
test of polar_charts.data.dataset
"""

import numpy as np
import pandas as pd
import pytest
import xarray as xr

from polar_charts.data.dataset import (
    ColumnKind,
    Dataset,
    as_dataframe,
    classify_column,
    normalize_coordinates,
)
from polar_charts.exceptions import SchemaError


@pytest.mark.parametrize(
    "lat_name,lon_name",
    [
        ("lat", "lon"),
        ("Latitude", "LONG"),
        ("LAT", "longitude"),
        ("latitude", "Lon"),
    ],
)
def test_coordinate_aliases(lat_name, lon_name):
    """test latitude and longitude aliases are renamed"""
    df = pd.DataFrame({lat_name: [-70.0], lon_name: [10.0], "v": [1.0]})
    result = normalize_coordinates(df)
    assert list(result.columns) == ["lat", "lon", "v"]


def test_missing_coordinate():
    """test the error lists the actual columns"""
    df = pd.DataFrame({"y": [-70.0], "lon": [10.0]})
    with pytest.raises(SchemaError, match="You have y, lon"):
        normalize_coordinates(df)


def test_ambiguous_coordinate():
    """test two latitude columns are refused"""
    df = pd.DataFrame({"lat": [-70.0], "latitude": [-70.0], "lon": [10.0]})
    with pytest.raises(SchemaError, match="Several columns could be lat"):
        normalize_coordinates(df)


@pytest.mark.parametrize(
    "values,kind",
    [
        (pd.Series([1.0, 2.5]), ColumnKind.NUMERIC),
        (pd.Series([1, 2]), ColumnKind.NUMERIC),
        (pd.Series(["a", "b"]), ColumnKind.CATEGORICAL),
        (pd.Series(["a", "b"], dtype="category"), ColumnKind.CATEGORICAL),
        (pd.Series([True, False]), ColumnKind.CATEGORICAL),
        (pd.Series(pd.to_datetime(["2020-01-01", "2020-01-02"])), None),
    ],
)
def test_classify_column(values, kind):
    """test the statistical type of columns"""
    assert classify_column(values) is kind


def test_as_dataframe_records():
    """test plain records are accepted"""
    df = as_dataframe([{"lat": -70.0, "lon": 10.0}, {"lat": -60.0, "lon": 20.0}])
    assert len(df) == 2
    assert list(df.columns) == ["lat", "lon"]


def test_as_dataframe_copies():
    """test a DataFrame input is not shared"""
    df = pd.DataFrame({"lat": [-70.0], "lon": [10.0]})
    result = as_dataframe(df)
    result.loc[0, "lat"] = 0.0
    assert df.loc[0, "lat"] == -70.0


def test_as_dataframe_xarray():
    """test a gridded DataArray becomes one record per cell"""
    da = xr.DataArray(
        np.arange(6.0).reshape(2, 3),
        coords={"latitude": [-70.0, -60.0], "longitude": [0.0, 10.0, 20.0]},
        dims=("latitude", "longitude"),
        name="sst",
    )
    ds = Dataset.from_raw(da)
    assert len(ds) == 6
    assert set(ds.frame.columns) == {"lat", "lon", "sst"}
    assert ds.kind_of("sst") is ColumnKind.NUMERIC


def test_as_dataframe_rejects_scalars():
    """test inputs that are not tables"""
    with pytest.raises(SchemaError):
        as_dataframe(3.0)


def test_dataset_from_raw():
    """test ingestion normalises names and classifies columns once"""
    df = pd.DataFrame(
        {
            "Latitude": [-70.0, -65.0],
            "Longitude": [10.0, 20.0],
            "sst": [1.2, 0.4],
            "mass": ["AASW", "CDW"],
        }
    )
    ds = Dataset.from_raw(df)

    assert list(ds.frame.columns) == ["lat", "lon", "sst", "mass"]
    assert ds.kind_of("sst") is ColumnKind.NUMERIC
    assert ds.kind_of("mass") is ColumnKind.CATEGORICAL
    assert ds.kind_of("missing") is None
    assert not ds.is_empty
    assert len(ds) == 2


def test_dataset_require_columns():
    """test a mapped column that does not exist"""
    ds = Dataset.from_raw(pd.DataFrame({"lat": [-70.0], "lon": [10.0], "v": [1.0]}))
    ds.require_columns(["v", "lat"])
    with pytest.raises(SchemaError, match="Mapped column.*w"):
        ds.require_columns(["v", "w"])


def test_dataset_with_frame():
    """test filtered datasets keep their column kinds"""
    ds = Dataset.from_raw(pd.DataFrame({"lat": [-70.0, -60.0], "lon": [10.0, 20.0], "v": ["a", "b"]}))
    sub = ds.with_frame(ds.frame.iloc[:1])
    assert len(sub) == 1
    assert sub.kind_of("v") is ColumnKind.CATEGORICAL

    with pytest.raises(SchemaError):
        ds.with_frame(ds.frame[["v"]])


def test_dataset_equality():
    """test datasets compare by value"""
    df = pd.DataFrame({"lat": [-70.0, -60.0], "lon": [10.0, 20.0]})
    assert Dataset.from_raw(df) == Dataset.from_raw(df.copy())
    assert Dataset.from_raw(df) != Dataset.from_raw(df.iloc[:1])
