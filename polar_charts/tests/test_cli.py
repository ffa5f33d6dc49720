"""
test of polar_charts.cli
"""

import argparse

import pytest

from polar_charts.cli import build_mapping, main, positive_float
from polar_charts.constants import BREWER_PALETTES


@pytest.fixture
def csv_files(tmp_path, transect, world_coastline):
    data = tmp_path / "transect.csv"
    transect.rename(columns={"lat": "Latitude", "lon": "Longitude"}).to_csv(data, index=False)
    coast = tmp_path / "coast.csv"
    world_coastline.to_csv(coast, index=False)
    return data, coast


def test_plot(csv_files, tmp_path, capsys):
    """test plotting a CSV file"""
    data, coast = csv_files
    output = tmp_path / "chart.png"

    code = main(["plot", str(data), "--fill", "v", "--coastline", str(coast),
                 "--output", str(output), "--dpi", "40", "--silent"])

    assert code == 0
    assert output.exists()
    assert capsys.readouterr().out.strip().endswith("chart.png")


def test_plot_tile_with_precision(csv_files, tmp_path):
    """test tiles with subsampling"""
    data, coast = csv_files
    output = tmp_path / "tiles.png"

    code = main(["plot", str(data), "--color", "v", "--geom", "tile", "--lat-precision", "5",
                 "--coastline", str(coast), "--output", str(output), "--dpi", "40", "-q"])

    assert code == 0
    assert output.exists()


def test_plot_missing_column(csv_files, tmp_path, capsys):
    """test a mapped column that is not in the file"""
    data, coast = csv_files
    code = main(["plot", str(data), "--fill", "nope", "--coastline", str(coast),
                 "--output", str(tmp_path / "x.png"), "-q"])

    assert code == 1
    assert "nope" in capsys.readouterr().err


def test_plot_missing_file(tmp_path, capsys):
    """test an input file that does not exist"""
    code = main(["plot", str(tmp_path / "missing.csv"), "--fill", "v", "-q"])
    assert code == 1
    assert "Error reading" in capsys.readouterr().err


def test_palettes(capsys):
    """test listing the diverging palettes"""
    assert main(["palettes", "--type", "div", "-q"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 9
    assert "Spectral" in out[8]


def test_palettes_qualitative_without_index(capsys):
    """test qualitative palettes are listed without an index"""
    assert main(["palettes", "--type", "qual", "-q"]) == 0
    out = capsys.readouterr().out.splitlines()

    assert len(out) == 8
    for line in out:
        category, name, n_colours, _ = line.split()
        assert category == "qual"
        assert BREWER_PALETTES[name]["category"] == "qual"
        assert int(n_colours) == BREWER_PALETTES[name]["max_colors"]


def test_no_command(capsys):
    """test usage is shown without a subcommand"""
    assert main([]) == 1


def test_build_mapping():
    """test only given aesthetics are mapped"""
    class Args:
        fill = "v"
        colour = None
        size = "depth"
        alpha = None

    assert build_mapping(Args()) == {"fill": "v", "size": "depth"}


@pytest.mark.parametrize("value", ["0", "-1", "abc"])
def test_positive_float_errors(value):
    """test precisions must be positive numbers"""
    with pytest.raises(argparse.ArgumentTypeError):
        positive_float(value)
