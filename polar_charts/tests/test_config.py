"""
test of polar_charts.config
"""

from dataclasses import fields

import pytest
import yaml

from polar_charts.config import Config
from polar_charts.exceptions import InvalidParameterError


def test_defaults():
    """test the default configuration is valid"""
    config = Config()
    assert config.validate()
    assert config.coast_expand == 2.0
    assert config.symmetric_coast_clip is False
    assert config.continuous_palette == "Spectral"
    assert config.continuous_palette_size == 6
    assert config.categorical_palette == "Set3"
    assert config.max_brewer_levels == 12
    assert config.point_size_range == (0.5, 1.5)
    assert config.orientation == (-90.0, 0.0, 0.0)
    assert config.y_label == "Latitude"


@pytest.mark.parametrize("suffix", [".yaml", ".yml", ".json"])
def test_save_and_load(tmp_path, suffix):
    """test a configuration survives a trip through a file"""
    config = Config(
        coast_expand=5.0,
        symmetric_coast_clip=True,
        continuous_palette="RdYlBu",
        orientation=(-90.0, 30.0, 0.0),
    )
    path = tmp_path / f"config{suffix}"
    config.save_to_file(path)

    loaded = Config.load_from_file(path)
    assert loaded == config
    assert isinstance(loaded.orientation, tuple)


def test_load_partial_yaml(tmp_path):
    """test missing keys keep their defaults"""
    path = tmp_path / "config.yaml"
    path.write_text("categorical_palette: Paired\npoint_size_range: [1, 2]\n")

    config = Config.load_from_file(path)
    assert config.categorical_palette == "Paired"
    assert config.point_size_range == (1, 2)
    assert config.coast_expand == 2.0


def test_load_errors(tmp_path):
    """test unknown formats and missing files"""
    with pytest.raises(FileNotFoundError):
        Config.load_from_file(tmp_path / "missing.yaml")

    path = tmp_path / "config.txt"
    path.write_text("")
    with pytest.raises(ValueError):
        Config.load_from_file(path)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"coast_expand": -1.0},
        {"coastline_resolution": "1m"},
        {"point_size_range": (2.0, 1.0)},
        {"point_scale": 0.0},
        {"continuous_palette": "Set3"},
        {"continuous_palette": "Rainbow"},
        {"continuous_palette_size": 1},
        {"categorical_palette": "Rainbow"},
        {"max_brewer_levels": 0},
        {"orientation": (-90.0, 0.0)},
        {"default_dpi": 0},
        {"figure_width": -2.0},
    ],
)
def test_validate(kwargs):
    """test invalid settings are rejected"""
    with pytest.raises(InvalidParameterError):
        Config(**kwargs).validate()


def test_saved_keys(tmp_path):
    """test the saved file holds exactly the chart settings"""
    path = tmp_path / "config.yaml"
    Config().save_to_file(path)

    saved = yaml.safe_load(path.read_text())
    assert list(saved) == [f.name for f in fields(Config)]
    assert "output_dir" not in saved
