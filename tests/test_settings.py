import json

import pytest

from mandelbrot_explorer.colormaps import ColorScheme
from mandelbrot_explorer.settings import (
    ConfigError,
    ExplorerConfig,
    config_from_settings,
    iterations_from_slider,
    load_config,
    load_settings,
)


def write_settings(tmp_path, settings):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(settings))
    return str(path)


def test_bundled_settings_match_defaults():
    assert load_config() == ExplorerConfig()


def test_missing_file_warns_and_returns_none(tmp_path, capsys):
    assert load_settings(str(tmp_path / "nope.json")) is None
    assert "Warning" in capsys.readouterr().out


def test_broken_json_returns_none(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{ display_size: ")

    assert load_settings(str(path)) is None


def test_unreadable_settings_fall_back_to_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == ExplorerConfig()


def test_partial_settings_keep_other_defaults(tmp_path):
    config = load_config(write_settings(tmp_path, {"display_size": 360, "color_scheme": "hue"}))

    assert config.display_size == 360
    assert config.color_scheme == ColorScheme.HUE_ROTATE
    assert config.max_iterations == 250
    assert config.preview_size == 90


@pytest.mark.parametrize("settings", [
    {"color_scheme": "rainbow"},
    {"zoom_bounds": [0.5]},
    {"zoom_bounds": [2.0, 30.0]},
    {"zoom_bounds": [0.1, 0.5]},
    {"display_size": 0},
    {"display_size": "512"},
    {"max_iterations": -1},
    {"bailout_radius": 0},
    {"bailout_metric": "manhattan"},
    {"render_wait_frames": 5},
    {"smoothing_factor": 1.0},
    {"preview_scale": 0},
    {"hue_drift_step": 1.0},
    {"iteration_options": [100, 0]},
    {"iteration_options": 5},
    {"iteration_options": []},
    {"zoom_bounds": ["a", 3]},
    {"zoom_bounds": 30},
    {"hue_drift_step": "x"},
    {"smoothing_factor": None},
    {"preview_scale": "0.5"},
    {"bailout_metric": ["l1"]},
    {"color_scheme": None},
])
def test_invalid_settings_raise(settings):
    with pytest.raises(ConfigError):
        config_from_settings(settings)


def test_with_overrides_ignores_none():
    config = ExplorerConfig().with_overrides(display_size=720, max_iterations=None)

    assert config.display_size == 720
    assert config.max_iterations == 250


def test_with_overrides_still_validates():
    with pytest.raises(ConfigError):
        ExplorerConfig().with_overrides(display_size=-1)


@pytest.mark.parametrize("slider, expected", [(1, 1), (4, 8), (10, 31)])
def test_iteration_slider_mapping(slider, expected):
    assert iterations_from_slider(slider) == expected


@pytest.mark.parametrize("slider", [0, -3, float("nan"), float("inf")])
def test_iteration_slider_rejects_out_of_range(slider):
    with pytest.raises(ConfigError):
        iterations_from_slider(slider)


def test_settings_must_be_an_object():
    with pytest.raises(ConfigError):
        config_from_settings([512, 250])


def test_badly_typed_settings_file_is_a_usage_error(tmp_path, capsys):
    from mandelbrot_explorer.__main__ import main

    path = write_settings(tmp_path, {"iteration_options": 5})
    with pytest.raises(SystemExit) as excinfo:
        main(['--settings', path])

    assert excinfo.value.code == 2
    assert 'iteration_options' in capsys.readouterr().err
