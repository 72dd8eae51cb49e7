"""
Configuration for the Mandelbrot explorer.

Defaults live in settings.json next to this file. They are loaded once
into a plain dict (load_settings) and turned into a validated,
immutable ExplorerConfig (config_from_settings). Anything that would
otherwise be a magic number in the engine (countdown length, smoothing,
zoom window, preview scale...) is a field here.

Also home to the small verbose log() helper used across the package.
"""

import json
import math
import os
from dataclasses import dataclass, field, replace

from .colormaps import COLOR_SCHEMES, ColorScheme
from .compute import BAILOUT_METRICS


VERBOSE = False


def set_verbose(enabled):
    """Turn log() output on or off."""
    global VERBOSE
    VERBOSE = bool(enabled)


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


class ConfigError(ValueError):
    """Raised when a configuration or render parameter is invalid."""


# Built-in defaults, used when settings.json is missing or unreadable
DEFAULT_SETTINGS = {
    'display_size': 512,
    'max_iterations': 250,
    'bailout_radius': 2.0,
    'bailout_metric': 'l1',
    'color_scheme': 'no_scheme',
    'render_wait_frames': 50,
    'preview_scale': 0.25,
    'smoothing_factor': 0.1,
    'pan_damping': 0.3,
    'zoom_step': 0.001,
    'zoom_bounds': [1 / 30, 30.0],
    'wheel_steps_per_notch': 100,
    'hue_drift_step': 0.01,
    'iteration_options': [100, 250, 500, 750, 1000, 1500, 3000, 5000],
}


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: File to read (default: settings.json beside this module)

    Returns:
        Dict of settings, or None if the file could not be read
    """
    settings_path = path or os.path.join(os.path.dirname(__file__), 'settings.json')
    try:
        with open(settings_path, 'r') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Warning: Could not load settings.json: {e}")
        return None


def require_positive_int(name, value):
    """Fail fast unless value is a positive int (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return value


def require_finite(name, value):
    """Fail fast unless value is a finite real number (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite, got {value!r}")
    return float(value)


def require_positive_finite(name, value):
    """Fail fast unless value is a positive, finite real number."""
    if require_finite(name, value) <= 0:
        raise ConfigError(f"{name} must be positive and finite, got {value!r}")
    return float(value)


def require_choice(name, value, choices):
    """Fail fast unless value is one of the string keys in choices."""
    if not isinstance(value, str) or value not in choices:
        raise ConfigError(f"{name} must be one of {list(choices)}, got {value!r}")
    return value


def iterations_from_slider(slider_value):
    """Non-linear slider mapping: floor(value ** 1.5)."""
    if isinstance(slider_value, bool) or not isinstance(slider_value, (int, float)) \
            or not math.isfinite(slider_value) or slider_value < 1:
        raise ConfigError(f"slider value must be a finite number >= 1, got {slider_value!r}")
    return int(math.floor(math.pow(slider_value, 1.5)))


@dataclass(frozen=True)
class ExplorerConfig:
    """
    Validated engine parameters.

    zoom_bounds is expressed as multiples of display_size: the displayed
    buffer may shrink to display_size * zoom_bounds[0] and grow to
    display_size * zoom_bounds[1] before the next render commits.
    """

    display_size: int = 512
    max_iterations: int = 250
    bailout_radius: float = 2.0
    bailout_metric: str = 'l1'
    color_scheme: ColorScheme = ColorScheme.GRAYSCALE
    render_wait_frames: int = 50
    preview_scale: float = 0.25
    smoothing_factor: float = 0.1
    pan_damping: float = 0.3
    zoom_step: float = 0.001
    zoom_bounds: tuple = (1 / 30, 30.0)
    wheel_steps_per_notch: int = 100
    hue_drift_step: float = 0.01
    iteration_options: tuple = field(default=(100, 250, 500, 750, 1000, 1500, 3000, 5000))

    def __post_init__(self):
        require_positive_int('display_size', self.display_size)
        require_positive_int('max_iterations', self.max_iterations)
        require_positive_finite('bailout_radius', self.bailout_radius)
        require_positive_int('render_wait_frames', self.render_wait_frames)
        require_positive_int('wheel_steps_per_notch', self.wheel_steps_per_notch)
        require_positive_finite('pan_damping', self.pan_damping)
        require_positive_finite('zoom_step', self.zoom_step)
        require_finite('smoothing_factor', self.smoothing_factor)
        require_finite('preview_scale', self.preview_scale)
        require_finite('hue_drift_step', self.hue_drift_step)
        require_choice('bailout_metric', self.bailout_metric, BAILOUT_METRICS)

        if not isinstance(self.color_scheme, ColorScheme):
            raise ConfigError(f"color_scheme must be a ColorScheme, got {self.color_scheme!r}")
        # The preview fires 5 frames into the countdown, so it needs room
        if self.render_wait_frames <= 5:
            raise ConfigError(
                f"render_wait_frames must be greater than 5, got {self.render_wait_frames}"
            )
        if not 0 < self.smoothing_factor < 1:
            raise ConfigError(f"smoothing_factor must be in (0, 1), got {self.smoothing_factor!r}")
        if not 0 < self.preview_scale <= 1:
            raise ConfigError(f"preview_scale must be in (0, 1], got {self.preview_scale!r}")
        if int(self.display_size * self.preview_scale) < 1:
            raise ConfigError("preview_scale is too small for this display_size")

        if not isinstance(self.zoom_bounds, (list, tuple)) or len(self.zoom_bounds) != 2:
            raise ConfigError(f"zoom_bounds must be a (min, max) pair, got {self.zoom_bounds!r}")
        low = require_finite('zoom_bounds', self.zoom_bounds[0])
        high = require_finite('zoom_bounds', self.zoom_bounds[1])
        if not 0 < low <= 1 <= high:
            raise ConfigError(f"zoom_bounds must satisfy 0 < min <= 1 <= max, got {self.zoom_bounds!r}")
        if not 0 <= self.hue_drift_step < 1:
            raise ConfigError(f"hue_drift_step must be in [0, 1), got {self.hue_drift_step!r}")

        if not isinstance(self.iteration_options, (list, tuple)) or not self.iteration_options:
            raise ConfigError(
                f"iteration_options must be a non-empty list, got {self.iteration_options!r}"
            )
        for value in self.iteration_options:
            require_positive_int('iteration_options', value)

    @property
    def preview_size(self):
        return int(math.floor(self.display_size * self.preview_scale))

    def with_overrides(self, **changes):
        """Copy with some fields replaced; None values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)


def config_from_settings(settings=None):
    """
    Build an ExplorerConfig from a settings dict.

    Missing keys fall back to DEFAULT_SETTINGS. Invalid values raise
    ConfigError rather than being coerced.

    Args:
        settings: Dict as returned by load_settings() (None = defaults)
    """
    if settings is not None and not isinstance(settings, dict):
        raise ConfigError(f"settings must be a JSON object, got {type(settings).__name__}")

    merged = dict(DEFAULT_SETTINGS)
    if settings:
        merged.update(settings)

    scheme_name = require_choice('color_scheme', merged['color_scheme'], COLOR_SCHEMES)

    bounds = merged['zoom_bounds']
    if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
        raise ConfigError(f"zoom_bounds must be a [min, max] pair, got {bounds!r}")
    bounds = (require_finite('zoom_bounds', bounds[0]), require_finite('zoom_bounds', bounds[1]))

    options = merged['iteration_options']
    if not isinstance(options, list):
        raise ConfigError(f"iteration_options must be a list, got {options!r}")

    return ExplorerConfig(
        display_size=merged['display_size'],
        max_iterations=merged['max_iterations'],
        bailout_radius=merged['bailout_radius'],
        bailout_metric=merged['bailout_metric'],
        color_scheme=COLOR_SCHEMES[scheme_name],
        render_wait_frames=merged['render_wait_frames'],
        preview_scale=merged['preview_scale'],
        smoothing_factor=merged['smoothing_factor'],
        pan_damping=merged['pan_damping'],
        zoom_step=merged['zoom_step'],
        zoom_bounds=bounds,
        wheel_steps_per_notch=merged['wheel_steps_per_notch'],
        hue_drift_step=merged['hue_drift_step'],
        iteration_options=tuple(options),
    )


def load_config(path=None):
    """Read settings.json (or path) and return a validated ExplorerConfig."""
    return config_from_settings(load_settings(path))
