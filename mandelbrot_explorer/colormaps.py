"""
Color scheme definitions for Mandelbrot visualization.

A color scheme turns an iteration count into an RGB triple. The actual
per-pixel math lives in the JIT kernels in compute.py; this module
names the schemes, keeps the registry the UI picks from, and owns the
hue drift used by the animated scheme.

To add a new scheme:
1. Give it an ID in compute.py and handle it in color_of()
2. Add a ColorScheme member with the same value
3. Register a display name in COLOR_SCHEMES below
"""

from enum import IntEnum

import numpy as np

from .compute import (
    SCHEME_GRAYSCALE,
    SCHEME_GRAYSCALE_CLIPPED,
    SCHEME_GRAYSCALE_SQRT,
    SCHEME_HUE_ROTATE,
    SCHEME_HUE_ROTATE_ANIMATED,
    apply_color_scheme,
)


class ColorScheme(IntEnum):
    GRAYSCALE = SCHEME_GRAYSCALE
    GRAYSCALE_CLIPPED = SCHEME_GRAYSCALE_CLIPPED
    GRAYSCALE_SQRT = SCHEME_GRAYSCALE_SQRT
    HUE_ROTATE = SCHEME_HUE_ROTATE
    HUE_ROTATE_ANIMATED = SCHEME_HUE_ROTATE_ANIMATED

    @property
    def animated(self):
        return self is ColorScheme.HUE_ROTATE_ANIMATED


class HueDrift:
    """
    Hue offset in [0, 1) for the animated scheme.

    Advanced by a fixed step once per full-resolution render, so the
    palette slowly rotates from one settled frame to the next.
    """

    def __init__(self, step=0.01, offset=0.0):
        self.step = step
        self.offset = offset % 1.0

    def advance(self):
        """Step the offset and wrap it; returns the new offset."""
        self.offset = (self.offset + self.step) % 1.0
        return self.offset


# Registry of all available color schemes.
# Keys are display names, values are schemes.
COLOR_SCHEMES = {
    'no_scheme': ColorScheme.GRAYSCALE,
    'basic': ColorScheme.GRAYSCALE_CLIPPED,
    'normalized': ColorScheme.GRAYSCALE_SQRT,
    'hue': ColorScheme.HUE_ROTATE,
    'hue_animated': ColorScheme.HUE_ROTATE_ANIMATED,
}


def get_scheme(name):
    """
    Get a color scheme by name.

    Args:
        name: Key from COLOR_SCHEMES dictionary

    Returns:
        ColorScheme member

    Raises:
        KeyError if name not found
    """
    return COLOR_SCHEMES[name]


def scheme_name(scheme):
    """Display name for a scheme (inverse of get_scheme)."""
    for name, value in COLOR_SCHEMES.items():
        if value == scheme:
            return name
    raise KeyError(scheme)


def list_scheme_names():
    """Get list of available scheme names."""
    return list(COLOR_SCHEMES.keys())


def scheme_preview(scheme, width, hue_offset=0.0):
    """
    Render a one-row gradient strip for a scheme.

    The strip runs over iteration counts 1..width, so the last column
    shows how bounded points are drawn.

    Returns:
        (width, 3) uint8 array
    """
    iterations = np.arange(width, dtype=np.int64).reshape(1, width) + 1
    out = np.zeros((1, width, 3), dtype=np.uint8)
    apply_color_scheme(iterations, width, int(scheme), hue_offset, out)
    return out[0]
