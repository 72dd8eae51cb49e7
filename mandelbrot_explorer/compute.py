"""
Escape-time and coloring kernels using Numba JIT compilation.

This module contains all the performance-critical functions. They are
JIT-compiled for speed and handle:
- Escape-time iteration of z² + c for a single point
- Filling a square grid of iteration counts, row-parallel
- Turning iteration counts into RGB under one of the color schemes

Bailout metrics:
- 0: |a| + |b| > R   (L1 style, the explorer's default look)
- 1: a² + b² > R²    (true modulus)

Color schemes (ids shared with colormaps.ColorScheme):
- 0: grayscale, bounded points bright
- 1: grayscale, bounded points black
- 2: grayscale through sqrt, bounded points black
- 3: hue rotation
- 4: hue rotation plus a drifting hue offset
"""

import math

import numpy as np
from numba import jit, prange


# Bailout metric IDs
BAILOUT_L1 = 0
BAILOUT_MODULUS = 1

BAILOUT_METRICS = {
    'l1': BAILOUT_L1,
    'modulus': BAILOUT_MODULUS,
}

# Color scheme IDs
SCHEME_GRAYSCALE = 0
SCHEME_GRAYSCALE_CLIPPED = 1
SCHEME_GRAYSCALE_SQRT = 2
SCHEME_HUE_ROTATE = 3
SCHEME_HUE_ROTATE_ANIMATED = 4

HUE_SATURATION = 0.7
HUE_SATURATION_BOUNDED = 0.6
HUE_LIGHTNESS = 0.5


@jit(nopython=True, cache=True)
def escape_count(a0, b0, max_iter, bailout_radius, metric=BAILOUT_L1):
    """
    Count iterations of z -> z² + c before the point escapes.

    z starts at 0, so after the first step (a, b) == (a0, b0). The loop
    stops at max_iter (point considered bounded), when the bailout test
    passes, or when a component stops being finite (treated as escape).

    Args:
        a0, b0: Real and imaginary parts of c
        max_iter: Maximum iteration count
        bailout_radius: Escape threshold R
        metric: BAILOUT_L1 (|a|+|b| > R) or BAILOUT_MODULUS (a²+b² > R²)

    Returns:
        Iteration count in [1, max_iter]
    """
    ca = np.float64(a0)
    cb = np.float64(b0)
    radius = np.float64(bailout_radius)
    r2 = radius * radius

    a = ca
    b = cb
    iteration = 0
    while True:
        new_a = a * a - b * b + ca
        b = 2.0 * a * b + cb
        a = new_a
        iteration += 1
        if iteration >= max_iter:
            break
        # Squaring can overflow past inf into nan between bailout checks
        if not (math.isfinite(a) and math.isfinite(b)):
            break
        if metric == BAILOUT_MODULUS:
            if a * a + b * b > r2:
                break
        elif abs(a) + abs(b) > radius:
            break
    return iteration


@jit(nopython=True, parallel=True, cache=True)
def compute_iterations(min_a, max_a, min_b, max_b, size, max_iter,
                       bailout_radius, metric=BAILOUT_L1):
    """
    Compute iteration counts for a size x size grid.

    Pixel (col, row) samples the plane at
    a = min_a + col / size * (max_a - min_a),
    b = min_b + row / size * (max_b - min_b).

    Args:
        min_a, max_a: Real axis bounds
        min_b, max_b: Imaginary axis bounds (row 0 is min_b)
        size: Output width and height in pixels
        max_iter: Maximum iteration count
        bailout_radius: Escape threshold
        metric: Bailout metric ID

    Returns:
        2D int64 array of shape (size, size), indexed [row, col]
    """
    result = np.zeros((size, size), dtype=np.int64)

    da = np.float64(max_a - min_a) / size
    db = np.float64(max_b - min_b) / size

    for row in prange(size):
        b0 = np.float64(min_b) + db * row
        for col in range(size):
            a0 = np.float64(min_a) + da * col
            result[row, col] = escape_count(a0, b0, max_iter, bailout_radius, metric)

    return result


@jit(nopython=True, cache=True)
def _hue_to_channel(p, q, t):
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 1.0 / 2.0:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


@jit(nopython=True, cache=True)
def hsl_to_rgb(h, s, l):
    """Convert HSL (0-1 range) to RGB floats (0-255 range)."""
    if s == 0.0:
        v = l * 255.0
        return v, v, v
    if l < 0.5:
        q = l * (1.0 + s)
    else:
        q = l + s - l * s
    p = 2.0 * l - q
    r = _hue_to_channel(p, q, h + 1.0 / 3.0)
    g = _hue_to_channel(p, q, h)
    b = _hue_to_channel(p, q, h - 1.0 / 3.0)
    return r * 255.0, g * 255.0, b * 255.0


@jit(nopython=True, cache=True)
def color_of(iteration, max_iter, scheme, hue_offset):
    """
    Color for a single iteration count.

    Returns:
        (r, g, b) floats in 0..255
    """
    bounded = iteration == max_iter
    t = iteration / max_iter

    if scheme == SCHEME_GRAYSCALE:
        v = t * 255.0
        return v, v, v

    if scheme == SCHEME_GRAYSCALE_CLIPPED:
        if bounded:
            return 0.0, 0.0, 0.0
        v = t * 255.0
        return v, v, v

    if scheme == SCHEME_GRAYSCALE_SQRT:
        if bounded:
            return 0.0, 0.0, 0.0
        v = math.sqrt(t) * 255.0
        return v, v, v

    # Hue rotation (animated adds the drift offset)
    hue = t
    if scheme == SCHEME_HUE_ROTATE_ANIMATED:
        hue += hue_offset
    hue = hue - math.floor(hue)
    saturation = HUE_SATURATION_BOUNDED if bounded else HUE_SATURATION
    return hsl_to_rgb(hue, saturation, HUE_LIGHTNESS)


@jit(nopython=True, parallel=True, cache=True)
def apply_color_scheme(iterations, max_iter, scheme, hue_offset, out):
    """
    Colorize a grid of iteration counts.

    Args:
        iterations: 2D array from compute_iterations
        max_iter: Maximum iteration value used for the render
        scheme: Color scheme ID (see SCHEME_* constants)
        hue_offset: Hue drift in [0, 1), only read by the animated scheme
        out: Output RGB array (rows, cols, 3) of uint8, modified in place
    """
    height, width = iterations.shape

    for row in prange(height):
        for col in range(width):
            r, g, b = color_of(iterations[row, col], max_iter, scheme, hue_offset)
            out[row, col, 0] = np.uint8(min(max(r, 0.0), 255.0))
            out[row, col, 1] = np.uint8(min(max(g, 0.0), 255.0))
            out[row, col, 2] = np.uint8(min(max(b, 0.0), 255.0))


def warmup_jit():
    """
    Warm up JIT compilation with a tiny dummy render.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.
    """
    data = compute_iterations(-2.0, 1.0, 1.0, -1.0, 4, 10, 2.0, BAILOUT_L1)
    dummy = np.zeros((4, 4, 3), dtype=np.uint8)
    apply_color_scheme(data, 10, SCHEME_GRAYSCALE, 0.0, dummy)
