"""
Frame renderer: ViewRectangle + RenderJob -> FrameBuffer.

The FrameRenderer class handles:
- Validating render parameters before any work starts
- Row-parallel escape-time computation (numba prange)
- Coloring under the selected scheme
- Publishing the finished buffer read-only, never partially written

Preview frames are just renders at a smaller render_size; the UI
stretches whatever it gets to the display.
"""

import time
from dataclasses import dataclass

import numpy as np

from .colormaps import ColorScheme
from .compute import (
    BAILOUT_METRICS,
    apply_color_scheme,
    compute_iterations,
    warmup_jit,
)
from .settings import ConfigError, log, require_positive_finite, require_positive_int


@dataclass(frozen=True)
class RenderJob:
    """Everything besides the view that determines a rendered buffer."""

    render_size: int
    max_iterations: int
    bailout_radius: float = 2.0
    color_scheme: ColorScheme = ColorScheme.GRAYSCALE
    bailout_metric: str = 'l1'
    hue_offset: float = 0.0

    def __post_init__(self):
        require_positive_int('render_size', self.render_size)
        require_positive_int('max_iterations', self.max_iterations)
        require_positive_finite('bailout_radius', self.bailout_radius)
        if self.bailout_metric not in BAILOUT_METRICS:
            raise ConfigError(f"Unknown bailout metric {self.bailout_metric!r}")
        if not isinstance(self.color_scheme, ColorScheme):
            raise ConfigError(f"color_scheme must be a ColorScheme, got {self.color_scheme!r}")
        if not 0 <= self.hue_offset < 1:
            raise ConfigError(f"hue_offset must be in [0, 1), got {self.hue_offset!r}")


@dataclass(frozen=True)
class FrameBuffer:
    """
    A finished render.

    pixels is a read-only (render_size, render_size, 3) uint8 array
    indexed [row, col, channel]; row 0 is view.min_b.
    """

    pixels: np.ndarray
    view: object
    job: RenderJob
    preview: bool = False

    @property
    def render_size(self):
        return self.job.render_size


class FrameRenderer:
    """
    Renders square frames of the Mandelbrot set.

    Usage:
        renderer = FrameRenderer()
        frame = renderer.render(view, RenderJob(512, 250))
        display(frame.pixels)

    Stateless apart from the last render time, so one instance can be
    shared by everything that needs frames.
    """

    def __init__(self):
        self.last_render_seconds = 0.0

    def warmup(self):
        """Pre-compile the kernels so the first real frame is not slow."""
        warmup_jit()

    def render(self, view, job, preview=False):
        """
        Render the view.

        Args:
            view: ViewRectangle to sample
            job: RenderJob (size, iterations, bailout, colors)
            preview: Mark the result as a low-resolution preview

        Returns:
            FrameBuffer
        """
        start = time.perf_counter()

        # Every worker reads the same snapshot of bounds and job
        data = compute_iterations(
            float(view.min_a), float(view.max_a),
            float(view.min_b), float(view.max_b),
            job.render_size, job.max_iterations,
            float(job.bailout_radius), BAILOUT_METRICS[job.bailout_metric]
        )
        rgb = np.zeros((job.render_size, job.render_size, 3), dtype=np.uint8)
        apply_color_scheme(data, job.max_iterations, int(job.color_scheme),
                           float(job.hue_offset), rgb)
        rgb.flags.writeable = False

        self.last_render_seconds = time.perf_counter() - start
        log(f"{'preview' if preview else 'full'} render "
            f"{job.render_size}px x {job.max_iterations} iter "
            f"in {self.last_render_seconds:.3f}s")
        return FrameBuffer(pixels=rgb, view=view, job=job, preview=preview)
