"""
Mandelbrot Set Explorer Package

An interactive Mandelbrot set explorer with smoothed pan/zoom, debounced
preview/full rendering and fly-to navigation toward points of interest.
Pygame for display, Numba for JIT-compiled computation.

Quick Start:
    from mandelbrot_explorer import run
    run()

Or from command line:
    python -m mandelbrot_explorer

Headless use:
    from mandelbrot_explorer import ExplorerState, Tick, dispatch
    state = ExplorerState.create()
    state, frame = dispatch(state, Tick())

Package Structure:
    - compute.py: JIT-compiled escape-time and coloring kernels
    - colormaps.py: Color scheme registry and hue drift
    - plane.py: Pixel <-> complex plane mapping
    - renderer.py: Frame rendering (RenderJob -> FrameBuffer)
    - camera.py: Smoothed pan/zoom camera
    - scheduler.py: Preview/full render countdown
    - navigator.py: Fly-to points of interest
    - engine.py: Explorer state and event dispatch
    - settings.py: Configuration (settings.json)
    - menu.py: Settings panel UI
    - app.py: Main application and event loop

Controls:
    - Scroll: Zoom in/out at mouse position
    - Drag: Pan around
    - R: Reset to default view
    - Ctrl/Cmd+S: Save a high-res image
    - ESC: Quit
"""

from .colormaps import COLOR_SCHEMES, ColorScheme, get_scheme, list_scheme_names
from .engine import (
    ExplorerState,
    Pan,
    SelectIterations,
    SelectPoint,
    SelectScheme,
    Tick,
    Zoom,
    dispatch,
)
from .navigator import CATALOG, PointOfInterest
from .plane import ViewRectangle
from .renderer import FrameBuffer, FrameRenderer, RenderJob
from .settings import ConfigError, ExplorerConfig, load_config

__version__ = "1.0.0"
__all__ = [
    "run",
    "COLOR_SCHEMES",
    "CATALOG",
    "ColorScheme",
    "ConfigError",
    "ExplorerConfig",
    "ExplorerState",
    "FrameBuffer",
    "FrameRenderer",
    "Pan",
    "PointOfInterest",
    "RenderJob",
    "SelectIterations",
    "SelectPoint",
    "SelectScheme",
    "Tick",
    "ViewRectangle",
    "Zoom",
    "dispatch",
    "get_scheme",
    "list_scheme_names",
    "load_config",
]


def run(config=None):
    """Open the explorer window (imports pygame on first use)."""
    from .app import run as run_app
    run_app(config)
