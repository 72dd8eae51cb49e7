"""
Explorer engine: one state object and one dispatch function.

All mutable explorer state (plane bounds, camera, countdown, selected
colors and iterations, fly-to target, hue drift, last frame) lives in
an ExplorerState. The UI turns raw input into the event dataclasses
below and feeds them to dispatch(), one Tick per display refresh.

Within a Tick the order is fixed:
1. camera eases toward its target
2. scheduler counts down and may commit a preview or full render
3. if nothing rendered and the scheduler has settled, the navigator
   takes its next fly-to step
"""

from dataclasses import dataclass

from .camera import CameraRect, ViewportController
from .colormaps import ColorScheme, HueDrift
from .navigator import CATALOG, RESET_KEY, TargetNavigator
from .plane import HOME_VIEW, recompute_bounds
from .renderer import FrameRenderer, RenderJob
from .scheduler import FULL, PREVIEW, RenderScheduler
from .settings import ConfigError, ExplorerConfig, log, require_positive_int


# ----------------------------------------------------------------------------
# Input events
# ----------------------------------------------------------------------------

@dataclass(frozen=True)
class Pan:
    dx: float
    dy: float


@dataclass(frozen=True)
class Zoom:
    """Positive delta zooms in, negative zooms out, |delta| steps."""

    delta: float
    anchor_x: float
    anchor_y: float


@dataclass(frozen=True)
class SelectScheme:
    scheme: ColorScheme


@dataclass(frozen=True)
class SelectIterations:
    max_iterations: int


@dataclass(frozen=True)
class SelectPoint:
    key: str


@dataclass(frozen=True)
class Tick:
    pass


# ----------------------------------------------------------------------------
# State
# ----------------------------------------------------------------------------

class ExplorerState:
    """
    Everything the explorer knows between frames.

    Attributes:
        config: ExplorerConfig the state was built from
        view: ViewRectangle of the last committed render
        viewport: ViewportController (current/target camera rects)
        scheduler: RenderScheduler countdown
        navigator: TargetNavigator (fly-to)
        max_iterations: Iteration cap for the next render
        color_scheme: ColorScheme for the next render
        hue_drift: HueDrift for the animated scheme
        renderer: FrameRenderer
        frame: Last FrameBuffer produced (what the UI draws)
    """

    def __init__(self, config=None, renderer=None):
        self.config = config or ExplorerConfig()
        cfg = self.config

        self.view = HOME_VIEW
        self.viewport = ViewportController(
            cfg.display_size,
            smoothing_factor=cfg.smoothing_factor,
            pan_damping=cfg.pan_damping,
            zoom_step=cfg.zoom_step,
            zoom_bounds=cfg.zoom_bounds,
        )
        self.scheduler = RenderScheduler(cfg.render_wait_frames)
        self.navigator = TargetNavigator(cfg.display_size)
        self.max_iterations = cfg.max_iterations
        self.color_scheme = cfg.color_scheme
        self.hue_drift = HueDrift(cfg.hue_drift_step)
        self.renderer = renderer or FrameRenderer()
        self.frame = None

    @classmethod
    def create(cls, config=None, renderer=None):
        """Build a state and render the opening full frame."""
        state = cls(config, renderer)
        commit_render(state, FULL)
        return state

    @property
    def display_size(self):
        return self.config.display_size

    def status(self):
        """(a, b, zoom_log10) of the current view, for the status readout."""
        a, b = self.view.center()
        return a, b, self.view.zoom_log10()


def make_job(state, kind):
    """RenderJob for a preview or full render with the state's settings."""
    cfg = state.config
    size = cfg.preview_size if kind == PREVIEW else cfg.display_size
    return RenderJob(
        render_size=size,
        max_iterations=state.max_iterations,
        bailout_radius=cfg.bailout_radius,
        color_scheme=state.color_scheme,
        bailout_metric=cfg.bailout_metric,
        hue_offset=state.hue_drift.offset,
    )


def commit_render(state, kind):
    """
    Fold the camera into the plane bounds and render.

    The rect the last frame is shown in becomes the new view, the frame
    is rendered for it, and the camera snaps to neutral so the new
    frame is shown 1:1. A camera still at neutral leaves the view
    untouched, so repeated renders of one view never drift.
    """
    if state.viewport.current != CameraRect.neutral(state.display_size):
        state.view = recompute_bounds(state.view, state.viewport.current, state.display_size)
    if kind == FULL and state.color_scheme.animated:
        state.hue_drift.advance()

    job = make_job(state, kind)
    state.frame = state.renderer.render(state.view, job, preview=(kind == PREVIEW))
    state.viewport.reset()
    return state.frame


# ----------------------------------------------------------------------------
# Dispatch
# ----------------------------------------------------------------------------

def _on_tick(state):
    state.viewport.tick()

    kind = state.scheduler.tick()
    if kind is not None:
        return commit_render(state, kind)

    if state.navigator.active and not state.scheduler.is_settling():
        if state.navigator.step(state.view, state.viewport, state.scheduler):
            log("fly-to: arrived")
    return None


def _on_pan(state, event):
    state.viewport.pan(event.dx, event.dy)
    state.scheduler.on_interaction()


def _on_zoom(state, event):
    if event.delta:
        state.viewport.zoom(abs(event.delta), event.anchor_x, event.anchor_y,
                            zooming_in=event.delta > 0)
    state.scheduler.on_interaction()


def _on_select_scheme(state, event):
    if not isinstance(event.scheme, ColorScheme):
        raise ConfigError(f"Not a color scheme: {event.scheme!r}")
    state.color_scheme = event.scheme
    state.scheduler.on_interaction()


def _on_select_iterations(state, event):
    state.max_iterations = require_positive_int('max_iterations', event.max_iterations)
    state.scheduler.on_interaction()


def _on_select_point(state, event):
    point = CATALOG[event.key]

    state.view = HOME_VIEW
    state.max_iterations = point.suggested_iterations
    state.viewport.reset()

    if event.key == RESET_KEY:
        state.navigator.clear()
        return commit_render(state, FULL)

    log(f"fly-to: {event.key} ({point.a}, {point.b}) zoom 10^{point.zoom_log10}")
    state.navigator.activate(point)
    state.navigator.step(state.view, state.viewport, state.scheduler)
    return None


_HANDLERS = {
    Pan: _on_pan,
    Zoom: _on_zoom,
    SelectScheme: _on_select_scheme,
    SelectIterations: _on_select_iterations,
    SelectPoint: _on_select_point,
}


def dispatch(state, event):
    """
    Apply one input event.

    Args:
        state: ExplorerState (mutated in place)
        event: Pan, Zoom, SelectScheme, SelectIterations, SelectPoint or Tick

    Returns:
        (state, frame) where frame is the FrameBuffer rendered while
        handling the event, or None

    Raises:
        ConfigError for invalid selections, KeyError for unknown points,
        TypeError for unknown events
    """
    if isinstance(event, Tick):
        return state, _on_tick(state)

    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unknown event: {event!r}")
    return state, handler(state, event)
