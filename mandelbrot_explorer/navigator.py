"""
Fly-to navigation toward catalog points of interest.

The navigator never touches the plane bounds directly. Each step it
measures how far the current view is from the target point (position
and width, in display pixels) and hands the camera a rect that would
close that gap. The scheduler then renders the moved view, and the next
step measures again from there. Big jumps are capped per step so the
camera stays followable.
"""

from dataclasses import dataclass

from .plane import to_pixel


@dataclass(frozen=True)
class PointOfInterest:
    a: float
    b: float
    zoom_log10: float
    suggested_iterations: int

    @property
    def width(self):
        """Plane width of the view this point implies."""
        return 1 / 10 ** self.zoom_log10


RESET_KEY = 'reset'

CATALOG = {
    RESET_KEY: PointOfInterest(-0.75, 0, -0.5, 100),
    'julia_islands': PointOfInterest(-1.4177481, 0.000140785, 6, 1500),
    'elefant_valley': PointOfInterest(0.250745, 0.00003468, 4.5, 3000),
    'seahorse': PointOfInterest(-0.743517833, -0.127094578, 1.75, 1000),
    'starfish': PointOfInterest(-0.374004139, 0.659792175, 1.75, 1000),
    'tree': PointOfInterest(-1.940157343, 0.000001, 5.5, 250),
    'sun': PointOfInterest(-0.776592847, -0.136640848, 5, 1000),
    'stormclouds': PointOfInterest(-1.746780894, 0.004784543, 5.3, 1000),
}

# Arrival tolerances in display pixels
POSITION_TOLERANCE = 5
WIDTH_TOLERANCE = 10

# Per-step limits on the camera rect, as multiples of display size
MIN_STEP_SCALE = 0.5
MAX_STEP_SCALE = 1.5


class TargetNavigator:
    """Steers the camera toward one PointOfInterest across many frames."""

    def __init__(self, display_size):
        self.display_size = display_size
        self.target = None

    @property
    def active(self):
        return self.target is not None

    def activate(self, point):
        self.target = point

    def clear(self):
        self.target = None

    def offsets(self, view):
        """
        Pixel distance from the view to the target.

        Returns:
            (dx_px, dy_px, dwidth_px). dy follows the view's b direction,
            so it is already in screen orientation.
        """
        size = self.display_size
        width_a = view.max_a - view.min_a
        width_b = view.max_b - view.min_b
        center_a, center_b = view.center()

        dw_px = to_pixel(self.target.width - width_a, (0, width_a), (0, size))
        dx_px = to_pixel(self.target.a - center_a, (0, width_a), (0, size))
        dy_px = to_pixel(self.target.b - center_b, (0, width_b), (0, size))
        return dx_px, dy_px, dw_px

    def step(self, view, viewport, scheduler):
        """
        Move the camera one step closer to the target.

        On arrival the target is cleared, the camera snaps to neutral and
        a full render is requested for the next tick. Otherwise the camera
        gets a new target rect and the scheduler countdown restarts at the
        full wait, so renders never race the motion.

        Args:
            view: Current ViewRectangle
            viewport: ViewportController to steer
            scheduler: RenderScheduler to hold off / trigger

        Returns:
            True if this step arrived, False otherwise (including no target)
        """
        if self.target is None:
            return False

        size = self.display_size
        dx_px, dy_px, dw_px = self.offsets(view)

        if abs(dx_px) < POSITION_TOLERANCE and abs(dy_px) < POSITION_TOLERANCE \
                and abs(dw_px) < WIDTH_TOLERANCE:
            self.clear()
            scheduler.fire_next_tick()
            viewport.reset()
            return True

        rect_size = size - dw_px
        rect_size = max(rect_size, size * MIN_STEP_SCALE)
        rect_size = min(rect_size, size * MAX_STEP_SCALE)

        viewport.set_target(size / 2 - dx_px, size / 2 - dy_px, rect_size)
        scheduler.on_interaction()
        return False
