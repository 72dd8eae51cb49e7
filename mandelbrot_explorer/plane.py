"""
Pixel <-> complex plane mapping.

The visible region of the plane is a ViewRectangle. Screen rows grow
downward, so the b axis is usually given top-to-bottom
(min_b = 1.5, max_b = -1.5 for the full-set view); only a != is required
of it. All conversions are plain affine interpolation.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ViewRectangle:
    """Region of the complex plane mapped onto the square display."""

    min_a: float
    max_a: float
    min_b: float
    max_b: float

    def __post_init__(self):
        for value in (self.min_a, self.max_a, self.min_b, self.max_b):
            if not math.isfinite(value):
                raise ValueError(f"ViewRectangle bounds must be finite: {self}")
        if not self.max_a > self.min_a:
            raise ValueError(f"ViewRectangle needs max_a > min_a: {self}")
        if self.max_b == self.min_b:
            raise ValueError(f"ViewRectangle needs min_b != max_b: {self}")

    @property
    def width(self):
        return self.max_a - self.min_a

    @property
    def height(self):
        """Signed: negative when b runs top-to-bottom."""
        return self.max_b - self.min_b

    def center(self):
        return (self.min_a + self.max_a) / 2, (self.min_b + self.max_b) / 2

    def zoom_log10(self):
        return math.log10(1 / self.width)


# The full set, as shown on startup and before every fly-to
HOME_VIEW = ViewRectangle(-2.3, 0.8, 1.5, -1.5)


def to_plane(pixel, pixel_range, plane_range):
    """
    Map a pixel coordinate into the plane.

    Args:
        pixel: Coordinate along one axis
        pixel_range: (min, max) of the pixel axis
        plane_range: (min, max) of the plane axis

    Returns:
        Plane coordinate (float)
    """
    p_min, p_max = pixel_range
    c_min, c_max = plane_range
    return c_min + (pixel - p_min) / (p_max - p_min) * (c_max - c_min)


def to_pixel(value, plane_range, pixel_range):
    """Inverse of to_plane: same interpolation with domain and range swapped."""
    return to_plane(value, plane_range, pixel_range)


def pixel_to_complex(view, x, y, size):
    """Plane coordinates (a, b) of display pixel (x, y) on a size x size grid."""
    a = to_plane(x, (0, size), (view.min_a, view.max_a))
    b = to_plane(y, (0, size), (view.min_b, view.max_b))
    return a, b


def recompute_bounds(view, camera_rect, display_size):
    """
    Work out the view now covering the whole display.

    camera_rect says where the frame rendered for `view` is currently
    drawn (center x/y, size w/h in display pixels). Undoing that
    placement tells us which part of the plane lands on the display's
    corners. Works the same for rects bigger than the display (zoomed
    in) and smaller (zoomed out); nothing is clamped.

    Args:
        view: ViewRectangle the displayed frame was rendered for
        camera_rect: Anything with x, y, w, h attributes
        display_size: Edge length of the square display

    Returns:
        New ViewRectangle
    """
    size = display_size
    left = camera_rect.x - camera_rect.w / 2
    top = camera_rect.y - camera_rect.h / 2

    # Display corners expressed in pixels of the old frame
    top_left_x = size * (-left / camera_rect.w)
    top_left_y = size * (-top / camera_rect.h)
    bottom_right_x = top_left_x + size / camera_rect.w * size
    bottom_right_y = top_left_y + size / camera_rect.h * size

    a_range = (view.min_a, view.max_a)
    b_range = (view.min_b, view.max_b)
    return ViewRectangle(
        min_a=to_plane(top_left_x, (0, size), a_range),
        max_a=to_plane(bottom_right_x, (0, size), a_range),
        min_b=to_plane(top_left_y, (0, size), b_range),
        max_b=to_plane(bottom_right_y, (0, size), b_range),
    )
