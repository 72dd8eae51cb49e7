"""
Smoothed camera over the last rendered frame.

Between renders the frame is not recomputed; it is moved and scaled on
screen. ViewportController keeps two CameraRects: the target that
pan/zoom/fly-to write to, and the current one that eases toward it
every tick and is what actually gets drawn. When a render commits, the
accumulated rect becomes the new plane bounds and both rects snap back
to neutral.
"""

from dataclasses import dataclass


@dataclass
class CameraRect:
    """Where the frame sits on the display: center (x, y), size (w, h)."""

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def neutral(cls, display_size):
        half = display_size / 2
        return cls(half, half, float(display_size), float(display_size))

    def distance_to(self, other):
        """Largest componentwise gap to another rect."""
        return max(abs(self.x - other.x), abs(self.y - other.y),
                   abs(self.w - other.w), abs(self.h - other.h))


class ViewportController:
    """
    Pan/zoom input and exponential smoothing for the display rect.

    Attributes:
        display_size: Edge of the square display in pixels
        current: Rect drawn this frame
        target: Rect current is easing toward
    """

    def __init__(self, display_size, smoothing_factor=0.1, pan_damping=0.3,
                 zoom_step=0.001, zoom_bounds=(1 / 30, 30.0)):
        """
        Args:
            display_size: Edge of the square display in pixels
            smoothing_factor: Fraction of the remaining gap closed per tick
            pan_damping: Scale applied to raw pointer deltas
            zoom_step: Multiplicative zoom per wheel step
            zoom_bounds: (min, max) rect size as multiples of display_size
        """
        self.display_size = display_size
        self.smoothing_factor = smoothing_factor
        self.pan_damping = pan_damping
        self.zoom_step = zoom_step
        self.min_size = display_size * zoom_bounds[0]
        self.max_size = display_size * zoom_bounds[1]

        self.current = CameraRect.neutral(display_size)
        self.target = CameraRect.neutral(display_size)

    def reset(self):
        """Snap current and target back to the neutral full-display rect."""
        self.current = CameraRect.neutral(self.display_size)
        self.target = CameraRect.neutral(self.display_size)

    def set_target(self, x, y, w, h=None):
        """
        Set the rect to ease toward.

        w is clamped to the zoom window and mirrored to h; the h argument
        is accepted for symmetry but the rect always stays square.
        """
        size = min(max(w, self.min_size), self.max_size)
        self.target = CameraRect(x, y, size, size)

    def tick(self):
        """Move current a fixed fraction of the way to target."""
        k = self.smoothing_factor
        cur = self.current
        tgt = self.target
        cur.x += (tgt.x - cur.x) * k
        cur.y += (tgt.y - cur.y) * k
        cur.w += (tgt.w - cur.w) * k
        cur.h += (tgt.h - cur.h) * k

    def pan(self, dx, dy):
        """Drag the frame by a (damped) pointer delta."""
        self.target.x += dx * self.pan_damping
        self.target.y += dy * self.pan_damping

    def zoom(self, magnitude, anchor_x, anchor_y, zooming_in):
        """
        Zoom about a display point in `magnitude` small steps.

        Each step scales the rect by (1 + zoom_step) and shifts its
        center so the anchor stays put. Zoom-out uses the reciprocal
        shift step / (1 + step). Stops early at the zoom window's edge.
        """
        step = self.zoom_step
        tgt = self.target
        for _ in range(int(magnitude)):
            if zooming_in:
                if tgt.w > self.max_size:
                    return
                tgt.x -= step * (anchor_x - tgt.x)
                tgt.y -= step * (anchor_y - tgt.y)
                tgt.w *= step + 1
                tgt.h *= step + 1
            else:
                if tgt.w < self.min_size:
                    return
                tgt.x += step / (step + 1) * (anchor_x - tgt.x)
                tgt.y += step / (step + 1) * (anchor_y - tgt.y)
                tgt.w /= step + 1
                tgt.h /= step + 1

    def display_rect(self):
        """Current rect as (left, top, w, h) for blitting."""
        cur = self.current
        return cur.x - cur.w / 2, cur.y - cur.h / 2, cur.w, cur.h
