"""
Render scheduling: preview then full render after interaction stops.

Rendering costs far more than a frame, so nothing renders while the
user keeps interacting. Every interaction restarts a countdown of
render_wait_frames ticks. Five ticks in, a cheap preview render
fires; at zero the full render fires. The countdown then idles at 0
until the next interaction.
"""

PREVIEW = 'preview'
FULL = 'full'

# Ticks after the last interaction before the preview fires
PREVIEW_DELAY = 5


class RenderScheduler:
    """
    Frame countdown state machine.

    Attributes:
        render_wait_frames: Countdown length after an interaction
        countdown: Ticks left; 0 means idle
    """

    def __init__(self, render_wait_frames=50):
        self.render_wait_frames = render_wait_frames
        self.countdown = 0

    @property
    def preview_at(self):
        return self.render_wait_frames - PREVIEW_DELAY

    def on_interaction(self):
        """Restart the countdown; pre-empts any pending preview/full render."""
        self.countdown = self.render_wait_frames

    def fire_next_tick(self):
        """Make the very next tick fire a full render."""
        self.countdown = 1

    def is_settling(self):
        """True until the preview window has passed."""
        return self.countdown >= self.preview_at

    def tick(self):
        """
        Advance one frame.

        Returns:
            PREVIEW, FULL, or None when nothing should render
        """
        if self.countdown <= 0:
            return None
        self.countdown -= 1
        if self.countdown == self.preview_at:
            return PREVIEW
        if self.countdown == 0:
            return FULL
        return None
