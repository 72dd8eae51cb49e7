"""
Main application module for the Mandelbrot explorer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop (one engine Tick per frame)
- Turning pygame input into engine events (pan, zoom, selections)
- Drawing the last frame inside the smoothed camera rect
- Status readout and the settings panel
"""

import os
from datetime import datetime

import numpy as np
import pygame

from .engine import ExplorerState, Pan, SelectPoint, Tick, Zoom, dispatch
from .menu import Menu
from .navigator import RESET_KEY
from .renderer import FrameRenderer, RenderJob
from .settings import load_config, log


class MandelbrotApp:
    """
    Main application class for the Mandelbrot explorer.

    Handles the pygame window and event loop, and forwards everything
    else to the engine through dispatch().
    """

    PANEL_WIDTH = 200
    FPS = 60
    BACKGROUND = (55, 55, 55)
    SNAPSHOT_SCALE = 2  # Saved images are this many times the display size

    def __init__(self, config=None):
        """
        Initialize the application.

        Args:
            config: ExplorerConfig (default: loaded from settings.json)
        """
        self.config = config or load_config()
        self.size = self.config.display_size

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.status_font = None

        self.state = None
        self.menu = None
        self.frame_surface = None

        self.dragging = False
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_state()

        self.running = True
        while self.running:
            self._handle_events()
            self._apply(Tick())
            self._draw()
            self.clock.tick(self.FPS)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.size + self.PANEL_WIDTH, self.size),
            pygame.DOUBLEBUF
        )
        pygame.display.set_caption("Compiling (first run only)...")
        self.clock = pygame.time.Clock()
        self.status_font = pygame.font.SysFont('Arial', 10)

    def _init_state(self):
        """Warm up JIT, render the first frame and build the panel."""
        renderer = FrameRenderer()
        renderer.warmup()
        self.state = ExplorerState.create(self.config, renderer)
        self._set_frame(self.state.frame)

        self.menu = Menu(
            self.size, 0, self.PANEL_WIDTH,
            self.config.iteration_options,
            self.state.max_iterations,
            self.state.color_scheme,
        )
        pygame.display.set_caption(
            "Mandelbrot Set - Scroll to zoom, drag to pan, R to reset"
        )

    def _apply(self, event):
        """Dispatch an engine event and pick up any new frame."""
        self.state, frame = dispatch(self.state, event)
        if frame is not None:
            self._set_frame(frame)
        return frame

    def _set_frame(self, frame):
        # Buffers are [row, col]; surfarray wants [x, y]
        self.frame_surface = pygame.surfarray.make_surface(
            frame.pixels.swapaxes(0, 1)
        )

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue

            # Panel gets first crack at events
            handled, engine_event = self.menu.handle_event(event)
            if engine_event is not None:
                self._apply(engine_event)
                if isinstance(engine_event, SelectPoint):
                    self.menu.set_max_iter(self.state.max_iterations)
            if handled:
                continue

            if event.type == pygame.MOUSEWHEEL:
                self._handle_zoom(event)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.dragging = self._on_canvas(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.dragging = False
            elif event.type == pygame.MOUSEMOTION:
                if self.dragging:
                    dx, dy = event.rel
                    self._apply(Pan(dx, dy))
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _on_canvas(self, pos):
        return 0 <= pos[0] < self.size and 0 <= pos[1] < self.size

    def _handle_zoom(self, event):
        """Handle mouse wheel zoom (scroll up = zoom in)."""
        mx, my = pygame.mouse.get_pos()
        if not self._on_canvas((mx, my)):
            return
        steps = event.y * self.config.wheel_steps_per_notch
        self._apply(Zoom(steps, mx, my))

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            self._apply(SelectPoint(RESET_KEY))
            self.menu.set_max_iter(self.state.max_iterations)
        elif event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_s and pygame.key.get_mods() & (pygame.KMOD_META | pygame.KMOD_CTRL):
            self._save_high_res_image()

    def _save_high_res_image(self):
        """Save a high-resolution image of the current view."""
        pygame.display.set_caption("Saving high-res image... (this may take a moment)")
        pygame.display.flip()

        state = self.state
        job = RenderJob(
            render_size=self.size * self.SNAPSHOT_SCALE,
            max_iterations=state.max_iterations,
            bailout_radius=self.config.bailout_radius,
            color_scheme=state.color_scheme,
            bailout_metric=self.config.bailout_metric,
            hue_offset=state.hue_drift.offset,
        )
        frame = state.renderer.render(state.view, job)
        surface = pygame.surfarray.make_surface(np.ascontiguousarray(frame.pixels.swapaxes(0, 1)))

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.abspath(f"mandelbrot_{timestamp}.png")
        pygame.image.save(surface, filename)
        pygame.display.set_caption(f"Saved: {os.path.basename(filename)} - Mandelbrot Set")
        print(f"High-resolution image saved to: {filename}")

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill(self.BACKGROUND)

        left, top, w, h = self.state.viewport.display_rect()
        if w >= 1 and h >= 1:
            scaled = pygame.transform.scale(self.frame_surface, (int(w), int(h)))
            self.screen.blit(scaled, (int(left), int(top)))

        self._draw_status()
        self.menu.draw(self.screen, self.state.hue_drift.offset)
        pygame.display.flip()

    def _draw_status(self):
        a, b, zoom = self.state.status()
        color = (125, 125, 125)
        lines = (f"a: {a}", f"b: {b}", f"Zoom: 10^{np.floor(zoom * 100) / 100}")
        for i, line in enumerate(lines):
            text = self.status_font.render(line, True, color)
            self.screen.blit(text, (5, 4 + 10 * i))


def run(config=None):
    """
    Run the Mandelbrot explorer.

    Args:
        config: ExplorerConfig (default: loaded from settings.json)
    """
    app = MandelbrotApp(config)
    try:
        app.run()
    except KeyboardInterrupt:
        log("interrupted")
        pygame.quit()
