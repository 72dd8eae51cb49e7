"""
Side panel for the Mandelbrot explorer.

Provides dropdowns for color scheme and max iterations, a gradient
preview of the selected scheme, and one button per catalog point of
interest. The panel never changes explorer state itself: it turns
clicks into engine events for the app to dispatch.
"""

import numpy as np
import pygame

from .colormaps import COLOR_SCHEMES, scheme_name, scheme_preview
from .engine import SelectIterations, SelectPoint, SelectScheme
from .navigator import CATALOG


ITEM_HEIGHT = 22
PREVIEW_HEIGHT = 10


class Dropdown:
    """A dropdown/select component."""

    def __init__(self, x, y, width, options, selected_idx=0):
        self.x = x
        self.y = y
        self.width = width
        self.height = 24
        self.options = options
        self.selected_idx = selected_idx
        self.expanded = False
        self.hovered_idx = -1

    def get_value(self):
        return self.options[self.selected_idx]

    def set_value(self, value):
        if value in self.options:
            self.selected_idx = self.options.index(value)

    def _item_at(self, pos):
        item_y = self.y + self.height
        for i in range(len(self.options)):
            if pygame.Rect(self.x, item_y, self.width, ITEM_HEIGHT).collidepoint(pos):
                return i
            item_y += ITEM_HEIGHT
        return -1

    def handle_event(self, event):
        """Returns (handled, value_changed)."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            button_rect = pygame.Rect(self.x, self.y, self.width, self.height)
            if button_rect.collidepoint(event.pos):
                self.expanded = not self.expanded
                return True, False

            if self.expanded:
                self.expanded = False
                idx = self._item_at(event.pos)
                if idx >= 0:
                    old_idx = self.selected_idx
                    self.selected_idx = idx
                    return True, old_idx != idx
                # Click outside dropdown - just close it
                return True, False

        elif event.type == pygame.MOUSEMOTION:
            self.hovered_idx = self._item_at(event.pos) if self.expanded else -1

        return False, False

    def draw(self, screen, font):
        button_rect = pygame.Rect(self.x, self.y, self.width, self.height)
        pygame.draw.rect(screen, (55, 55, 55), button_rect)
        pygame.draw.rect(screen, (100, 100, 100), button_rect, 1)

        text = font.render(str(self.get_value()), True, (220, 220, 220))
        screen.blit(text, (self.x + 8, self.y + 5))

        arrow = "v" if not self.expanded else "^"
        arrow_text = font.render(arrow, True, (150, 150, 150))
        screen.blit(arrow_text, (self.x + self.width - 18, self.y + 5))

        if self.expanded:
            item_y = self.y + self.height
            for i, opt in enumerate(self.options):
                item_rect = pygame.Rect(self.x, item_y, self.width, ITEM_HEIGHT)

                if i == self.selected_idx:
                    pygame.draw.rect(screen, (70, 100, 70), item_rect)
                elif i == self.hovered_idx:
                    pygame.draw.rect(screen, (65, 65, 65), item_rect)
                else:
                    pygame.draw.rect(screen, (50, 50, 50), item_rect)
                pygame.draw.rect(screen, (80, 80, 80), item_rect, 1)

                color = (255, 255, 255) if i == self.selected_idx else (180, 180, 180)
                text = font.render(str(opt), True, color)
                screen.blit(text, (self.x + 8, item_y + 4))
                item_y += ITEM_HEIGHT


class Button:
    """A plain labelled push button."""

    def __init__(self, x, y, width, label, height=24):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.hovered = False

    def handle_event(self, event):
        """Returns True if the button was clicked."""
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self.rect.collidepoint(event.pos)
        return False

    def draw(self, screen, font):
        fill = (70, 70, 80) if self.hovered else (55, 55, 60)
        pygame.draw.rect(screen, fill, self.rect)
        pygame.draw.rect(screen, (100, 100, 100), self.rect, 1)
        text = font.render(self.label, True, (220, 220, 220))
        screen.blit(text, (self.rect.x + 8, self.rect.y + 5))


class Menu:
    """
    Settings panel to the right of the fractal display.

    Color scheme and iteration dropdowns sit on top, catalog buttons
    below them. Expanded dropdowns draw over the buttons, so they get
    events first.
    """

    def __init__(self, x, y, width, iteration_options, max_iter, scheme):
        self.x = x
        self.y = y
        self.width = width

        self.font = None
        self.small_font = None

        inner = width - 16
        self.color_dropdown = Dropdown(
            x + 8, y + 28, inner, list(COLOR_SCHEMES.keys()),
            list(COLOR_SCHEMES.keys()).index(scheme_name(scheme))
        )

        self.iter_options = [str(v) for v in iteration_options]
        if str(max_iter) not in self.iter_options:
            self.iter_options.append(str(max_iter))
        self.iter_dropdown = Dropdown(
            x + 8, y + 104, inner, self.iter_options,
            self.iter_options.index(str(max_iter))
        )

        # Preview strip surface, rebuilt only when (scheme, hue_offset) changes
        self._preview_key = None
        self._preview_surface = None

        self.point_buttons = []
        button_y = y + 160
        for key in CATALOG:
            self.point_buttons.append((key, Button(x + 8, button_y, inner, key)))
            button_y += 30

    def init_fonts(self):
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 14)
        self.small_font = pygame.font.SysFont('Arial', 12)

    def set_max_iter(self, max_iter):
        """Reflect an iteration change made elsewhere (e.g. a fly-to)."""
        if str(max_iter) not in self.iter_dropdown.options:
            self.iter_dropdown.options.append(str(max_iter))
        self.iter_dropdown.set_value(str(max_iter))

    def preview_surface(self, scheme, hue_offset=0.0):
        """Gradient strip for a scheme, cached until the scheme or hue changes."""
        key = (scheme, hue_offset)
        if key != self._preview_key:
            strip = scheme_preview(scheme, self.width - 16, hue_offset)
            # surfarray is [x, y]; stretch the 1px strip down to PREVIEW_HEIGHT
            column = np.repeat(strip[:, np.newaxis, :], PREVIEW_HEIGHT, axis=1)
            self._preview_surface = pygame.surfarray.make_surface(column)
            self._preview_key = key
        return self._preview_surface

    def get_rect(self):
        return pygame.Rect(self.x, self.y, self.width, 10_000)

    def point_in_menu(self, pos):
        return self.get_rect().collidepoint(pos)

    def handle_event(self, event):
        """
        Handle a pygame event.

        Returns:
            (handled, engine_event) where engine_event is a SelectScheme,
            SelectIterations or SelectPoint to dispatch, or None
        """
        for dropdown in (self.color_dropdown, self.iter_dropdown):
            if dropdown.expanded or event.type != pygame.MOUSEMOTION:
                handled, changed = dropdown.handle_event(event)
                if handled:
                    if not changed:
                        return True, None
                    if dropdown is self.color_dropdown:
                        return True, SelectScheme(COLOR_SCHEMES[dropdown.get_value()])
                    return True, SelectIterations(int(dropdown.get_value()))

        for key, button in self.point_buttons:
            if button.handle_event(event):
                return True, SelectPoint(key)

        if event.type == pygame.MOUSEBUTTONDOWN and self.point_in_menu(event.pos):
            return True, None
        return False, None

    def draw(self, screen, hue_offset=0.0):
        if self.font is None:
            self.init_fonts()

        panel = pygame.Rect(self.x, self.y, self.width, screen.get_height())
        pygame.draw.rect(screen, (40, 40, 40), panel)

        label = self.small_font.render('Color Scheme:', True, (180, 180, 180))
        screen.blit(label, (self.x + 8, self.y + 10))

        # Gradient preview under the color dropdown
        scheme = COLOR_SCHEMES[self.color_dropdown.get_value()]
        screen.blit(self.preview_surface(scheme, hue_offset), (self.x + 8, self.y + 56))

        label = self.small_font.render('Number of iterations:', True, (180, 180, 180))
        screen.blit(label, (self.x + 8, self.y + 86))

        for _, button in self.point_buttons:
            button.draw(screen, self.font)

        # Dropdowns last so their expanded lists overlay the buttons
        self.iter_dropdown.draw(screen, self.small_font)
        self.color_dropdown.draw(screen, self.small_font)
