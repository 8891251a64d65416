"""
Dashboard panel: flight readouts, stick targets, mode buttons, status bar

Pure observer: it stores whatever the session publishes and draws the last
values each frame. Clicking a mode button only changes labels.
"""

import pygame
from typing import Dict, Optional, Tuple

from core.flight_state import ControlMode
from core.session import DashboardReadout, StickReadout
from simulation.graphics import Colors


class DashboardPanel:
    """Right-hand side panel of the flight control window."""

    BUTTON_H = 28

    def __init__(self, rect: pygame.Rect, status_rect: pygame.Rect):
        self.rect = pygame.Rect(rect)
        self.status_rect = pygame.Rect(status_rect)
        self.readout: Optional[DashboardReadout] = None
        self.stick_values: Dict[str, StickReadout] = {}
        self.mode = ControlMode.MANUAL
        self.data_source = ControlMode.MANUAL.source_label
        self.status_text = ControlMode.MANUAL.status_label
        self._layout_buttons()

        if not pygame.font.get_init():
            pygame.font.init()
        self.font_small = pygame.font.Font(None, 18)
        self.font_medium = pygame.font.Font(None, 24)
        self.font_large = pygame.font.Font(None, 32)

    def _layout_buttons(self):
        half = (self.rect.width - 30) // 2
        top = self.rect.y + 52
        self.mode_buttons: Dict[ControlMode, pygame.Rect] = {
            ControlMode.MANUAL: pygame.Rect(self.rect.x + 10, top, half, self.BUTTON_H),
            ControlMode.LIVE: pygame.Rect(self.rect.x + 20 + half, top, half, self.BUTTON_H),
        }

    def resize(self, rect: pygame.Rect, status_rect: pygame.Rect):
        self.rect = pygame.Rect(rect)
        self.status_rect = pygame.Rect(status_rect)
        self._layout_buttons()

    # ── Observer callbacks ──────────────────────────────────────────────

    def update(self, readout: DashboardReadout):
        self.readout = readout

    def update_stick(self, readout: StickReadout):
        self.stick_values[readout.stick] = readout

    def set_mode(self, mode: ControlMode):
        self.mode = mode
        self.data_source = mode.source_label
        self.status_text = mode.status_label

    def mode_at(self, mx: int, my: int) -> Optional[ControlMode]:
        """Return the mode whose button is under the pointer, if any."""
        for mode, rect in self.mode_buttons.items():
            if rect.collidepoint(mx, my):
                return mode
        return None

    # ── Drawing ─────────────────────────────────────────────────────────

    def rows(self) -> Tuple[Tuple[str, str], ...]:
        """Label/value rows shown in the flight section."""
        r = self.readout
        if r is None:
            return ()
        return (
            ("Roll", r.roll),
            ("Pitch", r.pitch),
            ("Yaw", r.yaw),
            ("Throttle", r.throttle),
            ("RPM", str(r.rpm)),
            ("Altitude", r.altitude),
            ("FPS", str(r.fps)),
            ("Data source", self.data_source),
            ("Last update", r.clock_time),
        )

    def draw(self, surface: pygame.Surface):
        pygame.draw.rect(surface, Colors.PANEL, self.rect)
        pygame.draw.rect(surface, Colors.PANEL_EDGE, self.rect, 1)

        x = self.rect.x + 12
        y = self.rect.y + 14
        title = self.font_large.render("Flight Data", True, Colors.TEXT)
        surface.blit(title, (x, y))

        for mode, rect in self.mode_buttons.items():
            active = mode is self.mode
            pygame.draw.rect(surface, Colors.ACTIVE if active else Colors.PANEL, rect)
            pygame.draw.rect(surface, Colors.PANEL_EDGE, rect, 1)
            label = self.font_medium.render(mode.source_label, True, Colors.WHITE)
            surface.blit(label, (rect.centerx - label.get_width() // 2,
                                 rect.centery - label.get_height() // 2))

        y = self.rect.y + 100
        line_height = 24
        for name, value in self.rows():
            surface.blit(self.font_medium.render(name, True, Colors.DIM_TEXT), (x, y))
            val = self.font_medium.render(value, True, Colors.TEXT)
            surface.blit(val, (self.rect.right - 12 - val.get_width(), y))
            y += line_height

        y += 12
        surface.blit(self.font_medium.render("Stick targets", True, Colors.TEXT), (x, y))
        y += line_height
        for side in ("left", "right"):
            stick = self.stick_values.get(side)
            if stick is None:
                continue
            for name, value in zip(stick.labels, stick.values):
                surface.blit(self.font_small.render(f"{side.title()} {name}", True, Colors.DIM_TEXT), (x, y))
                val = self.font_small.render(value, True, Colors.TEXT)
                surface.blit(val, (self.rect.right - 12 - val.get_width(), y))
                y += 20

        # Bottom status bar
        pygame.draw.rect(surface, Colors.PANEL, self.status_rect)
        status = self.font_small.render(self.status_text, True, Colors.TEXT)
        surface.blit(status, (self.status_rect.x + 10,
                              self.status_rect.centery - status.get_height() // 2))
