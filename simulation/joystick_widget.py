"""
Virtual Joystick Widgets for the Flight Control Panel

Renders two on-screen joysticks that the pilot drags with the mouse or a
finger. Each stick owns a square widget surface (base circle + handle)
that is repainted on every change and blitted by the graphics engine.
Releasing, or dragging out of the widget, springs the stick back to
center (0, 0).
"""

import pygame
from typing import Callable, Optional, Tuple

from core.input_device import DualAxisInputDevice
from panel_config import JOYSTICK_HANDLE_RADIUS, JOYSTICK_RADIUS, JOYSTICK_SIZE

BASE_FILL = (0xE0, 0xE0, 0xE0)
BASE_STROKE = (0xCC, 0xCC, 0xCC)
HANDLE_FILL = (0x66, 0x66, 0x66)
HANDLE_ACTIVE = (0x44, 0x44, 0x44)


class VirtualJoystick(DualAxisInputDevice):
    """Single virtual joystick: a draggable handle inside a circle."""

    def __init__(self, x: int, y: int, size: int = JOYSTICK_SIZE,
                 radius: int = JOYSTICK_RADIUS, handle_radius: int = JOYSTICK_HANDLE_RADIUS,
                 label: str = "", axis_labels: Tuple[str, str, str, str] = ("", "", "", ""),
                 on_change: Optional[Callable[[float, float], None]] = None):
        # Widget origin (top-left) in window coordinates
        self.x = x
        self.y = y
        self.size = size
        self.handle_radius = handle_radius
        self.label = label
        # (top, bottom, left, right)
        self.axis_labels = axis_labels
        self.surface = pygame.Surface((size, size), pygame.SRCALPHA)
        self.redraw_count = 0
        super().__init__(x + size / 2, y + size / 2, radius, on_change)
        self._redraw()

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.size, self.size)

    def move_to(self, x: int, y: int):
        """Reposition the widget (window resize). An active drag is released."""
        if self.dragging:
            self.end()
        self.x, self.y = x, y
        self.cx = x + self.size / 2
        self.cy = y + self.size / 2
        self.handle_x, self.handle_y = self.cx, self.cy
        self._redraw()

    def handle_mouse_down(self, mx: int, my: int) -> bool:
        """Start drag if the press lands on the widget. Returns True if captured."""
        if self.rect.collidepoint(mx, my):
            self.begin(mx, my)
            return True
        return False

    def handle_mouse_motion(self, mx: int, my: int):
        """Update stick position during drag; leaving the widget releases it."""
        if not self.dragging:
            return
        if not self.rect.collidepoint(mx, my):
            self.end()
            return
        self.update(mx, my)

    def handle_mouse_up(self):
        """Release and spring back to center."""
        if self.dragging:
            self.end()

    def _redraw(self):
        """Repaint base + handle onto the widget surface."""
        self.surface.fill((0, 0, 0, 0))
        local_c = (self.size // 2, self.size // 2)
        pygame.draw.circle(self.surface, BASE_FILL, local_c, int(self.radius))
        pygame.draw.circle(self.surface, BASE_STROKE, local_c, int(self.radius), 1)

        hx = int(round(self.handle_x - self.x))
        hy = int(round(self.handle_y - self.y))
        color = HANDLE_ACTIVE if self.dragging else HANDLE_FILL
        pygame.draw.circle(self.surface, color, (hx, hy), self.handle_radius)
        self.redraw_count += 1

    def draw(self, surface: pygame.Surface, font: Optional[pygame.font.Font] = None):
        """Blit the widget and its labels onto the window surface."""
        surface.blit(self.surface, (self.x, self.y))
        if font is None:
            return

        cx, cy = int(self.cx), int(self.cy)
        r = int(self.radius)
        if self.label:
            lbl = font.render(self.label, True, (200, 200, 200))
            surface.blit(lbl, (cx - lbl.get_width() // 2, self.y + self.size + 4))

        top, bottom, left, right = self.axis_labels
        if top:
            s = font.render(top, True, (150, 150, 150))
            surface.blit(s, (cx - s.get_width() // 2, cy - r - 16))
        if bottom:
            s = font.render(bottom, True, (150, 150, 150))
            surface.blit(s, (cx - s.get_width() // 2, cy + r + 4))
        if left:
            s = font.render(left, True, (150, 150, 150))
            surface.blit(s, (cx - r - s.get_width() - 4, cy - 6))
        if right:
            s = font.render(right, True, (150, 150, 150))
            surface.blit(s, (cx + r + 4, cy - 6))


class JoystickPanel:
    """Two joysticks side by side. Left: throttle/yaw, right: pitch/roll."""

    GAP = 40

    def __init__(self, x: int, y: int, size: int = JOYSTICK_SIZE):
        self.x = x
        self.y = y
        self.size = size
        self.left_stick = VirtualJoystick(
            x, y, size,
            label="Throttle / Yaw",
            axis_labels=("Up", "Down", "Yaw L", "Yaw R"))
        self.right_stick = VirtualJoystick(
            x + size + self.GAP, y, size,
            label="Pitch / Roll",
            axis_labels=("Nose up", "Nose down", "Roll L", "Roll R"))

    @property
    def width(self) -> int:
        return self.size * 2 + self.GAP

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.width, self.size)

    def move_to(self, x: int, y: int):
        self.x, self.y = x, y
        self.left_stick.move_to(x, y)
        self.right_stick.move_to(x + self.size + self.GAP, y)

    def handle_mouse_down(self, mx: int, my: int) -> bool:
        """Try both sticks. Returns True if either captured the press."""
        if self.left_stick.handle_mouse_down(mx, my):
            return True
        if self.right_stick.handle_mouse_down(mx, my):
            return True
        return False

    def handle_mouse_motion(self, mx: int, my: int):
        self.left_stick.handle_mouse_motion(mx, my)
        self.right_stick.handle_mouse_motion(mx, my)

    def handle_mouse_up(self):
        self.left_stick.handle_mouse_up()
        self.right_stick.handle_mouse_up()

    def get_axes(self) -> Tuple[float, float, float, float]:
        """Return (left_x, left_y, right_x, right_y) all in [-1, +1]."""
        lv, rv = self.left_stick.vector, self.right_stick.vector
        return lv.x, lv.y, rv.x, rv.y

    def draw(self, surface: pygame.Surface, font: Optional[pygame.font.Font] = None):
        self.left_stick.draw(surface, font)
        self.right_stick.draw(surface, font)
