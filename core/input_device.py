"""
Input sources for the flight control panel

An InputSource publishes change events to registered callbacks. Two
producers exist: the dual-axis pointer joystick (vector per drag event)
and the keyboard (one key name per press). Both end up writing the same
FlightTargets through the control mapper.
"""

import math
from typing import Callable, List, Tuple

from core.flight_state import NormalizedVector
from panel_config import JOYSTICK_RADIUS


class InputSource:
    """Publishes change events synchronously to its subscribers."""

    def __init__(self):
        self._callbacks: List[Callable] = []

    def on_change(self, callback: Callable):
        self._callbacks.append(callback)
        return callback

    def _emit(self, *values):
        for callback in self._callbacks:
            callback(*values)


class DualAxisInputDevice(InputSource):
    """Circular drag zone producing a clamped vector in [-1, +1]^2.

    Screen convention is kept: dragging DOWN gives positive y. The handle is
    clamped to the travel radius and the emitted vector is derived from the
    clamped handle, so |vector| <= 1 always."""

    def __init__(self, center_x: float, center_y: float, radius: float = JOYSTICK_RADIUS,
                 on_change: Callable[[float, float], None] = None):
        super().__init__()
        self.cx = center_x
        self.cy = center_y
        self.radius = radius
        self.handle_x = center_x
        self.handle_y = center_y
        self.dragging = False
        self.vector = NormalizedVector()
        if on_change is not None:
            self.on_change(on_change)

    def contains(self, px: float, py: float) -> bool:
        return math.hypot(px - self.cx, py - self.cy) <= self.radius

    def begin(self, px: float, py: float):
        """Pointer pressed: start dragging and emit immediately."""
        self.dragging = True
        self._update_position(px, py)

    def update(self, px: float, py: float):
        """Pointer moved. Ignored unless dragging."""
        if not self.dragging:
            return
        self._update_position(px, py)

    def end(self):
        """Pointer released: snap to center and emit (0, 0)."""
        self.dragging = False
        self.handle_x = self.cx
        self.handle_y = self.cy
        self.vector = NormalizedVector(0.0, 0.0)
        self._redraw()
        self._emit(0.0, 0.0)

    def compute_handle(self, px: float, py: float) -> Tuple[float, float]:
        """Handle position for a pointer position, clamped to the travel circle."""
        dx = px - self.cx
        dy = py - self.cy
        dist = math.hypot(dx, dy)
        if dist > self.radius:
            return (self.cx + dx / dist * self.radius,
                    self.cy + dy / dist * self.radius)
        return self.cx + dx, self.cy + dy

    def _update_position(self, px: float, py: float):
        self.handle_x, self.handle_y = self.compute_handle(px, py)
        self._redraw()
        nx = (self.handle_x - self.cx) / self.radius
        ny = (self.handle_y - self.cy) / self.radius
        self.vector = NormalizedVector(nx, ny)
        self._emit(nx, ny)

    def _redraw(self):
        """Hook for widgets that repaint base + handle on every change."""
        pass


class KeyboardInput(InputSource):
    """Forwards recognized key names (e.g. 'w', 'ArrowUp') to subscribers."""

    def __init__(self, keys):
        super().__init__()
        self.keys = set(keys)

    def press(self, key: str) -> bool:
        if key not in self.keys:
            return False
        self._emit(key)
        return True
