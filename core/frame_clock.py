"""
FrameClock: per-frame elapsed time and rolling FPS

Driven by an external loop that passes a monotonic millisecond timestamp
on every rendered frame (pygame.time.get_ticks() in the panel).
"""

from typing import Callable, List, Optional

from panel_config import DEFAULT_FPS

FPS_WINDOW_MS = 1000.0


class FrameClock:
    """Measures frame-to-frame time and a 1-second FPS estimate."""

    def __init__(self, start_ms: float = 0.0, initial_fps: int = DEFAULT_FPS):
        self.last_time = float(start_ms)
        self.last_fps_update = float(start_ms)
        self.frame_count = 0
        self.fps = initial_fps
        self.delta_time = 0.0   # seconds
        self._fps_observers: List[Callable[[int], None]] = []

    def on_fps(self, callback: Callable[[int], None]):
        """Register a callback invoked each time a new FPS value is computed."""
        self._fps_observers.append(callback)

    def tick(self, now_ms: float) -> float:
        """Advance one frame. Returns elapsed time since the last tick in seconds."""
        self.delta_time = (now_ms - self.last_time) / 1000.0
        self.last_time = now_ms

        self.frame_count += 1
        elapsed_ms = now_ms - self.last_fps_update
        if elapsed_ms >= FPS_WINDOW_MS:
            self.fps = round(self.frame_count / (elapsed_ms / 1000.0))
            self.frame_count = 0
            self.last_fps_update = now_ms
            for callback in self._fps_observers:
                callback(self.fps)

        return self.delta_time

    def reset(self, start_ms: Optional[float] = None):
        if start_ms is None:
            start_ms = self.last_time
        self.last_time = float(start_ms)
        self.last_fps_update = float(start_ms)
        self.frame_count = 0
        self.delta_time = 0.0
