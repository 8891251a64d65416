"""
FlightControlSession: one panel's targets, state and frame timing

Wiring:
  left stick  --(x, y)--> map_left_stick  --> targets.throttle, targets.yaw
  right stick --(x, y)--> map_right_stick --> targets.pitch, targets.roll
  keyboard    --key-->    apply_key       --> any target, +/- step
  tick(ms) --> FrameClock --> dt --> integrator.update(targets, dt)
           --> render observers(state) --> frame observers(readout)

Only input handlers write `targets`; only the integrator writes `state`.
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from core.control_mapper import KEY_BINDINGS, apply_key, apply_left_stick, apply_right_stick
from core.flight_state import ControlMode, FlightState, FlightTargets
from core.frame_clock import FrameClock
from core.input_device import DualAxisInputDevice, KeyboardInput
from core.integrator import FlightStateIntegrator
import panel_config as cfg


@dataclass
class DashboardReadout:
    """Per-frame values for the dashboard, already formatted."""
    roll: str
    pitch: str
    yaw: str
    throttle: str
    rpm: int
    altitude: str
    clock_time: str
    fps: int
    data_source: str
    status: str


@dataclass
class StickReadout:
    """Target values produced by the last change of one stick."""
    stick: str          # "left" or "right"
    labels: tuple       # e.g. ("Throttle", "Yaw")
    values: tuple       # formatted to two decimals


def format_readout(state: FlightState, fps: int, mode: ControlMode,
                   now: Optional[float] = None) -> DashboardReadout:
    if now is None:
        now = time.time()
    return DashboardReadout(
        roll=f"{state.roll:.2f}",
        pitch=f"{state.pitch:.2f}",
        yaw=f"{state.yaw:.2f}",
        throttle=f"{state.throttle:.2f}",
        rpm=round(state.rpm),
        altitude=f"{state.altitude:.2f}",
        clock_time=time.strftime("%H:%M:%S", time.localtime(now)),
        fps=fps,
        data_source=mode.source_label,
        status=mode.status_label,
    )


class FlightControlSession:
    """Process-wide flight control context for one panel."""

    def __init__(self, start_ms: float = 0.0, integrator: FlightStateIntegrator = None):
        self.targets = FlightTargets()
        self.integrator = integrator or FlightStateIntegrator()
        self.clock = FrameClock(start_ms)
        self.mode = ControlMode.MANUAL

        self.left_stick: Optional[DualAxisInputDevice] = None
        self.right_stick: Optional[DualAxisInputDevice] = None
        self.keyboard = KeyboardInput(KEY_BINDINGS.keys())
        self.keyboard.on_change(self.on_key)

        self._render_observers: List[Callable[[FlightState], None]] = []
        self._frame_observers: List[Callable[[DashboardReadout], None]] = []
        self._stick_observers: List[Callable[[StickReadout], None]] = []
        self._mode_observers: List[Callable[[ControlMode], None]] = []

    @property
    def state(self) -> FlightState:
        return self.integrator.state

    # ── Input wiring ────────────────────────────────────────────────────

    def attach_sticks(self, left: DualAxisInputDevice, right: DualAxisInputDevice):
        """Subscribe the two joysticks to their mapper handlers."""
        self.left_stick = left
        self.right_stick = right
        left.on_change(self.on_left_change)
        right.on_change(self.on_right_change)

    def on_left_change(self, x: float, y: float):
        """Left: vertical = throttle, horizontal = yaw."""
        apply_left_stick(self.targets, x, y)
        self._notify_stick("left", ("Throttle", "Yaw"),
                           (self.targets.throttle, self.targets.yaw))

    def on_right_change(self, x: float, y: float):
        """Right: vertical = pitch, horizontal = roll."""
        apply_right_stick(self.targets, x, y)
        self._notify_stick("right", ("Pitch", "Roll"),
                           (self.targets.pitch, self.targets.roll))

    def on_key(self, key: str) -> bool:
        handled = apply_key(self.targets, key)
        if handled and cfg.VERBOSE:
            print(f"[key] {key} -> {self.targets}")
        return handled

    def center(self):
        """Release both sticks (each emits its neutral vector)."""
        for stick in (self.left_stick, self.right_stick):
            if stick is not None:
                stick.end()

    def set_mode(self, mode: ControlMode):
        if mode is self.mode:
            return
        self.mode = mode
        print(f"Data source: {mode.source_label} ({mode.status_label})")
        for callback in self._mode_observers:
            callback(mode)

    def toggle_mode(self):
        if self.mode is ControlMode.MANUAL:
            self.set_mode(ControlMode.LIVE)
        else:
            self.set_mode(ControlMode.MANUAL)

    # ── Observers ───────────────────────────────────────────────────────

    def add_render_observer(self, callback: Callable[[FlightState], None]):
        self._render_observers.append(callback)

    def add_frame_observer(self, callback: Callable[[DashboardReadout], None]):
        self._frame_observers.append(callback)

    def add_stick_observer(self, callback: Callable[[StickReadout], None]):
        self._stick_observers.append(callback)

    def add_mode_observer(self, callback: Callable[[ControlMode], None]):
        self._mode_observers.append(callback)

    def _notify_stick(self, stick: str, labels: tuple, values: tuple):
        readout = StickReadout(stick, labels, tuple(f"{v:.2f}" for v in values))
        for callback in self._stick_observers:
            callback(readout)

    # ── Frame step ──────────────────────────────────────────────────────

    def tick(self, timestamp_ms: float) -> FlightState:
        """One frame: time -> integrate -> render -> dashboard."""
        dt = self.clock.tick(timestamp_ms)
        state = self.integrator.update(self.targets, dt)

        for callback in self._render_observers:
            callback(state)

        if self._frame_observers:
            readout = format_readout(state, self.clock.fps, self.mode)
            for callback in self._frame_observers:
                callback(readout)

        if cfg.VERBOSE and self.integrator.frames % 60 == 0:
            print(f"[frame {self.integrator.frames}] dt={dt * 1000:.1f}ms "
                  f"fps={self.clock.fps} state={self.integrator.get_status()}")
        return state
