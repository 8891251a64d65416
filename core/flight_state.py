"""
Flight Control Data Model

Typed dataclasses for every value that flows through the panel pipeline:

  Joystick --> NormalizedVector --> ControlMapper --> FlightTargets
  FrameClock + FlightTargets --> FlightStateIntegrator --> FlightState

FlightTargets is written only by the input pipeline (joysticks, keyboard).
FlightState is written only by the integrator, once per frame.
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from panel_config import PROPELLER_COUNT, RPM_PER_THROTTLE


# ── Joystick -> Mapper: one change event ────────────────────────────────

@dataclass(frozen=True)
class NormalizedVector:
    """Stick deflection relative to full travel. Each axis in [-1, +1],
    magnitude never above 1. Screen convention: +y is stick pulled DOWN."""
    x: float = 0.0
    y: float = 0.0


# ── Mapper -> Integrator: desired values ────────────────────────────────

@dataclass
class FlightTargets:
    """Instantaneous desired values, set directly by input."""
    throttle: float = 0.0   # 0 .. 100 %
    yaw: float = 0.0        # degrees, 0 .. 360 (wraps)
    pitch: float = 0.0      # degrees, -30 .. +30
    roll: float = 0.0       # degrees, -30 .. +30


# ── Integrator -> Render/Dashboard: smoothed values ─────────────────────

@dataclass
class FlightState:
    """Lagged, smoothed values actually applied to the drone model.

    Attitude is kept in degrees; propeller angles in radians."""
    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    throttle: float = 0.0
    altitude: float = 0.0   # world units
    propeller_angles: np.ndarray = field(
        default_factory=lambda: np.zeros(PROPELLER_COUNT, dtype=np.float64))

    @property
    def rpm(self) -> float:
        """Mock motor RPM, linear in throttle."""
        return self.throttle * RPM_PER_THROTTLE


# ── UI mode (labels only, live ingestion is not implemented) ────────────

class ControlMode(Enum):
    MANUAL = "manual"
    LIVE = "live"

    @property
    def source_label(self) -> str:
        return "Manual" if self is ControlMode.MANUAL else "Live"

    @property
    def status_label(self) -> str:
        if self is ControlMode.MANUAL:
            return "Manual input active"
        return "Live data active"
