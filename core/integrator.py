"""
FlightStateIntegrator: smooths current flight values toward targets

Not a physics model. Each frame every current value moves a fixed fraction
of the remaining distance toward its target; altitude follows the already
smoothed throttle with a second lag; propellers spin at a speed linear in
throttle, alternating direction by index.
"""

import math

import numpy as np

from core.flight_state import FlightState, FlightTargets
from panel_config import (
    MAX_ALTITUDE, MAX_THROTTLE, PROPELLER_COUNT, RPM_PER_THROTTLE, SMOOTHING_FACTOR,
)


def propeller_directions(count: int) -> np.ndarray:
    """+1 for even index, -1 for odd index (counter-rotating pairs)."""
    return np.where(np.arange(count) % 2 == 0, 1.0, -1.0)


class FlightStateIntegrator:
    """Owns the current FlightState and advances it once per frame.

    All propellers share one accumulated spin angle; each propeller's angle is
    that spin times its direction, so the count can follow the loaded model."""

    def __init__(self, smoothing_factor: float = SMOOTHING_FACTOR,
                 max_altitude: float = MAX_ALTITUDE,
                 propeller_count: int = PROPELLER_COUNT):
        self.smoothing_factor = smoothing_factor
        self.max_altitude = max_altitude
        self.state = FlightState(
            propeller_angles=np.zeros(propeller_count, dtype=np.float64))
        self._directions = propeller_directions(propeller_count)
        self._spin = 0.0    # radians, unsigned
        self.frames = 0

    @property
    def propeller_count(self) -> int:
        return len(self._directions)

    def set_propeller_count(self, count: int):
        """Resize the propeller set. Angles keep the spin accumulated so far."""
        self._directions = propeller_directions(count)
        self.state.propeller_angles = self._directions * self._spin

    def _smooth(self, current: float, target: float) -> float:
        return current + (target - current) * self.smoothing_factor

    def update(self, targets: FlightTargets, dt: float) -> FlightState:
        """Advance one frame. `dt` is elapsed seconds since the previous frame.

        The blend weight is applied per call, not scaled by dt; only the
        propeller angle integrates over time."""
        s = self.state
        s.roll = self._smooth(s.roll, targets.roll)
        s.pitch = self._smooth(s.pitch, targets.pitch)
        s.yaw = self._smooth(s.yaw, targets.yaw)
        s.throttle = self._smooth(s.throttle, targets.throttle)

        # Altitude follows the smoothed throttle, not the target
        target_altitude = (s.throttle / MAX_THROTTLE) * self.max_altitude
        s.altitude = self._smooth(s.altitude, target_altitude)

        self._spin += self.propeller_rad_per_sec() * dt
        s.propeller_angles = self._directions * self._spin

        self.frames += 1
        return s

    def propeller_rad_per_sec(self) -> float:
        rpm = self.state.throttle * RPM_PER_THROTTLE
        return (rpm / 60.0) * 2.0 * math.pi

    def apply(self, model) -> bool:
        """Copy the current state onto a render model.

        Attitude is converted to radians here and nowhere else. Returns False
        (and touches nothing) when the model has not been loaded yet."""
        if model is None:
            return False
        s = self.state
        model.position_y = s.altitude
        model.rotation_x = math.radians(s.roll)
        model.rotation_y = math.radians(s.pitch)
        model.rotation_z = math.radians(s.yaw)
        if len(model.propellers) != self.propeller_count:
            self.set_propeller_count(len(model.propellers))
        for index, prop in enumerate(model.propellers):
            prop.rotation_z = float(s.propeller_angles[index])
        return True

    def get_status(self) -> dict:
        s = self.state
        return {
            'roll': s.roll,
            'pitch': s.pitch,
            'yaw': s.yaw,
            'throttle': s.throttle,
            'altitude': s.altitude,
            'rpm': s.rpm,
            'propeller_angles': s.propeller_angles.tolist(),
            'frames': self.frames,
        }
