"""
Control Mapper: stick vectors and key presses to flight targets

Pure functions. Every value written into FlightTargets passes through the
same bounds: throttle clamped to [0, 100], pitch/roll clamped to +/-30 deg,
yaw wrapped into [0, 360).
"""

from typing import Tuple

from core.flight_state import FlightTargets
from panel_config import KEY_STEP, MAX_ATTITUDE_DEG, MAX_THROTTLE


def clamp(lo: float, hi: float, value: float) -> float:
    return max(lo, min(hi, value))


def wrap_degrees(angle: float) -> float:
    """Renormalize an angle into [0, 360)."""
    return angle % 360.0


# ── Left stick: throttle (vertical) + yaw (horizontal) ──────────────────

def map_throttle(y: float) -> float:
    """Stick up (y=-1) -> 100, center -> 50, stick down (y=+1) -> 0."""
    return clamp(0.0, MAX_THROTTLE, (1.0 - y) * 50.0)


def map_yaw(x: float) -> float:
    """Full left/right -> 180, center -> 0."""
    return wrap_degrees(x * 180.0 + 360.0)


# ── Right stick: pitch (vertical) + roll (horizontal) ───────────────────

def map_pitch(y: float) -> float:
    """Stick up = nose up = positive pitch."""
    return -y * MAX_ATTITUDE_DEG


def map_roll(x: float) -> float:
    return x * MAX_ATTITUDE_DEG


def map_left_stick(x: float, y: float) -> Tuple[float, float]:
    """Return (throttle, yaw) for a left-stick vector."""
    return map_throttle(y), map_yaw(x)


def map_right_stick(x: float, y: float) -> Tuple[float, float]:
    """Return (pitch, roll) for a right-stick vector."""
    return map_pitch(y), map_roll(x)


def apply_left_stick(targets: FlightTargets, x: float, y: float):
    targets.throttle, targets.yaw = map_left_stick(x, y)


def apply_right_stick(targets: FlightTargets, x: float, y: float):
    targets.pitch, targets.roll = map_right_stick(x, y)


# ── Keyboard: discrete deltas on the same targets ───────────────────────

# key -> (target field, signed delta multiplier)
KEY_BINDINGS = {
    "w": ("pitch", +1),
    "s": ("pitch", -1),
    "a": ("roll", -1),
    "d": ("roll", +1),
    "q": ("yaw", -1),
    "e": ("yaw", +1),
    "ArrowUp": ("throttle", +1),
    "ArrowDown": ("throttle", -1),
}


def apply_key(targets: FlightTargets, key: str, step: float = KEY_STEP) -> bool:
    """Nudge one target by +/-step for a recognized key.

    Returns True if the key was handled, False if it is not bound."""
    binding = KEY_BINDINGS.get(key)
    if binding is None:
        return False
    name, sign = binding
    value = getattr(targets, name) + sign * step

    if name == "yaw":
        value = wrap_degrees(value + 360.0)
    elif name == "throttle":
        value = clamp(0.0, MAX_THROTTLE, value)
    else:
        value = clamp(-MAX_ATTITUDE_DEG, MAX_ATTITUDE_DEG, value)

    setattr(targets, name, value)
    return True
