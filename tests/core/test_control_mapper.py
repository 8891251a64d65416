"""Tests for stick/key -> flight target mapping."""

import pytest

from core.control_mapper import (
    KEY_BINDINGS,
    apply_key,
    apply_left_stick,
    apply_right_stick,
    clamp,
    map_pitch,
    map_roll,
    map_throttle,
    map_yaw,
    wrap_degrees,
)
from core.flight_state import FlightTargets


class TestLeftStickMapping:
    """Throttle (vertical) and yaw (horizontal)."""

    @pytest.mark.parametrize("y, expected", [(-1.0, 100.0), (0.0, 50.0), (1.0, 0.0), (-0.5, 75.0)])
    def test_throttle(self, y: float, expected: float) -> None:
        assert map_throttle(y) == pytest.approx(expected)

    def test_throttle_is_clamped(self) -> None:
        assert map_throttle(-1.5) == 100.0
        assert map_throttle(1.5) == 0.0

    @pytest.mark.parametrize("x, expected", [(-1.0, 180.0), (0.0, 0.0), (1.0, 180.0), (0.5, 90.0), (-0.5, 270.0)])
    def test_yaw_wraps_into_range(self, x: float, expected: float) -> None:
        yaw = map_yaw(x)
        assert yaw == pytest.approx(expected)
        assert 0.0 <= yaw < 360.0

    def test_apply_left_stick_writes_targets(self) -> None:
        targets = FlightTargets()
        apply_left_stick(targets, 0.5, -1.0)
        assert targets.throttle == pytest.approx(100.0)
        assert targets.yaw == pytest.approx(90.0)
        assert targets.pitch == 0.0
        assert targets.roll == 0.0


class TestRightStickMapping:
    """Pitch (vertical, stick up = nose up) and roll (horizontal)."""

    def test_stick_up_is_positive_pitch(self) -> None:
        assert map_pitch(-1.0) == pytest.approx(30.0)
        assert map_pitch(1.0) == pytest.approx(-30.0)
        assert map_pitch(0.0) == 0.0

    def test_roll(self) -> None:
        assert map_roll(1.0) == pytest.approx(30.0)
        assert map_roll(-0.5) == pytest.approx(-15.0)

    def test_apply_right_stick_writes_targets(self) -> None:
        targets = FlightTargets()
        apply_right_stick(targets, 0.5, -0.5)
        assert targets.pitch == pytest.approx(15.0)
        assert targets.roll == pytest.approx(15.0)
        assert targets.throttle == 0.0


class TestKeyboardDeltas:
    """Discrete +/-5 steps, clamped or wrapped like stick input."""

    @pytest.fixture
    def targets(self) -> FlightTargets:
        return FlightTargets()

    def test_pitch_keys(self, targets: FlightTargets) -> None:
        assert apply_key(targets, "w")
        assert targets.pitch == 5.0
        apply_key(targets, "s")
        apply_key(targets, "s")
        assert targets.pitch == -5.0

    def test_roll_keys(self, targets: FlightTargets) -> None:
        apply_key(targets, "a")
        assert targets.roll == -5.0
        apply_key(targets, "d")
        apply_key(targets, "d")
        assert targets.roll == 5.0

    def test_attitude_clamped_at_30(self, targets: FlightTargets) -> None:
        for _ in range(10):
            apply_key(targets, "w")
            apply_key(targets, "a")
        assert targets.pitch == 30.0
        assert targets.roll == -30.0

    def test_yaw_wraps_both_ways(self, targets: FlightTargets) -> None:
        apply_key(targets, "q")
        assert targets.yaw == 355.0
        apply_key(targets, "e")
        assert targets.yaw == 0.0

    def test_throttle_clamped(self, targets: FlightTargets) -> None:
        apply_key(targets, "ArrowDown")
        assert targets.throttle == 0.0
        for _ in range(25):
            apply_key(targets, "ArrowUp")
        assert targets.throttle == 100.0

    def test_unknown_key_is_ignored(self, targets: FlightTargets) -> None:
        assert apply_key(targets, "x") is False
        assert targets == FlightTargets()

    def test_all_documented_keys_bound(self) -> None:
        assert set(KEY_BINDINGS) == {"w", "s", "a", "d", "q", "e", "ArrowUp", "ArrowDown"}


class TestHelpers:
    def test_clamp(self) -> None:
        assert clamp(0, 10, -1) == 0
        assert clamp(0, 10, 11) == 10
        assert clamp(0, 10, 4) == 4

    def test_wrap_degrees(self) -> None:
        assert wrap_degrees(360.0) == 0.0
        assert wrap_degrees(-10.0) == 350.0
        assert wrap_degrees(725.0) == 5.0
