"""Tests for the dashboard observer panel."""

import pygame
import pytest

from core.flight_state import ControlMode, FlightState
from core.session import StickReadout, format_readout
from simulation.dashboard import DashboardPanel


@pytest.fixture
def dashboard(pygame_init) -> DashboardPanel:
    return DashboardPanel(pygame.Rect(500, 0, 300, 500), pygame.Rect(0, 500, 800, 28))


class TestDashboardPanel:
    def test_no_rows_before_first_frame(self, dashboard) -> None:
        assert dashboard.rows() == ()

    def test_rows_from_readout(self, dashboard) -> None:
        state = FlightState(roll=1.5, pitch=-2.25, yaw=90.0, throttle=42.0)
        dashboard.update(format_readout(state, 59, ControlMode.MANUAL, now=0.0))
        rows = dict(dashboard.rows())
        assert rows["Roll"] == "1.50"
        assert rows["Pitch"] == "-2.25"
        assert rows["Throttle"] == "42.00"
        assert rows["RPM"] == "4200"
        assert rows["FPS"] == "59"
        assert rows["Data source"] == "Manual"

    def test_mode_buttons(self, dashboard) -> None:
        live = dashboard.mode_buttons[ControlMode.LIVE]
        manual = dashboard.mode_buttons[ControlMode.MANUAL]
        assert dashboard.mode_at(*live.center) is ControlMode.LIVE
        assert dashboard.mode_at(*manual.center) is ControlMode.MANUAL
        assert dashboard.mode_at(0, 0) is None

    def test_set_mode_updates_labels(self, dashboard) -> None:
        dashboard.set_mode(ControlMode.LIVE)
        assert dashboard.data_source == "Live"
        assert dashboard.status_text == "Live data active"

    def test_stick_readouts_kept_per_side(self, dashboard) -> None:
        dashboard.update_stick(StickReadout("left", ("Throttle", "Yaw"), ("50.00", "0.00")))
        dashboard.update_stick(StickReadout("left", ("Throttle", "Yaw"), ("75.00", "90.00")))
        assert dashboard.stick_values["left"].values == ("75.00", "90.00")
        assert "right" not in dashboard.stick_values

    def test_draw(self, dashboard) -> None:
        surface = pygame.Surface((800, 528))
        dashboard.update(format_readout(FlightState(), 60, ControlMode.MANUAL, now=0.0))
        dashboard.update_stick(StickReadout("right", ("Pitch", "Roll"), ("0.00", "0.00")))
        dashboard.draw(surface)

    def test_resize_relayouts_buttons(self, dashboard) -> None:
        dashboard.resize(pygame.Rect(900, 0, 300, 600), pygame.Rect(0, 600, 1200, 28))
        assert dashboard.mode_buttons[ControlMode.MANUAL].x == 910
