"""Tests for frame delta time and the rolling FPS window."""

import pytest

from core.frame_clock import FrameClock


class TestDeltaTime:
    def test_delta_in_seconds(self) -> None:
        clock = FrameClock(start_ms=1000.0)
        assert clock.tick(1016.0) == pytest.approx(0.016)
        assert clock.tick(1050.0) == pytest.approx(0.034)
        assert clock.delta_time == pytest.approx(0.034)

    def test_long_stall_shows_up_in_next_delta(self) -> None:
        clock = FrameClock()
        clock.tick(16.0)
        assert clock.tick(516.0) == pytest.approx(0.5)

    def test_reset_rebases_anchor(self) -> None:
        clock = FrameClock()
        clock.reset(5000.0)
        assert clock.tick(5020.0) == pytest.approx(0.02)


class TestFps:
    def test_sixty_frames_in_one_second(self, recorder) -> None:
        clock = FrameClock(start_ms=0.0, initial_fps=0)
        clock.on_fps(recorder)
        for i in range(1, 61):
            clock.tick(i * 16.67)
        assert clock.fps == 60
        assert recorder.calls == [(60,)]
        assert clock.frame_count == 0

    def test_no_update_before_window_completes(self, recorder) -> None:
        clock = FrameClock(start_ms=0.0, initial_fps=0)
        clock.on_fps(recorder)
        for i in range(1, 59):
            clock.tick(i * 16.67)
        assert clock.fps == 0
        assert recorder.calls == []
        assert clock.frame_count == 58

    def test_thirty_fps(self) -> None:
        clock = FrameClock(start_ms=0.0, initial_fps=0)
        for i in range(1, 31):
            clock.tick(i * 33.4)
        assert clock.fps == 30

    def test_window_restarts_after_emission(self, recorder) -> None:
        clock = FrameClock(start_ms=0.0, initial_fps=0)
        clock.on_fps(recorder)
        for i in range(1, 61):
            clock.tick(i * 16.67)
        anchor = clock.last_fps_update
        for i in range(1, 31):
            clock.tick(anchor + i * 33.4)
        assert [c[0] for c in recorder.calls] == [60, 30]

    def test_default_fps_before_first_window(self) -> None:
        assert FrameClock().fps == 60
