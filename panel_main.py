#!/usr/bin/env python3
"""
Flight Control Panel: two virtual joysticks driving a simulated drone

  ┌───────────────────────────────────────┬──────────────────┐
  │  3D viewport (grid, axes, drone)      │  Flight Data     │
  │                                       │  [Manual] [Live] │
  │                                       │  roll/pitch/yaw  │
  ├───────────────────────────────────────┤  throttle/RPM    │
  │  (Throttle / Yaw)   (Pitch / Roll)    │  stick targets   │
  ├───────────────────────────────────────┴──────────────────┤
  │  status bar                                              │
  └──────────────────────────────────────────────────────────┘

Each loop iteration: pump events (sticks + keys write FlightTargets), then
FlightControlSession.tick() advances the smoothed FlightState and notifies
the renderer and the dashboard.

Controls:
  Drag left stick:  up/down = throttle, left/right = yaw
  Drag right stick: up/down = pitch,    left/right = roll
  W/S: pitch +/-5    A/D: roll -/+5    Q/E: yaw -/+5
  UP/DOWN: throttle +/-5
  C: center both sticks
  M: toggle Manual / Live label
  P: Save screenshot
  ESC: Exit
"""

import argparse
import os
import sys
import time
from typing import Optional, Tuple

import cv2
import numpy as np
import pygame

import panel_config as cfg
from core.flight_state import FlightState
from core.integrator import FlightStateIntegrator
from core.session import FlightControlSession
from simulation.dashboard import DashboardPanel
from simulation.drone_model import DeferredModelLoader
from simulation.graphics import GraphicsEngine
from simulation.joystick_widget import JoystickPanel

DASHBOARD_WIDTH = 300
STATUS_BAR_HEIGHT = 28
STICK_AREA_PAD = 30

# pygame key -> control mapper key name
KEY_NAMES = {
    pygame.K_w: "w",
    pygame.K_s: "s",
    pygame.K_a: "a",
    pygame.K_d: "d",
    pygame.K_q: "q",
    pygame.K_e: "e",
    pygame.K_UP: "ArrowUp",
    pygame.K_DOWN: "ArrowDown",
}


def compute_layout(window_size: Tuple[int, int], stick_size: int = cfg.JOYSTICK_SIZE):
    """Return (viewport, dashboard_rect, status_rect, stick_origin) for a window size."""
    w, h = window_size
    body_h = h - STATUS_BAR_HEIGHT
    dashboard = pygame.Rect(w - DASHBOARD_WIDTH, 0, DASHBOARD_WIDTH, body_h)
    status = pygame.Rect(0, body_h, w, STATUS_BAR_HEIGHT)
    stick_top = body_h - stick_size - STICK_AREA_PAD
    viewport = pygame.Rect(0, 0, w - DASHBOARD_WIDTH, max(1, stick_top - 10))
    return viewport, dashboard, status, (STICK_AREA_PAD, stick_top)


class FlightPanelGUI:
    """Main panel window: owns the session, widgets, renderer and recorder."""

    def __init__(self, window_size: Tuple[int, int] = cfg.WINDOW_SIZE,
                 model_path: str = cfg.MODEL_PATH, frame_rate_cap: int = cfg.FRAME_RATE_CAP,
                 record: bool = False):
        self.window_size = window_size
        self.frame_rate_cap = frame_rate_cap
        self.running = True
        self.clock = pygame.time.Clock()

        viewport, dash_rect, status_rect, stick_origin = compute_layout(window_size)

        # ══════════════════════════════════════════════════════════════
        # RENDERING
        # ══════════════════════════════════════════════════════════════
        self.graphics = GraphicsEngine(window_size, viewport=viewport)
        self.model_loader = DeferredModelLoader(
            model_path, delay_frames=cfg.MODEL_LOAD_DELAY_FRAMES, scale=cfg.MODEL_SCALE)
        self.dashboard = DashboardPanel(dash_rect, status_rect)
        self.sticks = JoystickPanel(*stick_origin)

        # ══════════════════════════════════════════════════════════════
        # FLIGHT CONTROL PIPELINE
        # ══════════════════════════════════════════════════════════════
        self.session = FlightControlSession(
            start_ms=pygame.time.get_ticks(), integrator=FlightStateIntegrator())
        self.session.attach_sticks(self.sticks.left_stick, self.sticks.right_stick)
        self.session.add_render_observer(self._render_drone)
        self.session.add_frame_observer(self.dashboard.update)
        self.session.add_stick_observer(self.dashboard.update_stick)
        self.session.add_mode_observer(self.dashboard.set_mode)
        if cfg.VERBOSE:
            self.session.clock.on_fps(lambda fps: print(f"[fps] {fps}"))

        self._touch_finger: Optional[int] = None

        # Video recording
        self.record = record
        self._video_writer: Optional[cv2.VideoWriter] = None
        self._video_frame_count: int = 0
        self._video_frames_written: int = 0
        self._video_filename: str = ""

    # ══════════════════════════════════════════════════════════════════
    # MAIN LOOP
    # ══════════════════════════════════════════════════════════════════

    def run(self):
        print("Starting Flight Control Panel...")
        print("Controls: drag sticks, W/S/A/D/Q/E + arrows, C=center, M=mode, P=screenshot, ESC=exit")
        if self.record:
            self._start_video_recording()
        self.session.clock.reset(pygame.time.get_ticks())

        while self.running:
            self.clock.tick(self.frame_rate_cap)
            self._handle_events()
            if not self.running:
                break
            self._render()

        self._cleanup()

    # ══════════════════════════════════════════════════════════════════
    # EVENTS
    # ══════════════════════════════════════════════════════════════════

    def _handle_events(self):
        for event in pygame.event.get():
            self._handle_event(event)

    def _handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False

        elif event.type == pygame.VIDEORESIZE:
            self._resize((event.w, event.h))

        # ── Mouse: sticks first, then mode buttons. SDL also synthesizes
        # mouse events from touch; those are handled by the FINGER* branch.
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP) \
                and getattr(event, "touch", False):
            return

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            mx, my = event.pos
            if self.sticks.handle_mouse_down(mx, my):
                pass  # captured by joystick
            else:
                mode = self.dashboard.mode_at(mx, my)
                if mode is not None:
                    self.session.set_mode(mode)

        elif event.type == pygame.MOUSEMOTION:
            mx, my = event.pos
            self.sticks.handle_mouse_motion(mx, my)

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.sticks.handle_mouse_up()

        # ── Touch: first finger only, normalized coords -> pixels
        elif event.type == pygame.FINGERDOWN:
            if self._touch_finger is None:
                px, py = self._finger_pos(event)
                if self.sticks.handle_mouse_down(px, py):
                    self._touch_finger = event.finger_id

        elif event.type == pygame.FINGERMOTION:
            if event.finger_id == self._touch_finger:
                self.sticks.handle_mouse_motion(*self._finger_pos(event))

        elif event.type == pygame.FINGERUP:
            if event.finger_id == self._touch_finger:
                self._touch_finger = None
                self.sticks.handle_mouse_up()

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key in KEY_NAMES:
                self.session.keyboard.press(KEY_NAMES[event.key])
            elif event.key == pygame.K_c:
                self.session.center()
            elif event.key == pygame.K_m:
                self.session.toggle_mode()
            elif event.key == pygame.K_p:
                try:
                    self._save_screenshot()
                except Exception as e:
                    print(f"Failed to save screenshot: {e}")

    def _finger_pos(self, event) -> Tuple[int, int]:
        w, h = self.window_size
        return int(event.x * w), int(event.y * h)

    def _resize(self, window_size: Tuple[int, int]):
        self.window_size = window_size
        viewport, dash_rect, status_rect, stick_origin = compute_layout(window_size)
        self.graphics.resize(window_size, viewport)
        self.dashboard.resize(dash_rect, status_rect)
        self.sticks.move_to(*stick_origin)

    # ══════════════════════════════════════════════════════════════════
    # RENDERING
    # ══════════════════════════════════════════════════════════════════

    def _render(self):
        self.graphics.clear()
        self.graphics.draw_scene()

        # Integrate + notify render/dashboard observers
        self.session.tick(pygame.time.get_ticks())

        self.sticks.draw(self.graphics.screen, self.graphics.font_small)
        self.dashboard.draw(self.graphics.screen)
        self.graphics.present()
        self._record_frame()

    def _render_drone(self, state: FlightState):
        """Render observer. Skips the model until it has loaded."""
        model = self.model_loader.poll()
        if self.session.integrator.apply(model):
            self.graphics.draw_drone(model)
        elif not self.model_loader.failed:
            self.graphics.draw_loading()
        self.graphics.draw_altitude_bar(state.altitude, self.session.integrator.max_altitude)

    # ══════════════════════════════════════════════════════════════════
    # RECORDING & SCREENSHOTS
    # ══════════════════════════════════════════════════════════════════

    def _start_video_recording(self):
        if self._video_writer is not None:
            self._finalize_video()
        self._video_frame_count = 0
        self._video_frames_written = 0
        self._video_filename = "_recording_in_progress.mp4"
        fourcc = cv2.VideoWriter_fourcc(*'mp4v')
        w, h = self.window_size
        self._video_writer = cv2.VideoWriter(self._video_filename, fourcc, cfg.RECORD_FPS, (w, h))
        if self._video_writer.isOpened():
            print(f"Video recording started ({w}x{h} @ {cfg.RECORD_FPS}fps)")
        else:
            print("WARNING: Failed to open video writer")
            self._video_writer = None

    def _record_frame(self):
        if self._video_writer is None:
            return
        self._video_frame_count += 1
        if self._video_frame_count % cfg.RECORD_EVERY_N_FRAMES != 0:
            return
        surface = self.graphics.screen
        if surface.get_size() != tuple(self.window_size):
            return
        frame = pygame.surfarray.array3d(surface)
        frame = np.transpose(frame, (1, 0, 2))
        frame = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)
        self._video_writer.write(frame)
        self._video_frames_written += 1

    def _finalize_video(self):
        if self._video_writer is None:
            return
        frames = self._video_frames_written
        try:
            self._video_writer.release()
        except Exception as e:
            print(f"WARNING: Error releasing video writer: {e}")
        self._video_writer = None

        if frames < cfg.RECORD_MIN_FRAMES:
            try:
                if os.path.exists(self._video_filename):
                    os.remove(self._video_filename)
                    print(f"Discarded tiny video ({frames} frames)")
            except OSError as e:
                print(f"WARNING: Could not remove {self._video_filename}: {e}")
        else:
            final_name = time.strftime("flight_%Y%m%d_%H%M%S.mp4")
            try:
                os.replace(self._video_filename, final_name)
                print(f"Video saved: {final_name}")
            except OSError as e:
                print(f"Error renaming video: {e}")

        self._video_frame_count = 0
        self._video_frames_written = 0
        self._video_filename = ""

    def _save_screenshot(self, tag: str = ""):
        s = self.session.state
        suffix = f"_{tag}" if tag else ""
        filename = time.strftime("panel_%Y%m%d_%H%M%S") + \
            f"_thr{int(s.throttle)}{suffix}.png"
        pygame.image.save(self.graphics.screen, filename)
        print(f"Screenshot saved: {filename}")

    def _cleanup(self):
        self._finalize_video()
        pygame.quit()
        print("Flight control panel closed.")


# ══════════════════════════════════════════════════════════════════════
# ENTRY POINT
# ══════════════════════════════════════════════════════════════════════

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dual-stick drone flight control panel")
    parser.add_argument("--width", type=int, default=cfg.WINDOW_SIZE[0])
    parser.add_argument("--height", type=int, default=cfg.WINDOW_SIZE[1])
    parser.add_argument("--fps", type=int, default=cfg.FRAME_RATE_CAP,
                        help="frame-rate cap (0 = uncapped)")
    parser.add_argument("--model", default=cfg.MODEL_PATH, help="drone model JSON")
    parser.add_argument("--record", action="store_true", help="record an MP4 of the session")
    parser.add_argument("--verbose", action="store_true", help="per-frame console output")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    if args.verbose:
        cfg.VERBOSE = True
    try:
        pygame.init()
        panel = FlightPanelGUI(
            window_size=(args.width, args.height),
            model_path=args.model,
            frame_rate_cap=args.fps,
            record=args.record,
        )
        panel.run()
    except KeyboardInterrupt:
        print("\nPanel interrupted by user.")
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
