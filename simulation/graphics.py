"""
Graphics Engine for the Flight Control Panel
Draws the 3D viewport (ground grid, axes, drone) with a simple perspective
camera, using pygame 2D primitives.
"""

import math
from typing import List, Optional, Tuple

import numpy as np
import pygame

from panel_config import CAMERA_FOV_DEG, CAMERA_POSITION, WINDOW_TITLE


class Colors:
    """Color constants for visualization."""
    BLACK = (0, 0, 0)
    WHITE = (255, 255, 255)
    BACKGROUND = (0x12, 0x12, 0x12)
    GRID_CENTER = (0x44, 0x44, 0x44)
    GRID = (0x22, 0x22, 0x22)
    AXIS_X = (255, 80, 80)
    AXIS_Y = (80, 255, 80)
    AXIS_Z = (80, 80, 255)
    BODY = (70, 130, 200)
    BODY_EDGE = (160, 200, 255)
    ARM = (120, 120, 120)
    ROTOR_CW = (255, 200, 0)
    ROTOR_CCW = (0, 200, 255)
    TEXT = (220, 220, 220)
    DIM_TEXT = (140, 140, 140)
    PANEL = (30, 30, 30)
    PANEL_EDGE = (80, 80, 80)
    ACTIVE = (0, 150, 136)


def rotation_matrix(rx: float, ry: float, rz: float) -> np.ndarray:
    """Euler XYZ rotation (radians), applied as Rx @ Ry @ Rz."""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    R_x = np.array([[1, 0, 0],
                    [0, cx, -sx],
                    [0, sx, cx]])
    R_y = np.array([[cy, 0, sy],
                    [0, 1, 0],
                    [-sy, 0, cy]])
    R_z = np.array([[cz, -sz, 0],
                    [sz, cz, 0],
                    [0, 0, 1]])
    return R_x @ R_y @ R_z


class Camera:
    """Perspective camera looking at the origin, world Y up."""

    def __init__(self, position=CAMERA_POSITION, target=(0.0, 0.0, 0.0),
                 fov_deg: float = CAMERA_FOV_DEG, near: float = 0.1):
        self.position = np.array(position, dtype=np.float64)
        self.target = np.array(target, dtype=np.float64)
        self.fov = math.radians(fov_deg)
        self.near = near
        self.viewport = pygame.Rect(0, 0, 800, 600)
        self._update_basis()

    def _update_basis(self):
        forward = self.target - self.position
        forward /= np.linalg.norm(forward)
        right = np.cross(forward, np.array([0.0, 1.0, 0.0]))
        right /= np.linalg.norm(right)
        up = np.cross(right, forward)
        self.forward, self.right, self.up = forward, right, up

    def set_viewport(self, rect: pygame.Rect):
        """Call on window resize (keeps aspect from the new rect)."""
        self.viewport = pygame.Rect(rect)

    def project(self, point) -> Optional[Tuple[int, int]]:
        """World point -> screen pixel, or None if behind the near plane."""
        rel = np.asarray(point, dtype=np.float64) - self.position
        depth = float(rel @ self.forward)
        if depth < self.near:
            return None
        f = (self.viewport.height / 2) / math.tan(self.fov / 2)
        sx = float(rel @ self.right) / depth * f
        sy = float(rel @ self.up) / depth * f
        return (int(round(self.viewport.centerx + sx)), int(round(self.viewport.centery - sy)))


class GraphicsEngine:
    """
    Renders the flight viewport. The dashboard and joysticks are drawn by
    their own widgets on the same screen.
    """

    def __init__(self, window_size: Tuple[int, int], screen: Optional[pygame.Surface] = None,
                 viewport: Optional[pygame.Rect] = None):
        """Initialize graphics engine. Pass `screen` to render off-window."""
        self.window_size = window_size
        if screen is None:
            try:
                screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
                pygame.display.set_caption(WINDOW_TITLE)
                print(f"✅ Graphics engine initialized: {window_size[0]}x{window_size[1]}")
            except Exception as e:
                print(f"❌ Failed to create display: {e}")
                raise
        self.screen = screen

        if not pygame.font.get_init():
            pygame.font.init()
        self.font_small = pygame.font.Font(None, 18)
        self.font_medium = pygame.font.Font(None, 24)
        self.font_large = pygame.font.Font(None, 32)

        self.camera = Camera()
        self.camera.set_viewport(viewport or pygame.Rect((0, 0), window_size))
        self.frame_count = 0
        self.models_drawn = 0

    def resize(self, window_size: Tuple[int, int], viewport: pygame.Rect):
        self.window_size = window_size
        self.camera.set_viewport(viewport)

    def clear(self):
        """Clear the screen."""
        self.screen.fill(Colors.BACKGROUND)
        self.frame_count += 1

    def present(self):
        """Present the rendered frame."""
        pygame.display.flip()

    # ── Scene helpers ───────────────────────────────────────────────────

    def _line(self, color, a, b, width: int = 1):
        pa = self.camera.project(a)
        pb = self.camera.project(b)
        if pa and pb:
            pygame.draw.line(self.screen, color, pa, pb, width)

    def draw_grid(self, size: float = 10.0, divisions: int = 10):
        """Ground grid on the XZ plane, centered at the origin."""
        half = size / 2
        step = size / divisions
        for i in range(divisions + 1):
            v = -half + i * step
            color = Colors.GRID_CENTER if abs(v) < 1e-9 else Colors.GRID
            self._line(color, (v, 0, -half), (v, 0, half))
            self._line(color, (-half, 0, v), (half, 0, v))

    def draw_axes(self, length: float = 5.0):
        origin = (0, 0, 0)
        self._line(Colors.AXIS_X, origin, (length, 0, 0), 2)
        self._line(Colors.AXIS_Y, origin, (0, length, 0), 2)
        self._line(Colors.AXIS_Z, origin, (0, 0, length), 2)

    def draw_scene(self):
        self.draw_grid()
        self.draw_axes()

    # ── Drone ───────────────────────────────────────────────────────────

    def _model_to_world(self, model, local) -> np.ndarray:
        R = rotation_matrix(model.rotation_x, model.rotation_y, model.rotation_z)
        return R @ (np.asarray(local, dtype=np.float64) * model.scale) + \
            np.array([0.0, model.position_y, 0.0])

    def _project_local(self, model, local) -> Optional[Tuple[int, int]]:
        return self.camera.project(self._model_to_world(model, local))

    def draw_drone(self, model):
        """Draw the drone model at its current pose (already applied)."""
        center = np.zeros(3)
        for part in model.parts:
            if part.kind == "box":
                self._draw_box_top(model, part)
            elif part.kind == "arm":
                pa = self._project_local(model, center)
                pb = self._project_local(model, part.offset)
                if pa and pb:
                    pygame.draw.line(self.screen, Colors.ARM, pa, pb, 4)

        for index, prop in enumerate(model.propellers):
            self._draw_rotor(model, prop, Colors.ROTOR_CW if index % 2 == 0 else Colors.ROTOR_CCW)
        self.models_drawn += 1

    def _draw_box_top(self, model, part):
        sx, sy, sz = (s / 2 for s in part.size)
        ox, oy, oz = part.offset
        corners = [(ox - sx, oy + sy, oz - sz), (ox + sx, oy + sy, oz - sz),
                   (ox + sx, oy + sy, oz + sz), (ox - sx, oy + sy, oz + sz)]
        points = [self._project_local(model, c) for c in corners]
        if all(points):
            pygame.draw.polygon(self.screen, Colors.BODY, points)
            pygame.draw.polygon(self.screen, Colors.BODY_EDGE, points, 1)

    def _draw_rotor(self, model, prop, color, segments: int = 16):
        radius = prop.radius or 0.3
        ox, oy, oz = prop.offset
        ring: List[Tuple[int, int]] = []
        for k in range(segments):
            a = 2 * math.pi * k / segments
            p = self._project_local(model, (ox + radius * math.cos(a), oy, oz + radius * math.sin(a)))
            if p is None:
                return
            ring.append(p)
        pygame.draw.polygon(self.screen, color, ring, 1)

        # Two-blade propeller at its accumulated spin angle
        a = prop.rotation_z
        tip1 = (ox + radius * math.cos(a), oy, oz + radius * math.sin(a))
        tip2 = (ox - radius * math.cos(a), oy, oz - radius * math.sin(a))
        p1 = self._project_local(model, tip1)
        p2 = self._project_local(model, tip2)
        if p1 and p2:
            pygame.draw.line(self.screen, color, p1, p2, 3)

    def draw_loading(self):
        text = self.font_medium.render("Loading drone model...", True, Colors.DIM_TEXT)
        vp = self.camera.viewport
        self.screen.blit(text, (vp.centerx - text.get_width() // 2, vp.centery - 12))

    def draw_altitude_bar(self, altitude: float, max_altitude: float):
        vp = self.camera.viewport
        bar = pygame.Rect(vp.x + 12, vp.y + 40, 12, vp.height - 80)
        pygame.draw.rect(self.screen, Colors.PANEL_EDGE, bar, 1)
        frac = max(0.0, min(1.0, altitude / max_altitude)) if max_altitude > 0 else 0.0
        fill_h = int((bar.height - 2) * frac)
        if fill_h > 0:
            pygame.draw.rect(self.screen, Colors.ACTIVE,
                             (bar.x + 1, bar.bottom - 1 - fill_h, bar.width - 2, fill_h))
        label = self.font_small.render(f"ALT {altitude:.2f}", True, Colors.TEXT)
        self.screen.blit(label, (bar.x, bar.y - 18))
