"""Tests for the viewport renderer, drawing off-window."""

import math

import numpy as np
import pygame
import pytest

from core.flight_state import FlightTargets
from core.integrator import FlightStateIntegrator
from panel_config import MODEL_PATH
from simulation.drone_model import load_drone_model
from simulation.graphics import Camera, Colors, GraphicsEngine, rotation_matrix


@pytest.fixture
def engine(pygame_init) -> GraphicsEngine:
    screen = pygame.Surface((400, 300))
    return GraphicsEngine((400, 300), screen=screen)


class TestCamera:
    def test_origin_projects_to_viewport_center(self, pygame_init) -> None:
        cam = Camera()
        cam.set_viewport(pygame.Rect(0, 0, 400, 300))
        assert cam.project((0, 0, 0)) == (200, 150)

    def test_point_behind_camera(self, pygame_init) -> None:
        cam = Camera()
        assert cam.project((10, 10, 10)) is None

    def test_higher_points_are_higher_on_screen(self, pygame_init) -> None:
        cam = Camera()
        low = cam.project((0, 0, 0))
        high = cam.project((0, 2, 0))
        assert high[1] < low[1]


class TestRotation:
    def test_identity(self) -> None:
        assert np.allclose(rotation_matrix(0, 0, 0), np.eye(3))

    def test_yaw_quarter_turn(self) -> None:
        R = rotation_matrix(0, 0, math.pi / 2)
        assert np.allclose(R @ np.array([1.0, 0, 0]), [0, 1, 0])


class TestGraphicsEngine:
    def test_clear_counts_frames(self, engine) -> None:
        engine.clear()
        engine.clear()
        assert engine.frame_count == 2
        assert tuple(engine.screen.get_at((5, 5)))[:3] == Colors.BACKGROUND

    def test_scene_draws_something(self, engine) -> None:
        engine.clear()
        before = pygame.image.tostring(engine.screen, "RGB")
        engine.draw_scene()
        assert pygame.image.tostring(engine.screen, "RGB") != before

    def test_draw_model_after_apply(self, engine) -> None:
        integrator = FlightStateIntegrator()
        for _ in range(30):
            integrator.update(FlightTargets(throttle=80.0, roll=10.0), 1 / 60)
        model = load_drone_model(MODEL_PATH)
        assert integrator.apply(model)

        engine.clear()
        engine.draw_scene()
        before = pygame.image.tostring(engine.screen, "RGB")
        engine.draw_drone(model)
        assert engine.models_drawn == 1
        assert pygame.image.tostring(engine.screen, "RGB") != before

    def test_loading_and_altitude_overlays(self, engine) -> None:
        engine.clear()
        engine.draw_loading()
        engine.draw_altitude_bar(2.5, 5.0)
        engine.draw_altitude_bar(0.0, 0.0)

    def test_resize_moves_viewport(self, engine) -> None:
        engine.resize((800, 600), pygame.Rect(0, 0, 500, 400))
        assert engine.camera.project((0, 0, 0)) == (250, 200)
