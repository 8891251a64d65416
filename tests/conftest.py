"""Shared fixtures. pygame runs headless for widget and renderer tests."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402


@pytest.fixture(scope="session")
def pygame_init():
    """Initialize pygame once (fonts, surfaces) without opening a window."""
    if not pygame.get_init():
        pygame.init()
    if not pygame.font.get_init():
        pygame.font.init()
    yield
    pygame.quit()


class Recorder:
    """Callable that remembers every call's positional arguments."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def last(self):
        return self.calls[-1] if self.calls else None


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
