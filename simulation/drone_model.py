"""
Drone model description + deferred loader

The model is a small JSON scene: a scale and a list of named parts. Any part
whose name contains "propeller" becomes a propeller, in file order, so the
integrator's per-index spin direction lines up with the file layout.

The loader is deliberately deferred by a number of frames: until it
completes, the renderer has no model and skips applying flight state.
"""

import json
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from panel_config import MODEL_SCALE


@dataclass
class ModelPart:
    """One named part of the drone, offset in model units."""
    name: str
    kind: str = "box"
    offset: np.ndarray = field(default_factory=lambda: np.zeros(3))
    size: Tuple[float, float, float] = (0.1, 0.1, 0.1)
    radius: float = 0.0
    rotation_z: float = 0.0     # radians, spin about the part's own axis


@dataclass
class DroneModel:
    """Render-side drone: pose written by the integrator, parts read by graphics."""
    name: str
    scale: float = MODEL_SCALE
    parts: List[ModelPart] = field(default_factory=list)
    propellers: List[ModelPart] = field(default_factory=list)
    position_y: float = 0.0
    rotation_x: float = 0.0     # roll, radians
    rotation_y: float = 0.0     # pitch, radians
    rotation_z: float = 0.0     # yaw, radians


def parse_drone_model(data: dict, scale: Optional[float] = None) -> DroneModel:
    """Build a DroneModel from its JSON description."""
    model = DroneModel(
        name=data.get("name", "drone"),
        scale=float(scale if scale is not None else data.get("scale", MODEL_SCALE)),
    )
    for entry in data.get("parts", []):
        part = ModelPart(
            name=entry["name"],
            kind=entry.get("kind", "box"),
            offset=np.array(entry.get("offset", (0.0, 0.0, 0.0)), dtype=np.float64),
            size=tuple(entry.get("size", (0.1, 0.1, 0.1))),
            radius=float(entry.get("radius", 0.0)),
        )
        model.parts.append(part)
        if "propeller" in part.name:
            model.propellers.append(part)
    return model


def load_drone_model(path: str, scale: Optional[float] = None) -> DroneModel:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_drone_model(data, scale)


class DeferredModelLoader:
    """Loads the drone model after `delay_frames` calls to poll().

    Errors are reported once; the panel keeps running without a model."""

    def __init__(self, path: str, delay_frames: int = 0, scale: Optional[float] = None):
        self.path = path
        self.delay_frames = max(0, int(delay_frames))
        self.scale = scale
        self.model: Optional[DroneModel] = None
        self.failed = False
        self._frames_waited = 0

    @property
    def done(self) -> bool:
        return self.model is not None or self.failed

    def poll(self) -> Optional[DroneModel]:
        """Advance one frame; return the model once it has loaded."""
        if self.done:
            return self.model
        if self._frames_waited < self.delay_frames:
            self._frames_waited += 1
            return None
        try:
            self.model = load_drone_model(self.path, self.scale)
            print(f"✅ Drone model loaded: {self.model.name} "
                  f"({len(self.model.propellers)} propellers) from {os.path.basename(self.path)}")
        except (OSError, ValueError, KeyError) as e:
            self.failed = True
            print(f"❌ Error loading drone model '{self.path}': {e}")
        return self.model
