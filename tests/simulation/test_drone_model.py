"""Tests for drone model parsing and the deferred loader."""

import json

import pytest

from panel_config import MODEL_PATH
from simulation.drone_model import DeferredModelLoader, load_drone_model, parse_drone_model


class TestParse:
    def test_propellers_collected_in_order(self) -> None:
        model = parse_drone_model({
            "name": "test",
            "scale": 2.0,
            "parts": [
                {"name": "body", "kind": "box", "size": [1, 1, 1]},
                {"name": "propeller_b", "kind": "rotor", "radius": 0.2},
                {"name": "arm", "kind": "arm", "offset": [1, 0, 0]},
                {"name": "propeller_a", "kind": "rotor"},
            ],
        })
        assert model.name == "test"
        assert model.scale == 2.0
        assert len(model.parts) == 4
        assert [p.name for p in model.propellers] == ["propeller_b", "propeller_a"]
        assert model.parts[2].offset.tolist() == [1.0, 0.0, 0.0]

    def test_scale_override(self) -> None:
        model = parse_drone_model({"scale": 3.0, "parts": []}, scale=1.2)
        assert model.scale == 1.2

    def test_pose_starts_neutral(self) -> None:
        model = parse_drone_model({"parts": []})
        assert (model.position_y, model.rotation_x, model.rotation_y, model.rotation_z) == (0, 0, 0, 0)

    def test_bundled_model(self) -> None:
        model = load_drone_model(MODEL_PATH)
        assert len(model.propellers) == 4
        assert model.scale == pytest.approx(1.2)


class TestDeferredLoader:
    def test_waits_for_delay_frames(self) -> None:
        loader = DeferredModelLoader(MODEL_PATH, delay_frames=2)
        assert loader.poll() is None
        assert loader.poll() is None
        assert not loader.done
        model = loader.poll()
        assert model is not None
        assert loader.poll() is model

    def test_missing_file_fails_once(self, tmp_path) -> None:
        loader = DeferredModelLoader(str(tmp_path / "nope.json"))
        assert loader.poll() is None
        assert loader.failed
        assert loader.done
        assert loader.poll() is None

    def test_invalid_json_fails(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{ not json")
        loader = DeferredModelLoader(str(path))
        assert loader.poll() is None
        assert loader.failed

    def test_part_without_name_fails(self, tmp_path) -> None:
        path = tmp_path / "noname.json"
        path.write_text(json.dumps({"parts": [{"kind": "box"}]}))
        loader = DeferredModelLoader(str(path))
        assert loader.poll() is None
        assert loader.failed
