"""Tests for snapshots and file exports."""

import numpy as np

from avatar_physics.core.types import PhysicsConfig
from avatar_physics.simulation.simulator import SoftBodySimulator
from avatar_physics.simulation.state_manager import StateManager


def test_snapshots_are_copied(tmp_path):
    manager = StateManager(tmp_path)
    positions = [{"id": "a", "position": {"x": 1.0, "y": 2.0, "z": 3.0}}]

    manager.save_snapshot("start", positions)
    positions[0]["position"]["x"] = 99.0

    assert manager.list_snapshots() == ["start"]
    assert manager.load_snapshot("start")[0]["position"]["x"] == 1.0
    assert manager.load_snapshot("missing") is None

    manager.clear_snapshots()
    assert manager.list_snapshots() == []


def test_export_and_load_state(tmp_path, pendulum_mesh):
    sim = SoftBodySimulator()
    sim.load_topology(pendulum_mesh)
    manager = StateManager(tmp_path / "out")

    path = manager.export_state(sim.export_state(), "state.json")

    assert path == tmp_path / "out" / "state.json"
    loaded = manager.load_state(path)
    assert loaded["physics"]["mass_count"] == 2
    assert loaded["mesh"]["edges"] == 1


def test_export_state_generates_filename(tmp_path):
    path = StateManager(tmp_path).export_state({"physics": None})
    assert path.name.startswith("state_") and path.suffix == ".json"


def test_export_position_history(tmp_path, pendulum_mesh):
    sim = SoftBodySimulator(PhysicsConfig(time_step=0.25))
    sim.load_topology(pendulum_mesh)
    sim.engine.enable()
    sim.run(1.0)

    path = StateManager(tmp_path).export_position_history(sim.engine.mass_points.ids, sim.history)

    with np.load(path) as data:
        assert list(data["ids"]) == ["A", "B"]
        np.testing.assert_array_equal(data["times"], [0.25, 0.5, 0.75, 1.0])
        assert data["positions"].shape == (4, 2, 3)
        np.testing.assert_array_equal(data["positions"][:, 0], np.zeros((4, 3)))


def test_export_empty_history(tmp_path):
    path = StateManager(tmp_path).export_position_history(["a", "b"], [])
    with np.load(path) as data:
        assert data["positions"].shape == (0, 2, 3)
