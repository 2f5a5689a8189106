"""Shared fixtures for the avatar physics tests."""

import pytest

from avatar_physics.core.types import MeshTopology, PhysicsConfig
from avatar_physics.simulation.engine import PhysicsEngine


@pytest.fixture
def pendulum_mesh():
    """Fixed joint A at the origin with free surface point B 10 units below."""
    return {
        "vertices": [
            {"id": "A", "x": 0.0, "y": 0.0, "z": 0.0, "group": "arm", "type": "joint", "weight": 1.0},
            {"id": "B", "x": 0.0, "y": -10.0, "z": 0.0, "group": "arm", "type": "surface", "weight": 1.0},
        ],
        "edges": [["A", "B"]],
    }


@pytest.fixture
def torso_mesh():
    """Partial torso covering half of the anatomical constraint table."""
    def vertex(vid, x, y, z, group="torso", vtype="surface", weight=1.0):
        return {"id": vid, "x": x, "y": y, "z": z, "group": group, "type": vtype, "weight": weight}

    return {
        "vertices": [
            vertex("head_top", 0.0, 80.0, 0.0, group="head"),
            vertex("neck_top_center", 0.0, 62.0, 0.0, group="neck"),
            vertex("neck_base_center", 0.0, 55.0, 0.0, group="neck"),
            vertex("spine_center", 0.0, 30.0, -2.0),
            vertex("waist_center_front", 0.0, 12.0, 3.0),
            vertex("waist_left", -8.0, 12.0, 0.0),
            vertex("hip_left", -10.0, 0.0, 0.0, vtype="joint"),
        ],
        "edges": [
            ["head_top", "neck_top_center"],
            ["neck_top_center", "neck_base_center"],
            ["neck_base_center", "spine_center"],
            ["spine_center", "waist_center_front"],
            ["waist_center_front", "waist_left"],
            ["waist_left", "hip_left"],
            ["hip_left", "ghost_vertex"],
        ],
        "physics": {"springs": {"muscleTension": 0.5}},
        "metadata": {"biomechanical": {"jointConstraints": True}},
    }


@pytest.fixture
def free_point_mesh():
    """Single free point with no springs."""
    return {
        "vertices": [
            {"id": "p", "x": 1.0, "y": 5.0, "z": -2.0, "group": "body", "type": "surface", "weight": 2.0},
        ],
        "edges": [],
    }


@pytest.fixture
def engine():
    return PhysicsEngine()


@pytest.fixture
def weightless_config():
    """No gravity and no damping so only applied forces move points."""
    return PhysicsConfig(gravity=0.0, damping=1.0)


@pytest.fixture
def torso_topology(torso_mesh):
    return MeshTopology.from_dict(torso_mesh)
