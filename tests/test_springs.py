"""Tests for spring construction and Hooke's law forces."""

import numpy as np
import pytest

from avatar_physics.core.types import VertexData
from avatar_physics.physics.forces import apply_spring_forces
from avatar_physics.physics.mass_points import MassPointSet
from avatar_physics.physics.springs import SpringNetwork


def _points(*coords, fixed_ids=()):
    vertices = [
        VertexData(
            id=f"p{i}",
            x=x,
            y=y,
            z=z,
            type="joint" if f"p{i}" in fixed_ids else "surface",
        )
        for i, (x, y, z) in enumerate(coords)
    ]
    return MassPointSet(vertices)


class TestSpringNetwork:
    def test_rest_length_from_initial_positions(self):
        points = _points((0, 0, 0), (3, 4, 0))
        springs = SpringNetwork.from_edges(points, [("p0", "p1")], stiffness=0.2)

        assert len(springs) == 1
        spring = next(iter(springs))
        assert spring.rest_length == pytest.approx(5.0)
        assert spring.stiffness == pytest.approx(0.2)
        assert spring.damping == 0.1

    def test_edges_with_unknown_ids_are_skipped(self):
        points = _points((0, 0, 0), (1, 0, 0))
        springs = SpringNetwork.from_edges(
            points, [("p0", "p1"), ("p0", "nope"), ("nope", "p1")], stiffness=0.2
        )

        assert len(springs) == 1
        assert springs.skipped_edges == 2

    def test_set_stiffness_overwrites_every_spring(self):
        points = _points((0, 0, 0), (1, 0, 0), (2, 0, 0))
        springs = SpringNetwork.from_edges(points, [("p0", "p1"), ("p1", "p2")], stiffness=0.05)

        springs.set_stiffness(0.7)

        assert [s.stiffness for s in springs] == [0.7, 0.7]


class TestSpringForces:
    def test_rest_length_is_force_free(self):
        points = _points((0, 0, 0), (1, 2, 3), (-4, 0, 1))
        springs = SpringNetwork.from_edges(points, [("p0", "p1"), ("p1", "p2")], stiffness=0.5)

        apply_spring_forces(points, springs)

        assert not points.forces.any()

    def test_stretched_spring_pulls_endpoints_together(self):
        points = _points((0, 0, 0), (0, 0, 10))
        springs = SpringNetwork.from_edges(points, [("p0", "p1")], stiffness=0.5)
        points.positions[1] = [0, 0, 15]

        apply_spring_forces(points, springs)

        np.testing.assert_allclose(points.forces[0], [0, 0, 2.5])
        np.testing.assert_allclose(points.forces[1], [0, 0, -2.5])

    def test_fixed_endpoint_receives_no_force(self):
        points = _points((0, 0, 0), (0, 0, 10), fixed_ids=("p0",))
        springs = SpringNetwork.from_edges(points, [("p0", "p1")], stiffness=0.5)
        points.positions[1] = [0, 0, 8]

        apply_spring_forces(points, springs)

        assert not points.forces[0].any()
        np.testing.assert_allclose(points.forces[1], [0, 0, 1.0])

    def test_coincident_endpoints_are_skipped(self):
        points = _points((0, 0, 0), (1, 0, 0))
        springs = SpringNetwork.from_edges(points, [("p0", "p1")], stiffness=0.5)
        points.positions[1] = [0, 0, 0]

        apply_spring_forces(points, springs)

        assert not points.forces.any()
        assert np.isfinite(points.forces).all()
