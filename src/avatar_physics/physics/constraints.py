"""Anatomical distance constraints and ground collision handling."""

import math
from typing import Iterable, Iterator

from avatar_physics.core.constants import (
    CONSTRAINT_ITERATIONS,
    GROUND_FRICTION,
    GROUND_RESTITUTION,
    GROUND_Y,
    JOINT_CONSTRAINT_STIFFNESS,
    JOINT_DISTANCE_TABLE,
)
from avatar_physics.core.types import DistanceConstraint
from avatar_physics.physics.mass_points import MassPointSet


class ConstraintSet:
    """Distance constraints solved by fixed-iteration relaxation.

    Each pass walks the constraints in insertion order and moves the free
    endpoints of each one toward its target separation, so later
    constraints see the corrections made by earlier ones. The result only
    converges toward the targets; it is not an exact solve.

    Attributes:
        iterations: Full passes per relaxation
        skipped: Number of constraints dropped for unknown ids
    """

    def __init__(self, iterations: int = CONSTRAINT_ITERATIONS):
        self.iterations = iterations
        self.skipped = 0
        self._constraints: list[DistanceConstraint] = []
        self._rows: list[tuple[int, int]] = []

    @classmethod
    def from_joint_table(
        cls,
        points: MassPointSet,
        table: Iterable[tuple[str, str, float]] = JOINT_DISTANCE_TABLE,
        stiffness: float = JOINT_CONSTRAINT_STIFFNESS,
    ) -> "ConstraintSet":
        """Install the anatomical distance table against the given points.

        Args:
            points: Mass points to constrain
            table: (id1, id2, target distance) entries
            stiffness: Correction stiffness for every entry

        Returns:
            Constraint set; entries with an unknown id are counted in
            ``skipped``
        """
        constraints = cls()
        for id1, id2, distance in table:
            constraints.add(
                DistanceConstraint(id1=id1, id2=id2, target_distance=distance, stiffness=stiffness),
                points,
            )
        return constraints

    def __len__(self) -> int:
        return len(self._constraints)

    def __iter__(self) -> Iterator[DistanceConstraint]:
        return iter(self._constraints)

    def add(self, constraint: DistanceConstraint, points: MassPointSet) -> bool:
        """Add a constraint if both of its ids exist.

        Returns:
            True if the constraint was installed
        """
        idx1 = points.index_of(constraint.id1)
        idx2 = points.index_of(constraint.id2)
        if idx1 is None or idx2 is None:
            self.skipped += 1
            return False

        self._constraints.append(constraint)
        self._rows.append((idx1, idx2))
        return True

    def relax(self, points: MassPointSet) -> None:
        """Run the configured number of relaxation passes."""
        for _ in range(self.iterations):
            for constraint, (idx1, idx2) in zip(self._constraints, self._rows):
                self._solve(constraint, idx1, idx2, points)

    @staticmethod
    def _solve(
        constraint: DistanceConstraint,
        idx1: int,
        idx2: int,
        points: MassPointSet,
    ) -> None:
        positions = points.positions
        delta = positions[idx2] - positions[idx1]
        distance = math.sqrt(float(delta @ delta))

        # Coincident endpoints have no direction to correct along
        if distance == 0:
            return

        diff = (distance - constraint.target_distance) / distance
        adjust = delta * diff * 0.5 * constraint.stiffness

        if not points.fixed[idx1]:
            positions[idx1] += adjust
        if not points.fixed[idx2]:
            positions[idx2] -= adjust


def resolve_ground_collisions(
    points: MassPointSet,
    ground_y: float = GROUND_Y,
    restitution: float = GROUND_RESTITUTION,
    friction: float = GROUND_FRICTION,
) -> int:
    """Clamp free points that fell below the ground plane.

    Penetrating points are lifted to ``ground_y``, their vertical velocity
    is reflected and scaled by ``restitution`` and their horizontal
    velocity is scaled by ``friction``.

    Args:
        points: Mass points to correct
        ground_y: Height of the ground plane
        restitution: Fraction of vertical speed kept on impact
        friction: Horizontal velocity multiplier on impact

    Returns:
        Number of points that were corrected
    """
    below = points.free & (points.positions[:, 1] < ground_y)
    if not below.any():
        return 0

    points.positions[below, 1] = ground_y
    points.velocities[below, 1] = -points.velocities[below, 1] * restitution
    points.velocities[below, 0] *= friction
    points.velocities[below, 2] *= friction
    return int(below.sum())
