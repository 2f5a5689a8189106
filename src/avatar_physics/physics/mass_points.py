"""Per-particle state storage for the mass-spring system."""

from typing import Iterator, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from avatar_physics.core.constants import FIXED_GROUP_TAG, FIXED_VERTEX_TYPE, MASS_SCALE
from avatar_physics.core.types import MassPoint, VertexData, vector_to_dict


def is_fixed_vertex(vertex: VertexData) -> bool:
    """Joints and anything in a head group are pinned in place."""
    return vertex.type == FIXED_VERTEX_TYPE or FIXED_GROUP_TAG in vertex.group


class MassPointSet:
    """Owns position, velocity, force, mass and fixed flag of every particle.

    State is stored row-wise in (N, 3) float64 arrays so the integrator and
    force passes can work on whole arrays at once. Row order follows the
    vertex order of the topology and is also the order of step snapshots.

    Attributes:
        ids: Mass point ids in row order
        positions: Current positions (N, 3)
        original_positions: Positions at construction (N, 3), read-only
        velocities: Current velocities (N, 3)
        forces: Force accumulator (N, 3)
        masses: Simulated masses (N,)
        fixed: Fixed flags (N,)
    """

    def __init__(self, vertices: Sequence[VertexData] = ()):
        """Build mass points from topology vertices.

        Args:
            vertices: Input vertices; mass = weight x 10
        """
        count = len(vertices)

        self.ids: list[str] = [v.id for v in vertices]
        self.groups: list[str] = [v.group for v in vertices]
        self.types: list[str] = [v.type for v in vertices]

        # First occurrence wins for duplicate ids
        self._index: dict[str, int] = {}
        for idx, mass_id in enumerate(self.ids):
            self._index.setdefault(mass_id, idx)

        self.positions = np.array(
            [[v.x, v.y, v.z] for v in vertices], dtype=np.float64
        ).reshape(count, 3)
        self.original_positions = self.positions.copy()
        self.original_positions.setflags(write=False)

        self.velocities = np.zeros((count, 3), dtype=np.float64)
        self.forces = np.zeros((count, 3), dtype=np.float64)
        self.masses = np.array([v.weight * MASS_SCALE for v in vertices], dtype=np.float64)
        self.fixed = np.array([is_fixed_vertex(v) for v in vertices], dtype=bool)

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, mass_id: object) -> bool:
        return mass_id in self._index

    def __iter__(self) -> Iterator[MassPoint]:
        for idx in range(len(self)):
            yield self._snapshot(idx)

    @property
    def free(self) -> NDArray[np.bool_]:
        """Mask of points that take part in the simulation."""
        return ~self.fixed

    @property
    def fixed_count(self) -> int:
        """Number of fixed points."""
        return int(self.fixed.sum())

    def index_of(self, mass_id: str) -> Optional[int]:
        """Row index for a mass id, or None if unknown."""
        return self._index.get(mass_id)

    def get(self, mass_id: str) -> Optional[MassPoint]:
        """Get a snapshot of one mass point.

        Args:
            mass_id: Mass point id

        Returns:
            MassPoint copy, or None if the id is unknown
        """
        idx = self._index.get(mass_id)
        if idx is None:
            return None
        return self._snapshot(idx)

    def set_fixed(self, idx: int, fixed: bool) -> None:
        """Set the fixed flag of one row.

        A point that becomes fixed loses its velocity and pending force so
        it stays exactly where it is.
        """
        self.fixed[idx] = fixed
        if fixed:
            self.velocities[idx] = 0.0
            self.forces[idx] = 0.0

    def clear_forces(self) -> None:
        """Zero the force accumulator."""
        self.forces.fill(0.0)

    def reset(self) -> None:
        """Restore original positions and zero velocities and forces."""
        self.positions[:] = self.original_positions
        self.velocities.fill(0.0)
        self.forces.fill(0.0)

    def position_snapshot(self) -> list[dict]:
        """Positions of every point as ``{"id", "position": {x, y, z}}`` dicts."""
        return [
            {"id": mass_id, "position": vector_to_dict(position)}
            for mass_id, position in zip(self.ids, self.positions)
        ]

    def _snapshot(self, idx: int) -> MassPoint:
        return MassPoint(
            id=self.ids[idx],
            position=self.positions[idx].copy(),
            original_position=self.original_positions[idx].copy(),
            velocity=self.velocities[idx].copy(),
            force=self.forces[idx].copy(),
            mass=float(self.masses[idx]),
            fixed=bool(self.fixed[idx]),
            group=self.groups[idx],
            type=self.types[idx],
        )
