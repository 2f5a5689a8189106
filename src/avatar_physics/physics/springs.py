"""Elastic spring links derived from mesh connectivity."""

from typing import Iterable, Iterator

import numpy as np
from numpy.typing import NDArray

from avatar_physics.core.constants import SPRING_DAMPING
from avatar_physics.core.types import Spring
from avatar_physics.physics.mass_points import MassPointSet


def pair_offsets(
    positions: NDArray[np.float64],
    first: NDArray[np.intp],
    second: NDArray[np.intp],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Separation vectors (second - first) and their lengths.

    Args:
        positions: Point positions (N, 3)
        first: Row indices of the first endpoints (M,)
        second: Row indices of the second endpoints (M,)

    Returns:
        (offsets (M, 3), distances (M,))
    """
    offsets = positions[second] - positions[first]
    distances = np.sqrt(np.sum(offsets * offsets, axis=1))
    return offsets, distances


class SpringNetwork:
    """Pairwise elastic links between mass points.

    Springs are created once per connectivity edge. Rest lengths are the
    endpoint separation at construction time and never change; stiffness
    changes only through ``set_stiffness``.

    Attributes:
        first: Row index of each spring's first endpoint
        second: Row index of each spring's second endpoint
        rest_lengths: Rest length per spring
        stiffness: Stiffness per spring
        skipped_edges: Number of edges dropped for unknown ids
    """

    def __init__(self) -> None:
        self._ids: list[tuple[str, str]] = []
        self.first = np.zeros(0, dtype=np.intp)
        self.second = np.zeros(0, dtype=np.intp)
        self.rest_lengths = np.zeros(0, dtype=np.float64)
        self.stiffness = np.zeros(0, dtype=np.float64)
        self.damping = SPRING_DAMPING
        self.skipped_edges = 0

    @classmethod
    def from_edges(
        cls,
        points: MassPointSet,
        edges: Iterable[tuple[str, str]],
        stiffness: float,
    ) -> "SpringNetwork":
        """Create one spring per edge whose endpoints both exist.

        Args:
            points: Mass points the edges refer to
            edges: (id_a, id_b) pairs
            stiffness: Stiffness assigned to every new spring

        Returns:
            Spring network; edges with an unknown id are counted in
            ``skipped_edges``
        """
        network = cls()
        first, second = [], []

        for id_a, id_b in edges:
            idx_a = points.index_of(id_a)
            idx_b = points.index_of(id_b)
            if idx_a is None or idx_b is None:
                network.skipped_edges += 1
                continue
            first.append(idx_a)
            second.append(idx_b)
            network._ids.append((id_a, id_b))

        network.first = np.array(first, dtype=np.intp)
        network.second = np.array(second, dtype=np.intp)
        _, network.rest_lengths = pair_offsets(points.positions, network.first, network.second)
        network.stiffness = np.full(len(first), stiffness, dtype=np.float64)
        return network

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[Spring]:
        for (id1, id2), rest, k in zip(self._ids, self.rest_lengths, self.stiffness):
            yield Spring(
                id1=id1,
                id2=id2,
                rest_length=float(rest),
                stiffness=float(k),
                damping=self.damping,
            )

    def set_stiffness(self, stiffness: float) -> None:
        """Overwrite the stiffness of every spring."""
        self.stiffness.fill(stiffness)
