"""Force accumulation: gravity, springs and external force fields."""

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from avatar_physics.physics.mass_points import MassPointSet
from avatar_physics.physics.springs import SpringNetwork, pair_offsets


def apply_gravity(points: MassPointSet, gravity: float) -> None:
    """Add ``-mass * gravity`` along y to every free point."""
    free = points.free
    points.forces[free, 1] -= points.masses[free] * gravity


def apply_spring_forces(points: MassPointSet, springs: SpringNetwork) -> None:
    """Accumulate Hooke's law forces from every spring.

    The force ``stiffness * (distance - rest_length)`` acts along the
    normalized separation vector: added to the first endpoint and
    subtracted from the second. Springs with coincident endpoints are
    skipped for this step. Fixed endpoints receive nothing.
    """
    if len(springs) == 0:
        return

    offsets, distances = pair_offsets(points.positions, springs.first, springs.second)
    active = distances > 0
    if not active.any():
        return

    directions = offsets[active] / distances[active, None]
    magnitude = springs.stiffness[active] * (distances[active] - springs.rest_lengths[active])
    spring_forces = directions * magnitude[:, None]

    accumulated = np.zeros_like(points.forces)
    np.add.at(accumulated, springs.first[active], spring_forces)
    np.subtract.at(accumulated, springs.second[active], spring_forces)
    accumulated[points.fixed] = 0.0

    points.forces += accumulated


def apply_wind(points: MassPointSet, wind: NDArray[np.float64]) -> None:
    """Add ``wind * mass`` to every free point."""
    free = points.free
    points.forces[free] += wind[None, :] * points.masses[free][:, None]


def apply_explosion(
    points: MassPointSet,
    center: NDArray[np.float64],
    radius: float,
    force_scale: float,
) -> int:
    """Push free points radially away from ``center``.

    A point at distance ``r`` with ``0 < r < radius`` receives a force of
    ``force_scale * mass * (radius - r) / radius`` along the outward
    direction. Points at the center or at/beyond the radius are untouched.
    A negative ``force_scale`` pulls points inward.

    Args:
        points: Mass points to push
        center: Explosion center (3,)
        radius: Radius of influence
        force_scale: Force magnitude at the center per unit mass

    Returns:
        Number of points that received a force
    """
    if len(points) == 0 or radius <= 0:
        return 0

    tree = cKDTree(points.positions)
    candidates = np.asarray(tree.query_ball_point(center, radius), dtype=np.intp)
    if candidates.size == 0:
        return 0
    candidates = candidates[points.free[candidates]]

    offsets = points.positions[candidates] - center
    distances = np.sqrt(np.sum(offsets * offsets, axis=1))
    inside = (distances > 0) & (distances < radius)
    if not inside.any():
        return 0

    rows = candidates[inside]
    distances = distances[inside]
    attenuation = (radius - distances) / radius
    directions = offsets[inside] / distances[:, None]
    magnitude = force_scale * attenuation * points.masses[rows]

    points.forces[rows] += directions * magnitude[:, None]
    return int(rows.size)
