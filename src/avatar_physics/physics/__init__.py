"""Physics module: particle state, springs, constraints, forces and integration."""

from avatar_physics.physics.mass_points import MassPointSet, is_fixed_vertex
from avatar_physics.physics.springs import SpringNetwork
from avatar_physics.physics.constraints import ConstraintSet, resolve_ground_collisions
from avatar_physics.physics.integrator import SemiImplicitEulerIntegrator
from avatar_physics.physics.forces import (
    apply_gravity,
    apply_spring_forces,
    apply_wind,
    apply_explosion,
)

__all__ = [
    "MassPointSet",
    "is_fixed_vertex",
    "SpringNetwork",
    "ConstraintSet",
    "resolve_ground_collisions",
    "SemiImplicitEulerIntegrator",
    "apply_gravity",
    "apply_spring_forces",
    "apply_wind",
    "apply_explosion",
]
