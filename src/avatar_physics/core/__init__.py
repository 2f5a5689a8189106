"""Core types and constants for the avatar physics engine."""

from avatar_physics.core.constants import (
    DEFAULT_GRAVITY,
    DEFAULT_DAMPING,
    DEFAULT_STIFFNESS,
    DEFAULT_TIME_STEP,
    MAX_FRAME_DELTA,
    MASS_SCALE,
    DEFAULT_MUSCLE_TENSION,
    GROUND_Y,
    GROUND_RESTITUTION,
    GROUND_FRICTION,
    CONSTRAINT_ITERATIONS,
    JOINT_CONSTRAINT_STIFFNESS,
    JOINT_DISTANCE_TABLE,
)
from avatar_physics.core.types import (
    VectorLike,
    as_vector,
    vector_to_dict,
    VertexData,
    MeshTopology,
    MassPoint,
    Spring,
    DistanceConstraint,
    BuildReport,
    PhysicsEvent,
    SimulationFrame,
    PhysicsConfig,
)

__all__ = [
    # Constants
    "DEFAULT_GRAVITY",
    "DEFAULT_DAMPING",
    "DEFAULT_STIFFNESS",
    "DEFAULT_TIME_STEP",
    "MAX_FRAME_DELTA",
    "MASS_SCALE",
    "DEFAULT_MUSCLE_TENSION",
    "GROUND_Y",
    "GROUND_RESTITUTION",
    "GROUND_FRICTION",
    "CONSTRAINT_ITERATIONS",
    "JOINT_CONSTRAINT_STIFFNESS",
    "JOINT_DISTANCE_TABLE",
    # Types
    "VectorLike",
    "as_vector",
    "vector_to_dict",
    "VertexData",
    "MeshTopology",
    "MassPoint",
    "Spring",
    "DistanceConstraint",
    "BuildReport",
    "PhysicsEvent",
    "SimulationFrame",
    "PhysicsConfig",
]
