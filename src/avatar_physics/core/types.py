"""Core type definitions for the avatar physics engine."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from avatar_physics.core.constants import (
    DEFAULT_DAMPING,
    DEFAULT_GRAVITY,
    DEFAULT_STIFFNESS,
    DEFAULT_TIME_STEP,
    JOINT_CONSTRAINT_STIFFNESS,
    MAX_FRAME_DELTA,
    SPRING_DAMPING,
)

# {"x": .., "y": .., "z": ..} mapping or any length-3 sequence
VectorLike = Union[Mapping[str, float], Sequence[float], NDArray[np.float64]]


def as_vector(value: VectorLike) -> NDArray[np.float64]:
    """Convert a vector-like value into a float64 array of shape (3,).

    Args:
        value: Mapping with x/y/z keys or a length-3 sequence

    Returns:
        Array of shape (3,)

    Raises:
        ValueError: If the value does not describe a 3D vector
    """
    if isinstance(value, Mapping):
        try:
            value = (value["x"], value["y"], value["z"])
        except KeyError as exc:
            raise ValueError(f"vector mapping is missing component {exc}") from None

    vector = np.asarray(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"vector must have shape (3,), got {vector.shape}")
    return vector


def vector_to_dict(vector: NDArray[np.float64]) -> dict[str, float]:
    """Convert a (3,) array to an {x, y, z} dict of plain floats."""
    return {"x": float(vector[0]), "y": float(vector[1]), "z": float(vector[2])}


@dataclass
class VertexData:
    """Single vertex of the input topology.

    Attributes:
        id: Stable external key
        x, y, z: Initial position
        group: Anatomical group tag (e.g. "head", "torso")
        type: Vertex type tag (e.g. "joint", "surface")
        weight: Relative weight, scaled to the simulated mass
    """

    id: str
    x: float
    y: float
    z: float
    group: str = ""
    type: str = ""
    weight: float = 1.0

    def __post_init__(self) -> None:
        """Validate weight."""
        if not self.weight > 0:
            raise ValueError(f"weight of vertex '{self.id}' must be positive, got {self.weight}")

    @property
    def position(self) -> NDArray[np.float64]:
        """Initial position as a (3,) array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VertexData":
        return cls(
            id=data["id"],
            x=float(data["x"]),
            y=float(data["y"]),
            z=float(data["z"]),
            group=data.get("group") or "",
            type=data.get("type") or "",
            weight=float(data.get("weight", 1.0)),
        )


@dataclass
class MeshTopology:
    """Mesh point set and connectivity consumed by the engine.

    The topology is expected to be already parsed and validated by the
    loader that produced it.

    Attributes:
        vertices: Mesh vertices in output order
        edges: Connectivity as (id_a, id_b) pairs
        muscle_tension: Per-mesh spring tension scale (None = default)
        joint_constraints: Whether anatomical distance constraints apply
    """

    vertices: list[VertexData] = field(default_factory=list)
    edges: list[tuple[str, str]] = field(default_factory=list)
    muscle_tension: Optional[float] = None
    joint_constraints: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MeshTopology":
        """Build a topology from the mesh JSON structure.

        Args:
            data: Mapping with ``vertices``, ``edges`` and the optional
                ``physics.springs.muscleTension`` and
                ``metadata.biomechanical.jointConstraints`` entries

        Returns:
            Parsed topology
        """
        physics = data.get("physics") or {}
        springs = physics.get("springs") or {}
        metadata = data.get("metadata") or {}
        biomechanical = metadata.get("biomechanical") or {}

        return cls(
            vertices=[VertexData.from_dict(v) for v in data["vertices"]],
            edges=[(edge[0], edge[1]) for edge in data["edges"]],
            muscle_tension=springs.get("muscleTension"),
            joint_constraints=bool(biomechanical.get("jointConstraints")),
        )


@dataclass
class MassPoint:
    """Read-only snapshot of one simulated particle.

    Attributes:
        id: Stable external key
        position: Current position (3,)
        original_position: Position at construction, restored by reset
        velocity: Current velocity (3,)
        force: Accumulated force for the pending step (3,)
        mass: Simulated mass (weight x 10)
        fixed: Whether the point is excluded from all motion
        group: Group tag from the topology
        type: Type tag from the topology
    """

    id: str
    position: NDArray[np.float64]
    original_position: NDArray[np.float64]
    velocity: NDArray[np.float64]
    force: NDArray[np.float64]
    mass: float
    fixed: bool
    group: str = ""
    type: str = ""


@dataclass(frozen=True)
class Spring:
    """Elastic link between two mass points."""

    id1: str
    id2: str
    rest_length: float
    stiffness: float
    damping: float = SPRING_DAMPING


@dataclass(frozen=True)
class DistanceConstraint:
    """Positional correction pulling two points toward a target separation."""

    id1: str
    id2: str
    target_distance: float
    stiffness: float = JOINT_CONSTRAINT_STIFFNESS


@dataclass
class BuildReport:
    """Summary of one engine construction.

    Attributes:
        mass_count: Number of mass points created
        spring_count: Number of springs created
        constraint_count: Number of distance constraints installed
        skipped_edges: Edges dropped because an endpoint id is unknown
        skipped_constraints: Table pairs dropped because an id is unknown
    """

    mass_count: int = 0
    spring_count: int = 0
    constraint_count: int = 0
    skipped_edges: int = 0
    skipped_constraints: int = 0


@dataclass
class PhysicsEvent:
    """Structured notification emitted by the engine."""

    name: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class SimulationFrame:
    """Positions of every mass at one point in simulation time.

    Attributes:
        time: Simulation time after the step
        positions: Mass positions (N, 3) in mass order
    """

    time: float
    positions: NDArray[np.float64]


@dataclass
class PhysicsConfig:
    """Complete engine configuration.

    Attributes:
        gravity: Gravitational acceleration (unclamped)
        damping: Velocity multiplier per step, clamped to [0, 1] when applied
        stiffness: Global spring stiffness, clamped to [0, 1] when applied
        time_step: Default step size in seconds
        max_frame_delta: Largest wall-clock delta passed to the engine
    """

    gravity: float = DEFAULT_GRAVITY
    damping: float = DEFAULT_DAMPING
    stiffness: float = DEFAULT_STIFFNESS
    time_step: float = DEFAULT_TIME_STEP
    max_frame_delta: float = MAX_FRAME_DELTA

    def __post_init__(self) -> None:
        """Validate step sizes."""
        if self.time_step <= 0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if self.max_frame_delta <= 0:
            raise ValueError(
                f"max_frame_delta must be positive, got {self.max_frame_delta}"
            )
