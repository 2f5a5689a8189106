"""Mass-spring physics engine for avatar meshes."""

import logging
from typing import Any, Callable, Mapping, Optional, Union

from avatar_physics.core.constants import (
    DEFAULT_MUSCLE_TENSION,
    GROUND_FRICTION,
    GROUND_RESTITUTION,
    GROUND_Y,
)
from avatar_physics.core.types import (
    BuildReport,
    MassPoint,
    MeshTopology,
    PhysicsConfig,
    PhysicsEvent,
    VectorLike,
    as_vector,
)
from avatar_physics.physics.constraints import ConstraintSet, resolve_ground_collisions
from avatar_physics.physics.forces import (
    apply_explosion,
    apply_gravity,
    apply_spring_forces,
    apply_wind,
)
from avatar_physics.physics.integrator import SemiImplicitEulerIntegrator
from avatar_physics.physics.mass_points import MassPointSet
from avatar_physics.physics.springs import SpringNetwork

logger = logging.getLogger(__name__)

EventCallback = Callable[[PhysicsEvent], None]


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


class PhysicsEngine:
    """Deforms a topologically fixed mesh under gravity, springs and constraints.

    The engine starts disabled. While disabled, ``step`` does nothing at
    all, including clearing forces, so forces applied in the meantime are
    still pending when the engine is enabled again and steps.

    Each enabled step runs: gravity and spring forces, integration,
    distance-constraint relaxation, ground collisions, force clearing.

    Attributes:
        mass_points: Particle state
        springs: Spring network
        constraints: Distance constraints
        last_build: Report of the most recent ``init``
    """

    def __init__(
        self,
        config: Optional[PhysicsConfig] = None,
        on_event: Optional[EventCallback] = None,
    ):
        """Initialize an empty, disabled engine.

        Args:
            config: Engine configuration (uses defaults if None)
            on_event: Optional callback receiving engine events
        """
        config = config or PhysicsConfig()

        self._gravity = config.gravity
        self._damping = _clamp_unit(config.damping)
        self._stiffness = _clamp_unit(config.stiffness)
        self._time_step = config.time_step
        self._max_frame_delta = config.max_frame_delta
        self._enabled = False
        self._on_event = on_event

        self._integrator = SemiImplicitEulerIntegrator()
        self.mass_points = MassPointSet()
        self.springs = SpringNetwork()
        self.constraints = ConstraintSet()
        self.last_build: Optional[BuildReport] = None

    @property
    def enabled(self) -> bool:
        """Whether ``step`` advances the simulation."""
        return self._enabled

    @property
    def gravity(self) -> float:
        return self._gravity

    @property
    def damping(self) -> float:
        return self._damping

    @property
    def stiffness(self) -> float:
        return self._stiffness

    @property
    def time_step(self) -> float:
        """Step size used when ``step`` is called without ``dt``."""
        return self._time_step

    @property
    def max_frame_delta(self) -> float:
        """Largest wall-clock delta a frame clock should pass to ``step``."""
        return self._max_frame_delta

    def set_event_callback(self, callback: Optional[EventCallback]) -> None:
        """Set (or clear) the engine event callback."""
        self._on_event = callback

    # Construction

    def init(self, topology: Union[MeshTopology, Mapping[str, Any]]) -> BuildReport:
        """Build masses, springs and constraints from a mesh topology.

        Replaces all previous particle state. Edges and constraint pairs
        that reference unknown ids are dropped and counted in the report.

        Args:
            topology: Parsed topology or the raw mesh mapping

        Returns:
            Construction summary
        """
        if not isinstance(topology, MeshTopology):
            topology = MeshTopology.from_dict(topology)

        tension = topology.muscle_tension or DEFAULT_MUSCLE_TENSION

        self.mass_points = MassPointSet(topology.vertices)
        self.springs = SpringNetwork.from_edges(
            self.mass_points, topology.edges, tension * self._stiffness
        )
        if topology.joint_constraints:
            self.constraints = ConstraintSet.from_joint_table(self.mass_points)
        else:
            self.constraints = ConstraintSet()

        report = BuildReport(
            mass_count=len(self.mass_points),
            spring_count=len(self.springs),
            constraint_count=len(self.constraints),
            skipped_edges=self.springs.skipped_edges,
            skipped_constraints=self.constraints.skipped,
        )
        self.last_build = report

        logger.info(
            "Physics engine initialized with %d masses, %d springs, %d constraints "
            "(%d edges and %d constraints skipped)",
            report.mass_count,
            report.spring_count,
            report.constraint_count,
            report.skipped_edges,
            report.skipped_constraints,
        )
        self._emit(
            "init",
            mass_count=report.mass_count,
            spring_count=report.spring_count,
            constraint_count=report.constraint_count,
            skipped_edges=report.skipped_edges,
            skipped_constraints=report.skipped_constraints,
        )
        return report

    # State machine

    def enable(self) -> None:
        """Enable stepping."""
        self._enabled = True
        logger.info("Physics engine enabled")
        self._emit("enabled")

    def disable(self) -> None:
        """Disable stepping; pending forces are kept."""
        self._enabled = False
        logger.info("Physics engine disabled")
        self._emit("disabled")

    def step(self, dt: Optional[float] = None) -> Optional[list[dict]]:
        """Advance the simulation by one time step.

        Args:
            dt: Step size in seconds (configured time step if None)

        Returns:
            Positions of every mass as ``{"id", "position": {x, y, z}}``
            dicts, or None if the engine is disabled or ``dt <= 0``
        """
        if dt is None:
            dt = self._time_step
        if not self._enabled or dt <= 0:
            return None

        points = self.mass_points

        apply_gravity(points, self._gravity)
        apply_spring_forces(points, self.springs)

        self._integrator.integrate(points, dt, self._damping)

        self.constraints.relax(points)
        resolve_ground_collisions(points, GROUND_Y, GROUND_RESTITUTION, GROUND_FRICTION)

        points.clear_forces()

        return points.position_snapshot()

    def reset(self) -> None:
        """Restore original positions and zero velocities and forces.

        Enabled state and configuration are left as they are.
        """
        self.mass_points.reset()
        logger.info("Physics engine reset to initial state")
        self._emit("reset")

    # Configuration

    def set_gravity(self, value: float) -> None:
        """Set gravitational acceleration; any value is accepted."""
        self._gravity = value
        logger.debug("Gravity set to %s m/s^2", value)
        self._emit("gravity_changed", value=value)

    def set_stiffness(self, value: float) -> None:
        """Set global stiffness, clamped to [0, 1].

        Every spring takes the new global value, dropping any per-mesh
        tension scaling applied at construction.
        """
        self._stiffness = _clamp_unit(value)
        self.springs.set_stiffness(self._stiffness)
        logger.debug("Stiffness set to %s", self._stiffness)
        self._emit("stiffness_changed", value=self._stiffness)

    def set_damping(self, value: float) -> None:
        """Set velocity damping, clamped to [0, 1]."""
        self._damping = _clamp_unit(value)
        logger.debug("Damping set to %s", self._damping)
        self._emit("damping_changed", value=self._damping)

    def apply_config(self, config: PhysicsConfig) -> None:
        """Apply every field of ``config`` through its setter."""
        self.set_gravity(config.gravity)
        self.set_damping(config.damping)
        self.set_stiffness(config.stiffness)
        self._time_step = config.time_step
        self._max_frame_delta = config.max_frame_delta

    def get_config(self) -> PhysicsConfig:
        """Current configuration values."""
        return PhysicsConfig(
            gravity=self._gravity,
            damping=self._damping,
            stiffness=self._stiffness,
            time_step=self._time_step,
            max_frame_delta=self._max_frame_delta,
        )

    # External forces

    def apply_force(self, mass_id: str, force: VectorLike) -> bool:
        """Add a force to one mass for the next step.

        Returns:
            True if applied; False for unknown ids and fixed masses
        """
        idx = self._free_index(mass_id)
        if idx is None:
            return False
        self.mass_points.forces[idx] += as_vector(force)
        logger.debug("Applied force to %s: %s", mass_id, force)
        return True

    def apply_impulse(self, mass_id: str, impulse: VectorLike) -> bool:
        """Change one mass's velocity by ``impulse / mass``.

        Returns:
            True if applied; False for unknown ids and fixed masses
        """
        idx = self._free_index(mass_id)
        if idx is None:
            return False
        points = self.mass_points
        points.velocities[idx] += as_vector(impulse) / points.masses[idx]
        logger.debug("Applied impulse to %s: %s", mass_id, impulse)
        return True

    def apply_wind(self, wind: VectorLike) -> None:
        """Add ``wind * mass`` to every free mass for the next step."""
        apply_wind(self.mass_points, as_vector(wind))

    def apply_explosion(self, center: VectorLike, radius: float, force: float) -> int:
        """Push free masses within ``radius`` of ``center`` outward.

        Returns:
            Number of masses affected
        """
        return apply_explosion(self.mass_points, as_vector(center), radius, force)

    def toggle_fixed(self, mass_id: str) -> Optional[bool]:
        """Flip a mass's fixed flag.

        Returns:
            New fixed state, or None if the id is unknown
        """
        idx = self.mass_points.index_of(mass_id)
        if idx is None:
            return None

        fixed = not bool(self.mass_points.fixed[idx])
        self.mass_points.set_fixed(idx, fixed)
        logger.debug("%s fixed state: %s", mass_id, fixed)
        self._emit("fixed_toggled", id=mass_id, fixed=fixed)
        return fixed

    # Queries

    def get_mass(self, mass_id: str) -> Optional[MassPoint]:
        """Snapshot of one mass, or None if the id is unknown."""
        return self.mass_points.get(mass_id)

    def get_mass_positions(self) -> list[dict]:
        """Current positions in step-output form."""
        return self.mass_points.position_snapshot()

    def get_physics_data(self) -> dict:
        """Diagnostics summary of configuration and model size."""
        return {
            "enabled": self._enabled,
            "gravity": self._gravity,
            "damping": self._damping,
            "stiffness": self._stiffness,
            "mass_count": len(self.mass_points),
            "spring_count": len(self.springs),
            "constraint_count": len(self.constraints),
        }

    def _free_index(self, mass_id: str) -> Optional[int]:
        idx = self.mass_points.index_of(mass_id)
        if idx is None or self.mass_points.fixed[idx]:
            return None
        return idx

    def _emit(self, name: str, **data: Any) -> None:
        if self._on_event is not None:
            self._on_event(PhysicsEvent(name=name, data=data))
