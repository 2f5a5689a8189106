"""Simulation driver tying the physics engine to a time controller."""

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

import numpy as np

from avatar_physics.core.types import (
    BuildReport,
    MeshTopology,
    PhysicsConfig,
    SimulationFrame,
)
from avatar_physics.simulation.engine import EventCallback, PhysicsEngine
from avatar_physics.simulation.time_controller import TimeController

logger = logging.getLogger(__name__)


class SoftBodySimulator:
    """Main simulation orchestrator.

    Coordinates the physics engine, the time controller and the recorded
    position history.

    Attributes:
        engine: Physics engine being driven
        clock: Time controller for step sizes and simulation time
        record_history: Whether each step is appended to the history
    """

    def __init__(
        self,
        config: Optional[PhysicsConfig] = None,
        record_history: bool = True,
        on_event: Optional[EventCallback] = None,
    ):
        """Initialize simulator.

        Args:
            config: Engine configuration (uses defaults if None)
            record_history: Record positions after every step
            on_event: Optional callback receiving engine events
        """
        config = config or PhysicsConfig()

        self.engine = PhysicsEngine(config, on_event=on_event)
        self.clock = TimeController(
            time_step=config.time_step,
            max_delta=config.max_frame_delta,
        )
        self.record_history = record_history

        self._topology: Optional[MeshTopology] = None
        self._history: list[SimulationFrame] = []

    @property
    def topology(self) -> Optional[MeshTopology]:
        """Currently loaded topology."""
        return self._topology

    @property
    def simulation_time(self) -> float:
        """Current simulation time in seconds."""
        return self.clock.current_time

    @property
    def history(self) -> list[SimulationFrame]:
        """Recorded frames."""
        return self._history.copy()

    def load_topology(self, topology: Union[MeshTopology, Mapping[str, Any]]) -> BuildReport:
        """Build the engine from a mesh topology and restart the clock.

        Args:
            topology: Parsed topology or the raw mesh mapping

        Returns:
            Construction summary
        """
        if not isinstance(topology, MeshTopology):
            topology = MeshTopology.from_dict(topology)

        report = self.engine.init(topology)
        self._topology = topology
        self.clock.reset()
        self._history.clear()
        return report

    def step(self, dt: Optional[float] = None) -> Optional[list[dict]]:
        """Advance simulation by one step.

        Args:
            dt: Step size in seconds (clock time step if None)

        Returns:
            Position snapshot, or None if the engine did not step

        Raises:
            RuntimeError: If no topology is loaded
        """
        if self._topology is None:
            raise RuntimeError("No topology loaded. Call load_topology() first.")

        if dt is None:
            dt = self.clock.time_step

        snapshot = self.engine.step(dt)
        if snapshot is None:
            return None

        self.clock.tick(dt)

        if self.record_history:
            self._history.append(
                SimulationFrame(
                    time=self.clock.current_time,
                    positions=self.engine.mass_points.positions.copy(),
                )
            )

        return snapshot

    def advance_frame(self, timestamp: float) -> Optional[list[dict]]:
        """Step by the clamped wall-clock time since the previous frame.

        Args:
            timestamp: Frame time in seconds

        Returns:
            Position snapshot, or None if nothing was stepped (first frame,
            paused clock or disabled engine)
        """
        dt = self.clock.frame_delta(timestamp)
        if dt <= 0:
            return None
        return self.step(dt)

    def run(
        self,
        duration: float,
        callback: Optional[Callable[[list[dict]], None]] = None,
        progress_callback: Optional[Callable[[float], None]] = None,
    ) -> list[list[dict]]:
        """Run fixed steps for the given duration.

        Args:
            duration: Simulation duration in seconds
            callback: Optional callback for each step's snapshot
            progress_callback: Optional progress callback (0-1)

        Returns:
            Snapshots for every step taken. The run stops early if the
            engine is disabled while it is running.

        Raises:
            RuntimeError: If no topology is loaded or the engine is disabled
        """
        if self._topology is None:
            raise RuntimeError("No topology loaded. Call load_topology() first.")
        if not self.engine.enabled:
            raise RuntimeError("Physics engine is disabled. Call engine.enable() first.")

        results = []
        start_time = self.clock.current_time
        end_time = start_time + duration

        while self.clock.current_time < end_time:
            snapshot = self.step()
            if snapshot is None:
                logger.warning(
                    "Engine disabled at t=%.3f s; stopping run early",
                    self.clock.current_time,
                )
                break
            results.append(snapshot)

            if callback:
                callback(snapshot)

            if progress_callback:
                progress = (self.clock.current_time - start_time) / duration
                progress_callback(min(1.0, progress))

        logger.debug("Ran %d steps over %.3f s", len(results), duration)
        return results

    def reset(self, clear_history: bool = True) -> None:
        """Reset engine state and simulation time.

        Args:
            clear_history: Whether to clear recorded frames
        """
        self.engine.reset()
        self.clock.reset()

        if clear_history:
            self._history.clear()

    def get_motion_summary(self) -> dict:
        """Get summary statistics from the recorded history.

        Returns:
            Dictionary with summary statistics
        """
        if not self._history or len(self.engine.mass_points) == 0:
            return {
                "num_steps": len(self._history),
                "duration": 0.0,
                "max_displacement": 0.0,
                "mean_displacement": 0.0,
                "lowest_y": None,
            }

        original = self.engine.mass_points.original_positions
        latest = self._history[-1].positions
        displacement = np.linalg.norm(latest - original, axis=1)
        lowest = min(float(frame.positions[:, 1].min()) for frame in self._history)

        return {
            "num_steps": len(self._history),
            "duration": self._history[-1].time,
            "max_displacement": float(displacement.max()),
            "mean_displacement": float(displacement.mean()),
            "lowest_y": lowest,
        }

    def export_state(self) -> dict:
        """Export a diagnostic summary of the simulation.

        Returns:
            Dictionary with timestamp, mesh summary, physics data and time
        """
        mesh = None
        if self._topology is not None:
            mesh = {
                "vertices": len(self._topology.vertices),
                "edges": len(self._topology.edges),
                "joint_constraints": self._topology.joint_constraints,
            }

        return {
            "timestamp": datetime.now().isoformat(),
            "mesh": mesh,
            "physics": self.engine.get_physics_data(),
            "simulation_time": self.clock.current_time,
        }
