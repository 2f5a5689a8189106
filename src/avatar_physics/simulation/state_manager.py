"""State management for position snapshots and simulation exports."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np

from avatar_physics.core.types import SimulationFrame


class StateManager:
    """Manages position snapshots and result export.

    Attributes:
        save_dir: Directory for exported files
    """

    def __init__(self, save_dir: Union[str, Path] = "./simulation_states"):
        """Initialize state manager.

        Args:
            save_dir: Directory for exported files
        """
        self.save_dir = Path(save_dir)
        self._snapshots: dict[str, list[dict]] = {}

    def ensure_save_dir(self) -> None:
        """Create save directory if it doesn't exist."""
        self.save_dir.mkdir(parents=True, exist_ok=True)

    def save_snapshot(self, name: str, positions: list[dict]) -> None:
        """Save a named position snapshot in memory.

        Args:
            name: Snapshot name
            positions: Snapshot as returned by ``PhysicsEngine.step``
        """
        self._snapshots[name] = [
            {"id": entry["id"], "position": dict(entry["position"])} for entry in positions
        ]

    def load_snapshot(self, name: str) -> Optional[list[dict]]:
        """Load named snapshot from memory.

        Args:
            name: Snapshot name

        Returns:
            Position snapshot or None if not found
        """
        return self._snapshots.get(name)

    def list_snapshots(self) -> list[str]:
        """List available snapshot names."""
        return list(self._snapshots.keys())

    def clear_snapshots(self) -> None:
        """Clear all in-memory snapshots."""
        self._snapshots.clear()

    def export_state(
        self,
        state: dict[str, Any],
        filename: Optional[str] = None,
    ) -> Path:
        """Write an exported state dictionary to JSON.

        Args:
            state: State from ``SoftBodySimulator.export_state``
            filename: Optional filename (auto-generated if None)

        Returns:
            Path to saved file
        """
        self.ensure_save_dir()

        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"state_{timestamp}.json"

        filepath = self.save_dir / filename
        with open(filepath, "w") as f:
            json.dump(state, f, indent=2)

        return filepath

    def load_state(self, filepath: Union[str, Path]) -> dict[str, Any]:
        """Read an exported state file."""
        with open(filepath, "r") as f:
            return json.load(f)

    def export_position_history(
        self,
        ids: list[str],
        history: list[SimulationFrame],
        filename: str = "position_history.npz",
    ) -> Path:
        """Export recorded frames to NPZ.

        The archive holds ``ids`` (N,), ``times`` (T,) and
        ``positions`` (T, N, 3).

        Args:
            ids: Mass ids in row order
            history: Recorded frames
            filename: Output filename

        Returns:
            Path to exported file
        """
        self.ensure_save_dir()
        filepath = self.save_dir / filename

        if history:
            positions = np.stack([frame.positions for frame in history])
        else:
            positions = np.zeros((0, len(ids), 3), dtype=np.float64)
        times = np.array([frame.time for frame in history], dtype=np.float64)

        np.savez(filepath, ids=np.array(ids, dtype=str), times=times, positions=positions)

        return filepath
