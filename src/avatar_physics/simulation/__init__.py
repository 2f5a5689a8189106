"""Simulation module: engine, driver loop, clock, configuration and exports."""

from avatar_physics.simulation.engine import PhysicsEngine, EventCallback
from avatar_physics.simulation.simulator import SoftBodySimulator
from avatar_physics.simulation.time_controller import TimeController
from avatar_physics.simulation.state_manager import StateManager
from avatar_physics.simulation.config_loader import (
    load_config_file,
    load_physics_config,
    physics_config_from_dict,
    save_physics_config,
)

__all__ = [
    "PhysicsEngine",
    "EventCallback",
    "SoftBodySimulator",
    "TimeController",
    "StateManager",
    # Config I/O
    "load_config_file",
    "load_physics_config",
    "physics_config_from_dict",
    "save_physics_config",
]
