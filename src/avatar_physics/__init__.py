"""
Avatar Physics

A real-time mass-spring simulator that deforms a topologically fixed
avatar mesh under gravity, elastic springs, anatomical distance
constraints, ground collision and ad-hoc force fields.

Main components:
- core: Constants, topology and state types, configuration
- physics: Mass points, springs, constraints, forces and integration
- simulation: Physics engine, driver loop, clock, config files and exports

Quick start:
    from avatar_physics import PhysicsEngine

    engine = PhysicsEngine()
    engine.init(mesh_data)
    engine.enable()
    positions = engine.step(1 / 60)
"""

__version__ = "0.1.0"

# Core types
from avatar_physics.core.types import (
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

# Engine and driver
from avatar_physics.simulation import (
    PhysicsEngine,
    SoftBodySimulator,
    TimeController,
    StateManager,
    load_physics_config,
    save_physics_config,
)

from avatar_physics.logging_config import setup_logging

__all__ = [
    # Version
    "__version__",
    # Core types
    "VertexData",
    "MeshTopology",
    "MassPoint",
    "Spring",
    "DistanceConstraint",
    "BuildReport",
    "PhysicsEvent",
    "SimulationFrame",
    "PhysicsConfig",
    # Simulation
    "PhysicsEngine",
    "SoftBodySimulator",
    "TimeController",
    "StateManager",
    "load_physics_config",
    "save_physics_config",
    # Logging
    "setup_logging",
]
