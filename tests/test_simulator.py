"""Tests for the simulation driver."""

import pytest

from avatar_physics.core.types import PhysicsConfig
from avatar_physics.simulation.simulator import SoftBodySimulator


@pytest.fixture
def simulator(pendulum_mesh):
    sim = SoftBodySimulator(PhysicsConfig(time_step=0.25))
    sim.load_topology(pendulum_mesh)
    sim.engine.enable()
    return sim


def test_step_requires_topology():
    with pytest.raises(RuntimeError, match="No topology loaded"):
        SoftBodySimulator().step()


def test_run_requires_enabled_engine(pendulum_mesh):
    sim = SoftBodySimulator()
    sim.load_topology(pendulum_mesh)
    with pytest.raises(RuntimeError, match="disabled"):
        sim.run(1.0)


def test_disabled_step_does_not_advance_time(pendulum_mesh):
    sim = SoftBodySimulator()
    sim.load_topology(pendulum_mesh)

    assert sim.step() is None
    assert sim.simulation_time == 0.0
    assert sim.history == []


def test_run_steps_until_duration(simulator):
    seen = []
    progress = []

    results = simulator.run(1.0, callback=seen.append, progress_callback=progress.append)

    assert len(results) == 4
    assert seen == results
    assert progress == [0.25, 0.5, 0.75, 1.0]
    assert simulator.simulation_time == 1.0
    assert [frame.time for frame in simulator.history] == [0.25, 0.5, 0.75, 1.0]


def test_run_stops_when_engine_disabled_mid_run(simulator):
    seen = []

    def disable_after_second_step(snapshot):
        seen.append(snapshot)
        if len(seen) == 2:
            simulator.engine.disable()

    results = simulator.run(1.0, callback=disable_after_second_step)

    assert len(results) == 2
    assert None not in results
    assert seen == results
    assert simulator.simulation_time == 0.5
    assert len(simulator.history) == 2


def test_advance_frame_clamps_wall_clock_gaps(simulator):
    assert simulator.advance_frame(10.0) is None
    assert simulator.advance_frame(10.05) is not None
    assert simulator.advance_frame(20.0) is not None

    assert simulator.simulation_time == pytest.approx(0.15)


def test_history_can_be_disabled(pendulum_mesh):
    sim = SoftBodySimulator(record_history=False)
    sim.load_topology(pendulum_mesh)
    sim.engine.enable()

    sim.step()

    assert sim.history == []


def test_reset(simulator):
    simulator.run(0.5)

    simulator.reset()

    assert simulator.simulation_time == 0.0
    assert simulator.history == []
    assert simulator.engine.get_mass("B").position[1] == -10.0


def test_motion_summary(simulator):
    assert simulator.get_motion_summary()["num_steps"] == 0

    simulator.run(1.0)
    summary = simulator.get_motion_summary()

    assert summary["num_steps"] == 4
    assert summary["duration"] == 1.0
    assert summary["max_displacement"] > 0.0
    assert summary["lowest_y"] < -10.0


def test_export_state(simulator):
    state = simulator.export_state()

    assert state["mesh"] == {"vertices": 2, "edges": 1, "joint_constraints": False}
    assert state["physics"]["enabled"] is True
    assert state["simulation_time"] == 0.0
    assert "timestamp" in state


def test_events_forwarded_to_engine(pendulum_mesh):
    events = []
    sim = SoftBodySimulator(on_event=events.append)
    sim.load_topology(pendulum_mesh)
    assert events[0].name == "init"
