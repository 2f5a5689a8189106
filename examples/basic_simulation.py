#!/usr/bin/env python3
"""Basic avatar physics example.

This example demonstrates how to:
1. Build a small anatomical mesh with joint constraints
2. Configure and enable the physics engine
3. Apply wind and an explosion while stepping
4. Summarize the motion and export results

Usage:
    python examples/basic_simulation.py [--duration 3] [--visualize]

Requirements:
    - matplotlib for --visualize (pip install avatar-physics[viz])
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from avatar_physics import (
    PhysicsConfig,
    SoftBodySimulator,
    StateManager,
    load_physics_config,
    setup_logging,
)


def build_demo_mesh() -> dict:
    """Upper body: fixed head and hip joints, free neck, spine and waist."""
    def vertex(vid, x, y, z, group, vtype="surface", weight=1.0):
        return {"id": vid, "x": x, "y": y, "z": z, "group": group, "type": vtype, "weight": weight}

    vertices = [
        vertex("head_top", 0.0, 80.0, 0.0, "head"),
        vertex("head_chin", 0.0, 66.0, 4.0, "head"),
        vertex("neck_top_center", 0.0, 64.0, 0.0, "neck"),
        vertex("neck_top_front", 0.0, 62.0, 5.0, "neck"),
        vertex("neck_base_center", 0.0, 56.0, 0.0, "neck"),
        vertex("clavicle_left", -6.0, 54.0, 2.0, "torso"),
        vertex("clavicle_right", 6.0, 54.0, 2.0, "torso"),
        vertex("shoulder_left_top", -18.0, 54.0, 0.0, "arm_left", weight=1.5),
        vertex("shoulder_right_top", 18.0, 54.0, 0.0, "arm_right", weight=1.5),
        vertex("spine_center", 0.0, 28.0, -3.0, "torso", weight=2.0),
        vertex("waist_center_front", 0.0, 12.0, 6.0, "torso", weight=2.0),
        vertex("waist_left", -12.0, 12.0, 0.0, "torso"),
        vertex("waist_right", 12.0, 12.0, 0.0, "torso"),
        vertex("hip_left", -10.0, 0.0, 0.0, "leg_left", vtype="joint"),
        vertex("hip_right", 10.0, 0.0, 0.0, "leg_right", vtype="joint"),
    ]
    edges = [
        ["head_top", "neck_top_center"],
        ["head_chin", "neck_top_front"],
        ["neck_top_center", "neck_top_front"],
        ["neck_top_center", "neck_base_center"],
        ["neck_base_center", "clavicle_left"],
        ["neck_base_center", "clavicle_right"],
        ["clavicle_left", "shoulder_left_top"],
        ["clavicle_right", "shoulder_right_top"],
        ["neck_base_center", "spine_center"],
        ["spine_center", "waist_center_front"],
        ["spine_center", "waist_left"],
        ["spine_center", "waist_right"],
        ["waist_left", "hip_left"],
        ["waist_right", "hip_right"],
        ["waist_left", "waist_center_front"],
        ["waist_right", "waist_center_front"],
    ]
    return {
        "vertices": vertices,
        "edges": edges,
        "physics": {"springs": {"muscleTension": 0.5}},
        "metadata": {"biomechanical": {"jointConstraints": True}},
    }


def main():
    parser = argparse.ArgumentParser(description="Basic avatar physics example")
    parser.add_argument(
        "--duration",
        type=float,
        default=3.0,
        help="Simulation duration in seconds (default: 3)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML physics configuration (see examples/physics.yaml)",
    )
    parser.add_argument(
        "--gravity",
        type=float,
        default=None,
        help="Override gravity in m/s^2",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("./simulation_states"),
        help="Directory for exported results",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Plot vertical positions over time",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    print("=" * 60)
    print("Avatar Physics - Basic Example")
    print("=" * 60)

    config = load_physics_config(args.config) if args.config else PhysicsConfig()
    if args.gravity is not None:
        config.gravity = args.gravity
    sim = SoftBodySimulator(config)

    report = sim.load_topology(build_demo_mesh())
    print(f"\nModel:")
    print(f"  Masses: {report.mass_count}")
    print(f"  Springs: {report.spring_count} ({report.skipped_edges} edges skipped)")
    print(f"  Constraints: {report.constraint_count} ({report.skipped_constraints} skipped)")

    sim.engine.enable()

    def apply_disturbances(snapshot):
        step = len(sim.history)
        if step < 30:
            sim.engine.apply_wind((2.0, 0.0, 0.0))
        if step == 60:
            sim.engine.apply_explosion((0.0, 30.0, 10.0), radius=40.0, force=200.0)

    def progress_callback(progress: float):
        bar_width = 40
        filled = int(bar_width * progress)
        bar = "=" * filled + "-" * (bar_width - filled)
        print(f"\r  [{bar}] {progress*100:.0f}%", end="", flush=True)

    print(f"\nRunning simulation for {args.duration}s...")
    sim.run(args.duration, callback=apply_disturbances, progress_callback=progress_callback)
    print()

    summary = sim.get_motion_summary()
    print(f"\nMotion Summary:")
    print(f"  Total steps: {summary['num_steps']}")
    print(f"  Duration: {summary['duration']:.2f}s")
    print(f"  Max displacement: {summary['max_displacement']:.2f}")
    print(f"  Mean displacement: {summary['mean_displacement']:.2f}")
    print(f"  Lowest point: {summary['lowest_y']:.2f}")

    manager = StateManager(args.output)
    state_path = manager.export_state(sim.export_state(), "state.json")
    history_path = manager.export_position_history(sim.engine.mass_points.ids, sim.history)
    print(f"\nSaved: {state_path}")
    print(f"Saved: {history_path}")

    if args.visualize:
        try:
            import matplotlib.pyplot as plt

            times = [frame.time for frame in sim.history]
            fig, ax = plt.subplots(figsize=(10, 6))
            for idx, mass_id in enumerate(sim.engine.mass_points.ids):
                if sim.engine.mass_points.fixed[idx]:
                    continue
                ax.plot(times, [frame.positions[idx, 1] for frame in sim.history], label=mass_id)
            ax.set_xlabel("Time (s)")
            ax.set_ylabel("Height (y)")
            ax.set_title("Vertical Position of Free Masses")
            ax.grid(True, alpha=0.3)
            ax.legend(fontsize=7)

            plt.tight_layout()
            plt.savefig("simulation_results.png", dpi=150)
            print("  Saved: simulation_results.png")
            plt.show()

        except ImportError as e:
            print(f"  Visualization requires matplotlib: {e}")

    print("\n" + "=" * 60)
    print("Simulation complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
