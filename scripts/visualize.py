#!/usr/bin/env python3
"""
Visualization script for the N-body simulation.

Runs a small simulation and saves XY projections of selected steps, plus a
side-by-side comparison, into ./build/

Usage:
    uv run python scripts/visualize.py [--bodies N] [--steps S] [--every K]
"""

import argparse
from pathlib import Path

import matplotlib.pyplot as plt

from nbody_octree import Simulation, SimulationConfig, populate

# Output directory
BUILD_DIR = Path(__file__).parent.parent / "build"


def ensure_build_dir():
    """Create build directory if it doesn't exist."""
    BUILD_DIR.mkdir(exist_ok=True)


def visualize(bodies, dimensions, title="Snapshot", ax=None):
    """Draw the XY projection of bodies on an axis."""
    half = dimensions / 2
    xs = [b.position.x for b in bodies]
    ys = [b.position.y for b in bodies]
    colors = [getattr(b, "color", "#ffffff") for b in bodies]
    sizes = [max(1.0, getattr(b, "radius", 1.0)) for b in bodies]

    ax.set_facecolor("black")
    ax.scatter(xs, ys, s=sizes, c=colors, linewidths=0)
    ax.set_xlim(-half, half)
    ax.set_ylim(-half, half)
    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])


def save_snapshot(bodies, dimensions, step, filename):
    """Save a single snapshot image."""
    fig, ax = plt.subplots(figsize=(8, 8))
    visualize(bodies, dimensions, f"Step {step} ({len(bodies)} bodies)", ax)
    fig.savefig(BUILD_DIR / filename, dpi=100, bbox_inches="tight")
    plt.close(fig)
    print(f"  Saved {filename}")


def save_comparison(snapshots, dimensions, filename, title):
    """Save several snapshots side by side."""
    n = len(snapshots)
    fig, axes = plt.subplots(1, n, figsize=(5 * n, 5), squeeze=False)
    for ax, (step, positions) in zip(axes[0], snapshots):
        visualize(positions, dimensions, f"Step {step}", ax)
    fig.suptitle(title, fontsize=14, fontweight="bold")
    fig.savefig(BUILD_DIR / filename, dpi=100, bbox_inches="tight")
    plt.close(fig)
    print(f"  Saved {filename}")


class _Frozen:
    """Position and display attributes of a body at one step."""

    def __init__(self, body):
        self.position = body.position
        self.color = getattr(body, "color", "#ffffff")
        self.radius = getattr(body, "radius", 1.0)


def generate_all(bodies=500, steps=60, every=20, theta=1.0, seed=42):
    """Run a simulation and write snapshots every ``every`` steps."""
    ensure_build_dir()

    config = SimulationConfig(body_count=bodies, theta=theta)
    simulation = Simulation(populate(config, random_seed=seed), config=config)
    snapshots = [(0, [_Frozen(b) for b in simulation.bodies])]

    def capture(event):
        step = event["step"]
        if step % every == 0:
            tracked = event["bodies"]
            snapshots.append((step, [_Frozen(b) for b in tracked]))

    simulation.on("step", capture)

    print(f"Simulating {bodies} bodies for {steps} steps (theta={theta})...")
    simulation.run(steps=steps)

    print("Generating snapshot images...")
    for step, frozen in snapshots:
        save_snapshot(frozen, config.dimensions, step, f"step_{step:04d}.png")

    save_comparison(
        snapshots,
        config.dimensions,
        "comparison_steps.png",
        f"Barnes-Hut N-body (theta={theta})",
    )

    print()
    print(f"Escaped bodies: {len(simulation.escaped)}")
    print(f"All images saved to: {BUILD_DIR.absolute()}")


def main():
    parser = argparse.ArgumentParser(description="Render simulation snapshots")
    parser.add_argument("--bodies", type=int, default=500, help="Number of random bodies")
    parser.add_argument("--steps", type=int, default=60, help="Steps to simulate")
    parser.add_argument("--every", type=int, default=20, help="Steps between snapshots")
    parser.add_argument("--theta", type=float, default=1.0, help="Opening threshold")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    generate_all(args.bodies, args.steps, args.every, args.theta, args.seed)


if __name__ == "__main__":
    main()
