#!/usr/bin/env python3
"""
Benchmark the Barnes-Hut opening threshold against direct summation.

For each theta, times one force evaluation over a random population and
measures its relative error against the exact O(n^2) forces.

Usage:
    uv run python scripts/benchmark_theta.py [--bodies N,...] [--thetas T,...]

Examples:
    uv run python scripts/benchmark_theta.py
    uv run python scripts/benchmark_theta.py --bodies 1000,5000 --thetas 0.25,0.5,1
    uv run python scripts/benchmark_theta.py --output results.json
"""

from __future__ import annotations

import argparse
import json
import time
from typing import Any

from nbody_octree import (
    Octree,
    SimulationConfig,
    Vector3,
    direct_forces,
    generate_bodies,
    relative_force_error,
)


def benchmark_theta(bodies: list, config: SimulationConfig, exact: Any) -> dict[str, Any]:
    """
    Build an octree and evaluate every body's force once.

    Returns:
        Dict with build/query timing and the relative force error
    """
    start = time.perf_counter()
    tree = Octree.from_bodies(bodies, config)
    built = time.perf_counter()
    for body in bodies:
        body.reset_force()
        tree.compute_force_on(body)
    elapsed = time.perf_counter() - start
    approximate = [body.force for body in bodies]

    return {
        "build_seconds": built - start,
        "time_seconds": elapsed,
        "relative_error": relative_force_error(approximate, exact),
    }


def run_benchmarks(
    sizes: list[int],
    thetas: list[float],
    seed: int = 42,
) -> list[dict]:
    """Run the theta sweep for every population size."""
    results = []

    print(f"\nBenchmarking {len(thetas)} thetas on {len(sizes)} population sizes")
    print("=" * 80)

    for n in sizes:
        config = SimulationConfig(body_count=n)
        bodies = generate_bodies(n, config.dimensions, random_seed=seed)

        print(f"\n{n} bodies")
        print("-" * 60)

        start = time.perf_counter()
        exact = [Vector3(*row) for row in direct_forces(bodies, config.gravitational_constant)]
        direct_seconds = time.perf_counter() - start
        print(f"  {'direct':>8s}: {direct_seconds:.4f}s")

        for theta in thetas:
            result = benchmark_theta(bodies, config.replace(theta=theta), exact)
            print(
                f"  {theta:>8.3f}: {result['time_seconds']:.4f}s  "
                f"error {result['relative_error']:.2e}"
            )
            results.append(
                {
                    "bodies": n,
                    "theta": theta,
                    "direct_seconds": direct_seconds,
                    **result,
                }
            )

    # Summary
    print("\n" + "=" * 80)
    print("SUMMARY (relative force error)")
    print("=" * 80)

    print(f"{'Bodies':<10s}", end="")
    for theta in thetas:
        print(f"{theta:>10.3f}", end="")
    print()
    print("-" * (10 + 10 * len(thetas)))

    for n in sizes:
        print(f"{n:<10d}", end="")
        for theta in thetas:
            matching = [r for r in results if r["bodies"] == n and r["theta"] == theta]
            print(f"{matching[0]['relative_error']:>10.2e}", end="")
        print()

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark the Barnes-Hut opening threshold")
    parser.add_argument("--bodies", default="500,2000", help="Comma-separated population sizes")
    parser.add_argument(
        "--thetas", default="0.0,0.25,0.5,1.0,2.0", help="Comma-separated theta values"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--output", help="Output JSON file for results")

    args = parser.parse_args()

    results = run_benchmarks(
        sizes=[int(s) for s in args.bodies.split(",")],
        thetas=[float(t) for t in args.thetas.split(",")],
        seed=args.seed,
    )

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
