"""
Command line entry point.

Usage:
    nbody-octree [--bodies N] [--theta T] [--steps S] [--svg PATH]

Examples:
    nbody-octree --bodies 1000 --steps 50
    nbody-octree --bodies 200 --theta 0.5 --seed 7 --svg snapshot.svg
    nbody-octree --bodies 500 --direct --steps 10

Without --steps the run continues until interrupted with Ctrl-C; the step in
progress is finished before exiting.
"""

from __future__ import annotations

import argparse
import signal
import sys
import time
from pathlib import Path
from typing import Any, Optional, Sequence

from .config import (
    DEFAULT_BODY_COUNT,
    DEFAULT_DIMENSIONS,
    DEFAULT_THETA,
    GRAVITATIONAL_CONSTANT,
    SimulationConfig,
)
from .export import to_svg
from .generator import DEFAULT_CENTRAL_MASS, populate
from .simulation import Simulation
from .types import Event
from .validation import ValidationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nbody-octree",
        description="Barnes-Hut N-body gravity simulation.",
    )
    parser.add_argument("--bodies", type=int, default=DEFAULT_BODY_COUNT, help="random bodies")
    parser.add_argument("--theta", type=float, default=DEFAULT_THETA, help="opening threshold")
    parser.add_argument(
        "--dimensions", type=float, default=DEFAULT_DIMENSIONS, help="root cube edge length"
    )
    parser.add_argument(
        "--gravity", type=float, default=GRAVITATIONAL_CONSTANT, help="gravitational constant"
    )
    parser.add_argument(
        "--central-mass",
        type=float,
        default=DEFAULT_CENTRAL_MASS,
        help="mass of the body at the origin (0 to omit)",
    )
    parser.add_argument("--steps", type=int, default=None, help="steps to run (default: forever)")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--workers", type=int, default=1, help="threads for force accumulation")
    parser.add_argument("--direct", action="store_true", help="exact O(n^2) forces")
    parser.add_argument("--report-every", type=int, default=1, help="steps between reports")
    parser.add_argument("--svg", type=Path, default=None, help="write final snapshot to PATH")
    parser.add_argument("--quiet", action="store_true", help="suppress progress output")
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Build a SimulationConfig from parsed arguments."""
    return SimulationConfig(
        gravitational_constant=args.gravity,
        dimensions=args.dimensions,
        theta=args.theta,
        body_count=args.bodies,
        use_barnes_hut=not args.direct,
        workers=args.workers,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run a simulation from the command line.

    Returns:
        Process exit code (0 on success). Invalid arguments exit with 2.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.steps is not None and args.steps < 0:
        parser.error(f"--steps must be >= 0, got {args.steps}")
    if args.report_every < 1:
        parser.error(f"--report-every must be >= 1, got {args.report_every}")

    try:
        config = config_from_args(args)
    except ValidationError as exc:
        parser.error(str(exc))

    central_mass = args.central_mass if args.central_mass > 0 else None
    bodies = populate(config, central_mass=central_mass, random_seed=args.seed)

    started = time.perf_counter()

    def report(event: Optional[Event]) -> None:
        if event is None or args.quiet:
            return
        step = event.get("step", 0)
        if step % args.report_every:
            return
        elapsed = time.perf_counter() - started
        tracked = len(event.get("bodies", []))
        print(
            f"step {step:6d}  bodies {tracked:6d}  escaped {event.get('escaped', 0):6d}  "
            f"elapsed {elapsed:8.2f}s",
            flush=True,
        )

    simulation = Simulation(bodies, config=config, on_step=report)

    def handle_interrupt(signum: int, frame: Any) -> None:
        simulation.stop()

    previous = signal.signal(signal.SIGINT, handle_interrupt)
    try:
        simulation.run(steps=args.steps)
    finally:
        signal.signal(signal.SIGINT, previous)

    if args.svg is not None:
        args.svg.write_text(to_svg(simulation.bodies, config.dimensions))
        if not args.quiet:
            print(f"wrote {args.svg}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
