"""
Step orchestrator for the Barnes-Hut simulation.

Each step runs four phases in order:

1. reset_forces: clear every body's force accumulator
2. accumulate_forces: query the (frozen) octree for each body's net force
3. integrate: move every body
4. rebuild: insert the moved bodies into a fresh octree for the next step

The octree is never mutated while forces are being queried, and no body
moves until every force query has finished.
"""

from __future__ import annotations

import warnings
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from typing_extensions import Self

from .body import Body
from .config import SimulationConfig
from .direct import accumulate_direct_forces
from .spatial.octree import Octree
from .types import Event, EventCallback, EventType, StepPhase


class EscapeWarning(UserWarning):
    """Warning that bodies left the simulated region and were dropped."""

    pass


class Simulation:
    """
    Runs the N-body simulation one step at a time.

    Bodies whose position leaves the root cube are dropped from the octree
    and are not tracked afterwards; they are collected in ``escaped``.

    Example:
        config = SimulationConfig(gravitational_constant=1.0, dimensions=100.0)
        sim = Simulation(bodies, config=config, on_step=render)
        sim.run(steps=100)

        for body in sim.bodies:
            print(body.name, body.position)
    """

    def __init__(
        self,
        bodies: Optional[Iterable[Body]] = None,
        *,
        config: Optional[SimulationConfig] = None,
        on_start: Optional[EventCallback] = None,
        on_step: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize the simulation and build the first octree.

        Args:
            bodies: Initial population (out-of-bounds bodies are dropped)
            config: Simulation parameters; defaults to SimulationConfig()
            on_start: Callback for start event
            on_step: Callback fired after every completed step
            on_end: Callback for end event
        """
        self._config: SimulationConfig = config if config is not None else SimulationConfig()
        self._events: dict[EventType, EventCallback] = {}
        self._escaped: list[Body] = []
        self._step_count: int = 0
        self._phase: StepPhase = StepPhase.reset_forces
        self._running: bool = False
        self._stop_requested: bool = False

        self._tree: Octree = self._build_tree(bodies if bodies is not None else [])

        if on_start:
            self._events[EventType.start] = on_start
        if on_step:
            self._events[EventType.step] = on_step
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def tree(self) -> Octree:
        """The octree for the upcoming step."""
        return self._tree

    @property
    def bodies(self) -> list[Body]:
        """Bodies currently tracked (those in the current octree)."""
        return list(self._tree)

    @property
    def escaped(self) -> list[Body]:
        """Bodies dropped because they left the root cube."""
        return list(self._escaped)

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def phase(self) -> StepPhase:
        """The phase that will run next (or is running)."""
        return self._phase

    @property
    def running(self) -> bool:
        return self._running

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a simulation event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Trigger an event, calling the registered callback."""
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    def step(self) -> None:
        """Run one full step: reset, accumulate, integrate, rebuild."""
        bodies = list(self._tree)

        self._phase = StepPhase.reset_forces
        for body in bodies:
            body.reset_force()

        self._phase = StepPhase.accumulate_forces
        self._accumulate_forces(bodies)

        self._phase = StepPhase.integrate
        integrator = self._config.integrator
        for body in bodies:
            body.move(integrator)

        self._phase = StepPhase.rebuild
        self._tree = self._build_tree(bodies)

        self._phase = StepPhase.reset_forces
        self._step_count += 1
        self.trigger(
            {
                "type": EventType.step,
                "step": self._step_count,
                "bodies": self.bodies,
                "escaped": len(self._escaped),
            }
        )

    def run(self, steps: Optional[int] = None) -> Self:
        """
        Run steps until ``steps`` have completed or stop() is called.

        Args:
            steps: Number of steps; None runs until stopped.

        Returns:
            self (for chaining)
        """
        self._running = True
        self._stop_requested = False
        self.trigger({"type": EventType.start, "step": self._step_count})

        completed = 0
        try:
            while not self._stop_requested and (steps is None or completed < steps):
                self.step()
                completed += 1
        finally:
            self._running = False
            self.trigger(
                {
                    "type": EventType.end,
                    "step": self._step_count,
                    "escaped": len(self._escaped),
                }
            )
        return self

    def stop(self) -> Self:
        """
        Request the run to stop.

        The step in progress always completes; the loop exits before the
        next one begins.
        """
        self._stop_requested = True
        return self

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def _accumulate_forces(self, bodies: list[Body]) -> None:
        """Accumulate the net force on every body from the frozen octree."""
        if not self._config.use_barnes_hut:
            accumulate_direct_forces(bodies, self._config.gravitational_constant)
            return

        tree = self._tree
        if self._config.workers > 1 and len(bodies) > 1:
            with ThreadPoolExecutor(max_workers=self._config.workers) as pool:
                # Consume the iterator so worker exceptions propagate
                for _ in pool.map(tree.compute_force_on, bodies):
                    pass
        else:
            for body in bodies:
                tree.compute_force_on(body)

    def _build_tree(self, bodies: Iterable[Body]) -> Octree:
        """Insert bodies into a fresh octree, recording any that escape."""
        tree = Octree.from_config(self._config)
        escaped: list[Body] = []
        for body in bodies:
            if not tree.insert(body):
                escaped.append(body)

        if escaped:
            self._escaped.extend(escaped)
            if self._config.warn_on_escape:
                warnings.warn(
                    f"{len(escaped)} body(ies) left the simulated region and were dropped: "
                    + ", ".join(body.name or "<unnamed>" for body in escaped[:5])
                    + (" ..." if len(escaped) > 5 else ""),
                    EscapeWarning,
                    stacklevel=3,
                )
        return tree


__all__ = ["EscapeWarning", "Simulation"]
