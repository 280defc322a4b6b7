"""
Common types for the simulation lifecycle.

- StepPhase: The four phases of one simulation step
- EventType: Simulation lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Optional, TypedDict

if TYPE_CHECKING:
    from .body import Body


class StepPhase(IntEnum):
    """
    Phases of a simulation step, in cyclic order.

    - reset_forces: Clear every body's force accumulator
    - accumulate_forces: Query the frozen index for each body's net force
    - integrate: Move every body
    - rebuild: Insert the moved bodies into a fresh index
    """

    reset_forces = 0
    accumulate_forces = 1
    integrate = 2
    rebuild = 3


class EventType(IntEnum):
    """
    Simulation lifecycle events.

    - start: A run has begun
    - step: Fired once per completed step (after rebuild)
    - end: The run finished or was stopped
    """

    start = 0
    step = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    step: int
    bodies: list[Body]
    escaped: int


EventCallback = Callable[[Optional[Event]], None]


__all__ = ["StepPhase", "EventType", "Event", "EventCallback"]
