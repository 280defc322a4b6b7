"""
Octree implementation for Barnes-Hut gravity approximation.

The octree recursively subdivides a cube into eight octants, enabling
O(n log n) approximate n-body force calculations. It is rebuilt from
scratch every step and is read-only while forces are being queried.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Tuple, Union

from ..config import DEFAULT_THETA, GRAVITATIONAL_CONSTANT, SimulationConfig
from ..validation import validate_non_negative, validate_positive
from ..vector import ZERO, Vector3

if TYPE_CHECKING:
    from ..body import Body

MAX_DEPTH = 48
"""Subdivision limit. Bodies meeting in a leaf at this depth share it."""


@dataclass(frozen=True)
class Empty:
    """Node state: holds nothing."""


@dataclass(frozen=True)
class Leaf:
    """
    Node state: holds a single body.

    ``coincident`` is only ever non-empty for leaves at MAX_DEPTH, where
    bodies too close to separate are kept together.
    """

    body: Body
    coincident: Tuple[Body, ...] = ()

    def members(self) -> Tuple[Body, ...]:
        return (self.body,) + self.coincident


@dataclass(frozen=True)
class Gate:
    """Node state: holds no body, routes to eight child octants."""

    children: Tuple[OctreeNode, ...]


NodeState = Union[Empty, Leaf, Gate]

EMPTY = Empty()


@dataclass(eq=False)
class OctreeNode:
    """
    A cubic region of the octree.

    Attributes:
        origin: Center of this cube
        dimensions: Edge length of this cube
        depth: Distance from the root (root = 0)
        state: Empty, Leaf or Gate
        total_mass: Total mass of bodies in this subtree
        center_of_mass: Mass-weighted mean position of bodies in this subtree

    Octant indices encode the sign of the offset from ``origin``:
    bit 0 is x >= origin.x, bit 1 is y >= origin.y, bit 2 is z >= origin.z.
    """

    origin: Vector3
    dimensions: float
    depth: int = 0
    state: NodeState = field(default=EMPTY)
    total_mass: float = 0.0
    center_of_mass: Vector3 = ZERO

    def is_empty(self) -> bool:
        return isinstance(self.state, Empty)

    def is_leaf(self) -> bool:
        return isinstance(self.state, Leaf)

    def is_gate(self) -> bool:
        return isinstance(self.state, Gate)

    def contains(self, point: Vector3) -> bool:
        """Check if a point lies within this cube (boundary inclusive)."""
        half = self.dimensions / 2
        return (
            abs(point.x - self.origin.x) <= half
            and abs(point.y - self.origin.y) <= half
            and abs(point.z - self.origin.z) <= half
        )

    def octant(self, point: Vector3) -> int:
        """
        Get octant index (0-7) for a point.

        Returns:
            (x >= ox) | (y >= oy) << 1 | (z >= oz) << 2
        """
        ox = 1 if point.x >= self.origin.x else 0
        oy = 1 if point.y >= self.origin.y else 0
        oz = 1 if point.z >= self.origin.z else 0
        return ox | (oy << 1) | (oz << 2)

    def split(self) -> Tuple[OctreeNode, ...]:
        """Create the eight empty child octants of this cube."""
        q = self.dimensions / 4
        half = self.dimensions / 2
        children = []
        for index in range(8):
            offset = Vector3(
                q if index & 1 else -q,
                q if index & 2 else -q,
                q if index & 4 else -q,
            )
            children.append(OctreeNode(self.origin + offset, half, self.depth + 1))
        return tuple(children)

    def add_mass(self, body: Body) -> None:
        """
        Fold a body into this node's mass and center of mass.

        center' = (center * M + position * m) / (M + m)
        """
        if self.total_mass == 0.0:
            self.center_of_mass = body.position
            self.total_mass = body.mass
            return

        m_old = self.total_mass
        m_new = body.mass
        total = m_old + m_new
        c = self.center_of_mass
        p = body.position
        self.center_of_mass = Vector3(
            (c.x * m_old + p.x * m_new) / total,
            (c.y * m_old + p.y * m_new) / total,
            (c.z * m_old + p.z * m_new) / total,
        )
        self.total_mass = total


class Octree:
    """
    Barnes-Hut octree over a cube centred on the origin.

    For distant clusters the algorithm treats the cluster as a single body
    at its center of mass, reducing the per-step cost from O(n^2) to
    O(n log n).

    Usage:
        tree = Octree(dimensions=600e9, theta=1.0)
        for body in bodies:
            tree.insert(body)

        for body in tree:
            tree.compute_force_on(body)

    The theta parameter controls the accuracy/speed tradeoff. A gate of
    edge length d at distance r is treated as a point mass when d < theta * r:
    - theta = 0: Exact calculation (no approximation)
    - theta = 1: Approximate when the cluster is farther than its own size
    - theta > 1: Faster, less accurate
    """

    def __init__(
        self,
        dimensions: float,
        theta: float = DEFAULT_THETA,
        gravitational_constant: float = GRAVITATIONAL_CONSTANT,
    ):
        """
        Initialize an empty octree.

        Args:
            dimensions: Edge length of the root cube
            theta: Barnes-Hut threshold (0 = exact, higher = more approximation)
            gravitational_constant: G used by compute_force_on

        Raises:
            InvalidConfigError: If dimensions or G is not positive or theta < 0
        """
        self._dimensions = validate_positive("dimensions", dimensions)
        self._theta = validate_non_negative("theta", theta)
        self._gravitational_constant = validate_positive(
            "gravitational_constant", gravitational_constant
        )
        self.root = OctreeNode(ZERO, self._dimensions)
        self.body_count = 0

    @property
    def dimensions(self) -> float:
        return self._dimensions

    @property
    def theta(self) -> float:
        return self._theta

    @property
    def gravitational_constant(self) -> float:
        return self._gravitational_constant

    def contains(self, point: Vector3) -> bool:
        """True if no coordinate's magnitude exceeds half the root edge length."""
        return self.root.contains(point)

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def insert(self, body: Body) -> bool:
        """
        Insert a body into the octree.

        Bodies outside the root cube are discarded without changing the tree.

        Returns:
            True if the body was inserted, False if it was out of bounds.
        """
        if not self.root.contains(body.position):
            return False
        self._insert_into(self.root, body)
        self.body_count += 1
        return True

    def _insert_into(self, node: OctreeNode, body: Body) -> None:
        """Recursively insert body into subtree rooted at node."""
        state = node.state

        if isinstance(state, Empty):
            node.state = Leaf(body)
        elif isinstance(state, Leaf):
            if node.depth >= MAX_DEPTH:
                node.state = Leaf(state.body, state.coincident + (body,))
            else:
                # Leaf with existing body - must subdivide
                children = node.split()
                node.state = Gate(children)
                existing = state.body
                self._insert_into(children[node.octant(existing.position)], existing)
                self._insert_into(children[node.octant(body.position)], body)
        else:
            self._insert_into(state.children[node.octant(body.position)], body)

        node.add_mass(body)

    # -------------------------------------------------------------------------
    # Force calculation
    # -------------------------------------------------------------------------

    def compute_force_on(self, body: Body) -> None:
        """
        Accumulate the approximate gravitational force on a body.

        Adds every contribution with ``body.add_force``; the caller resets the
        accumulator beforehand.
        """
        self._compute_force(self.root, body)

    def _compute_force(self, node: OctreeNode, body: Body) -> None:
        """Recursively add the force contribution from node."""
        if node.total_mass == 0.0:
            return

        g = self._gravitational_constant
        state = node.state

        if isinstance(state, Leaf):
            if state.coincident:
                for member in state.members():
                    if member is not body:
                        body.add_force(body.gravitational_force(member.mass, member.position, g))
            else:
                body.add_force(body.gravitational_force(node.total_mass, node.center_of_mass, g))
            return

        assert isinstance(state, Gate)

        # Barnes-Hut criterion: d / r < theta
        r = body.position.distance_to(node.origin)
        if node.dimensions < self._theta * r:
            body.add_force(body.gravitational_force(node.total_mass, node.center_of_mass, g))
            return

        # Node is too close - recurse into children
        for child in state.children:
            self._compute_force(child, body)

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def iterate(self) -> Iterator[Body]:
        """Lazily yield every body, depth first in octant order."""
        return self._iter_node(self.root)

    def _iter_node(self, node: OctreeNode) -> Iterator[Body]:
        state = node.state
        if isinstance(state, Leaf):
            yield from state.members()
        elif isinstance(state, Gate):
            for child in state.children:
                yield from self._iter_node(child)

    def __iter__(self) -> Iterator[Body]:
        return self.iterate()

    def __len__(self) -> int:
        return self.body_count

    # -------------------------------------------------------------------------
    # Construction helpers
    # -------------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: SimulationConfig) -> Octree:
        """Create an empty octree sized and tuned by a SimulationConfig."""
        return cls(
            config.dimensions,
            theta=config.theta,
            gravitational_constant=config.gravitational_constant,
        )

    @classmethod
    def from_bodies(
        cls,
        bodies: Iterable[Body],
        config: Optional[SimulationConfig] = None,
    ) -> Octree:
        """
        Build an octree from a collection of bodies.

        Args:
            bodies: Bodies to insert (out-of-bounds ones are dropped)
            config: Configuration; defaults to SimulationConfig()

        Returns:
            Octree with every in-bounds body inserted
        """
        if config is None:
            config = SimulationConfig()

        tree = cls.from_config(config)
        for body in bodies:
            tree.insert(body)
        return tree


__all__ = ["MAX_DEPTH", "Empty", "Leaf", "Gate", "NodeState", "OctreeNode", "Octree"]
