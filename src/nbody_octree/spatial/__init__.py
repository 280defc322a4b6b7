"""
Spatial data structures for efficient force calculations.

Provides the octree used for Barnes-Hut O(n log n) gravity approximation.
"""

from .octree import MAX_DEPTH, Empty, Gate, Leaf, NodeState, Octree, OctreeNode

__all__ = ["MAX_DEPTH", "Empty", "Gate", "Leaf", "NodeState", "Octree", "OctreeNode"]
