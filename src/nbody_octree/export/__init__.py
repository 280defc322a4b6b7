"""
Export functionality for simulation snapshots.

Example usage:
    from nbody_octree import Simulation
    from nbody_octree.export import to_svg

    sim = Simulation(bodies, config=config).run(steps=10)

    svg_content = to_svg(sim.bodies, config.dimensions)
    with open("snapshot.svg", "w") as f:
        f.write(svg_content)
"""

from .svg import to_svg

__all__ = ["to_svg"]
