"""
SVG export for simulation snapshots.

Draws the XY projection of the bodies inside the root cube, looking down
the z axis with the y axis pointing up.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable, Optional
from xml.sax.saxutils import escape

if TYPE_CHECKING:
    from ..body import Body


def to_svg(
    bodies: Iterable[Body],
    dimensions: float,
    *,
    size: float = 800.0,
    background: Optional[str] = "#000000",
    body_color: str = "#ffffff",
    min_radius: float = 0.5,
    radius_scale: float = 1.0,
    show_labels: bool = False,
    label_color: str = "#cccccc",
    font_size: float = 10.0,
    font_family: str = "sans-serif",
) -> str:
    """
    Export a snapshot of bodies to SVG format.

    The root cube [-dimensions/2, dimensions/2]^2 is mapped onto a square
    canvas of ``size`` pixels.

    Args:
        bodies: Bodies to draw (e.g. ``simulation.bodies``)
        dimensions: Edge length of the root cube
        size: Width and height of the SVG in pixels (default 800)
        background: Background color (None for transparent)
        body_color: Fill color for bodies without a ``color`` attribute
        min_radius: Smallest drawn radius in pixels
        radius_scale: Multiplier applied to log10 of the body's ``radius``
        show_labels: Whether to draw body names
        label_color: Color for labels
        font_size: Font size for labels
        font_family: Font family for labels

    Returns:
        SVG string representation of the snapshot
    """
    scale = size / dimensions
    half = dimensions / 2

    svg_parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{size:.1f}" height="{size:.1f}" '
        f'viewBox="0 0 {size:.1f} {size:.1f}">'
    ]

    if background:
        svg_parts.append(f'  <rect width="100%" height="100%" fill="{escape(background)}"/>')

    labels = []
    svg_parts.append('  <g class="bodies">')
    for body in bodies:
        cx = (body.position.x + half) * scale
        cy = (half - body.position.y) * scale
        r = _display_radius(body, min_radius, radius_scale)
        fill = str(getattr(body, "color", body_color))
        svg_parts.append(
            f'    <circle cx="{cx:.1f}" cy="{cy:.1f}" r="{r:.1f}" fill="{escape(fill)}"/>'
        )
        if show_labels:
            labels.append(
                f'    <text x="{cx:.1f}" y="{cy - r - 2:.1f}" '
                f'fill="{escape(label_color)}" font-size="{font_size}" '
                f'font-family="{escape(font_family)}" text-anchor="middle">'
                f"{escape(body.name)}</text>"
            )
    svg_parts.append("  </g>")

    if show_labels:
        svg_parts.append('  <g class="labels">')
        svg_parts.extend(labels)
        svg_parts.append("  </g>")

    svg_parts.append("</svg>")

    return "\n".join(svg_parts)


def _display_radius(body: Body, min_radius: float, radius_scale: float) -> float:
    """Smooth the wide range of physical radii with log10."""
    radius = getattr(body, "radius", None)
    if radius is None or radius <= 1:
        return min_radius
    return max(min_radius, radius_scale * math.log10(radius))


__all__ = ["to_svg"]
