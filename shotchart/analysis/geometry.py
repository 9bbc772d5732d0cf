"""
shotchart/analysis/geometry.py — Containment tests for court region bounds.

A region boundary is either a polygon (ordered vertices, implicitly closed)
or a circle. Both live in the canvas pixel space of the shot chart, where
x grows to the right and y grows downwards.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence, Union

logger = logging.getLogger(__name__)

Point = tuple[float, float]


# ── Bounds types ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PolygonBounds:
    """
    A simple (non self-intersecting) polygon.

    Attributes:
        vertices: Ordered (x, y) pairs. The last vertex connects back to the first.
    """
    vertices: tuple[Point, ...]

    def scaled(self, sx: float, sy: float) -> "PolygonBounds":
        return PolygonBounds(tuple((x * sx, y * sy) for x, y in self.vertices))

    def centroid(self) -> Point:
        """Mean of the vertices; good enough for label placement."""
        if not self.vertices:
            return 0.0, 0.0
        n = len(self.vertices)
        return (sum(v[0] for v in self.vertices) / n,
                sum(v[1] for v in self.vertices) / n)


@dataclass(frozen=True)
class CircleBounds:
    center_x: float
    center_y: float
    radius: float

    def centroid(self) -> Point:
        return self.center_x, self.center_y


Bounds = Union[PolygonBounds, CircleBounds]


# ── Containment ───────────────────────────────────────────────────────────────

def point_in_polygon(point: Point, vertices: Sequence[Point]) -> bool:
    """
    Even-odd ray casting test.

    A horizontal ray is cast from `point` towards +x and every polygon edge
    (including the closing edge last → first) is checked for a crossing.
    An odd number of crossings means the point is inside.

    Points exactly on an edge may land on either side, but the answer is
    the same for the same input. Fewer than 3 vertices never contain anything.
    """
    n = len(vertices)
    if n < 3:
        return False

    px, py = point
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > py) != (yj > py):
            x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
            if px < x_cross:
                inside = not inside
        j = i
    return inside


def point_in_circle(point: Point, center: Point, radius: float) -> bool:
    """True if `point` is within `radius` of `center` (boundary inclusive)."""
    if radius < 0:
        return False
    return math.hypot(point[0] - center[0], point[1] - center[1]) <= radius


def bounds_contains(bounds: Bounds, x: float, y: float) -> bool:
    """Dispatch the containment test on the bounds type."""
    match bounds:
        case CircleBounds(center_x=cx, center_y=cy, radius=r):
            return point_in_circle((x, y), (cx, cy), r)
        case PolygonBounds(vertices=vertices):
            if len(vertices) < 3:
                logger.debug(f"Skipping polygon with {len(vertices)} vertices")
                return False
            return point_in_polygon((x, y), vertices)
        case _:
            logger.debug(f"Unknown bounds type {type(bounds).__name__}, treating as empty")
            return False
