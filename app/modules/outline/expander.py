# app/modules/outline/expander.py
"""
Radial polygon expansion.

Every vertex is pushed away from the centroid by the same distance. This is
not a true offset curve: concave regions move outward along the centroid ray
rather than along their local normal.
"""
import math
from typing import List, Sequence

from .types import Point2D


def centroid(points: Sequence[Point2D]) -> Point2D:
    """Arithmetic mean of the points."""
    if not points:
        raise ValueError("centroid of an empty point set is undefined")
    n = len(points)
    return Point2D(sum(p.x for p in points) / n, sum(p.y for p in points) / n)


def expand(points: Sequence[Point2D], amount: float) -> List[Point2D]:
    """Return a new point list with each point moved `amount` further from the centroid."""
    if not points:
        return []

    center = centroid(points)
    expanded = []
    for p in points:
        dx = p.x - center.x
        dy = p.y - center.y
        distance = math.sqrt(dx * dx + dy * dy)

        # No outward direction for a point sitting on the centroid.
        if distance == 0:
            expanded.append(p)
            continue

        scale = (distance + amount) / distance
        expanded.append(Point2D(center.x + dx * scale, center.y + dy * scale))
    return expanded
