
import math
from typing import List, Optional, Sequence, Tuple

from PIL import ImageColor

from app.core.errors import InvalidRequestError

Pair = Tuple[float, float]


def dash_polygon(points: Sequence[Pair], pattern: Sequence[float]) -> List[Tuple[Pair, Pair]]:
    """
    Split a closed polygon into the visible segments of a dash pattern.

    The pattern phase carries over from one edge to the next, so a dash can
    wrap around a vertex (it then comes back as two segments). An empty or
    non-positive pattern yields the solid edges.
    """
    if len(points) < 2:
        return []

    closed = list(points) + [points[0]]
    edges = list(zip(closed, closed[1:]))
    if not pattern or any(run <= 0 for run in pattern):
        return [(a, b) for a, b in edges if a != b]

    segments = []
    index = 0
    remaining = pattern[0]
    for (ax, ay), (bx, by) in edges:
        length = math.hypot(bx - ax, by - ay)
        if length == 0:
            continue

        pos = 0.0
        while length - pos > 1e-9:
            run = min(remaining, length - pos)
            if index % 2 == 0:
                t0 = pos / length
                t1 = (pos + run) / length
                segments.append((
                    (ax + (bx - ax) * t0, ay + (by - ay) * t0),
                    (ax + (bx - ax) * t1, ay + (by - ay) * t1),
                ))
            pos += run
            remaining -= run
            if remaining <= 1e-9:
                index = (index + 1) % len(pattern)
                remaining = pattern[index]
    return segments


def parse_background(value: Optional[str]) -> Optional[Tuple[int, int, int, int]]:
    """
    Resolve a CSS colour to RGBA. "transparent" (or nothing) means no fill.

    Raises:
        InvalidRequestError: if the colour cannot be parsed
    """
    if value is None or value.strip().lower() in ("", "transparent", "none"):
        return None
    try:
        rgb = ImageColor.getrgb(value.strip())
    except ValueError as e:
        raise InvalidRequestError(f"Unknown background colour: {value!r}") from e
    if len(rgb) == 3:
        return (*rgb, 255)
    return rgb
