# app/modules/outline/simplifier.py
import math
from typing import List, Optional, Sequence

from .config import settings
from .types import Point2D


def simplify(points: Sequence[Point2D], tolerance: Optional[float] = None) -> List[Point2D]:
    """
    Greedy single-pass decimation.

    The first point is always kept. Each later point is kept only when it lies
    more than `tolerance` away from the last *kept* point (not its raw
    predecessor). Order is preserved and the first/last pair is not compared.
    """
    tolerance = settings.SIMPLIFY_TOLERANCE if tolerance is None else tolerance
    if len(points) <= 2:
        return list(points)

    kept = [points[0]]
    for point in points[1:]:
        last = kept[-1]
        if math.hypot(point.x - last.x, point.y - last.y) > tolerance:
            kept.append(point)
    return kept
