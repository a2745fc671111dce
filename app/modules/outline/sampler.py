# app/modules/outline/sampler.py
"""
Coarse silhouette sampling on the alpha channel.

This is a grid scan, not a contour walk: points come out column by column
(x outer, y inner), and features narrower than the grid step can be missed.
"""
from typing import List, Optional

import numpy as np
import structlog

from .config import settings
from .types import Point2D, RasterImage

log = structlog.get_logger(__name__)


def edge_mask(alpha: np.ndarray, threshold: int) -> np.ndarray:
    """
    Boolean mask of opaque pixels with at least one transparent 4-neighbour.

    Opaque means alpha > threshold. Neighbours outside the image are ignored,
    so the image border alone never makes a pixel an edge.
    """
    opaque = alpha > threshold
    transparent = ~opaque

    has_transparent_neighbour = np.zeros_like(opaque)
    has_transparent_neighbour[:, 1:] |= transparent[:, :-1]   # left
    has_transparent_neighbour[:, :-1] |= transparent[:, 1:]   # right
    has_transparent_neighbour[1:, :] |= transparent[:-1, :]   # top
    has_transparent_neighbour[:-1, :] |= transparent[1:, :]   # bottom

    return opaque & has_transparent_neighbour


def sample_edges(
    image: RasterImage,
    grid_step: Optional[int] = None,
    threshold: Optional[int] = None,
) -> List[Point2D]:
    """
    Emit boundary candidates on a `grid_step` lattice, in image-pixel space.

    Args:
        image: alpha source
        grid_step: sampling stride along both axes (default 5)
        threshold: opacity threshold in [0, 255] (default 128)

    Returns:
        Points in scan order. Empty when the image has no pixels.
    """
    step = settings.GRID_STEP if grid_step is None else grid_step
    threshold = settings.ALPHA_THRESHOLD if threshold is None else threshold
    if step < 1:
        raise ValueError(f"grid_step must be >= 1, got {step}")

    if not image.has_pixels():
        return []

    # The neighbour test runs on the full-resolution mask; only the
    # candidates are decimated.
    sampled = edge_mask(image.alpha, threshold)[::step, ::step]
    columns, rows = np.nonzero(sampled.T)

    points = [Point2D(float(c * step), float(r * step)) for c, r in zip(columns, rows)]
    log.debug("Edge sampling complete", size=image.size, step=step, points=len(points))
    return points
