# app/modules/outline/process.py
"""
Die-cut outline generation.

Stages run strictly in order and any stage that comes up short ends the run
with no outline:

    sample (image px) -> map (canvas) -> simplify (canvas) -> expand (canvas)
"""
from typing import Optional

import structlog

from .config import settings
from .expander import expand
from .mapper import to_canvas_space
from .sampler import sample_edges
from .simplifier import simplify
from .types import ImagePlacement, OutlinePolygon, RasterImage

log = structlog.get_logger(__name__)


def generate_outline(
    image: RasterImage,
    placement: ImagePlacement,
    bleed: float,
    *,
    grid_step: Optional[int] = None,
    tolerance: Optional[float] = None,
    threshold: Optional[int] = None,
) -> Optional[OutlinePolygon]:
    """
    Build the die-cut polygon for a background-removed image.

    Args:
        image: alpha channel of the cut-out
        placement: where the image sits on the host canvas
        bleed: outward offset of the outline, in canvas units

    Returns:
        The outline in canvas coordinates, or None when the image is empty or
        does not yield enough boundary points for a polygon.
    """
    if image is None or not image.has_pixels():
        log.warning("Outline skipped: image has no decoded pixel data")
        return None

    edge_points = sample_edges(image, grid_step=grid_step, threshold=threshold)
    if len(edge_points) < settings.MIN_POINTS:
        log.warning("No outline: too few boundary points after sampling",
                    points=len(edge_points), required=settings.MIN_POINTS)
        return None

    canvas_points = to_canvas_space(edge_points, image.size, placement)
    simplified = simplify(canvas_points, tolerance)
    if len(simplified) < settings.MIN_POINTS:
        log.warning("No outline: too few boundary points after simplification",
                    points=len(simplified), required=settings.MIN_POINTS)
        return None

    outline = OutlinePolygon.from_points(expand(simplified, bleed))
    log.info("Outline generated",
             sampled=len(edge_points),
             vertices=len(outline),
             bleed=bleed)
    return outline
