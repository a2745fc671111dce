# app/modules/outline/mapper.py
from typing import List, Sequence, Tuple

from .types import ImagePlacement, Point2D


def to_canvas_space(
    points: Sequence[Point2D],
    image_size: Tuple[int, int],
    placement: ImagePlacement,
) -> List[Point2D]:
    """
    Map image-pixel points onto the host canvas.

    The image is assumed to be anchored at its center, which is how the
    canvas layer places cut-outs. A different anchor needs a different offset.
    """
    image_width, image_height = image_size
    offset_x = placement.center_x - placement.scaled_width / 2
    offset_y = placement.center_y - placement.scaled_height / 2

    # Multiply before dividing so an unscaled placement maps pixels exactly.
    return [
        Point2D(
            p.x * placement.scaled_width / image_width + offset_x,
            p.y * placement.scaled_height / image_height + offset_y,
        )
        for p in points
    ]
