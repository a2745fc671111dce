# app/modules/canvas/layout.py
from typing import Optional, Tuple

from app.config import settings as app_settings
from app.modules.outline.types import ImagePlacement


def fit_to_canvas(
    image_size: Tuple[int, int],
    canvas_size: Optional[Tuple[int, int]] = None,
    fill_ratio: Optional[float] = None,
) -> ImagePlacement:
    """
    Scale an image to fill `fill_ratio` of the canvas width, falling back to
    the height when the width fit would overflow, and center it.
    """
    width, height = image_size
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot place an image of size {image_size}")

    canvas_width, canvas_height = canvas_size or (app_settings.CANVAS_WIDTH, app_settings.CANVAS_HEIGHT)
    ratio = app_settings.CANVAS_FILL_RATIO if fill_ratio is None else fill_ratio

    scale = canvas_width * ratio / width
    if height * scale > canvas_height * ratio:
        scale = canvas_height * ratio / height

    return ImagePlacement(
        center_x=canvas_width / 2,
        center_y=canvas_height / 2,
        scaled_width=width * scale,
        scaled_height=height * scale,
    )
