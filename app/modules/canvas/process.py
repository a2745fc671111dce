# app/modules/canvas/process.py

from io import BytesIO
from typing import Optional, Tuple

import structlog
from PIL import Image, ImageDraw, ImageFilter

from app.modules.outline.types import ImagePlacement, OutlinePolygon
from .config import settings
from .utils import dash_polygon, parse_background

log = structlog.get_logger(__name__)


def _draw_dashes(size: Tuple[int, int], outline: OutlinePolygon, color, width: int,
                 offset: Tuple[int, int] = (0, 0)) -> Image.Image:
    layer = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    dx, dy = offset
    for (ax, ay), (bx, by) in dash_polygon(outline.as_pairs(), settings.DASH_PATTERN):
        draw.line([(ax + dx, ay + dy), (bx + dx, by + dy)], fill=tuple(color), width=width)
    return layer


def render_diecut(
    image: Image.Image,
    placement: ImagePlacement,
    outline: Optional[OutlinePolygon],
    canvas_size: Tuple[int, int],
    background: Optional[str] = None,
) -> Image.Image:
    """
    Composite the export: background, outline shadow, dashed outline, cut-out.

    The outline always sits below the image layer. Without an outline the
    cut-out is exported on its own.
    """
    log.info("Canvas: Rendering die-cut export",
             canvas_size=canvas_size,
             has_outline=outline is not None,
             background=background)

    fill = parse_background(background)
    canvas = Image.new("RGBA", canvas_size, fill or (0, 0, 0, 0))

    if outline is not None and len(outline) > 1:
        shadow = _draw_dashes(canvas_size, outline, settings.SHADOW_COLOR,
                              settings.STROKE_WIDTH, settings.SHADOW_OFFSET)
        if settings.SHADOW_BLUR > 0:
            shadow = shadow.filter(ImageFilter.GaussianBlur(radius=settings.SHADOW_BLUR / 2))
        canvas = Image.alpha_composite(canvas, shadow)

        stroke = _draw_dashes(canvas_size, outline, settings.STROKE_COLOR, settings.STROKE_WIDTH)
        canvas = Image.alpha_composite(canvas, stroke)

    target_size = (max(1, round(placement.scaled_width)), max(1, round(placement.scaled_height)))
    cutout = image.convert("RGBA").resize(target_size, Image.LANCZOS)

    image_layer = Image.new("RGBA", canvas_size, (0, 0, 0, 0))
    image_layer.paste(cutout, (round(placement.left), round(placement.top)), cutout)
    canvas = Image.alpha_composite(canvas, image_layer)

    log.info("Canvas: Render complete", size=canvas.size)
    return canvas


def encode_png(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, "PNG")
    return buffer.getvalue()
