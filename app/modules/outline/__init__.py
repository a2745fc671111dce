# app/modules/outline/__init__.py
"""Die-cut outline generation from an alpha channel."""
from .config import settings
from .expander import centroid, expand
from .mapper import to_canvas_space
from .process import generate_outline
from .sampler import edge_mask, sample_edges
from .simplifier import simplify
from .types import ImagePlacement, OutlinePolygon, Point2D, RasterImage

__all__ = [
    "settings",
    "generate_outline",
    "sample_edges",
    "edge_mask",
    "to_canvas_space",
    "simplify",
    "expand",
    "centroid",
    "ImagePlacement",
    "OutlinePolygon",
    "Point2D",
    "RasterImage",
]
