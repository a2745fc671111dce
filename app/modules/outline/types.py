# app/modules/outline/types.py
"""Value types shared by the outline stages."""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float


@dataclass(frozen=True)
class ImagePlacement:
    """Where a raster image is drawn on the host canvas (center-anchored)."""

    center_x: float
    center_y: float
    scaled_width: float
    scaled_height: float

    @property
    def left(self) -> float:
        return self.center_x - self.scaled_width / 2

    @property
    def top(self) -> float:
        return self.center_y - self.scaled_height / 2


class RasterImage:
    """
    Read-only view over the alpha channel of a decoded image.

    The array is borrowed for one outline computation; it is never written to.
    """

    def __init__(self, alpha: Optional[np.ndarray]):
        if alpha is not None:
            alpha = np.asarray(alpha, dtype=np.uint8)
            if alpha.ndim != 2:
                raise ValueError(f"Expected a 2-D alpha array, got shape {alpha.shape}")
        self._alpha = alpha

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterImage":
        """Wrap a Pillow image. Images without an alpha band are fully opaque."""
        if image.width == 0 or image.height == 0:
            return cls(np.zeros((image.height, image.width), dtype=np.uint8))

        if "A" in image.getbands():
            alpha = np.array(image.getchannel("A"))
        elif image.mode in ("P", "PA") and "transparency" in image.info:
            alpha = np.array(image.convert("RGBA").getchannel("A"))
        else:
            alpha = np.full((image.height, image.width), 255, dtype=np.uint8)
        return cls(alpha)

    @property
    def alpha(self) -> Optional[np.ndarray]:
        return self._alpha

    @property
    def width(self) -> int:
        return 0 if self._alpha is None else self._alpha.shape[1]

    @property
    def height(self) -> int:
        return 0 if self._alpha is None else self._alpha.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def has_pixels(self) -> bool:
        return self._alpha is not None and self.width > 0 and self.height > 0

    def alpha_at(self, x: int, y: int) -> int:
        return int(self._alpha[y, x])


@dataclass(frozen=True)
class OutlinePolygon:
    """Closed die-cut polygon in canvas space; the last point joins the first."""

    points: Tuple[Point2D, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point2D]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Point2D:
        return self.points[index]

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y)"""
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return min(xs), min(ys), max(xs), max(ys)

    def as_pairs(self) -> List[Tuple[float, float]]:
        return [(p.x, p.y) for p in self.points]

    @classmethod
    def from_points(cls, points: Sequence[Point2D]) -> "OutlinePolygon":
        return cls(tuple(points))
