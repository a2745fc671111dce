"""Test the value types shared by the outline stages."""
import numpy as np
import pytest
from PIL import Image

from app.modules.outline.types import OutlinePolygon, Point2D, RasterImage


def test_raster_from_rgba_reads_alpha(square_alpha_image):
    raster = RasterImage.from_pil(square_alpha_image)
    assert raster.size == (100, 100)
    assert raster.alpha_at(50, 50) == 255
    assert raster.alpha_at(0, 0) == 0


def test_raster_from_la_image():
    image = Image.new("LA", (4, 3), (200, 17))
    raster = RasterImage.from_pil(image)
    assert raster.size == (4, 3)
    assert raster.alpha_at(3, 2) == 17


def test_raster_from_palette_with_transparency():
    image = Image.new("P", (2, 2), 0)
    image.putpalette([0, 0, 0, 255, 255, 255])
    image.putpixel((1, 1), 1)
    image.info["transparency"] = 0
    raster = RasterImage.from_pil(image)
    assert raster.alpha_at(0, 0) == 0
    assert raster.alpha_at(1, 1) == 255


def test_raster_without_alpha_is_opaque():
    raster = RasterImage.from_pil(Image.new("RGB", (5, 5)))
    assert (raster.alpha == 255).all()


def test_raster_rejects_non_2d_arrays():
    with pytest.raises(ValueError):
        RasterImage(np.zeros((2, 2, 4), dtype=np.uint8))


def test_raster_without_pixels():
    assert not RasterImage(None).has_pixels()
    assert RasterImage(None).size == (0, 0)
    assert not RasterImage(np.zeros((0, 5), dtype=np.uint8)).has_pixels()


def test_outline_polygon_helpers():
    polygon = OutlinePolygon.from_points([Point2D(1, 2), Point2D(5, -1), Point2D(3, 4)])
    assert len(polygon) == 3
    assert polygon[1] == Point2D(5, -1)
    assert polygon.bounds() == (1, -1, 5, 4)
    assert polygon.as_pairs() == [(1, 2), (5, -1), (3, 4)]
    assert list(polygon) == list(polygon.points)
