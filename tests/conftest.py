"""Shared fixtures for the die-cut test suite.

Fixtures:
    - square_alpha_image(): 100x100 RGBA, opaque square on transparent ground
    - identity_placement(): placement whose canvas space equals image space
    - png_bytes(): encode helper
    - output_dir(): OUTPUT_DIR redirected to a tmp folder
"""
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from app.config import settings
from app.modules.outline.types import ImagePlacement


def make_square_cutout(size=100, start=30, stop=70, color=(255, 0, 0)):
    """RGBA image with an opaque square covering [start, stop) on both axes."""
    rgba = np.zeros((size, size, 4), dtype=np.uint8)
    rgba[start:stop, start:stop, :3] = color
    rgba[start:stop, start:stop, 3] = 255
    return Image.fromarray(rgba)


def encode(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = BytesIO()
    image.save(buffer, fmt)
    return buffer.getvalue()


@pytest.fixture
def square_alpha_image():
    # Edges on the sampling grid (x, y in {30, 70}) so all four sides are hit.
    return make_square_cutout(start=30, stop=71)


@pytest.fixture
def identity_placement():
    return ImagePlacement(center_x=50, center_y=50, scaled_width=100, scaled_height=100)


@pytest.fixture
def png_bytes():
    return encode


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "OUTPUT_DIR", str(tmp_path))
    monkeypatch.setattr(settings, "DEBUG_SAVE_IMAGES", False)
    return tmp_path
