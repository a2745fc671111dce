"""Test image-pixel -> canvas mapping (center-anchored placement)."""
import pytest

from app.modules.outline.mapper import to_canvas_space
from app.modules.outline.types import ImagePlacement, Point2D


def test_identity_placement(identity_placement):
    pts = [Point2D(0, 0), Point2D(30, 70), Point2D(100, 100)]
    out = to_canvas_space(pts, (100, 100), identity_placement)
    assert [(p.x, p.y) for p in out] == [pytest.approx((p.x, p.y)) for p in pts]


def test_scaled_and_centered():
    placement = ImagePlacement(center_x=400, center_y=300, scaled_width=400, scaled_height=200)
    out = to_canvas_space(
        [Point2D(0, 0), Point2D(200, 100), Point2D(100, 50)],
        (200, 100),
        placement,
    )
    assert out[0] == Point2D(200, 200)
    assert out[1] == Point2D(600, 400)
    assert out[2] == Point2D(400, 300)


def test_non_uniform_scale():
    placement = ImagePlacement(center_x=0, center_y=0, scaled_width=50, scaled_height=300)
    (p,) = to_canvas_space([Point2D(10, 10)], (100, 100), placement)
    assert p.x == pytest.approx(10 / 100 * 50 - 25)
    assert p.y == pytest.approx(10 / 100 * 300 - 150)


def test_placement_edges():
    placement = ImagePlacement(center_x=400, center_y=300, scaled_width=480, scaled_height=240)
    assert placement.left == 160
    assert placement.top == 180
