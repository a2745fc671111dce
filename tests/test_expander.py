"""Test radial polygon expansion.

Tests for app.modules.outline.expander:
    - Centroid is the arithmetic mean
    - Regular polygon radius r -> r + amount
    - Point on the centroid stays put (no NaN)
    - Input sequence is not mutated
"""
import math

import pytest

from app.modules.outline.expander import centroid, expand
from app.modules.outline.types import Point2D


def _regular_polygon(n, r, cx=0.0, cy=0.0):
    return [
        Point2D(cx + r * math.cos(2 * math.pi * k / n), cy + r * math.sin(2 * math.pi * k / n))
        for k in range(n)
    ]


def test_centroid_is_mean():
    c = centroid([Point2D(0, 0), Point2D(4, 0), Point2D(4, 2)])
    assert c.x == pytest.approx(8 / 3)
    assert c.y == pytest.approx(2 / 3)


def test_centroid_of_empty_set_raises():
    with pytest.raises(ValueError):
        centroid([])


@pytest.mark.parametrize("n", [3, 5, 6, 12])
def test_regular_polygon_radius_grows_by_amount(n):
    out = expand(_regular_polygon(n, 20.0), 10.0)
    assert len(out) == n
    for p in out:
        assert math.hypot(p.x, p.y) == pytest.approx(30.0)


def test_expansion_keeps_direction_off_origin():
    pts = _regular_polygon(4, 5.0, cx=100.0, cy=-40.0)
    out = expand(pts, 2.5)
    for before, after in zip(pts, out):
        dx0, dy0 = before.x - 100.0, before.y + 40.0
        dx1, dy1 = after.x - 100.0, after.y + 40.0
        assert math.hypot(dx1, dy1) == pytest.approx(7.5)
        assert math.atan2(dy1, dx1) == pytest.approx(math.atan2(dy0, dx0))


def test_point_on_centroid_is_unchanged():
    pts = [Point2D(-1, -1), Point2D(1, -1), Point2D(0, 0), Point2D(1, 1), Point2D(-1, 1)]
    out = expand(pts, 10)
    assert out[2] == Point2D(0, 0)
    assert not any(math.isnan(p.x) or math.isnan(p.y) for p in out)


def test_input_not_mutated():
    pts = _regular_polygon(5, 3.0)
    snapshot = list(pts)
    expand(pts, 4.0)
    assert pts == snapshot


def test_empty_input():
    assert expand([], 10) == []
