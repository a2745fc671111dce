"""Test canvas placement and die-cut export rendering.

Tests for app.modules.canvas:
    - fit_to_canvas: width fit, height fallback, centring
    - dash_polygon: pattern phase carried across vertices, solid fallback
    - parse_background: presets, transparent, bad input
    - render_diecut: outline below image, background handling
    - encode_png: valid PNG payload
"""
import math
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from app.core.errors import InvalidRequestError
from app.modules.canvas import fit_to_canvas
from app.modules.canvas.process import encode_png, render_diecut
from app.modules.canvas.utils import dash_polygon, parse_background
from app.modules.outline import RasterImage, generate_outline


# ─── Placement ──────────────────────────────────────────────────────────────

def test_wide_image_fits_width():
    placement = fit_to_canvas((1000, 500), (800, 600), 0.8)
    assert placement.scaled_width == pytest.approx(640)
    assert placement.scaled_height == pytest.approx(320)
    assert (placement.center_x, placement.center_y) == (400, 300)


def test_tall_image_falls_back_to_height():
    placement = fit_to_canvas((500, 1000), (800, 600), 0.8)
    assert placement.scaled_height == pytest.approx(480)
    assert placement.scaled_width == pytest.approx(240)


def test_default_canvas_from_settings():
    placement = fit_to_canvas((100, 100))
    assert (placement.center_x, placement.center_y) == (400, 300)
    assert placement.scaled_width == pytest.approx(480)


def test_empty_image_cannot_be_placed():
    with pytest.raises(ValueError):
        fit_to_canvas((0, 10), (800, 600))


# ─── Dashes ─────────────────────────────────────────────────────────────────

SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]


def _length(segment):
    (ax, ay), (bx, by) = segment
    return math.hypot(bx - ax, by - ay)


def test_even_dashes_on_square():
    segments = dash_polygon(SQUARE, (5, 5))
    assert len(segments) == 4
    assert segments[0] == ((0.0, 0.0), (5.0, 0.0))
    assert segments[1] == ((10.0, 0.0), (10.0, 5.0))
    assert all(_length(s) == pytest.approx(5) for s in segments)


def test_pattern_phase_carries_across_vertices():
    segments = dash_polygon(SQUARE, (3, 3))
    # Edge 1: on 0-3, off 3-6, on 6-9, off 9-10; edge 2 resumes with 2 units off.
    assert segments[0] == ((0.0, 0.0), (3.0, 0.0))
    assert segments[1] == ((6.0, 0.0), (9.0, 0.0))
    (sx, sy), _ = segments[2]
    assert (sx, sy) == pytest.approx((10.0, 2.0))
    total_on = sum(_length(s) for s in segments)
    assert total_on == pytest.approx(21.0)  # seven 3-unit dashes over a 40-unit perimeter


def test_dash_wrapping_a_corner_splits():
    segments = dash_polygon(SQUARE, (12, 28))
    assert len(segments) == 2
    assert segments[0] == ((0.0, 0.0), (10.0, 0.0))
    assert segments[1][0] == (10.0, 0.0)
    assert segments[1][1] == pytest.approx((10.0, 2.0))


def test_solid_fallback():
    assert dash_polygon(SQUARE, ()) == [
        ((0.0, 0.0), (10.0, 0.0)),
        ((10.0, 0.0), (10.0, 10.0)),
        ((10.0, 10.0), (0.0, 10.0)),
        ((0.0, 10.0), (0.0, 0.0)),
    ]


def test_too_few_points_for_dashes():
    assert dash_polygon([(1.0, 1.0)], (5, 5)) == []


# ─── Background ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("value", [None, "", "transparent", "TRANSPARENT"])
def test_transparent_background(value):
    assert parse_background(value) is None


def test_hex_backgrounds():
    assert parse_background("#ffffff") == (255, 255, 255, 255)
    assert parse_background("#000000") == (0, 0, 0, 255)
    assert parse_background("#f2f2f2") == (242, 242, 242, 255)


def test_bad_background():
    with pytest.raises(InvalidRequestError, match="not-a-colour"):
        parse_background("not-a-colour")


# ─── Render ─────────────────────────────────────────────────────────────────

def _render(cutout, placement, background, with_outline=True):
    outline = generate_outline(RasterImage.from_pil(cutout), placement, 10) if with_outline else None
    return render_diecut(cutout, placement, outline, (100, 100), background), outline


def test_cutout_drawn_on_top(square_alpha_image, identity_placement):
    rendered, outline = _render(square_alpha_image, identity_placement, "#000000")
    assert outline is not None
    assert rendered.size == (100, 100)
    assert rendered.mode == "RGBA"
    assert rendered.getpixel((50, 50)) == (255, 0, 0, 255)


def test_outline_visible_outside_subject(square_alpha_image, identity_placement):
    with_outline, _ = _render(square_alpha_image, identity_placement, "#000000")
    without, _ = _render(square_alpha_image, identity_placement, "#000000", with_outline=False)

    band = np.array(with_outline)[15:86, 15:28, :3]
    assert band.max() > 200  # white dashes left of the square
    assert np.array(without)[15:86, 15:28, :3].max() == 0


def test_transparent_export_keeps_clear_corners(square_alpha_image, identity_placement):
    rendered, _ = _render(square_alpha_image, identity_placement, "transparent")
    assert rendered.getpixel((0, 0))[3] == 0


def test_solid_background_fills_canvas(square_alpha_image, identity_placement):
    rendered, _ = _render(square_alpha_image, identity_placement, "#cccccc")
    assert rendered.getpixel((0, 0)) == (204, 204, 204, 255)


def test_encode_png_roundtrips_size(square_alpha_image, identity_placement):
    rendered, _ = _render(square_alpha_image, identity_placement, "#ffffff")
    data = encode_png(rendered)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    assert Image.open(BytesIO(data)).size == (100, 100)
