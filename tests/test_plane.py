import math

import pytest

from mandelbrot_explorer.camera import CameraRect
from mandelbrot_explorer.plane import (
    HOME_VIEW,
    ViewRectangle,
    pixel_to_complex,
    recompute_bounds,
    to_pixel,
    to_plane,
)


def assert_view_close(view, expected):
    assert view.min_a == pytest.approx(expected[0])
    assert view.max_a == pytest.approx(expected[1])
    assert view.min_b == pytest.approx(expected[2])
    assert view.max_b == pytest.approx(expected[3])


def test_display_corners_map_to_home_view_corners():
    assert pixel_to_complex(HOME_VIEW, 0, 0, 512) == pytest.approx((-2.3, 1.5))
    assert pixel_to_complex(HOME_VIEW, 512, 512, 512) == pytest.approx((0.8, -1.5))


def test_to_plane_is_affine():
    assert to_plane(0, (0, 512), (-2.3, 0.8)) == -2.3
    assert to_plane(256, (0, 512), (-2.0, 2.0)) == 0.0
    assert to_plane(3, (1, 5), (10, 20)) == 15.0


@pytest.mark.parametrize("pixel", [0, 1, 17.5, 255, 511, 512, -40, 900])
def test_to_pixel_inverts_to_plane(pixel):
    pixel_range = (0, 512)
    plane_range = (1.5, -1.5)

    value = to_plane(pixel, pixel_range, plane_range)
    assert to_pixel(value, plane_range, pixel_range) == pytest.approx(pixel, abs=1e-9)


def test_neutral_camera_keeps_bounds():
    view = recompute_bounds(HOME_VIEW, CameraRect.neutral(512), 512)
    assert_view_close(view, (-2.3, 0.8, 1.5, -1.5))


def test_enlarged_camera_zooms_in_about_center():
    view = recompute_bounds(HOME_VIEW, CameraRect(256, 256, 1024, 1024), 512)

    # Half the width and height, same center
    assert_view_close(view, (-1.525, 0.025, 0.75, -0.75))


def test_shrunken_camera_zooms_out_about_center():
    view = recompute_bounds(HOME_VIEW, CameraRect(256, 256, 256, 256), 512)

    assert view.width == pytest.approx(6.2)
    assert view.center() == pytest.approx((-0.75, 0.0))


def test_frame_dragged_right_shows_more_of_the_left():
    view = recompute_bounds(HOME_VIEW, CameraRect(256 + 128, 256, 512, 512), 512)

    shift = 128 / 512 * 3.1
    assert_view_close(view, (-2.3 - shift, 0.8 - shift, 1.5, -1.5))


def test_frame_dragged_down_shows_more_of_the_top():
    view = recompute_bounds(HOME_VIEW, CameraRect(256, 256 + 64, 512, 512), 512)

    # Rows grow downward and b decreases downward, so b goes up
    assert view.center()[1] == pytest.approx(64 / 512 * 3.0)


def test_view_status_values():
    a, b = HOME_VIEW.center()

    assert a == pytest.approx(-0.75)
    assert b == pytest.approx(0.0)
    assert HOME_VIEW.zoom_log10() == pytest.approx(math.log10(1 / 3.1))


@pytest.mark.parametrize("bounds", [
    (1.0, 1.0, 0.0, 1.0),
    (1.0, -1.0, 0.0, 1.0),
    (-1.0, 1.0, 0.5, 0.5),
    (-1.0, float("inf"), 0.0, 1.0),
    (-1.0, 1.0, float("nan"), 1.0),
])
def test_invalid_view_rectangles_are_rejected(bounds):
    with pytest.raises(ValueError):
        ViewRectangle(*bounds)
