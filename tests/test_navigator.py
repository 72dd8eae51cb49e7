import pytest

from mandelbrot_explorer.camera import CameraRect, ViewportController
from mandelbrot_explorer.navigator import CATALOG, PointOfInterest, TargetNavigator
from mandelbrot_explorer.plane import HOME_VIEW, ViewRectangle
from mandelbrot_explorer.scheduler import RenderScheduler

SIZE = 512


@pytest.fixture
def parts():
    return TargetNavigator(SIZE), ViewportController(SIZE), RenderScheduler(50)


def view_at(point, width=None):
    """A view centered on the point at its implied zoom."""
    width = width or point.width
    return ViewRectangle(
        point.a - width / 2, point.a + width / 2,
        point.b + width / 2, point.b - width / 2,
    )


def test_point_width_follows_zoom():
    assert PointOfInterest(0, 0, 2, 100).width == pytest.approx(0.01)
    assert CATALOG['reset'].width == pytest.approx(10 ** 0.5)


def test_catalog_keeps_reset_entry():
    assert 'reset' in CATALOG
    assert CATALOG['seahorse'].suggested_iterations == 1000


def test_step_without_target_is_noop(parts):
    navigator, viewport, scheduler = parts

    assert navigator.step(HOME_VIEW, viewport, scheduler) is False
    assert viewport.target == CameraRect.neutral(SIZE)
    assert scheduler.countdown == 0


def test_far_target_steers_camera_with_capped_zoom(parts):
    navigator, viewport, scheduler = parts
    navigator.activate(CATALOG['seahorse'])

    arrived = navigator.step(HOME_VIEW, viewport, scheduler)

    assert arrived is False
    assert navigator.active
    # Huge zoom-in request gets capped at 1.5x the display
    assert viewport.target.w == pytest.approx(SIZE * 1.5)
    assert viewport.target.h == viewport.target.w
    # Seahorse is below the home center, so the frame moves up
    assert viewport.target.y < SIZE / 2
    # Countdown restarts at the full wait
    assert scheduler.countdown == 50


def test_zoom_out_target_is_capped_at_half_size(parts):
    navigator, viewport, scheduler = parts
    navigator.activate(PointOfInterest(-0.75, 0.0, -3, 100))

    navigator.step(HOME_VIEW, viewport, scheduler)

    assert viewport.target.w == pytest.approx(SIZE / 2)


def test_offsets_are_in_display_pixels():
    navigator = TargetNavigator(SIZE)
    navigator.activate(PointOfInterest(-0.75 + 0.31, -0.3, 0, 100))

    dx, dy, dw = navigator.offsets(HOME_VIEW)

    assert dx == pytest.approx(0.31 / 3.1 * SIZE)
    # b runs downward in HOME_VIEW, so a lower b is further down the screen
    assert dy == pytest.approx(0.3 / 3.0 * SIZE)
    assert dw == pytest.approx((1 - 3.1) / 3.1 * SIZE)


def test_arrival_clears_target_and_requests_full_render(parts):
    navigator, viewport, scheduler = parts
    point = CATALOG['starfish']
    navigator.activate(point)
    viewport.set_target(100, 100, 700)

    arrived = navigator.step(view_at(point), viewport, scheduler)

    assert arrived is True
    assert not navigator.active
    assert scheduler.countdown == 1
    assert viewport.current == CameraRect.neutral(SIZE)
    assert viewport.target == CameraRect.neutral(SIZE)


def test_arrival_within_tolerance(parts):
    navigator, viewport, scheduler = parts
    point = CATALOG['sun']
    navigator.activate(point)

    # 4px off in position and 8px off in width still counts as there
    width = point.width * (1 + 8 / SIZE)
    shifted = PointOfInterest(point.a + 4 / SIZE * width, point.b, point.zoom_log10, 100)

    assert navigator.step(view_at(shifted, width), viewport, scheduler) is True


def test_arrival_is_idempotent(parts):
    navigator, viewport, scheduler = parts
    point = CATALOG['tree']
    navigator.activate(point)
    view = view_at(point)
    assert navigator.step(view, viewport, scheduler) is True

    viewport.set_target(10, 10, 300)
    scheduler.countdown = 17
    assert navigator.step(view, viewport, scheduler) is False

    assert viewport.target.x == 10
    assert scheduler.countdown == 17
