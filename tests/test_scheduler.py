import pytest

from mandelbrot_explorer.scheduler import FULL, PREVIEW, RenderScheduler


def run_ticks(scheduler, count):
    return [scheduler.tick() for _ in range(count)]


def test_idle_scheduler_never_fires():
    scheduler = RenderScheduler(50)
    assert run_ticks(scheduler, 200) == [None] * 200


def test_one_preview_then_one_full_per_quiet_period():
    scheduler = RenderScheduler(50)
    scheduler.on_interaction()

    fired = run_ticks(scheduler, 50)

    assert fired.count(PREVIEW) == 1
    assert fired.count(FULL) == 1
    # Countdown values after each tick are 49..0
    assert fired.index(PREVIEW) == 4
    assert fired.index(FULL) == 49
    assert run_ticks(scheduler, 100) == [None] * 100


@pytest.mark.parametrize("wait", [6, 10, 50, 120])
def test_fire_points_follow_wait_length(wait):
    scheduler = RenderScheduler(wait)
    scheduler.on_interaction()

    fired = run_ticks(scheduler, wait)

    assert [i for i, f in enumerate(fired) if f] == [4, wait - 1]


def test_interaction_preempts_pending_renders():
    scheduler = RenderScheduler(50)
    scheduler.on_interaction()
    run_ticks(scheduler, 3)

    scheduler.on_interaction()
    fired = run_ticks(scheduler, 50)

    assert fired.index(PREVIEW) == 4
    assert fired.count(PREVIEW) == 1


def test_continuous_interaction_suppresses_rendering():
    scheduler = RenderScheduler(50)
    for _ in range(500):
        scheduler.on_interaction()
        assert scheduler.tick() is None


def test_interaction_after_preview_skips_full_render():
    scheduler = RenderScheduler(50)
    scheduler.on_interaction()
    fired = run_ticks(scheduler, 20)
    assert fired.count(PREVIEW) == 1

    scheduler.on_interaction()
    fired = run_ticks(scheduler, 4)
    assert fired == [None] * 4


def test_fire_next_tick_renders_full_immediately():
    scheduler = RenderScheduler(50)
    scheduler.fire_next_tick()

    assert scheduler.tick() == FULL
    assert scheduler.tick() is None


def test_settling_window():
    scheduler = RenderScheduler(50)
    assert not scheduler.is_settling()

    scheduler.on_interaction()
    settling = []
    for _ in range(10):
        scheduler.tick()
        settling.append(scheduler.is_settling())

    # Settling through the preview tick (countdown 45), then settled
    assert settling == [True] * 5 + [False] * 5
