import pytest

from mandelbrot_explorer.colormaps import (
    COLOR_SCHEMES,
    ColorScheme,
    HueDrift,
    get_scheme,
    list_scheme_names,
    scheme_name,
    scheme_preview,
)


def test_registry_covers_every_scheme():
    assert set(COLOR_SCHEMES.values()) == set(ColorScheme)
    assert list_scheme_names() == list(COLOR_SCHEMES)


def test_get_scheme_and_name_round_trip():
    for name in list_scheme_names():
        assert scheme_name(get_scheme(name)) == name


def test_unknown_scheme_raises_key_error():
    with pytest.raises(KeyError):
        get_scheme('psychedelic')


def test_only_hue_animated_is_animated():
    assert [s for s in ColorScheme if s.animated] == [ColorScheme.HUE_ROTATE_ANIMATED]


def test_hue_drift_advances_and_wraps():
    drift = HueDrift(step=0.3, offset=0.8)

    assert drift.advance() == pytest.approx(0.1)
    assert drift.advance() == pytest.approx(0.4)
    assert 0 <= drift.offset < 1


def test_hue_drift_starts_in_range():
    assert HueDrift(offset=2.25).offset == pytest.approx(0.25)


def test_preview_strip_ends_with_bounded_color():
    strip = scheme_preview(ColorScheme.GRAYSCALE_CLIPPED, 64)

    assert strip.shape == (64, 3)
    assert tuple(strip[-1]) == (0, 0, 0)
    assert strip[-2, 0] > strip[0, 0]


def test_grayscale_preview_ends_bright():
    strip = scheme_preview(ColorScheme.GRAYSCALE, 32)
    assert tuple(strip[-1]) == (255, 255, 255)
