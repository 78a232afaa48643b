import random

import pytest

from tilemap_generator import GeneratorSettings
from tilemap_generator import controls


def test_zoom_in_steps_up():
    assert controls.zoom_in(GeneratorSettings(zoom=1.0)).zoom == pytest.approx(1.1)


def test_zoom_out_steps_down_until_the_floor():
    assert controls.zoom_out(GeneratorSettings(zoom=1.0)).zoom == pytest.approx(0.9)
    floor = GeneratorSettings(zoom=0.2)
    assert controls.zoom_out(floor) is floor


def test_zoom_out_from_defaults_stops_at_the_floor():
    settings = GeneratorSettings()
    for _ in range(20):
        settings = controls.zoom_out(settings)
        assert settings.zoom >= 0.2
    assert settings.zoom == 0.2
    assert controls.zoom_out(settings) is settings


def test_zoom_steps_do_not_drift():
    settings = GeneratorSettings()
    for _ in range(7):
        settings = controls.zoom_in(settings)
    for _ in range(7):
        settings = controls.zoom_out(settings)
    assert settings == GeneratorSettings()


def test_zoom_out_below_the_floor_is_left_alone():
    settings = GeneratorSettings(zoom=0.15)
    assert controls.zoom_out(settings) is settings


def test_zoom_out_never_reaches_zero():
    settings = GeneratorSettings(zoom=0.25)
    for _ in range(10):
        settings = controls.zoom_out(settings)
    assert settings.zoom > 0.0


def test_pan_step_shrinks_with_zoom():
    assert controls.pan(GeneratorSettings(zoom=1.0), 1, 0).pan_x == pytest.approx(0.1)
    assert controls.pan(GeneratorSettings(zoom=2.0), 0, -1).pan_y == pytest.approx(-0.05)


def test_pan_is_soft_clamped():
    at_limit = GeneratorSettings(pan_x=0.9, pan_y=-0.9)
    assert controls.pan(at_limit, 1, -1) is at_limit

    # A step from inside the limit may overshoot it.
    near = controls.pan(GeneratorSettings(pan_x=0.85), 1, 0)
    assert near.pan_x == pytest.approx(0.95)
    assert controls.pan(near, 1, 0) is near

    # Moving back is always allowed.
    assert controls.pan(at_limit, -1, 1).pan_x == pytest.approx(0.8)


def test_reseed_is_bounded_and_driven_by_rng():
    settings = GeneratorSettings()
    a = controls.reseed(settings, random.Random(3))
    b = controls.reseed(settings, random.Random(3))
    assert a == b
    assert 0 <= a.seed < 99999


def test_needs_regeneration_is_an_equality_check():
    settings = GeneratorSettings()
    assert not controls.needs_regeneration(settings, GeneratorSettings())
    assert controls.needs_regeneration(settings, controls.zoom_in(settings))
    assert controls.needs_regeneration(settings, controls.pan(settings, 1, 0))
    assert not controls.needs_regeneration(settings, controls.pan(settings, 0, 0))
