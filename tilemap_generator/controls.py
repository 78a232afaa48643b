# tilemap_generator/controls.py

"""
Configuration transitions a harness maps its input events to. Each function
takes a settings snapshot and returns a new one; nothing is mutated. The
harness compares the old and new snapshot to decide whether the whole map
must be regenerated.
"""

import random

from . import config as DEFAULTS
from .settings import GeneratorSettings


def _step_zoom(zoom: float, step: float) -> float:
    # Rounded so repeated steps stay on the step grid instead of drifting.
    return round(zoom + step, 10)


def zoom_in(settings: GeneratorSettings) -> GeneratorSettings:
    return settings.replace(zoom=_step_zoom(settings.zoom, DEFAULTS.ZOOM_STEP))


def zoom_out(settings: GeneratorSettings) -> GeneratorSettings:
    """Steps the zoom down, stopping at the floor."""
    if settings.zoom <= DEFAULTS.MIN_ZOOM:
        return settings
    zoom = max(_step_zoom(settings.zoom, -DEFAULTS.ZOOM_STEP), DEFAULTS.MIN_ZOOM)
    return settings.replace(zoom=zoom)


def _pan_axis(value: float, direction: int, zoom: float) -> float:
    # Soft clamp: a step is allowed while the current value is inside the
    # limit, so the result may overshoot it by less than one step.
    step = DEFAULTS.PAN_STEP / zoom
    if direction < 0 and value > -DEFAULTS.PAN_SOFT_LIMIT:
        return value - step
    if direction > 0 and value < DEFAULTS.PAN_SOFT_LIMIT:
        return value + step
    return value


def pan(settings: GeneratorSettings, dx: int, dy: int) -> GeneratorSettings:
    """
    Pans by one step per axis in the sign direction of dx and dy. Steps shrink
    as the zoom grows so a key press moves the same distance on screen.
    """
    pan_x = _pan_axis(settings.pan_x, dx, settings.zoom)
    pan_y = _pan_axis(settings.pan_y, dy, settings.zoom)
    if (pan_x, pan_y) == (settings.pan_x, settings.pan_y):
        return settings
    return settings.replace(pan_x=pan_x, pan_y=pan_y)


def reseed(settings: GeneratorSettings, rng: random.Random = None) -> GeneratorSettings:
    rng = rng or random.Random()
    return settings.replace(seed=rng.randrange(DEFAULTS.RESEED_UPPER_BOUND))


def needs_regeneration(previous: GeneratorSettings, current: GeneratorSettings) -> bool:
    """True when the map must be rebuilt from scratch."""
    return previous != current
