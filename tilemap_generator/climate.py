# tilemap_generator/climate.py

"""
================================================================================
CLIMATE MODEL
================================================================================
This module combines three noise fields with geometric and atmospheric
corrections to produce height, temperature and precipitation for any world
coordinate.

Data Contract:
---------------
- Inputs (on initialization):
    - settings (GeneratorSettings): zoom, pan and map geometry.
    - height_field, temperature_field, humidity_field (NoiseField).
- Outputs (from methods):
    - ClimateSample(height, abs_elevation, temperature, precipitation).
      `sample` returns floats, `sample_grid` returns NumPy arrays.
- Side Effects: None.
- Invariants:
    - abs_elevation >= 0 and precipitation >= 0.
    - precipitation never exceeds precipitation_ceiling(temperature).
    - Temperature is refined in exactly two passes; it is never iterated.
================================================================================
"""

from typing import NamedTuple

import numpy as np

from . import config as DEFAULTS
from .noise import NoiseField
from .settings import GeneratorSettings


class TransformedCoordinate(NamedTuple):
    x: float
    y: float
    x_dis: float
    y_dis: float
    r_dis: float


class ClimateSample(NamedTuple):
    height: float
    abs_elevation: float
    temperature: float
    precipitation: float


def evaporation_probability(draft_temperature):
    """
    Triangular likelihood of evaporation, peaking at the reference temperature
    and reaching 0 at both edges of the evaporation band.
    """
    clamped = np.clip(draft_temperature, DEFAULTS.EVAPORATION_MIN_TEMP_C, DEFAULTS.EVAPORATION_MAX_TEMP_C)
    half_width = DEFAULTS.EVAPORATION_PEAK_TEMP_C - DEFAULTS.EVAPORATION_MIN_TEMP_C
    probability = 1.0 - np.abs((clamped - DEFAULTS.EVAPORATION_PEAK_TEMP_C) / half_width)
    return np.clip(probability, 0.0, 1.0)


def effective_lapse_rate(evap_probability):
    """Blends the wet and dry adiabatic rates by the evaporation probability."""
    return (
        (DEFAULTS.WET_ADIABATIC_LAPSE_RATE * evap_probability)
        + (DEFAULTS.DRY_ADIABATIC_LAPSE_RATE * (1.0 - evap_probability))
    ) / 2.0


def precipitation_ceiling(temperature):
    """
    The most precipitation air at the given temperature can deliver. Linear in
    temperature, with a slope/intercept break at the ceiling break point, and
    never negative.
    """
    low = DEFAULTS.PRECIPITATION_CEILING_SLOPE_LOW * temperature + DEFAULTS.PRECIPITATION_CEILING_INTERCEPT_LOW
    high = DEFAULTS.PRECIPITATION_CEILING_SLOPE_HIGH * temperature + DEFAULTS.PRECIPITATION_CEILING_INTERCEPT_HIGH
    ceiling = np.where(temperature > DEFAULTS.PRECIPITATION_CEILING_BREAK_C, high, low)
    return np.maximum(ceiling, 0.0)


def water_availability(abs_elevation, temperature, evap_probability):
    """
    1.0 at sea level. Inland, water is only available in the livable
    temperature band, falling off linearly with elevation up to the ceiling.
    """
    inland = evap_probability * (1.0 - abs_elevation / DEFAULTS.WATER_ELEVATION_CEILING_M)
    inland = np.where(abs_elevation < DEFAULTS.WATER_ELEVATION_CEILING_M, inland, 0.0)
    livable = (temperature > DEFAULTS.LIVABLE_MIN_TEMP_C) & (temperature < DEFAULTS.LIVABLE_MAX_TEMP_C)
    inland = np.where(livable, np.minimum(inland, DEFAULTS.MAX_INLAND_WATER_AVAILABILITY), 0.0)
    return np.where(abs_elevation == 0.0, 1.0, inland)


class ClimateModel:
    """
    Computes the climate at world coordinates for one generation episode.
    """
    def __init__(self, settings: GeneratorSettings, height_field: NoiseField,
                 temperature_field: NoiseField, humidity_field: NoiseField):
        self.settings = settings
        self.height_field = height_field
        self.temperature_field = temperature_field
        self.humidity_field = humidity_field

        self._half_extent = settings.half_map_extent
        self._zoom = settings.zoom

    def transform(self, world_x, world_y) -> TransformedCoordinate:
        """
        Applies zoom (divide) and pan (offset), then measures the distance from
        the globe centre as fractions of the zoomed half extent.
        """
        zoomed_extent = self._half_extent * self._zoom
        x = (world_x / self._zoom) + (zoomed_extent * self.settings.pan_x)
        y = (world_y / self._zoom) + (zoomed_extent * self.settings.pan_y)

        x_dis = x / zoomed_extent
        y_dis = y / zoomed_extent
        r_dis = np.sqrt(x_dis * x_dis + y_dis * y_dis) / np.sqrt(2.0)
        return TransformedCoordinate(x, y, x_dis, y_dis, r_dis)

    def get_heights(self, x, y, r_dis):
        """Returns (height, abs_elevation) in metres. Height < 0 is under water."""
        mirror = self.height_field.get(-x, -y)
        globe_noise = self.height_field.get(x, y) * (
            1.0 - (r_dis + DEFAULTS.GLOBE_FALLOFF_BIAS + DEFAULTS.GLOBE_MIRROR_NOISE_WEIGHT * mirror)
        )
        height = DEFAULTS.ELEVATION_RANGE_M * globe_noise - DEFAULTS.SEA_LEVEL_OFFSET_M
        return height, np.maximum(height, 0.0)

    def get_partial_temperature(self, x, y, y_dis, abs_elevation, lapse_rate):
        """Latitudinal term + noise term - altitude cooling at the given lapse rate."""
        noisy_temp = (
            DEFAULTS.TEMPERATURE_NOISE_RANGE_C * self.temperature_field.get(x, y)
            + DEFAULTS.TEMPERATURE_NOISE_OFFSET_C
        )
        return DEFAULTS.LATITUDE_GRADIENT_C * y_dis + noisy_temp - (lapse_rate * abs_elevation)

    def get_temperature(self, x, y, y_dis, abs_elevation):
        """
        Two-pass refinement. Returns (temperature, evaporation probability).

        The first pass uses the reference lapse rate to estimate how likely
        evaporation is; the second pass recomputes the temperature with the
        lapse rate that probability implies.
        """
        draft = self.get_partial_temperature(x, y, y_dis, abs_elevation, DEFAULTS.REFERENCE_LAPSE_RATE)
        evap = evaporation_probability(draft)
        temperature = self.get_partial_temperature(x, y, y_dis, abs_elevation, effective_lapse_rate(evap))
        return temperature, evap

    def get_precipitation(self, x, y, y_dis, abs_elevation, temperature, evap):
        water = water_availability(abs_elevation, temperature, evap)
        equator_term = np.clip(1.0 - np.abs(y_dis), 0.0, 1.0)
        humidity = (
            DEFAULTS.HUMIDITY_WATER_WEIGHT * water
            + DEFAULTS.HUMIDITY_EQUATOR_WEIGHT * equator_term
            + DEFAULTS.HUMIDITY_NOISE_WEIGHT * self.humidity_field.get(x, y)
        )
        raw = DEFAULTS.PRECIPITATION_SCALE_MM * humidity
        return np.minimum(raw, precipitation_ceiling(temperature))

    def _compute(self, world_x, world_y) -> ClimateSample:
        x, y, _, y_dis, r_dis = self.transform(world_x, world_y)
        height, abs_elevation = self.get_heights(x, y, r_dis)
        temperature, evap = self.get_temperature(x, y, y_dis, abs_elevation)
        precipitation = self.get_precipitation(x, y, y_dis, abs_elevation, temperature, evap)
        return ClimateSample(height, abs_elevation, temperature, precipitation)

    def sample(self, world_x: float, world_y: float) -> ClimateSample:
        """Climate at a single world coordinate."""
        result = self._compute(float(world_x), float(world_y))
        return ClimateSample(*(float(value) for value in result))

    def sample_grid(self, world_x: np.ndarray, world_y: np.ndarray) -> ClimateSample:
        """Climate for arrays of world coordinates (any broadcastable shape)."""
        xs, ys = np.broadcast_arrays(np.asarray(world_x, dtype=np.float64), np.asarray(world_y, dtype=np.float64))
        return self._compute(xs, ys)
