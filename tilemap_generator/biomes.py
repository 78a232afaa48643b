# tilemap_generator/biomes.py

"""
================================================================================
BIOME CLASSIFICATION & TILE COLOURS
================================================================================
This module maps a (height, temperature, precipitation) triple to one of 32
biomes and turns a biome into a tile descriptor (sprite index + RGB colour).

The thresholds live in data tables rather than branches:
    - Temperature picks one of six latitudinal bands.
    - Precipitation picks a sub-band inside it; warmer bands have more.
    - Biome IDs of a band are contiguous, so ID = band offset + sub-band.

It is designed to be a pure, stateless utility with no dependencies on Pygame,
so the same tables serve single-tile queries and whole-map NumPy batches.
================================================================================
"""

import bisect
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional

import numpy as np

from . import config as DEFAULTS

RGB = tuple[float, float, float]


class Biome(IntEnum):
    OCEAN = 0

    POLAR_DESERT = 1

    SUBPOLAR_DRY_TUNDRA = 2
    SUBPOLAR_MOIST_TUNDRA = 3
    SUBPOLAR_WET_TUNDRA = 4
    SUBPOLAR_RAIN_TUNDRA = 5

    BOREAL_DESERT = 6
    BOREAL_DRY_SCRUB = 7
    BOREAL_MOIST_FOREST = 8
    BOREAL_WET_FOREST = 9
    BOREAL_RAIN_FOREST = 10

    TEMPERATE_DESERT = 11
    TEMPERATE_DESERT_SCRUB = 12
    TEMPERATE_STEPPE = 13
    TEMPERATE_MOIST_FOREST = 14
    TEMPERATE_WET_FOREST = 15
    TEMPERATE_RAIN_FOREST = 16

    SUBTROPICAL_DESERT = 17
    SUBTROPICAL_DESERT_SCRUB = 18
    SUBTROPICAL_THORN_STEPPE = 19
    SUBTROPICAL_DRY_FOREST = 20
    SUBTROPICAL_MOIST_FOREST = 21
    SUBTROPICAL_WET_FOREST = 22
    SUBTROPICAL_RAIN_FOREST = 23

    TROPICAL_DESERT = 24
    TROPICAL_DESERT_SCRUB = 25
    TROPICAL_THORN_WOODLAND = 26
    TROPICAL_VERY_DRY_FOREST = 27
    TROPICAL_DRY_FOREST = 28
    TROPICAL_MOIST_FOREST = 29
    TROPICAL_WET_FOREST = 30
    TROPICAL_RAIN_FOREST = 31


class LatitudinalBand(NamedTuple):
    name: str
    # Inclusive upper temperature bound; None for the open-ended last band.
    max_temperature: Optional[float]
    biomes: tuple


# --- Band Table (Rule 1) ---
# Ordered coldest to warmest. Each band lists its biomes from driest to wettest.
LATITUDINAL_BANDS = (
    LatitudinalBand("polar", DEFAULTS.TEMPERATURE_BAND_LIMITS_C[0], (
        Biome.POLAR_DESERT,
    )),
    LatitudinalBand("subpolar", DEFAULTS.TEMPERATURE_BAND_LIMITS_C[1], (
        Biome.SUBPOLAR_DRY_TUNDRA,
        Biome.SUBPOLAR_MOIST_TUNDRA,
        Biome.SUBPOLAR_WET_TUNDRA,
        Biome.SUBPOLAR_RAIN_TUNDRA,
    )),
    LatitudinalBand("boreal", DEFAULTS.TEMPERATURE_BAND_LIMITS_C[2], (
        Biome.BOREAL_DESERT,
        Biome.BOREAL_DRY_SCRUB,
        Biome.BOREAL_MOIST_FOREST,
        Biome.BOREAL_WET_FOREST,
        Biome.BOREAL_RAIN_FOREST,
    )),
    LatitudinalBand("temperate", DEFAULTS.TEMPERATURE_BAND_LIMITS_C[3], (
        Biome.TEMPERATE_DESERT,
        Biome.TEMPERATE_DESERT_SCRUB,
        Biome.TEMPERATE_STEPPE,
        Biome.TEMPERATE_MOIST_FOREST,
        Biome.TEMPERATE_WET_FOREST,
        Biome.TEMPERATE_RAIN_FOREST,
    )),
    LatitudinalBand("subtropical", DEFAULTS.TEMPERATURE_BAND_LIMITS_C[4], (
        Biome.SUBTROPICAL_DESERT,
        Biome.SUBTROPICAL_DESERT_SCRUB,
        Biome.SUBTROPICAL_THORN_STEPPE,
        Biome.SUBTROPICAL_DRY_FOREST,
        Biome.SUBTROPICAL_MOIST_FOREST,
        Biome.SUBTROPICAL_WET_FOREST,
        Biome.SUBTROPICAL_RAIN_FOREST,
    )),
    LatitudinalBand("tropical", None, (
        Biome.TROPICAL_DESERT,
        Biome.TROPICAL_DESERT_SCRUB,
        Biome.TROPICAL_THORN_WOODLAND,
        Biome.TROPICAL_VERY_DRY_FOREST,
        Biome.TROPICAL_DRY_FOREST,
        Biome.TROPICAL_MOIST_FOREST,
        Biome.TROPICAL_WET_FOREST,
        Biome.TROPICAL_RAIN_FOREST,
    )),
)

_BAND_LIMITS = [band.max_temperature for band in LATITUDINAL_BANDS[:-1]]
_PRECIPITATION_CUTOFFS = list(DEFAULTS.PRECIPITATION_CUTOFFS_MM)

# Lookup arrays for the vectorized path.
_BAND_OFFSETS = np.array([band.biomes[0] for band in LATITUDINAL_BANDS], dtype=np.int64)
_BAND_LAST_SUBBAND = np.array([len(band.biomes) - 1 for band in LATITUDINAL_BANDS], dtype=np.int64)

# --- Sprite Indices (Rule 1) ---
# Cells of the six-cell texture atlas the harness loads.
SPRITE_GRASS = 0
SPRITE_SCRUB = 1
SPRITE_DESERT = 2
SPRITE_WATER = 3
SPRITE_FOREST = 4
SPRITE_ICE = 5
SPRITE_COUNT = 6

# --- Default Colours ---
def _rgb255(r, g, b) -> RGB:
    return (r / 255.0, g / 255.0, b / 255.0)

COLOR_OCEAN = (0.0, 0.2, 0.8)
COLOR_POLAR_ICE = (1.0, 1.0, 1.0)
COLOR_COLD_DESERT = _rgb255(214, 206, 186)
COLOR_DESERT = (1.0, 1.0, 1.0)

# Grass hues blended by grass_color.
COLOR_BOREAL_FOREST = _rgb255(26, 101, 49)
COLOR_GRASSLAND = _rgb255(157, 183, 92)
COLOR_RAINFOREST = _rgb255(0, 101, 14)
COLOR_SAVANNA = _rgb255(154, 180, 54)
COLOR_DEAD = _rgb255(140, 126, 78)
COLOR_ALPINE = _rgb255(120, 150, 190)


@dataclass(frozen=True)
class Tile:
    """What the harness draws for one coordinate."""
    index: int
    color: RGB


class TileTemplate(NamedTuple):
    index: int
    # None means the colour comes from grass_color.
    color: Optional[RGB]


# --- Tile Templates (Rule 1) ---
TILE_TEMPLATES = {
    Biome.OCEAN: TileTemplate(SPRITE_WATER, COLOR_OCEAN),
    Biome.POLAR_DESERT: TileTemplate(SPRITE_ICE, COLOR_POLAR_ICE),

    Biome.SUBPOLAR_DRY_TUNDRA: TileTemplate(SPRITE_GRASS, None),
    Biome.SUBPOLAR_MOIST_TUNDRA: TileTemplate(SPRITE_GRASS, None),
    Biome.SUBPOLAR_WET_TUNDRA: TileTemplate(SPRITE_GRASS, None),
    Biome.SUBPOLAR_RAIN_TUNDRA: TileTemplate(SPRITE_GRASS, None),

    Biome.BOREAL_DESERT: TileTemplate(SPRITE_DESERT, COLOR_COLD_DESERT),
    Biome.BOREAL_DRY_SCRUB: TileTemplate(SPRITE_SCRUB, None),
    Biome.BOREAL_MOIST_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.BOREAL_WET_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.BOREAL_RAIN_FOREST: TileTemplate(SPRITE_FOREST, None),

    Biome.TEMPERATE_DESERT: TileTemplate(SPRITE_DESERT, COLOR_COLD_DESERT),
    Biome.TEMPERATE_DESERT_SCRUB: TileTemplate(SPRITE_SCRUB, None),
    Biome.TEMPERATE_STEPPE: TileTemplate(SPRITE_GRASS, None),
    Biome.TEMPERATE_MOIST_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.TEMPERATE_WET_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.TEMPERATE_RAIN_FOREST: TileTemplate(SPRITE_FOREST, None),

    Biome.SUBTROPICAL_DESERT: TileTemplate(SPRITE_DESERT, COLOR_DESERT),
    Biome.SUBTROPICAL_DESERT_SCRUB: TileTemplate(SPRITE_SCRUB, None),
    Biome.SUBTROPICAL_THORN_STEPPE: TileTemplate(SPRITE_SCRUB, None),
    Biome.SUBTROPICAL_DRY_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.SUBTROPICAL_MOIST_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.SUBTROPICAL_WET_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.SUBTROPICAL_RAIN_FOREST: TileTemplate(SPRITE_FOREST, None),

    Biome.TROPICAL_DESERT: TileTemplate(SPRITE_DESERT, COLOR_DESERT),
    Biome.TROPICAL_DESERT_SCRUB: TileTemplate(SPRITE_SCRUB, None),
    Biome.TROPICAL_THORN_WOODLAND: TileTemplate(SPRITE_SCRUB, None),
    Biome.TROPICAL_VERY_DRY_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.TROPICAL_DRY_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.TROPICAL_MOIST_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.TROPICAL_WET_FOREST: TileTemplate(SPRITE_FOREST, None),
    Biome.TROPICAL_RAIN_FOREST: TileTemplate(SPRITE_FOREST, None),
}

# --- Tile LUTs, indexed by Biome ID ---
def create_sprite_lut() -> np.ndarray:
    return np.array([TILE_TEMPLATES[biome].index for biome in Biome], dtype=np.int64)

def create_fixed_color_lut() -> np.ndarray:
    """Fixed colours per biome. Grass biomes hold a placeholder of zeros."""
    return np.array([TILE_TEMPLATES[biome].color or (0.0, 0.0, 0.0) for biome in Biome], dtype=np.float64)

def create_grass_mask_lut() -> np.ndarray:
    return np.array([TILE_TEMPLATES[biome].color is None for biome in Biome], dtype=bool)


class GrassShades(NamedTuple):
    green: np.ndarray
    yellow: np.ndarray
    alpine: np.ndarray


def _lerp_color(a: RGB, b: RGB, weight):
    weight = np.asarray(weight, dtype=np.float64)[..., np.newaxis]
    return (1.0 - weight) * np.asarray(a) + weight * np.asarray(b)


def grass_shades(temperature, precipitation) -> GrassShades:
    """
    The three hues the grass colour is built from. Works on scalars (each
    hue is a length-3 array) and on arrays (each hue gains a trailing RGB axis).
    """
    temperature = np.asarray(temperature, dtype=np.float64)
    precipitation = np.asarray(precipitation, dtype=np.float64)

    deadness = np.clip(
        temperature / DEFAULTS.GRASS_DEAD_TEMP_C - precipitation / DEFAULTS.GRASS_DEADNESS_PRECIPITATION_MM,
        0.0, 1.0
    )
    alpine = np.clip(1.0 - temperature / DEFAULTS.GRASS_ALPINE_TEMP_C - deadness, 0.0, 1.0)
    precipitation_ratio = np.clip(precipitation / DEFAULTS.GRASS_LUSH_PRECIPITATION_MM, 0.0, 1.0)

    return GrassShades(
        green=_lerp_color(COLOR_GRASSLAND, COLOR_DEAD, deadness),
        yellow=_lerp_color(COLOR_SAVANNA, COLOR_RAINFOREST, precipitation_ratio),
        alpine=_lerp_color(COLOR_BOREAL_FOREST, COLOR_ALPINE, alpine),
    )


def grass_color(temperature, precipitation) -> np.ndarray:
    """
    Shared colour of every vegetated biome: the mean of the green and yellow
    hues. The alpine hue is not part of the blend.
    """
    shades = grass_shades(temperature, precipitation)
    return (shades.green + shades.yellow) / 2.0


class BiomeClassifier:
    """
    Deterministic decision table from climate to biome to tile.
    """
    def __init__(self):
        self.sprite_lut = create_sprite_lut()
        self.fixed_color_lut = create_fixed_color_lut()
        self.grass_mask_lut = create_grass_mask_lut()

    def classify(self, height: float, temperature: float, precipitation: float) -> Biome:
        if height <= 0.0:
            return Biome.OCEAN

        # bisect_left puts a value equal to a limit in the band it closes.
        band = LATITUDINAL_BANDS[bisect.bisect_left(_BAND_LIMITS, temperature)]
        sub_band = bisect.bisect_left(_PRECIPITATION_CUTOFFS, precipitation)
        return band.biomes[min(sub_band, len(band.biomes) - 1)]

    def tile(self, biome: Biome, temperature: float, precipitation: float) -> Tile:
        template = TILE_TEMPLATES[biome]
        if template.color is not None:
            return Tile(template.index, template.color)
        r, g, b = grass_color(temperature, precipitation)
        return Tile(template.index, (float(r), float(g), float(b)))

    def classify_grid(self, height: np.ndarray, temperature: np.ndarray, precipitation: np.ndarray) -> np.ndarray:
        """Vectorized classify. Returns an integer array of Biome IDs."""
        band = np.searchsorted(_BAND_LIMITS, temperature, side="left")
        sub_band = np.minimum(np.searchsorted(_PRECIPITATION_CUTOFFS, precipitation, side="left"), _BAND_LAST_SUBBAND[band])
        biome_map = _BAND_OFFSETS[band] + sub_band
        return np.where(np.asarray(height) <= 0.0, int(Biome.OCEAN), biome_map)

    def tile_grid(self, biome_map: np.ndarray, temperature: np.ndarray, precipitation: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """
        Vectorized tile. Returns (sprite indices, colours) where colours has a
        trailing RGB axis.
        """
        indices = self.sprite_lut[biome_map]
        colors = self.fixed_color_lut[biome_map]
        grass = grass_color(temperature, precipitation)
        colors = np.where(self.grass_mask_lut[biome_map][..., np.newaxis], grass, colors)
        return indices, colors
