# tilemap_generator/__init__.py

# This file makes the 'tilemap_generator' directory a Python package.
# We also use it to define the public API of the package.

from .biomes import Biome, BiomeClassifier, Tile, grass_color
from .climate import ClimateModel, ClimateSample
from .generator import TerrainGenerator
from .noise import NoiseField, make_permutation_table
from .settings import ConfigurationError, GeneratorSettings

__all__ = [
    "Biome",
    "BiomeClassifier",
    "ClimateModel",
    "ClimateSample",
    "ConfigurationError",
    "GeneratorSettings",
    "NoiseField",
    "TerrainGenerator",
    "Tile",
    "grass_color",
    "make_permutation_table",
]
