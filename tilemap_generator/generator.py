# tilemap_generator/generator.py

"""
================================================================================
CORE TERRAIN GENERATOR
================================================================================
This module contains the TerrainGenerator facade. One instance covers one
"generation episode": its seed, zoom, pan and geometry are fixed at
construction. When any of them changes the caller discards the instance and
builds a new one.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict | GeneratorSettings): Parameters which can override the
      internal defaults. Expected keys include 'seed', 'zoom', 'pan_x', etc.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - get_tile: a Tile(index, color) for one world coordinate.
    - get_tile_grid: NumPy arrays of sprite indices and colours.
- Side Effects: Logs messages using the provided logger (construction only).
- Invariants: Given the same settings, the output is deterministic.
================================================================================
"""

import logging

import numpy as np

from .biomes import Biome, BiomeClassifier, Tile
from .climate import ClimateModel, ClimateSample
from .noise import NoiseField, make_permutation_table
from .settings import GeneratorSettings


class TerrainGenerator:
    """
    Generates tile descriptors for a procedurally generated map.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config=None, logger: logging.Logger = None):
        """
        Initializes the terrain generator.

        Args:
            config (dict | GeneratorSettings, optional): User-defined
                parameters to override defaults, or a ready snapshot.
            logger (logging.Logger, optional): The logger instance for all output.
        """
        self.logger = logger or logging.getLogger(__name__)

        # --- Consolidate Configuration ---
        if isinstance(config, GeneratorSettings):
            self.settings = config
        else:
            self.settings = GeneratorSettings.from_config(config or {}, self.logger)
        settings = self.settings

        # --- Initialize Noise ---
        # All three layers share one permutation table, so the height,
        # temperature and humidity noise are correlated.
        self.permutation_table = make_permutation_table(settings.seed)
        zoom = settings.zoom

        self.height_noise = NoiseField(
            self.permutation_table,
            octaves=settings.height_noise_octaves,
            scale=settings.height_noise_scale * zoom,
            persistence=settings.height_noise_persistence,
            lacunarity=settings.height_noise_lacunarity,
        )
        self.temperature_noise = NoiseField(
            self.permutation_table,
            octaves=settings.temperature_noise_octaves,
            scale=settings.temperature_noise_scale * zoom,
            persistence=settings.temperature_noise_persistence,
            lacunarity=settings.temperature_noise_lacunarity,
        )
        self.humidity_noise = NoiseField(
            self.permutation_table,
            octaves=settings.humidity_noise_octaves,
            scale=settings.humidity_noise_scale * zoom,
            persistence=settings.humidity_noise_persistence,
            lacunarity=settings.humidity_noise_lacunarity,
        )
        self.logger.debug(
            f"Noise layers: height={self.height_noise}, "
            f"temperature={self.temperature_noise}, humidity={self.humidity_noise}"
        )

        # --- Compose the Pipeline (Rule 7 - Composition) ---
        self.climate = ClimateModel(settings, self.height_noise, self.temperature_noise, self.humidity_noise)
        self.classifier = BiomeClassifier()

        self.logger.info(
            f"TerrainGenerator initialized with seed: {settings.seed} "
            f"(zoom {settings.zoom:.2f}, pan {settings.pan_x:+.2f}/{settings.pan_y:+.2f})"
        )
        self.logger.info(
            f"Map geometry: {settings.map_size}x{settings.map_size} tiles "
            f"of {settings.tile_size * settings.tile_scale:g} world units"
        )

    def sample_climate(self, world_x: float, world_y: float) -> ClimateSample:
        return self.climate.sample(world_x, world_y)

    def get_biome(self, world_x: float, world_y: float) -> Biome:
        sample = self.climate.sample(world_x, world_y)
        return self.classifier.classify(sample.height, sample.temperature, sample.precipitation)

    def get_tile(self, world_x: float, world_y: float) -> Tile:
        """The tile descriptor for one world coordinate."""
        sample = self.climate.sample(world_x, world_y)
        biome = self.classifier.classify(sample.height, sample.temperature, sample.precipitation)
        return self.classifier.tile(biome, sample.temperature, sample.precipitation)

    def get_biome_grid(self, world_x: np.ndarray, world_y: np.ndarray) -> np.ndarray:
        sample = self.climate.sample_grid(world_x, world_y)
        return self.classifier.classify_grid(sample.height, sample.temperature, sample.precipitation)

    def get_tile_grid(self, world_x: np.ndarray, world_y: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Vectorized get_tile. Returns (biome IDs, sprite indices, colours), all
        shaped like the broadcast inputs; colours carry a trailing RGB axis.
        """
        sample = self.climate.sample_grid(world_x, world_y)
        biome_map = self.classifier.classify_grid(sample.height, sample.temperature, sample.precipitation)
        indices, colors = self.classifier.tile_grid(biome_map, sample.temperature, sample.precipitation)
        return biome_map, indices, colors

    def tile_axis(self) -> np.ndarray:
        """
        World positions of the tile centres along one axis, from -half to
        +half tiles inclusive, as the harness lays the map out.
        """
        half = self.settings.map_size // 2
        step = self.settings.tile_size * self.settings.tile_scale
        return np.arange(-half, half + 1, dtype=np.float64) * step

    def tile_coordinates(self) -> tuple[np.ndarray, np.ndarray]:
        """Meshgrid of tile world positions; row index is y, column index is x."""
        axis = self.tile_axis()
        return np.meshgrid(axis, axis)
