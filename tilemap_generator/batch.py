# tilemap_generator/batch.py

"""
================================================================================
WHOLE-MAP GENERATION
================================================================================
This module evaluates every tile of a map in one call, optionally spreading
the rows over worker processes. It does not store anything: the result lives
in memory and is discarded by the caller when the settings change.

Data Contract:
---------------
- Inputs:
    - config (dict | GeneratorSettings): The generation episode.
    - logger: A configured Python logging object.
    - workers (int): Number of processes. 1 runs in the calling process.
- Outputs:
    - TileMap with (rows, cols) arrays: biomes, indices, and (rows, cols, 3)
      colours. Row 0 is the most negative y.
- Side Effects: Logs progress; shows a tqdm progress bar when parallel.
- Invariants: The result does not depend on the number of workers.
================================================================================
"""

import logging
import multiprocessing
import os
import time
from typing import NamedTuple

import numpy as np
from tqdm import tqdm

from .biomes import Biome
from .generator import TerrainGenerator
from .settings import GeneratorSettings


class TileMap(NamedTuple):
    settings: GeneratorSettings
    axis: np.ndarray
    biomes: np.ndarray
    indices: np.ndarray
    colors: np.ndarray


# --- Global variables for worker processes ---
worker_generator = None
worker_axis = None

def init_worker(settings: GeneratorSettings):
    """Initializes the global state for each worker process."""
    global worker_generator, worker_axis
    worker_logger = logging.getLogger(f"Worker-{os.getpid()}")
    worker_generator = TerrainGenerator(settings, logger=worker_logger)
    worker_axis = worker_generator.tile_axis()

def process_row(row: int) -> tuple:
    """Generates one row of tiles. Returns only plain arrays (pickle-able)."""
    world_y = np.full_like(worker_axis, worker_axis[row])
    biomes, indices, colors = worker_generator.get_tile_grid(worker_axis, world_y)
    return row, biomes, indices, colors


def _settings_from(config, logger: logging.Logger) -> GeneratorSettings:
    if isinstance(config, GeneratorSettings):
        return config
    return GeneratorSettings.from_config(config or {}, logger)


def generate_tile_map(config=None, logger: logging.Logger = None, workers: int = 1) -> TileMap:
    """
    Generates every tile of the map described by `config`.

    Args:
        config (dict | GeneratorSettings, optional): Generation parameters.
        logger (logging.Logger, optional): The logger instance for all output.
        workers (int): Worker processes to use; values < 1 mean one per CPU.
    """
    logger = logger or logging.getLogger(__name__)
    settings = _settings_from(config, logger)
    if workers < 1:
        workers = os.cpu_count() or 1

    start_time = time.time()

    if workers == 1:
        generator = TerrainGenerator(settings, logger=logger)
        axis = generator.tile_axis()
        world_x, world_y = np.meshgrid(axis, axis)
        biomes, indices, colors = generator.get_tile_grid(world_x, world_y)
    else:
        axis = TerrainGenerator(settings, logger=logger).tile_axis()
        rows = len(axis)
        biomes = np.empty((rows, rows), dtype=np.int64)
        indices = np.empty((rows, rows), dtype=np.int64)
        colors = np.empty((rows, rows, 3), dtype=np.float64)

        logger.info(f"Generating {rows} rows with {workers} worker processes...")
        try:
            with multiprocessing.Pool(processes=workers, initializer=init_worker, initargs=(settings,)) as pool:
                for row, row_biomes, row_indices, row_colors in tqdm(
                    pool.imap_unordered(process_row, range(rows)), total=rows, desc="Generating map"
                ):
                    biomes[row] = row_biomes
                    indices[row] = row_indices
                    colors[row] = row_colors
        except Exception as e:
            # Use exc_info=True to log the full traceback from the worker process
            logger.critical(f"An exception occurred during map generation: {e}", exc_info=True)
            raise

    elapsed = time.time() - start_time
    logger.info(f"Generated {biomes.size} tiles in {elapsed:.2f} seconds.")
    return TileMap(settings, axis, biomes, indices, colors)


def biome_histogram(tile_map: TileMap) -> dict:
    """Counts tiles per biome name, for reporting."""
    ids, counts = np.unique(tile_map.biomes, return_counts=True)
    return {Biome(int(biome_id)).name: int(count) for biome_id, count in zip(ids, counts)}
