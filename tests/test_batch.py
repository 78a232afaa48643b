import numpy as np

from tilemap_generator import Biome, TerrainGenerator
from tilemap_generator.batch import biome_histogram, generate_tile_map

SMALL_MAP = {"seed": 829201, "map_size": 20}


def test_single_process_map_shape(logger):
    tile_map = generate_tile_map(SMALL_MAP, logger)
    assert tile_map.biomes.shape == (21, 21)
    assert tile_map.indices.shape == (21, 21)
    assert tile_map.colors.shape == (21, 21, 3)
    assert len(tile_map.axis) == 21


def test_map_matches_per_tile_queries(logger):
    tile_map = generate_tile_map(SMALL_MAP, logger)
    generator = TerrainGenerator(SMALL_MAP, logger)
    axis = tile_map.axis
    for row in range(0, 21, 5):
        for col in range(0, 21, 5):
            tile = generator.get_tile(axis[col], axis[row])
            assert tile.index == tile_map.indices[row, col]
            assert np.allclose(tile.color, tile_map.colors[row, col])


def test_result_does_not_depend_on_worker_count(logger):
    serial = generate_tile_map(SMALL_MAP, logger, workers=1)
    parallel = generate_tile_map(SMALL_MAP, logger, workers=2)
    assert np.array_equal(serial.biomes, parallel.biomes)
    assert np.array_equal(serial.indices, parallel.indices)
    assert np.allclose(serial.colors, parallel.colors)


def test_biome_histogram_counts_every_tile(logger):
    tile_map = generate_tile_map(SMALL_MAP, logger)
    histogram = biome_histogram(tile_map)
    assert sum(histogram.values()) == 21 * 21
    assert set(histogram) <= {biome.name for biome in Biome}
