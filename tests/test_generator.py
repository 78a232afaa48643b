import logging

import numpy as np
import pytest

from tilemap_generator import Biome, GeneratorSettings, TerrainGenerator, Tile
from tilemap_generator.biomes import SPRITE_COUNT, SPRITE_FOREST, SPRITE_WATER


def test_reference_generator_uses_documented_defaults(generator):
    settings = generator.settings
    assert settings.seed == 829201
    assert settings.zoom == 1.0
    assert (settings.pan_x, settings.pan_y) == (0.0, 0.0)
    assert (settings.map_size, settings.tile_size, settings.tile_scale) == (250, 16.0, 0.25)


def test_noise_layers_share_one_seed(generator):
    assert generator.height_noise._p is generator.permutation_table
    assert generator.temperature_noise._p is generator.permutation_table
    assert generator.humidity_noise._p is generator.permutation_table


def test_noise_scale_follows_zoom():
    generator = TerrainGenerator({"zoom": 2.0})
    assert generator.height_noise.scale == 200.0
    assert generator.temperature_noise.scale == 140.0
    assert generator.humidity_noise.scale == 180.0


def test_reference_climate_at_origin(generator):
    # Every octave samples a lattice point at the origin, so each layer reads
    # 0.5 per octave and the result does not depend on the seed.
    sample = generator.climate.sample(0.0, 0.0)
    assert sample.height == pytest.approx(38000.0 / 49.0)
    assert sample.abs_elevation == pytest.approx(38000.0 / 49.0)
    assert sample.temperature == pytest.approx(4.3886531, rel=1e-6)
    assert sample.precipitation == pytest.approx(1916.5959, rel=1e-6)


@pytest.mark.parametrize("seed", [829201, 0, 12345])
def test_golden_tile_at_origin(seed):
    generator = TerrainGenerator(GeneratorSettings(seed=seed))
    assert generator.get_biome(0.0, 0.0) is Biome.BOREAL_RAIN_FOREST
    tile = generator.get_tile(0.0, 0.0)
    assert isinstance(tile, Tile)
    assert tile.index == SPRITE_FOREST
    assert tile.color == pytest.approx((0.5374618, 0.6746542, 0.2674843), rel=1e-6)


def test_get_tile_is_referentially_transparent(generator):
    coordinates = [(0.0, 0.0), (-300.0, 120.0), (44.0, -499.0), (250.0, 250.0)]
    first = [generator.get_tile(x, y) for x, y in coordinates]
    second = [generator.get_tile(x, y) for x, y in reversed(coordinates)]
    assert first == list(reversed(second))


def test_different_seeds_produce_different_terrain():
    a = TerrainGenerator({"seed": 1, "map_size": 40})
    b = TerrainGenerator({"seed": 2, "map_size": 40})
    xs, ys = a.tile_coordinates()
    assert not np.array_equal(a.climate.sample_grid(xs, ys).height, b.climate.sample_grid(xs, ys).height)


def test_tile_grid_invariants(generator):
    xs, ys = generator.tile_coordinates()
    biomes, indices, colors = generator.get_tile_grid(xs, ys)
    heights = generator.climate.sample_grid(xs, ys).height

    assert biomes.shape == indices.shape == (251, 251)
    assert colors.shape == (251, 251, 3)
    assert np.all((indices >= 0) & (indices < SPRITE_COUNT))
    assert np.all((colors >= 0.0) & (colors <= 1.0))

    ocean = heights <= 0.0
    assert np.array_equal(ocean, biomes == Biome.OCEAN)
    assert np.array_equal(ocean, indices == SPRITE_WATER)
    # The globe falloff guarantees both land and sea on the reference map.
    assert ocean.any() and not ocean.all()


def test_tile_grid_matches_get_tile(generator):
    xs, ys = generator.tile_coordinates()
    biomes, indices, colors = generator.get_tile_grid(xs, ys)
    for row, col in [(125, 125), (0, 0), (250, 250), (100, 140), (140, 100), (60, 190)]:
        tile = generator.get_tile(xs[row, col], ys[row, col])
        assert generator.get_biome(xs[row, col], ys[row, col]) == biomes[row, col]
        assert tile.index == indices[row, col]
        assert tile.color == pytest.approx(tuple(colors[row, col]), abs=1e-9)


def test_tile_axis_matches_harness_layout(generator):
    axis = generator.tile_axis()
    assert len(axis) == 251
    assert axis[0] == -500.0
    assert axis[125] == 0.0
    assert axis[-1] == 500.0
    assert np.allclose(np.diff(axis), 4.0)


def test_constructor_logs_seed(caplog):
    logger = logging.getLogger("tilemap_generator.tests.construct")
    with caplog.at_level(logging.INFO, logger="tilemap_generator.tests.construct"):
        TerrainGenerator({"seed": 42, "map_size": 8}, logger=logger)
    assert "seed: 42" in caplog.text
