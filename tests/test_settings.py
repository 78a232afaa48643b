import logging

import numpy as np
import pytest

from tilemap_generator import ConfigurationError, GeneratorSettings, TerrainGenerator


def test_defaults():
    settings = GeneratorSettings()
    assert settings.seed == 829201
    assert settings.half_map_extent == 500.0


def test_snapshots_compare_by_value():
    assert GeneratorSettings(seed=5, zoom=1.5) == GeneratorSettings(seed=5, zoom=1.5)
    assert GeneratorSettings(seed=5) != GeneratorSettings(seed=6)


def test_snapshots_are_immutable():
    settings = GeneratorSettings()
    with pytest.raises(AttributeError):
        settings.zoom = 2.0


def test_replace_returns_new_validated_snapshot():
    settings = GeneratorSettings()
    zoomed = settings.replace(zoom=2.0)
    assert zoomed.zoom == 2.0
    assert settings.zoom == 1.0
    with pytest.raises(ConfigurationError):
        settings.replace(zoom=0.0)


@pytest.mark.parametrize("overrides", [
    {"zoom": 0.0},
    {"zoom": -1.0},
    {"zoom": float("inf")},
    {"zoom": float("nan")},
    {"pan_x": float("nan")},
    {"seed": -1},
    {"seed": 2**32},
    {"seed": True},
    {"seed": 1.5},
    {"map_size": 0},
    {"map_size": 250.5},
    {"map_size": True},
    {"height_noise_octaves": 2.5},
    {"tile_size": 0.0},
    {"tile_scale": -0.25},
    {"height_noise_octaves": 0},
    {"temperature_noise_scale": 0.0},
    {"humidity_noise_persistence": 0.0},
    {"humidity_noise_lacunarity": 1.0},
])
def test_invalid_settings_raise_configuration_error(overrides):
    with pytest.raises(ConfigurationError):
        GeneratorSettings(**overrides)


def test_numpy_integers_are_accepted_and_normalised():
    settings = GeneratorSettings(seed=np.uint32(5), map_size=np.int64(40), humidity_noise_octaves=np.int32(3))
    assert settings == GeneratorSettings(seed=5, map_size=40, humidity_noise_octaves=3)
    assert type(settings.seed) is int
    assert type(settings.map_size) is int
    assert type(settings.humidity_noise_octaves) is int


def test_largest_unsigned_32_bit_seed_is_accepted():
    assert GeneratorSettings(seed=np.uint32(2**32 - 1)).seed == 2**32 - 1


def test_zero_zoom_is_rejected_by_the_generator():
    with pytest.raises(ConfigurationError):
        TerrainGenerator({"zoom": 0.0})


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_from_config_ignores_unknown_keys(caplog):
    logger = logging.getLogger("tilemap_generator.tests.settings")
    with caplog.at_level(logging.WARNING, logger="tilemap_generator.tests.settings"):
        settings = GeneratorSettings.from_config({"seed": 7, "colour": "blue"}, logger)
    assert settings == GeneratorSettings(seed=7)
    assert "colour" in caplog.text


def test_round_trip_through_dict():
    settings = GeneratorSettings(seed=3, zoom=0.5, pan_x=0.2)
    assert GeneratorSettings.from_config(settings.to_dict()) == settings
