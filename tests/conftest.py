import logging

import pytest

from tilemap_generator import GeneratorSettings, TerrainGenerator


@pytest.fixture(scope="session")
def logger():
    return logging.getLogger("tilemap_generator.tests")


@pytest.fixture(scope="session")
def generator(logger):
    """The reference configuration: seed 829201, zoom 1, no pan, 250 tiles."""
    return TerrainGenerator(GeneratorSettings(), logger=logger)
