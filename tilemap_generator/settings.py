# tilemap_generator/settings.py

"""
================================================================================
GENERATOR SETTINGS
================================================================================
This module defines the immutable configuration snapshot for one generation
episode. A snapshot is built once, validated once, and then handed to a
TerrainGenerator. Any change (new seed, zoom, pan) produces a NEW snapshot and
the caller rebuilds the generator from it.

Data Contract:
---------------
- Inputs:
    - config (dict): Optional overrides keyed by the lower-case field names
      below. Missing keys fall back to the constants in config.py.
- Outputs:
    - GeneratorSettings: a frozen dataclass. Two snapshots compare equal when
      every field is equal, which is the change-detection test.
- Side Effects: Unknown keys are reported through the provided logger.
- Invariants: A constructed GeneratorSettings is always valid (zoom > 0 etc.).
================================================================================
"""

import dataclasses
import logging
import math
import numbers
from dataclasses import dataclass

from . import config as DEFAULTS


class ConfigurationError(ValueError):
    """Raised when a generation setting is outside its documented domain."""


@dataclass(frozen=True)
class GeneratorSettings:
    seed: int = DEFAULTS.DEFAULT_SEED
    zoom: float = DEFAULTS.DEFAULT_ZOOM
    pan_x: float = DEFAULTS.DEFAULT_PAN_X
    pan_y: float = DEFAULTS.DEFAULT_PAN_Y

    map_size: int = DEFAULTS.DEFAULT_MAP_SIZE
    tile_size: float = DEFAULTS.DEFAULT_TILE_SIZE
    tile_scale: float = DEFAULTS.DEFAULT_TILE_SCALE

    height_noise_octaves: int = DEFAULTS.HEIGHT_NOISE_OCTAVES
    height_noise_scale: float = DEFAULTS.HEIGHT_NOISE_SCALE
    height_noise_persistence: float = DEFAULTS.HEIGHT_NOISE_PERSISTENCE
    height_noise_lacunarity: float = DEFAULTS.HEIGHT_NOISE_LACUNARITY

    temperature_noise_octaves: int = DEFAULTS.TEMPERATURE_NOISE_OCTAVES
    temperature_noise_scale: float = DEFAULTS.TEMPERATURE_NOISE_SCALE
    temperature_noise_persistence: float = DEFAULTS.TEMPERATURE_NOISE_PERSISTENCE
    temperature_noise_lacunarity: float = DEFAULTS.TEMPERATURE_NOISE_LACUNARITY

    humidity_noise_octaves: int = DEFAULTS.HUMIDITY_NOISE_OCTAVES
    humidity_noise_scale: float = DEFAULTS.HUMIDITY_NOISE_SCALE
    humidity_noise_persistence: float = DEFAULTS.HUMIDITY_NOISE_PERSISTENCE
    humidity_noise_lacunarity: float = DEFAULTS.HUMIDITY_NOISE_LACUNARITY

    def __post_init__(self):
        for name in ("seed", "map_size", "height_noise_octaves", "temperature_noise_octaves", "humidity_noise_octaves"):
            self._require_integer(name)
        if not 0 <= self.seed < DEFAULTS.MAX_SEED:
            raise ConfigurationError(f"seed must be an unsigned 32-bit integer, got {self.seed}")

        # The coordinate transform divides by the zoom.
        if not math.isfinite(self.zoom) or self.zoom <= 0:
            raise ConfigurationError(f"zoom must be a finite value > 0, got {self.zoom}")
        for name in ("pan_x", "pan_y"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be finite, got {getattr(self, name)}")

        if self.map_size < 1:
            raise ConfigurationError(f"map_size must be >= 1, got {self.map_size}")
        if self.tile_size <= 0 or self.tile_scale <= 0:
            raise ConfigurationError(
                f"tile_size and tile_scale must be > 0, got {self.tile_size} and {self.tile_scale}"
            )

        for layer in ("height", "temperature", "humidity"):
            octaves = getattr(self, f"{layer}_noise_octaves")
            if octaves < 1:
                raise ConfigurationError(f"{layer}_noise_octaves must be >= 1, got {octaves}")
            if getattr(self, f"{layer}_noise_scale") <= 0:
                raise ConfigurationError(f"{layer}_noise_scale must be > 0")
            if getattr(self, f"{layer}_noise_persistence") <= 0:
                raise ConfigurationError(f"{layer}_noise_persistence must be > 0")
            if getattr(self, f"{layer}_noise_lacunarity") <= 1:
                raise ConfigurationError(f"{layer}_noise_lacunarity must be > 1")

    def _require_integer(self, name: str):
        """Accepts any integral value (NumPy integers included) and stores it as int."""
        value = getattr(self, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        object.__setattr__(self, name, int(value))

    @classmethod
    def from_config(cls, config: dict, logger: logging.Logger = None) -> "GeneratorSettings":
        """
        Builds a snapshot from a user configuration dictionary.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger, optional): Receives a warning for every
                key that is not a known setting.
        """
        logger = logger or logging.getLogger(__name__)
        known = {field.name for field in dataclasses.fields(cls)}
        for key in sorted(set(config) - known):
            logger.warning(f"Ignoring unknown generator setting '{key}'.")
        return cls(**{key: value for key, value in config.items() if key in known})

    @property
    def half_map_extent(self) -> float:
        """Half of the map's side length in world units (L)."""
        return self.tile_size * self.tile_scale * self.map_size / 2.0

    def replace(self, **changes) -> "GeneratorSettings":
        """Returns a new, re-validated snapshot with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)
