# tilemap_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the tilemap
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC SIMULATION.
Instead, pass a configuration dictionary to the TerrainGenerator instance.
================================================================================
"""

# --- Generation Episode Defaults ---
DEFAULT_SEED = 829201
DEFAULT_ZOOM = 1.0
DEFAULT_PAN_X = 0.0
DEFAULT_PAN_Y = 0.0

# --- Map Geometry (harness constants of the reference configuration) ---
DEFAULT_MAP_SIZE = 250      # Tiles per axis
DEFAULT_TILE_SIZE = 16.0    # Pixels per tile edge in the texture atlas
DEFAULT_TILE_SCALE = 0.25   # Render scale applied to each tile

# Seeds are unsigned 32-bit integers.
MAX_SEED = 2**32

# --- Noise Layers ---
# The feature scale is in world units per noise cycle at zoom 1.0. It is
# multiplied by the zoom so the noise widens together with the coordinates.
HEIGHT_NOISE_OCTAVES = 24
HEIGHT_NOISE_SCALE = 100.0
HEIGHT_NOISE_PERSISTENCE = 0.3
HEIGHT_NOISE_LACUNARITY = 4.7

TEMPERATURE_NOISE_OCTAVES = 24
TEMPERATURE_NOISE_SCALE = 70.0
TEMPERATURE_NOISE_PERSISTENCE = 0.2
TEMPERATURE_NOISE_LACUNARITY = 4.1

HUMIDITY_NOISE_OCTAVES = 8
HUMIDITY_NOISE_SCALE = 90.0
HUMIDITY_NOISE_PERSISTENCE = 0.08
HUMIDITY_NOISE_LACUNARITY = 1.2

# --- Globe Shaping ---
# The height noise is attenuated by the radial distance from the globe centre
# plus a constant bias and a mirrored noise term, so land forms in the middle
# of the map and the edges sink below sea level.
GLOBE_FALLOFF_BIAS = 0.3
GLOBE_MIRROR_NOISE_WEIGHT = 0.4

# The normalized globe value [0, 1] is scaled to metres and shifted down so
# that part of the range lies below sea level.
ELEVATION_RANGE_M = 6000.0
SEA_LEVEL_OFFSET_M = 1000.0

# --- Temperature Model (Celsius) ---
# Temperature change across the map from the equator line (y_dis = 0) to the
# map edge (y_dis = 1). Negative: the top of the map is the cold pole.
LATITUDE_GRADIENT_C = -70.0
# The noisy sea-level temperature is NOISE_RANGE * noise + NOISE_OFFSET.
TEMPERATURE_NOISE_RANGE_C = 20.0
TEMPERATURE_NOISE_OFFSET_C = -5.0

# Adiabatic lapse rates for dry and saturated air, in C per metre.
DRY_ADIABATIC_LAPSE_RATE = 9.8 / 1000.0
WET_ADIABATIC_LAPSE_RATE = 5.0 / 1000.0
# The draft temperature pass uses half the dry rate.
REFERENCE_LAPSE_RATE = DRY_ADIABATIC_LAPSE_RATE * 0.5

# Evaporation probability is a triangle over [MIN, MAX] peaking at PEAK.
EVAPORATION_MIN_TEMP_C = 0.0
EVAPORATION_PEAK_TEMP_C = 10.0
EVAPORATION_MAX_TEMP_C = 20.0

# --- Precipitation Model ---
# Water is only carried inland where the air is neither frozen nor boiling off.
LIVABLE_MIN_TEMP_C = -20.0
LIVABLE_MAX_TEMP_C = 40.0
# Above this elevation no surface water is available.
WATER_ELEVATION_CEILING_M = 2000.0
# Inland water availability never reaches the open-sea value of 1.0.
MAX_INLAND_WATER_AVAILABILITY = 0.99

# Humidity is a fixed-weight blend of three terms. The weights sum to 1.0.
HUMIDITY_WATER_WEIGHT = 0.6
HUMIDITY_EQUATOR_WEIGHT = 0.25
HUMIDITY_NOISE_WEIGHT = 0.15

# Raw precipitation in mm per year for a humidity of 1.0.
PRECIPITATION_SCALE_MM = 10000.0

# The precipitation ceiling rises linearly with temperature up to the break
# point, then falls off steeply (hot air dries out).
PRECIPITATION_CEILING_BREAK_C = 30.0
PRECIPITATION_CEILING_SLOPE_LOW = 300.0
PRECIPITATION_CEILING_INTERCEPT_LOW = 600.0
PRECIPITATION_CEILING_SLOPE_HIGH = -800.0
PRECIPITATION_CEILING_INTERCEPT_HIGH = 33600.0

# --- Biome Thresholds ---
# Upper bounds (inclusive) of the latitudinal temperature bands, in Celsius:
# polar, subpolar, boreal, temperate, subtropical. Tropical is the remainder.
TEMPERATURE_BAND_LIMITS_C = (0.0, 3.0, 6.0, 12.0, 24.0)

# Upper bounds (inclusive) of the precipitation bands, in mm per year. A
# temperature band with n sub-bands uses the first n - 1 cutoffs.
PRECIPITATION_CUTOFFS_MM = (125.0, 250.0, 500.0, 1000.0, 2000.0, 4000.0, 8000.0)

# --- Grass Colour Model ---
# Temperature at which grass is fully dead when there is no rain.
GRASS_DEAD_TEMP_C = 40.0
# Precipitation that offsets one unit of deadness.
GRASS_DEADNESS_PRECIPITATION_MM = 4000.0
# Below this temperature grass starts taking an alpine tint.
GRASS_ALPINE_TEMP_C = 12.0
# Precipitation at which the lush hue is reached.
GRASS_LUSH_PRECIPITATION_MM = 8000.0

# --- Harness Controls ---
ZOOM_STEP = 0.1
MIN_ZOOM = 0.2
PAN_STEP = 0.1
PAN_SOFT_LIMIT = 0.9
# Random seeds picked by the harness are drawn from [0, RESEED_UPPER_BOUND).
RESEED_UPPER_BOUND = 99999
