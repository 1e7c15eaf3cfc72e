# planet_fields/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the planet
field model. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC WORLD.
Instead, pass a WorldConfig (or a configuration dictionary) to the World.
================================================================================
"""

# --- Noise Generation ---
DEFAULT_SEED = 12345
# Fixed offsets added to the world seed for each noise field, ensuring the
# fields are unique but deterministic from the master seed.
TERRAIN_SEED_OFFSET = 0
MOISTURE_SEED_OFFSET = 1000
TEMPERATURE_VARIATION_SEED_OFFSET = 2000
WIND_SEED_OFFSET = 3000
RIVER_SEED_OFFSET = 4000
CLOUD_SEED_OFFSET = 5000
VOLCANO_SEED_OFFSET = 6000
COAL_SEED_OFFSET = 7000
IRON_SEED_OFFSET = 8000
OIL_SEED_OFFSET = 9000
WEATHER_SEED_OFFSET = 10000
PRESSURE_SEED_OFFSET = 11000
TERRAIN_DETAIL_SEED_OFFSET = 12000
VEGETATION_SEED_OFFSET = 13000

# Radius of the sphere that geographic coordinates are projected onto.
# All noise frequencies below are expressed per unit of this sphere.
SPHERE_RADIUS = 1000.0

# Range of the seed-derived translation applied to every field's sample
# coordinates. Keeps the poles and the prime meridian off the noise lattice.
NOISE_COORDINATE_OFFSET_RANGE = 1000.0

DEFAULT_WORLD_SCALE = 1.0

# Terrain (continents, mountains, valleys)
TERRAIN_FREQUENCY = 0.001
TERRAIN_OCTAVES = 6
TERRAIN_LACUNARITY = 2.0
TERRAIN_GAIN = 0.5

# Fine terrain detail blended in when zooming (detail level > 1)
TERRAIN_DETAIL_OCTAVES = 3
TERRAIN_DETAIL_AMPLITUDE = 0.15
# Detail level at which the fine detail fully replaces the coarse surface.
TERRAIN_DETAIL_FULL_LEVEL = 5.0

# Moisture (precipitation, biomes)
MOISTURE_FREQUENCY = 0.002
MOISTURE_OCTAVES = 4

# Everything else uses a single fBm configuration per family.
TEMPERATURE_VARIATION_FREQUENCY = 0.003
TEMPERATURE_VARIATION_OCTAVES = 1
WIND_FREQUENCY = 0.002
WIND_OCTAVES = 2
RIVER_FREQUENCY = 0.02
RIVER_OCTAVES = 3
VOLCANO_FREQUENCY = 0.01
RESOURCE_FREQUENCY = 0.015
RESOURCE_OCTAVES = 3
CLOUD_FREQUENCY = 0.008
CLOUD_OCTAVES = 3
WEATHER_FREQUENCY = 0.004
WEATHER_OCTAVES = 2
PRESSURE_FREQUENCY = 0.006
PRESSURE_OCTAVES = 2
VEGETATION_FREQUENCY = 0.01
VEGETATION_OCTAVES = 2

# --- Terrain Shaping ---
# The averaged fBm octave sum rarely drops below -0.45. Negative terrain noise
# is stretched by this gain so ocean basins reach abyssal depths. Land noise
# is not stretched.
OCEAN_BASIN_CONTRAST = 2.5
# Ocean floor depth reached by a raw noise value of -1.
MAX_OCEAN_DEPTH_M = 4000.0
# Power applied to positive (land) noise. Below 1.0 this lifts the land.
LAND_SHAPING_EXPONENT = 0.7
DEFAULT_SEA_LEVEL_M = 0.0
DEFAULT_MAX_TERRAIN_HEIGHT_M = 8848.0  # Mt. Everest

# --- Volcanoes ---
# Cellular noise values below this threshold lie inside a volcano cone.
VOLCANO_THRESHOLD = -0.8
VOLCANO_MAX_HEIGHT_M = 3000.0
VOLCANO_ELEVATION_REFERENCE_M = 5000.0
VOLCANO_ELEVATION_FACTOR_RANGE = (0.6, 1.4)
# Proximity (0 = cone rim, 1 = vent) at which the crater begins.
VOLCANO_CRATER_START = 0.92
VOLCANO_CRATER_DEPTH_FRACTION = 0.35

# --- Climate Physics ---
DEFAULT_EQUATOR_TEMPERATURE_C = 30.0
DEFAULT_POLE_TEMPERATURE_C = -40.0
DEFAULT_LAPSE_RATE_C_PER_KM = 6.5
# Local temperature variation amplitude from noise.
TEMPERATURE_VARIATION_C = 5.0

# Weight of the latitude term in the moisture blend (the rest is noise).
MOISTURE_LATITUDE_WEIGHT = 0.3

MAX_ANNUAL_PRECIPITATION_MM = 4000.0
BASE_PRECIPITATION_MM = 2000.0
PRECIPITATION_CAPACITY_RANGE = (0.1, 1.5)
OROGRAPHIC_BAND_M = (500.0, 3000.0)
OROGRAPHIC_BOOST = 1.3
HIGH_ALTITUDE_DRY_M = 4000.0
HIGH_ALTITUDE_DRY_FACTOR = 0.5

# Annual precipitation (mm) below which no precipitation type is reported.
MIN_PRECIPITATION_FOR_TYPE_MM = 100.0
SNOW_MAX_TEMP_C = -2.0
SLEET_MAX_TEMP_C = 2.0

HUMIDITY_DRY_ALTITUDE_M = 3000.0

# --- Atmosphere ---
SEA_LEVEL_PRESSURE_MB = 1013.25
ATMOSPHERE_SCALE_HEIGHT_M = 8500.0
SYNOPTIC_PRESSURE_AMPLITUDE_MB = 25.0
SUBTROPICAL_HIGH_MB = 8.0
SUBTROPICAL_HIGH_LATITUDE = 30.0
SUBTROPICAL_HIGH_WIDTH_DEG = 12.0
PRESSURE_GRADIENT_STEP_DEG = 1.0
PRESSURE_GRADIENT_ALTITUDE_M = 1000.0
STORM_FRONT_GRADIENT_MB_PER_DEG = 5.0

# Sphere units the weather fields drift per hour of simulated time.
WEATHER_DRIFT_PER_HOUR = 20.0
PRESSURE_DRIFT_PER_HOUR = 8.0
# Independent channels of the weather field, as offsets along the x axis.
WEATHER_CHANNEL_OFFSETS = {
    "precipitation": 0.0,
    "wind_speed": 3000.0,
    "wind_direction": 6000.0,
}

# Wind bands: (max latitude, min speed m/s, max speed m/s,
#              direction north, direction south)
WIND_BANDS = {
    "trade": (30.0, 5.0, 8.0, 45.0, 135.0),
    "westerly": (60.0, 7.0, 12.0, 240.0, 300.0),
    "polar": (90.0, 3.0, 6.0, 60.0, 120.0),
}
WIND_DIRECTION_JITTER_DEG = 30.0
# Offset of the second wind-noise channel used for the direction jitter.
WIND_DIRECTION_CHANNEL_OFFSET = 2500.0
WIND_SURFACE_LAYER_M = 1000.0
WIND_ROUGHNESS_HEIGHT_M = 3000.0
WIND_ROUGHNESS_MAX_REDUCTION = 0.4
WIND_ALTITUDE_REFERENCE_M = 10000.0
CURRENT_WIND_SPEED_SWING = 0.5
CURRENT_WIND_DIRECTION_SWING_DEG = 45.0

# Cloud formation
CLOUD_HUMIDITY_WEIGHT = 0.6
CLOUD_PRECIPITATION_WEIGHT = 0.4
CLOUD_PRECIPITATION_REFERENCE_MM = 2500.0
CLOUD_EDGE_THRESHOLD = 0.4
# Clouds block up to this fraction of incoming radiation.
CLOUD_RADIATION_BLOCKING = 0.7

# --- Solar ---
SOLAR_CONSTANT_W_M2 = 1361.0
MAX_INSOLATION_W_M2 = 1400.0
AXIAL_TILT_DEG = 23.44
DAYS_PER_YEAR = 365
ATMOSPHERIC_TRANSMITTANCE = 0.7
AIR_MASS_RANGE = (1.0, 10.0)
SEASON_NAMES = ("Winter", "Spring", "Summer", "Fall")

# Diurnal temperature model
SOLAR_HEATING_C_PER_KW = 8.0
DAYTIME_CLOUD_COOLING_C = 3.0
NIGHT_COOLING_RANGE_C = (5.0, 15.0)
# Sun depression (degrees below the horizon) at which night cooling is full.
TWILIGHT_DEPTH_DEG = 12.0
HUMIDITY_DAMPING = 0.5

# Current precipitation
RAIN_PROBABILITY_REFERENCE_MM = 2500.0
MAX_RAIN_PROBABILITY = 0.9

# --- Hydrology ---
FLOW_NEIGHBOR_STEP_DEG = 0.1
FLOW_VALLEY_DEPTH_M = 50.0
FLOW_GRADIENT_REFERENCE_M_PER_DEG = 5000.0
FLOW_PRECIPITATION_REFERENCE_MM = 3000.0
# Weights of the valley, precipitation and noise terms.
FLOW_WEIGHTS = (0.4, 0.25, 0.35)
FLOW_LOWLAND_HEIGHT_M = 200.0
FLOW_LOWLAND_BOOST = 0.3
FLOW_HIGHLAND_HEIGHT_M = 3000.0
RIVER_THRESHOLD = 0.4
MAX_RIVER_WIDTH_M = 500.0

# --- Resources ---
RESOURCE_SHARPENING = {"coal": 1.5, "iron": 2.0, "oil": 1.2}
COAL_ELEVATION_BAND_M = (1500.0, 2500.0)
COAL_LATITUDE_BAND = (20.0, 60.0)
IRON_ELEVATION_BAND_M = (2000.0, 4000.0)
IRON_VOLCANIC_BONUS = 0.3
OIL_ELEVATION_LIMITS_M = (-200.0, 1500.0)
OIL_ELEVATION_PEAK_M = (100.0, 800.0)
COAL_MOISTURE_REFERENCE_MM = 1500.0
COAL_MOISTURE_FLOOR = 0.2
COAL_LATITUDE_FALLOFF_DEG = 20.0
COAL_LATITUDE_FLOOR = 0.2
IRON_HIGH_ELEVATION_FACTOR = 0.1
OIL_HIGH_ELEVATION_FACTOR = 0.05

# --- Vegetation ---
# Baseline density per biome, keyed by biome name.
VEGETATION_BIOME_BASELINE = {
    "OCEAN": 0.0,
    "DEEP_OCEAN": 0.0,
    "BEACH": 0.1,
    "ICE": 0.0,
    "SNOW": 0.02,
    "MOUNTAIN_PEAK": 0.0,
    "MOUNTAIN_TUNDRA": 0.15,
    "MOUNTAIN_FOREST": 0.6,
    "TUNDRA": 0.2,
    "TAIGA": 0.6,
    "COLD_DESERT": 0.05,
    "GRASSLAND": 0.4,
    "TEMPERATE_DECIDUOUS_FOREST": 0.75,
    "TEMPERATE_RAINFOREST": 0.9,
    "DESERT": 0.05,
    "SAVANNA": 0.35,
    "TROPICAL_SEASONAL_FOREST": 0.8,
    "TROPICAL_RAINFOREST": 1.0,
}
VEGETATION_PRECIPITATION_REFERENCE_MM = 1500.0
VEGETATION_PRECIPITATION_RANGE = (0.3, 1.2)
# Temperatures (°C) inside this band are ideal for growth.
VEGETATION_OPTIMAL_TEMP_C = (5.0, 30.0)
VEGETATION_TEMP_FALLOFF_C = 20.0
VEGETATION_MIN_TEMP_FACTOR = 0.2
# Altitude penalty: 1.0 up to the first height, 0.5 at the second, 0 at the third.
VEGETATION_ALTITUDE_PENALTY_M = (2000.0, 3000.0, 5000.0)
VEGETATION_NOISE_AMPLITUDE = 0.15

# --- Soil ---
# Base (fertility [0, 1], pH, organic matter %) per soil type name.
SOIL_PROPERTIES = {
    "NONE": (0.0, 7.0, 0.0),
    "SAND": (0.2, 7.0, 1.0),
    "CLAY": (0.6, 6.5, 4.0),
    "SILT": (0.7, 6.8, 3.0),
    "LOAM": (0.9, 6.5, 5.0),
    "PEAT": (0.5, 4.5, 60.0),
    "ROCKY": (0.1, 7.0, 0.5),
    "PERMAFROST": (0.05, 6.0, 15.0),
}
SOIL_THRESHOLDS = {
    "permafrost_max_temp_c": -10.0,
    "peat_min_precipitation_mm": 1200.0,
    "peat_max_altitude_m": 500.0,
    "rocky_min_altitude_m": 3000.0,
    "loam_precipitation_mm": (300.0, 1200.0),
    "clay_min_precipitation_mm": 1000.0,
    "clay_temp_c": (5.0, 20.0),
    "silt_precipitation_mm": (500.0, 1200.0),
}
SOIL_VEGETATION_FERTILITY_BONUS = 0.3
SOIL_VEGETATION_ACIDIFICATION = 0.5
SOIL_VEGETATION_ORGANIC_GAIN = 2.0
# Precipitation above which nutrients start to leach out.
SOIL_LEACHING_START_MM = 1500.0
SOIL_LEACHING_RANGE_MM = 5000.0
SOIL_MAX_LEACHING_PH_DROP = 1.5
# Altitude above which thin, eroded soils begin.
SOIL_EROSION_START_M = 1000.0
SOIL_EROSION_RANGE_M = 4000.0
SOIL_FOREST_PH_SHIFT = -0.5
SOIL_DESERT_PH_SHIFT = 1.0
SOIL_PH_RANGE = (4.0, 9.0)
SOIL_ORGANIC_MATTER_RANGE = (0.0, 100.0)

# --- Biome Thresholds ---
# A dictionary to hold all climate parameters that define biome transitions.
# These values are based on a simplified Whittaker biome model.
BIOME_THRESHOLDS = {
    "deep_ocean_max_height_m": -1000.0,
    "beach_max_height_m": 5.0,
    "ice_sheet_max_temp_c": -15.0,
    "ice_max_height_m": 100.0,
    "mountain_peak_min_altitude_m": 4000.0,
    "mountain_min_altitude_m": 2500.0,
    # Temperature Bands (°C)
    "cold_max_temp_c": 0.0,
    "cool_max_temp_c": 10.0,
    "temperate_max_temp_c": 20.0,
    # Moisture Bands [0, 1]
    "arid_max_moisture": 0.3,
    "temperate_wet_min_moisture": 0.6,
    "hot_desert_max_moisture": 0.2,
    "savanna_max_moisture": 0.5,
    "seasonal_forest_max_moisture": 0.7,
}

# --- Query Domain Policy ---
MIN_DETAIL_LEVEL = 0.0
DEFAULT_TIME_OF_DAY = 12.0
DEFAULT_DAY_OF_YEAR = 172
