# planet_fields/biomes.py

"""
================================================================================
BIOME CLASSIFIER
================================================================================
Classifies a point into one of a fixed set of biomes. The classification is
a strict decision order: water, beach, ice and snow, high mountains, and only
then a Whittaker lookup on temperature and moisture.

Data Contract:
---------------
- Inputs:
    - terrain_height, altitude, temperature, moisture: NumPy arrays of the
      same shape (or scalars). Terrain height is always the detail = 1 height.
    - sea_level: The configured sea level in meters.
- Outputs:
    - A uint8 array of BiomeType values.
- Side Effects: None.
- Invariants: A point is OCEAN or DEEP_OCEAN exactly when its terrain height
  is below sea level; DEEP_OCEAN exactly when it is also below -1000 m.
================================================================================
"""

from enum import IntEnum

import numpy as np

from . import climate
from . import config as DEFAULTS
from .noise_bank import NoiseFieldBank
from .terrain import get_terrain_height, surface_altitude


class BiomeType(IntEnum):
    # Cold biomes
    TUNDRA = 0
    TAIGA = 1
    # Temperate biomes
    GRASSLAND = 2
    TEMPERATE_DECIDUOUS_FOREST = 3
    TEMPERATE_RAINFOREST = 4
    # Warm/Hot biomes
    SAVANNA = 5
    TROPICAL_SEASONAL_FOREST = 6
    TROPICAL_RAINFOREST = 7
    # Dry biomes
    COLD_DESERT = 8
    DESERT = 9
    # Special biomes
    OCEAN = 10
    DEEP_OCEAN = 11
    BEACH = 12
    SNOW = 13
    ICE = 14
    # Mountain variants
    MOUNTAIN_TUNDRA = 15
    MOUNTAIN_FOREST = 16
    MOUNTAIN_PEAK = 17

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


WATER_BIOMES = frozenset({BiomeType.OCEAN, BiomeType.DEEP_OCEAN})
FOREST_BIOMES = frozenset({
    BiomeType.TAIGA,
    BiomeType.TEMPERATE_DECIDUOUS_FOREST,
    BiomeType.TEMPERATE_RAINFOREST,
    BiomeType.TROPICAL_SEASONAL_FOREST,
    BiomeType.TROPICAL_RAINFOREST,
    BiomeType.MOUNTAIN_FOREST,
})
DESERT_BIOMES = frozenset({BiomeType.DESERT, BiomeType.COLD_DESERT})


def _whittaker(temperature: np.ndarray, moisture: np.ndarray) -> np.ndarray:
    """Whittaker diagram lookup across four temperature bands."""
    thresholds = DEFAULTS.BIOME_THRESHOLDS
    arid = moisture < thresholds["arid_max_moisture"]
    wet = moisture >= thresholds["temperate_wet_min_moisture"]

    cold = np.where(arid, BiomeType.COLD_DESERT, BiomeType.TUNDRA)
    cool = np.select([arid, ~wet], [BiomeType.COLD_DESERT, BiomeType.GRASSLAND], default=BiomeType.TAIGA)
    temperate = np.select(
        [arid, ~wet],
        [BiomeType.GRASSLAND, BiomeType.TEMPERATE_DECIDUOUS_FOREST],
        default=BiomeType.TEMPERATE_RAINFOREST,
    )
    hot = np.select(
        [
            moisture < thresholds["hot_desert_max_moisture"],
            moisture < thresholds["savanna_max_moisture"],
            moisture < thresholds["seasonal_forest_max_moisture"],
        ],
        [BiomeType.DESERT, BiomeType.SAVANNA, BiomeType.TROPICAL_SEASONAL_FOREST],
        default=BiomeType.TROPICAL_RAINFOREST,
    )

    return np.select(
        [
            temperature < thresholds["cold_max_temp_c"],
            temperature < thresholds["cool_max_temp_c"],
            temperature < thresholds["temperate_max_temp_c"],
        ],
        [cold, cool, temperate],
        default=hot,
    )


def classify_biome(terrain_height, altitude, temperature, moisture, sea_level: float) -> np.ndarray:
    """
    Performs the biome classification and returns an integer array of biome
    IDs. Conditions are evaluated in order; the first match wins.
    """
    thresholds = DEFAULTS.BIOME_THRESHOLDS
    terrain_height = np.asarray(terrain_height, dtype=np.float64)
    altitude = np.asarray(altitude, dtype=np.float64)
    temperature = np.asarray(temperature, dtype=np.float64)
    moisture = np.asarray(moisture, dtype=np.float64)

    underwater = terrain_height < sea_level
    frozen = temperature < thresholds["ice_sheet_max_temp_c"]
    conditions = [
        underwater & (terrain_height < thresholds["deep_ocean_max_height_m"]),
        underwater,
        terrain_height < thresholds["beach_max_height_m"],
        frozen & (terrain_height < thresholds["ice_max_height_m"]),
        frozen,
        altitude > thresholds["mountain_peak_min_altitude_m"],
        (altitude > thresholds["mountain_min_altitude_m"]) & (temperature < thresholds["cold_max_temp_c"]),
        altitude > thresholds["mountain_min_altitude_m"],
    ]
    choices = [
        BiomeType.DEEP_OCEAN,
        BiomeType.OCEAN,
        BiomeType.BEACH,
        BiomeType.ICE,
        BiomeType.SNOW,
        BiomeType.MOUNTAIN_PEAK,
        BiomeType.MOUNTAIN_TUNDRA,
        BiomeType.MOUNTAIN_FOREST,
    ]
    biome_map = np.select(conditions, choices, default=_whittaker(temperature, moisture))
    return biome_map.astype(np.uint8)


def get_biome(bank: NoiseFieldBank, longitude, latitude, altitude=None,
              terrain_height: np.ndarray = None, temperature: np.ndarray = None,
              moisture: np.ndarray = None) -> np.ndarray:
    """Classifies the biome at a point; altitude defaults to the surface."""
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)
    if altitude is None:
        altitude = surface_altitude(terrain_height)
    if temperature is None:
        temperature = climate.get_temperature(bank, longitude, latitude, altitude)
    if moisture is None:
        moisture = climate.get_moisture(bank, longitude, latitude)
    return classify_biome(terrain_height, altitude, temperature, moisture, bank.config.sea_level)
