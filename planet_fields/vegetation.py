# planet_fields/vegetation.py

"""
================================================================================
VEGETATION DENSITY
================================================================================
Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank), longitude, latitude, altitude.
    - Optional pre-computed biome, temperature and precipitation.
- Outputs:
    - Vegetation density in [0, 1].
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import climate
from . import config as DEFAULTS
from . import noise_bank as fields
from .biomes import BiomeType, get_biome
from .noise_bank import NoiseFieldBank
from .terrain import get_terrain_height, surface_altitude

# Lookup table indexed by BiomeType value.
_BIOME_BASELINE = np.array(
    [DEFAULTS.VEGETATION_BIOME_BASELINE[biome.name] for biome in BiomeType],
    dtype=np.float64,
)


def _temperature_factor(temperature) -> np.ndarray:
    low, high = DEFAULTS.VEGETATION_OPTIMAL_TEMP_C
    falloff = DEFAULTS.VEGETATION_TEMP_FALLOFF_C
    distance = np.maximum(low - temperature, 0.0) + np.maximum(temperature - high, 0.0)
    return np.clip(1.0 - distance / falloff, DEFAULTS.VEGETATION_MIN_TEMP_FACTOR, 1.0)


def _altitude_factor(altitude) -> np.ndarray:
    start, half, end = DEFAULTS.VEGETATION_ALTITUDE_PENALTY_M
    altitude = np.asarray(altitude, dtype=np.float64)
    return np.select(
        [altitude <= start, altitude <= half],
        [1.0, 1.0 - 0.5 * (altitude - start) / (half - start)],
        default=np.clip(0.5 * (1.0 - (altitude - half) / (end - half)), 0.0, 0.5),
    )


def get_vegetation_density(bank: NoiseFieldBank, longitude, latitude, altitude=None,
                           terrain_height: np.ndarray = None, biome: np.ndarray = None,
                           temperature: np.ndarray = None, precipitation: np.ndarray = None) -> np.ndarray:
    """
    Biome baseline density, scaled by water supply, temperature suitability
    and altitude, with a little noise for natural patchiness.
    """
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)
    if altitude is None:
        altitude = surface_altitude(terrain_height)
    if temperature is None:
        temperature = climate.get_temperature(bank, longitude, latitude, altitude)
    if precipitation is None:
        precipitation = climate.get_precipitation(
            bank, longitude, latitude, altitude, terrain_height=terrain_height, temperature=temperature,
        )
    if biome is None:
        biome = get_biome(bank, longitude, latitude, altitude,
                          terrain_height=terrain_height, temperature=temperature)

    baseline = _BIOME_BASELINE[np.asarray(biome, dtype=np.intp)]
    precipitation_factor = np.clip(
        precipitation / DEFAULTS.VEGETATION_PRECIPITATION_REFERENCE_MM,
        *DEFAULTS.VEGETATION_PRECIPITATION_RANGE,
    )
    patchiness = 1.0 + bank.sample_geo(fields.VEGETATION, longitude, latitude) * DEFAULTS.VEGETATION_NOISE_AMPLITUDE

    density = (
        baseline
        * precipitation_factor
        * _temperature_factor(temperature)
        * _altitude_factor(altitude)
        * patchiness
    )
    return np.clip(density, 0.0, 1.0)
