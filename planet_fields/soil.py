# planet_fields/soil.py

"""
================================================================================
PEDOLOGY (SOIL) LAYER
================================================================================
Classifies the soil at a point and scores its fertility, pH and organic
matter content.

Soil formation is driven by the same factors that shape the surface above it:
cold locks organic matter into permafrost, waterlogged lowlands grow peat,
mountains and eroded slopes are rocky, deserts are sandy. The numeric
properties start from a per-soil base value and are then adjusted:

  - Vegetation adds organic matter (and with it nutrients and acidity).
  - Warmth speeds up decomposition: nutrients cycle faster, but less organic
    matter accumulates.
  - Heavy precipitation leaches nutrients and lowers the pH.
  - Altitude erodes soils toward thin, neutral mineral layers.
  - Forest litter acidifies; desert evaporation leaves alkaline salts.

Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank), longitude, latitude, altitude (None for the
      surface).
    - Optional pre-computed intermediates via `gather_soil_inputs`.
- Outputs:
    - SoilType arrays (uint8), fertility in [0, 1], pH in [4, 9] and organic
      matter in percent [0, 100].
- Side Effects: None.
- Invariants: Underwater points have SoilType.NONE with zero fertility and
  zero organic matter.
================================================================================
"""

from enum import IntEnum
from typing import NamedTuple

import numpy as np

from . import climate
from . import config as DEFAULTS
from .biomes import DESERT_BIOMES, FOREST_BIOMES, BiomeType, get_biome
from .noise_bank import NoiseFieldBank
from .terrain import get_terrain_height, surface_altitude
from .vegetation import get_vegetation_density


class SoilType(IntEnum):
    NONE = 0
    SAND = 1
    CLAY = 2
    SILT = 3
    LOAM = 4
    PEAT = 5
    ROCKY = 6
    PERMAFROST = 7

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


# Base property tables indexed by SoilType value.
_BASE_FERTILITY, _BASE_PH, _BASE_ORGANIC_MATTER = (
    np.array(column, dtype=np.float64)
    for column in zip(*(DEFAULTS.SOIL_PROPERTIES[soil.name] for soil in SoilType))
)


class SoilInputs(NamedTuple):
    terrain_height: np.ndarray
    altitude: np.ndarray
    temperature: np.ndarray
    precipitation: np.ndarray
    biome: np.ndarray
    vegetation: np.ndarray


def gather_soil_inputs(bank: NoiseFieldBank, longitude, latitude, altitude=None,
                       terrain_height=None, temperature=None, precipitation=None,
                       biome=None, vegetation=None) -> SoilInputs:
    """Computes whichever soil-forming factors were not supplied by the caller."""
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
    if vegetation is None:
        vegetation = get_vegetation_density(
            bank, longitude, latitude, altitude, terrain_height=terrain_height,
            biome=biome, temperature=temperature, precipitation=precipitation,
        )
    return SoilInputs(
        np.asarray(terrain_height, dtype=np.float64),
        np.asarray(altitude, dtype=np.float64),
        np.asarray(temperature, dtype=np.float64),
        np.asarray(precipitation, dtype=np.float64),
        np.asarray(biome),
        np.asarray(vegetation, dtype=np.float64),
    )


def _in_biomes(biome: np.ndarray, members) -> np.ndarray:
    return np.isin(biome, [int(member) for member in members])


def classify_soil(inputs: SoilInputs, sea_level: float) -> np.ndarray:
    """Soil decision tree; conditions are evaluated in order."""
    thresholds = DEFAULTS.SOIL_THRESHOLDS
    temperature = inputs.temperature
    precipitation = inputs.precipitation
    altitude = inputs.altitude
    biome = inputs.biome

    loam_low, loam_high = thresholds["loam_precipitation_mm"]
    clay_low, clay_high = thresholds["clay_temp_c"]
    silt_low, silt_high = thresholds["silt_precipitation_mm"]

    conditions = [
        inputs.terrain_height < sea_level,
        (temperature < thresholds["permafrost_max_temp_c"])
        | _in_biomes(biome, (BiomeType.ICE, BiomeType.SNOW, BiomeType.MOUNTAIN_PEAK)),
        (precipitation > thresholds["peat_min_precipitation_mm"]) & (altitude < thresholds["peat_max_altitude_m"]),
        (altitude > thresholds["rocky_min_altitude_m"]) | (biome == BiomeType.MOUNTAIN_TUNDRA),
        _in_biomes(biome, DESERT_BIOMES | {BiomeType.BEACH}),
        _in_biomes(biome, (BiomeType.GRASSLAND, BiomeType.SAVANNA))
        & (precipitation >= loam_low) & (precipitation <= loam_high),
        _in_biomes(biome, (BiomeType.TEMPERATE_DECIDUOUS_FOREST, BiomeType.TEMPERATE_RAINFOREST))
        | ((precipitation > thresholds["clay_min_precipitation_mm"])
           & (temperature >= clay_low) & (temperature <= clay_high)),
        (precipitation >= silt_low) & (precipitation <= silt_high),
    ]
    choices = [
        SoilType.NONE,
        SoilType.PERMAFROST,
        SoilType.PEAT,
        SoilType.ROCKY,
        SoilType.SAND,
        SoilType.LOAM,
        SoilType.CLAY,
        SoilType.SILT,
    ]
    return np.select(conditions, choices, default=SoilType.SAND).astype(np.uint8)


def _leaching(precipitation) -> np.ndarray:
    """0 below the leaching threshold, rising to 1 over the leaching range."""
    return np.clip(
        (precipitation - DEFAULTS.SOIL_LEACHING_START_MM) / DEFAULTS.SOIL_LEACHING_RANGE_MM, 0.0, 1.0
    )


def _erosion(altitude) -> np.ndarray:
    return np.clip((altitude - DEFAULTS.SOIL_EROSION_START_M) / DEFAULTS.SOIL_EROSION_RANGE_M, 0.0, 1.0)


def _decomposition(temperature) -> np.ndarray:
    """Relative decomposition rate: slow in the cold, full speed from 20 °C."""
    return np.clip(0.5 + temperature / 40.0, 0.25, 1.0)


def compute_soil_fertility(inputs: SoilInputs, soil_type: np.ndarray) -> np.ndarray:
    soil_index = np.asarray(soil_type, dtype=np.intp)
    fertility = _BASE_FERTILITY[soil_index] + inputs.vegetation * DEFAULTS.SOIL_VEGETATION_FERTILITY_BONUS

    # 1. Nutrient cycling, half speed in the cold.
    fertility = fertility * (0.5 + 0.5 * _decomposition(inputs.temperature))
    # 2. Leaching strips up to 40% of the nutrients.
    fertility = fertility * (1.0 - 0.4 * _leaching(inputs.precipitation))
    # 3. Erosion thins the topsoil.
    fertility = fertility * (1.0 - 0.6 * _erosion(inputs.altitude))

    fertility = np.where(soil_index == SoilType.NONE, 0.0, fertility)
    return np.clip(fertility, 0.0, 1.0)


def compute_soil_ph(inputs: SoilInputs, soil_type: np.ndarray) -> np.ndarray:
    soil_index = np.asarray(soil_type, dtype=np.intp)
    ph = _BASE_PH[soil_index] - inputs.vegetation * DEFAULTS.SOIL_VEGETATION_ACIDIFICATION

    # Humic acids from fast decomposition.
    ph = ph - 0.3 * _decomposition(inputs.temperature)
    ph = ph - _leaching(inputs.precipitation) * DEFAULTS.SOIL_MAX_LEACHING_PH_DROP

    ph = ph + np.select(
        [_in_biomes(inputs.biome, FOREST_BIOMES), _in_biomes(inputs.biome, DESERT_BIOMES)],
        [DEFAULTS.SOIL_FOREST_PH_SHIFT, DEFAULTS.SOIL_DESERT_PH_SHIFT],
        default=0.0,
    )

    # Eroded soils sit on fresh parent rock and tend toward neutral.
    erosion = _erosion(inputs.altitude)
    ph = ph + (7.0 - ph) * 0.5 * erosion

    return np.clip(ph, *DEFAULTS.SOIL_PH_RANGE)


def compute_soil_organic_matter(inputs: SoilInputs, soil_type: np.ndarray) -> np.ndarray:
    soil_index = np.asarray(soil_type, dtype=np.intp)
    organic = _BASE_ORGANIC_MATTER[soil_index] * (
        1.0 + inputs.vegetation * DEFAULTS.SOIL_VEGETATION_ORGANIC_GAIN
    )

    # Cold and wet soils keep their litter; warm soils decompose it.
    organic = organic * (1.5 - _decomposition(inputs.temperature))
    organic = organic * (1.0 + 0.3 * _leaching(inputs.precipitation))
    organic = organic * (1.0 - 0.7 * _erosion(inputs.altitude))

    organic = np.where(soil_index == SoilType.NONE, 0.0, organic)
    return np.clip(organic, *DEFAULTS.SOIL_ORGANIC_MATTER_RANGE)


def get_soil_type(bank: NoiseFieldBank, longitude, latitude, altitude=None, **intermediates) -> np.ndarray:
    inputs = gather_soil_inputs(bank, longitude, latitude, altitude, **intermediates)
    return classify_soil(inputs, bank.config.sea_level)


def get_soil_fertility(bank: NoiseFieldBank, longitude, latitude, altitude=None, **intermediates) -> np.ndarray:
    inputs = gather_soil_inputs(bank, longitude, latitude, altitude, **intermediates)
    return compute_soil_fertility(inputs, classify_soil(inputs, bank.config.sea_level))


def get_soil_ph(bank: NoiseFieldBank, longitude, latitude, altitude=None, **intermediates) -> np.ndarray:
    inputs = gather_soil_inputs(bank, longitude, latitude, altitude, **intermediates)
    return compute_soil_ph(inputs, classify_soil(inputs, bank.config.sea_level))


def get_soil_organic_matter(bank: NoiseFieldBank, longitude, latitude, altitude=None,
                            **intermediates) -> np.ndarray:
    inputs = gather_soil_inputs(bank, longitude, latitude, altitude, **intermediates)
    return compute_soil_organic_matter(inputs, classify_soil(inputs, bank.config.sea_level))
