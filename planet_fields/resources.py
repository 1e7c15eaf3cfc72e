# planet_fields/resources.py

"""
================================================================================
GEOLOGY & RESOURCES
================================================================================
Scores coal, iron and oil deposits. Each deposit combines its own noise field
with elevation and climate suitability curves that mimic where such deposits
form: coal in old swamp lowlands of the temperate belts, iron in ancient
seabeds and near volcanoes, oil in sedimentary basins.

Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank): The world's noise fields and configuration.
    - longitude, latitude: NumPy arrays (or scalars).
    - Optional pre-computed terrain height and precipitation.
- Outputs:
    - Deposit scores in [0, 1]; exactly 0 at or below sea level.
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import climate
from . import config as DEFAULTS
from . import noise_bank as fields
from .noise_bank import NoiseFieldBank
from .terrain import get_terrain_height, is_volcano, surface_altitude


def _linear_falloff(value, start, end, floor=0.0) -> np.ndarray:
    """1.0 up to `start`, falling linearly to `floor` at `end`."""
    t = np.clip((value - start) / (end - start), 0.0, 1.0)
    return 1.0 - t * (1.0 - floor)


def _on_land(bank: NoiseFieldBank, terrain_height, score) -> np.ndarray:
    score = np.where(terrain_height > bank.config.sea_level, score, 0.0)
    return np.clip(score, 0.0, 1.0)


def get_coal_deposit(bank: NoiseFieldBank, longitude, latitude,
                     terrain_height: np.ndarray = None, precipitation: np.ndarray = None) -> np.ndarray:
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)
    if precipitation is None:
        precipitation = climate.get_precipitation(
            bank, longitude, latitude, surface_altitude(terrain_height), terrain_height=terrain_height,
        )

    noise = bank.sample_unit(fields.COAL, longitude, latitude)
    elevation_factor = _linear_falloff(terrain_height, *DEFAULTS.COAL_ELEVATION_BAND_M)
    moisture_factor = np.clip(
        precipitation / DEFAULTS.COAL_MOISTURE_REFERENCE_MM, DEFAULTS.COAL_MOISTURE_FLOOR, 1.0
    )

    # Temperate and subtropical belts, fading toward the equator and poles.
    low, high = DEFAULTS.COAL_LATITUDE_BAND
    falloff = DEFAULTS.COAL_LATITUDE_FALLOFF_DEG
    abs_latitude = np.abs(latitude)
    outside = np.maximum(low - abs_latitude, abs_latitude - high)
    latitude_factor = np.clip(1.0 - np.maximum(outside, 0.0) / falloff, DEFAULTS.COAL_LATITUDE_FLOOR, 1.0)

    score = noise * elevation_factor * moisture_factor * latitude_factor
    return _on_land(bank, terrain_height, score ** DEFAULTS.RESOURCE_SHARPENING["coal"])


def get_iron_deposit(bank: NoiseFieldBank, longitude, latitude,
                     terrain_height: np.ndarray = None, volcanic: np.ndarray = None) -> np.ndarray:
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)
    if volcanic is None:
        volcanic = is_volcano(bank, longitude, latitude)

    noise = bank.sample_unit(fields.IRON, longitude, latitude)
    elevation_factor = _linear_falloff(
        terrain_height, *DEFAULTS.IRON_ELEVATION_BAND_M, floor=DEFAULTS.IRON_HIGH_ELEVATION_FACTOR
    )
    score = noise ** DEFAULTS.RESOURCE_SHARPENING["iron"] * elevation_factor
    score = score + np.where(volcanic, DEFAULTS.IRON_VOLCANIC_BONUS, 0.0)
    return _on_land(bank, terrain_height, score)


def get_oil_deposit(bank: NoiseFieldBank, longitude, latitude,
                    terrain_height: np.ndarray = None) -> np.ndarray:
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)

    noise = bank.sample_unit(fields.OIL, longitude, latitude)

    # Sedimentary basins: ramp up to the peak band, then taper off.
    lowest, highest = DEFAULTS.OIL_ELEVATION_LIMITS_M
    peak_low, peak_high = DEFAULTS.OIL_ELEVATION_PEAK_M
    rising = np.clip((terrain_height - lowest) / (peak_low - lowest), 0.0, 1.0)
    falling = _linear_falloff(terrain_height, peak_high, highest, floor=DEFAULTS.OIL_HIGH_ELEVATION_FACTOR)
    inside = (terrain_height >= lowest) & (terrain_height <= highest)
    elevation_factor = np.where(inside, np.minimum(rising, falling), 0.0)

    score = noise ** DEFAULTS.RESOURCE_SHARPENING["oil"] * elevation_factor
    return _on_land(bank, terrain_height, score)
