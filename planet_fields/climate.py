# planet_fields/climate.py

"""
================================================================================
CLIMATE LAYER
================================================================================
Static climate quantities: moisture, temperature, annual precipitation,
precipitation type and relative humidity.

Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank): The world's noise fields and configuration.
    - longitude, latitude, altitude: NumPy arrays (or scalars). Altitude is in
      meters; surface queries pass max(terrain height, 0).
    - Optional pre-computed intermediates (terrain_height, moisture,
      temperature) to avoid recalculating them.
- Outputs:
    - Moisture and humidity in [0, 1], temperature in Celsius, precipitation
      in mm per year within [0, MAX_ANNUAL_PRECIPITATION_MM].
- Side Effects: None.
================================================================================
"""

from enum import IntEnum

import numpy as np

from . import config as DEFAULTS
from . import noise_bank as fields
from .noise_bank import NoiseFieldBank
from .terrain import get_terrain_height


class PrecipitationType(IntEnum):
    NONE = 0
    RAIN = 1
    SNOW = 2
    SLEET = 3

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


def get_moisture(bank: NoiseFieldBank, longitude, latitude) -> np.ndarray:
    """Noise moisture blended with a latitude term that peaks at the equator."""
    noise = bank.sample_unit(fields.MOISTURE, longitude, latitude)
    latitude_factor = 1.0 - np.abs(latitude) / 90.0
    weight = DEFAULTS.MOISTURE_LATITUDE_WEIGHT
    return np.clip(noise * (1.0 - weight) + latitude_factor * weight, 0.0, 1.0)


def get_base_temperature(config, latitude, altitude) -> np.ndarray:
    """
    Linear equator-to-pole interpolation, minus the lapse-rate cooling for the
    given altitude. Contains no noise.
    """
    latitude_factor = np.abs(latitude) / 90.0
    sea_level_temp_c = (
        config.equator_temperature
        - (config.equator_temperature - config.pole_temperature) * latitude_factor
    )
    altitude_drop_c = np.asarray(altitude, dtype=np.float64) / 1000.0 * config.temperature_lapse_rate
    return sea_level_temp_c - altitude_drop_c


def get_temperature(bank: NoiseFieldBank, longitude, latitude, altitude) -> np.ndarray:
    """Base temperature plus a small (±TEMPERATURE_VARIATION_C) local variation."""
    base_temp_c = get_base_temperature(bank.config, latitude, altitude)
    variation = bank.sample_geo(fields.TEMPERATURE_VARIATION, longitude, latitude)
    return base_temp_c + variation * DEFAULTS.TEMPERATURE_VARIATION_C


def get_precipitation(bank: NoiseFieldBank, longitude, latitude, altitude,
                      terrain_height: np.ndarray = None, moisture: np.ndarray = None,
                      temperature: np.ndarray = None) -> np.ndarray:
    """
    Annual precipitation in mm. Can accept pre-computed terrain height,
    moisture and temperature to avoid recalculation.
    """
    if moisture is None:
        moisture = get_moisture(bank, longitude, latitude)
    if temperature is None:
        temperature = get_temperature(bank, longitude, latitude, altitude)
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)

    # 1. Base precipitation from moisture.
    precipitation = moisture * DEFAULTS.BASE_PRECIPITATION_MM

    # 2. Warmer air holds more moisture.
    low, high = DEFAULTS.PRECIPITATION_CAPACITY_RANGE
    precipitation = precipitation * np.clip((temperature + 10.0) / 40.0, low, high)

    # 3. Mountain slopes capture moisture; very high altitudes are dry.
    band_low, band_high = DEFAULTS.OROGRAPHIC_BAND_M
    orographic = (terrain_height > band_low) & (terrain_height < band_high)
    high_and_dry = ~orographic & (np.asarray(altitude) > DEFAULTS.HIGH_ALTITUDE_DRY_M)
    precipitation = np.where(orographic, precipitation * DEFAULTS.OROGRAPHIC_BOOST, precipitation)
    precipitation = np.where(high_and_dry, precipitation * DEFAULTS.HIGH_ALTITUDE_DRY_FACTOR, precipitation)

    return np.clip(precipitation, 0.0, DEFAULTS.MAX_ANNUAL_PRECIPITATION_MM)


def classify_precipitation_type(temperature, precipitation) -> np.ndarray:
    """Returns an array of PrecipitationType values."""
    conditions = [
        np.asarray(precipitation) < DEFAULTS.MIN_PRECIPITATION_FOR_TYPE_MM,
        np.asarray(temperature) < DEFAULTS.SNOW_MAX_TEMP_C,
        np.asarray(temperature) < DEFAULTS.SLEET_MAX_TEMP_C,
    ]
    choices = [PrecipitationType.NONE, PrecipitationType.SNOW, PrecipitationType.SLEET]
    return np.select(conditions, choices, default=PrecipitationType.RAIN).astype(np.uint8)


def get_humidity(bank: NoiseFieldBank, longitude, latitude, altitude,
                 moisture: np.ndarray = None, temperature: np.ndarray = None) -> np.ndarray:
    """
    Relative humidity [0, 1]. Cold air has a higher relative humidity for the
    same absolute moisture; very high altitudes are dry.
    """
    if moisture is None:
        moisture = get_moisture(bank, longitude, latitude)
    if temperature is None:
        temperature = get_temperature(bank, longitude, latitude, altitude)

    temp_factor = 1.0 - np.clip((temperature - 10.0) / 40.0, 0.0, 0.5)
    humidity = moisture * (0.5 + temp_factor)

    altitude = np.asarray(altitude, dtype=np.float64)
    dry_altitude = DEFAULTS.HUMIDITY_DRY_ALTITUDE_M
    altitude_factor = np.clip(1.0 - (altitude - dry_altitude) / 5000.0, 0.2, 1.0)
    humidity = np.where(altitude > dry_altitude, humidity * altitude_factor, humidity)

    return np.clip(humidity, 0.0, 1.0)
