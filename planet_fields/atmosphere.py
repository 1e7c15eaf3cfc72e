# planet_fields/atmosphere.py

"""
================================================================================
STATIC ATMOSPHERE
================================================================================
Time-independent atmospheric quantities: barometric air pressure, cloud
density and the climatological wind field.

Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank): The world's noise fields and configuration.
    - longitude, latitude, altitude: NumPy arrays (or scalars).
    - Optional pre-computed intermediates to avoid recalculation.
- Outputs:
    - Pressure in millibars, cloud density in [0, 1], wind speed in m/s and
      wind direction in degrees [0, 360) (the direction the wind blows from,
      0 = North, 90 = East).
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import climate
from . import config as DEFAULTS
from . import noise_bank as fields
from .noise_bank import NoiseFieldBank
from .projection import geo_to_sphere
from .terrain import get_terrain_height


def get_air_pressure(altitude) -> np.ndarray:
    """Barometric formula: P = P0 * exp(-altitude / scale_height)."""
    altitude = np.asarray(altitude, dtype=np.float64)
    return DEFAULTS.SEA_LEVEL_PRESSURE_MB * np.exp(-altitude / DEFAULTS.ATMOSPHERE_SCALE_HEIGHT_M)


def get_cloud_density(bank: NoiseFieldBank, longitude, latitude, altitude,
                      humidity: np.ndarray = None, precipitation: np.ndarray = None,
                      temperature: np.ndarray = None, terrain_height: np.ndarray = None) -> np.ndarray:
    """
    Cloud density [0, 1]. Humidity is the dominant term, precipitation adds to
    it and noise gives the cover its texture. Clouds favour 10-25 °C air.
    """
    if temperature is None:
        temperature = climate.get_temperature(bank, longitude, latitude, altitude)
    if humidity is None:
        humidity = climate.get_humidity(bank, longitude, latitude, altitude, temperature=temperature)
    if precipitation is None:
        if terrain_height is None:
            terrain_height = get_terrain_height(bank, longitude, latitude)
        precipitation = climate.get_precipitation(
            bank, longitude, latitude, altitude,
            terrain_height=terrain_height, temperature=temperature,
        )

    # 1. Base cloud formation from humidity and precipitation.
    cloud_base = (
        humidity * DEFAULTS.CLOUD_HUMIDITY_WEIGHT
        + precipitation / DEFAULTS.CLOUD_PRECIPITATION_REFERENCE_MM * DEFAULTS.CLOUD_PRECIPITATION_WEIGHT
    )

    # 2. Detailed cloud texture from noise, squared for patchiness.
    texture = bank.sample_unit(fields.CLOUD, longitude, latitude)
    density = cloud_base * (0.6 + texture * texture * 0.4)

    # 3. Temperature suitability.
    temp_factor = np.select(
        [temperature < -10.0, temperature > 35.0, (temperature >= 10.0) & (temperature <= 25.0)],
        [0.6, 0.7, 1.3],
        default=1.0,
    )
    density = density * temp_factor

    # 4. Sharpen edges into distinct cloud masses.
    edge = DEFAULTS.CLOUD_EDGE_THRESHOLD
    density = np.where(density > edge, edge + (density - edge) * 1.5, density * 0.7)

    return np.clip(density, 0.0, 1.0)


def _wind_band_table(abs_latitude: np.ndarray) -> tuple[np.ndarray, ...]:
    """Looks up (min speed, max speed, northern direction, southern direction)."""
    trade = DEFAULTS.WIND_BANDS["trade"]
    westerly = DEFAULTS.WIND_BANDS["westerly"]
    polar = DEFAULTS.WIND_BANDS["polar"]
    conditions = [abs_latitude < trade[0], abs_latitude < westerly[0]]
    return tuple(
        np.select(conditions, [trade[i], westerly[i]], default=polar[i])
        for i in range(1, 5)
    )


def _surface_wind_factor(altitude, terrain_height) -> np.ndarray:
    """Roughness slows wind close to hilly ground; wind strengthens aloft."""
    altitude = np.asarray(altitude, dtype=np.float64)
    ground = np.maximum(terrain_height, 0.0)
    roughness = np.clip(ground / DEFAULTS.WIND_ROUGHNESS_HEIGHT_M, 0.0, 1.0)
    near_surface = (altitude - ground) < DEFAULTS.WIND_SURFACE_LAYER_M
    friction = np.where(near_surface, 1.0 - roughness * DEFAULTS.WIND_ROUGHNESS_MAX_REDUCTION, 1.0)
    aloft = 1.0 + np.clip(altitude / DEFAULTS.WIND_ALTITUDE_REFERENCE_M, 0.0, 1.0)
    return friction * aloft


def get_wind_speed(bank: NoiseFieldBank, longitude, latitude, altitude,
                   terrain_height: np.ndarray = None) -> np.ndarray:
    """Climatological wind speed in m/s from the trade/westerly/polar bands."""
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)

    min_speed, max_speed, _, _ = _wind_band_table(np.abs(latitude))
    noise = bank.sample_unit(fields.WIND, longitude, latitude)
    speed = min_speed + (max_speed - min_speed) * noise
    return speed * _surface_wind_factor(altitude, terrain_height)


def get_wind_direction(bank: NoiseFieldBank, longitude, latitude, altitude=None) -> np.ndarray:
    """
    Climatological wind direction in degrees. Each band has a
    hemisphere-dependent base direction, perturbed by a second wind-noise
    channel. Altitude does not change the direction.
    """
    _, _, north_dir, south_dir = _wind_band_table(np.abs(latitude))
    base_direction = np.where(np.asarray(latitude) >= 0.0, north_dir, south_dir)

    x, y, z = geo_to_sphere(longitude, latitude)
    jitter = bank.sample(fields.WIND, x + DEFAULTS.WIND_DIRECTION_CHANNEL_OFFSET, y, z)
    return np.mod(base_direction + jitter * DEFAULTS.WIND_DIRECTION_JITTER_DEG, 360.0)
