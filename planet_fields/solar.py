# planet_fields/solar.py

"""
================================================================================
SOLAR GEOMETRY
================================================================================
Sun position, incoming radiation and the season for the configured day of
year.

Data Contract:
---------------
- Inputs:
    - config / bank: The world's configuration (day_of_year) and noise fields.
    - longitude, latitude: NumPy arrays (or scalars) of normalized degrees.
    - time_of_day: Local mean time at longitude 0, in hours [0, 24).
- Outputs:
    - Solar elevation angle in degrees, insolation in W/m² within
      [0, MAX_INSOLATION_W_M2], daylight flags.
- Side Effects: None.
- Invariants: Insolation is exactly 0 whenever the sun is at or below the
  horizon.
================================================================================
"""

import numpy as np

from . import atmosphere
from . import config as DEFAULTS
from .noise_bank import NoiseFieldBank
from .terrain import get_terrain_height, surface_altitude


def get_solar_declination(day_of_year) -> np.ndarray:
    """Cosine approximation of the sun's declination in degrees."""
    angle = 2.0 * np.pi * (np.asarray(day_of_year, dtype=np.float64) + 10.0) / DEFAULTS.DAYS_PER_YEAR
    return -DEFAULTS.AXIAL_TILT_DEG * np.cos(angle)


def get_solar_angle(config, longitude, latitude, time_of_day) -> np.ndarray:
    """Solar elevation above the horizon in degrees (negative at night)."""
    declination = np.radians(get_solar_declination(config.day_of_year))
    lat_rad = np.radians(latitude)

    # Local solar time shifts by one hour for every 15 degrees of longitude.
    solar_time = np.asarray(time_of_day, dtype=np.float64) + np.asarray(longitude) / 15.0
    hour_angle = np.radians(15.0 * (solar_time - 12.0))

    sin_elevation = (
        np.sin(lat_rad) * np.sin(declination)
        + np.cos(lat_rad) * np.cos(declination) * np.cos(hour_angle)
    )
    return np.degrees(np.arcsin(np.clip(sin_elevation, -1.0, 1.0)))


def is_daylight(config, longitude, latitude, time_of_day) -> np.ndarray:
    return get_solar_angle(config, longitude, latitude, time_of_day) > 0.0


def get_insolation(bank: NoiseFieldBank, longitude, latitude, time_of_day,
                   solar_angle: np.ndarray = None, cloud_density: np.ndarray = None,
                   terrain_height: np.ndarray = None) -> np.ndarray:
    """
    Incoming solar radiation at the surface in W/m². Clear-sky radiation falls
    off with the air mass the light crosses; clouds block part of the rest.
    """
    if solar_angle is None:
        solar_angle = get_solar_angle(bank.config, longitude, latitude, time_of_day)
    if cloud_density is None:
        if terrain_height is None:
            terrain_height = get_terrain_height(bank, longitude, latitude)
        cloud_density = atmosphere.get_cloud_density(
            bank, longitude, latitude, surface_altitude(terrain_height), terrain_height=terrain_height,
        )

    sin_elevation = np.sin(np.radians(solar_angle))
    safe_sin = np.where(sin_elevation > 0.0, sin_elevation, 1.0)
    air_mass = np.clip(1.0 / safe_sin, *DEFAULTS.AIR_MASS_RANGE)
    transmission = DEFAULTS.ATMOSPHERIC_TRANSMITTANCE ** (air_mass ** 0.678)

    clear_sky = DEFAULTS.SOLAR_CONSTANT_W_M2 * sin_elevation * transmission
    cloud_blocking = 1.0 - cloud_density * DEFAULTS.CLOUD_RADIATION_BLOCKING
    insolation = np.where(solar_angle > 0.0, clear_sky * cloud_blocking, 0.0)

    return np.clip(insolation, 0.0, DEFAULTS.MAX_INSOLATION_W_M2)


def get_season(day_of_year: int) -> str:
    """Meteorological season name for the northern hemisphere."""
    index = ((day_of_year + 10) // 91) % 4
    return DEFAULTS.SEASON_NAMES[index]
