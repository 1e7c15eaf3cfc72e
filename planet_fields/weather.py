# planet_fields/weather.py

"""
================================================================================
TIME-VARYING WEATHER
================================================================================
Quantities that change with the time of day: diurnal temperature, current
precipitation, synoptic pressure systems and storm fronts, and the current
wind.

The weather fields are advected along the z axis of noise space by the
absolute weather time (day_of_year * 24 + time_of_day), so the state is
continuous across midnight and across days.

Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank): The world's noise fields and configuration.
    - longitude, latitude, altitude: NumPy arrays (or scalars).
    - time_of_day: Hours in [0, 24).
    - Optional pre-computed intermediates to avoid recalculation.
- Outputs:
    - Temperature in Celsius, current precipitation intensity in [0, 1],
      pressure in millibars, pressure gradients in mb per degree, storm
      front flags, current wind speed (m/s) and direction (degrees).
- Side Effects: None.
================================================================================
"""

import numpy as np

from . import atmosphere, climate, solar
from . import config as DEFAULTS
from . import noise_bank as fields
from .noise_bank import NoiseFieldBank
from .projection import geo_to_sphere
from .terrain import get_terrain_height


def _weather_time(config, time_of_day) -> np.ndarray:
    return config.day_of_year * 24.0 + np.asarray(time_of_day, dtype=np.float64)


def sample_weather(bank: NoiseFieldBank, longitude, latitude, time_of_day, channel: str) -> np.ndarray:
    """Samples one channel of the time-advected weather field, mapped to [0, 1]."""
    x, y, z = geo_to_sphere(longitude, latitude)
    drift = _weather_time(bank.config, time_of_day) * DEFAULTS.WEATHER_DRIFT_PER_HOUR
    offset = DEFAULTS.WEATHER_CHANNEL_OFFSETS[channel]
    return (bank.sample(fields.WEATHER, x + offset, y, z + drift) + 1.0) * 0.5


def get_temperature_at_time(bank: NoiseFieldBank, longitude, latitude, altitude, time_of_day,
                            temperature: np.ndarray = None, humidity: np.ndarray = None,
                            cloud_density: np.ndarray = None, terrain_height: np.ndarray = None,
                            surface_cloud_density: np.ndarray = None) -> np.ndarray:
    """
    Temperature including the diurnal cycle: solar heating by day, radiative
    cooling at night. Clouds insulate at night and shade by day; humid air
    damps both swings. Solar heating follows the insolation at the ground,
    which passes the surface cloud layer whatever the query altitude.
    """
    if temperature is None:
        temperature = climate.get_temperature(bank, longitude, latitude, altitude)
    if humidity is None:
        humidity = climate.get_humidity(bank, longitude, latitude, altitude, temperature=temperature)
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)
    if cloud_density is None:
        cloud_density = atmosphere.get_cloud_density(
            bank, longitude, latitude, altitude,
            humidity=humidity, temperature=temperature, terrain_height=terrain_height,
        )

    solar_angle = solar.get_solar_angle(bank.config, longitude, latitude, time_of_day)
    insolation = solar.get_insolation(
        bank, longitude, latitude, time_of_day,
        solar_angle=solar_angle, cloud_density=surface_cloud_density, terrain_height=terrain_height,
    )

    # 1. Daytime: heating proportional to insolation, minus cloud shading.
    day_delta = (
        insolation / 1000.0 * DEFAULTS.SOLAR_HEATING_C_PER_KW
        - cloud_density * DEFAULTS.DAYTIME_CLOUD_COOLING_C
    )

    # 2. Night: 5-15 °C of cooling, less under clouds, ramped in over twilight.
    min_cooling, max_cooling = DEFAULTS.NIGHT_COOLING_RANGE_C
    cooling = min_cooling + (max_cooling - min_cooling) * (1.0 - cloud_density)
    darkness = np.clip(-solar_angle / DEFAULTS.TWILIGHT_DEPTH_DEG, 0.0, 1.0)
    night_delta = -cooling * darkness

    delta = np.where(solar_angle > 0.0, day_delta, night_delta)

    # 3. Dry climates swing more.
    damping = 1.0 - humidity * DEFAULTS.HUMIDITY_DAMPING
    return temperature + delta * damping


def get_current_precipitation(bank: NoiseFieldBank, longitude, latitude, altitude, time_of_day,
                              precipitation: np.ndarray = None) -> np.ndarray:
    """
    Current precipitation intensity [0, 1]. Wetter climates rain more often;
    intensity is biased toward light rain.
    """
    if precipitation is None:
        precipitation = climate.get_precipitation(bank, longitude, latitude, altitude)

    probability = np.clip(
        precipitation / DEFAULTS.RAIN_PROBABILITY_REFERENCE_MM, 0.0, DEFAULTS.MAX_RAIN_PROBABILITY
    )
    sample = sample_weather(bank, longitude, latitude, time_of_day, "precipitation")

    dry_cutoff = 1.0 - probability
    raining = (sample > dry_cutoff) & (probability > 0.0)
    safe_probability = np.where(probability > 0.0, probability, 1.0)
    strength = (sample - dry_cutoff) / safe_probability
    intensity = np.where(raining, strength * strength, 0.0)

    return np.clip(intensity, 0.0, 1.0)


def get_pressure_at_location(bank: NoiseFieldBank, longitude, latitude, altitude, time_of_day) -> np.ndarray:
    """
    Altitude pressure plus a drifting synoptic high/low term and the
    subtropical high-pressure belts near ±30°.
    """
    x, y, z = geo_to_sphere(longitude, latitude)
    drift = _weather_time(bank.config, time_of_day) * DEFAULTS.PRESSURE_DRIFT_PER_HOUR
    synoptic = bank.sample(fields.PRESSURE, x, y, z + drift) * DEFAULTS.SYNOPTIC_PRESSURE_AMPLITUDE_MB

    distance = (np.abs(latitude) - DEFAULTS.SUBTROPICAL_HIGH_LATITUDE) / DEFAULTS.SUBTROPICAL_HIGH_WIDTH_DEG
    subtropical = DEFAULTS.SUBTROPICAL_HIGH_MB * np.exp(-distance * distance)

    return atmosphere.get_air_pressure(altitude) + synoptic + subtropical


def get_pressure_gradient(bank: NoiseFieldBank, longitude, latitude, time_of_day) -> np.ndarray:
    """
    Magnitude of the horizontal pressure gradient in mb per degree, from
    central differences one degree north/south/east/west at a fixed altitude.
    """
    step = DEFAULTS.PRESSURE_GRADIENT_STEP_DEG
    altitude = DEFAULTS.PRESSURE_GRADIENT_ALTITUDE_M
    longitude = np.asarray(longitude, dtype=np.float64)
    latitude = np.asarray(latitude, dtype=np.float64)

    # Neighbours past a pole or the date line are still valid sphere points.
    north = get_pressure_at_location(bank, longitude, latitude + step, altitude, time_of_day)
    south = get_pressure_at_location(bank, longitude, latitude - step, altitude, time_of_day)
    east = get_pressure_at_location(bank, longitude + step, latitude, altitude, time_of_day)
    west = get_pressure_at_location(bank, longitude - step, latitude, altitude, time_of_day)

    d_north = (north - south) / (2.0 * step)
    d_east = (east - west) / (2.0 * step)
    return np.sqrt(d_north * d_north + d_east * d_east)


def is_storm_front(bank: NoiseFieldBank, longitude, latitude, time_of_day,
                   pressure_gradient: np.ndarray = None) -> np.ndarray:
    if pressure_gradient is None:
        pressure_gradient = get_pressure_gradient(bank, longitude, latitude, time_of_day)
    return pressure_gradient > DEFAULTS.STORM_FRONT_GRADIENT_MB_PER_DEG


def get_current_wind_speed(bank: NoiseFieldBank, longitude, latitude, altitude, time_of_day,
                           wind_speed: np.ndarray = None, terrain_height: np.ndarray = None) -> np.ndarray:
    """Climatological speed modulated ±50% by the passing weather."""
    if wind_speed is None:
        wind_speed = atmosphere.get_wind_speed(bank, longitude, latitude, altitude, terrain_height=terrain_height)
    swing = sample_weather(bank, longitude, latitude, time_of_day, "wind_speed") * 2.0 - 1.0
    return np.maximum(wind_speed * (1.0 + swing * DEFAULTS.CURRENT_WIND_SPEED_SWING), 0.0)


def get_current_wind_direction(bank: NoiseFieldBank, longitude, latitude, altitude, time_of_day,
                               wind_direction: np.ndarray = None) -> np.ndarray:
    """Climatological direction veered up to ±45° by the passing weather."""
    if wind_direction is None:
        wind_direction = atmosphere.get_wind_direction(bank, longitude, latitude, altitude)
    swing = sample_weather(bank, longitude, latitude, time_of_day, "wind_direction") * 2.0 - 1.0
    return np.mod(wind_direction + swing * DEFAULTS.CURRENT_WIND_DIRECTION_SWING_DEG, 360.0)
