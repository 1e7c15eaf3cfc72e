# planet_fields/world.py

"""
================================================================================
WORLD FACADE
================================================================================
This module provides the user-facing `World` class, the single query surface
of a generated planet. A World owns one configuration and the noise field
bank built from it; every environmental attribute is answered by a pure,
deterministic point query.

Data Contract:
---------------
- Inputs (on initialization):
    - config (WorldConfig | dict | None): The world configuration. A dict
      overrides the internal defaults; None uses them.
    - logger: An optional Python logging object. Defaults to this module's
      logger.
- Outputs (from methods):
    - Scalars for scalar inputs (float, bool or enum member), NumPy arrays
      for array inputs.
- Side Effects: Logs on construction and reconfiguration.
- Invariants:
    - Every query normalizes its inputs the same way: latitude clamped to
      [-90, 90], longitude wrapped into [-180, 180), time of day wrapped into
      [0, 24), detail clamped to >= 0. Altitude is never clamped.
    - The configuration lives on the noise bank, so `set_config` swaps a
      single reference. A failed reconfiguration leaves the world unchanged.
================================================================================
"""

import logging
from collections.abc import Mapping

import numpy as np

from . import atmosphere, climate, hydrology, resources, soil, solar, terrain, weather
from . import config as DEFAULTS
from .batch import BatchResult, QueryPoint, run_batch, to_python
from .biomes import BiomeType, get_biome
from .climate import PrecipitationType
from .noise_bank import NoiseFieldBank
from .projection import clamp_detail, clamp_latitude, normalize_longitude, wrap_time_of_day
from .soil import SoilType
from .vegetation import get_vegetation_density
from .world_config import WorldConfig


def _coerce_config(config, logger: logging.Logger) -> WorldConfig:
    if config is None:
        return WorldConfig()
    if isinstance(config, WorldConfig):
        return config
    if isinstance(config, Mapping):
        return WorldConfig.from_dict(config, logger=logger)
    raise TypeError(f"Expected a WorldConfig, a mapping or None, got {type(config).__name__}")


def _result(value, enum_type=None):
    """Plain Python scalars for 0-d results, arrays otherwise."""
    if np.ndim(value) == 0:
        return to_python(value, enum_type)
    return value


class World:
    """
    Deterministic point queries for one procedurally generated planet.
    """
    def __init__(self, config=None, logger: logging.Logger = None):
        """
        Initializes the world and builds every noise field.

        Args:
            config (WorldConfig | dict, optional): The world configuration.
            logger (logging.Logger, optional): The logger instance for all output.
        """
        self.logger = logger or logging.getLogger(__name__)
        self._bank = self._build_bank(_coerce_config(config, self.logger))
        self.logger.info(
            f"World initialized with seed: {self._bank.config.seed} "
            f"(day of year {self._bank.config.day_of_year})"
        )

    def _build_bank(self, config: WorldConfig) -> NoiseFieldBank:
        bank = NoiseFieldBank(config)
        self.logger.debug(f"Built noise field bank with {len(bank.fields)} fields.")
        return bank

    def __copy__(self):
        raise TypeError("World objects cannot be copied; create a new World from get_config()")

    def __deepcopy__(self, memo):
        raise TypeError("World objects cannot be copied; create a new World from get_config()")

    def __repr__(self):
        return f"World(seed={self._bank.config.seed}, day_of_year={self._bank.config.day_of_year})"

    # --- Configuration ---

    def get_config(self) -> WorldConfig:
        return self._bank.config

    def set_config(self, config) -> None:
        """
        Replaces the configuration and regenerates every noise field. The new
        bank is fully built before it replaces the old one.
        """
        new_config = _coerce_config(config, self.logger)
        new_bank = self._build_bank(new_config)
        self._bank = new_bank
        self.logger.info(
            f"World reconfigured with seed: {new_config.seed} (day of year {new_config.day_of_year})"
        )

    def get_season(self) -> str:
        return solar.get_season(self._bank.config.day_of_year)

    # --- Internal helpers ---

    @staticmethod
    def _normalize(longitude, latitude):
        return normalize_longitude(longitude), clamp_latitude(latitude)

    @staticmethod
    def _surface(bank, longitude, latitude, altitude):
        """Returns (terrain height, altitude), defaulting altitude to the surface."""
        terrain_height = terrain.get_terrain_height(bank, longitude, latitude)
        if altitude is None:
            altitude = terrain.surface_altitude(terrain_height)
        return terrain_height, np.asarray(altitude, dtype=np.float64)

    # --- Terrain & Biome ---

    def get_terrain_height(self, longitude, latitude, detail=1.0):
        """Terrain height in meters; negative values are below sea level."""
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(terrain.get_terrain_height(self._bank, longitude, latitude, clamp_detail(detail)))

    def get_biome(self, longitude, latitude, altitude=None):
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        terrain_height, altitude = self._surface(bank, longitude, latitude, altitude)
        biome = get_biome(bank, longitude, latitude, altitude, terrain_height=terrain_height)
        return _result(biome, BiomeType)

    # --- Climate ---

    def get_temperature(self, longitude, latitude, altitude=None):
        """Static temperature in Celsius (no diurnal cycle)."""
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        _, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(climate.get_temperature(bank, longitude, latitude, altitude))

    def get_temperature_at_time(self, longitude, latitude, altitude=None, time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        terrain_height, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(weather.get_temperature_at_time(
            bank, longitude, latitude, altitude, wrap_time_of_day(time_of_day), terrain_height=terrain_height,
        ))

    def get_moisture(self, longitude, latitude):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(climate.get_moisture(self._bank, longitude, latitude))

    def get_precipitation(self, longitude, latitude, altitude=None):
        """Annual precipitation in mm."""
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        terrain_height, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(climate.get_precipitation(
            bank, longitude, latitude, altitude, terrain_height=terrain_height,
        ))

    def get_precipitation_type(self, longitude, latitude, altitude=None):
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        terrain_height, altitude = self._surface(bank, longitude, latitude, altitude)
        temperature = climate.get_temperature(bank, longitude, latitude, altitude)
        precipitation = climate.get_precipitation(
            bank, longitude, latitude, altitude, terrain_height=terrain_height, temperature=temperature,
        )
        return _result(climate.classify_precipitation_type(temperature, precipitation), PrecipitationType)

    def get_current_precipitation(self, longitude, latitude, altitude=None,
                                  time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        """Current precipitation intensity [0, 1] at the given time of day."""
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        terrain_height, altitude = self._surface(bank, longitude, latitude, altitude)
        precipitation = climate.get_precipitation(
            bank, longitude, latitude, altitude, terrain_height=terrain_height,
        )
        return _result(weather.get_current_precipitation(
            bank, longitude, latitude, altitude, wrap_time_of_day(time_of_day), precipitation=precipitation,
        ))

    def get_humidity(self, longitude, latitude, altitude=None):
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        _, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(climate.get_humidity(bank, longitude, latitude, altitude))

    # --- Atmosphere & Weather ---

    def get_air_pressure(self, longitude, latitude, altitude=None):
        """Barometric pressure in millibars; only the altitude matters."""
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        if altitude is None:
            _, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(atmosphere.get_air_pressure(altitude))

    def get_pressure_at_location(self, longitude, latitude, altitude=None,
                                 time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        _, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(weather.get_pressure_at_location(
            bank, longitude, latitude, altitude, wrap_time_of_day(time_of_day),
        ))

    def get_pressure_gradient(self, longitude, latitude, time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        """Pressure gradient magnitude in mb per degree."""
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(weather.get_pressure_gradient(
            self._bank, longitude, latitude, wrap_time_of_day(time_of_day),
        ))

    def is_storm_front(self, longitude, latitude, time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(weather.is_storm_front(
            self._bank, longitude, latitude, wrap_time_of_day(time_of_day),
        ))

    def get_cloud_density(self, longitude, latitude, altitude=None):
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        terrain_height, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(atmosphere.get_cloud_density(
            bank, longitude, latitude, altitude, terrain_height=terrain_height,
        ))

    def get_wind_speed(self, longitude, latitude, altitude=None):
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        terrain_height, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(atmosphere.get_wind_speed(
            bank, longitude, latitude, altitude, terrain_height=terrain_height,
        ))

    def get_wind_direction(self, longitude, latitude, altitude=None):
        """Direction the wind blows from, in degrees (0 = North, 90 = East)."""
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(atmosphere.get_wind_direction(self._bank, longitude, latitude, altitude))

    def get_current_wind_speed(self, longitude, latitude, altitude=None,
                               time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        bank = self._bank
        longitude, latitude = self._normalize(longitude, latitude)
        terrain_height, altitude = self._surface(bank, longitude, latitude, altitude)
        return _result(weather.get_current_wind_speed(
            bank, longitude, latitude, altitude, wrap_time_of_day(time_of_day), terrain_height=terrain_height,
        ))

    def get_current_wind_direction(self, longitude, latitude, altitude=None,
                                   time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(weather.get_current_wind_direction(
            self._bank, longitude, latitude, altitude, wrap_time_of_day(time_of_day),
        ))

    # --- Solar ---

    def get_solar_angle(self, longitude, latitude, time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        """Solar elevation in degrees; negative when the sun is below the horizon."""
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(solar.get_solar_angle(
            self._bank.config, longitude, latitude, wrap_time_of_day(time_of_day),
        ))

    def get_insolation(self, longitude, latitude, time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        """Incoming solar radiation at the surface in W/m²."""
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(solar.get_insolation(self._bank, longitude, latitude, wrap_time_of_day(time_of_day)))

    def is_daylight(self, longitude, latitude, time_of_day=DEFAULTS.DEFAULT_TIME_OF_DAY):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(solar.is_daylight(
            self._bank.config, longitude, latitude, wrap_time_of_day(time_of_day),
        ))

    # --- Hydrology ---

    def get_flow_accumulation(self, longitude, latitude):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(hydrology.get_flow_accumulation(self._bank, longitude, latitude))

    def is_river(self, longitude, latitude):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(hydrology.is_river(self._bank, longitude, latitude))

    def get_river_width(self, longitude, latitude):
        """River width in meters; 0 where there is no river."""
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(hydrology.get_river_width(self._bank, longitude, latitude))

    # --- Geology & Resources ---

    def is_volcano(self, longitude, latitude):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(terrain.is_volcano(self._bank, longitude, latitude))

    def get_coal_deposit(self, longitude, latitude):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(resources.get_coal_deposit(self._bank, longitude, latitude))

    def get_iron_deposit(self, longitude, latitude):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(resources.get_iron_deposit(self._bank, longitude, latitude))

    def get_oil_deposit(self, longitude, latitude):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(resources.get_oil_deposit(self._bank, longitude, latitude))

    # --- Soil & Vegetation ---

    def get_soil_type(self, longitude, latitude, altitude=None):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(soil.get_soil_type(self._bank, longitude, latitude, altitude), SoilType)

    def get_soil_fertility(self, longitude, latitude, altitude=None):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(soil.get_soil_fertility(self._bank, longitude, latitude, altitude))

    def get_soil_ph(self, longitude, latitude, altitude=None):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(soil.get_soil_ph(self._bank, longitude, latitude, altitude))

    def get_soil_organic_matter(self, longitude, latitude, altitude=None):
        """Soil organic matter content in percent."""
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(soil.get_soil_organic_matter(self._bank, longitude, latitude, altitude))

    def get_vegetation_density(self, longitude, latitude, altitude=None):
        longitude, latitude = self._normalize(longitude, latitude)
        return _result(get_vegetation_density(self._bank, longitude, latitude, altitude))

    # --- Batch ---

    def batch_query(self, points, fields) -> BatchResult:
        """
        Evaluates the requested fields for every point in one vectorized pass.

        Args:
            points (Iterable[QueryPoint]): The query points, in result order.
            fields (Iterable[BatchField | str] | str): Requested fields, or a
                single field. Unknown identifiers are skipped with a warning.
        """
        points = [p if isinstance(p, QueryPoint) else QueryPoint(*p) for p in points]
        return run_batch(self._bank, points, fields, self.logger)
