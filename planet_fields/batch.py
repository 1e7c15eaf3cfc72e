# planet_fields/batch.py

"""
================================================================================
BATCH QUERY FACADE
================================================================================
Evaluates a set of requested fields over many query points at once.

All layer functions are vectorized, so a batch is a single evaluation over
arrays. Shared intermediates (terrain height, the default altitude, moisture,
temperature, precipitation, biome, vegetation, flow) live on a lazily
evaluated context: each is computed at most once per batch, and only if a
requested field needs it.

Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank): The world's noise fields and configuration.
    - points: A sequence of QueryPoint.
    - fields: BatchField members or their string values.
    - logger: A Python logging object.
- Outputs:
    - A BatchResult holding one column per recognised field, each the same
      length and order as `points`.
- Side Effects: Logs a warning for every unrecognised field identifier.
- Invariants: Every value equals what the matching single-point query on
  the World returns for the same point.
================================================================================
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from . import atmosphere, climate, hydrology, resources, soil, solar, weather
from . import config as DEFAULTS
from .biomes import BiomeType, get_biome
from .climate import PrecipitationType
from .noise_bank import NoiseFieldBank
from .projection import clamp_detail, clamp_latitude, normalize_longitude, wrap_time_of_day
from .soil import SoilType
from .terrain import get_terrain_height, is_volcano, surface_altitude
from .vegetation import get_vegetation_density


@dataclass(frozen=True)
class QueryPoint:
    """One point query. Altitude None means the surface (terrain height or 0)."""
    longitude: float
    latitude: float
    altitude: Optional[float] = None
    time_of_day: float = DEFAULTS.DEFAULT_TIME_OF_DAY
    detail: float = 1.0


class BatchField(str, Enum):
    TERRAIN_HEIGHT = "terrain_height"
    BIOME = "biome"
    TEMPERATURE = "temperature"
    TEMPERATURE_AT_TIME = "temperature_at_time"
    MOISTURE = "moisture"
    PRECIPITATION = "precipitation"
    PRECIPITATION_TYPE = "precipitation_type"
    CURRENT_PRECIPITATION = "current_precipitation"
    HUMIDITY = "humidity"
    AIR_PRESSURE = "air_pressure"
    PRESSURE_AT_LOCATION = "pressure_at_location"
    PRESSURE_GRADIENT = "pressure_gradient"
    STORM_FRONT = "storm_front"
    CLOUD_DENSITY = "cloud_density"
    WIND_SPEED = "wind_speed"
    WIND_DIRECTION = "wind_direction"
    CURRENT_WIND_SPEED = "current_wind_speed"
    CURRENT_WIND_DIRECTION = "current_wind_direction"
    SOLAR_ANGLE = "solar_angle"
    INSOLATION = "insolation"
    DAYLIGHT = "daylight"
    FLOW_ACCUMULATION = "flow_accumulation"
    RIVER = "river"
    RIVER_WIDTH = "river_width"
    VOLCANO = "volcano"
    COAL_DEPOSIT = "coal_deposit"
    IRON_DEPOSIT = "iron_deposit"
    OIL_DEPOSIT = "oil_deposit"
    SOIL_TYPE = "soil_type"
    SOIL_FERTILITY = "soil_fertility"
    SOIL_PH = "soil_ph"
    SOIL_ORGANIC_MATTER = "soil_organic_matter"
    VEGETATION_DENSITY = "vegetation_density"


# Fields whose values are members of a closed enumeration.
ENUM_FIELDS = {
    BatchField.BIOME: BiomeType,
    BatchField.PRECIPITATION_TYPE: PrecipitationType,
    BatchField.SOIL_TYPE: SoilType,
}


def to_python(value, enum_type=None):
    """Converts a 0-d result into a plain Python scalar (or enum member)."""
    if enum_type is not None:
        return enum_type(int(value))
    return np.asarray(value).item()


class BatchContext:
    """
    Normalized query arrays plus the shared intermediates of one batch.
    Every intermediate is a cached property, so it is computed on first use
    and reused by every field that needs it.
    """
    def __init__(self, bank: NoiseFieldBank, points: Sequence[QueryPoint]):
        self.bank = bank
        self.longitude = normalize_longitude([p.longitude for p in points])
        self.latitude = clamp_latitude([p.latitude for p in points])
        self.time_of_day = wrap_time_of_day([p.time_of_day for p in points])
        self.detail = clamp_detail([p.detail for p in points])
        self._given_altitude = np.array(
            [np.nan if p.altitude is None else p.altitude for p in points], dtype=np.float64
        )

    @property
    def location(self):
        return self.bank, self.longitude, self.latitude

    @cached_property
    def terrain_height(self) -> np.ndarray:
        return get_terrain_height(*self.location)

    @cached_property
    def altitude(self) -> np.ndarray:
        missing = np.isnan(self._given_altitude)
        if not np.any(missing):
            return self._given_altitude
        return np.where(missing, surface_altitude(self.terrain_height), self._given_altitude)

    @cached_property
    def moisture(self) -> np.ndarray:
        return climate.get_moisture(*self.location)

    @cached_property
    def temperature(self) -> np.ndarray:
        return climate.get_temperature(*self.location, self.altitude)

    @cached_property
    def precipitation(self) -> np.ndarray:
        return climate.get_precipitation(
            *self.location, self.altitude,
            terrain_height=self.terrain_height, moisture=self.moisture, temperature=self.temperature,
        )

    @cached_property
    def humidity(self) -> np.ndarray:
        return climate.get_humidity(
            *self.location, self.altitude, moisture=self.moisture, temperature=self.temperature,
        )

    @cached_property
    def cloud_density(self) -> np.ndarray:
        return atmosphere.get_cloud_density(
            *self.location, self.altitude,
            humidity=self.humidity, precipitation=self.precipitation,
            temperature=self.temperature, terrain_height=self.terrain_height,
        )

    @cached_property
    def surface_cloud_density(self) -> np.ndarray:
        """Cloud cover over the ground; insolation ignores the query altitude."""
        if not np.any(~np.isnan(self._given_altitude)):
            return self.cloud_density
        return atmosphere.get_cloud_density(
            *self.location, surface_altitude(self.terrain_height), terrain_height=self.terrain_height,
        )

    @cached_property
    def wind_speed(self) -> np.ndarray:
        return atmosphere.get_wind_speed(*self.location, self.altitude, terrain_height=self.terrain_height)

    @cached_property
    def wind_direction(self) -> np.ndarray:
        return atmosphere.get_wind_direction(*self.location, self.altitude)

    @cached_property
    def solar_angle(self) -> np.ndarray:
        return solar.get_solar_angle(self.bank.config, self.longitude, self.latitude, self.time_of_day)

    @cached_property
    def pressure_gradient(self) -> np.ndarray:
        return weather.get_pressure_gradient(*self.location, self.time_of_day)

    @cached_property
    def surface_precipitation(self) -> np.ndarray:
        """Precipitation at the surface; hydrology and resources ignore the query altitude."""
        if not np.any(~np.isnan(self._given_altitude)):
            return self.precipitation
        return climate.get_precipitation(
            *self.location, surface_altitude(self.terrain_height), terrain_height=self.terrain_height,
        )

    @cached_property
    def flow(self) -> np.ndarray:
        return hydrology.get_flow_accumulation(
            *self.location, terrain_height=self.terrain_height, precipitation=self.surface_precipitation,
        )

    @cached_property
    def volcanic(self) -> np.ndarray:
        return is_volcano(*self.location)

    @cached_property
    def biome(self) -> np.ndarray:
        return get_biome(
            *self.location, self.altitude,
            terrain_height=self.terrain_height, temperature=self.temperature, moisture=self.moisture,
        )

    @cached_property
    def vegetation(self) -> np.ndarray:
        return get_vegetation_density(
            *self.location, self.altitude, terrain_height=self.terrain_height,
            biome=self.biome, temperature=self.temperature, precipitation=self.precipitation,
        )

    @cached_property
    def soil_inputs(self) -> soil.SoilInputs:
        return soil.gather_soil_inputs(
            *self.location, self.altitude,
            terrain_height=self.terrain_height, temperature=self.temperature,
            precipitation=self.precipitation, biome=self.biome, vegetation=self.vegetation,
        )

    @cached_property
    def soil_type(self) -> np.ndarray:
        return soil.classify_soil(self.soil_inputs, self.bank.config.sea_level)


def _terrain_at_detail(ctx: BatchContext) -> np.ndarray:
    if np.any(ctx.detail > 1.0):
        return get_terrain_height(*ctx.location, ctx.detail)
    return ctx.terrain_height


# Evaluation recipe per field, reading shared intermediates from the context.
_FIELD_EVALUATORS = {
    BatchField.TERRAIN_HEIGHT: _terrain_at_detail,
    BatchField.BIOME: lambda ctx: ctx.biome,
    BatchField.TEMPERATURE: lambda ctx: ctx.temperature,
    BatchField.TEMPERATURE_AT_TIME: lambda ctx: weather.get_temperature_at_time(
        *ctx.location, ctx.altitude, ctx.time_of_day,
        temperature=ctx.temperature, humidity=ctx.humidity, cloud_density=ctx.cloud_density,
        terrain_height=ctx.terrain_height, surface_cloud_density=ctx.surface_cloud_density,
    ),
    BatchField.MOISTURE: lambda ctx: ctx.moisture,
    BatchField.PRECIPITATION: lambda ctx: ctx.precipitation,
    BatchField.PRECIPITATION_TYPE: lambda ctx: climate.classify_precipitation_type(
        ctx.temperature, ctx.precipitation,
    ),
    BatchField.CURRENT_PRECIPITATION: lambda ctx: weather.get_current_precipitation(
        *ctx.location, ctx.altitude, ctx.time_of_day, precipitation=ctx.precipitation,
    ),
    BatchField.HUMIDITY: lambda ctx: ctx.humidity,
    BatchField.AIR_PRESSURE: lambda ctx: atmosphere.get_air_pressure(ctx.altitude),
    BatchField.PRESSURE_AT_LOCATION: lambda ctx: weather.get_pressure_at_location(
        *ctx.location, ctx.altitude, ctx.time_of_day,
    ),
    BatchField.PRESSURE_GRADIENT: lambda ctx: ctx.pressure_gradient,
    BatchField.STORM_FRONT: lambda ctx: weather.is_storm_front(
        *ctx.location, ctx.time_of_day, pressure_gradient=ctx.pressure_gradient,
    ),
    BatchField.CLOUD_DENSITY: lambda ctx: ctx.cloud_density,
    BatchField.WIND_SPEED: lambda ctx: ctx.wind_speed,
    BatchField.WIND_DIRECTION: lambda ctx: ctx.wind_direction,
    BatchField.CURRENT_WIND_SPEED: lambda ctx: weather.get_current_wind_speed(
        *ctx.location, ctx.altitude, ctx.time_of_day, wind_speed=ctx.wind_speed,
    ),
    BatchField.CURRENT_WIND_DIRECTION: lambda ctx: weather.get_current_wind_direction(
        *ctx.location, ctx.altitude, ctx.time_of_day, wind_direction=ctx.wind_direction,
    ),
    BatchField.SOLAR_ANGLE: lambda ctx: ctx.solar_angle,
    BatchField.INSOLATION: lambda ctx: solar.get_insolation(
        *ctx.location, ctx.time_of_day, solar_angle=ctx.solar_angle, cloud_density=ctx.surface_cloud_density,
    ),
    BatchField.DAYLIGHT: lambda ctx: ctx.solar_angle > 0.0,
    BatchField.FLOW_ACCUMULATION: lambda ctx: ctx.flow,
    BatchField.RIVER: lambda ctx: hydrology.is_river(*ctx.location, flow=ctx.flow),
    BatchField.RIVER_WIDTH: lambda ctx: hydrology.get_river_width(
        *ctx.location, flow=ctx.flow,
        terrain_height=ctx.terrain_height, precipitation=ctx.surface_precipitation,
    ),
    BatchField.VOLCANO: lambda ctx: ctx.volcanic,
    BatchField.COAL_DEPOSIT: lambda ctx: resources.get_coal_deposit(
        *ctx.location, terrain_height=ctx.terrain_height, precipitation=ctx.surface_precipitation,
    ),
    BatchField.IRON_DEPOSIT: lambda ctx: resources.get_iron_deposit(
        *ctx.location, terrain_height=ctx.terrain_height, volcanic=ctx.volcanic,
    ),
    BatchField.OIL_DEPOSIT: lambda ctx: resources.get_oil_deposit(
        *ctx.location, terrain_height=ctx.terrain_height,
    ),
    BatchField.SOIL_TYPE: lambda ctx: ctx.soil_type,
    BatchField.SOIL_FERTILITY: lambda ctx: soil.compute_soil_fertility(ctx.soil_inputs, ctx.soil_type),
    BatchField.SOIL_PH: lambda ctx: soil.compute_soil_ph(ctx.soil_inputs, ctx.soil_type),
    BatchField.SOIL_ORGANIC_MATTER: lambda ctx: soil.compute_soil_organic_matter(ctx.soil_inputs, ctx.soil_type),
    BatchField.VEGETATION_DENSITY: lambda ctx: ctx.vegetation,
}


class BatchResult:
    """
    Parallel result columns, one per requested field, in input point order.
    Index with a BatchField (or its string value) for a column, or with an
    integer for one point's values as a dict.
    """
    def __init__(self, columns: dict, size: int):
        self._columns = columns
        self._size = size

    @property
    def fields(self) -> tuple:
        return tuple(self._columns)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, field) -> bool:
        try:
            return BatchField(field) in self._columns
        except ValueError:
            return False

    def __getitem__(self, key):
        if isinstance(key, (int, np.integer)) and not isinstance(key, bool):
            if not -self._size <= key < self._size:
                raise IndexError(f"Point index {key} out of range for batch of {self._size}")
            return {
                field: to_python(column[key], ENUM_FIELDS.get(field))
                for field, column in self._columns.items()
            }
        return self._columns[BatchField(key)]

    def __repr__(self):
        names = ", ".join(field.value for field in self._columns)
        return f"BatchResult(points={self._size}, fields=[{names}])"


def resolve_fields(fields: Union[str, Iterable[Union[BatchField, str]]], logger: logging.Logger) -> list:
    """Maps identifiers to BatchField members, dropping duplicates and unknowns."""
    if isinstance(fields, str):
        fields = [fields]
    resolved = []
    for field in fields:
        try:
            member = BatchField(field)
        except ValueError:
            logger.warning(f"Ignoring unsupported batch field: {field!r}")
            continue
        if member not in resolved:
            resolved.append(member)
    return resolved


def run_batch(bank: NoiseFieldBank, points: Sequence[QueryPoint], fields, logger: logging.Logger) -> BatchResult:
    """Evaluates the requested fields over all points."""
    points = list(points)
    requested = resolve_fields(fields, logger)
    logger.debug(f"Evaluating {len(requested)} fields over {len(points)} points.")

    if not points:
        return BatchResult({field: np.empty(0) for field in requested}, 0)

    ctx = BatchContext(bank, points)
    columns = {field: np.asarray(_FIELD_EVALUATORS[field](ctx)) for field in requested}
    return BatchResult(columns, len(points))
