# planet_fields/world_config.py

"""
================================================================================
WORLD CONFIGURATION
================================================================================
The immutable configuration record of a generated planet.

Data Contract:
---------------
- Inputs:
    - Keyword arguments, or a dictionary of parameters via `from_dict`, which
      override the internal defaults in `config.py`.
- Outputs:
    - A frozen WorldConfig value. Changing a world means building a new value
      (see `replace`) and handing it to `World.set_config`.
- Side Effects: `from_dict` logs a warning for keys it does not recognise.
- Invariants: A constructed WorldConfig has passed validation; an invalid
  combination of parameters raises ValueError (or TypeError) instead.
================================================================================
"""

import dataclasses
import logging
from dataclasses import dataclass

from . import config as DEFAULTS


@dataclass(frozen=True)
class WorldConfig:
    """Seed, physical constants and noise tuning for one planet."""

    seed: int = DEFAULTS.DEFAULT_SEED
    world_scale: float = DEFAULTS.DEFAULT_WORLD_SCALE
    day_of_year: int = DEFAULTS.DEFAULT_DAY_OF_YEAR

    # Temperature parameters (Celsius)
    equator_temperature: float = DEFAULTS.DEFAULT_EQUATOR_TEMPERATURE_C
    pole_temperature: float = DEFAULTS.DEFAULT_POLE_TEMPERATURE_C
    temperature_lapse_rate: float = DEFAULTS.DEFAULT_LAPSE_RATE_C_PER_KM

    # Terrain parameters (meters)
    sea_level: float = DEFAULTS.DEFAULT_SEA_LEVEL_M
    max_terrain_height: float = DEFAULTS.DEFAULT_MAX_TERRAIN_HEIGHT_M

    # Terrain noise
    terrain_frequency: float = DEFAULTS.TERRAIN_FREQUENCY
    terrain_octaves: int = DEFAULTS.TERRAIN_OCTAVES
    terrain_lacunarity: float = DEFAULTS.TERRAIN_LACUNARITY
    terrain_gain: float = DEFAULTS.TERRAIN_GAIN
    terrain_detail_octaves: int = DEFAULTS.TERRAIN_DETAIL_OCTAVES

    # Moisture noise
    moisture_frequency: float = DEFAULTS.MOISTURE_FREQUENCY
    moisture_octaves: int = DEFAULTS.MOISTURE_OCTAVES

    # Remaining field families
    temperature_variation_frequency: float = DEFAULTS.TEMPERATURE_VARIATION_FREQUENCY
    wind_frequency: float = DEFAULTS.WIND_FREQUENCY
    river_frequency: float = DEFAULTS.RIVER_FREQUENCY
    river_octaves: int = DEFAULTS.RIVER_OCTAVES
    volcano_frequency: float = DEFAULTS.VOLCANO_FREQUENCY
    resource_frequency: float = DEFAULTS.RESOURCE_FREQUENCY
    resource_octaves: int = DEFAULTS.RESOURCE_OCTAVES
    cloud_frequency: float = DEFAULTS.CLOUD_FREQUENCY
    cloud_octaves: int = DEFAULTS.CLOUD_OCTAVES
    weather_frequency: float = DEFAULTS.WEATHER_FREQUENCY
    pressure_frequency: float = DEFAULTS.PRESSURE_FREQUENCY
    vegetation_frequency: float = DEFAULTS.VEGETATION_FREQUENCY

    def __post_init__(self):
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise TypeError(f"seed must be an integer, got {type(self.seed).__name__}")
        if self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        if not 0 <= self.day_of_year <= DEFAULTS.DAYS_PER_YEAR - 1:
            raise ValueError(f"day_of_year must be in [0, {DEFAULTS.DAYS_PER_YEAR - 1}], got {self.day_of_year}")
        if self.world_scale <= 0:
            raise ValueError(f"world_scale must be positive, got {self.world_scale}")
        if self.max_terrain_height <= 0:
            raise ValueError(f"max_terrain_height must be positive, got {self.max_terrain_height}")
        if self.terrain_lacunarity <= 0:
            raise ValueError(f"terrain_lacunarity must be positive, got {self.terrain_lacunarity}")
        if not 0 < self.terrain_gain <= 1:
            raise ValueError(f"terrain_gain must be in (0, 1], got {self.terrain_gain}")

        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if field.name.endswith('_frequency') and value <= 0:
                raise ValueError(f"{field.name} must be positive, got {value}")
            if field.name.endswith('_octaves') and (not isinstance(value, int) or value < 1):
                raise ValueError(f"{field.name} must be an integer >= 1, got {value}")

    @classmethod
    def from_dict(cls, values: dict, logger: logging.Logger = None) -> 'WorldConfig':
        """
        Builds a configuration from a dictionary of user parameters. Missing
        keys fall back to the internal defaults; unknown keys are ignored.
        """
        logger = logger or logging.getLogger(__name__)
        known = {field.name for field in dataclasses.fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
        return cls(**{key: value for key, value in values.items() if key in known})

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    def replace(self, **changes) -> 'WorldConfig':
        """Returns a copy of this configuration with the given fields changed."""
        return dataclasses.replace(self, **changes)
