# planet_fields/noise_bank.py

"""
================================================================================
NOISE FIELD BANK
================================================================================
The fixed catalogue of independently seeded noise fields a world samples from.

Data Contract:
---------------
- Inputs (on initialization):
    - config (WorldConfig): The seed and noise tuning of the world.
- Outputs (from methods):
    - NumPy arrays of noise values in [-1, 1].
- Side Effects: None after construction.
- Invariants: Every field's seed is `config.seed + <fixed offset>`, so fields
  never correlate with each other and a new seed regenerates every field.
  A bank is never mutated; reconfiguring a world builds a new bank.
================================================================================
"""

from typing import NamedTuple

import numpy as np

from . import config as DEFAULTS
from .noise import NoiseFamily, NoiseField
from .projection import geo_to_sphere
from .world_config import WorldConfig

TERRAIN = "terrain"
TERRAIN_DETAIL = "terrain_detail"
MOISTURE = "moisture"
TEMPERATURE_VARIATION = "temperature_variation"
WIND = "wind"
RIVER = "river"
VOLCANO = "volcano"
COAL = "coal"
IRON = "iron"
OIL = "oil"
CLOUD = "cloud"
WEATHER = "weather"
PRESSURE = "pressure"
VEGETATION = "vegetation"


class FieldSpec(NamedTuple):
    family: NoiseFamily
    seed_offset: int
    frequency: float
    octaves: int
    lacunarity: float
    gain: float


def build_field_specs(config: WorldConfig) -> dict[str, FieldSpec]:
    """Derives the full field catalogue from a configuration."""
    gradient = NoiseFamily.GRADIENT
    lacunarity = config.terrain_lacunarity
    gain = config.terrain_gain
    # Fine detail continues where the base terrain octaves stop.
    detail_frequency = config.terrain_frequency * lacunarity ** config.terrain_octaves

    specs = {
        TERRAIN: FieldSpec(gradient, DEFAULTS.TERRAIN_SEED_OFFSET, config.terrain_frequency,
                           config.terrain_octaves, lacunarity, gain),
        TERRAIN_DETAIL: FieldSpec(gradient, DEFAULTS.TERRAIN_DETAIL_SEED_OFFSET, detail_frequency,
                                  config.terrain_detail_octaves, lacunarity, gain),
        MOISTURE: FieldSpec(gradient, DEFAULTS.MOISTURE_SEED_OFFSET, config.moisture_frequency,
                            config.moisture_octaves, 2.0, 0.5),
        TEMPERATURE_VARIATION: FieldSpec(gradient, DEFAULTS.TEMPERATURE_VARIATION_SEED_OFFSET,
                                         config.temperature_variation_frequency,
                                         DEFAULTS.TEMPERATURE_VARIATION_OCTAVES, 2.0, 0.5),
        WIND: FieldSpec(gradient, DEFAULTS.WIND_SEED_OFFSET, config.wind_frequency,
                        DEFAULTS.WIND_OCTAVES, 2.0, 0.5),
        RIVER: FieldSpec(gradient, DEFAULTS.RIVER_SEED_OFFSET, config.river_frequency,
                         config.river_octaves, 2.0, 0.5),
        VOLCANO: FieldSpec(NoiseFamily.CELLULAR, DEFAULTS.VOLCANO_SEED_OFFSET, config.volcano_frequency,
                           1, 2.0, 0.5),
        COAL: FieldSpec(gradient, DEFAULTS.COAL_SEED_OFFSET, config.resource_frequency,
                        config.resource_octaves, 2.0, 0.5),
        IRON: FieldSpec(gradient, DEFAULTS.IRON_SEED_OFFSET, config.resource_frequency,
                        config.resource_octaves, 2.0, 0.5),
        OIL: FieldSpec(gradient, DEFAULTS.OIL_SEED_OFFSET, config.resource_frequency,
                       config.resource_octaves, 2.0, 0.5),
        CLOUD: FieldSpec(gradient, DEFAULTS.CLOUD_SEED_OFFSET, config.cloud_frequency,
                         config.cloud_octaves, 2.0, 0.5),
        WEATHER: FieldSpec(gradient, DEFAULTS.WEATHER_SEED_OFFSET, config.weather_frequency,
                           DEFAULTS.WEATHER_OCTAVES, 2.0, 0.5),
        PRESSURE: FieldSpec(gradient, DEFAULTS.PRESSURE_SEED_OFFSET, config.pressure_frequency,
                            DEFAULTS.PRESSURE_OCTAVES, 2.0, 0.5),
        VEGETATION: FieldSpec(gradient, DEFAULTS.VEGETATION_SEED_OFFSET, config.vegetation_frequency,
                              DEFAULTS.VEGETATION_OCTAVES, 2.0, 0.5),
    }
    return specs


class NoiseFieldBank:
    """
    Owns one NoiseField per catalogue entry, all derived from one configuration.
    """
    def __init__(self, config: WorldConfig):
        self.config = config
        self.fields = {}
        for name, spec in build_field_specs(config).items():
            self.fields[name] = NoiseField(
                spec.family,
                seed=config.seed + spec.seed_offset,
                frequency=spec.frequency * config.world_scale,
                octaves=spec.octaves,
                lacunarity=spec.lacunarity,
                gain=spec.gain,
            )

    def sample(self, name: str, x, y, z) -> np.ndarray:
        """Samples a named field at sphere coordinates."""
        return self.fields[name].sample(x, y, z)

    def sample_geo(self, name: str, longitude, latitude) -> np.ndarray:
        """Samples a named field at geographic coordinates."""
        return self.fields[name].sample(*geo_to_sphere(longitude, latitude))

    def sample_unit(self, name: str, longitude, latitude) -> np.ndarray:
        """Samples a named field and maps the result from [-1, 1] to [0, 1]."""
        return (self.sample_geo(name, longitude, latitude) + 1.0) * 0.5
