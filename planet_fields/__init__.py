# planet_fields/__init__.py

# This file makes the 'planet_fields' directory a Python package.
# It also defines the public API of the package.

from .world import World
from .world_config import WorldConfig
from .batch import BatchField, BatchResult, QueryPoint
from .biomes import BiomeType
from .climate import PrecipitationType
from .soil import SoilType
from .projection import geo_to_sphere

__all__ = [
    "World",
    "WorldConfig",
    "BatchField",
    "BatchResult",
    "QueryPoint",
    "BiomeType",
    "PrecipitationType",
    "SoilType",
    "geo_to_sphere",
]
