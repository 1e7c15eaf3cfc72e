# planet_fields/terrain.py

"""
================================================================================
TERRAIN HEIGHT FIELD
================================================================================
Shapes the base terrain noise into ocean basins and continents, optionally
blends in fine detail for zoomed-in views, and raises volcano cones.

Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank): The world's noise fields and configuration.
    - longitude, latitude: NumPy arrays (or scalars) of normalized degrees.
    - detail: Level-of-detail multiplier. Values <= 1 add no extra detail.
- Outputs:
    - Height in meters relative to the datum; negative is below sea level.
      Always within [-MAX_OCEAN_DEPTH_M, max_terrain_height].
- Side Effects: None.
- Invariants: Volcano placement and the land/ocean partition used for climate
  and biome queries (detail = 1) do not depend on the detail level.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from . import noise_bank as fields
from .noise_bank import NoiseFieldBank
from .projection import geo_to_sphere


def shape_raw_noise(raw: np.ndarray, max_terrain_height: float) -> np.ndarray:
    """
    Applies the asymmetric hypsometric curve: a steep quartic falloff below
    zero (ocean) and a gentler power curve above zero (land), then scales to
    meters.
    """
    ocean = -(raw ** 4) * DEFAULTS.MAX_OCEAN_DEPTH_M
    land = np.power(np.maximum(raw, 0.0), DEFAULTS.LAND_SHAPING_EXPONENT) * max_terrain_height
    return np.where(raw < 0.0, ocean, land)


def continental_noise(bank: NoiseFieldBank, x, y, z) -> np.ndarray:
    """Terrain noise in [-1, 1] with the ocean half stretched into the deep basins."""
    raw = bank.sample(fields.TERRAIN, x, y, z)
    return np.where(raw < 0.0, np.maximum(raw * DEFAULTS.OCEAN_BASIN_CONTRAST, -1.0), raw)


def _detail_weight(detail: np.ndarray) -> np.ndarray:
    """Smoothstep blend weight: 0 at detail 1, 1 at TERRAIN_DETAIL_FULL_LEVEL."""
    t = np.clip((detail - 1.0) / (DEFAULTS.TERRAIN_DETAIL_FULL_LEVEL - 1.0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def _volcano_cells(bank: NoiseFieldBank, x, y, z) -> tuple[np.ndarray, np.ndarray]:
    """Returns (proximity to the cone center in [0, 1], inside-cone mask)."""
    cell = bank.sample(fields.VOLCANO, x, y, z)
    threshold = DEFAULTS.VOLCANO_THRESHOLD
    proximity = np.clip(1.0 - (cell + 1.0) / (threshold + 1.0), 0.0, 1.0)
    return proximity, cell < threshold


def _volcano_uplift(proximity: np.ndarray, coarse_height: np.ndarray) -> np.ndarray:
    """Cone profile with a crater dip near the vent."""
    low, high = DEFAULTS.VOLCANO_ELEVATION_FACTOR_RANGE
    # Volcanoes standing on higher ground grow taller.
    elevation_factor = np.clip(low + coarse_height / DEFAULTS.VOLCANO_ELEVATION_REFERENCE_M, low, high)
    peak = DEFAULTS.VOLCANO_MAX_HEIGHT_M * elevation_factor

    cone = proximity ** 3 * peak
    crater_start = DEFAULTS.VOLCANO_CRATER_START
    crater = np.clip((proximity - crater_start) / (1.0 - crater_start), 0.0, 1.0)
    return cone - crater * DEFAULTS.VOLCANO_CRATER_DEPTH_FRACTION * peak


def get_terrain_height(bank: NoiseFieldBank, longitude, latitude, detail=1.0) -> np.ndarray:
    """
    Generates terrain height in meters. Climate and biome queries must use
    detail = 1.0 so that elevation-dependent classification is zoom-invariant.
    """
    config = bank.config
    x, y, z = geo_to_sphere(longitude, latitude)

    # 1. Base continental noise.
    coarse_raw = continental_noise(bank, x, y, z)
    raw = coarse_raw

    # 2. Adaptive level of detail.
    detail = np.asarray(detail, dtype=np.float64)
    if np.any(detail > 1.0):
        fine = bank.sample(fields.TERRAIN_DETAIL, x, y, z)
        enriched = np.clip(coarse_raw + fine * DEFAULTS.TERRAIN_DETAIL_AMPLITUDE, -1.0, 1.0)
        raw = coarse_raw + _detail_weight(detail) * (enriched - coarse_raw)

    # 3. Hypsometric shaping into meters.
    height = shape_raw_noise(raw, config.max_terrain_height)

    # 4. Volcano cones, placed from the coarse surface only.
    coarse_height = shape_raw_noise(coarse_raw, config.max_terrain_height)
    proximity, inside = _volcano_cells(bank, x, y, z)
    on_land = coarse_height > config.sea_level
    uplift = np.where(inside & on_land, _volcano_uplift(proximity, coarse_height), 0.0)

    return np.clip(height + uplift, -DEFAULTS.MAX_OCEAN_DEPTH_M, config.max_terrain_height)


def is_volcano(bank: NoiseFieldBank, longitude, latitude) -> np.ndarray:
    """True inside the same cone regions that raise the terrain."""
    config = bank.config
    x, y, z = geo_to_sphere(longitude, latitude)
    coarse_height = shape_raw_noise(continental_noise(bank, x, y, z), config.max_terrain_height)
    _, inside = _volcano_cells(bank, x, y, z)
    return inside & (coarse_height > config.sea_level)


def surface_altitude(terrain_height) -> np.ndarray:
    """The default altitude for surface queries: terrain height, or 0 over water."""
    return np.maximum(terrain_height, 0.0)
