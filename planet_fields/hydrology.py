# planet_fields/hydrology.py

"""
================================================================================
HYDROLOGY LAYER
================================================================================
Estimates how much water drains through a point without simulating a drainage
network: local terrain shape (valleys collect water, steep slopes shed it),
precipitation and a ridged river-noise term are blended into a flow
accumulation score, from which river presence and width follow.

Data Contract:
---------------
- Inputs:
    - bank (NoiseFieldBank): The world's noise fields and configuration.
    - longitude, latitude: NumPy arrays (or scalars).
    - Optional pre-computed terrain height, precipitation and flow.
- Outputs:
    - Flow accumulation in [0, 1] (0 at or below sea level), river flags and
      river width in meters within [0, MAX_RIVER_WIDTH_M].
- Side Effects: None.
- Invariants: River width is positive exactly where a river is present.
================================================================================
"""

import numpy as np

from . import climate
from . import config as DEFAULTS
from . import noise_bank as fields
from .noise_bank import NoiseFieldBank
from .terrain import get_terrain_height, surface_altitude


def _neighbour_heights(bank: NoiseFieldBank, longitude, latitude):
    step = DEFAULTS.FLOW_NEIGHBOR_STEP_DEG
    longitude = np.asarray(longitude, dtype=np.float64)
    latitude = np.asarray(latitude, dtype=np.float64)
    north = get_terrain_height(bank, longitude, latitude + step)
    south = get_terrain_height(bank, longitude, latitude - step)
    east = get_terrain_height(bank, longitude + step, latitude)
    west = get_terrain_height(bank, longitude - step, latitude)
    return north, south, east, west


def get_flow_accumulation(bank: NoiseFieldBank, longitude, latitude,
                          terrain_height: np.ndarray = None, precipitation: np.ndarray = None) -> np.ndarray:
    """
    Flow accumulation score [0, 1]. Can accept pre-computed terrain height and
    precipitation (at the surface altitude) to avoid recalculation.
    """
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)
    if precipitation is None:
        precipitation = climate.get_precipitation(
            bank, longitude, latitude, surface_altitude(terrain_height), terrain_height=terrain_height,
        )

    # 1. Local terrain shape from the four neighbours.
    north, south, east, west = _neighbour_heights(bank, longitude, latitude)
    neighbour_mean = (north + south + east + west) * 0.25
    valley = np.clip((neighbour_mean - terrain_height) / DEFAULTS.FLOW_VALLEY_DEPTH_M, 0.0, 1.0)

    span = 2.0 * DEFAULTS.FLOW_NEIGHBOR_STEP_DEG
    gradient = np.hypot((east - west) / span, (north - south) / span)
    gradient_factor = np.clip(1.0 - gradient / DEFAULTS.FLOW_GRADIENT_REFERENCE_M_PER_DEG, 0.3, 1.0)

    # 2. Water supply and ridged river noise (1 along the noise zero-crossings).
    precipitation_factor = np.clip(precipitation / DEFAULTS.FLOW_PRECIPITATION_REFERENCE_MM, 0.0, 1.0)
    ridged = 1.0 - np.abs(bank.sample_geo(fields.RIVER, longitude, latitude))

    valley_weight, precipitation_weight, noise_weight = DEFAULTS.FLOW_WEIGHTS
    flow = (
        valley_weight * valley
        + precipitation_weight * precipitation_factor
        + noise_weight * ridged * ridged
    ) * gradient_factor

    # 3. Deltas and plains gather water; high mountains only start streams.
    lowland = DEFAULTS.FLOW_LOWLAND_HEIGHT_M
    highland = DEFAULTS.FLOW_HIGHLAND_HEIGHT_M
    flow = np.where(
        terrain_height < lowland,
        flow * (1.0 + DEFAULTS.FLOW_LOWLAND_BOOST * (1.0 - terrain_height / lowland)),
        flow,
    )
    flow = np.where(
        terrain_height > highland,
        flow * np.clip(1.0 - (terrain_height - highland) / highland, 0.2, 1.0),
        flow,
    )

    flow = np.where(terrain_height > bank.config.sea_level, flow, 0.0)
    return np.clip(flow, 0.0, 1.0)


def is_river(bank: NoiseFieldBank, longitude, latitude, flow: np.ndarray = None) -> np.ndarray:
    if flow is None:
        flow = get_flow_accumulation(bank, longitude, latitude)
    return flow > DEFAULTS.RIVER_THRESHOLD


def get_river_width(bank: NoiseFieldBank, longitude, latitude, flow: np.ndarray = None,
                    terrain_height: np.ndarray = None, precipitation: np.ndarray = None) -> np.ndarray:
    """
    River width in meters. Rivers widen with flow, toward sea level and in wet
    climates.
    """
    if terrain_height is None:
        terrain_height = get_terrain_height(bank, longitude, latitude)
    if precipitation is None:
        precipitation = climate.get_precipitation(
            bank, longitude, latitude, surface_altitude(terrain_height), terrain_height=terrain_height,
        )
    if flow is None:
        flow = get_flow_accumulation(
            bank, longitude, latitude, terrain_height=terrain_height, precipitation=precipitation,
        )

    threshold = DEFAULTS.RIVER_THRESHOLD
    excess = (flow - threshold) / (1.0 - threshold)
    elevation_factor = np.clip(1.5 - terrain_height / 2000.0, 0.5, 1.5)
    precipitation_factor = np.clip(0.5 + precipitation / 2000.0, 0.5, 1.5)
    width = excess * excess * DEFAULTS.MAX_RIVER_WIDTH_M * elevation_factor * precipitation_factor

    width = np.where(flow > threshold, width, 0.0)
    return np.clip(width, 0.0, DEFAULTS.MAX_RIVER_WIDTH_M)
