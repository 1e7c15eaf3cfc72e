# planet_fields/projection.py

"""
================================================================================
COORDINATE PROJECTION
================================================================================
Maps geographic coordinates onto a fixed-radius sphere in 3D noise space, and
normalizes raw query inputs into the documented geographic domain.

Data Contract:
---------------
- Inputs: longitude/latitude in degrees (scalars or NumPy arrays).
- Outputs: (x, y, z) NumPy arrays on a sphere of radius SPHERE_RADIUS.
- Side Effects: None.
- Invariants: Sampling noise at the projected point is continuous across the
  ±180° meridian and at both poles, because neighbouring geographic points are
  neighbouring points on the sphere.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS


def geo_to_sphere(longitude, latitude, radius: float = DEFAULTS.SPHERE_RADIUS) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Projects longitude/latitude (degrees) onto the surface of the sphere."""
    lon_rad = np.radians(np.asarray(longitude, dtype=np.float64))
    lat_rad = np.radians(np.asarray(latitude, dtype=np.float64))

    cos_lat = np.cos(lat_rad)
    x = radius * cos_lat * np.cos(lon_rad)
    y = radius * cos_lat * np.sin(lon_rad)
    z = radius * np.sin(lat_rad)
    return x, y, z


def normalize_longitude(longitude) -> np.ndarray:
    """Wraps longitude into [-180, 180)."""
    longitude = np.asarray(longitude, dtype=np.float64)
    return np.mod(longitude + 180.0, 360.0) - 180.0


def clamp_latitude(latitude) -> np.ndarray:
    return np.clip(np.asarray(latitude, dtype=np.float64), -90.0, 90.0)


def wrap_time_of_day(time_of_day) -> np.ndarray:
    """Wraps a time of day in hours into [0, 24)."""
    return np.mod(np.asarray(time_of_day, dtype=np.float64), 24.0)


def clamp_detail(detail) -> np.ndarray:
    return np.maximum(np.asarray(detail, dtype=np.float64), DEFAULTS.MIN_DETAIL_LEVEL)
