"""Tests for the static climate layer."""

import numpy as np
import pytest

from planet_fields import climate
from planet_fields.climate import PrecipitationType
from planet_fields.noise_bank import NoiseFieldBank
from planet_fields.terrain import get_terrain_height, surface_altitude
from planet_fields.world_config import WorldConfig

LONGITUDES, LATITUDES = (
    grid.ravel() for grid in np.meshgrid(np.linspace(-180.0, 170.0, 36), np.linspace(-90.0, 90.0, 19))
)


@pytest.fixture(scope="module")
def bank():
    return NoiseFieldBank(WorldConfig(seed=42))


@pytest.fixture(scope="module")
def surface(bank):
    heights = get_terrain_height(bank, LONGITUDES, LATITUDES)
    return heights, surface_altitude(heights)


class TestClimate:
    """Test temperature, moisture, precipitation and humidity."""

    def test_base_temperature_interpolates(self):
        config = WorldConfig()
        assert climate.get_base_temperature(config, 0.0, 0.0) == pytest.approx(30.0)
        assert climate.get_base_temperature(config, 90.0, 0.0) == pytest.approx(-40.0)
        assert climate.get_base_temperature(config, -45.0, 0.0) == pytest.approx(-5.0)
        assert climate.get_base_temperature(config, 0.0, 2000.0) == pytest.approx(30.0 - 13.0)

    def test_polar_temperature_scenario(self, bank):
        temps = climate.get_temperature(bank, np.array([-180.0, -90.0, 0.0, 45.0, 135.0]), 90.0, 0.0)
        assert np.all(np.abs(temps - (-40.0)) <= 5.0)
        # Every longitude names the same point at the pole.
        assert np.allclose(temps, temps[0], atol=1e-9)

    def test_temperature_variation_is_bounded(self, bank):
        temps = climate.get_temperature(bank, LONGITUDES, LATITUDES, 0.0)
        base = climate.get_base_temperature(bank.config, LATITUDES, 0.0)
        assert np.all(np.abs(temps - base) <= 5.0 + 1e-9)

    def test_moisture_range(self, bank):
        moisture = climate.get_moisture(bank, LONGITUDES, LATITUDES)
        assert np.all(moisture >= 0.0) and np.all(moisture <= 1.0)

    def test_precipitation_range(self, bank, surface):
        heights, altitude = surface
        precipitation = climate.get_precipitation(bank, LONGITUDES, LATITUDES, altitude, terrain_height=heights)
        assert np.all(precipitation >= 0.0) and np.all(precipitation <= 4000.0)

    def test_precipitation_intermediates_match(self, bank, surface):
        heights, altitude = surface
        implicit = climate.get_precipitation(bank, LONGITUDES, LATITUDES, altitude)
        explicit = climate.get_precipitation(
            bank, LONGITUDES, LATITUDES, altitude,
            terrain_height=heights,
            moisture=climate.get_moisture(bank, LONGITUDES, LATITUDES),
            temperature=climate.get_temperature(bank, LONGITUDES, LATITUDES, altitude),
        )
        assert np.allclose(implicit, explicit)

    def test_very_high_altitude_is_dry(self, bank):
        lon, lat = np.array([10.0, 80.0]), np.array([5.0, -20.0])
        heights = np.array([100.0, 100.0])
        low = climate.get_precipitation(bank, lon, lat, 0.0, terrain_height=heights,
                                        temperature=np.array([20.0, 20.0]))
        high = climate.get_precipitation(bank, lon, lat, 5000.0, terrain_height=heights,
                                         temperature=np.array([20.0, 20.0]))
        assert np.allclose(high, low * 0.5)

    def test_orographic_boost(self, bank):
        lon, lat = np.array([10.0]), np.array([5.0])
        temperature = np.array([15.0])
        flat = climate.get_precipitation(bank, lon, lat, 0.0, terrain_height=np.array([100.0]),
                                         temperature=temperature)
        slope = climate.get_precipitation(bank, lon, lat, 0.0, terrain_height=np.array([1500.0]),
                                          temperature=temperature)
        assert slope[0] == pytest.approx(min(flat[0] * 1.3, 4000.0))

    def test_precipitation_type_classification(self):
        temperature = np.array([20.0, -10.0, 0.0, 5.0, -30.0])
        precipitation = np.array([800.0, 800.0, 800.0, 50.0, 150.0])
        types = climate.classify_precipitation_type(temperature, precipitation)
        assert list(types) == [
            PrecipitationType.RAIN,
            PrecipitationType.SNOW,
            PrecipitationType.SLEET,
            PrecipitationType.NONE,
            PrecipitationType.SNOW,
        ]

    def test_precipitation_type_names(self):
        assert PrecipitationType.SLEET.display_name == "Sleet"
        assert PrecipitationType.NONE.display_name == "None"

    def test_humidity_range(self, bank, surface):
        _, altitude = surface
        for alt in (altitude, 6000.0, 20000.0):
            humidity = climate.get_humidity(bank, LONGITUDES, LATITUDES, alt)
            assert np.all(humidity >= 0.0) and np.all(humidity <= 1.0)

    def test_humidity_falls_above_dry_altitude(self, bank):
        moisture = np.array([0.8])
        temperature = np.array([5.0])
        low = climate.get_humidity(bank, 0.0, 0.0, 1000.0, moisture=moisture, temperature=temperature)
        high = climate.get_humidity(bank, 0.0, 0.0, 6000.0, moisture=moisture, temperature=temperature)
        assert high[0] < low[0]
