"""Tests for the atmosphere, solar and weather layers."""

import numpy as np
import pytest

from planet_fields import atmosphere, solar, weather
from planet_fields.noise_bank import NoiseFieldBank
from planet_fields.terrain import get_terrain_height, surface_altitude
from planet_fields.world_config import WorldConfig

LONGITUDES, LATITUDES = (
    grid.ravel() for grid in np.meshgrid(np.linspace(-180.0, 170.0, 36), np.linspace(-85.0, 85.0, 18))
)


@pytest.fixture(scope="module")
def bank():
    return NoiseFieldBank(WorldConfig(seed=77))


@pytest.fixture(scope="module")
def surface(bank):
    heights = get_terrain_height(bank, LONGITUDES, LATITUDES)
    return heights, surface_altitude(heights)


class TestAirPressure:
    """Test the barometric formula."""

    def test_sea_level(self):
        assert atmosphere.get_air_pressure(0.0) == pytest.approx(1013.25)

    def test_high_altitude_scenario(self):
        pressure = atmosphere.get_air_pressure(8000.0)
        assert pressure == pytest.approx(1013.25 * np.exp(-8000.0 / 8500.0))
        assert 380.0 < pressure < 400.0

    def test_strictly_decreasing(self):
        pressures = atmosphere.get_air_pressure(np.linspace(0.0, 20000.0, 2001))
        assert np.all(np.diff(pressures) < 0.0)


class TestCloudsAndWind:
    """Test cloud density and the static wind field."""

    def test_cloud_density_range(self, bank, surface):
        heights, altitude = surface
        for alt in (altitude, 3000.0, 9000.0):
            clouds = atmosphere.get_cloud_density(bank, LONGITUDES, LATITUDES, alt, terrain_height=heights)
            assert np.all(clouds >= 0.0) and np.all(clouds <= 1.0)

    def test_wind_speed_follows_bands_aloft(self, bank):
        # Above the surface layer only the altitude factor modifies the band speed.
        lat = np.array([10.0, -45.0, 75.0])
        lon = np.zeros(3)
        speeds = atmosphere.get_wind_speed(bank, lon, lat, 5000.0, terrain_height=np.zeros(3))
        boost = 1.5
        assert 5.0 * boost <= speeds[0] <= 8.0 * boost
        assert 7.0 * boost <= speeds[1] <= 12.0 * boost
        assert 3.0 * boost <= speeds[2] <= 6.0 * boost

    def test_rough_ground_slows_surface_wind(self, bank):
        lon, lat = np.array([20.0]), np.array([40.0])
        flat = atmosphere.get_wind_speed(bank, lon, lat, 2500.0, terrain_height=np.array([0.0]))
        rough = atmosphere.get_wind_speed(bank, lon, lat, 2500.0, terrain_height=np.array([2000.0]))
        assert rough[0] < flat[0]

    def test_wind_direction_range(self, bank):
        directions = atmosphere.get_wind_direction(bank, LONGITUDES, LATITUDES)
        assert np.all(directions >= 0.0) and np.all(directions <= 360.0)

    def test_trade_winds_blow_from_the_east(self, bank):
        north = atmosphere.get_wind_direction(bank, np.array([0.0, 60.0, 120.0]), 15.0)
        south = atmosphere.get_wind_direction(bank, np.array([0.0, 60.0, 120.0]), -15.0)
        assert np.all((north >= 15.0) & (north <= 75.0))
        assert np.all((south >= 105.0) & (south <= 165.0))


class TestSolar:
    """Test solar geometry and insolation."""

    def test_declination_at_solstices(self):
        assert solar.get_solar_declination(172) == pytest.approx(23.44, abs=0.05)
        assert solar.get_solar_declination(355) == pytest.approx(-23.44, abs=0.05)

    def test_noon_and_midnight_at_equator(self):
        config = WorldConfig(day_of_year=80)
        assert solar.get_solar_angle(config, 0.0, 0.0, 12.0) > 80.0
        assert solar.get_solar_angle(config, 0.0, 0.0, 0.0) < -80.0

    def test_longitude_shifts_local_time(self):
        config = WorldConfig(day_of_year=80)
        # Noon at longitude 90 E happens at 06:00 on the reference meridian.
        assert solar.get_solar_angle(config, 90.0, 0.0, 6.0) == pytest.approx(
            solar.get_solar_angle(config, 0.0, 0.0, 12.0)
        )

    @pytest.mark.parametrize("time_of_day", [0.0, 3.5, 6.0, 12.0, 18.25, 23.9])
    def test_no_insolation_at_night(self, bank, time_of_day):
        daylight = solar.is_daylight(bank.config, LONGITUDES, LATITUDES, time_of_day)
        insolation = solar.get_insolation(bank, LONGITUDES, LATITUDES, time_of_day)
        assert np.all(insolation[~daylight] == 0.0)
        assert np.all(insolation >= 0.0) and np.all(insolation <= 1400.0)

    def test_clouds_block_radiation(self, bank):
        clear = float(solar.get_insolation(bank, 0.0, 20.0, 12.0, cloud_density=0.0))
        overcast = float(solar.get_insolation(bank, 0.0, 20.0, 12.0, cloud_density=1.0))
        assert clear > 0.0
        assert overcast == pytest.approx(clear * 0.3)

    @pytest.mark.parametrize("day, season", [
        (0, "Winter"), (100, "Spring"), (172, "Summer"), (300, "Fall"), (355, "Winter"),
    ])
    def test_season(self, day, season):
        assert solar.get_season(day) == season


class TestWeather:
    """Test the time-varying weather quantities."""

    def test_diurnal_cycle(self, bank):
        lon, lat, alt = 0.0, 10.0, 0.0
        noon = weather.get_temperature_at_time(bank, lon, lat, alt, 12.0)
        midnight = weather.get_temperature_at_time(bank, lon, lat, alt, 0.0)
        assert noon > midnight

    def test_night_cooling_bounds(self, bank):
        # At full darkness cooling is 5-15 °C, damped by up to half by humidity.
        temperature = np.array([10.0])
        cooled = weather.get_temperature_at_time(
            bank, 0.0, 0.0, 0.0, 0.0, temperature=temperature, humidity=np.array([0.0]),
            cloud_density=np.array([0.0]),
        )
        assert cooled[0] == pytest.approx(10.0 - 15.0)

    def test_solar_heating_uses_surface_clouds(self, bank):
        # Aloft, the local cloud layer shades the air but the heating follows
        # the radiation reaching the ground.
        lon, lat, noon = 0.0, 10.0, 12.0
        ground = float(solar.get_insolation(bank, lon, lat, noon))
        assert ground > 0.0
        warmed = weather.get_temperature_at_time(
            bank, lon, lat, 6000.0, noon, temperature=np.array([0.0]), humidity=np.array([0.0]),
            cloud_density=np.array([0.9]),
        )
        assert warmed[0] == pytest.approx(ground / 1000.0 * 8.0 - 0.9 * 3.0)

    def test_current_precipitation_range(self, bank, surface):
        _, altitude = surface
        for time_of_day in (0.0, 6.0, 12.0, 18.0):
            rain = weather.get_current_precipitation(bank, LONGITUDES, LATITUDES, altitude, time_of_day)
            assert np.all(rain >= 0.0) and np.all(rain <= 1.0)

    def test_no_rain_without_annual_precipitation(self, bank):
        rain = weather.get_current_precipitation(
            bank, LONGITUDES, LATITUDES, 0.0, 12.0, precipitation=np.zeros(LONGITUDES.shape),
        )
        assert np.all(rain == 0.0)

    def test_weather_moves_with_time(self, bank):
        early = weather.sample_weather(bank, LONGITUDES, LATITUDES, 1.0, "precipitation")
        late = weather.sample_weather(bank, LONGITUDES, LATITUDES, 13.0, "precipitation")
        assert not np.allclose(early, late)

    def test_weather_is_continuous_across_midnight(self):
        before = NoiseFieldBank(WorldConfig(day_of_year=99))
        after = NoiseFieldBank(WorldConfig(day_of_year=100))
        end_of_day = weather.sample_weather(before, 30.0, 15.0, 23.9999, "precipitation")
        start_of_day = weather.sample_weather(after, 30.0, 15.0, 0.0, "precipitation")
        assert float(end_of_day) == pytest.approx(float(start_of_day), abs=1e-3)

    def test_pressure_at_location_bounds(self, bank):
        pressure = weather.get_pressure_at_location(bank, LONGITUDES, LATITUDES, 0.0, 12.0)
        assert np.all(pressure >= 1013.25 - 25.0)
        assert np.all(pressure <= 1013.25 + 25.0 + 8.0)

    def test_storm_front_matches_gradient(self, bank):
        gradient = weather.get_pressure_gradient(bank, LONGITUDES, LATITUDES, 9.0)
        storms = weather.is_storm_front(bank, LONGITUDES, LATITUDES, 9.0)
        assert np.all(gradient >= 0.0)
        assert np.array_equal(storms, gradient > 5.0)

    def test_current_wind(self, bank):
        base_speed = atmosphere.get_wind_speed(bank, LONGITUDES, LATITUDES, 0.0)
        speed = weather.get_current_wind_speed(bank, LONGITUDES, LATITUDES, 0.0, 15.0)
        assert np.all(speed >= 0.5 * base_speed - 1e-9)
        assert np.all(speed <= 1.5 * base_speed + 1e-9)
        direction = weather.get_current_wind_direction(bank, LONGITUDES, LATITUDES, 0.0, 15.0)
        assert np.all(direction >= 0.0) and np.all(direction <= 360.0)
