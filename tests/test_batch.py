"""Tests for batch queries and their agreement with single-point queries."""

import logging

import numpy as np
import pytest

from planet_fields import BatchField, BiomeType, QueryPoint, SoilType, World, WorldConfig
from planet_fields.batch import ENUM_FIELDS

POINTS = [
    QueryPoint(0.0, 0.0),
    QueryPoint(-73.9, 40.7, time_of_day=6.5),
    QueryPoint(139.7, 35.7, altitude=2500.0, time_of_day=21.0),
    QueryPoint(190.0, 100.0, time_of_day=25.0),
    QueryPoint(-45.0, -60.0, altitude=0.0, time_of_day=0.0, detail=4.0),
    QueryPoint(25.0, 10.0, altitude=9000.0, detail=-2.0),
    QueryPoint(100.0, 89.5, time_of_day=13.0),
    QueryPoint(-150.0, -12.0, altitude=150.0, time_of_day=18.25, detail=2.0),
]


def _single(world: World, field: BatchField, p: QueryPoint):
    """The World query that answers `field` for one point."""
    lon, lat, alt, t = p.longitude, p.latitude, p.altitude, p.time_of_day
    calls = {
        BatchField.TERRAIN_HEIGHT: lambda: world.get_terrain_height(lon, lat, p.detail),
        BatchField.BIOME: lambda: world.get_biome(lon, lat, alt),
        BatchField.TEMPERATURE: lambda: world.get_temperature(lon, lat, alt),
        BatchField.TEMPERATURE_AT_TIME: lambda: world.get_temperature_at_time(lon, lat, alt, t),
        BatchField.MOISTURE: lambda: world.get_moisture(lon, lat),
        BatchField.PRECIPITATION: lambda: world.get_precipitation(lon, lat, alt),
        BatchField.PRECIPITATION_TYPE: lambda: world.get_precipitation_type(lon, lat, alt),
        BatchField.CURRENT_PRECIPITATION: lambda: world.get_current_precipitation(lon, lat, alt, t),
        BatchField.HUMIDITY: lambda: world.get_humidity(lon, lat, alt),
        BatchField.AIR_PRESSURE: lambda: world.get_air_pressure(lon, lat, alt),
        BatchField.PRESSURE_AT_LOCATION: lambda: world.get_pressure_at_location(lon, lat, alt, t),
        BatchField.PRESSURE_GRADIENT: lambda: world.get_pressure_gradient(lon, lat, t),
        BatchField.STORM_FRONT: lambda: world.is_storm_front(lon, lat, t),
        BatchField.CLOUD_DENSITY: lambda: world.get_cloud_density(lon, lat, alt),
        BatchField.WIND_SPEED: lambda: world.get_wind_speed(lon, lat, alt),
        BatchField.WIND_DIRECTION: lambda: world.get_wind_direction(lon, lat, alt),
        BatchField.CURRENT_WIND_SPEED: lambda: world.get_current_wind_speed(lon, lat, alt, t),
        BatchField.CURRENT_WIND_DIRECTION: lambda: world.get_current_wind_direction(lon, lat, alt, t),
        BatchField.SOLAR_ANGLE: lambda: world.get_solar_angle(lon, lat, t),
        BatchField.INSOLATION: lambda: world.get_insolation(lon, lat, t),
        BatchField.DAYLIGHT: lambda: world.is_daylight(lon, lat, t),
        BatchField.FLOW_ACCUMULATION: lambda: world.get_flow_accumulation(lon, lat),
        BatchField.RIVER: lambda: world.is_river(lon, lat),
        BatchField.RIVER_WIDTH: lambda: world.get_river_width(lon, lat),
        BatchField.VOLCANO: lambda: world.is_volcano(lon, lat),
        BatchField.COAL_DEPOSIT: lambda: world.get_coal_deposit(lon, lat),
        BatchField.IRON_DEPOSIT: lambda: world.get_iron_deposit(lon, lat),
        BatchField.OIL_DEPOSIT: lambda: world.get_oil_deposit(lon, lat),
        BatchField.SOIL_TYPE: lambda: world.get_soil_type(lon, lat, alt),
        BatchField.SOIL_FERTILITY: lambda: world.get_soil_fertility(lon, lat, alt),
        BatchField.SOIL_PH: lambda: world.get_soil_ph(lon, lat, alt),
        BatchField.SOIL_ORGANIC_MATTER: lambda: world.get_soil_organic_matter(lon, lat, alt),
        BatchField.VEGETATION_DENSITY: lambda: world.get_vegetation_density(lon, lat, alt),
    }
    return calls[field]()


@pytest.fixture(scope="module")
def world():
    return World(WorldConfig(seed=2024))


@pytest.fixture(scope="module")
def full_batch(world):
    return world.batch_query(POINTS, list(BatchField))


class TestBatchEquivalence:
    """Every batch value matches the corresponding single-point query."""

    @pytest.mark.parametrize("field", list(BatchField), ids=lambda f: f.value)
    def test_matches_single_queries(self, world, full_batch, field):
        for index, point in enumerate(POINTS):
            expected = _single(world, field, point)
            actual = full_batch[index][field]
            if isinstance(expected, (bool, BiomeType, SoilType)) or field in ENUM_FIELDS:
                assert actual == expected, f"{field.value} differs at point {index}"
            else:
                assert actual == pytest.approx(expected, rel=1e-9, abs=1e-9), (
                    f"{field.value} differs at point {index}"
                )

    def test_subset_matches_full_batch(self, world, full_batch):
        subset = world.batch_query(POINTS, [BatchField.SOIL_PH, "insolation"])
        assert subset.fields == (BatchField.SOIL_PH, BatchField.INSOLATION)
        assert np.allclose(subset[BatchField.SOIL_PH], full_batch[BatchField.SOIL_PH])
        assert np.allclose(subset["insolation"], full_batch[BatchField.INSOLATION])

    def test_points_as_tuples(self, world, full_batch):
        tuples = [(p.longitude, p.latitude, p.altitude, p.time_of_day, p.detail) for p in POINTS]
        result = world.batch_query(tuples, [BatchField.TEMPERATURE_AT_TIME])
        assert np.allclose(result[BatchField.TEMPERATURE_AT_TIME], full_batch[BatchField.TEMPERATURE_AT_TIME])


class TestBatchResult:
    """Test the result container and field resolution."""

    def test_every_field_has_a_column(self, full_batch):
        assert set(full_batch.fields) == set(BatchField)
        for field in BatchField:
            assert field in full_batch
            assert len(full_batch[field]) == len(POINTS)

    def test_length_and_rows(self, full_batch):
        assert len(full_batch) == len(POINTS)
        row = full_batch[0]
        assert set(row) == set(BatchField)
        assert isinstance(row[BatchField.BIOME], BiomeType)
        assert isinstance(row[BatchField.SOIL_TYPE], SoilType)
        assert isinstance(row[BatchField.RIVER], bool)
        assert isinstance(row[BatchField.TERRAIN_HEIGHT], float)
        assert full_batch[-1] == full_batch[len(POINTS) - 1]

    def test_row_out_of_range(self, full_batch):
        with pytest.raises(IndexError):
            full_batch[len(POINTS)]

    def test_unknown_fields_are_skipped_with_warning(self, world, caplog):
        with caplog.at_level(logging.WARNING):
            result = world.batch_query(POINTS, ["temperature", "not_a_field", "temperature"])
        assert result.fields == (BatchField.TEMPERATURE,)
        assert "not_a_field" in caplog.text
        assert "not_a_field" not in result

    def test_single_field_identifier(self, world, full_batch, caplog):
        with caplog.at_level(logging.WARNING):
            by_name = world.batch_query(POINTS, "biome")
            by_member = world.batch_query(POINTS, BatchField.SOIL_TYPE)
        assert by_name.fields == (BatchField.BIOME,)
        assert by_member.fields == (BatchField.SOIL_TYPE,)
        assert np.array_equal(by_name[BatchField.BIOME], full_batch[BatchField.BIOME])
        assert "Ignoring" not in caplog.text

    def test_empty_batch(self, world):
        result = world.batch_query([], [BatchField.TEMPERATURE, BatchField.BIOME])
        assert len(result) == 0
        assert result.fields == (BatchField.TEMPERATURE, BatchField.BIOME)
        assert result[BatchField.TEMPERATURE].size == 0

    def test_no_fields(self, world):
        result = world.batch_query(POINTS, [])
        assert len(result) == len(POINTS)
        assert result.fields == ()
        assert result[0] == {}
