"""Tests for biome classification, vegetation and soil."""

import numpy as np
import pytest

from planet_fields import soil
from planet_fields.biomes import BiomeType, classify_biome, get_biome
from planet_fields.noise_bank import NoiseFieldBank
from planet_fields.soil import SoilInputs, SoilType, classify_soil
from planet_fields.terrain import get_terrain_height
from planet_fields.vegetation import get_vegetation_density
from planet_fields.world_config import WorldConfig

LONGITUDES, LATITUDES = (
    grid.ravel() for grid in np.meshgrid(np.linspace(-180.0, 175.0, 72), np.linspace(-88.0, 88.0, 45))
)


@pytest.fixture(scope="module")
def bank():
    return NoiseFieldBank(WorldConfig(seed=9))


class TestBiomeClassifier:
    """Test the ordered decision procedure."""

    @pytest.mark.parametrize("height, altitude, temperature, moisture, expected", [
        (-2000.0, 0.0, 10.0, 0.5, BiomeType.DEEP_OCEAN),
        (-10.0, 0.0, 10.0, 0.5, BiomeType.OCEAN),
        (2.0, 2.0, 20.0, 0.5, BiomeType.BEACH),
        (50.0, 50.0, -20.0, 0.5, BiomeType.ICE),
        (500.0, 500.0, -20.0, 0.5, BiomeType.SNOW),
        (5000.0, 5000.0, -20.0, 0.5, BiomeType.SNOW),
        (5000.0, 5000.0, -5.0, 0.5, BiomeType.MOUNTAIN_PEAK),
        (3000.0, 3000.0, -5.0, 0.5, BiomeType.MOUNTAIN_TUNDRA),
        (3000.0, 3000.0, 5.0, 0.5, BiomeType.MOUNTAIN_FOREST),
        (500.0, 500.0, -5.0, 0.1, BiomeType.COLD_DESERT),
        (500.0, 500.0, -5.0, 0.5, BiomeType.TUNDRA),
        (500.0, 500.0, 5.0, 0.1, BiomeType.COLD_DESERT),
        (500.0, 500.0, 5.0, 0.4, BiomeType.GRASSLAND),
        (500.0, 500.0, 5.0, 0.8, BiomeType.TAIGA),
        (500.0, 500.0, 15.0, 0.1, BiomeType.GRASSLAND),
        (500.0, 500.0, 15.0, 0.4, BiomeType.TEMPERATE_DECIDUOUS_FOREST),
        (500.0, 500.0, 15.0, 0.8, BiomeType.TEMPERATE_RAINFOREST),
        (500.0, 500.0, 25.0, 0.1, BiomeType.DESERT),
        (500.0, 500.0, 25.0, 0.3, BiomeType.SAVANNA),
        (500.0, 500.0, 25.0, 0.6, BiomeType.TROPICAL_SEASONAL_FOREST),
        (500.0, 500.0, 25.0, 0.9, BiomeType.TROPICAL_RAINFOREST),
    ])
    def test_decision_order(self, height, altitude, temperature, moisture, expected):
        assert classify_biome(height, altitude, temperature, moisture, sea_level=0.0) == expected

    def test_mountain_override_uses_query_altitude(self):
        # A balloon at 4500 m above lowland is above the peak line.
        assert classify_biome(300.0, 4500.0, 5.0, 0.5, sea_level=0.0) == BiomeType.MOUNTAIN_PEAK

    def test_ocean_partition(self, bank):
        heights = get_terrain_height(bank, LONGITUDES, LATITUDES)
        biomes = get_biome(bank, LONGITUDES, LATITUDES)
        water = np.isin(biomes, [BiomeType.OCEAN, BiomeType.DEEP_OCEAN])
        assert np.array_equal(water, heights < bank.config.sea_level)
        assert np.array_equal(biomes == BiomeType.DEEP_OCEAN, heights < -1000.0)

    def test_default_world_has_deep_ocean(self):
        default_bank = NoiseFieldBank(WorldConfig())
        lon, lat = np.meshgrid(np.linspace(-180.0, 179.0, 360), np.linspace(-89.5, 89.5, 180))
        biomes = get_biome(default_bank, lon, lat)
        assert np.count_nonzero(biomes == BiomeType.DEEP_OCEAN) > 0
        assert np.count_nonzero(biomes == BiomeType.OCEAN) > 0

    def test_display_names(self):
        assert BiomeType.TEMPERATE_DECIDUOUS_FOREST.display_name == "Temperate Deciduous Forest"
        assert BiomeType.MOUNTAIN_PEAK.display_name == "Mountain Peak"
        assert BiomeType.ICE.display_name == "Ice"


class TestVegetation:
    """Test vegetation density."""

    def test_range(self, bank):
        density = get_vegetation_density(bank, LONGITUDES, LATITUDES)
        assert np.all(density >= 0.0) and np.all(density <= 1.0)

    def test_barren_biomes(self, bank):
        n = 3
        density = get_vegetation_density(
            bank, np.zeros(n), np.zeros(n), np.zeros(n),
            terrain_height=np.array([-500.0, 500.0, 500.0]),
            biome=np.array([BiomeType.OCEAN, BiomeType.ICE, BiomeType.MOUNTAIN_PEAK]),
            temperature=np.full(n, 15.0), precipitation=np.full(n, 1500.0),
        )
        assert np.all(density == 0.0)

    def test_altitude_penalty(self, bank):
        n = 3
        density = get_vegetation_density(
            bank, np.zeros(n), np.zeros(n), np.array([500.0, 2500.0, 6000.0]),
            terrain_height=np.full(n, 500.0),
            biome=np.full(n, BiomeType.TEMPERATE_DECIDUOUS_FOREST),
            temperature=np.full(n, 15.0), precipitation=np.full(n, 1500.0),
        )
        assert density[0] > density[1] > density[2]
        assert density[2] == 0.0


class TestSoil:
    """Test soil classification and properties."""

    @staticmethod
    def _inputs(height=500.0, altitude=500.0, temperature=15.0, precipitation=800.0,
                biome=BiomeType.GRASSLAND, vegetation=0.5):
        return SoilInputs(
            np.array([height]), np.array([altitude]), np.array([temperature]),
            np.array([precipitation]), np.array([biome], dtype=np.uint8), np.array([vegetation]),
        )

    @pytest.mark.parametrize("kwargs, expected", [
        ({"height": -100.0, "altitude": 0.0}, SoilType.NONE),
        ({"temperature": -12.0}, SoilType.PERMAFROST),
        ({"temperature": 0.0, "biome": BiomeType.ICE}, SoilType.PERMAFROST),
        ({"precipitation": 2500.0, "altitude": 100.0, "biome": BiomeType.TEMPERATE_RAINFOREST}, SoilType.PEAT),
        ({"altitude": 3500.0, "temperature": 0.0, "biome": BiomeType.MOUNTAIN_FOREST}, SoilType.ROCKY),
        ({"biome": BiomeType.MOUNTAIN_TUNDRA, "temperature": -5.0}, SoilType.ROCKY),
        ({"biome": BiomeType.DESERT, "precipitation": 100.0, "temperature": 25.0}, SoilType.SAND),
        ({"biome": BiomeType.GRASSLAND, "precipitation": 600.0}, SoilType.LOAM),
        ({"biome": BiomeType.TEMPERATE_DECIDUOUS_FOREST, "precipitation": 800.0}, SoilType.CLAY),
        ({"biome": BiomeType.TROPICAL_SEASONAL_FOREST, "precipitation": 900.0, "temperature": 25.0},
         SoilType.SILT),
        ({"biome": BiomeType.TUNDRA, "precipitation": 200.0, "temperature": -5.0}, SoilType.SAND),
    ])
    def test_classification(self, kwargs, expected):
        assert classify_soil(self._inputs(**kwargs), sea_level=0.0)[0] == expected

    def test_peat_forms_in_wet_lowlands(self):
        default_bank = NoiseFieldBank(WorldConfig())
        lon, lat = (
            grid.ravel() for grid in np.meshgrid(np.linspace(-180.0, 179.5, 720), np.linspace(-20.0, 20.0, 81))
        )
        inputs = soil.gather_soil_inputs(default_bank, lon, lat)
        soil_type = classify_soil(inputs, default_bank.config.sea_level)
        peat = soil_type == SoilType.PEAT
        assert np.any(peat)
        assert np.all(inputs.precipitation[peat] > 1200.0)
        assert np.all(inputs.altitude[peat] < 500.0)

    def test_underwater_properties(self):
        inputs = self._inputs(height=-100.0, altitude=0.0)
        soil_type = classify_soil(inputs, sea_level=0.0)
        assert soil.compute_soil_fertility(inputs, soil_type)[0] == 0.0
        assert soil.compute_soil_organic_matter(inputs, soil_type)[0] == 0.0

    def test_property_ranges(self, bank):
        inputs = soil.gather_soil_inputs(bank, LONGITUDES, LATITUDES)
        soil_type = classify_soil(inputs, bank.config.sea_level)
        fertility = soil.compute_soil_fertility(inputs, soil_type)
        ph = soil.compute_soil_ph(inputs, soil_type)
        organic = soil.compute_soil_organic_matter(inputs, soil_type)
        assert np.all(fertility >= 0.0) and np.all(fertility <= 1.0)
        assert np.all(ph >= 4.0) and np.all(ph <= 9.0)
        assert np.all(organic >= 0.0) and np.all(organic <= 100.0)

    def test_peat_is_acidic_and_organic(self):
        peat = self._inputs(precipitation=2500.0, altitude=100.0, biome=BiomeType.TEMPERATE_RAINFOREST)
        loam = self._inputs(precipitation=600.0)
        peat_type = classify_soil(peat, 0.0)
        loam_type = classify_soil(loam, 0.0)
        assert soil.compute_soil_ph(peat, peat_type)[0] < soil.compute_soil_ph(loam, loam_type)[0]
        assert (soil.compute_soil_organic_matter(peat, peat_type)[0]
                > soil.compute_soil_organic_matter(loam, loam_type)[0])

    def test_deserts_are_alkaline(self):
        desert = self._inputs(biome=BiomeType.DESERT, precipitation=100.0, temperature=25.0, vegetation=0.05)
        forest = self._inputs(biome=BiomeType.TEMPERATE_DECIDUOUS_FOREST, precipitation=100.0,
                              temperature=25.0, vegetation=0.05)
        assert (soil.compute_soil_ph(desert, classify_soil(desert, 0.0))[0]
                > soil.compute_soil_ph(forest, classify_soil(forest, 0.0))[0])

    def test_display_names(self):
        assert SoilType.PERMAFROST.display_name == "Permafrost"
        assert SoilType.NONE.display_name == "None"
