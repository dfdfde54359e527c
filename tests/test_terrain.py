"""Tests for the HillClimb terrain module."""

import pytest
import numpy as np

from hillclimb.terrain import (
    TerrainGenerator,
    GeneratorConfig,
    Bridge,
    BridgeMaterial,
    Collectible,
    CollectibleKind,
)


class FixedRandom:
    """Random source returning constant draws."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value

    def uniform(self, low: float, high: float) -> float:
        return low


def generate_strip(generator, count, level=1):
    """Generate count consecutive samples, tracking bridges like the world does."""
    samples, bridges, items = [], [], []
    for i in range(count):
        result = generator.generate_sample(i * generator.config.segment_width, i, level, bridges)
        samples.append(result.sample)
        if result.bridge is not None:
            bridges.append(result.bridge)
        items.extend(result.collectibles)
    return samples, bridges, items


class TestTerrainDataStructures:
    """Test samples, bridges and collectibles."""

    def test_bridge_contains_is_inclusive(self):
        """Test both bridge ends count as on the bridge."""
        bridge = Bridge(start_x=100.0, end_x=250.0, surface_y=300.0)

        assert bridge.length == 150.0
        assert bridge.contains(100.0)
        assert bridge.contains(250.0)
        assert not bridge.contains(250.1)

    def test_collectible_distance(self):
        """Test Euclidean distance to a point."""
        coin = Collectible(kind=CollectibleKind.COIN, world_x=3.0, world_y=4.0)

        assert coin.distance_to(0.0, 0.0) == pytest.approx(5.0)

    def test_collectible_state(self):
        """Test serialization of an entity."""
        fuel = Collectible(kind=CollectibleKind.FUEL, world_x=10.0, world_y=20.0)
        state = fuel.get_state()

        assert state == {"kind": "fuel", "x": 10.0, "y": 20.0, "collected": False}


class TestGeneratorConfig:
    """Test generator configuration validation."""

    def test_inverted_range_rejected(self):
        """Test min spacing above max spacing is an error."""
        with pytest.raises(ValueError):
            GeneratorConfig(fuel_min_distance_m=600.0, fuel_max_distance_m=400.0)

    def test_bad_smoothing_rejected(self):
        """Test noise smoothing must be a fraction."""
        with pytest.raises(ValueError):
            GeneratorConfig(noise_smooth=1.5)


class TestTerrainGenerator:
    """Test procedural terrain generation."""

    def test_wave_height_at_origin(self):
        """Test all sine bands vanish at phase zero."""
        generator = TerrainGenerator(rng=FixedRandom())

        assert generator.wave_height(0) == 360.0

    def test_level_scales_primary_band(self):
        """Test higher levels exaggerate the primary band only."""
        config = GeneratorConfig(detail_amplitude=0.0, swell_amplitude=0.0)
        generator = TerrainGenerator(config, rng=FixedRandom())

        index = 100
        base = generator.wave_height(index, level=1) - config.base_height
        scaled = generator.wave_height(index, level=3) - config.base_height

        assert generator.level_multiplier(3) == pytest.approx(1.3)
        assert scaled == pytest.approx(base * 1.3)

    def test_coin_probability_falls_with_level(self):
        """Test coins get rarer and never go negative."""
        generator = TerrainGenerator(rng=FixedRandom())

        assert generator.coin_probability(1) == pytest.approx(0.095)
        assert generator.coin_probability(5) < generator.coin_probability(1)
        assert generator.coin_probability(40) == 0.0

    def test_noise_is_bounded(self):
        """Test filtered noise stays within half the raw amplitude."""
        generator = TerrainGenerator(rng=np.random.default_rng(7))
        limit = generator.config.noise_amplitude / 2

        for i in range(2000):
            generator.generate_sample(i * 30.0, i)
            assert abs(generator.noise) <= limit

    def test_neutral_noise_gives_pure_waves(self):
        """Test a centered random source adds no noise."""
        generator = TerrainGenerator(rng=FixedRandom(0.5))

        result = generator.generate_sample(300.0, 10)

        assert result.sample.height == pytest.approx(generator.wave_height(10))

    def test_same_seed_same_terrain(self):
        """Test generation is reproducible for a seed."""
        first = TerrainGenerator()
        second = TerrainGenerator()
        first.generate_with_seed(42)
        second.generate_with_seed(42)

        samples_a, bridges_a, items_a = generate_strip(first, 500)
        samples_b, bridges_b, items_b = generate_strip(second, 500)

        assert [s.height for s in samples_a] == [s.height for s in samples_b]
        assert bridges_a == bridges_b
        assert items_a == items_b

    def test_bridges_are_flat(self):
        """Test every sample inside a bridge sits at its surface height."""
        generator = TerrainGenerator(rng=np.random.default_rng(3))
        samples, bridges, _ = generate_strip(generator, 3000)

        assert bridges
        for bridge in bridges:
            covered = [s for s in samples if bridge.contains(s.world_x)]
            assert covered
            for sample in covered:
                assert sample.height == bridge.surface_y
            assert all(s.on_bridge for s in covered if s.world_x > bridge.start_x)

    def test_bridge_spacing_over_seeds(self):
        """Test bridge gaps never drop below the minimum distance."""
        config = GeneratorConfig()
        min_gap = config.bridge_min_distance_m * config.pixels_per_metre
        max_gap = config.bridge_max_distance_m * config.pixels_per_metre

        for seed in range(20):
            generator = TerrainGenerator(config, rng=np.random.default_rng(seed))
            _, bridges, _ = generate_strip(generator, 3000)

            assert len(bridges) > 2
            for prev, nxt in zip(bridges, bridges[1:]):
                gap = nxt.start_x - prev.end_x
                assert gap >= min_gap
                assert gap <= max_gap + config.segment_width

    def test_fuel_and_boost_spacing(self):
        """Test fuel cans and boost pads respect their spacing ranges."""
        config = GeneratorConfig()
        generator = TerrainGenerator(config, rng=np.random.default_rng(11))
        _, _, items = generate_strip(generator, 5000)

        for kind, low_m in (
            (CollectibleKind.FUEL, config.fuel_min_distance_m),
            (CollectibleKind.BOOST, config.boost_min_distance_m),
        ):
            xs = [c.world_x for c in items if c.kind is kind]
            assert len(xs) > 2
            assert np.all(np.diff(xs) >= low_m * config.pixels_per_metre)

    def test_feature_placement_offsets(self):
        """Test entity positions relative to the spawning sample."""
        config = GeneratorConfig(bridge_min_distance_m=1e6, bridge_max_distance_m=1e6)
        generator = TerrainGenerator(config, rng=FixedRandom(0.0))
        generator.reset(terrain_offset=-10000.0)

        result = generator.generate_sample(0.0, 0)
        height = result.sample.height
        by_kind = {c.kind: c for c in result.collectibles}

        assert by_kind[CollectibleKind.FUEL].world_x == 15.0
        assert by_kind[CollectibleKind.FUEL].world_y == pytest.approx(height - 15.0)
        assert by_kind[CollectibleKind.BOOST].world_y == pytest.approx(height - 5.0)
        assert by_kind[CollectibleKind.COIN].world_x == pytest.approx(18.0)
        assert by_kind[CollectibleKind.COIN].world_y == pytest.approx(height - 35.0)

    def test_bridge_material_from_random_draw(self):
        """Test low draws build metal bridges."""
        config = GeneratorConfig(bridge_min_distance_m=0.0, bridge_max_distance_m=0.0)
        generator = TerrainGenerator(config, rng=FixedRandom(0.0))

        result = generator.generate_sample(0.0, 0)

        assert result.bridge is not None
        assert result.bridge.material is BridgeMaterial.METAL
        assert result.bridge.length == config.bridge_length
