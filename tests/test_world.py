"""Tests for the HillClimb world window."""

import pytest
import numpy as np

from hillclimb.simulation.world import World, WindowConfig
from hillclimb.terrain.generator import TerrainGenerator
from hillclimb.terrain.features import Collectible, CollectibleKind


def make_world(seed: int = 0, **window) -> World:
    generator = TerrainGenerator(rng=np.random.default_rng(seed))
    world = World(generator, WindowConfig(**window))
    world.reset(terrain_offset=0.0)
    return world


def assert_window(world: World, offset: float) -> None:
    """Check the buffer covers the window and nothing trails it."""
    cfg = world.config
    xs = np.array([s.world_x for s in world.samples])

    assert xs[0] >= offset - cfg.trailing_margin
    assert xs[0] < offset - cfg.trailing_margin + world.segment_width
    assert xs[-1] >= offset + cfg.viewport_width + cfg.leading_margin - world.segment_width
    assert np.allclose(np.diff(xs), world.segment_width)


class TestWorldReset:
    """Test window initialization."""

    def test_initial_window(self):
        """Test reset covers the viewport plus margins."""
        world = make_world()

        assert_window(world, 0.0)
        assert world.samples[-1].world_x >= 1300.0

    def test_reset_clears_entities(self):
        """Test reset drops every entity."""
        world = make_world()
        coin = Collectible(kind=CollectibleKind.COIN, world_x=50.0)
        world.add_collectible(coin)

        world.reset(terrain_offset=0.0)

        assert all(c is not coin for c in world.coins)

    def test_reset_with_viewport_width(self):
        """Test a wider viewport extends the window."""
        world = make_world()

        world.reset(terrain_offset=0.0, viewport_width=2000.0)

        assert world.config.viewport_width == 2000.0
        assert world.samples[-1].world_x >= 2100.0

    def test_reset_rejects_bad_viewport(self):
        """Test non-positive viewport widths are rejected."""
        world = make_world()

        with pytest.raises(ValueError):
            world.reset(viewport_width=0.0)

    def test_reset_at_offset(self):
        """Test reset at a non-zero offset centers the window there."""
        world = make_world()

        world.reset(terrain_offset=9000.0)

        assert_window(world, 9000.0)


class TestWorldScrolling:
    """Test window maintenance while scrolling."""

    def test_window_invariant_over_many_scrolls(self):
        """Test coverage holds after many small and large scrolls."""
        world = make_world(seed=5)
        rng = np.random.default_rng(99)

        offset = 0.0
        for step in range(3000):
            if step % 500 == 499:
                offset += 5000.0
            else:
                offset += float(rng.uniform(0.0, 25.0))
            world.update(offset, level=1 + step // 1000)
            assert_window(world, offset)

    def test_memory_stays_bounded(self):
        """Test samples, bridges and entities are evicted while driving."""
        world = make_world(seed=1)
        window_samples = int(np.ceil(
            (world.config.viewport_width + world.config.trailing_margin
             + world.config.leading_margin) / world.segment_width
        )) + 2

        offset = 0.0
        for _ in range(10000):
            offset += 12.0
            world.update(offset)
            world.prune_collectibles(offset)

            assert len(world.samples) <= window_samples
            assert len(world.bridges) <= 2
            assert len(world.fuel) <= 2
            assert len(world.boosts) <= 2
            assert len(world.coins) <= window_samples + 10

        assert all(b.end_x >= offset - world.config.bridge_clearance for b in world.bridges)
        for kind in CollectibleKind:
            assert all(c.world_x > offset - world.config.pickup_clearance
                       for c in world.collectibles(kind))

    def test_indices_strictly_increase(self):
        """Test no sample is ever generated twice."""
        world = make_world()
        seen = set()

        offset = 0.0
        for _ in range(500):
            offset += 7.5
            world.update(offset)
            for sample in world.samples:
                seen.add(sample.world_x)

        xs = sorted(seen)
        assert np.allclose(np.diff(xs), world.segment_width)


class TestCollectibles:
    """Test entity storage and pruning."""

    def test_prune_collected(self):
        """Test collected entities are removed."""
        world = make_world()
        world.reset()
        keep = Collectible(kind=CollectibleKind.FUEL, world_x=500.0)
        gone = Collectible(kind=CollectibleKind.FUEL, world_x=600.0, collected=True)
        world.fuel.clear()
        world.add_collectible(keep)
        world.add_collectible(gone)

        removed = world.prune_collectibles(0.0)

        assert removed == 1
        assert world.fuel == [keep]

    def test_prune_uses_pickup_clearance(self):
        """Test entities survive until they trail by the clearance."""
        world = make_world()
        world.boosts.clear()
        near = Collectible(kind=CollectibleKind.BOOST, world_x=850.0)
        far = Collectible(kind=CollectibleKind.BOOST, world_x=799.0)
        world.add_collectible(near)
        world.add_collectible(far)

        world.prune_collectibles(1000.0)

        assert world.boosts == [near]

    def test_get_state(self):
        """Test window summary."""
        world = make_world()
        state = world.get_state()

        assert state["sample_count"] == len(world.samples)
        assert state["first_x"] == world.samples[0].world_x
