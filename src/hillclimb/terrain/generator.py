"""
Terrain generator - Procedural rolling terrain with feature placement.

Generates:
- Terrain heights from three sine bands plus low-pass filtered noise
- Flat bridges at randomized spacing
- Fuel cans and boost pads at randomized spacing
- Coins by per-sample chance, rarer at higher levels
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import logging
import numpy as np

from hillclimb.terrain.segment import TerrainSample, Bridge, BridgeMaterial
from hillclimb.terrain.features import Collectible, CollectibleKind

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """Configuration for procedural terrain generation.

    Distances are in pixels unless the name ends in _m (metres);
    metre values are converted with pixels_per_metre.
    """
    segment_width: float = 30.0
    base_height: float = 360.0         # 0.6 * 600 px viewport
    pixels_per_metre: float = 10.0

    # Primary band (amplitude grows with level)
    primary_frequency: float = 0.012
    primary_amplitude: float = 70.0
    # Short detail band
    detail_frequency: float = 0.025
    detail_amplitude: float = 35.0
    # Long swell band
    swell_frequency: float = 0.006
    swell_amplitude: float = 50.0

    level_amplitude_step: float = 0.15

    # Low-pass filtered noise
    noise_amplitude: float = 15.0
    noise_smooth: float = 0.9

    # Bridges
    bridge_min_distance_m: float = 250.0
    bridge_max_distance_m: float = 400.0
    bridge_length: float = 150.0
    bridge_initial_lead: float = 500.0  # First cursor sits this far behind the offset

    # Fuel cans
    fuel_min_distance_m: float = 400.0
    fuel_max_distance_m: float = 600.0
    fuel_lift: float = 15.0

    # Boost pads
    boost_min_distance_m: float = 200.0
    boost_max_distance_m: float = 350.0
    boost_lift: float = 5.0

    # Coins
    coin_chance: float = 0.1
    coin_level_falloff: float = 0.05
    coin_lift: float = 35.0
    coin_lift_jitter: float = 20.0

    def __post_init__(self):
        """Validate spacing ranges."""
        if self.segment_width <= 0:
            raise ValueError("segment_width must be positive")
        for name in ("bridge", "fuel", "boost"):
            low = getattr(self, f"{name}_min_distance_m")
            high = getattr(self, f"{name}_max_distance_m")
            if low > high:
                raise ValueError(f"{name} spacing range is inverted: {low} > {high}")
        if not 0.0 <= self.noise_smooth <= 1.0:
            raise ValueError("noise_smooth must be within [0, 1]")


@dataclass
class GeneratedSample:
    """Output of one generation step."""
    sample: TerrainSample
    bridge: Optional[Bridge] = None
    collectibles: List[Collectible] = field(default_factory=list)


class TerrainGenerator:
    """Procedural terrain generator.

    Produces one terrain sample at a time, in increasing x order, and
    decides whether a feature should be placed at that sample. Feature
    spacing is tracked with cursors that only move forward.

    The random source is injected so tests can control it. Anything
    exposing ``random()`` and ``uniform(low, high)`` works; by default a
    fresh ``numpy`` generator is used.

    Usage:
        generator = TerrainGenerator()
        generator.reset(terrain_offset=0.0)
        result = generator.generate_sample(0.0, 0)
    """

    def __init__(self, config: GeneratorConfig | None = None, rng=None):
        """Initialize generator.

        Args:
            config: Generator configuration. Uses defaults if None.
            rng: Random source. Uses an unseeded numpy generator if None.
        """
        self.config = config or GeneratorConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

        self._noise: float = 0.0
        self._last_bridge_x: float = 0.0
        self._next_bridge_gap: float = 0.0
        self._last_fuel_x: float = 0.0
        self._next_fuel_gap: float = 0.0
        self._last_boost_x: float = 0.0
        self._next_boost_gap: float = 0.0

        self.reset()

    @property
    def noise(self) -> float:
        """Current value of the filtered noise."""
        return self._noise

    def reset(self, terrain_offset: float = 0.0) -> None:
        """Reset noise and spawn cursors relative to a terrain offset.

        Args:
            terrain_offset: World scroll position the new window starts at
        """
        self._noise = 0.0

        self._last_fuel_x = terrain_offset
        self._next_fuel_gap = self._draw_gap(
            self.config.fuel_min_distance_m, self.config.fuel_max_distance_m
        )

        self._last_boost_x = terrain_offset
        self._next_boost_gap = self._draw_gap(
            self.config.boost_min_distance_m, self.config.boost_max_distance_m
        )

        self._last_bridge_x = terrain_offset - self.config.bridge_initial_lead
        self._next_bridge_gap = self._draw_gap(
            self.config.bridge_min_distance_m, self.config.bridge_max_distance_m
        )

    def _draw_gap(self, low_m: float, high_m: float) -> float:
        """Draw a spawn gap in pixels from a range in metres."""
        return float(self.rng.uniform(low_m, high_m)) * self.config.pixels_per_metre

    def level_multiplier(self, level: int) -> float:
        """Amplitude multiplier for the primary band at a level."""
        return 1.0 + (level - 1) * self.config.level_amplitude_step

    def coin_probability(self, level: int) -> float:
        """Per-sample coin chance at a level (never negative)."""
        chance = self.config.coin_chance * (1.0 - level * self.config.coin_level_falloff)
        return max(0.0, chance)

    def wave_height(self, sample_index: float, level: int = 1) -> float:
        """Deterministic part of the terrain height.

        Args:
            sample_index: Global sample index (wave phase)
            level: Current difficulty level

        Returns:
            Base height plus the three sine bands
        """
        cfg = self.config
        primary = np.sin(sample_index * cfg.primary_frequency) * cfg.primary_amplitude
        primary *= self.level_multiplier(level)
        detail = np.sin(sample_index * cfg.detail_frequency) * cfg.detail_amplitude
        swell = np.sin(sample_index * cfg.swell_frequency) * cfg.swell_amplitude
        return float(cfg.base_height + primary + detail + swell)

    def _next_noise(self) -> float:
        """Advance the one-pole low-pass noise filter."""
        raw = (float(self.rng.random()) - 0.5) * self.config.noise_amplitude
        smooth = self.config.noise_smooth
        self._noise = self._noise * smooth + raw * (1.0 - smooth)
        return self._noise

    def generate_sample(
        self,
        world_x: float,
        sample_index: int,
        level: int = 1,
        bridges: Sequence[Bridge] = (),
    ) -> GeneratedSample:
        """Generate the terrain sample at world_x and any new features.

        Args:
            world_x: World x of the sample
            sample_index: Global index of the sample (wave phase)
            level: Current difficulty level
            bridges: Bridges currently in the world window

        Returns:
            GeneratedSample with the sample and newly placed features
        """
        cfg = self.config

        bridge_here = next((b for b in bridges if b.contains(world_x)), None)
        on_bridge = bridge_here is not None

        if on_bridge:
            height = bridge_here.surface_y
        else:
            height = self.wave_height(sample_index, level) + self._next_noise()

        result = GeneratedSample(
            sample=TerrainSample(world_x=world_x, height=height, on_bridge=on_bridge)
        )

        # Bridges
        if world_x >= self._last_bridge_x + self._next_bridge_gap and not on_bridge:
            material = BridgeMaterial.WOOD if self.rng.random() > 0.5 else BridgeMaterial.METAL
            bridge = Bridge(
                start_x=world_x,
                end_x=world_x + cfg.bridge_length,
                surface_y=height,
                material=material,
            )
            result.bridge = bridge
            # Spacing counts from the far end of the bridge
            self._last_bridge_x = bridge.end_x
            self._next_bridge_gap = self._draw_gap(
                cfg.bridge_min_distance_m, cfg.bridge_max_distance_m
            )
            logger.debug("Bridge placed at x=%.0f (%s)", world_x, material.value)

        # Fuel
        if world_x >= self._last_fuel_x + self._next_fuel_gap:
            result.collectibles.append(Collectible(
                kind=CollectibleKind.FUEL,
                world_x=world_x + cfg.segment_width * 0.5,
                world_y=height - cfg.fuel_lift,
            ))
            self._last_fuel_x = world_x
            self._next_fuel_gap = self._draw_gap(
                cfg.fuel_min_distance_m, cfg.fuel_max_distance_m
            )

        # Boosts
        if world_x >= self._last_boost_x + self._next_boost_gap:
            result.collectibles.append(Collectible(
                kind=CollectibleKind.BOOST,
                world_x=world_x + cfg.segment_width * 0.5,
                world_y=height - cfg.boost_lift,
            ))
            self._last_boost_x = world_x
            self._next_boost_gap = self._draw_gap(
                cfg.boost_min_distance_m, cfg.boost_max_distance_m
            )

        # Coins
        if self.rng.random() < self.coin_probability(level):
            lift = cfg.coin_lift + float(self.rng.random()) * cfg.coin_lift_jitter
            result.collectibles.append(Collectible(
                kind=CollectibleKind.COIN,
                world_x=world_x + cfg.segment_width * 0.6,
                world_y=height - lift,
            ))

        return result

    def generate_with_seed(self, seed: int, terrain_offset: float = 0.0) -> None:
        """Swap in a seeded numpy generator and reset.

        Args:
            seed: Random seed
            terrain_offset: Offset to reset the spawn cursors to
        """
        self.rng = np.random.default_rng(seed)
        self.reset(terrain_offset)
