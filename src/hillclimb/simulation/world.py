"""
World - Sliding window over the endless terrain.

Manages:
- The buffer of terrain samples around the car
- Active bridges
- Fuel, coin and boost entities
- Extension and eviction as the world scrolls
"""

from dataclasses import dataclass, replace
from typing import Dict, List
import logging
import numpy as np

from hillclimb.terrain.generator import TerrainGenerator
from hillclimb.terrain.segment import TerrainSample, Bridge
from hillclimb.terrain.features import Collectible, CollectibleKind

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """World window configuration."""
    viewport_width: float = 1200.0

    # Terrain kept behind the offset and generated past the viewport
    trailing_margin: float = 100.0
    leading_margin: float = 100.0

    # How far behind the offset entities survive before eviction
    bridge_clearance: float = 100.0
    pickup_clearance: float = 200.0

    def __post_init__(self):
        if self.viewport_width <= 0:
            raise ValueError("viewport_width must be positive")


class World:
    """Bounded window of terrain and entities.

    The window always covers
    ``[terrain_offset - trailing_margin, terrain_offset + viewport_width + leading_margin]``.
    Samples are requested from the generator one at a time with a
    monotonically increasing global index, and everything behind the
    trailing edge is evicted, so memory stays bounded however far the
    car drives.

    Usage:
        world = World(TerrainGenerator())
        world.reset(terrain_offset=0.0)
        world.update(terrain_offset=250.0, level=1)
    """

    def __init__(
        self,
        generator: TerrainGenerator | None = None,
        config: WindowConfig | None = None,
    ):
        """Initialize world.

        Args:
            generator: Terrain generator (default generator if None)
            config: Window configuration
        """
        self.generator = generator or TerrainGenerator()
        # Private copy; reset() may change the viewport width
        self.config = replace(config) if config else WindowConfig()

        self._samples: List[TerrainSample] = []
        self._bridges: List[Bridge] = []
        self._collectibles: Dict[CollectibleKind, List[Collectible]] = {
            kind: [] for kind in CollectibleKind
        }
        self._next_index: int = 0

    @property
    def segment_width(self) -> float:
        """Distance between consecutive samples."""
        return self.generator.config.segment_width

    @property
    def samples(self) -> List[TerrainSample]:
        """Terrain samples in ascending x order."""
        return self._samples

    @property
    def bridges(self) -> List[Bridge]:
        """Active bridges."""
        return self._bridges

    @property
    def fuel(self) -> List[Collectible]:
        """Active fuel cans."""
        return self._collectibles[CollectibleKind.FUEL]

    @property
    def coins(self) -> List[Collectible]:
        """Active coins."""
        return self._collectibles[CollectibleKind.COIN]

    @property
    def boosts(self) -> List[Collectible]:
        """Active boost pads."""
        return self._collectibles[CollectibleKind.BOOST]

    def collectibles(self, kind: CollectibleKind) -> List[Collectible]:
        """Get the active entities of one kind."""
        return self._collectibles[kind]

    def trailing_edge(self, terrain_offset: float) -> float:
        """World x behind which samples are evicted."""
        return terrain_offset - self.config.trailing_margin

    def leading_edge(self, terrain_offset: float) -> float:
        """World x the buffer must reach."""
        return terrain_offset + self.config.viewport_width + self.config.leading_margin

    def reset(self, terrain_offset: float = 0.0, viewport_width: float | None = None) -> None:
        """Clear everything and generate a fresh window.

        Args:
            terrain_offset: World scroll position
            viewport_width: New viewport width (keeps current if None)
        """
        if viewport_width is not None:
            if viewport_width <= 0:
                raise ValueError("viewport_width must be positive")
            self.config.viewport_width = viewport_width

        self._samples.clear()
        self._bridges.clear()
        for items in self._collectibles.values():
            items.clear()

        self.generator.reset(terrain_offset)
        self._next_index = int(np.ceil(self.trailing_edge(terrain_offset) / self.segment_width))
        self._extend(terrain_offset, level=1)

        logger.debug(
            "World reset at offset %.0f with %d samples",
            terrain_offset, len(self._samples),
        )

    def update(self, terrain_offset: float, level: int = 1) -> None:
        """Scroll the window to a new offset.

        Evicts samples and bridges behind the trailing edge, then extends
        the buffer past the leading edge.

        Args:
            terrain_offset: Current world scroll position
            level: Current difficulty level (shapes new terrain)
        """
        trailing = self.trailing_edge(terrain_offset)

        stale = 0
        while stale < len(self._samples) and self._samples[stale].world_x < trailing:
            stale += 1
        if stale:
            del self._samples[:stale]

        # A scroll larger than the window skips terrain nobody will see
        first_index = int(np.ceil(trailing / self.segment_width))
        if self._next_index < first_index:
            self._next_index = first_index

        self._extend(terrain_offset, level)

        bridge_limit = terrain_offset - self.config.bridge_clearance
        self._bridges[:] = [b for b in self._bridges if b.end_x >= bridge_limit]

    def _extend(self, terrain_offset: float, level: int) -> None:
        """Append samples until the leading edge is covered."""
        leading = self.leading_edge(terrain_offset)
        while not self._samples or self._samples[-1].world_x < leading:
            self._append_sample(level)

    def _append_sample(self, level: int) -> None:
        """Request the next sample from the generator."""
        index = self._next_index
        result = self.generator.generate_sample(
            index * self.segment_width, index, level, self._bridges
        )
        self._next_index += 1

        self._samples.append(result.sample)
        if result.bridge is not None:
            self._bridges.append(result.bridge)
        for item in result.collectibles:
            self.add_collectible(item)

    def add_collectible(self, item: Collectible) -> None:
        """Place an entity in the world.

        Args:
            item: Entity to add
        """
        self._collectibles[item.kind].append(item)

    def prune_collectibles(self, terrain_offset: float) -> int:
        """Drop collected entities and those scrolled out of view.

        Args:
            terrain_offset: Current world scroll position

        Returns:
            Number of entities removed
        """
        limit = terrain_offset - self.config.pickup_clearance
        removed = 0
        for items in self._collectibles.values():
            before = len(items)
            items[:] = [c for c in items if not c.collected and c.world_x > limit]
            removed += before - len(items)
        return removed

    def get_state(self) -> dict:
        """Get world state for serialization.

        Returns:
            Dictionary with buffer bounds and entity counts
        """
        return {
            "sample_count": len(self._samples),
            "first_x": self._samples[0].world_x if self._samples else None,
            "last_x": self._samples[-1].world_x if self._samples else None,
            "bridges": len(self._bridges),
            "fuel": len(self.fuel),
            "coins": len(self.coins),
            "boosts": len(self.boosts),
        }
