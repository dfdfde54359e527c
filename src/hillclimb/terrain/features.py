"""
Terrain features - Collectible entities placed along the terrain.

Defines:
- CollectibleKind: fuel cans, coins and boost pads
- Collectible: a single placed entity
"""

from dataclasses import dataclass
from enum import Enum
import numpy as np


class CollectibleKind(Enum):
    """Kinds of collectible entities."""
    FUEL = "fuel"
    COIN = "coin"
    BOOST = "boost"


@dataclass
class Collectible:
    """Entity that the car picks up by driving through it.

    All kinds share the same shape; what happens on pickup is decided
    by the pickup rules, not by the entity.
    """
    kind: CollectibleKind = CollectibleKind.COIN
    world_x: float = 0.0
    world_y: float = 0.0
    collected: bool = False

    # Boost pads only; drives the "pad triggered" animation
    active: bool = False

    def distance_to(self, x: float, y: float) -> float:
        """Euclidean distance from this entity to a point."""
        return float(np.hypot(self.world_x - x, self.world_y - y))

    def get_state(self) -> dict:
        """Get entity state for serialization."""
        return {
            "kind": self.kind.value,
            "x": self.world_x,
            "y": self.world_y,
            "collected": self.collected,
        }
