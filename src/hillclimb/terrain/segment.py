"""
Terrain segment - Control points and flat spans of the terrain profile.

Defines:
- TerrainSample: one (world_x, height) point of the piecewise-linear profile
- Bridge: a flat span overriding the wave terrain
"""

from dataclasses import dataclass
from enum import Enum


class BridgeMaterial(Enum):
    """Bridge construction material (rendering only)."""
    WOOD = "wood"
    METAL = "metal"


@dataclass
class TerrainSample:
    """Single terrain control point.

    Heights are screen coordinates, so a larger height is lower on screen.
    """
    world_x: float = 0.0
    height: float = 0.0
    on_bridge: bool = False

    def get_state(self) -> dict:
        """Get sample state for serialization."""
        return {
            "x": self.world_x,
            "y": self.height,
            "on_bridge": self.on_bridge,
        }


@dataclass
class Bridge:
    """Flat bridge span.

    Every sample whose x falls in [start_x, end_x] takes surface_y as its
    height instead of the generated wave terrain.
    """
    start_x: float = 0.0
    end_x: float = 150.0
    surface_y: float = 0.0
    material: BridgeMaterial = BridgeMaterial.WOOD

    @property
    def length(self) -> float:
        """Bridge length in world units."""
        return self.end_x - self.start_x

    def contains(self, world_x: float) -> bool:
        """Check if a world x lies on this bridge (inclusive)."""
        return self.start_x <= world_x <= self.end_x

    def get_state(self) -> dict:
        """Get bridge state for serialization."""
        return {
            "start_x": self.start_x,
            "end_x": self.end_x,
            "y": self.surface_y,
            "material": self.material.value,
        }
