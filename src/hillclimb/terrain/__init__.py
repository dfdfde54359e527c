"""
Terrain module - Procedural terrain generation and terrain data structures.

This module contains:
- TerrainGenerator: Layered-noise terrain with feature placement
- TerrainSample: Single control point of the terrain profile
- Bridge: Flat span overriding the generated terrain
- Collectible: Fuel, coin and boost entities
"""

from hillclimb.terrain.generator import TerrainGenerator, GeneratorConfig, GeneratedSample
from hillclimb.terrain.segment import TerrainSample, Bridge, BridgeMaterial
from hillclimb.terrain.features import Collectible, CollectibleKind

__all__ = [
    "TerrainGenerator",
    "GeneratorConfig",
    "GeneratedSample",
    "TerrainSample",
    "Bridge",
    "BridgeMaterial",
    "Collectible",
    "CollectibleKind",
]
