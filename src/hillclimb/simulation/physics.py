"""
Physics engine - Terrain queries and collision detection.

Provides:
- Terrain height and slope at any world x
- Wheel/ground collision tests
- Shared physical constants (gravity, friction, air resistance)
- Angle normalization
"""

from bisect import bisect_right
from dataclasses import dataclass
from typing import Optional, Tuple
import logging
import numpy as np

from hillclimb.car.wheel import Wheel, WheelContact
from hillclimb.terrain.segment import TerrainSample
from hillclimb.simulation.world import World

logger = logging.getLogger(__name__)


class WindowInvariantError(RuntimeError):
    """Raised in strict mode when a query falls outside the terrain window."""


@dataclass
class PhysicsConfig:
    """Physics simulation configuration.

    Values are per tick; the simulation runs at a fixed frame rate.
    """
    gravity: float = 0.4

    # Velocity retained per tick
    ground_friction: float = 0.97
    air_resistance: float = 0.99

    # Along-slope force scale
    slope_coefficient: float = 0.25

    # Height returned for queries outside the terrain window
    baseline_height: float = 360.0

    # Raise instead of falling back when a query leaves the window
    strict_window: bool = False


class PhysicsEngine:
    """Terrain query and collision service.

    Interpolates the windowed terrain samples of a World. Queries are
    expected to stay inside the window; anything outside it is a
    windowing bug and is logged before a baseline value is returned.
    """

    def __init__(self, world: World, config: PhysicsConfig | None = None):
        """Initialize physics engine.

        Args:
            world: World whose terrain window is queried
            config: Physics configuration. Uses defaults if None.
        """
        self.world = world
        self.config = config or PhysicsConfig()

    def _bracket(self, world_x: float) -> Optional[Tuple[TerrainSample, TerrainSample]]:
        """Find samples p1, p2 with p1.x <= world_x <= p2.x."""
        samples = self.world.samples
        if len(samples) < 2:
            return None
        if world_x < samples[0].world_x or world_x > samples[-1].world_x:
            return None

        i = bisect_right(samples, world_x, key=lambda s: s.world_x) - 1
        i = min(i, len(samples) - 2)
        return samples[i], samples[i + 1]

    def _outside_window(self, world_x: float, query: str) -> None:
        samples = self.world.samples
        span = (samples[0].world_x, samples[-1].world_x) if samples else (None, None)
        message = f"{query}({world_x:.1f}) outside terrain window {span}"
        if self.config.strict_window:
            raise WindowInvariantError(message)
        logger.warning(message)

    def height_at(self, world_x: float) -> float:
        """Interpolated terrain height at a world x.

        Args:
            world_x: World x coordinate

        Returns:
            Terrain height (screen y)
        """
        pair = self._bracket(world_x)
        if pair is None:
            self._outside_window(world_x, "height_at")
            return self.config.baseline_height

        p1, p2 = pair
        if world_x == p2.world_x:
            return p2.height
        ratio = (world_x - p1.world_x) / (p2.world_x - p1.world_x)
        return p1.height + (p2.height - p1.height) * ratio

    def slope_angle_at(self, world_x: float) -> float:
        """Terrain tangent angle at a world x.

        Args:
            world_x: World x coordinate

        Returns:
            Slope angle in radians (positive = downhill to the right)
        """
        pair = self._bracket(world_x)
        if pair is None:
            self._outside_window(world_x, "slope_angle_at")
            return 0.0

        p1, p2 = pair
        return float(np.arctan2(p2.height - p1.height, p2.world_x - p1.world_x))

    def check_wheel(self, wheel: Wheel, terrain_offset: float) -> WheelContact:
        """Test a wheel against the terrain surface.

        Args:
            wheel: Wheel with screen-space position
            terrain_offset: World scroll position

        Returns:
            WheelContact with terrain height and penetration depth
        """
        terrain_y = self.height_at(wheel.x + terrain_offset)
        if wheel.bottom >= terrain_y:
            return WheelContact(
                collision=True,
                terrain_y=terrain_y,
                penetration=wheel.bottom - terrain_y,
            )
        return WheelContact(collision=False, terrain_y=terrain_y)

    @staticmethod
    def normalize_angle(angle: float) -> float:
        """Wrap an angle to [0, 2*pi).

        Args:
            angle: Angle in radians

        Returns:
            Equivalent angle in [0, 2*pi)
        """
        two_pi = 2 * np.pi
        return float(((angle % two_pi) + two_pi) % two_pi)
