"""
Wheel - Wheel contact points of the car.

Defines:
- Wheel geometry (mount offset and radius)
- Wheel/ground contact result
"""

from dataclasses import dataclass


@dataclass
class Wheel:
    """A wheel contact point.

    The mount offset is along the car body axis, measured from the car
    center; x and y are recomputed every tick from the car pose and are
    in screen coordinates.
    """
    offset: float = 0.0
    radius: float = 9.0

    x: float = 0.0
    y: float = 0.0

    @property
    def bottom(self) -> float:
        """Lowest point of the wheel (screen y grows downward)."""
        return self.y + self.radius

    def get_state(self) -> dict:
        """Get wheel state for serialization."""
        return {
            "x": self.x,
            "y": self.y,
            "radius": self.radius,
        }


@dataclass
class WheelContact:
    """Result of a wheel/ground test."""
    collision: bool = False
    terrain_y: float = 0.0
    penetration: float = 0.0
