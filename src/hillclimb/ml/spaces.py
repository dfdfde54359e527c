"""
Observation and action spaces for ML integration.

Provides:
- Observation extraction from a running simulator
- Action decoding into driver intent
"""

from dataclasses import dataclass
from itertools import product
from typing import List, Tuple
import numpy as np

from hillclimb.car.car import CarInputs
from hillclimb.simulation.simulator import Simulator


@dataclass
class ObservationConfig:
    """Configuration for observation space."""
    # Terrain lookahead ahead of the car center
    lookahead_points: int = 10
    lookahead_spacing: float = 60.0

    # Normalization scales
    vertical_speed_scale: float = 20.0
    angular_velocity_scale: float = 0.5
    height_scale: float = 200.0


class ObservationSpace:
    """Normalized observation of car, run and upcoming terrain.

    Layout: velocity_x, velocity_y, sin(rotation), cos(rotation),
    angular_velocity, on_ground, fuel, boost remaining, then one
    relative terrain height per lookahead point.
    """

    BASE_DIMENSION = 8

    def __init__(self, config: ObservationConfig | None = None):
        """Initialize observation space.

        Args:
            config: Observation configuration
        """
        self.config = config or ObservationConfig()

    @property
    def dimension(self) -> int:
        """Observation vector dimension."""
        return self.BASE_DIMENSION + self.config.lookahead_points

    @property
    def shape(self) -> Tuple[int]:
        return (self.dimension,)

    def get_low(self) -> np.ndarray:
        return np.full(self.dimension, -1.0, dtype=np.float32)

    def get_high(self) -> np.ndarray:
        return np.full(self.dimension, 1.0, dtype=np.float32)

    def extract(self, sim: Simulator) -> np.ndarray:
        """Extract the observation from a simulator.

        Args:
            sim: Simulator with a run in progress

        Returns:
            Observation vector in [-1, 1]
        """
        cfg = self.config
        state = sim.car.state
        top_speed = sim.car.max_speed(boost_active=True)

        obs: List[float] = [
            state.velocity_x / top_speed,
            state.velocity_y / cfg.vertical_speed_scale,
            np.sin(state.rotation),
            np.cos(state.rotation),
            state.angular_velocity / cfg.angular_velocity_scale,
            1.0 if state.on_ground else -1.0,
            sim.run.fuel_fraction * 2 - 1,
            sim.run.boost.remaining_fraction(sim.tick_count) * 2 - 1,
        ]

        samples = sim.world.samples
        horizon = samples[-1].world_x if samples else sim.car_world_x
        for i in range(cfg.lookahead_points):
            x = min(sim.car_world_x + (i + 1) * cfg.lookahead_spacing, horizon)
            # Positive = terrain below the car
            obs.append((sim.physics.height_at(x) - state.y) / cfg.height_scale)

        return np.clip(np.array(obs, dtype=np.float32), -1.0, 1.0)


@dataclass
class ActionConfig:
    """Configuration for action space."""
    # MultiBinary(3) if True, otherwise Discrete over all 8 combinations
    binary: bool = True


class ActionSpace:
    """Maps agent actions to forward/backward/brake intent."""

    COMBINATIONS: List[Tuple[bool, bool, bool]] = list(product((False, True), repeat=3))

    def __init__(self, config: ActionConfig | None = None):
        """Initialize action space.

        Args:
            config: Action configuration
        """
        self.config = config or ActionConfig()

    @property
    def is_binary(self) -> bool:
        return self.config.binary

    @property
    def dimension(self) -> int:
        """Action vector length (binary) or number of actions (discrete)."""
        return 3 if self.config.binary else len(self.COMBINATIONS)

    def decode(self, action) -> CarInputs:
        """Decode an action into driver intent.

        Args:
            action: Length-3 0/1 vector (binary) or action index (discrete)

        Returns:
            CarInputs
        """
        if self.config.binary:
            flags = np.asarray(action).reshape(-1)
            if flags.shape[0] != 3:
                raise ValueError(f"expected 3 action flags, got {flags.shape[0]}")
            forward, backward, brake = (bool(f) for f in flags)
        else:
            forward, backward, brake = self.COMBINATIONS[int(action)]

        return CarInputs(forward=forward, backward=backward, brake=brake)
