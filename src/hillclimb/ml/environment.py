"""
Hill climb environment - Gymnasium-compatible environment.

Provides:
- Gym-style interface for RL
- Observation and action spaces
- Step and reset methods
- Reward calculation
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple
import numpy as np
import gymnasium as gym
from gymnasium import spaces

from hillclimb.simulation.simulator import Simulator, SimulatorConfig
from hillclimb.terrain.features import CollectibleKind
from hillclimb.ml.spaces import ObservationSpace, ActionSpace, ObservationConfig, ActionConfig


@dataclass
class HillClimbEnvConfig:
    """Environment configuration."""
    max_episode_ticks: int = 3600  # One minute at 60 Hz

    # Reward shaping
    distance_reward: float = 1.0   # Per metre
    coin_reward: float = 1.0
    end_penalty: float = 10.0

    simulator: SimulatorConfig | None = None
    observation_config: ObservationConfig | None = None
    action_config: ActionConfig | None = None


class HillClimbEnv(gym.Env):
    """Single-agent hill climb environment.

    Usage:
        env = HillClimbEnv()
        obs, info = env.reset(seed=0)

        while True:
            action = agent.act(obs)
            obs, reward, terminated, truncated, info = env.step(action)
            if terminated or truncated:
                break
    """

    metadata = {"render_modes": []}

    def __init__(self, config: HillClimbEnvConfig | None = None):
        """Initialize environment.

        Args:
            config: Environment configuration
        """
        super().__init__()
        self.config = config or HillClimbEnvConfig()

        self._obs_space = ObservationSpace(self.config.observation_config)
        self._action_space = ActionSpace(self.config.action_config)

        self.observation_space = spaces.Box(
            low=self._obs_space.get_low(),
            high=self._obs_space.get_high(),
            shape=self._obs_space.shape,
            dtype=np.float32,
        )
        if self._action_space.is_binary:
            self.action_space = spaces.MultiBinary(self._action_space.dimension)
        else:
            self.action_space = spaces.Discrete(self._action_space.dimension)

        self.sim = Simulator(self.config.simulator)
        self._initialized = False

    def reset(
        self,
        seed: int | None = None,
        options: Dict[str, Any] | None = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """Reset environment for a new episode.

        Args:
            seed: Seed for terrain generation
            options: Unused

        Returns:
            Tuple of (initial_observation, info)
        """
        super().reset(seed=seed)
        self.sim.reset(rng=self.np_random)
        self._initialized = True
        return self._obs_space.extract(self.sim), self._get_info()

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """Take environment step.

        Args:
            action: Agent action

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if not self._initialized:
            raise RuntimeError("Environment not initialized. Call reset() first.")

        inputs = self._action_space.decode(action)
        score_before = self.sim.run.score

        result = self.sim.tick(inputs)

        reward = (self.sim.run.score - score_before) * self.config.distance_reward
        coins = sum(1 for e in result.events if e.kind is CollectibleKind.COIN)
        reward += coins * self.config.coin_reward

        terminated = not result.continuing
        if terminated:
            reward -= self.config.end_penalty
        truncated = not terminated and self.sim.tick_count >= self.config.max_episode_ticks

        info = self._get_info()
        if result.reason is not None:
            info["end_reason"] = result.reason.value

        return self._obs_space.extract(self.sim), float(reward), terminated, truncated, info

    def _get_info(self) -> Dict[str, Any]:
        run = self.sim.run
        return {
            "tick": self.sim.tick_count,
            "score": run.score,
            "fuel": run.fuel,
            "coins": run.coin_count,
            "level": run.level,
        }

    def close(self) -> None:
        """Close environment."""
        self._initialized = False
