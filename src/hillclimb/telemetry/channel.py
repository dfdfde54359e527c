"""
Telemetry channel - Bounded time series for a single run value.

Provides:
- Fixed-size buffering (old samples are dropped)
- Running statistics over everything recorded
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque
import numpy as np


@dataclass
class ChannelConfig:
    """Configuration for a telemetry channel."""
    name: str = "unnamed"
    unit: str = ""
    min_value: float = float('-inf')
    max_value: float = float('inf')
    precision: int = 3
    buffer_size: int = 10000


class TelemetryChannel:
    """Single telemetry data channel.

    Keeps the last ``buffer_size`` samples; statistics cover every
    sample recorded since the last clear.
    """

    def __init__(self, config: ChannelConfig | None = None, name: str = "channel"):
        """Initialize channel.

        Args:
            config: Channel configuration
            name: Channel name (used if config not provided)
        """
        self.config = config or ChannelConfig(name=name)

        self._ticks: Deque[int] = deque(maxlen=self.config.buffer_size)
        self._values: Deque[float] = deque(maxlen=self.config.buffer_size)

        self._min: float = float('inf')
        self._max: float = float('-inf')
        self._sum: float = 0.0
        self._count: int = 0

    @property
    def name(self) -> str:
        """Channel name."""
        return self.config.name

    @property
    def count(self) -> int:
        """Number of samples recorded since the last clear."""
        return self._count

    @property
    def min_value(self) -> float:
        return self._min if self._count > 0 else 0.0

    @property
    def max_value(self) -> float:
        return self._max if self._count > 0 else 0.0

    @property
    def mean(self) -> float:
        return self._sum / self._count if self._count > 0 else 0.0

    @property
    def last_value(self) -> float:
        """Most recent value."""
        return self._values[-1] if self._values else 0.0

    def __len__(self) -> int:
        return len(self._values)

    def record(self, tick: int, value: float) -> None:
        """Record a value at a tick.

        Args:
            tick: Simulation tick
            value: Value to record (clamped to the channel range)
        """
        value = float(np.clip(value, self.config.min_value, self.config.max_value))

        self._ticks.append(tick)
        self._values.append(value)

        self._min = min(self._min, value)
        self._max = max(self._max, value)
        self._sum += value
        self._count += 1

    def get_values(self) -> np.ndarray:
        """Buffered values as an array."""
        return np.array(self._values)

    def get_ticks(self) -> np.ndarray:
        """Buffered ticks as an array."""
        return np.array(self._ticks)

    def get_last_n(self, n: int) -> np.ndarray:
        """Last n buffered values."""
        return np.array(self._values)[-n:]

    def clear(self) -> None:
        """Clear all recorded data."""
        self._ticks.clear()
        self._values.clear()
        self._min = float('inf')
        self._max = float('-inf')
        self._sum = 0.0
        self._count = 0

    def get_state(self) -> dict:
        """Get channel summary."""
        if self._count == 0:
            return {"name": self.name, "unit": self.config.unit, "count": 0}
        precision = self.config.precision
        return {
            "name": self.name,
            "unit": self.config.unit,
            "count": self._count,
            "min": round(self._min, precision),
            "max": round(self._max, precision),
            "mean": round(self.mean, precision),
            "last": round(self.last_value, precision),
        }
