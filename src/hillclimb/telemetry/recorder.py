"""
Telemetry recorder - Records run values tick by tick.

Provides:
- Standard run channels (distance, fuel, speed, attitude, progression)
- Decimated sampling
- Per-channel statistics
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from hillclimb.telemetry.channel import TelemetryChannel, ChannelConfig


STANDARD_CHANNELS = {
    "score": ChannelConfig("score", "m", 0, float('inf'), 1),
    "fuel": ChannelConfig("fuel", "", 0, 100, 2),
    "speed": ChannelConfig("speed", "px/tick", -50, 50, 2),
    "rotation": ChannelConfig("rotation", "rad", float('-inf'), float('inf'), 3),
    "level": ChannelConfig("level", "", 1, float('inf'), 0),
    "coins": ChannelConfig("coins", "", 0, float('inf'), 0),
    "on_ground": ChannelConfig("on_ground", "", 0, 1, 0),
    "terrain_offset": ChannelConfig("terrain_offset", "px", float('-inf'), float('inf'), 1),
}


@dataclass
class RecorderConfig:
    """Recorder configuration."""
    sample_every: int = 1              # Record one tick in N
    channels: List[str] | None = None  # Channels to record (None = all)
    buffer_size: int = 10000           # Per-channel buffer size
    max_fuel: float = 100.0            # Upper bound of the fuel channel


class TelemetryRecorder:
    """Records run telemetry.

    Fed a flat snapshot dict once per tick by the simulator; keys that
    match a channel name are recorded.
    """

    def __init__(self, config: RecorderConfig | None = None):
        """Initialize recorder.

        Args:
            config: Recorder configuration
        """
        self.config = config or RecorderConfig()
        if self.config.sample_every < 1:
            raise ValueError("sample_every must be at least 1")

        self._channels: Dict[str, TelemetryChannel] = {}
        for name in self.config.channels or list(STANDARD_CHANNELS):
            base = STANDARD_CHANNELS.get(name, ChannelConfig(name=name))
            if name == "fuel":
                base = replace(base, max_value=self.config.max_fuel)
            self._channels[name] = TelemetryChannel(
                replace(base, buffer_size=self.config.buffer_size)
            )

    @property
    def channels(self) -> Dict[str, TelemetryChannel]:
        """All channels."""
        return self._channels

    def get_channel(self, name: str) -> Optional[TelemetryChannel]:
        """Get channel by name."""
        return self._channels.get(name)

    def record(self, tick: int, values: Dict[str, Any]) -> bool:
        """Record a snapshot.

        Args:
            tick: Simulation tick
            values: Mapping of channel name to value

        Returns:
            True if the tick was sampled
        """
        if tick % self.config.sample_every != 0:
            return False

        for name, channel in self._channels.items():
            if name in values:
                channel.record(tick, float(values[name]))
        return True

    def get_current_values(self) -> Dict[str, float]:
        """Most recent value of each channel."""
        return {name: ch.last_value for name, ch in self._channels.items()}

    def get_statistics(self) -> Dict[str, Dict[str, Any]]:
        """Summary statistics of each channel."""
        return {name: ch.get_state() for name, ch in self._channels.items()}

    def clear(self) -> None:
        """Clear all recorded data."""
        for channel in self._channels.values():
            channel.clear()
