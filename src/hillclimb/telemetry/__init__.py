"""
Telemetry module - Per-tick run data collection.

This module contains:
- TelemetryRecorder: Records run values over time
- TelemetryChannel: Individual bounded data channel
"""

from hillclimb.telemetry.recorder import TelemetryRecorder, RecorderConfig
from hillclimb.telemetry.channel import TelemetryChannel, ChannelConfig

__all__ = [
    "TelemetryRecorder",
    "RecorderConfig",
    "TelemetryChannel",
    "ChannelConfig",
]
