"""Tests for the HillClimb telemetry module."""

import pytest
import numpy as np

from hillclimb.telemetry import TelemetryRecorder, RecorderConfig, TelemetryChannel, ChannelConfig


class TestTelemetryChannel:
    """Test a single channel."""

    def test_record_and_stats(self):
        """Test values are stored with running statistics."""
        channel = TelemetryChannel(name="speed")
        for tick, value in enumerate([1.0, 3.0, 2.0]):
            channel.record(tick, value)

        assert len(channel) == 3
        assert channel.min_value == 1.0
        assert channel.max_value == 3.0
        assert channel.mean == pytest.approx(2.0)
        assert channel.last_value == 2.0
        assert np.array_equal(channel.get_ticks(), [0, 1, 2])

    def test_values_clamped(self):
        """Test values outside the channel range are clamped."""
        channel = TelemetryChannel(ChannelConfig(name="fuel", min_value=0.0, max_value=100.0))

        channel.record(0, 120.0)
        channel.record(1, -5.0)

        assert list(channel.get_values()) == [100.0, 0.0]

    def test_buffer_is_bounded(self):
        """Test old samples are dropped but still counted."""
        channel = TelemetryChannel(ChannelConfig(name="score", buffer_size=5))
        for tick in range(20):
            channel.record(tick, float(tick))

        assert len(channel) == 5
        assert channel.count == 20
        assert list(channel.get_last_n(2)) == [18.0, 19.0]

    def test_clear(self):
        """Test clearing resets data and statistics."""
        channel = TelemetryChannel(name="x")
        channel.record(0, 1.0)
        channel.clear()

        assert len(channel) == 0
        assert channel.get_state()["count"] == 0


class TestTelemetryRecorder:
    """Test the recorder."""

    def test_standard_channels(self):
        """Test the default recorder has the run channels."""
        recorder = TelemetryRecorder()

        for name in ("score", "fuel", "speed", "rotation", "level", "coins"):
            assert recorder.get_channel(name) is not None

    def test_decimation(self):
        """Test only every Nth tick is sampled."""
        recorder = TelemetryRecorder(RecorderConfig(sample_every=3))

        sampled = [recorder.record(tick, {"score": float(tick)}) for tick in range(9)]

        assert sampled.count(True) == 3
        assert len(recorder.get_channel("score")) == 3

    def test_selected_channels(self):
        """Test recording a subset, including a custom channel."""
        recorder = TelemetryRecorder(RecorderConfig(channels=["fuel", "jump_height"]))
        recorder.record(0, {"fuel": 50.0, "jump_height": 12.0, "score": 3.0})

        assert set(recorder.channels) == {"fuel", "jump_height"}
        assert recorder.get_current_values() == {"fuel": 50.0, "jump_height": 12.0}

    def test_statistics(self):
        """Test per-channel summaries."""
        recorder = TelemetryRecorder()
        recorder.record(0, {"speed": 4.0})
        recorder.record(1, {"speed": 6.0})

        stats = recorder.get_statistics()

        assert stats["speed"]["mean"] == pytest.approx(5.0)
        assert stats["fuel"]["count"] == 0

    def test_fuel_channel_range(self):
        """Test the fuel channel is bounded by the tank size."""
        recorder = TelemetryRecorder(RecorderConfig(max_fuel=250.0))
        recorder.record(0, {"fuel": 240.0})
        recorder.record(1, {"fuel": 300.0})

        assert list(recorder.get_channel("fuel").get_values()) == [240.0, 250.0]

    def test_invalid_sampling(self):
        """Test a zero sampling interval is rejected."""
        with pytest.raises(ValueError):
            TelemetryRecorder(RecorderConfig(sample_every=0))
