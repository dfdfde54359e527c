"""Shared fixtures for the HillClimb tests."""

from typing import List, Sequence, Tuple

import numpy as np
import pytest

from hillclimb.simulation.simulator import Simulator, SimulatorConfig
from hillclimb.terrain.generator import GeneratorConfig
from hillclimb.terrain.segment import TerrainSample


FAR = 1e6  # Spawn spacing (metres) that never triggers inside a test


def flat_generator_config(base_height: float = 360.0) -> GeneratorConfig:
    """Generator config producing constant-height terrain with no features."""
    return GeneratorConfig(
        base_height=base_height,
        primary_amplitude=0.0,
        detail_amplitude=0.0,
        swell_amplitude=0.0,
        noise_amplitude=0.0,
        coin_chance=0.0,
        bridge_min_distance_m=FAR,
        bridge_max_distance_m=FAR,
        fuel_min_distance_m=FAR,
        fuel_max_distance_m=FAR,
        boost_min_distance_m=FAR,
        boost_max_distance_m=FAR,
    )


class SampleWorld:
    """Stand-in world exposing a fixed list of terrain samples."""

    def __init__(self, points: Sequence[Tuple[float, float]]):
        self.samples: List[TerrainSample] = [
            TerrainSample(world_x=x, height=h) for x, h in points
        ]


@pytest.fixture
def make_flat_sim():
    """Factory for started simulators on flat terrain."""
    def _make(base_height: float = 360.0, **kwargs) -> Simulator:
        config = SimulatorConfig(generator=flat_generator_config(base_height), **kwargs)
        sim = Simulator(config, rng=np.random.default_rng(0))
        sim.reset()
        return sim
    return _make


@pytest.fixture
def flat_sim(make_flat_sim) -> Simulator:
    """Started simulator on flat terrain at height 360."""
    return make_flat_sim()


@pytest.fixture
def make_sample_world():
    """Factory for SampleWorld instances."""
    return SampleWorld


@pytest.fixture
def flat_world() -> SampleWorld:
    """Flat terrain at height 360 covering x in [-300, 3000]."""
    return SampleWorld([(x, 360.0) for x in range(-300, 3001, 30)])
