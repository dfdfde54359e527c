"""
HillClimb - A side-scrolling hill climb vehicle simulation.

This package provides the simulation core of a 2D hill climb game:
- Procedurally generated rolling terrain with bridges, fuel, coins and boosts
- A bounded world window that streams terrain around the car
- An empirical car dynamics model with ground and air states
- Pickup resolution, tick-counted boosts and distance-based progression
- Telemetry and a Gymnasium environment for machine learning
"""

__version__ = "0.1.0"

from hillclimb.simulation.simulator import Simulator
from hillclimb.car.car import Car, CarInputs
from hillclimb.terrain.generator import TerrainGenerator

__all__ = ["Simulator", "Car", "CarInputs", "TerrainGenerator", "__version__"]
