"""
Car module - Hill climb car dynamics.

This module contains:
- Car: Grounded/airborne integrator
- CarInputs: Forward, backward and brake intent
- Wheel: Wheel contact points
"""

from hillclimb.car.car import Car, CarConfig, CarInputs, CarState, StepResult
from hillclimb.car.wheel import Wheel, WheelContact

__all__ = [
    "Car",
    "CarConfig",
    "CarInputs",
    "CarState",
    "StepResult",
    "Wheel",
    "WheelContact",
]
