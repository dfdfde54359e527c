"""
Simulation module - Tick loop, world window and collision queries.

This module contains:
- Simulator: Run lifecycle and per-tick update
- World: Sliding terrain/entity window
- PhysicsEngine: Terrain queries and wheel collision
- PickupResolver: Fuel, coin and boost collection
- RunState: Per-run counters
"""

from hillclimb.simulation.simulator import Simulator, SimulatorConfig, TickResult, EndReason
from hillclimb.simulation.world import World, WindowConfig
from hillclimb.simulation.physics import PhysicsEngine, PhysicsConfig, WindowInvariantError
from hillclimb.simulation.pickups import PickupResolver, PickupConfig, PickupEvent
from hillclimb.simulation.state import RunState, BoostState

__all__ = [
    "Simulator",
    "SimulatorConfig",
    "TickResult",
    "EndReason",
    "World",
    "WindowConfig",
    "PhysicsEngine",
    "PhysicsConfig",
    "WindowInvariantError",
    "PickupResolver",
    "PickupConfig",
    "PickupEvent",
    "RunState",
    "BoostState",
]
