#!/usr/bin/env python3
"""
Basic Simulation Example

This example demonstrates how to:
1. Create a seeded simulator
2. Drive the car with a simple throttle policy
3. React to pickup events
4. Read the render snapshot at the end of the run

Run with: python run_simulation.py
"""

import logging

import numpy as np

from hillclimb import Simulator
from hillclimb.car import CarInputs
from hillclimb.simulation import SimulatorConfig


def throttle_policy(sim: Simulator) -> CarInputs:
    """Full throttle, easing off in the air when the nose tips down."""
    state = sim.car.state
    if not state.on_ground and state.rotation > 0.6:
        return CarInputs(backward=True)
    return CarInputs(forward=True)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("HillClimb Basic Simulation Example")
    print("=" * 60)

    # Step 1: Create simulator
    print("\n1. Setting up simulation...")
    sim = Simulator(SimulatorConfig(enable_telemetry=True), rng=np.random.default_rng(42))
    sim.reset()

    print(f"   Viewport: {sim.viewport_width:.0f} px")
    print(f"   Terrain samples in window: {len(sim.world.samples)}")
    print(f"   Bridges in window: {len(sim.world.bridges)}")

    # Step 2: Drive
    print("\n2. Driving (up to 3600 ticks = 60 seconds)...")
    for _ in range(3600):
        result = sim.tick(throttle_policy(sim))

        for event in result.events:
            print(f"   Tick {event.tick}: collected {event.kind.value} at "
                  f"({event.x:.0f}, {event.y:.0f})")

        if sim.tick_count % 600 == 0:
            print(f"   Tick {sim.tick_count}: Distance = {sim.run.score:.0f} m, "
                  f"Fuel = {sim.run.fuel:.1f}, Level = {sim.run.level}")

        if not result.continuing:
            print(f"\n   {result.reason.message}")
            break

    # Step 3: Final snapshot
    print("\n3. Final snapshot:")
    state = sim.get_state()
    run = state["run"]

    print(f"   Distance: {run['score']:.0f} m")
    print(f"   Coins: {run['coins']}")
    print(f"   Fuel: {run['fuel_pct']:.0f}%")
    print(f"   Level: {run['level']}")
    print(f"   Theme: {state['themes']['current']}")
    print(f"   Car rotation: {state['car']['rotation_deg']:.1f} deg")

    # Step 4: Telemetry statistics
    print("\n4. Telemetry statistics:")
    for name, stats in sim.recorder.get_statistics().items():
        if stats["count"]:
            print(f"   {name}: min={stats['min']}, max={stats['max']}, mean={stats['mean']}")

    print("\n" + "=" * 60)
    print("Simulation complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
