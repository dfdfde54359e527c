"""
Simulator - Main tick loop and run lifecycle.

Provides:
- Run start/reset
- Fixed-order per-tick update
- Camera scroll coupling and scoring
- Terminal conditions (fall, flip, out of fuel)
- Render snapshot and telemetry
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
import logging
import numpy as np

from hillclimb.car.car import Car, CarConfig, CarInputs
from hillclimb.terrain.generator import TerrainGenerator, GeneratorConfig
from hillclimb.scoring.progression import ProgressionTracker, ProgressionConfig
from hillclimb.telemetry.recorder import TelemetryRecorder, RecorderConfig
from hillclimb.simulation.world import World, WindowConfig
from hillclimb.simulation.physics import PhysicsEngine, PhysicsConfig
from hillclimb.simulation.pickups import PickupResolver, PickupConfig, PickupEvent
from hillclimb.simulation.state import RunState, BoostState

logger = logging.getLogger(__name__)


class EndReason(Enum):
    """Why a run ended."""
    FELL = "fell"
    FLIPPED = "flipped"
    OUT_OF_FUEL = "out_of_fuel"

    @property
    def message(self) -> str:
        """Player-facing message."""
        return {
            EndReason.FELL: "You fell into the abyss!",
            EndReason.FLIPPED: "Your car flipped!",
            EndReason.OUT_OF_FUEL: "Out of fuel!",
        }[self]


@dataclass
class TickResult:
    """Outcome of a tick."""
    continuing: bool = True
    reason: Optional[EndReason] = None
    events: List[PickupEvent] = field(default_factory=list)


@dataclass
class SimulatorConfig:
    """Simulator configuration."""
    # Viewport (screen pixels)
    viewport_width: float = 1200.0
    viewport_height: float = 600.0

    # Fuel
    initial_fuel: float = 100.0
    max_fuel: float = 100.0

    # Camera
    anchor_ratio: float = 0.4      # Car is held at this fraction of the viewport
    rear_limit: float = 50.0       # Leftmost on-screen x
    pixels_per_metre: float = 10.0

    # Terminal conditions
    fall_margin: float = 100.0                # Below the viewport bottom
    flip_half_width: float = 0.3 * np.pi      # Around pi
    stopped_speed_epsilon: float = 0.1

    boost_duration_ticks: int = 180

    enable_telemetry: bool = False

    # Component configs
    generator: GeneratorConfig | None = None
    window: WindowConfig | None = None
    physics: PhysicsConfig | None = None
    car: CarConfig | None = None
    pickups: PickupConfig | None = None
    progression: ProgressionConfig | None = None
    recorder: RecorderConfig | None = None

    def __post_init__(self):
        """Fill component configs that depend on the viewport."""
        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise ValueError("viewport dimensions must be positive")

        baseline = self.viewport_height * 0.6
        if self.generator is None:
            self.generator = GeneratorConfig(
                base_height=baseline, pixels_per_metre=self.pixels_per_metre
            )
        if self.window is None:
            self.window = WindowConfig(viewport_width=self.viewport_width)
        if self.physics is None:
            self.physics = PhysicsConfig(baseline_height=self.generator.base_height)


class Simulator:
    """Hill climb simulation context.

    Owns every piece of run state (terrain window, car, counters), so
    independent simulators never share anything.

    Tick order:
    1. Car dynamics (controls, gravity, ground/air rules, integration)
    2. Camera scroll and score
    3. World window scroll/extend/prune
    4. Pickups and boost expiry
    5. Level and theme
    6. Terminal checks

    Usage:
        sim = Simulator()
        sim.reset()

        result = sim.tick(CarInputs(forward=True))
        while result.continuing:
            result = sim.tick(CarInputs(forward=True))
    """

    def __init__(self, config: SimulatorConfig | None = None, rng=None):
        """Initialize simulator.

        Args:
            config: Simulator configuration. Uses defaults if None.
            rng: Random source for terrain generation
        """
        self.config = config or SimulatorConfig()

        self.generator = TerrainGenerator(self.config.generator, rng)
        self.world = World(self.generator, self.config.window)
        self.physics = PhysicsEngine(self.world, self.config.physics)
        self.car = Car(self.config.car)
        self.pickups = PickupResolver(self.config.pickups)
        self.progression = ProgressionTracker(self.config.progression)
        self.recorder = None
        if self.config.enable_telemetry:
            self.recorder = TelemetryRecorder(
                replace(self.config.recorder or RecorderConfig(), max_fuel=self.config.max_fuel)
            )

        self.run = self._new_run_state()
        self._terrain_offset: float = 0.0
        self._tick: int = 0
        self._started: bool = False
        self._final: Optional[TickResult] = None

        self._pre_tick_callbacks: List[Callable[["Simulator"], None]] = []
        self._post_tick_callbacks: List[Callable[["Simulator", TickResult], None]] = []

    @property
    def terrain_offset(self) -> float:
        """World scroll distance in pixels."""
        return self._terrain_offset

    @property
    def tick_count(self) -> int:
        """Ticks since the run started."""
        return self._tick

    @property
    def is_running(self) -> bool:
        """Check if a run is in progress."""
        return self._started and self._final is None

    @property
    def is_over(self) -> bool:
        """Check if the run has ended."""
        return self._final is not None

    @property
    def end_reason(self) -> Optional[EndReason]:
        """Why the run ended, None while running."""
        return self._final.reason if self._final else None

    @property
    def viewport_width(self) -> float:
        return self.world.config.viewport_width

    @property
    def anchor_x(self) -> float:
        """On-screen x beyond which the world scrolls."""
        return self.viewport_width * self.config.anchor_ratio

    @property
    def car_world_x(self) -> float:
        """Car center in world coordinates."""
        return self.car.state.x + self._terrain_offset

    def _new_run_state(self) -> RunState:
        return RunState(
            fuel=self.config.initial_fuel,
            max_fuel=self.config.max_fuel,
            boost=BoostState(duration_ticks=self.config.boost_duration_ticks),
        )

    def add_pre_tick_callback(self, callback: Callable[["Simulator"], None]) -> None:
        """Add callback called before each tick.

        Args:
            callback: Function taking the simulator
        """
        self._pre_tick_callbacks.append(callback)

    def add_post_tick_callback(self, callback: Callable[["Simulator", TickResult], None]) -> None:
        """Add callback called after each tick.

        Args:
            callback: Function taking the simulator and the tick result
        """
        self._post_tick_callbacks.append(callback)

    def reset(self, viewport_width: float | None = None, rng=None) -> None:
        """Start a new run.

        Reinitializes run state, the car and the terrain window together.

        Args:
            viewport_width: Viewport width (keeps current if None)
            rng: Replacement random source for terrain generation
        """
        if rng is not None:
            self.generator.rng = rng

        self._terrain_offset = 0.0
        self._tick = 0
        self._final = None
        self.run = self._new_run_state()

        self.world.reset(self._terrain_offset, viewport_width)
        self.car.reset()

        if self.recorder:
            self.recorder.clear()

        self._started = True
        logger.info(
            "Run started: viewport %.0f px, %d terrain samples",
            self.viewport_width, len(self.world.samples),
        )

    def start(self, viewport_width: float | None = None) -> None:
        """Start a new run (alias of reset)."""
        self.reset(viewport_width)

    def tick(self, inputs: CarInputs | None = None) -> TickResult:
        """Advance the run by one tick.

        Args:
            inputs: Driver intent (all released if None)

        Returns:
            TickResult; once a run has ended the same terminal result is
            returned on every call and nothing changes
        """
        if not self._started:
            raise RuntimeError("Simulation not started. Call reset() first.")
        if self._final is not None:
            return self._final

        for callback in self._pre_tick_callbacks:
            callback(self)

        inputs = inputs or CarInputs()
        run = self.run
        self._tick += 1

        step = self.car.step(
            inputs, self.physics, self._terrain_offset, run.fuel, run.boost.active
        )
        run.burn(step.fuel_used)

        self._scroll()
        self.world.update(self._terrain_offset, run.level)

        events = self.pickups.resolve(
            self.car_world_x,
            self.car.state.y,
            self.car.effective_radius,
            self.world,
            run,
            self._terrain_offset,
            self._tick,
        )
        run.boost.update(self._tick)

        self.progression.update(run)

        reason = self._check_terminal()
        result = TickResult(continuing=reason is None, reason=reason, events=events)

        if self.recorder:
            self.recorder.record(self._tick, self._telemetry_snapshot())

        if reason is not None:
            self._final = TickResult(continuing=False, reason=reason)
            logger.info(
                "Run ended after %d ticks: %s (%.0f m, %d coins, level %d)",
                self._tick, reason.value, run.score, run.coin_count, run.level,
            )

        for callback in self._post_tick_callbacks:
            callback(self, result)

        return result

    def _scroll(self) -> None:
        """Hold the car at the camera anchor, scrolling the world instead."""
        state = self.car.state

        if state.x > self.anchor_x:
            scroll = state.x - self.anchor_x
            self._terrain_offset += scroll
            state.x = self.anchor_x
            self.run.score += scroll / self.config.pixels_per_metre

        if state.x < self.config.rear_limit:
            state.x = self.config.rear_limit
            state.velocity_x = max(0.0, state.velocity_x)

        self.car.update_wheel_positions()

    def _check_terminal(self) -> Optional[EndReason]:
        """Check fall, flip and out-of-fuel, in that order."""
        state = self.car.state

        if state.y > self.config.viewport_height + self.config.fall_margin:
            return EndReason.FELL

        rotation = self.physics.normalize_angle(state.rotation)
        half_width = self.config.flip_half_width
        if np.pi - half_width < rotation < np.pi + half_width:
            return EndReason.FLIPPED

        # Coasting on an empty tank is allowed; only a stopped car ends the run
        if self.run.fuel <= 0 and abs(state.velocity_x) < self.config.stopped_speed_epsilon:
            return EndReason.OUT_OF_FUEL

        return None

    def run_until_end(
        self,
        policy: Callable[["Simulator"], CarInputs],
        max_ticks: int = 100000,
    ) -> int:
        """Tick with a policy until the run ends.

        Args:
            policy: Function returning the inputs for the next tick
            max_ticks: Maximum ticks to take

        Returns:
            Number of ticks taken
        """
        ticks = 0
        while self.is_running and ticks < max_ticks:
            self.tick(policy(self))
            ticks += 1
        return ticks

    def _telemetry_snapshot(self) -> Dict[str, float]:
        state = self.car.state
        return {
            "score": self.run.score,
            "fuel": self.run.fuel,
            "speed": state.velocity_x,
            "rotation": state.rotation,
            "level": self.run.level,
            "coins": self.run.coin_count,
            "on_ground": float(state.on_ground),
            "terrain_offset": self._terrain_offset,
        }

    def get_state(self) -> Dict[str, Any]:
        """Get the render snapshot.

        Returns:
            Dictionary with car pose, terrain window, entities and run state
        """
        return {
            "tick": self._tick,
            "running": self.is_running,
            "end_reason": self.end_reason.value if self.end_reason else None,
            "terrain_offset": self._terrain_offset,
            "car": self.car.get_telemetry(),
            "terrain": [s.get_state() for s in self.world.samples],
            "bridges": [b.get_state() for b in self.world.bridges],
            "fuel": [c.get_state() for c in self.world.fuel],
            "coins": [c.get_state() for c in self.world.coins],
            "boosts": [c.get_state() for c in self.world.boosts],
            "run": self.run.get_state(self._tick),
            "themes": {
                "current": self.progression.theme_name(self.run.current_theme),
                "next": self.progression.theme_name(self.run.next_theme),
            },
        }
