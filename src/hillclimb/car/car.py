"""
Car - Side-view hill climb car dynamics.

Integrates per tick:
- Throttle, reverse and brake intent
- Gravity
- Wheel/ground contact with terrain following
- Ground friction and slope pull, or air drag and free spin
"""

from dataclasses import dataclass, field
from typing import Any, Dict, TYPE_CHECKING
import numpy as np

from hillclimb.car.wheel import Wheel, WheelContact

if TYPE_CHECKING:
    from hillclimb.simulation.physics import PhysicsEngine


@dataclass
class CarConfig:
    """Car configuration.

    The model is tuned for stability at a fixed frame rate, so all rates
    are per tick and all lengths are in pixels.
    """
    # Spawn pose (screen coordinates)
    start_x: float = 200.0
    start_y: float = 300.0

    # Body
    width: float = 55.0
    height: float = 28.0
    wheel_radius: float = 9.0
    wheel_offset_ratio: float = 0.35  # Wheel mounts at +/- this * width

    # Drive
    max_speed: float = 12.0
    acceleration: float = 0.35
    reverse_ratio: float = 0.8         # Reverse pull relative to acceleration
    reverse_speed: float = -6.0        # Most negative velocity allowed
    brake_force: float = 0.4           # Fraction of velocity removed per tick
    fuel_consumption: float = 0.015    # Fuel per tick of throttle

    # Boost multipliers
    boost_speed_multiplier: float = 1.8
    boost_acceleration_multiplier: float = 1.5

    # Rotation
    rotation_smoothing: float = 0.15   # Easing toward the slope when grounded
    ground_angular_damping: float = 0.88
    air_angular_damping: float = 0.96
    spin_coupling: float = 0.0008      # Spin gained per unit of velocity_x in the air


@dataclass
class CarInputs:
    """Level-triggered driver intent, read once per tick."""
    forward: bool = False
    backward: bool = False
    brake: bool = False


@dataclass
class CarState:
    """Current car state.

    x is the on-screen position; the world position is x + terrain_offset.
    """
    x: float = 0.0
    y: float = 0.0
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    rotation: float = 0.0          # Radians, positive = nose down
    angular_velocity: float = 0.0
    on_ground: bool = False


@dataclass
class StepResult:
    """Outcome of one dynamics step."""
    fuel_used: float = 0.0
    on_ground: bool = False
    front: WheelContact = field(default_factory=WheelContact)
    back: WheelContact = field(default_factory=WheelContact)


class Car:
    """Hill climb car.

    A two-state (grounded / airborne) integrator. Grounded, the body
    eases toward the terrain angle and rides on the surface; airborne,
    it drifts under gravity and spins with horizontal speed.

    Usage:
        car = Car()
        car.reset()
        result = car.step(CarInputs(forward=True), physics, offset, fuel)
    """

    def __init__(self, config: CarConfig | None = None):
        """Initialize car.

        Args:
            config: Car configuration. Uses defaults if None.
        """
        self.config = config or CarConfig()

        offset = self.config.width * self.config.wheel_offset_ratio
        self.front_wheel = Wheel(offset=offset, radius=self.config.wheel_radius)
        self.back_wheel = Wheel(offset=-offset, radius=self.config.wheel_radius)

        self.state = CarState()
        self.reset()

    def reset(self, x: float | None = None, y: float | None = None) -> None:
        """Reset car to its spawn pose.

        Args:
            x: Screen x (config start_x if None)
            y: Screen y (config start_y if None)
        """
        self.state = CarState(
            x=self.config.start_x if x is None else x,
            y=self.config.start_y if y is None else y,
        )
        self.update_wheel_positions()

    @property
    def speed(self) -> float:
        """Horizontal speed magnitude."""
        return abs(self.state.velocity_x)

    @property
    def effective_radius(self) -> float:
        """Radius used for pickup proximity tests."""
        return max(self.config.width, self.config.height) * 0.6

    def max_speed(self, boost_active: bool = False) -> float:
        """Speed cap, raised while boosted."""
        if boost_active:
            return self.config.max_speed * self.config.boost_speed_multiplier
        return self.config.max_speed

    def acceleration(self, boost_active: bool = False) -> float:
        """Forward acceleration, raised while boosted."""
        if boost_active:
            return self.config.acceleration * self.config.boost_acceleration_multiplier
        return self.config.acceleration

    def update_wheel_positions(self) -> None:
        """Project wheel mounts from the car pose.

        Wheels hang half a body height below the center regardless of
        rotation; only the mount offset is rotated.
        """
        cos_r = np.cos(self.state.rotation)
        sin_r = np.sin(self.state.rotation)
        drop = self.config.height / 2

        for wheel in (self.front_wheel, self.back_wheel):
            wheel.x = float(self.state.x + wheel.offset * cos_r)
            wheel.y = float(self.state.y + wheel.offset * sin_r + drop)

    def _apply_controls(self, inputs: CarInputs, fuel: float, boost_active: bool) -> float:
        """Apply driver intent to velocity_x.

        Returns:
            Fuel consumed this tick
        """
        state = self.state
        fuel_used = 0.0

        if inputs.forward and fuel > 0:
            state.velocity_x += self.acceleration(boost_active)
            fuel_used = min(fuel, self.config.fuel_consumption)

        if inputs.backward:
            state.velocity_x -= self.config.acceleration * self.config.reverse_ratio

        if inputs.brake:
            state.velocity_x *= (1 - self.config.brake_force)

        state.velocity_x = float(np.clip(
            state.velocity_x, self.config.reverse_speed, self.max_speed(boost_active)
        ))
        return fuel_used

    def _ride_surface(
        self,
        front: WheelContact,
        back: WheelContact,
        physics: "PhysicsEngine",
        terrain_offset: float,
    ) -> None:
        """Grounded rules: follow the terrain and bleed energy."""
        state = self.state
        cfg = self.config

        slope = physics.slope_angle_at(state.x + terrain_offset)

        # Ease toward the slope; snapping would jitter
        state.rotation += (slope - state.rotation) * cfg.rotation_smoothing

        if front.collision and back.collision:
            surface = (front.terrain_y + back.terrain_y) / 2
            state.y = surface - cfg.height / 2 - self.front_wheel.radius
        elif front.collision:
            state.y = front.terrain_y - cfg.height / 2 - self.front_wheel.radius
        else:
            state.y = back.terrain_y - cfg.height / 2 - self.back_wheel.radius

        state.velocity_x *= physics.config.ground_friction
        state.velocity_y = 0.0

        # Uphill bleeds speed, downhill adds it
        state.velocity_x += float(np.sin(slope)) * physics.config.slope_coefficient

        state.angular_velocity *= cfg.ground_angular_damping

    def _fly(self, physics: "PhysicsEngine") -> None:
        """Airborne rules: drag and free rotation."""
        state = self.state
        cfg = self.config

        state.velocity_x *= physics.config.air_resistance
        state.rotation += state.angular_velocity
        state.angular_velocity *= cfg.air_angular_damping
        state.angular_velocity += state.velocity_x * cfg.spin_coupling

    def step(
        self,
        inputs: CarInputs,
        physics: "PhysicsEngine",
        terrain_offset: float,
        fuel: float,
        boost_active: bool = False,
    ) -> StepResult:
        """Advance the car by one tick.

        Args:
            inputs: Driver intent
            physics: Terrain query service
            terrain_offset: World scroll position
            fuel: Fuel available
            boost_active: Whether a boost is running

        Returns:
            StepResult with fuel consumed and ground contacts
        """
        fuel_used = self._apply_controls(inputs, fuel, boost_active)

        # Overridden below when grounded
        self.state.velocity_y += physics.config.gravity

        self.update_wheel_positions()
        front = physics.check_wheel(self.front_wheel, terrain_offset)
        back = physics.check_wheel(self.back_wheel, terrain_offset)

        self.state.on_ground = front.collision or back.collision
        if self.state.on_ground:
            self._ride_surface(front, back, physics, terrain_offset)
        else:
            self._fly(physics)

        self.state.x += self.state.velocity_x
        self.state.y += self.state.velocity_y

        return StepResult(
            fuel_used=fuel_used,
            on_ground=self.state.on_ground,
            front=front,
            back=back,
        )

    def get_telemetry(self) -> Dict[str, Any]:
        """Get car pose and motion.

        Returns:
            Dictionary of car state for rendering and telemetry
        """
        return {
            "x": self.state.x,
            "y": self.state.y,
            "rotation_rad": self.state.rotation,
            "rotation_deg": float(np.degrees(self.state.rotation)),
            "velocity_x": self.state.velocity_x,
            "velocity_y": self.state.velocity_y,
            "angular_velocity": self.state.angular_velocity,
            "on_ground": self.state.on_ground,
            "wheels": {
                "front": self.front_wheel.get_state(),
                "back": self.back_wheel.get_state(),
            },
        }
