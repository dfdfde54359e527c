"""
Run state - Per-run counters shared by the simulation components.

Holds:
- Score, fuel and coin count
- Level and background theme cross-fade
- Boost timing (tick counted)
"""

from dataclasses import dataclass, field


@dataclass
class BoostState:
    """Tick-counted boost timer.

    Expiry is polled once per tick by the simulator; collecting another
    pad while boosted restarts the full duration.
    """
    duration_ticks: int = 180  # 3 s at 60 Hz
    active: bool = False
    expires_at: int = 0

    def activate(self, tick: int) -> None:
        """Start (or restart) the boost at a tick."""
        self.active = True
        self.expires_at = tick + self.duration_ticks

    def update(self, tick: int) -> bool:
        """Expire the boost if its time has passed.

        Returns:
            True if the boost is still active
        """
        if self.active and tick >= self.expires_at:
            self.active = False
        return self.active

    def remaining_fraction(self, tick: int) -> float:
        """Fraction of the boost left, 0 when inactive."""
        if not self.active or self.duration_ticks <= 0:
            return 0.0
        remaining = (self.expires_at - tick) / self.duration_ticks
        return min(1.0, max(0.0, remaining))


@dataclass
class RunState:
    """State of a single run, reset atomically on start."""
    score: float = 0.0
    fuel: float = 100.0
    max_fuel: float = 100.0
    coin_count: int = 0

    level: int = 1
    current_theme: int = 0
    next_theme: int = 0
    theme_transition: float = 0.0

    boost: BoostState = field(default_factory=BoostState)

    @property
    def fuel_fraction(self) -> float:
        """Fuel level in [0, 1]."""
        if self.max_fuel <= 0:
            return 0.0
        return max(0.0, self.fuel / self.max_fuel)

    def refuel(self, amount: float) -> float:
        """Add fuel, capped at max_fuel.

        Returns:
            Fuel actually added
        """
        before = self.fuel
        self.fuel = min(self.max_fuel, self.fuel + amount)
        return self.fuel - before

    def burn(self, amount: float) -> None:
        """Consume fuel, never going below zero."""
        self.fuel = max(0.0, self.fuel - amount)

    def get_state(self, tick: int = 0) -> dict:
        """Get run state for serialization."""
        return {
            "score": self.score,
            "fuel": self.fuel,
            "fuel_pct": self.fuel_fraction * 100,
            "coins": self.coin_count,
            "level": self.level,
            "boost_active": self.boost.active,
            "boost_remaining": self.boost.remaining_fraction(tick),
            "theme": {
                "current": self.current_theme,
                "next": self.next_theme,
                "transition": self.theme_transition,
            },
        }
