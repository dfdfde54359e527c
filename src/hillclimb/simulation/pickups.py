"""
Pickups - Proximity collection of fuel, coins and boost pads.

Provides:
- Per-kind pickup rules (proximity margin and effect)
- Collection pass over the world's entities
- Hit events for the renderer
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from hillclimb.terrain.features import Collectible, CollectibleKind
from hillclimb.simulation.state import RunState
from hillclimb.simulation.world import World


@dataclass
class PickupConfig:
    """Pickup configuration."""
    fuel_amount: float = 30.0

    # Added to the car radius; pads are meant to be grazed
    fuel_margin: float = 10.0
    coin_margin: float = 10.0
    boost_margin: float = 15.0


@dataclass
class PickupEvent:
    """An entity was collected at (x, y)."""
    kind: CollectibleKind
    x: float
    y: float
    tick: int = 0


@dataclass
class PickupRule:
    """How one kind of entity is collected."""
    margin: float
    effect: Callable[[RunState, int], None]


class PickupResolver:
    """Collects entities the car touches and applies their effects.

    All kinds share one proximity test; only the margin and the effect
    differ, and both come from the rule table.
    """

    def __init__(self, config: PickupConfig | None = None):
        """Initialize resolver.

        Args:
            config: Pickup configuration
        """
        self.config = config or PickupConfig()
        self.rules: Dict[CollectibleKind, PickupRule] = {
            CollectibleKind.FUEL: PickupRule(self.config.fuel_margin, self._refuel),
            CollectibleKind.COIN: PickupRule(self.config.coin_margin, self._add_coin),
            CollectibleKind.BOOST: PickupRule(self.config.boost_margin, self._boost),
        }

    def _refuel(self, run: RunState, tick: int) -> None:
        run.refuel(self.config.fuel_amount)

    @staticmethod
    def _add_coin(run: RunState, tick: int) -> None:
        run.coin_count += 1

    @staticmethod
    def _boost(run: RunState, tick: int) -> None:
        run.boost.activate(tick)

    def touches(self, item: Collectible, x: float, y: float, radius: float) -> bool:
        """Check whether a car at (x, y) reaches an entity."""
        return item.distance_to(x, y) < radius + self.rules[item.kind].margin

    def resolve(
        self,
        car_x: float,
        car_y: float,
        car_radius: float,
        world: World,
        run: RunState,
        terrain_offset: float,
        tick: int = 0,
    ) -> List[PickupEvent]:
        """Collect touched entities, then prune the world's collections.

        Args:
            car_x: Car center world x
            car_y: Car center y
            car_radius: Car proximity radius
            world: World holding the entities
            run: Run state receiving the effects
            terrain_offset: World scroll position (for pruning)
            tick: Current tick

        Returns:
            Events for every entity collected this tick
        """
        events: List[PickupEvent] = []

        for kind, rule in self.rules.items():
            for item in world.collectibles(kind):
                if item.collected:
                    continue
                if not self.touches(item, car_x, car_y, car_radius):
                    continue

                item.collected = True
                if kind is CollectibleKind.BOOST:
                    item.active = True
                rule.effect(run, tick)
                events.append(PickupEvent(kind=kind, x=item.world_x, y=item.world_y, tick=tick))

        world.prune_collectibles(terrain_offset)
        return events
