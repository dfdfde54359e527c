"""
Progression - Level and background theme derived from distance.

Provides:
- Level from score
- Background theme target from score
- One-directional theme cross-fade
"""

from dataclasses import dataclass
from typing import Tuple
import logging

from hillclimb.simulation.state import RunState

logger = logging.getLogger(__name__)


DEFAULT_THEMES: Tuple[str, ...] = ("green", "desert", "snow", "evening", "night")


@dataclass
class ProgressionConfig:
    """Progression configuration."""
    level_distance: float = 500.0         # Metres per level
    theme_change_distance: float = 100.0  # Metres per theme
    themes: Tuple[str, ...] = DEFAULT_THEMES
    transition_step: float = 0.01         # Cross-fade progress per tick

    def __post_init__(self):
        if self.level_distance <= 0 or self.theme_change_distance <= 0:
            raise ValueError("progression distances must be positive")
        if not self.themes:
            raise ValueError("at least one theme is required")


class ProgressionTracker:
    """Derives level and theme from the run score.

    Holds no run state of its own; everything lives in RunState, so the
    tracker can be shared between simulations.
    """

    def __init__(self, config: ProgressionConfig | None = None):
        """Initialize tracker.

        Args:
            config: Progression configuration
        """
        self.config = config or ProgressionConfig()

    @property
    def theme_count(self) -> int:
        """Number of background themes."""
        return len(self.config.themes)

    def level_for_score(self, score: float) -> int:
        """Level reached at a score."""
        return int(score // self.config.level_distance) + 1

    def theme_for_score(self, score: float) -> int:
        """Theme index targeted at a score."""
        return int(score // self.config.theme_change_distance) % self.theme_count

    def theme_name(self, index: int) -> str:
        """Name of a theme index."""
        return self.config.themes[index % self.theme_count]

    def update(self, run: RunState) -> None:
        """Advance level and theme for the current score.

        Args:
            run: Run state to update
        """
        level = self.level_for_score(run.score)
        if level > run.level:
            logger.debug("Level up: %d -> %d at %.0f m", run.level, level, run.score)
            run.level = level

        target = self.theme_for_score(run.score)
        if target != run.current_theme:
            run.next_theme = target
            run.theme_transition = min(1.0, run.theme_transition + self.config.transition_step)

            if run.theme_transition >= 1.0:
                run.current_theme = run.next_theme
                run.theme_transition = 0.0
