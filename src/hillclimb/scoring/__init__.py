"""
Scoring module - Distance-based progression.

This module contains:
- ProgressionTracker: Level and background theme from score
"""

from hillclimb.scoring.progression import ProgressionTracker, ProgressionConfig, DEFAULT_THEMES

__all__ = [
    "ProgressionTracker",
    "ProgressionConfig",
    "DEFAULT_THEMES",
]
