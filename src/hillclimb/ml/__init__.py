"""
ML module - Machine learning integration interfaces.

This module contains:
- HillClimbEnv: Gymnasium-compatible environment
- ObservationSpace: Car, run and terrain observation
- ActionSpace: Forward/backward/brake action decoding
"""

from hillclimb.ml.environment import HillClimbEnv, HillClimbEnvConfig
from hillclimb.ml.spaces import ObservationSpace, ActionSpace, ObservationConfig, ActionConfig

__all__ = [
    "HillClimbEnv",
    "HillClimbEnvConfig",
    "ObservationSpace",
    "ActionSpace",
    "ObservationConfig",
    "ActionConfig",
]
