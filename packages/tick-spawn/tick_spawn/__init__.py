"""tick-spawn - Curve-driven spawn counts for tick loops."""
from __future__ import annotations

from tick_spawn.config import SpawnConfig
from tick_spawn.curve import Curve, Keyframe
from tick_spawn.driver import SpawnDriver
from tick_spawn.easing import EASINGS
from tick_spawn.integrate import segmented_area, total_area, trapezoid_area
from tick_spawn.tracker import SpawnProgressTracker
from tick_spawn.types import ConfigurationError, ProgressSnapshot

__all__ = [
    "Curve",
    "Keyframe",
    "EASINGS",
    "trapezoid_area",
    "segmented_area",
    "total_area",
    "SpawnConfig",
    "SpawnProgressTracker",
    "SpawnDriver",
    "ProgressSnapshot",
    "ConfigurationError",
]
