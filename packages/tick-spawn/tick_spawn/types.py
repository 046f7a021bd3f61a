"""Shared value types and errors for tick-spawn."""
from __future__ import annotations

from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised at construction time for an unusable curve or configuration."""


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Observable progress of a spawn run after one step.

    Attributes:
        percent_area: Share of the curve's total area covered, in [0, 100].
        percent_time: Share of the curve's domain traversed, in [0, 100].
        real_time_elapsed: Real seconds accumulated by advancing steps.
        target_count: Units that should have been emitted so far.
        spawned_count: Units actually emitted so far.
    """

    percent_area: float = 0.0
    percent_time: float = 0.0
    real_time_elapsed: float = 0.0
    target_count: int = 0
    spawned_count: int = 0

    def describe(self) -> str:
        return (
            f"Num Spawned: {self.spawned_count}\n"
            f"Area Covered: {self.percent_area:.2f}%\n"
            f"\n"
            f"Time Covered%: {self.percent_time:.2f}%\n"
            f"Time Covered: {self.real_time_elapsed:.2f}s"
        )
