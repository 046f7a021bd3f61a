"""Spawn run configuration."""
from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Mapping

from tick_spawn.types import ConfigurationError

ACCUMULATION_MODES = ("incremental", "recompute")


@dataclass(frozen=True)
class SpawnConfig:
    """Immutable configuration for one spawn run.

    Attributes:
        time_span: Real seconds mapped to one full traversal of the curve.
        max_count: Units emitted at 100% progress.
        segment_width: Integration granularity in real seconds.
        accumulation: "incremental" integrates only the span covered by each
            step; "recompute" integrates from zero on every step.
        resync_interval: In incremental mode, replace the accumulator with a
            from-scratch integral every this many advancing steps. 0 disables.
    """

    time_span: float = 10.0
    max_count: int = 50
    segment_width: float = 1.0 / 60.0
    accumulation: str = "incremental"
    resync_interval: int = 0

    def __post_init__(self) -> None:
        _require_positive_number("time_span", self.time_span)
        _require_positive_number("segment_width", self.segment_width)
        _require_int("max_count", self.max_count)
        if self.max_count < 0:
            raise ConfigurationError(
                f"max_count must be non-negative, got {self.max_count}"
            )
        if self.accumulation not in ACCUMULATION_MODES:
            raise ConfigurationError(
                f"Unknown accumulation mode {self.accumulation!r}, "
                f"expected one of {ACCUMULATION_MODES}"
            )
        _require_int("resync_interval", self.resync_interval)
        if self.resync_interval < 0:
            raise ConfigurationError(
                f"resync_interval must be non-negative, got {self.resync_interval}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SpawnConfig:
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def replace(self, **changes: Any) -> SpawnConfig:
        return dataclasses.replace(self, **changes)


def _require_positive_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not (math.isfinite(value) and value > 0):
        raise ConfigurationError(f"{name} must be positive, got {value!r}")


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
