"""Keyframed rate curves."""
from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from tick_spawn.easing import EASINGS
from tick_spawn.types import ConfigurationError


@dataclass(frozen=True, slots=True)
class Keyframe:
    time: float
    value: float
    easing: str | None = None


class Curve:
    """Immutable piecewise function of time defined by ordered keyframes.

    Between two keys the value is blended with the easing named on the left
    key, falling back to the curve's own easing. Outside the keyed range the
    nearest boundary value is held.
    """

    __slots__ = ("_keys", "_times", "_easing")

    def __init__(self, keys: Iterable[Keyframe], easing: str = "smooth") -> None:
        keys = tuple(keys)
        if not keys:
            raise ConfigurationError("Curve requires at least one keyframe")
        if easing not in EASINGS:
            raise ConfigurationError(f"Unknown easing {easing!r}")
        for key in keys:
            if not (math.isfinite(key.time) and math.isfinite(key.value)):
                raise ConfigurationError(f"Keyframe {key!r} is not finite")
            if key.easing is not None and key.easing not in EASINGS:
                raise ConfigurationError(
                    f"Unknown easing {key.easing!r} on keyframe at t={key.time}"
                )
        for prev, key in zip(keys, keys[1:]):
            if key.time <= prev.time:
                raise ConfigurationError(
                    f"Keyframe times must be strictly increasing "
                    f"(t={key.time} follows t={prev.time})"
                )
        self._keys = keys
        self._times = tuple(key.time for key in keys)
        self._easing = easing

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[Sequence[float]], easing: str = "smooth"
    ) -> Curve:
        return cls((Keyframe(float(t), float(v)) for t, v in pairs), easing=easing)

    @classmethod
    def ease_in_out(
        cls, t0: float = 0.0, v0: float = 0.0, t1: float = 1.0, v1: float = 1.0
    ) -> Curve:
        return cls([Keyframe(t0, v0), Keyframe(t1, v1)], easing="smooth")

    @classmethod
    def linear(
        cls, t0: float = 0.0, v0: float = 0.0, t1: float = 1.0, v1: float = 1.0
    ) -> Curve:
        return cls([Keyframe(t0, v0), Keyframe(t1, v1)], easing="linear")

    @classmethod
    def constant(cls, value: float, end: float = 1.0) -> Curve:
        return cls([Keyframe(0.0, value), Keyframe(end, value)], easing="linear")

    @property
    def keys(self) -> tuple[Keyframe, ...]:
        return self._keys

    @property
    def easing(self) -> str:
        return self._easing

    @property
    def domain_start(self) -> float:
        return self._times[0]

    @property
    def domain_end(self) -> float:
        return self._times[-1]

    def sample(self, t: float) -> float:
        if math.isnan(t):
            return math.nan
        keys = self._keys
        if t <= self._times[0]:
            return keys[0].value
        if t >= self._times[-1]:
            return keys[-1].value

        i = bisect_right(self._times, t) - 1
        left, right = keys[i], keys[i + 1]
        u = (t - left.time) / (right.time - left.time)
        blend = EASINGS[left.easing or self._easing](u)
        return left.value + (right.value - left.value) * blend

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Keyframe]:
        return iter(self._keys)

    def __repr__(self) -> str:
        return f"Curve({list(self._keys)!r}, easing={self._easing!r})"
