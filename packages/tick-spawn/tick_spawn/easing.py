"""Interpolation rules between two curve keyframes.

Each function maps the local parameter u in [0, 1] to a blend factor in
[0, 1]: 0 yields the left key's value, 1 the right key's.
"""
from __future__ import annotations

from typing import Callable


def linear(u: float) -> float:
    """Straight line between the two keys."""
    return u


def ease_in(u: float) -> float:
    """Rate stays near the left key, then climbs quadratically."""
    return u * u


def ease_out(u: float) -> float:
    """Rate leaves the left key quickly and flattens into the right key."""
    return u * (2 - u)


def ease_in_out(u: float) -> float:
    """Piecewise quadratic: slow at both keys, steepest at the span midpoint."""
    if u < 0.5:
        return 2 * u * u
    return 1 - (-2 * u + 2) ** 2 / 2


def smooth(u: float) -> float:
    """Cubic Hermite blend with zero tangents at both keys."""
    return u * u * (3 - 2 * u)


def constant(u: float) -> float:
    """Hold the left key's value until the next key."""
    return 0.0


EASINGS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out": ease_in_out,
    "smooth": smooth,
    "constant": constant,
}
