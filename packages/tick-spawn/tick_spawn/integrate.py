"""Trapezoidal area under a Curve.

All functions are pure and total: any finite input produces a number.
Areas are signed, so spans where the curve is negative subtract.
"""
from __future__ import annotations

from tick_spawn.curve import Curve


def trapezoid_area(curve: Curve, t1: float, t2: float) -> float:
    """Area of the single trapezoid spanning [t1, t2].

    Exact only where the curve is linear between t1 and t2. A reversed
    interval (t1 > t2) yields the negated area.
    """
    return (curve.sample(t1) + curve.sample(t2)) * 0.5 * (t2 - t1)


def segmented_area(
    curve: Curve,
    start: float,
    end: float,
    segment_width: float,
    time_scale: float = 1.0,
) -> float:
    """Sum of trapezoids covering [start, end].

    The step between boundaries is ``segment_width / time_scale``, which
    converts a width in real seconds into the curve's normalized time when
    ``time_scale`` is the real-time span of one traversal. The last
    sub-interval is cut short at ``end``. Returns 0 when ``start >= end`` or
    the step is not positive.
    """
    if segment_width <= 0 or time_scale <= 0:
        return 0.0
    step = segment_width / time_scale
    area = 0.0
    left = start
    right = min(end, left + step)
    while left < right:
        area += trapezoid_area(curve, left, right)
        left = right
        right = min(end, left + step)
    return area


def total_area(curve: Curve, segment_width: float, time_scale: float = 1.0) -> float:
    """Area over [0, domain_end], the reference a tracker normalizes against."""
    return segmented_area(curve, 0.0, curve.domain_end, segment_width, time_scale)
