"""SpawnProgressTracker - converts curve progress into a target spawn count."""
from __future__ import annotations

import dataclasses
import logging

from tick_spawn.config import SpawnConfig
from tick_spawn.curve import Curve
from tick_spawn.integrate import segmented_area, total_area
from tick_spawn.types import ConfigurationError, ProgressSnapshot

logger = logging.getLogger(__name__)


class SpawnProgressTracker:
    """Advances a cursor over a rate curve and reports how many units are due.

    The curve's value is a spawn *rate*, so the number of units due at a
    point in time is the area covered so far, normalized by the curve's total
    area and scaled to ``config.max_count``. Each ``step`` moves the cursor
    by ``dt / time_span`` in curve time, clamped to the curve's domain.

    Not safe for concurrent use; the curve itself may be shared.
    """

    def __init__(self, curve: Curve, config: SpawnConfig | None = None) -> None:
        if config is None:
            config = SpawnConfig()
        if curve.domain_end <= 0:
            raise ConfigurationError(
                f"Curve domain must end after t=0, got domain_end={curve.domain_end}"
            )
        self._curve = curve
        self._config = config
        self._total_area = total_area(curve, config.segment_width, config.time_span)

        self._accumulated_area = 0.0
        self._normalized_time = 0.0
        self._elapsed_real_time = 0.0
        self._advances = 0
        self._target_count = 0
        self._spawned_count = 0
        self._snapshot = ProgressSnapshot()

        logger.debug(
            "Tracker ready: domain_end=%g total_area=%g time_span=%g max_count=%d mode=%s",
            curve.domain_end,
            self._total_area,
            config.time_span,
            config.max_count,
            config.accumulation,
        )

    @property
    def curve(self) -> Curve:
        return self._curve

    @property
    def config(self) -> SpawnConfig:
        return self._config

    @property
    def total_area(self) -> float:
        return self._total_area

    @property
    def accumulated_area(self) -> float:
        return self._accumulated_area

    @property
    def normalized_time(self) -> float:
        return self._normalized_time

    @property
    def elapsed_real_time(self) -> float:
        return self._elapsed_real_time

    @property
    def target_count(self) -> int:
        return self._target_count

    @property
    def spawned_count(self) -> int:
        return self._spawned_count

    @property
    def pending(self) -> int:
        return self._target_count - self._spawned_count

    @property
    def is_complete(self) -> bool:
        return self._normalized_time >= self._curve.domain_end

    @property
    def snapshot(self) -> ProgressSnapshot:
        return self._snapshot

    def step(self, dt: float) -> tuple[int, ProgressSnapshot]:
        """Advance by ``dt`` real seconds and return (target_count, snapshot).

        Steps that do not move the cursor forward (zero, negative or NaN
        ``dt``, or an already complete tracker) return the previous result
        without integrating anything.
        """
        if not dt > 0:
            return self._target_count, self._snapshot

        cfg = self._config
        domain_end = self._curve.domain_end
        previous = self._normalized_time
        current = max(0.0, min(previous + dt / cfg.time_span, domain_end))
        if current == previous:
            return self._target_count, self._snapshot

        self._normalized_time = current
        self._elapsed_real_time += dt
        self._advances += 1

        if cfg.accumulation == "recompute":
            self._accumulated_area = self._area_to(current)
        else:
            self._accumulated_area += segmented_area(
                self._curve, previous, current, cfg.segment_width, cfg.time_span
            )
            if cfg.resync_interval and self._advances % cfg.resync_interval == 0:
                self._resync()

        progress = self._progress()
        self._target_count = round(progress * cfg.max_count)
        self._snapshot = ProgressSnapshot(
            percent_area=progress * 100.0,
            percent_time=100.0 * current / domain_end,
            real_time_elapsed=self._elapsed_real_time,
            target_count=self._target_count,
            spawned_count=self._spawned_count,
        )

        if current >= domain_end:
            logger.info(
                "Spawn curve complete after %.3fs: target=%d area=%g/%g",
                self._elapsed_real_time,
                self._target_count,
                self._accumulated_area,
                self._total_area,
            )
        return self._target_count, self._snapshot

    def record_spawned(self, n: int = 1) -> int:
        """Record ``n`` units emitted by the caller, capped at the target.

        Returns the number actually recorded.
        """
        if n < 0:
            raise ValueError(f"Cannot record a negative spawn count ({n})")
        recorded = min(n, self.pending)
        if recorded > 0:
            self._spawned_count += recorded
            self._snapshot = dataclasses.replace(
                self._snapshot, spawned_count=self._spawned_count
            )
        return recorded

    def _area_to(self, t: float) -> float:
        cfg = self._config
        return segmented_area(self._curve, 0.0, t, cfg.segment_width, cfg.time_span)

    def _resync(self) -> None:
        exact = self._area_to(self._normalized_time)
        logger.debug(
            "Resynced accumulated area at t=%g (drift %.3e)",
            self._normalized_time,
            self._accumulated_area - exact,
        )
        self._accumulated_area = exact

    def _progress(self) -> float:
        # The ratio is clamped, the accumulator is not.
        if self._total_area == 0:
            return 0.0
        return max(0.0, min(1.0, self._accumulated_area / self._total_area))
