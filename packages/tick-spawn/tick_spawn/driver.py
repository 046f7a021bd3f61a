"""SpawnDriver - tick loop that feeds a tracker and delivers its output."""
from __future__ import annotations

import logging
import time
from typing import Callable

from tick_spawn.tracker import SpawnProgressTracker
from tick_spawn.types import ProgressSnapshot

logger = logging.getLogger(__name__)

EmitCallback = Callable[[int], None]
SnapshotCallback = Callable[[ProgressSnapshot], None]


class SpawnDriver:
    """Owns a tracker, steps it once per tick and pushes results out.

    ``emit(count)`` is called with the number of units to create this tick.
    With ``max_per_step`` set, emission is throttled and the spawned count
    lags the target until the backlog drains. Snapshot observers are called
    after any tick that changed progress or emitted units.
    """

    def __init__(
        self,
        tracker: SpawnProgressTracker,
        emit: EmitCallback | None = None,
        tps: int = 60,
        max_per_step: int | None = None,
    ) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        if max_per_step is not None and max_per_step <= 0:
            raise ValueError("max_per_step must be positive")
        self._tracker = tracker
        self._emit = emit
        self._tps = tps
        self._dt = 1.0 / tps
        self._max_per_step = max_per_step
        self._tick_number = 0
        self._observers: list[SnapshotCallback] = []
        self._complete_hooks: list[SnapshotCallback] = []
        self._completed = False
        self._stop_requested = False

    @property
    def tracker(self) -> SpawnProgressTracker:
        return self._tracker

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def is_done(self) -> bool:
        """True once the curve is traversed and every due unit was emitted."""
        return self._tracker.is_complete and self._tracker.pending == 0

    def on_snapshot(self, callback: SnapshotCallback) -> None:
        self._observers.append(callback)

    def off_snapshot(self, callback: SnapshotCallback) -> None:
        try:
            self._observers.remove(callback)
        except ValueError:
            pass

    def on_complete(self, callback: SnapshotCallback) -> None:
        self._complete_hooks.append(callback)

    def request_stop(self) -> None:
        self._stop_requested = True

    def step(self, dt: float | None = None) -> ProgressSnapshot:
        self._tick_number += 1
        tracker = self._tracker
        before = tracker.snapshot
        tracker.step(self._dt if dt is None else dt)
        self._emit_pending()

        snapshot = tracker.snapshot
        if snapshot != before:
            for callback in list(self._observers):
                callback(snapshot)

        if not self._completed and self.is_done:
            self._completed = True
            logger.info(
                "Spawning finished at tick %d: %d units in %.3fs",
                self._tick_number,
                tracker.spawned_count,
                tracker.elapsed_real_time,
            )
            for hook in list(self._complete_hooks):
                hook(snapshot)
        return snapshot

    def run(self, n: int) -> int:
        """Run up to ``n`` ticks; returns the number of ticks run."""
        self._stop_requested = False
        ticks = 0
        for _ in range(n):
            if self.is_done:
                break
            self.step()
            ticks += 1
            if self._stop_requested:
                break
        return ticks

    def run_until_complete(self, max_ticks: int | None = None) -> int:
        self._stop_requested = False
        ticks = 0
        while not self.is_done and not self._stop_requested:
            if max_ticks is not None and ticks >= max_ticks:
                break
            self.step()
            ticks += 1
        return ticks

    def run_forever(self) -> None:
        """Tick in real time at ``tps`` until done or stopped."""
        self._stop_requested = False
        dt = self._dt
        while not self._stop_requested and not self.is_done:
            start = time.monotonic()
            self.step()
            if self._stop_requested or self.is_done:
                break
            elapsed = time.monotonic() - start
            sleep_time = dt - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

    def _emit_pending(self) -> None:
        tracker = self._tracker
        count = tracker.pending
        if count <= 0:
            return
        if self._max_per_step is not None and count > self._max_per_step:
            logger.debug(
                "Tick %d: throttling emission to %d of %d pending",
                self._tick_number,
                self._max_per_step,
                count,
            )
            count = self._max_per_step
        if self._emit is not None:
            self._emit(count)
        tracker.record_spawned(count)
