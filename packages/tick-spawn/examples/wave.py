"""Demo scenario - one spawn wave shaped by an ease-in/out rate curve.

The rate starts at zero, ramps up smoothly and peaks at the end, so most
of the 50 units arrive in the second half of the 10 second span. A census
line prints every second of simulated time, and the final status block
matches what an on-screen HUD would show.

Run: python -m examples.wave
"""

import logging

from tick_spawn import (
    Curve,
    ProgressSnapshot,
    SpawnConfig,
    SpawnDriver,
    SpawnProgressTracker,
)

TPS = 60


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    curve = Curve.ease_in_out(0.0, 0.0, 1.0, 1.0)
    config = SpawnConfig(time_span=10.0, max_count=50)
    tracker = SpawnProgressTracker(curve, config)

    batches: list[int] = []
    driver = SpawnDriver(tracker, emit=batches.append, tps=TPS)

    def census(snapshot: ProgressSnapshot) -> None:
        if driver.tick_number % TPS != 0:
            return
        print(
            f"[t={snapshot.real_time_elapsed:>5.2f}s]  spawned={snapshot.spawned_count:<3} "
            f"area={snapshot.percent_area:6.2f}%  time={snapshot.percent_time:6.2f}%"
        )

    driver.on_snapshot(census)
    driver.on_complete(lambda snapshot: print("\n" + snapshot.describe()))

    ticks = driver.run_until_complete()
    print(f"\n{ticks} ticks, {len(batches)} emission batches")


if __name__ == "__main__":
    main()
