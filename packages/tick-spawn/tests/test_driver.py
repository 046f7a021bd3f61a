"""Tests for SpawnDriver tick loop and observer delivery."""
import logging

import pytest

from tick_spawn import Curve, SpawnConfig, SpawnDriver, SpawnProgressTracker


def make_driver(time_span=1.0, max_count=50, curve=None, **kwargs):
    if curve is None:
        curve = Curve.constant(1.0)
    tracker = SpawnProgressTracker(
        curve, SpawnConfig(time_span=time_span, max_count=max_count)
    )
    return SpawnDriver(tracker, **kwargs)


class TestDriverSetup:
    """Test constructor validation and defaults."""

    def test_zero_tps_raises(self):
        """A driver needs a positive tick rate."""
        with pytest.raises(ValueError, match="tps must be positive"):
            make_driver(tps=0)

    def test_non_positive_max_per_step_raises(self):
        """A throttle of zero would never emit."""
        with pytest.raises(ValueError, match="max_per_step must be positive"):
            make_driver(max_per_step=0)

    def test_dt_from_tps(self):
        """Default tick delta is 1 / tps."""
        driver = make_driver(tps=20)
        assert driver.tps == 20
        assert abs(driver.dt - 0.05) < 1e-9
        assert driver.tick_number == 0


class TestStepping:
    """Test single ticks."""

    def test_step_advances_by_dt(self):
        """step() without dt advances by one tick."""
        driver = make_driver(tps=10)
        driver.step()
        assert driver.tick_number == 1
        assert driver.tracker.normalized_time == pytest.approx(0.1)

    def test_step_with_explicit_dt(self):
        """An explicit dt overrides the tick delta."""
        driver = make_driver(time_span=10.0)
        snapshot = driver.step(2.5)
        assert snapshot.real_time_elapsed == 2.5
        assert driver.tracker.normalized_time == pytest.approx(0.25)

    def test_step_emits_pending_units(self):
        """All due units are emitted in one batch."""
        emitted = []
        driver = make_driver(time_span=10.0, emit=emitted.append)
        driver.step(5.0)
        assert emitted == [driver.tracker.target_count]
        assert driver.tracker.spawned_count == driver.tracker.target_count
        assert driver.tracker.pending == 0

    def test_no_emit_callback_still_records(self):
        """Without emit, units are still counted as spawned."""
        driver = make_driver()
        driver.step(1.0)
        assert driver.tracker.spawned_count == 50

    def test_nothing_emitted_without_progress(self):
        """A zero-length tick emits nothing."""
        emitted = []
        driver = make_driver(emit=emitted.append)
        driver.step(0.0)
        assert emitted == []


class TestThrottling:
    """Test emission capped per tick."""

    def test_spawned_lags_target(self):
        """Throttled emission leaves units pending."""
        emitted = []
        driver = make_driver(max_count=50, emit=emitted.append, max_per_step=1)
        driver.step(1.0)
        assert driver.tracker.target_count == 50
        assert driver.tracker.spawned_count == 1
        assert driver.tracker.pending == 49
        assert not driver.is_done

    def test_backlog_drains_after_completion(self):
        """Pending units keep emitting after the curve ends."""
        emitted = []
        driver = make_driver(max_count=50, emit=emitted.append, max_per_step=1)
        driver.step(1.0)
        ticks = driver.run_until_complete()
        assert ticks == 49
        assert emitted == [1] * 50
        assert driver.is_done

    def test_throttle_logged(self, caplog):
        """Throttling is logged at DEBUG."""
        caplog.set_level(logging.DEBUG, logger="tick_spawn.driver")
        driver = make_driver(max_count=10, max_per_step=4)
        driver.step(1.0)
        assert "throttling emission to 4 of 10 pending" in caplog.text


class TestObservers:
    """Test snapshot and completion callbacks."""

    def test_observer_receives_snapshots(self):
        """Observers get the post-emission snapshot each tick."""
        received = []
        driver = make_driver(tps=10)
        driver.on_snapshot(received.append)
        driver.step()
        driver.step()
        assert len(received) == 2
        assert received[-1] == driver.tracker.snapshot
        assert received[-1].spawned_count == driver.tracker.spawned_count

    def test_observer_skipped_on_idle_tick(self):
        """Ticks that change nothing are not reported."""
        received = []
        driver = make_driver()
        driver.on_snapshot(received.append)
        driver.step(1.0)
        driver.step()
        driver.step()
        assert len(received) == 1

    def test_off_snapshot(self):
        """A removed observer is no longer called."""
        received = []
        driver = make_driver(tps=10)
        driver.on_snapshot(received.append)
        driver.step()
        driver.off_snapshot(received.append)
        driver.step()
        assert len(received) == 1

    def test_off_snapshot_unknown_callback_is_safe(self):
        """Removing an unregistered observer is a no-op."""
        driver = make_driver()
        driver.off_snapshot(lambda snapshot: None)

    def test_multiple_observers(self):
        """Every observer sees the same snapshots."""
        a, b = [], []
        driver = make_driver(tps=10)
        driver.on_snapshot(a.append)
        driver.on_snapshot(b.append)
        driver.step()
        assert a == b
        assert len(a) == 1

    def test_on_complete_fires_once(self):
        """Completion hooks run exactly once."""
        completions = []
        driver = make_driver(tps=10, max_count=20)
        driver.on_complete(completions.append)
        driver.run(100)
        driver.step()
        assert len(completions) == 1
        assert completions[0].spawned_count == 20
        assert completions[0].percent_time == 100.0

    def test_on_complete_waits_for_backlog(self):
        """Completion waits until throttled units are emitted."""
        completions = []
        driver = make_driver(max_count=5, max_per_step=2)
        driver.on_complete(completions.append)
        driver.step(1.0)
        assert completions == []
        driver.run_until_complete()
        assert len(completions) == 1
        assert completions[0].spawned_count == 5

    def test_completion_logged(self, caplog):
        """Completion is logged at INFO with the unit count."""
        caplog.set_level(logging.INFO, logger="tick_spawn.driver")
        driver = make_driver(max_count=3)
        driver.step(1.0)
        assert "Spawning finished at tick 1: 3 units" in caplog.text


class TestRunning:
    """Test multi-tick run helpers."""

    def test_run_n_ticks(self):
        """run(n) advances n ticks."""
        driver = make_driver(time_span=10.0, tps=10)
        assert driver.run(5) == 5
        assert driver.tick_number == 5
        assert driver.tracker.normalized_time == pytest.approx(0.05)

    def test_run_stops_when_done(self):
        """run(n) returns early once spawning is finished."""
        driver = make_driver(time_span=1.0, tps=4)
        ticks = driver.run(100)
        assert driver.is_done
        assert ticks < 100

    def test_request_stop_from_observer(self):
        """An observer can stop the loop mid-run."""
        driver = make_driver(time_span=10.0, tps=10)

        def stop_at_three(snapshot):
            if driver.tick_number == 3:
                driver.request_stop()

        driver.on_snapshot(stop_at_three)
        assert driver.run(50) == 3

    def test_run_until_complete_spawns_max_count(self):
        """A full run emits exactly max_count units."""
        emitted = []
        driver = make_driver(
            curve=Curve.ease_in_out(), time_span=2.0, max_count=50, tps=60,
            emit=emitted.append,
        )
        driver.run_until_complete()
        assert sum(emitted) == 50
        assert driver.tracker.spawned_count == 50
        assert driver.is_done

    def test_run_until_complete_respects_max_ticks(self):
        """max_ticks bounds run_until_complete."""
        driver = make_driver(time_span=10.0, tps=10)
        assert driver.run_until_complete(max_ticks=7) == 7
        assert not driver.is_done

    def test_run_forever_returns_when_done(self):
        """The paced loop exits once spawning is finished."""
        driver = make_driver(time_span=0.02, max_count=5, tps=500)
        driver.run_forever()
        assert driver.is_done
        assert driver.tracker.spawned_count == 5

    def test_run_forever_stops_on_request(self):
        """The paced loop honours request_stop."""
        driver = make_driver(time_span=100.0, tps=1000)
        driver.on_snapshot(lambda snapshot: driver.request_stop())
        driver.run_forever()
        assert driver.tick_number == 1
