"""Unit tests for ThresholdLogger."""

from datetime import datetime, timedelta

import pytest

from inetmon.sample_store import SampleStore
from inetmon.threshold_logger import ThresholdLogger
from inetmon.workers import RenderWorker


class SteppingWallclock:
    """Wall clock that follows a FakeClock so file names differ per trigger."""

    def __init__(self, clock, base=datetime(2024, 3, 5, 14, 0, 0)):
        self.clock = clock
        self.origin = clock()
        self.base = base

    def __call__(self):
        return self.base + timedelta(seconds=self.clock() - self.origin)


@pytest.fixture
def store():
    return SampleStore()


@pytest.fixture
def threshold_logger(store, pool, clock, tmp_path):
    return ThresholdLogger(
        store,
        target="google.com",
        output_dir=tmp_path,
        thread_pool=pool,
        clock=clock,
        wallclock=SteppingWallclock(clock),
    )


def feed(store, threshold_logger, elapsed, latency):
    return threshold_logger.observe(store.record(elapsed, latency))


class TestThresholdLogger:
    """Test suite for threshold-triggered logging."""

    def test_below_threshold_never_triggers(self, store, threshold_logger, pool):
        """Test new peaks under the threshold do not log."""
        for i, latency in enumerate([50.0, 100.0, 175.0]):
            assert feed(store, threshold_logger, float(i), latency) is None

        assert pool.started == []
        assert threshold_logger.last_log_time is None

    def test_scenario_third_sample_triggers(self, store, threshold_logger, pool, tmp_path):
        """Test (0,50),(1,60),(2,200) logs once with average 103 and longest 200."""
        assert feed(store, threshold_logger, 0.0, 50.0) is None
        assert feed(store, threshold_logger, 1.0, 60.0) is None
        path = feed(store, threshold_logger, 2.0, 200.0)

        assert path == tmp_path / "log_20240305140000.txt"
        assert store.longest_ms == 200.0
        assert len(pool.started) == 1
        assert isinstance(pool.started[0], RenderWorker)

        pool.run_all()

        content = path.read_text(encoding="utf-8")
        assert "Ping Target: google.com\n" in content
        assert "Average Response Time: 103 ms\n" in content
        assert "Longest Response Time: 200 ms\n" in content
        assert "2 s, 200 ms\n" in content

    def test_requires_new_peak(self, store, threshold_logger, pool, clock):
        """Test a high sample that does not beat the previous peak is ignored."""
        feed(store, threshold_logger, 0.0, 300.0)
        pool.run_all()
        clock.advance(120)

        assert feed(store, threshold_logger, 1.0, 250.0) is None
        assert feed(store, threshold_logger, 2.0, 300.0) is None
        assert pool.started == []

    def test_debounce_within_window(self, store, threshold_logger, pool, clock, tmp_path):
        """Test two triggering samples 10 s apart create only one file."""
        feed(store, threshold_logger, 0.0, 200.0)
        clock.advance(10)
        assert feed(store, threshold_logger, 10.0, 250.0) is None

        pool.run_all()

        assert len(list(tmp_path.glob("log_*.txt"))) == 1
        # Peak still moves even though no file is written
        assert store.longest_ms == 250.0

    def test_debounce_window_elapsed(self, store, threshold_logger, pool, clock, tmp_path):
        """Test two triggering samples 70 s apart create two files."""
        first = feed(store, threshold_logger, 0.0, 200.0)
        clock.advance(70)
        second = feed(store, threshold_logger, 70.0, 250.0)

        pool.run_all()

        assert first != second
        assert sorted(p.name for p in tmp_path.glob("log_*.txt")) == [
            "log_20240305140000.txt",
            "log_20240305140110.txt",
        ]

    def test_debounce_boundary_is_inclusive(self, store, threshold_logger, pool, clock):
        """Test a trigger exactly one cooldown later logs again."""
        feed(store, threshold_logger, 0.0, 200.0)
        clock.advance(60)

        assert feed(store, threshold_logger, 60.0, 210.0) is not None
        assert len(pool.started) == 2

    def test_burst_logs_once(self, store, threshold_logger, pool, clock):
        """Test a burst of ever-higher spikes within the cooldown logs once."""
        for i in range(30):
            feed(store, threshold_logger, float(i), 200.0 + i)
            clock.advance(1.5)

        assert len(pool.started) == 1

    def test_debounce_time_set_at_trigger(self, store, threshold_logger, pool, clock):
        """Test last_log_time is set before the render has run."""
        feed(store, threshold_logger, 0.0, 200.0)

        assert threshold_logger.last_log_time == clock()
        assert threshold_logger.last_log_filename == "log_20240305140000.txt"
        assert len(pool.started) == 1

    def test_render_reads_store_at_run_time(self, store, threshold_logger, pool, tmp_path):
        """Test samples added between trigger and render appear in the file."""
        path = feed(store, threshold_logger, 0.0, 200.0)
        store.record(1.0, 40.0)

        pool.run_all()

        assert "1 s, 40 ms" in path.read_text(encoding="utf-8")

    def test_render_failure_absorbed(self, store, pool, clock, tmp_path):
        """Test an unwritable output directory drops the log silently."""
        threshold_logger = ThresholdLogger(
            store,
            output_dir=tmp_path / "does-not-exist",
            thread_pool=pool,
            clock=clock,
        )

        assert feed(store, threshold_logger, 0.0, 300.0) is not None
        pool.run_all()

        assert not (tmp_path / "does-not-exist").exists()
        # Cooldown still applies after a failed write
        assert feed(store, threshold_logger, 1.0, 400.0) is None
