"""Debounced, threshold-triggered diagnostic logging."""

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from PySide6.QtCore import QThreadPool

from inetmon import config
from inetmon.models import RecordOutcome
from inetmon.sample_store import SampleStore
from inetmon.workers import RenderWorker

logger = logging.getLogger(__name__)


class ThresholdLogger:
    """Writes a log file when latency reaches a new, high enough peak.

    A sample triggers when it beats the previous longest latency and exceeds
    the threshold. Triggers are debounced: at most one file per cooldown
    window. The debounce timestamp is taken before the render is dispatched,
    and the render itself reads whatever the store holds when it runs.
    """

    def __init__(
        self,
        store: SampleStore,
        target: str = config.TARGET,
        output_dir: Path | None = None,
        thread_pool: QThreadPool | None = None,
        clock: Callable[[], float] = time.monotonic,
        wallclock: Callable[[], datetime] = datetime.now,
        threshold_ms: float = config.LATENCY_THRESHOLD_MS,
        cooldown_s: float = config.LOG_COOLDOWN_SECONDS,
    ):
        self.store = store
        self.target = target
        self.output_dir = Path(output_dir) if output_dir is not None else Path.cwd()
        self.thread_pool = thread_pool if thread_pool is not None else QThreadPool.globalInstance()
        self.clock = clock
        self.wallclock = wallclock
        self.threshold_ms = threshold_ms
        self.cooldown_s = cooldown_s

        self._lock = threading.Lock()
        self._last_log_time = None
        self._last_log_filename = None

    @property
    def last_log_time(self) -> float | None:
        with self._lock:
            return self._last_log_time

    @property
    def last_log_filename(self) -> str | None:
        with self._lock:
            return self._last_log_filename

    def observe(self, outcome: RecordOutcome) -> Path | None:
        """Check a freshly recorded sample and dispatch a log render if due.

        Returns:
            Path of the log file being written, or None if nothing triggered
        """
        latency_ms = outcome.sample.latency_ms
        if not outcome.is_new_peak or latency_ms <= self.threshold_ms:
            return None

        now = self.clock()
        with self._lock:
            if self._last_log_time is not None and now - self._last_log_time < self.cooldown_s:
                logger.debug(
                    "Threshold log suppressed: latency=%.0fms, since_last=%.1fs",
                    latency_ms,
                    now - self._last_log_time,
                )
                return None

            filename = self.wallclock().strftime(config.AUTO_LOG_FILENAME_FORMAT)
            self._last_log_time = now
            self._last_log_filename = filename

        path = self.output_dir / filename
        logger.info(
            "Latency peak %.0fms above %.0fms, logging to %s",
            latency_ms,
            self.threshold_ms,
            path,
        )
        self.thread_pool.start(RenderWorker(self.store, self.target, path, self.wallclock))
        return path
