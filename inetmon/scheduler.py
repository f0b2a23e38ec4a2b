"""Periodic probe scheduling for a single target."""

import logging
import time
from collections.abc import Callable

from PySide6.QtCore import QObject, QThreadPool, QTimer, Signal

from inetmon import config
from inetmon.prober import Prober
from inetmon.sample_store import SampleStore
from inetmon.status import StatusBoard
from inetmon.threshold_logger import ThresholdLogger
from inetmon.workers import ProbeCycleWorker

logger = logging.getLogger(__name__)


class ProbeScheduler(QObject):
    """Dispatches one probe cycle per interval while monitoring is active.

    Key features:
    - Poll timer checks whether the interval has elapsed since the last dispatch
    - last_check advances at dispatch time, not when the probe completes
    - Overlapping in-flight cycles are allowed; none are ever cancelled
    - Stopping only prevents new dispatches; late results are still recorded
    """

    # Signals
    sample_recorded = Signal(object)  # Sample
    error = Signal(str)

    def __init__(
        self,
        prober: Prober,
        store: SampleStore,
        status: StatusBoard,
        threshold_logger: ThresholdLogger,
        target: str = config.TARGET,
        thread_pool: QThreadPool | None = None,
        clock: Callable[[], float] = time.monotonic,
        parent=None,
    ):
        super().__init__(parent)

        self.prober = prober
        self.store = store
        self.status = status
        self.threshold_logger = threshold_logger
        self.target = target
        self.clock = clock
        self.interval_s = config.PROBE_INTERVAL_SECONDS
        self.settle_delay_s = config.SETTLE_DELAY_SECONDS

        # Session state
        self.is_monitoring = False
        self.start_time = None
        self.last_check = None

        # Informational only, there is no concurrency limit
        self._in_flight = 0

        # Threading
        self.thread_pool = thread_pool if thread_pool is not None else QThreadPool.globalInstance()

        # Timer driving poll()
        self.timer = QTimer(self)
        self.timer.setInterval(config.POLL_INTERVAL_MS)
        self.timer.timeout.connect(self.poll)

    def start_monitoring(self):
        """Begin a monitoring session."""
        if self.is_monitoring:
            return

        now = self.clock()
        self.is_monitoring = True
        self.start_time = now
        self.last_check = now
        self.status.set_text(config.STATUS_MONITORING.format(target=self.target))
        self.timer.start()
        logger.info("Monitoring started: target=%s", self.target)

    def stop_monitoring(self):
        """Stop dispatching probe cycles; in-flight cycles still complete."""
        self.timer.stop()
        self.status.set_text(config.STATUS_IDLE)
        if not self.is_monitoring:
            return

        self.is_monitoring = False
        logger.info("Monitoring stopped (in-flight: %d)", self._in_flight)

    def reset_session(self):
        """Forget session timestamps after a clear."""
        self.start_time = None
        self.last_check = None

    def poll(self):
        """Dispatch a probe cycle if monitoring and the interval has elapsed."""
        if not self.is_monitoring or self.last_check is None:
            return

        now = self.clock()
        if now - self.last_check < self.interval_s:
            return

        self.last_check = now
        self._dispatch_cycle()

    def _dispatch_cycle(self):
        worker = ProbeCycleWorker(
            self.prober,
            self.target,
            self.store,
            self.status,
            self.threshold_logger,
            start_time=self.start_time,
            clock=self.clock,
            settle_delay_s=self.settle_delay_s,
        )
        worker.signals.sample_recorded.connect(self.sample_recorded)
        worker.signals.error.connect(self._on_cycle_error)
        worker.signals.finished.connect(self._on_cycle_finished)

        self._in_flight += 1
        logger.debug("Probe cycle dispatched (in-flight: %d)", self._in_flight)

        self.thread_pool.start(worker)

    def _on_cycle_error(self, error_msg):
        logger.error("Probe cycle error: %s", error_msg)
        self.error.emit(error_msg)

    def _on_cycle_finished(self):
        self._in_flight = max(0, self._in_flight - 1)

    def get_stats(self):
        """Get scheduler statistics.

        Returns:
            Dict with scheduler state info
        """
        return {
            "target": self.target,
            "in_flight": self._in_flight,
            "monitoring": self.is_monitoring,
            "start_time": self.start_time,
            "last_check": self.last_check,
        }
