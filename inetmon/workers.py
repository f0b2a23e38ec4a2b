"""Worker classes for background probe and render tasks."""

import logging
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from PySide6.QtCore import QObject, QRunnable, Signal

from inetmon import config
from inetmon.prober import Prober
from inetmon.report import write_snapshot
from inetmon.sample_store import SampleStore
from inetmon.status import StatusBoard

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    """Signals for communicating between worker threads and main thread."""

    sample_recorded = Signal(object)  # Emits Sample
    error = Signal(str)  # Emits error message
    finished = Signal()  # Emits when worker completes


class ProbeCycleWorker(QRunnable):
    """Runs one complete probe cycle in a background thread.

    Probe, status update, store update and threshold check all happen here;
    results are written even if monitoring was stopped while the probe was
    in flight.
    """

    def __init__(
        self,
        prober: Prober,
        target: str,
        store: SampleStore,
        status: StatusBoard,
        threshold_logger,
        start_time: float,
        clock: Callable[[], float] = time.monotonic,
        settle_delay_s: float = config.SETTLE_DELAY_SECONDS,
    ):
        super().__init__()
        self.prober = prober
        self.target = target
        self.store = store
        self.status = status
        self.threshold_logger = threshold_logger
        self.start_time = start_time
        self.clock = clock
        self.settle_delay_s = settle_delay_s
        self.signals = WorkerSignals()

    def run(self):
        """Execute the probe cycle in background thread."""
        try:
            logger.debug("Probe cycle starting: target=%s", self.target)

            # This may be slow - e.g., real ping
            result = self.prober.probe(self.target)
            latency_ms = result.sample_latency_ms

            if latency_ms > 0:
                self.status.set_text(config.STATUS_CONNECTED.format(target=self.target))
            else:
                self.status.set_text(config.STATUS_DISCONNECTED.format(target=self.target))

            elapsed_s = self.clock() - self.start_time
            outcome = self.store.record(elapsed_s, latency_ms)
            self.threshold_logger.observe(outcome)

            logger.debug(
                "Probe cycle completed: target=%s, latency=%.0fms, error=%s",
                self.target,
                latency_ms,
                result.error,
            )

            time.sleep(self.settle_delay_s)
            self.signals.sample_recorded.emit(outcome.sample)

        except Exception as e:
            logger.exception("Probe cycle exception: target=%s, error=%s", self.target, str(e))
            self.signals.error.emit(str(e))

        finally:
            self.signals.finished.emit()


class RenderWorker(QRunnable):
    """Writes a log file from the store contents at the time it runs."""

    def __init__(
        self,
        store: SampleStore,
        target: str,
        path: Path,
        wallclock: Callable[[], datetime] = datetime.now,
    ):
        super().__init__()
        self.store = store
        self.target = target
        self.path = path
        self.wallclock = wallclock

    def run(self):
        try:
            write_snapshot(self.store, self.target, self.path, self.wallclock())
        except Exception as e:
            logger.exception("Render exception: path=%s, error=%s", self.path, str(e))
