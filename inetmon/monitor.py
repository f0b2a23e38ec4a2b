"""Control surface tying together store, scheduler, logger and status."""

import logging
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from PySide6.QtCore import QObject, QThreadPool

from inetmon import config
from inetmon.models import Sample
from inetmon.prober import FakeProberAdapter, Prober
from inetmon.report import export_window_filter, write_snapshot
from inetmon.sample_store import SampleStore
from inetmon.scheduler import ProbeScheduler
from inetmon.status import StatusBoard
from inetmon.threshold_logger import ThresholdLogger

logger = logging.getLogger(__name__)


class InternetMonitor(QObject):
    """Internet stability monitor for a single target.

    Exposes the start/stop/clear/export commands and read accessors that a
    presentation layer needs. Log files are written to output_dir, which
    defaults to the current working directory.
    """

    def __init__(
        self,
        prober: Prober | None = None,
        target: str = config.TARGET,
        output_dir: Path | None = None,
        thread_pool: QThreadPool | None = None,
        clock: Callable[[], float] = time.monotonic,
        wallclock: Callable[[], datetime] = datetime.now,
        parent=None,
    ):
        super().__init__(parent)

        self.target = target
        self.output_dir = Path(output_dir) if output_dir is not None else Path.cwd()
        self.clock = clock
        self.wallclock = wallclock

        self.store = SampleStore()
        self.status = StatusBoard(parent=self)
        self.threshold_logger = ThresholdLogger(
            self.store,
            target=target,
            output_dir=self.output_dir,
            thread_pool=thread_pool,
            clock=clock,
            wallclock=wallclock,
        )
        self.scheduler = ProbeScheduler(
            prober if prober is not None else FakeProberAdapter(),
            self.store,
            self.status,
            self.threshold_logger,
            target=target,
            thread_pool=thread_pool,
            clock=clock,
            parent=self,
        )

    # Commands

    def start(self):
        self.scheduler.start_monitoring()

    def stop(self):
        self.scheduler.stop_monitoring()

    def toggle(self):
        """Start if idle, stop if monitoring."""
        if self.scheduler.is_monitoring:
            self.stop()
        else:
            self.start()

    def clear(self):
        """Stop monitoring and discard the collected samples.

        The longest latency and the threshold-log cooldown are kept.
        """
        self.scheduler.stop_monitoring()
        self.scheduler.reset_session()
        self.store.clear()
        self.status.set_text(config.STATUS_IDLE)
        self.status.flash(config.MARKER_CLEARED)
        logger.info("Data cleared")

    def export(self) -> bool:
        """Write the recent part of the window to the fixed export file.

        Returns:
            True if the file was written
        """
        sample_filter = export_window_filter(self.clock(), self.scheduler.start_time)
        path = self.output_dir / config.EXPORT_FILENAME

        if not write_snapshot(self.store, self.target, path, self.wallclock(), sample_filter):
            return False

        self.status.flash(config.MARKER_EXPORTED)
        return True

    # Accessors

    @property
    def is_monitoring(self) -> bool:
        return self.scheduler.is_monitoring

    @property
    def status_text(self) -> str:
        return self.status.text

    @property
    def log_status(self) -> str | None:
        return self.status.marker

    @property
    def latest_sample(self) -> Sample | None:
        return self.store.latest()

    @property
    def samples(self) -> list[Sample]:
        return self.store.samples()

    @property
    def average_latency_ms(self) -> float:
        return self.store.average_ms()

    @property
    def longest_latency_ms(self) -> float:
        return self.store.longest_ms

    @property
    def total_bytes_sent(self) -> int:
        return self.store.total_bytes_sent

    @property
    def last_log_filename(self) -> str | None:
        return self.threshold_logger.last_log_filename
