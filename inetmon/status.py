"""Operator-facing status text and transient status marker."""

import logging
import threading

from PySide6.QtCore import QObject, QTimer

from inetmon import config

logger = logging.getLogger(__name__)


class StatusBoard(QObject):
    """Holds the status line and a short-lived marker shown next to it.

    The status text is written from probe worker threads and is guarded by a
    lock. The marker is set from the control surface; a single single-shot
    timer clears it, and every flash() restarts that timer so an older
    marker's expiry can never wipe a newer one.
    """

    def __init__(self, marker_ms: int = config.STATUS_MARKER_MS, parent=None):
        super().__init__(parent)

        self._lock = threading.Lock()
        self._text = config.STATUS_INITIAL
        self._marker = None

        self.marker_timer = QTimer(self)
        self.marker_timer.setSingleShot(True)
        self.marker_timer.setInterval(marker_ms)
        self.marker_timer.timeout.connect(self._expire_marker)

    @property
    def text(self) -> str:
        with self._lock:
            return self._text

    def set_text(self, text: str):
        with self._lock:
            self._text = text

    @property
    def marker(self) -> str | None:
        with self._lock:
            return self._marker

    def flash(self, marker: str):
        """Show marker until the timer expires or another marker replaces it."""
        with self._lock:
            self._marker = marker
        self.marker_timer.start()
        logger.debug("Status marker set: %s", marker)

    def _expire_marker(self):
        with self._lock:
            self._marker = None
