"""Entry point for the Internet Stability Monitor."""

import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from inetmon.logging_config import configure_logging
from inetmon.monitor import InternetMonitor
from inetmon.prober import FakeProberAdapter
from inetmon.ui.main_window import MainWindow

# Configure logging early
configure_logging()
logger = logging.getLogger(__name__)

PROBER_ENV = "INETMON_PROBER"


def select_prober():
    """Pick the real ping prober, falling back to simulated probes.

    Returns:
        (prober, user_message) where user_message explains a fallback, or None
    """
    if os.environ.get(PROBER_ENV, "").lower() == "fake":
        logger.info("Fake prober explicitly requested via environment variable")
        return FakeProberAdapter(), f"Using simulated data ({PROBER_ENV}=fake)"

    try:
        from inetmon.prober_ping import PingProber

        prober = PingProber()
    except ImportError as e:
        logger.warning("PingProber unavailable: %s", e)
        return FakeProberAdapter(), "Using simulated data (real probing unavailable)"
    except ValueError as e:
        logger.error("PingProber configuration invalid: %s", e)
        return FakeProberAdapter(), "Using simulated data (configuration error)"
    except OSError as e:
        logger.warning("Ping command unavailable: %s", e)
        return FakeProberAdapter(), "Using simulated data (ping command not available)"

    logger.info("PingProber initialized successfully")
    return prober, None


def main():
    """Main entry point for the Internet Stability Monitor."""
    app = QApplication(sys.argv)

    prober, user_message = select_prober()
    monitor = InternetMonitor(prober=prober)

    window = MainWindow(monitor)
    if user_message:
        window.notice_label.setText(user_message)
        window.notice_label.show()
    window.show()

    exit_code = app.exec()
    monitor.stop()
    # Let in-flight probes and renders finish writing
    monitor.scheduler.thread_pool.waitForDone(2000)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
