"""Shared fixtures for the test suite."""

import os

import pytest

# Qt widgets and timers need a platform plugin even without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingThreadPool:
    """Stand-in for QThreadPool that holds runnables until run_all()."""

    def __init__(self):
        self.started = []

    def start(self, runnable):
        self.started.append(runnable)

    def run_all(self):
        pending, self.started = self.started, []
        for runnable in pending:
            runnable.run()
        return len(pending)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pool():
    return RecordingThreadPool()
