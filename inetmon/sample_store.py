"""Thread-safe rolling window of latency samples with running counters."""

import logging
import threading
from collections import deque

from inetmon import config
from inetmon.models import RecordOutcome, Sample, StoreSnapshot

logger = logging.getLogger(__name__)


class SampleStore:
    """Bounded sample buffer plus the counters that travel with it.

    Samples, total bytes sent and the longest latency are guarded by one lock
    so readers never see counters out of step with the buffer. The longest
    latency is a high-water mark over every sample ever recorded, including
    those already evicted from the window.
    """

    def __init__(
        self,
        capacity: int = config.MAX_SAMPLES,
        bytes_per_probe: int = config.PROBE_PAYLOAD_BYTES,
    ):
        if capacity <= 0:
            raise ValueError("capacity must be positive")

        self.capacity = capacity
        self.bytes_per_probe = bytes_per_probe

        self._lock = threading.Lock()
        self._samples = deque()  # No maxlen - eviction is explicit
        self._total_bytes_sent = 0
        self._longest_ms = 0.0

    def record(self, elapsed_s: float, latency_ms: float) -> RecordOutcome:
        """Append one probe cycle's result and update the counters."""
        sample = Sample(elapsed_s=elapsed_s, latency_ms=latency_ms)

        with self._lock:
            self._samples.append(sample)

            previous_longest = self._longest_ms
            is_new_peak = latency_ms > previous_longest
            if is_new_peak:
                self._longest_ms = latency_ms

            self._total_bytes_sent += self.bytes_per_probe

            while len(self._samples) > self.capacity:
                self._samples.popleft()

            size = len(self._samples)

        logger.debug(
            "Sample recorded: elapsed=%.1fs, latency=%.0fms, new_peak=%s, size=%d",
            elapsed_s,
            latency_ms,
            is_new_peak,
            size,
        )
        return RecordOutcome(
            sample=sample, is_new_peak=is_new_peak, previous_longest_ms=previous_longest
        )

    def clear(self):
        """Drop all samples and reset the byte counter.

        The longest latency is kept.
        """
        with self._lock:
            self._samples.clear()
            self._total_bytes_sent = 0
        logger.debug("Sample store cleared")

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            samples = tuple(self._samples)
            return StoreSnapshot(
                samples=samples,
                average_ms=_mean(samples),
                longest_ms=self._longest_ms,
                total_bytes_sent=self._total_bytes_sent,
            )

    def samples(self) -> list[Sample]:
        with self._lock:
            return list(self._samples)

    def latest(self) -> Sample | None:
        with self._lock:
            return self._samples[-1] if self._samples else None

    def average_ms(self) -> float:
        with self._lock:
            return _mean(self._samples)

    @property
    def longest_ms(self) -> float:
        with self._lock:
            return self._longest_ms

    @property
    def total_bytes_sent(self) -> int:
        with self._lock:
            return self._total_bytes_sent

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)


def _mean(samples) -> float:
    # Failed probes (0 ms) count towards the average
    if not samples:
        return 0.0
    return sum(s.latency_ms for s in samples) / len(samples)
