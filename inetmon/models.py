"""Data models for the Internet Stability Monitor."""

from dataclasses import dataclass
from enum import Enum

# Smallest latency recorded for a successful probe; 0 is reserved for failures
MIN_SUCCESS_LATENCY_MS = 1.0


class ProbeError(str, Enum):
    """Reason a probe cycle failed to produce a latency."""

    UNRESOLVABLE = "unresolvable"
    NO_REPLY = "no_reply"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class Sample:
    """One point of the rolling window."""

    elapsed_s: float  # seconds since the monitoring session started
    latency_ms: float  # 0 indicates a failed probe


@dataclass
class ProbeResult:
    """Outcome of a single reachability check."""

    target: str
    latency_ms: float | None  # None indicates failure
    error: ProbeError | None = None

    def __post_init__(self):
        """Ensure consistency between latency_ms and error fields."""
        if self.error is not None:
            self.latency_ms = None
        elif self.latency_ms is None:
            self.error = ProbeError.NO_REPLY
        else:
            # Whole milliseconds, never colliding with the failure sentinel
            self.latency_ms = max(MIN_SUCCESS_LATENCY_MS, float(round(self.latency_ms)))

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def sample_latency_ms(self) -> float:
        """Latency as stored in the sample window (0 for failures)."""
        return self.latency_ms if self.latency_ms is not None else 0.0


@dataclass(frozen=True)
class RecordOutcome:
    """What happened when a sample was added to the store."""

    sample: Sample
    is_new_peak: bool
    previous_longest_ms: float


@dataclass(frozen=True)
class StoreSnapshot:
    """Consistent copy of the sample store taken under its lock."""

    samples: tuple[Sample, ...]
    average_ms: float
    longest_ms: float
    total_bytes_sent: int
