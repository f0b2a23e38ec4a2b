"""Simulated prober for offline runs and tests."""

import random

from inetmon.models import ProbeError, ProbeResult


class FakeProber:
    """Generates plausible round-trip times, with occasional spikes and losses."""

    def __init__(self, seed: int | None = None):
        """Initialize with optional random seed for deterministic behavior."""
        # Isolated random instance; probes run on pool threads
        self._random = random.Random(seed)

        # Simulation parameters
        self.base_latency = 30.0  # ms
        self.latency_variance = 8.0
        self.spike_probability = 0.03
        self.spike_multiplier = 7.0  # spikes cross the logging threshold
        self.loss_probability = 0.02

    def probe(self, target: str) -> ProbeResult:
        """Simulate one probe against target."""
        if not target or not target.strip():
            return ProbeResult(target=target, latency_ms=None, error=ProbeError.UNRESOLVABLE)

        if self._random.random() < self.loss_probability:
            return ProbeResult(target=target, latency_ms=None, error=ProbeError.NO_REPLY)

        if self._random.random() < self.spike_probability:
            latency = self.base_latency * self.spike_multiplier + self._random.gauss(
                0, self.latency_variance
            )
        else:
            latency = self.base_latency + self._random.gauss(0, self.latency_variance)

        return ProbeResult(target=target, latency_ms=latency)
