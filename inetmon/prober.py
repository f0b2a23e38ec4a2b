"""Prober abstraction for reachability checks."""

from typing import Protocol

from inetmon.fake_prober import FakeProber
from inetmon.models import ProbeResult


class Prober(Protocol):
    """Protocol defining the interface for reachability probers."""

    def probe(self, target: str) -> ProbeResult:
        """Perform one reachability check against target."""
        ...


class FakeProberAdapter:
    """Adapter that implements Prober protocol using FakeProber."""

    def __init__(self, fake_prober: FakeProber | None = None):
        """Initialize with optional FakeProber instance."""
        if fake_prober is None:
            fake_prober = FakeProber()
        self._fake_prober = fake_prober

    def probe(self, target: str) -> ProbeResult:
        """Probe using the underlying FakeProber."""
        return self._fake_prober.probe(target)
