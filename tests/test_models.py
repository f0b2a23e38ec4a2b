"""Tests for inetmon.models invariants."""

from inetmon.models import (
    MIN_SUCCESS_LATENCY_MS,
    ProbeError,
    ProbeResult,
    Sample,
)


class TestProbeResult:
    """Test ProbeResult dataclass behavior and invariants."""

    def test_successful_result(self):
        """Test valid successful probe result."""
        result = ProbeResult(target="example.com", latency_ms=25.0)

        assert result.ok
        assert result.error is None
        assert result.latency_ms == 25.0
        assert result.sample_latency_ms == 25.0

    def test_failed_result(self):
        """Test failed probe result records the zero sentinel."""
        result = ProbeResult(target="example.com", latency_ms=None, error=ProbeError.NO_REPLY)

        assert not result.ok
        assert result.latency_ms is None
        assert result.sample_latency_ms == 0.0

    def test_post_init_error_discards_latency(self):
        """Test __post_init__ invariant: an error forces latency_ms=None."""
        result = ProbeResult(
            target="example.com", latency_ms=40.0, error=ProbeError.TRANSPORT
        )

        assert result.latency_ms is None
        assert result.sample_latency_ms == 0.0

    def test_post_init_missing_latency_is_failure(self):
        """Test __post_init__ invariant: latency_ms=None without error becomes NO_REPLY."""
        result = ProbeResult(target="example.com", latency_ms=None)

        assert result.error is ProbeError.NO_REPLY
        assert not result.ok

    def test_latency_rounded_to_whole_milliseconds(self):
        """Test successful latencies are stored as whole milliseconds."""
        assert ProbeResult(target="h", latency_ms=12.4).latency_ms == 12.0
        assert ProbeResult(target="h", latency_ms=12.6).latency_ms == 13.0

    def test_sub_millisecond_success_never_zero(self):
        """Test a fast success cannot collide with the failure sentinel."""
        for latency in (0.0, 0.2, 0.5, 0.9):
            result = ProbeResult(target="localhost", latency_ms=latency)
            assert result.ok
            assert result.sample_latency_ms == MIN_SUCCESS_LATENCY_MS

    def test_error_values_are_strings(self):
        """Test ProbeError members compare equal to their names in logs."""
        assert ProbeError.UNRESOLVABLE == "unresolvable"
        assert ProbeError.NO_REPLY == "no_reply"


class TestSample:
    """Test Sample dataclass."""

    def test_samples_are_immutable_values(self):
        """Test equal samples compare equal and are hashable."""
        a = Sample(elapsed_s=2.0, latency_ms=30.0)
        b = Sample(elapsed_s=2.0, latency_ms=30.0)
        assert a == b
        assert len({a, b}) == 1
