"""Real ICMP echo prober using the system ping command."""

import ipaddress
import logging
import platform
import re
import shutil
import socket
import subprocess
import time
from math import ceil

from inetmon import config
from inetmon.models import ProbeError, ProbeResult

logger = logging.getLogger(__name__)

_LESS_THAN_PATTERN = re.compile(r"time<(\d+)", re.IGNORECASE)
_LATENCY_PATTERN = re.compile(r"time\s*[=<]\s*(\d+(?:\.\d+)?)\s*ms", re.IGNORECASE)


def parse_ping_latency_ms(output: str) -> float | None:
    """Parse latency value from ping command output (pure function).

    Handles various ping output formats across platforms:
    - Linux/macOS: "time=12.3 ms"
    - Windows: "time=12ms" or "time<1ms"

    Windows "time<Nms" is interpreted as N/2 ms (midpoint estimate).

    Args:
        output: Raw ping command output

    Returns:
        Latency in milliseconds (float), or None if parsing failed

    Examples:
        >>> parse_ping_latency_ms("time=12.3 ms")
        12.3
        >>> parse_ping_latency_ms("time<1ms")
        0.5
        >>> parse_ping_latency_ms("Request timed out.")
    """
    if not output:
        return None

    match = _LESS_THAN_PATTERN.search(output)
    if match:
        return float(match.group(1)) / 2.0

    match = _LATENCY_PATTERN.search(output)
    if match:
        try:
            return float(match.group(1))
        except (ValueError, IndexError):
            return None

    return None


def resolve_target(target: str) -> str | None:
    """Resolve target to an address, preferring IPv4 over IPv6.

    Dual-stack resolvers often list an IPv6 address first; the first IPv4
    address is taken when there is one, otherwise the first address of any
    family.
    """
    try:
        infos = socket.getaddrinfo(target, None)
    except (socket.gaierror, UnicodeError) as e:
        logger.debug("Resolution failed: target=%s, error=%s", target, e)
        return None

    addresses = [(family, sockaddr[0]) for family, _type, _proto, _canonname, sockaddr in infos]
    for family, address in addresses:
        if family == socket.AF_INET:
            return address
    if addresses:
        return addresses[0][1]
    return None


class PingProber:
    """Prober that resolves the target and sends one echo request via ping.

    The round-trip time is taken from the ping output. When the output has no
    recognizable "time" field (e.g. a localized Windows ping) the wall-clock
    duration of the ping call is used instead.

    By default no reply timeout is passed to ping, so the tool's own default
    applies.
    """

    def __init__(
        self,
        payload_bytes: int = config.PROBE_PAYLOAD_BYTES,
        timeout_ms: int | None = None,
    ):
        """Initialize ping prober.

        Args:
            payload_bytes: ICMP payload size in bytes
            timeout_ms: Optional reply timeout; None keeps ping's default

        Raises:
            ValueError: payload_bytes or timeout_ms is not positive
            OSError: no ping command on PATH
        """
        if payload_bytes <= 0:
            raise ValueError("payload_bytes must be positive")
        if timeout_ms is not None and timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if shutil.which("ping") is None:
            raise OSError("ping command not found")

        self.payload_bytes = payload_bytes
        self.timeout_ms = timeout_ms
        self.system = platform.system()

        logger.debug(
            "PingProber initialized: payload=%dB, timeout_ms=%s, system=%s",
            payload_bytes,
            timeout_ms,
            self.system,
        )

    def probe(self, target: str) -> ProbeResult:
        """Perform one reachability check against target."""
        if not target or not target.strip():
            return ProbeResult(target=target, latency_ms=None, error=ProbeError.UNRESOLVABLE)

        address = resolve_target(target)
        if address is None:
            return ProbeResult(target=target, latency_ms=None, error=ProbeError.UNRESOLVABLE)

        cmd = self._build_ping_command(address)
        subprocess_timeout = None
        if self.timeout_ms is not None:
            subprocess_timeout = self.timeout_ms / 1000.0 + 0.5

        logger.debug("Executing ping: target=%s, address=%s", target, address)

        try:
            started = time.perf_counter()
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=subprocess_timeout,
                shell=False,
            )
            elapsed_ms = (time.perf_counter() - started) * 1000.0
        except subprocess.TimeoutExpired:
            logger.debug("Ping timeout: target=%s", target)
            return ProbeResult(target=target, latency_ms=None, error=ProbeError.NO_REPLY)
        except OSError as e:
            logger.warning("Ping error: target=%s, error=%s", target, e, exc_info=True)
            return ProbeResult(target=target, latency_ms=None, error=ProbeError.TRANSPORT)

        if result.returncode != 0:
            logger.debug(
                "Ping failed (non-zero returncode): target=%s, returncode=%d",
                target,
                result.returncode,
            )
            return ProbeResult(target=target, latency_ms=None, error=ProbeError.NO_REPLY)

        latency = parse_ping_latency_ms(result.stdout)
        if latency is None:
            logger.debug(
                "Parse failed, using wall-clock time: target=%s, elapsed=%.2fms",
                target,
                elapsed_ms,
            )
            latency = elapsed_ms

        return ProbeResult(target=target, latency_ms=latency)

    def _build_ping_command(self, address: str) -> list[str]:
        """Build platform-specific ping command for one echo request."""
        payload = str(self.payload_bytes)
        ipv6 = ipaddress.ip_address(address).version == 6

        if self.system == "Windows":
            cmd = ["ping", "-6"] if ipv6 else ["ping"]
            cmd += ["-n", "1", "-l", payload]
            if self.timeout_ms is not None:
                cmd += ["-w", str(self.timeout_ms)]

        elif self.system == "Linux":
            cmd = ["ping", "-6"] if ipv6 else ["ping"]
            cmd += ["-n", "-c", "1", "-s", payload]
            if self.timeout_ms is not None:
                cmd += ["-W", str(max(1, ceil(self.timeout_ms / 1000.0)))]

        else:
            # macOS/BSD: plain ping is IPv4 only; -W semantics differ, rely on
            # the subprocess timeout
            cmd = ["ping6" if ipv6 else "ping", "-n", "-c", "1", "-s", payload]

        cmd.append(address)
        return cmd
