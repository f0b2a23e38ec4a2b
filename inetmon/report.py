"""Rendering of sample-store snapshots into diagnostic log files.

Both the threshold-triggered logger and the manual export go through
write_snapshot(); they differ only in file name and sample filter.
"""

import logging
import math
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from inetmon import config
from inetmon.models import Sample, StoreSnapshot
from inetmon.sample_store import SampleStore

logger = logging.getLogger(__name__)

SampleFilter = Callable[[Sample], bool]


def render_log(
    snapshot: StoreSnapshot,
    target: str,
    created: datetime,
    sample_filter: SampleFilter | None = None,
) -> str:
    """Render a snapshot as log file text (pure function).

    The header statistics always describe the whole snapshot; the filter only
    selects which sample lines are listed. When no sample passes the filter
    the body collapses to a "No data to log." notice.

    Args:
        snapshot: Store contents to render
        target: Probed hostname, shown in the header
        created: Timestamp shown on the "Log Created" line
        sample_filter: Optional predicate selecting the listed samples

    Returns:
        Complete file contents, newline terminated
    """
    timestamp = created.strftime(config.LOG_TIME_FORMAT)

    if sample_filter is None:
        listed = list(snapshot.samples)
    else:
        listed = [s for s in snapshot.samples if sample_filter(s)]

    if not listed:
        return f"Log Created: {timestamp}\nNo data to log.\n"

    lines = [
        f"Log Created: {timestamp}",
        f"Ping Target: {target}",
        f"Average Response Time: {snapshot.average_ms:.0f} ms",
        f"Longest Response Time: {snapshot.longest_ms:.0f} ms",
        f"Total Data Sent: {snapshot.total_bytes_sent} bytes",
        "",
    ]
    for sample in listed:
        # Whole seconds, halves rounded up
        elapsed = math.floor(sample.elapsed_s + 0.5)
        lines.append(f"{elapsed} s, {sample.latency_ms:.0f} ms")

    return "\n".join(lines) + "\n\n"


def write_snapshot(
    store: SampleStore,
    target: str,
    path: Path,
    created: datetime,
    sample_filter: SampleFilter | None = None,
) -> bool:
    """Snapshot the store now and write it to path.

    Write failures are logged and reported through the return value only.

    Returns:
        True if the file was written, False otherwise
    """
    content = render_log(store.snapshot(), target, created, sample_filter)

    try:
        with open(path, "w", encoding="utf-8") as log_file:
            log_file.write(content)
    except (OSError, UnicodeEncodeError) as e:
        logger.warning("Log write failed: path=%s, error=%s", path, e)
        return False

    logger.info("Log written: %s", path)
    return True


def export_window_filter(now: float, start_time: float | None) -> SampleFilter:
    """Sample filter used by the manual export.

    Keeps samples whose elapsed time exceeds (now - window) - start_time,
    saturating at zero when that difference is negative.
    """
    if start_time is None:
        start_time = now
    cutoff = max(0.0, (now - config.EXPORT_WINDOW_SECONDS) - start_time)

    def keep(sample: Sample) -> bool:
        return sample.elapsed_s > cutoff

    return keep
