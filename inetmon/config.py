"""Fixed monitoring policy for the Internet Stability Monitor."""

# Probe target
TARGET = "google.com"

# Probe cadence
PROBE_INTERVAL_SECONDS = 1.0  # minimum gap between dispatched probe cycles
POLL_INTERVAL_MS = 50  # how often the scheduler checks whether a probe is due
SETTLE_DELAY_SECONDS = 0.1  # pause at the end of every probe cycle

# Probe payload, counted per cycle whether or not a reply arrives
PROBE_PAYLOAD_BYTES = 32

# Rolling sample window
MAX_SAMPLES = 100

# Threshold-triggered logging
LATENCY_THRESHOLD_MS = 175.0
LOG_COOLDOWN_SECONDS = 60.0
AUTO_LOG_FILENAME_FORMAT = "log_%Y%m%d%H%M%S.txt"

# Manual export
EXPORT_FILENAME = "log.txt"
EXPORT_WINDOW_SECONDS = 100.0

# Log file contents
LOG_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Transient status marker
STATUS_MARKER_MS = 2000
MARKER_EXPORTED = "✔"
MARKER_CLEARED = "Data cleared"

# Status text
STATUS_INITIAL = "Not checked yet"
STATUS_IDLE = "Not monitoring"
STATUS_MONITORING = "Monitoring {target}..."
STATUS_CONNECTED = "Connected to {target}."
STATUS_DISCONNECTED = "Disconnected from {target}."

# UI refresh rate
UI_REFRESH_INTERVAL_MS = 100
