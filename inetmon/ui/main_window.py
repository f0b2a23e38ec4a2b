"""Main window for the Internet Stability Monitor."""

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from inetmon import config
from inetmon.monitor import InternetMonitor

MONITORING_STYLE = "color: rgb(144, 238, 144);"  # Light green


class MainWindow(QMainWindow):
    """Read-only view of an InternetMonitor plus its four commands."""

    def __init__(self, monitor: InternetMonitor):
        super().__init__()
        self.setWindowTitle("Internet Stability Monitor")
        self.setGeometry(100, 100, 420, 260)

        self.monitor = monitor

        self.setup_ui()

        # The monitor is polled rather than observed; cycles finish off-thread
        self.refresh_timer = QTimer(self)
        self.refresh_timer.timeout.connect(self.refresh)
        self.refresh_timer.start(config.UI_REFRESH_INTERVAL_MS)
        self.refresh()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop monitoring when the window closes."""
        self.refresh_timer.stop()
        self.monitor.stop()
        super().closeEvent(event)

    def setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        title = QLabel("Internet Stability Monitor")
        title.setStyleSheet("font-weight: bold; font-size: 16px;")
        layout.addWidget(title)

        buttons = QHBoxLayout()

        self.toggle_button = QPushButton("Start Monitoring")
        self.toggle_button.clicked.connect(self.on_toggle_clicked)
        buttons.addWidget(self.toggle_button)

        self.clear_button = QPushButton("Clear Data")
        self.clear_button.clicked.connect(self.on_clear_clicked)
        buttons.addWidget(self.clear_button)

        self.log_button = QPushButton("Log Data")
        self.log_button.clicked.connect(self.on_log_clicked)
        buttons.addWidget(self.log_button)

        self.marker_label = QLabel("")
        buttons.addWidget(self.marker_label)
        buttons.addStretch()

        layout.addLayout(buttons)

        self.status_label = QLabel()
        layout.addWidget(self.status_label)

        self.elapsed_label = QLabel()
        self.response_label = QLabel()
        self.average_label = QLabel()
        self.longest_label = QLabel()
        self.data_sent_label = QLabel()
        for label in [
            self.elapsed_label,
            self.response_label,
            self.average_label,
            self.longest_label,
            self.data_sent_label,
        ]:
            label.setStyleSheet("font-family: monospace;")
            layout.addWidget(label)

        # Shown only when probing fell back to simulated data
        self.notice_label = QLabel()
        self.notice_label.setAlignment(Qt.AlignCenter)
        self.notice_label.setStyleSheet("font-weight: bold; color: orange;")
        self.notice_label.hide()
        layout.addWidget(self.notice_label)

        layout.addStretch()

    def on_toggle_clicked(self):
        self.monitor.toggle()
        self.refresh()

    def on_clear_clicked(self):
        self.monitor.clear()
        self.refresh()

    def on_log_clicked(self):
        self.monitor.export()
        self.refresh()

    def refresh(self):
        """Copy the monitor's current state into the labels."""
        monitor = self.monitor

        if monitor.is_monitoring:
            self.toggle_button.setText("Stop Monitoring")
            self.status_label.setStyleSheet(MONITORING_STYLE)
        else:
            self.toggle_button.setText("Start Monitoring")
            self.status_label.setStyleSheet("")
        self.status_label.setText(f"Status: {monitor.status_text}")

        self.marker_label.setText(monitor.log_status or "")

        latest = monitor.latest_sample
        if latest is None:
            self.elapsed_label.setText("No data available.")
            self.response_label.clear()
            self.average_label.clear()
            self.longest_label.clear()
        else:
            self.elapsed_label.setText(f"Elapsed Time: {latest.elapsed_s:.0f} s")
            self.response_label.setText(f"Response Time: {latest.latency_ms:.0f} ms")
            self.average_label.setText(
                f"Average Response Time: {monitor.average_latency_ms:.0f} ms"
            )
            self.longest_label.setText(
                f"Longest Response Time: {monitor.longest_latency_ms:.0f} ms"
            )

        self.data_sent_label.setText(f"Total Data Sent: {monitor.total_bytes_sent} bytes")
