"""Main application window — a single version label."""

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel

from linuxwatcher.branding import AppBranding
from linuxwatcher.config.settings import AppSettings
from linuxwatcher.core.composer import no_network, resolve
from linuxwatcher.core.fetcher import MakefileFetcher, get_fetch_worker_class
from linuxwatcher.core.models import (
    TERMINAL_STATES, DisplayOutcome, FetchResult, FetchSuccess, WatchState,
)
from linuxwatcher.network.detector import NetworkDetector

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """LinuxWatcher main window."""

    def __init__(self, settings: AppSettings, fetcher: MakefileFetcher | None = None,
                 detector=NetworkDetector):
        super().__init__()
        self._settings = settings
        self._fetcher = fetcher or MakefileFetcher(
            url=settings.makefile_url,
            connect_timeout=settings.connect_timeout,
            read_timeout=settings.read_timeout,
            prefix_bytes=settings.prefix_bytes,
        )
        self._detector = detector
        self._worker = None
        self._state = WatchState.IDLE

        self._setup_ui()

    @property
    def state(self) -> WatchState:
        return self._state

    @property
    def finished(self) -> bool:
        return self._state in TERMINAL_STATES

    @property
    def label_text(self) -> str:
        return self._label.text()

    def _setup_ui(self):
        self.setWindowTitle(AppBranding.window_title())
        self.setMinimumSize(360, 200)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        layout.addWidget(self._create_brand_header())

        self._label = QLabel("")
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setWordWrap(True)
        self._label.setContentsMargins(16, 16, 16, 16)
        layout.addWidget(self._label, 1)

    def _create_brand_header(self) -> QWidget:
        header = QWidget()
        header.setFixedHeight(48)
        header.setStyleSheet(
            "QWidget { background-color: #27272A; border-bottom: 1px solid #3F3F46; }"
        )
        h_layout = QHBoxLayout(header)
        h_layout.setContentsMargins(16, 8, 16, 8)

        name_label = QLabel(AppBranding.APP_NAME)
        name_label.setStyleSheet(
            "font-size: 16px; font-weight: bold; color: #F59E0B; background: transparent; border: none;"
        )
        h_layout.addWidget(name_label)
        h_layout.addStretch()

        ver_label = QLabel(f"v{AppBranding.VERSION}")
        ver_label.setStyleSheet(
            "font-size: 11px; color: #71717A; background: transparent; border: none;"
        )
        h_layout.addWidget(ver_label)
        return header

    # --- Flow ---

    def start(self):
        """Check connectivity, then fetch in the background. Runs once."""
        if self._state != WatchState.IDLE:
            logger.warning("start() called in state %s, ignoring", self._state.value)
            return

        self._set_state(WatchState.CHECKING_CONNECTIVITY)
        if not self._detector.is_connected():
            self._show(no_network())
            return

        logger.info("Fetching %s", self._fetcher.url)
        self._set_state(WatchState.FETCHING)
        worker_cls = get_fetch_worker_class()
        self._worker = worker_cls(self._fetcher, self)
        self._worker.finished_with.connect(self._on_fetch_finished)
        self._worker.start()

    def _on_fetch_finished(self, result: FetchResult):
        """Receives the worker's single result on the GUI thread."""
        if isinstance(result, FetchSuccess):
            self._set_state(WatchState.FETCHED)
            self._set_state(WatchState.EXTRACTING)
        self._show(resolve(result))

    def _set_state(self, state: WatchState):
        logger.debug("State %s -> %s", self._state.value, state.value)
        self._state = state

    def _show(self, outcome: DisplayOutcome):
        if outcome.state not in TERMINAL_STATES:
            raise ValueError(f"Not a display state: {outcome.state.value}")
        if outcome.enlarged:
            # Widget-level stylesheet, so it wins over the app-wide font-size
            self._label.setStyleSheet(f"font-size: {self._settings.font_size}pt;")
        self._label.setText(outcome.text)
        self._set_state(outcome.state)
        logger.info("Display state: %s", outcome.state.value)

    def closeEvent(self, event):
        # The fetch can't be cancelled; wait so the QThread isn't destroyed mid-run
        if self._worker is not None and self._worker.isRunning():
            logger.info("Waiting for fetch to finish...")
            self._worker.wait()
        event.accept()
