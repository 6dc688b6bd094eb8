"""LinuxWatcher — entry point."""

import sys
import os
import logging

from linuxwatcher.branding import AppBranding
from linuxwatcher.config.settings import AppSettings


def setup_logging(data_dir: str):
    """Configure logging to file and console."""
    log_dir = os.path.join(data_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'linuxwatcher.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def main():
    # High-DPI support
    os.environ.setdefault('QT_ENABLE_HIGHDPI_SCALING', '1')

    settings = AppSettings.load()
    settings.ensure_dirs()

    setup_logging(settings.data_dir)
    logger = logging.getLogger(__name__)
    logger.info("%s %s starting", AppBranding.APP_NAME, AppBranding.VERSION)

    from PyQt6.QtWidgets import QApplication
    from linuxwatcher.ui.main_window import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName(AppBranding.APP_NAME)
    app.setOrganizationName(AppBranding.PUBLISHER)
    app.setStyleSheet(DARK_STYLE)

    window = MainWindow(settings)
    window.show()
    window.start()

    exit_code = app.exec()
    logger.info("Goodbye")
    sys.exit(exit_code)


DARK_STYLE = """
QWidget {
    background-color: #1e1e1e;
    color: #cccccc;
    font-size: 13px;
}
QMainWindow {
    background-color: #1e1e1e;
}
QLabel {
    color: #e4e4e7;
}
"""


if __name__ == '__main__':
    main()
