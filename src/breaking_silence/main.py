"""Entry point for the desktop app."""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from breaking_silence.app import MainWindow
from breaking_silence.config import LOG_DATEFMT, LOG_FORMAT, LOG_LEVEL
from breaking_silence.theme import APP_STYLESHEET


def setup_logging() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def main() -> None:
    """Launch the Breaking Silence window."""
    setup_logging()

    app = QApplication(sys.argv)
    app.setApplicationName("Breaking Silence")
    app.setStyleSheet(APP_STYLESHEET)

    window = MainWindow()
    # Also clean up when the app quits without a window close event.
    app.aboutToQuit.connect(window.shutdown)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
