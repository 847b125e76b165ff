"""Main application window: one stacked page per route."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import QMainWindow, QStackedWidget

from breaking_silence.home_screen import HomeScreen
from breaking_silence.navigation import AppDestinations, Navigator
from breaking_silence.scan_screen import ScanScreen

logger = logging.getLogger("breaking_silence.app")


class MainWindow(QMainWindow):
    """Hosts the screens and follows the :class:`Navigator`'s back stack."""

    def __init__(
        self,
        navigator: Navigator | None = None,
        scan_screen: ScanScreen | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Breaking Silence")
        self.setMinimumSize(420, 720)

        self.navigator = navigator or Navigator()
        self._shutdown_complete = False

        # ── Screens ──────────────────────────────────────────────
        nav = self.navigator
        self._home = HomeScreen(
            on_tutorials_click=lambda: nav.navigate(AppDestinations.TUTORIALS_ROUTE),
            on_translate_click=lambda: nav.navigate(AppDestinations.TRANSLATE_ROUTE),
            on_scan_click=lambda: nav.navigate(AppDestinations.SCAN_ROUTE),
            on_settings_click=lambda: nav.navigate(AppDestinations.SETTINGS_ROUTE),
        )
        if scan_screen is None:
            scan_screen = ScanScreen(on_back_click=nav.pop_back_stack)
        self._scan = scan_screen
        # Placeholder routes share one home layout with inert buttons.
        self._placeholder = HomeScreen()

        self._stack = QStackedWidget()
        self._pages = {
            AppDestinations.HOME_ROUTE: self._stack.addWidget(self._home),
            AppDestinations.SCAN_ROUTE: self._stack.addWidget(self._scan),
        }
        placeholder_index = self._stack.addWidget(self._placeholder)
        for route in AppDestinations.PLACEHOLDERS:
            self._pages[route] = placeholder_index
        self.setCentralWidget(self._stack)

        nav.add_listener(self._on_route_changed)
        self._stack.setCurrentIndex(self._pages[nav.current])

    # ── Navigation ───────────────────────────────────────────────

    def _on_route_changed(self, previous: str, route: str) -> None:
        logger.info("Route %s -> %s", previous, route)
        if previous == AppDestinations.SCAN_ROUTE:
            self._scan.stop()
        self._stack.setCurrentIndex(self._pages[route])
        if route == AppDestinations.SCAN_ROUTE:
            self._scan.start()

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802
        if event.key() in (Qt.Key.Key_Escape, Qt.Key.Key_Back):
            if self.navigator.pop_back_stack():
                return
        super().keyPressEvent(event)

    # ── Shutdown ─────────────────────────────────────────────────

    def shutdown(self) -> None:
        """Release the camera and detector; safe to call more than once."""
        if self._shutdown_complete:
            return
        self._shutdown_complete = True
        self._scan.stop()

    def closeEvent(self, event) -> None:  # noqa: N802
        self.shutdown()
        super().closeEvent(event)
