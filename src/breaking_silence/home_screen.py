"""Home screen: app title, logo and the four main menu buttons."""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget


def title_bar(text: str) -> QLabel:
    """Full-width turquoise title bar."""
    label = QLabel(text)
    label.setObjectName("titleBar")
    label.setAlignment(Qt.AlignmentFlag.AlignCenter)
    return label


def app_button(text: str, on_click: Callable[[], None]) -> QPushButton:
    button = QPushButton(text)
    button.setObjectName("appButton")
    button.setCursor(Qt.CursorShape.PointingHandCursor)
    button.setAutoDefault(False)
    button.clicked.connect(on_click)
    return button


def _noop() -> None:
    pass


class HomeScreen(QWidget):
    def __init__(
        self,
        on_tutorials_click: Callable[[], None] = _noop,
        on_translate_click: Callable[[], None] = _noop,
        on_scan_click: Callable[[], None] = _noop,
        on_settings_click: Callable[[], None] = _noop,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(16)

        layout.addWidget(title_bar("BREAKING SILENCE"))
        layout.addSpacing(32)

        logo = QLabel("✋")  # raised hand
        logo.setAlignment(Qt.AlignmentFlag.AlignCenter)
        logo.setStyleSheet("font-size: 96px;")
        layout.addWidget(logo)
        layout.addSpacing(48)

        self.buttons: dict[str, QPushButton] = {}
        for text, callback in (
            ("TUTORIALS", on_tutorials_click),
            ("TRANSLATE", on_translate_click),
            ("SCAN", on_scan_click),
            ("SETTINGS", on_settings_click),
        ):
            button = app_button(text, callback)
            self.buttons[text] = button
            layout.addWidget(button, alignment=Qt.AlignmentFlag.AlignHCenter)
            button.setMinimumWidth(320)

        layout.addStretch(1)
