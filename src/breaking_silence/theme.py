"""Colours and the application stylesheet."""

from __future__ import annotations

# Primary turquoise (00CED1)
TURQUOISE = "#00CED1"
TURQUOISE_LIGHT = "#5FFAFF"
TURQUOISE_DARK = "#009EA0"

LIGHT_BACKGROUND = "#F5F5F5"
DARK_BACKGROUND = "#121212"

TEXT_ON_TURQUOISE = "#000000"
TEXT_ON_LIGHT = "#000000"
TEXT_ON_DARK = "#FFFFFF"

# Force a light theme regardless of OS dark mode.
APP_STYLESHEET = f"""
    QMainWindow, QWidget {{
        background-color: #ffffff;
        color: {TEXT_ON_LIGHT};
    }}
    QLabel#titleBar {{
        background-color: {TURQUOISE};
        color: {TEXT_ON_TURQUOISE};
        font-size: 24px;
        font-weight: bold;
        padding: 12px 0;
    }}
    QPushButton#appButton {{
        background-color: {TURQUOISE};
        color: {TEXT_ON_TURQUOISE};
        border: none;
        border-radius: 28px;
        font-size: 18px;
        font-weight: bold;
        min-height: 56px;
    }}
    QPushButton#appButton:hover {{
        background-color: {TURQUOISE_LIGHT};
    }}
    QPushButton#appButton:pressed {{
        background-color: {TURQUOISE_DARK};
    }}
    QPushButton#backButton {{
        background-color: {TURQUOISE};
        color: {TEXT_ON_TURQUOISE};
        border: none;
        border-radius: 24px;
        font-size: 16px;
        font-weight: bold;
        min-height: 48px;
        min-width: 120px;
    }}
    QPushButton#switchCameraButton {{
        background-color: rgba(0, 206, 209, 180);
        color: {TEXT_ON_DARK};
        border: none;
        border-radius: 24px;
        font-size: 20px;
        min-width: 48px;
        min-height: 48px;
    }}
    QLabel#preview {{
        background-color: {DARK_BACKGROUND};
    }}
    QLabel#handIcon {{
        background-color: {TURQUOISE};
        border-radius: 8px;
        font-size: 40px;
    }}
    QLabel#gestureLabel {{
        font-size: 20px;
        font-weight: bold;
    }}
"""
