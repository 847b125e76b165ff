"""Screen routes and the back stack that moves between them.

Kept free of Qt so the window can subscribe to route changes and the
routing rules can be exercised on their own.
"""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger("breaking_silence.navigation")


class AppDestinations:
    HOME_ROUTE = "home"
    SCAN_ROUTE = "scan"
    TUTORIALS_ROUTE = "tutorials"
    TRANSLATE_ROUTE = "translate"
    SETTINGS_ROUTE = "settings"

    ALL = (HOME_ROUTE, SCAN_ROUTE, TUTORIALS_ROUTE, TRANSLATE_ROUTE, SETTINGS_ROUTE)

    # Routes without a screen of their own yet; they show the home layout
    # with inert buttons.
    PLACEHOLDERS = (TUTORIALS_ROUTE, TRANSLATE_ROUTE, SETTINGS_ROUTE)


class Navigator:
    """Back stack of routes rooted at the start destination.

    Listeners are called with ``(previous_route, new_route)`` after every
    change.
    """

    def __init__(self, start_destination: str = AppDestinations.HOME_ROUTE) -> None:
        self._check(start_destination)
        self._stack: list[str] = [start_destination]
        self._listeners: list[Callable[[str, str], None]] = []

    @staticmethod
    def _check(route: str) -> None:
        if route not in AppDestinations.ALL:
            raise ValueError(f"Unknown route: {route!r}")

    @property
    def current(self) -> str:
        return self._stack[-1]

    @property
    def back_stack(self) -> list[str]:
        return list(self._stack)

    def add_listener(self, listener: Callable[[str, str], None]) -> None:
        self._listeners.append(listener)

    def navigate(self, route: str) -> None:
        self._check(route)
        previous = self.current
        self._stack.append(route)
        logger.debug("navigate %s -> %s", previous, route)
        self._notify(previous, route)

    def pop_back_stack(self) -> bool:
        """Go back one screen.  Returns ``False`` at the start destination."""
        if len(self._stack) <= 1:
            return False
        previous = self._stack.pop()
        logger.debug("back %s -> %s", previous, self.current)
        self._notify(previous, self.current)
        return True

    def _notify(self, previous: str, route: str) -> None:
        for listener in list(self._listeners):
            listener(previous, route)
