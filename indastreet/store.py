"""Change notification shared by the state containers."""

from __future__ import annotations

from typing import Callable

Listener = Callable[[], None]


class StateStore:
    """Holds listeners and notifies them after each completed update."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
