"""mathns: Event Listeners
---------------------------------------------------------
Plain publish/subscribe for namespace notifications. Each ``Emitter`` owns its
listener lists; ``emit`` calls listeners synchronously in subscription order.

Notes
-----
- Emitting an event nobody listens to is not an error.
- Listener exceptions propagate to the caller of ``emit``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

__all__ = ["Emitter", "Listener"]

Listener = Callable[..., Any]


class Emitter:
    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[Listener, bool]]] = {}

    def on(self, event: str, callback: Listener) -> Listener:
        """Subscribe ``callback`` to ``event``; returns the callback."""
        self._listeners.setdefault(event, []).append((callback, False))
        return callback

    def once(self, event: str, callback: Listener) -> Listener:
        """Subscribe ``callback`` for the next emission of ``event`` only."""
        self._listeners.setdefault(event, []).append((callback, True))
        return callback

    def off(self, event: str, callback: Listener | None = None) -> None:
        """Unsubscribe ``callback``, or every listener of ``event`` when None."""
        if callback is None:
            self._listeners.pop(event, None)
            return
        entries = self._listeners.get(event, [])
        self._listeners[event] = [(cb, one) for cb, one in entries if cb is not callback]

    def emit(self, event: str, *args: Any) -> None:
        entries = self._listeners.get(event)
        if not entries:
            return
        # Drop one-shot listeners before calling, so re-entrant emits skip them
        self._listeners[event] = [(cb, one) for cb, one in entries if not one]
        for callback, _ in entries:
            callback(*args)

    def listeners(self, event: str) -> list[Listener]:
        return [cb for cb, _ in self._listeners.get(event, [])]
