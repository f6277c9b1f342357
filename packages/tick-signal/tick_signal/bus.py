"""Synchronous in-process signals with removable listener handles."""
from __future__ import annotations

from typing import Any, Callable

_Handler = Callable[..., None]


class Listener:
    """Handle returned by Signal.add_listener. Call remove() to detach."""

    __slots__ = ("_signal", "handler")

    def __init__(self, signal: Signal, handler: _Handler) -> None:
        self._signal: Signal | None = signal
        self.handler = handler

    @property
    def active(self) -> bool:
        return self._signal is not None

    def remove(self) -> None:
        signal = self._signal
        if signal is None:
            return
        self._signal = None
        signal._detach(self)


class Subscription:
    """Groups several listeners (or cleanup callables) behind one remove()."""

    def __init__(self, *parts: Listener | Callable[[], None]) -> None:
        self._parts: list[Listener | Callable[[], None]] = list(parts)

    def add(self, part: Listener | Callable[[], None]) -> None:
        self._parts.append(part)

    def remove(self) -> None:
        parts = self._parts
        self._parts = []
        for part in parts:
            if isinstance(part, Listener):
                part.remove()
            else:
                part()


class Signal:
    """Dispatches payloads to listeners in registration order.

    Dispatch walks a snapshot of the listener list, so handlers may add or
    remove listeners (including themselves) while a dispatch is running.
    Exceptions raised by a handler propagate to the dispatcher.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def add_listener(self, handler: _Handler) -> Listener:
        listener = Listener(self, handler)
        self._listeners.append(listener)
        return listener

    def once(self, handler: _Handler) -> Listener:
        def _once(*payload: Any) -> None:
            listener.remove()
            handler(*payload)

        listener = self.add_listener(_once)
        return listener

    def remove(self, listener: Listener) -> None:
        listener.remove()

    def _detach(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def dispatch(self, *payload: Any) -> None:
        for listener in list(self._listeners):
            # Removed earlier in this same dispatch.
            if not listener.active:
                continue
            listener.handler(*payload)

    def clear(self) -> None:
        listeners = self._listeners
        self._listeners = []
        for listener in listeners:
            listener._signal = None

    def __len__(self) -> int:
        return len(self._listeners)
