"""In-process notification bus shared by message centers."""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Any, Callable


class Notification:
    """A single delivery: event name, optional payload and optional sender."""

    __slots__ = ("name", "data", "sender")

    def __init__(
        self, name: str, data: dict[str, Any] | None = None, sender: object | None = None
    ) -> None:
        self.name = name
        self.data = data
        self.sender = sender

    def __repr__(self) -> str:
        return f"Notification(name={self.name!r}, data={self.data!r})"


class _Registration:
    """Handlers of one listener, keyed by event name."""

    __slots__ = ("listener_ref", "handlers")

    def __init__(self, listener_ref: weakref.ref) -> None:
        self.listener_ref = listener_ref
        self.handlers: dict[str, Callable[[], Callable | None]] = {}


def _hold(listener: object, handler: Callable) -> Callable[[], Callable | None]:
    # A bound method of the listener would keep the listener alive forever.
    if getattr(handler, "__self__", None) is listener:
        return weakref.WeakMethod(handler)
    return lambda: handler


class NotificationBus:
    """Broadcast channel mapping event names to listeners.

    Listeners are held by weak reference and dropped from every event once
    collected. Handlers are called synchronously in subscription order;
    exceptions bubble up to the publisher.
    """

    def __init__(self, name: str = "bus") -> None:
        self.name = name
        self._lock = threading.RLock()
        self._registrations: dict[int, _Registration] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)

    def __repr__(self) -> str:
        return f"<NotificationBus {self.name!r} listeners={len(self)}>"

    def subscribe(self, listener: object, event_name: str, handler: Callable) -> None:
        """Register ``listener`` for ``event_name``; replaces an earlier handler."""
        if not callable(handler):
            raise TypeError(f"handler for '{event_name}' is not callable")
        key = id(listener)
        with self._lock:
            registration = self._registrations.get(key)
            if registration is None or registration.listener_ref() is not listener:
                registration = _Registration(weakref.ref(listener, self._make_reaper(key)))
                self._registrations[key] = registration
            registration.handlers[event_name] = _hold(listener, handler)

    def unsubscribe(self, listener: object, event_name: str) -> None:
        """Drop one registration of ``listener``. No-op if absent."""
        key = id(listener)
        with self._lock:
            registration = self._registrations.get(key)
            if registration is None or registration.listener_ref() is not listener:
                return
            registration.handlers.pop(event_name, None)
            if not registration.handlers:
                del self._registrations[key]

    def unsubscribe_all(self, listener: object) -> None:
        """Drop every registration of ``listener``. Safe to call repeatedly."""
        key = id(listener)
        with self._lock:
            registration = self._registrations.get(key)
            if registration is not None and registration.listener_ref() is listener:
                del self._registrations[key]

    def publish(
        self, event_name: str, data: dict[str, Any] | None = None, sender: object | None = None
    ) -> int:
        """Deliver a notification to all listeners of ``event_name``.

        Each handler gets its own shallow copy of ``data``, so a handler that
        mutates its payload does not change what later listeners receive.
        Returns the number of listeners it was delivered to.
        """
        delivered = 0
        for handler in self._handlers_for(event_name):
            payload = dict(data) if data is not None else None
            handler(Notification(event_name, payload, sender))
            delivered += 1
        return delivered

    def listeners(self, event_name: str) -> list[object]:
        """Live listeners currently subscribed to ``event_name``."""
        with self._lock:
            registrations = list(self._registrations.values())
        found = []
        for registration in registrations:
            listener = registration.listener_ref()
            if listener is not None and event_name in registration.handlers:
                found.append(listener)
        return found

    def has_listeners(self, event_name: str) -> bool:
        return bool(self.listeners(event_name))

    def _handlers_for(self, event_name: str) -> list[Callable]:
        # Snapshot under the lock, call outside it so handlers can re-enter.
        with self._lock:
            refs = [
                registration.handlers[event_name]
                for registration in list(self._registrations.values())
                if event_name in registration.handlers
            ]
        handlers = []
        for ref in refs:
            handler = ref()
            if handler is not None:
                handlers.append(handler)
        return handlers

    def _make_reaper(self, key: int) -> Callable[[weakref.ref], None]:
        bus_ref = weakref.ref(self)

        def reap(listener_ref: weakref.ref) -> None:
            bus = bus_ref()
            if bus is None:
                return
            with bus._lock:
                registration = bus._registrations.get(key)
                if registration is not None and registration.listener_ref is listener_ref:
                    del bus._registrations[key]
            logging.debug(f"[{bus.name}] Dropped collected listener")

        return reap


_default_bus = NotificationBus("default")


def get_default_bus() -> NotificationBus:
    """The process-wide bus used when no bus is injected."""
    return _default_bus
