"""Named-event callbacks on top of a notification bus.

Usage::

    center = MessageCenter()
    center.observe("homePageFetchComplete", lambda data: print(data["name"]))
    center.send("homePageFetchComplete", {"name": "Prajeet"})

Each instance keeps one callback per event name; observing a name again
replaces the callback. Every instance on the same bus receives what any of
them sends.
"""

from __future__ import annotations

import abc
import logging
import threading
from typing import Any, Callable

from messagecenter.lib.events import Notification, NotificationBus, get_default_bus
from messagecenter.lib.settings import Settings

Callback = Callable[[dict[str, Any] | None], None]


class Subscription:
    """Handle for one observe() call. Cancelling it stops that callback only."""

    def __init__(self, center: MessageCenter, name: str, token: object) -> None:
        self.name = name
        self._center = center
        self._token = token

    @property
    def active(self) -> bool:
        return self._center._owns(self.name, self._token)

    def cancel(self) -> None:
        """Stop delivery for this name, unless a later observe() replaced it."""
        self._center._release(self.name, self._token)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"<Subscription {self.name!r} {state}>"


class MessageCenter:
    """Register callbacks for named events and send named events.

    Delivery goes through a NotificationBus, the process-wide default one
    unless another is injected. The bus does not keep the instance alive:
    once it is collected its registrations disappear, as if remove() had
    been called.
    """

    def __init__(
        self,
        bus: NotificationBus | None = None,
        scope: str = "",
        settings: Settings | None = None,
    ) -> None:
        self.scope = scope
        self._bus = bus if bus is not None else get_default_bus()
        self._settings = settings if settings is not None else Settings()
        self._lock = threading.Lock()
        self._callbacks: dict[str, Callback] = {}
        self._tokens: dict[str, object] = {}

    @property
    def bus(self) -> NotificationBus:
        return self._bus

    def observe(self, name: str, callback: Callback) -> Subscription:
        """Call ``callback(data)`` whenever ``name`` is sent on the bus.

        Args:
            name: Event name. Observing a name again overwrites the callback.
            callback: Receives the payload dict, or None if none was sent.

        Returns:
            Subscription: handle that can cancel this registration.
        """
        self._check_name(name)
        if not callable(callback):
            raise TypeError(f"callback for '{name}' is not callable")

        token = object()
        with self._lock:
            replaced = name in self._callbacks
            self._callbacks[name] = callback
            self._tokens[name] = token
            self._bus.subscribe(self, name, self._dispatch)

        if replaced:
            logging.debug(f"{self._label()}Replaced observer for << {name} >>")
        else:
            logging.debug(f"{self._label()}Observing << {name} >>")
        return Subscription(self, name, token)

    def send(self, name: str, data: dict[str, Any] | None = None) -> int:
        """Broadcast ``name`` with optional ``data`` to every listener on the bus.

        Returns the number of listeners reached; zero is not an error.
        """
        self._check_name(name)
        delivered = self._bus.publish(name, data, sender=self)
        if self._settings.get_or_default("trace_deliveries"):
            logging.debug(f"{self._label()}Sent << {name} >> to {delivered} listener(s)")
        return delivered

    def remove(self) -> None:
        """Forget every callback and leave the bus. Safe to call repeatedly."""
        with self._lock:
            count = len(self._callbacks)
            self._callbacks.clear()
            self._tokens.clear()
            self._bus.unsubscribe_all(self)
        if count:
            logging.debug(f"{self._label()}Removed {count} observer(s)")

    def close(self) -> None:
        self.remove()

    def observed_names(self) -> list[str]:
        with self._lock:
            return sorted(self._callbacks)

    def __enter__(self) -> MessageCenter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.remove()

    def __repr__(self) -> str:
        return f"<MessageCenter scope={self.scope!r} observing={self.observed_names()}>"

    def _dispatch(self, notification: Notification) -> None:
        with self._lock:
            callback = self._callbacks.get(notification.name)
        if callback is None:
            return
        if self._settings.get_or_default("trace_deliveries"):
            logging.debug(f"{self._label()}Dispatching << {notification.name} >>")
        callback(notification.data)

    def _owns(self, name: str, token: object) -> bool:
        with self._lock:
            return self._tokens.get(name) is token

    def _release(self, name: str, token: object) -> None:
        with self._lock:
            if self._tokens.get(name) is not token:
                return
            del self._callbacks[name]
            del self._tokens[name]
            self._bus.unsubscribe(self, name)
        logging.debug(f"{self._label()}Stopped observing << {name} >>")

    def _check_name(self, name: str) -> None:
        if not isinstance(name, str):
            raise TypeError(f"event name must be a string, not {type(name).__name__}")
        if name:
            return
        if self._settings.get_or_default("strict_names"):
            raise ValueError("event name must not be empty")
        logging.warning(f"{self._label()}Using an empty event name")

    def _label(self) -> str:
        return f"[{self.scope}] " if self.scope else ""


class Notifiable(abc.ABC):
    """Base for objects that wire their observers in observe_notifications().

    Subclasses may assign ``self.message_center`` themselves; otherwise one
    scoped with the class name is created on first access.
    """

    _message_center: MessageCenter | None = None

    @property
    def message_center(self) -> MessageCenter:
        if self._message_center is None:
            self._message_center = MessageCenter(scope=type(self).__name__)
        return self._message_center

    @message_center.setter
    def message_center(self, value: MessageCenter) -> None:
        self._message_center = value

    @abc.abstractmethod
    def observe_notifications(self) -> None:
        """Register this object's callbacks on its message center."""
