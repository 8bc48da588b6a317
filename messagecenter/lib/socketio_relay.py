"""Forward bus events to Socket.IO clients."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from messagecenter.lib.events import NotificationBus
from messagecenter.lib.message_center import MessageCenter


class SocketIORelay:
    """Re-emit selected bus events through a Flask-SocketIO server.

    ``socketio`` is a ``flask_socketio.SocketIO`` instance, or anything with
    the same ``emit(event, data, namespace=...)`` signature. Forwarding stops
    when the relay is stopped or garbage collected, so keep a reference to it.
    """

    def __init__(
        self,
        socketio: Any,
        names: Iterable[str],
        bus: NotificationBus | None = None,
        namespace: str = "/",
    ) -> None:
        self.socketio = socketio
        self.namespace = namespace
        self._center = MessageCenter(bus=bus, scope="socketio-relay")
        for name in names:
            self._center.observe(name, self._forwarder(name))

    @property
    def names(self) -> list[str]:
        return self._center.observed_names()

    def stop(self) -> None:
        """Stop forwarding. Safe to call more than once."""
        self._center.remove()

    def _forwarder(self, name: str):
        def forward(data: dict[str, Any] | None) -> None:
            logging.debug(f"Relaying << {name} >> to socket.io namespace {self.namespace}")
            self.socketio.emit(name, data, namespace=self.namespace)

        return forward
