"""Observer registry used by the session to notify its host."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .logs.logger import logger

MessageListener = Callable[[str, str], Any]
SubscriptionListener = Callable[[str, str], Any]
SimpleListener = Callable[[], Any]


class EventHub:
    """Holds host callbacks for each session event.

    Every registered listener is invoked; a listener that raises is logged
    and does not prevent the others from running. Invocation order among
    listeners of one event is registration order, but hosts should not
    depend on it.
    """

    def __init__(self) -> None:
        self._message: list[MessageListener] = []
        self._disconnect: list[SimpleListener] = []
        self._subscription: list[SubscriptionListener] = []
        self._first_connect: list[SimpleListener] = []

    def add_message_listener(self, listener: MessageListener) -> MessageListener:
        self._message.append(listener)
        return listener

    def add_disconnect_listener(self, listener: SimpleListener) -> SimpleListener:
        self._disconnect.append(listener)
        return listener

    def add_subscription_listener(
        self, listener: SubscriptionListener
    ) -> SubscriptionListener:
        self._subscription.append(listener)
        return listener

    def add_first_connect_listener(self, listener: SimpleListener) -> SimpleListener:
        self._first_connect.append(listener)
        return listener

    def remove_listener(self, listener: Callable[..., Any]) -> bool:
        """Unregister ``listener`` from every event. Returns True if it was found."""
        removed = False
        for group in (self._message, self._disconnect, self._subscription, self._first_connect):
            while listener in group:
                group.remove(listener)
                removed = True
        return removed

    def emit_message(self, nick: str, text: str) -> None:
        self._fire(self._message, nick, text)

    def emit_disconnect(self) -> None:
        self._fire(self._disconnect)

    def emit_subscription(self, subscriber: str, raw_line: str) -> None:
        self._fire(self._subscription, subscriber, raw_line)

    def emit_first_connect(self) -> None:
        self._fire(self._first_connect)

    @staticmethod
    def _fire(listeners: list[Callable[..., Any]], *args: str) -> None:
        # Copy so listeners may unregister themselves while being called
        for listener in list(listeners):
            try:
                listener(*args)
            except Exception as e:  # noqa: BLE001
                logger.log_event(
                    "events",
                    "listener_error",
                    level=logging.ERROR,
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(e),
                    error_type=type(e).__name__,
                )


__all__ = ["EventHub", "MessageListener", "SimpleListener", "SubscriptionListener"]
