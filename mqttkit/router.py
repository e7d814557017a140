"""Dispatch of received Publish messages to handlers by topic filter."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from mqttkit.logs import Logger, NoopLogger
from mqttkit.publish import Publish

MessageHandler = Callable[[Publish], object]


class StandardRouter:
    """Router allowing any number of handlers per topic filter.

    Handlers are called for every registered filter that matches the topic
    of a received message. If none matches, the default handler (if set)
    is called instead. Topic aliases announced by the server are tracked.
    """

    def __init__(self, default: Optional[MessageHandler] = None) -> None:
        self._lock = threading.RLock()
        self._default: Optional[MessageHandler] = default
        self._subscriptions: dict[str, list[MessageHandler]] = {}
        self._aliases: dict[int, str] = {}
        self._debug: Logger = NoopLogger()

    def register_handler(self, topic: str, handler: MessageHandler) -> None:
        """Add a handler for messages matching the topic filter."""
        self._debug.println("registering handler for:", topic)
        with self._lock:
            self._subscriptions.setdefault(topic, []).append(handler)

    def unregister_handler(self, topic: str) -> None:
        """Remove every handler registered for the topic filter."""
        self._debug.println("unregistering handler for:", topic)
        with self._lock:
            self._subscriptions.pop(topic, None)

    def route(self, publish: Publish) -> None:
        """Call the handlers whose filters match the message's topic."""
        self._debug.println("routing message for:", publish.topic)
        with self._lock:
            alias = (
                publish.properties.topic_alias
                if publish.properties is not None
                else None
            )
            if alias is not None:
                self._debug.println("message is using topic aliasing")
                if publish.topic:
                    self._debug.printf(
                        "registering new topic alias '%d' for topic '%s'",
                        alias,
                        publish.topic,
                    )
                    self._aliases[alias] = publish.topic
                topic = self._aliases.get(alias, "")
                if alias in self._aliases:
                    self._debug.printf(
                        "aliased topic '%d' translates to '%s'", alias, topic
                    )
            else:
                topic = publish.topic

            handler_called = False
            for route, handlers in list(self._subscriptions.items()):
                if match(route, topic):
                    self._debug.println("found handler for:", route)
                    for handler in list(handlers):
                        handler(publish)
                        handler_called = True

            if not handler_called and self._default is not None:
                self._default(publish)

    def set_debug_logger(self, logger: Logger) -> None:
        """Use logger for debug output."""
        self._debug = logger

    def default_handler(self, handler: Optional[MessageHandler]) -> None:
        """Set the handler for messages no other handler takes; None unsets it."""
        self._debug.println("registering default handler")
        with self._lock:
            self._default = handler


def match(route: str, topic: str) -> bool:
    """Return True if the topic filter route matches topic."""
    return route == topic or route_includes_topic(route, topic)


def _match_deep(route: list[str], topic: list[str]) -> bool:
    if not route:
        return not topic
    if not topic:
        return route[0] == "#"
    if route[0] == "#":
        return True
    if route[0] == "+" or route[0] == topic[0]:
        return _match_deep(route[1:], topic[1:])
    return False


def route_includes_topic(route: str, topic: str) -> bool:
    """Return True if the wildcard filter route covers topic."""
    return _match_deep(route_split(route), topic_split(topic))


def route_split(route: str) -> list[str]:
    """Split a topic filter into levels, dropping any shared-subscription prefix."""
    if not route:
        return []
    levels = route.split("/")
    if route.startswith("$share"):
        return levels[2:]
    return levels


def topic_split(topic: str) -> list[str]:
    """Split a topic name into levels."""
    if not topic:
        return []
    return topic.split("/")