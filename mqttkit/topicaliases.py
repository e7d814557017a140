"""Automatic assignment of topic aliases to outgoing publishes."""

from __future__ import annotations

import threading
from typing import Iterable, Optional

from mqttkit.publish import Publish, PublishProperties


class TopicAliasHandler:
    """Tracks topic aliases 1..maximum and applies them to publishes."""

    def __init__(self, maximum: int, aliases: Optional[Iterable[str]] = None) -> None:
        self._lock = threading.Lock()
        self.alias_max = maximum
        if aliases is None:
            self._aliases = [""] * (maximum + 1)
        else:
            self._aliases = list(aliases)

    @property
    def aliases(self) -> list[str]:
        """A copy of the alias table; index 0 is never used."""
        with self._lock:
            return list(self._aliases)

    def get_topic(self, alias: int) -> str:
        """Return the topic for an alias, or an empty string if unknown."""
        with self._lock:
            if alias < 0 or alias >= len(self._aliases):
                return ""
            return self._aliases[alias]

    def get_alias(self, topic: str) -> int:
        """Return the alias assigned to topic, or 0 if none is."""
        with self._lock:
            for index, name in enumerate(self._aliases):
                if name == topic:
                    return index
        return 0

    def set_alias(self, topic: str) -> int:
        """Assign the first free alias to topic; return it, or 0 if none is free."""
        with self._lock:
            for index in range(1, len(self._aliases)):
                if not self._aliases[index]:
                    self._aliases[index] = topic
                    return index
        return 0

    def reset_alias(self, topic: str, alias: int) -> None:
        """Reassign alias to a new topic."""
        with self._lock:
            self._aliases[alias] = topic

    def publish_hook(self, publish: Publish) -> None:
        """Replace the topic of an outgoing publish with an alias where possible."""
        props = publish.properties
        if props is not None and props.topic_alias is not None:
            self.reset_alias(publish.topic, props.topic_alias)
            return

        alias = self.get_alias(publish.topic) or self.set_alias(publish.topic)
        if alias:
            if publish.properties is None:
                publish.properties = PublishProperties()
            publish.properties.topic_alias = alias
            publish.topic = ""