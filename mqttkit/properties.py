"""User properties and small value helpers shared by the packet models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union


@dataclass(frozen=True)
class UserProperty:
    """A single user-supplied key/value property."""

    key: str
    value: str


class UserProperties(list):
    """An ordered list of user properties; keys may repeat."""

    def __init__(
        self, items: Iterable[Union[UserProperty, tuple[str, str]]] = ()
    ) -> None:
        super().__init__(
            item if isinstance(item, UserProperty) else UserProperty(*item)
            for item in items
        )

    def add(self, key: str, value: str) -> "UserProperties":
        """Append a property and return self so calls can be chained."""
        self.append(UserProperty(key, value))
        return self

    def get(self, key: str) -> str:
        """Return the first value for key, or an empty string if absent."""
        return next((p.value for p in self if p.key == key), "")

    def get_all(self, key: str) -> list[str]:
        """Return every value stored under key, in order."""
        return [p.value for p in self if p.key == key]


def bool_to_byte(value: bool) -> int:
    """Return the property byte for a flag: 1 when set, 0 otherwise.

    Raises TypeError for values that are not booleans or integers.
    """
    if not isinstance(value, (bool, int)):
        raise TypeError(f"expected a bool, got {type(value).__name__}")
    flag = bool(value)
    return int(flag)