"""Loggers used for debug and error output."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Optional


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class Logger(ABC):
    """Interface for objects that accept log lines."""

    @abstractmethod
    def println(self, *args: Any) -> None:
        """Log the arguments, separated by spaces."""

    @abstractmethod
    def printf(self, format: str, *args: Any) -> None:
        """Log a %-style formatted message."""


class NoopLogger(Logger):
    """Logger that discards everything it is given."""

    def println(self, *args: Any) -> None:
        pass

    def printf(self, format: str, *args: Any) -> None:
        pass


class CallbackLogger(Logger):
    """Logger that hands timestamped, prefixed lines to a callable.

    Useful for routing log output into a test's captured output or any
    other sink. A ``None`` sink discards messages.
    """

    def __init__(
        self,
        sink: Optional[Callable[[str], Any]],
        prefix: str = "",
        clock: Callable[[], str] = _timestamp,
    ) -> None:
        self._sink = sink
        self._prefix = prefix
        self._clock = clock
        self._lock = threading.Lock()

    def println(self, *args: Any) -> None:
        with self._lock:
            if self._sink is None:
                return
            parts = [self._clock(), self._prefix, *map(str, args)]
            self._sink(" ".join(parts))

    def printf(self, format: str, *args: Any) -> None:
        with self._lock:
            if self._sink is None:
                return
            self._sink(f"{self._clock()} {self._prefix}{_format(format, args)}")