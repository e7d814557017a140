"""In-memory storage of session packets, and the interface every store follows."""

from __future__ import annotations

import io
import threading
from dataclasses import dataclass
from typing import BinaryIO, Protocol, Union, runtime_checkable


class _WritesTo(Protocol):
    def write_to(self, stream: BinaryIO) -> object: ...


Storable = Union[bytes, bytearray, memoryview, _WritesTo]


@runtime_checkable
class Storer(Protocol):
    """Interface implemented by session state stores."""

    def put(self, packet_id: int, packet_type: int, packet: Storable) -> None:
        """Store the packet under packet_id."""

    def get(self, packet_id: int) -> BinaryIO:
        """Return a readable binary stream holding the stored packet."""

    def delete(self, packet_id: int) -> None:
        """Remove the packet stored under packet_id."""

    def quarantine(self, packet_id: int) -> None:
        """Move a corrupt packet out of the way (or delete it)."""

    def list(self) -> list[int]:
        """Return stored packet ids in the order they were put."""

    def reset(self) -> None:
        """Remove every stored packet."""


class NotInStoreError(LookupError):
    """The requested packet id is not in the store."""

    def __init__(self, message: str = "the requested ID was not found in the store") -> None:
        super().__init__(message)


def _write_packet(packet: Storable, stream: BinaryIO) -> None:
    if isinstance(packet, (bytes, bytearray, memoryview)):
        stream.write(bytes(packet))
    else:
        packet.write_to(stream)


@dataclass(frozen=True)
class _Entry:
    sequence: int
    data: bytes


class MemoryStore:
    """Store that keeps packets in memory, remembering insertion order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[int, _Entry] = {}
        self._counter = 0

    def put(self, packet_id: int, packet_type: int, packet: Storable) -> None:
        """Store the packet, replacing any previous packet with the same id."""
        buffer = io.BytesIO()
        _write_packet(packet, buffer)
        with self._lock:
            self._data[packet_id] = _Entry(self._counter, buffer.getvalue())
            self._counter += 1

    def get(self, packet_id: int) -> BinaryIO:
        """Return a stream over the stored packet; raise NotInStoreError if absent."""
        with self._lock:
            entry = self._data.get(packet_id)
        if entry is None:
            raise NotInStoreError()
        return io.BytesIO(entry.data)

    def delete(self, packet_id: int) -> None:
        """Remove the packet; raise NotInStoreError if it is not stored."""
        with self._lock:
            if packet_id not in self._data:
                raise NotInStoreError(
                    f"request to delete packet {packet_id}; packet not found"
                )
            del self._data[packet_id]

    def quarantine(self, packet_id: int) -> None:
        """Discard a corrupt packet; nothing better can be done in memory."""
        self.delete(packet_id)

    def list(self) -> list[int]:
        """Return packet ids in the order they were put."""
        with self._lock:
            return sorted(self._data, key=lambda pid: self._data[pid].sequence)

    def reset(self) -> None:
        """Remove every stored packet."""
        with self._lock:
            self._data = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)