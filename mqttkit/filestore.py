"""Storage of session packets as files in a folder."""

from __future__ import annotations

import fnmatch
import os
import re
import tempfile
import threading
from typing import BinaryIO, Union

TMP_EXTENSION = ".tmp"
CORRUPT_EXTENSION = ".CORRUPT"
_FILE_PERMISSIONS = 0o666
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class FileStoreError(Exception):
    """A file store operation failed."""


def _write_packet(packet: object, stream: BinaryIO) -> None:
    if isinstance(packet, (bytes, bytearray, memoryview)):
        stream.write(bytes(packet))
    else:
        packet.write_to(stream)  # type: ignore[attr-defined]


class FileStore:
    """Store that keeps each packet in its own file.

    Order is kept by file modification time, so packets put closer together
    than the file system's timestamp resolution may be listed out of order.
    """

    def __init__(
        self, path: Union[str, os.PathLike], prefix: str, extension: str
    ) -> None:
        if extension and not extension.startswith("."):
            extension = "." + extension
        path = os.fspath(path)
        try:
            os.stat(path)
        except OSError as err:
            raise FileStoreError(f"stat on folder failed: {err}") from err

        test_file = os.path.join(path, prefix + "TEST" + extension)
        try:
            with open(test_file, "wb") as f:
                f.write(b"test")
        except OSError as err:
            raise FileStoreError(
                f"failed to write test file to specified folder: {err}"
            ) from err
        try:
            with open(test_file, "rb") as f:
                f.read()
        except OSError as err:
            raise FileStoreError(
                f"failed to read test file from specified folder: {err}"
            ) from err
        try:
            os.remove(test_file)
        except OSError as err:
            raise FileStoreError(
                f"failed to remove test file from specified folder: {err}"
            ) from err

        self._lock = threading.Lock()
        self._path = path
        self._prefix = prefix
        self._extension = extension

    def put(self, packet_id: int, packet_type: int, packet: object) -> None:
        """Store the packet, writing via a temporary file then renaming it."""
        with self._lock:
            try:
                fd, tmp_name = tempfile.mkstemp(
                    dir=self._path,
                    prefix=self._file_name_prefix(packet_id) + "-",
                    suffix=self._extension + TMP_EXTENSION,
                )
            except OSError as err:
                raise FileStoreError(f"failed to create temp file: {err}") from err
            try:
                with os.fdopen(fd, "wb") as f:
                    _write_packet(packet, f)
            except Exception as err:
                _remove_quietly(tmp_name)
                raise FileStoreError(
                    f"failed to write packet to temp file: {err}"
                ) from err
            try:
                os.replace(tmp_name, self._file_path(packet_id))
            except OSError as err:
                _remove_quietly(tmp_name)
                raise FileStoreError(f"failed to rename temp file: {err}") from err

    def get(self, packet_id: int) -> BinaryIO:
        """Open the stored packet for reading; the caller must close it."""
        with self._lock:
            try:
                return open(self._file_path(packet_id), "rb")
            except OSError as err:
                raise FileStoreError(f"failed to open packet file: {err}") from err

    def delete(self, packet_id: int) -> None:
        """Remove the file holding the packet."""
        with self._lock:
            self._delete(packet_id)

    def quarantine(self, packet_id: int) -> None:
        """Rename a corrupt packet's file so it is no longer listed.

        If that fails the file is deleted, so it is not resent on every
        reconnection, and the failure is raised.
        """
        with self._lock:
            try:
                fd, target = tempfile.mkstemp(
                    dir=self._path,
                    prefix=self._file_name_prefix(packet_id) + "-",
                    suffix=self._extension + CORRUPT_EXTENSION,
                )
            except OSError as err:
                self._delete_quietly(packet_id)
                raise FileStoreError(
                    f"failed to create quarantine file: {err}"
                ) from err
            try:
                os.close(fd)
            except OSError as err:
                self._delete_quietly(packet_id)
                raise FileStoreError(
                    f"failed to close newly created quarantine file: {err}"
                ) from err
            try:
                os.replace(self._file_path(packet_id), target)
            except OSError as err:
                self._delete_quietly(packet_id)
                raise FileStoreError(
                    f"failed to move packet into quarantine: {err}"
                ) from err

    def list(self) -> list[int]:
        """Return packet ids in the order they were put."""
        with self._lock:
            return self._list()

    def reset(self) -> None:
        """Delete every stored packet, raising the last failure if any."""
        with self._lock:
            failure = None
            for packet_id in self._list():
                try:
                    self._delete(packet_id)
                except FileStoreError as err:
                    failure = err
            if failure is not None:
                raise failure

    def __str__(self) -> str:
        return (
            f"store path: {self._path}, prefix: {self._prefix}, "
            f"extension: {self._extension}"
        )

    def _list(self) -> list[int]:
        pattern = self._prefix + "*" + self._extension
        found: list[tuple[int, int]] = []
        try:
            with os.scandir(self._path) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        continue
                    name = entry.name
                    if not fnmatch.fnmatchcase(name, pattern):
                        continue
                    try:
                        mtime = entry.stat().st_mtime_ns
                    except OSError as err:
                        raise FileStoreError(
                            f"failed to retrieve file info for {name}: {err}"
                        ) from err
                    id_text = name[len(self._prefix): len(name) - len(self._extension)]
                    if not _ID_PATTERN.fullmatch(id_text):
                        raise FileStoreError(f"invalid id in filename {name}")
                    found.append((mtime, int(id_text) & 0xFFFF))
        except OSError as err:
            raise FileStoreError(f"failed to read dir: {err}") from err
        found.sort(key=lambda item: item[0])
        return [packet_id for _, packet_id in found]

    def _delete(self, packet_id: int) -> None:
        try:
            os.remove(self._file_path(packet_id))
        except OSError as err:
            raise FileStoreError(f"failed to remove packet file: {err}") from err

    def _delete_quietly(self, packet_id: int) -> None:
        try:
            self._delete(packet_id)
        except FileStoreError:
            pass

    def _file_path(self, packet_id: int) -> str:
        return os.path.join(
            self._path, self._file_name_prefix(packet_id) + self._extension
        )

    def _file_name_prefix(self, packet_id: int) -> str:
        return f"{self._prefix}{packet_id}"


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        pass