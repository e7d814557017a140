import os
import time

import pytest

from mqttkit.filestore import CORRUPT_EXTENSION, FileStore, FileStoreError

PUBLISH = 3


class FakePacket:
    def __init__(self, packet_id, payload):
        self.packet_id = packet_id
        self.payload = payload

    def write_to(self, stream):
        stream.write(self.packet_id.to_bytes(2, "big") + self.payload)


def decode(data):
    return int.from_bytes(data[:2], "big"), data[2:]


def test_file_store(tmp_path):
    s = FileStore(tmp_path, "foo", ".ext")
    ids = [65535, 2, 10, 32300, 5890]
    for pid in ids:
        s.put(pid, PUBLISH, FakePacket(pid, str(pid).encode()))
        time.sleep(0.02)  # order is kept by modification time

    s.delete(ids[2])

    with pytest.raises(FileStoreError):
        s.get(8)
    with pytest.raises(FileStoreError):
        s.get(ids[2])
    ids = ids[:2] + ids[3:]

    with s.get(32300) as stream:
        pid, payload = decode(stream.read())
    assert pid == 32300
    assert payload == b"32300"

    assert s.list() == ids

    s.reset()
    assert s.list() == []


def test_file_store_naming(tmp_path):
    s = FileStore(tmp_path, "BlahXX", ".txt")
    s.put(1, PUBLISH, b"random file contents")

    assert os.listdir(tmp_path) == ["BlahXX1.txt"]

    s.quarantine(1)
    entries = os.listdir(tmp_path)
    assert len(entries) == 1
    assert entries[0].startswith("BlahXX1")
    assert entries[0].endswith(CORRUPT_EXTENSION)
    assert s.list() == []


def test_extension_gets_dot(tmp_path):
    s = FileStore(tmp_path, "p", "ext")
    s.put(4, PUBLISH, b"data")
    assert os.listdir(tmp_path) == ["p4.ext"]
    with s.get(4) as stream:
        assert stream.read() == b"data"


def test_missing_folder_raises(tmp_path):
    with pytest.raises(FileStoreError, match="stat on folder failed"):
        FileStore(tmp_path / "missing", "p", ".ext")


def test_invalid_id_in_filename(tmp_path):
    s = FileStore(tmp_path, "p", ".ext")
    (tmp_path / "pabc.ext").write_bytes(b"x")
    with pytest.raises(FileStoreError, match="invalid id"):
        s.list()


def test_other_files_are_ignored(tmp_path):
    s = FileStore(tmp_path, "p", ".ext")
    (tmp_path / "other.txt").write_bytes(b"x")
    (tmp_path / "sub").mkdir()
    s.put(9, PUBLISH, b"nine")
    assert s.list() == [9]


def test_put_overwrites(tmp_path):
    s = FileStore(tmp_path, "p", ".ext")
    s.put(3, PUBLISH, b"first")
    s.put(3, PUBLISH, b"second")
    with s.get(3) as stream:
        assert stream.read() == b"second"
    assert s.list() == [3]


def test_failed_write_leaves_no_file(tmp_path):
    class Broken:
        def write_to(self, stream):
            raise OSError("boom")

    s = FileStore(tmp_path, "p", ".ext")
    with pytest.raises(FileStoreError, match="failed to write packet"):
        s.put(1, PUBLISH, Broken())
    assert os.listdir(tmp_path) == []


def test_delete_missing_raises(tmp_path):
    s = FileStore(tmp_path, "p", ".ext")
    with pytest.raises(FileStoreError, match="failed to remove packet file"):
        s.delete(12)


def test_quarantine_missing_raises(tmp_path):
    s = FileStore(tmp_path, "p", ".ext")
    with pytest.raises(FileStoreError, match="quarantine"):
        s.quarantine(12)


def test_str(tmp_path):
    s = FileStore(tmp_path, "pre", "ext")
    assert str(s) == f"store path: {tmp_path}, prefix: pre, extension: .ext"