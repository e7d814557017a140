import io

import pytest

from mqttkit.memorystore import MemoryStore, NotInStoreError, Storer


class FakePacket:
    def __init__(self, packet_id, payload):
        self.packet_id = packet_id
        self.payload = payload

    def write_to(self, stream):
        stream.write(self.packet_id.to_bytes(2, "big") + self.payload)


def decode(stream):
    data = stream.read()
    return int.from_bytes(data[:2], "big"), data[2:]


PUBLISH = 3


def test_memory_store_basics():
    s = MemoryStore()
    ids = [65535, 2, 10, 32300, 5890]
    for pid in ids:
        s.put(pid, PUBLISH, FakePacket(pid, str(pid).encode()))

    s.delete(ids[2])

    with pytest.raises(NotInStoreError):
        s.get(8)
    with pytest.raises(NotInStoreError):
        s.get(ids[2])
    ids = ids[:2] + ids[3:]

    with s.get(32300) as stream:
        pid, payload = decode(stream)
    assert pid == 32300
    assert payload == b"32300"

    assert s.list() == ids

    s.reset()
    assert s.list() == []


def test_memory_store_big():
    s = MemoryStore()
    for pid in range(1, 65536):
        s.put(pid, PUBLISH, FakePacket(pid, str(pid).encode()))

    for pid in range(1, 65536):
        got_id, payload = decode(s.get(pid))
        assert got_id == pid
        assert payload == str(pid).encode()

    for pid in range(1, 65536):
        s.delete(pid)
    assert s.list() == []


def test_put_accepts_bytes():
    s = MemoryStore()
    s.put(7, PUBLISH, b"raw bytes")
    assert s.get(7).read() == b"raw bytes"


def test_put_again_moves_to_end():
    s = MemoryStore()
    s.put(1, PUBLISH, b"a")
    s.put(2, PUBLISH, b"b")
    s.put(1, PUBLISH, b"c")
    assert s.list() == [2, 1]
    assert s.get(1).read() == b"c"


def test_delete_missing_raises():
    s = MemoryStore()
    with pytest.raises(NotInStoreError, match="packet 4"):
        s.delete(4)


def test_quarantine_removes_packet():
    s = MemoryStore()
    s.put(5, PUBLISH, b"corrupt")
    s.quarantine(5)
    assert s.list() == []
    with pytest.raises(NotInStoreError):
        s.get(5)


def test_write_failure_propagates():
    class Broken:
        def write_to(self, stream):
            raise OSError("boom")

    s = MemoryStore()
    with pytest.raises(OSError, match="boom"):
        s.put(1, PUBLISH, Broken())
    assert s.list() == []


def test_memory_store_is_a_storer():
    s = MemoryStore()
    s.put(1, PUBLISH, io.BytesIO(b"x").getvalue())
    assert isinstance(s, Storer)
    assert len(s) == 1