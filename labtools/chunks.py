"""Wire format of the data chunks and acknowledgements of the chunked UDP transfer."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass

__all__ = ["DataChunk", "Ack", "decode_chunk", "decode_ack", "split_message", "now_ms"]

DATA_FIELD_SIZE = 20
CHUNK_SIZE = 10

# data[20], int number, 4 bytes padding, long time
_CHUNK_STRUCT = struct.Struct("<20si4xq")
# int acknumber, 4 bytes padding, long time
_ACK_STRUCT = struct.Struct("<i4xq")


@dataclass
class DataChunk:
    """A numbered piece of a message, stamped with its send time in milliseconds."""

    data: str
    number: int
    time: int = 0

    def pack(self) -> bytes:
        """Encode the chunk as it travels on the wire."""
        raw = self.data.encode("utf-8")
        if len(raw) >= DATA_FIELD_SIZE:
            raise ValueError(
                f"chunk data is {len(raw)} bytes; at most {DATA_FIELD_SIZE - 1} fit"
            )
        return _CHUNK_STRUCT.pack(raw, self.number, self.time)


@dataclass
class Ack:
    """Acknowledgement of chunk ``number``, stamped with its send time in milliseconds."""

    number: int
    time: int = 0

    def pack(self) -> bytes:
        """Encode the acknowledgement as it travels on the wire."""
        return _ACK_STRUCT.pack(self.number, self.time)


def decode_chunk(data: bytes) -> DataChunk:
    """Decode a chunk from its wire form."""
    if len(data) != _CHUNK_STRUCT.size:
        raise ValueError(f"chunk must be {_CHUNK_STRUCT.size} bytes, got {len(data)}")
    raw, number, stamp = _CHUNK_STRUCT.unpack(data)
    text = raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")
    return DataChunk(text, number, stamp)


def decode_ack(data: bytes) -> Ack:
    """Decode an acknowledgement from its wire form."""
    if len(data) != _ACK_STRUCT.size:
        raise ValueError(f"ack must be {_ACK_STRUCT.size} bytes, got {len(data)}")
    number, stamp = _ACK_STRUCT.unpack(data)
    return Ack(number, stamp)


def split_message(text: str, size: int = CHUNK_SIZE) -> list[DataChunk]:
    """Cut ``text`` into ``len(text) // size + 1`` numbered chunks of ``size`` characters.

    When the length is a multiple of ``size`` the last chunk is empty.
    """
    if size <= 0:
        raise ValueError("chunk size must be positive")
    count = len(text) // size + 1
    return [DataChunk(text[i * size:(i + 1) * size], i) for i in range(count)]


def now_ms() -> int:
    """Return the wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000