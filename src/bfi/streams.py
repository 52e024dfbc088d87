from __future__ import annotations

from typing import BinaryIO, Optional, Protocol


class ByteSource(Protocol):
    def read_byte(self) -> Optional[int]:
        """Next input byte, or None once the source is exhausted."""
        ...


class ByteSink(Protocol):
    def write_byte(self, value: int) -> None:
        ...


class BytesSource:
    def __init__(self, data: bytes | str = b''):
        if isinstance(data, str):
            data = data.encode('utf-8')
        self._data = bytes(data)
        self._pos = 0

    def read_byte(self) -> Optional[int]:
        if self._pos >= len(self._data):
            return None
        value = self._data[self._pos]
        self._pos += 1
        return value


class StreamSource:
    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def read_byte(self) -> Optional[int]:
        chunk = self._stream.read(1)
        return chunk[0] if chunk else None


class BufferSink:
    def __init__(self):
        self.buffer = bytearray()

    def write_byte(self, value: int) -> None:
        self.buffer.append(value)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)


class StreamSink:
    def __init__(self, stream: BinaryIO, *, flush: bool = True):
        self._stream = stream
        self._flush = flush

    def write_byte(self, value: int) -> None:
        self._stream.write(bytes((value,)))
        if self._flush:
            self._stream.flush()
