"""Input sources and output sinks the interpreter reads from and writes to."""

from __future__ import annotations

from typing import BinaryIO, Callable, Optional, Protocol, Union


class InputSource(Protocol):
    def next_bytes(self) -> Optional[bytes]:
        """Return the next chunk of input, or None once input is exhausted."""
        ...


class OutputSink(Protocol):
    def accept(self, byte: int) -> None:
        ...


class NullInput:
    """Input that is always exhausted."""

    def next_bytes(self) -> Optional[bytes]:
        return None


class BytesInput:
    """A finite in-memory input, delivered as a single chunk."""

    def __init__(self, data: Union[bytes, bytearray, str] = b""):
        if isinstance(data, str):
            data = data.encode("latin-1")
        self._data: Optional[bytes] = bytes(data)

    def next_bytes(self) -> Optional[bytes]:
        data, self._data = self._data, None
        return data or None


class StreamInput:
    """Reads line-sized chunks from a binary stream such as ``sys.stdin.buffer``."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def next_bytes(self) -> Optional[bytes]:
        chunk = self.stream.readline()
        return chunk or None


class CallbackInput:
    """Adapts a zero-argument callable returning bytes (or None) to an input source."""

    def __init__(self, func: Callable[[], Optional[bytes]]):
        self.func = func

    def next_bytes(self) -> Optional[bytes]:
        return self.func()


class BufferOutput:
    def __init__(self):
        self.data = bytearray()

    def accept(self, byte: int) -> None:
        self.data.append(byte)

    def getvalue(self) -> bytes:
        return bytes(self.data)


class StreamOutput:
    """Writes each byte to a binary stream, flushing on newline."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def accept(self, byte: int) -> None:
        self.stream.write(bytes((byte,)))
        if byte == 0x0A:
            self.stream.flush()

    def close(self) -> None:
        self.stream.flush()


def as_input(data: Union[None, bytes, bytearray, str, InputSource]) -> InputSource:
    if data is None:
        return NullInput()
    if isinstance(data, (bytes, bytearray, str)):
        return BytesInput(data)
    return data
