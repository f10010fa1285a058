"""In-memory transports: a byte counter and a read-only buffer."""

from __future__ import annotations

_MAX_UINT64 = (1 << 64) - 1


class CalcTransport:
    """Counts the bytes written to it, used to size serialized metrics."""

    def __init__(self) -> None:
        self.count = 0
        self.closed = False

    @property
    def is_open(self) -> bool:
        """Always true: no connection is held."""
        return True

    def write(self, data: bytes) -> int:
        """Add len(data) to the count and return it."""
        self.count += len(data)
        return len(data)

    def write_byte(self, value: int) -> None:
        """Add one byte to the count."""
        self.count += 1

    def write_string(self, text: str) -> int:
        """Add the UTF-8 length of text to the count and return it."""
        size = len(text.encode("utf-8"))
        self.count += size
        return size

    def read(self, size: int) -> bytes:
        """Reading yields nothing; this transport only counts."""
        if size < 0:
            raise ValueError("size must not be negative")
        return bytes(0)

    def read_byte(self) -> int:
        return 0

    def remaining_bytes(self) -> int:
        """Unknown remaining size, reported as the largest 64-bit value."""
        return _MAX_UINT64

    def reset_count(self) -> None:
        self.count = 0

    def open(self) -> CalcTransport:
        """Mark the transport as in use and return it."""
        self.closed = False
        return self

    def close(self) -> None:
        """Mark the transport as no longer in use."""
        self.closed = True

    def flush(self) -> int:
        """Nothing is sent; return the number of bytes counted so far."""
        return self.count

    def __enter__(self) -> CalcTransport:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class BufferedReadTransport:
    """A transport reading from an in-memory byte buffer."""

    def __init__(self, buffer: bytes = b"") -> None:
        self._data = bytes(buffer)
        self._pos = 0
        self.closed = False

    @property
    def is_open(self) -> bool:
        """Always true: no connection is held."""
        return True

    def read(self, size: int) -> bytes:
        """Read up to size bytes; raise EOFError if the buffer is drained."""
        if size <= 0:
            return b""
        if self._pos >= len(self._data):
            raise EOFError("buffer exhausted")
        chunk = self._data[self._pos:self._pos + size]
        self._pos += len(chunk)
        return chunk

    def remaining_bytes(self) -> int:
        return len(self._data) - self._pos

    def write(self, data: bytes) -> int:
        """Replace the buffer contents with data."""
        self._data = bytes(data)
        self._pos = 0
        return len(data)

    def open(self) -> BufferedReadTransport:
        """Mark the transport as in use and return it."""
        self.closed = False
        return self

    def close(self) -> None:
        """Mark the transport as no longer in use."""
        self.closed = True

    def flush(self) -> int:
        """Nothing is written back; return the bytes still unread."""
        return self.remaining_bytes()

    def __enter__(self) -> BufferedReadTransport:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()