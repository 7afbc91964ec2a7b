"""Index-based window over an immutable byte buffer."""

from typing import Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]


class ByteView:
    """
    A half-open ``[start, end)`` window over a ``bytes`` buffer.

    Narrowing only moves the window bounds, the buffer itself is never
    copied or modified. Several views may window the same buffer; it stays
    alive for as long as any of them does.
    """

    __slots__ = ("_buffer", "_start", "_end")

    def __init__(self, buffer: bytes, start: int = 0, end: Optional[int] = None):
        if end is None:
            end = len(buffer)
        assert 0 <= start <= end <= len(buffer), (
            f"window [{start}, {end}) out of bounds for buffer of {len(buffer)} bytes"
        )
        self._buffer = buffer
        self._start = start
        self._end = end

    @classmethod
    def from_owned(cls, data: BytesLike) -> "ByteView":
        """
        Wrap a whole buffer as the initial window.

        ``bytes`` input is taken as is; other bytes-like objects are frozen
        into ``bytes`` first.
        """
        if not isinstance(data, bytes):
            data = bytes(data)
        return cls(data)

    def _bounds(self, start: int, stop: Optional[int]):
        if stop is None:
            stop = len(self)
        assert 0 <= start <= stop <= len(self), (
            f"range [{start}, {stop}) out of bounds for window of {len(self)} bytes"
        )
        return self._start + start, self._start + stop

    def narrow(self, start: int, stop: Optional[int] = None) -> "ByteView":
        """
        Shrink the window in place to ``[start, stop)``.

        Offsets are relative to the current window. Returns ``self``.
        """
        self._start, self._end = self._bounds(start, stop)
        return self

    def clone_narrowed(self, start: int, stop: Optional[int] = None) -> "ByteView":
        """Return a new view over ``[start, stop)`` sharing this view's buffer."""
        new_start, new_end = self._bounds(start, stop)
        return ByteView(self._buffer, new_start, new_end)

    def rfind(self, byte: int) -> int:
        """Window-relative index of the last ``byte`` in the window, or -1."""
        index = self._buffer.rfind(byte, self._start, self._end)
        if index == -1:
            return -1
        return index - self._start

    def as_memoryview(self) -> memoryview:
        """Read-only, zero-copy view of the window."""
        return memoryview(self._buffer)[self._start:self._end]

    def __len__(self) -> int:
        return self._end - self._start

    def __bytes__(self) -> bytes:
        return self._buffer[self._start:self._end]

    def __getitem__(self, index: int) -> int:
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("ByteView index out of range")
        return self._buffer[self._start + index]

    def __eq__(self, other) -> bool:
        if isinstance(other, ByteView):
            return self.as_memoryview() == other.as_memoryview()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.as_memoryview() == other
        return NotImplemented

    # Windows move, so views are not hashable.
    __hash__ = None

    def __repr__(self) -> str:
        data = bytes(self)
        return (
            f"ByteView(view={data!r}, "
            f"text={data.decode('utf-8', errors='replace')!r})"
        )
