"""Reverse line reader: yields a file's lines from the last one to the first."""

import logging
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import aiofiles

from ..exceptions import (
    InvalidChunkSizeError,
    ReaderClosedError,
    ShortReadError,
    TruncateError,
)
from .byte_view import ByteView

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192

NEWLINE = 0x0A
CARRIAGE_RETURN = 0x0D


def validate_chunk_size(chunk_size: Any) -> int:
    """Return ``chunk_size`` if it is a positive int, raise otherwise."""
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise InvalidChunkSizeError(chunk_size)
    return chunk_size


def trim_terminators(line: bytes) -> bytes:
    """Drop one leading ``\\n`` and one trailing ``\\r``, if present."""
    if line[:1] == b"\n":
        line = line[1:]
    if line[-1:] == b"\r":
        line = line[:-1]
    return line


class ReverseLineReader:
    """
    Read lines backward from the end of a seekable async file.

    The file is read in fixed-size chunks from its tail toward its head.
    Bytes read past the start of the line being returned are kept as a
    remainder and scanned again on the next call, so nothing is read twice
    from disk.

    Only one ``read_rev_line`` call may be in flight at a time. The reader
    takes no locks.
    """

    def __init__(self, handle, length: int, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Bind a reader to an already-open async binary file.

        Args:
            handle: aiofiles binary file (anything with async seek/read/truncate)
            length: File length; reading starts from this offset
            chunk_size: Number of bytes requested per read
        """
        self._chunk_size = validate_chunk_size(chunk_size)
        if length < 0:
            raise ValueError(f"length must not be negative, got {length}")

        self._handle = handle
        self._cursor = length
        self._remainder: Optional[ByteView] = None
        # A terminator as the file's last byte ends the last line
        self._at_file_end = length > 0

    @classmethod
    async def open(
        cls,
        path: Union[str, Path],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        *,
        writable: bool = True,
    ) -> "ReverseLineReader":
        """
        Open ``path`` and return a reader positioned at its end.

        The file is opened ``r+b`` so that it can be truncated; it is never
        truncated on open. Pass ``writable=False`` to only tail the file.

        Raises:
            InvalidChunkSizeError: chunk_size is not a positive int
            OSError: the file can not be opened
        """
        validate_chunk_size(chunk_size)

        handle = await aiofiles.open(path, mode="r+b" if writable else "rb")
        try:
            length = await handle.seek(0, os.SEEK_END)
        except BaseException:
            await handle.close()
            raise

        logger.info(f"[ReverseLineReader] opened {path} ({length} bytes, chunk_size={chunk_size})")
        return cls(handle, length, chunk_size)

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def cursor(self) -> int:
        """Offset of the start of the region not read from the file yet."""
        return self._cursor

    @property
    def position(self) -> int:
        """
        Consumed-through offset.

        Every byte from here to the end of the file has been returned to
        the caller, so the file can safely be truncated to this length.
        """
        if self._remainder is None:
            return self._cursor
        return self._cursor + len(self._remainder)

    @property
    def closed(self) -> bool:
        return self._handle is None

    def _require_handle(self):
        if self._handle is None:
            raise ReaderClosedError("Reader has been closed or released its file handle")
        return self._handle

    async def _read_at(self, handle, offset: int, size: int) -> bytes:
        await handle.seek(offset)
        data = await handle.read(size)
        if len(data) != size:
            raise ShortReadError(offset, size, len(data))
        logger.debug(f"[ReverseLineReader] read {size} bytes at offset {offset}")
        return data

    async def read_rev_line(self) -> Optional[bytes]:
        """
        Return the next line walking backward, or ``None`` at the start of file.

        The returned bytes exclude the ``\\n`` terminator and a ``\\r``
        preceding it. State is only updated once every read of the call has
        completed, so a call that raises can simply be retried.
        """
        handle = self._require_handle()

        cursor = self._cursor
        remainder = self._remainder
        at_file_end = self._at_file_end

        if cursor == 0 and remainder is None:
            return None

        fragments: List[ByteView] = []
        tail: Optional[ByteView] = None

        while True:
            if remainder is not None:
                view = remainder.clone_narrowed(0)
                remainder = None
            elif cursor == 0:
                break
            else:
                new_cursor = max(0, cursor - self._chunk_size)
                view = ByteView.from_owned(
                    await self._read_at(handle, new_cursor, cursor - new_cursor)
                )
                cursor = new_cursor

            if at_file_end:
                at_file_end = False
                if len(view) and view[-1] == NEWLINE:
                    view.narrow(0, len(view) - 1)

            pos = view.rfind(NEWLINE)
            if pos == -1:
                fragments.append(view)
                continue

            tail = view.clone_narrowed(pos + 1)
            remainder = view.narrow(0, pos)
            break

        # Fragments were collected walking backward; the tail sits left of all of them
        fragments.reverse()
        if tail is not None:
            fragments.insert(0, tail)
        line = b"".join(piece.as_memoryview() for piece in fragments)

        self._cursor = cursor
        self._remainder = remainder
        self._at_file_end = at_file_end

        return trim_terminators(line)

    async def truncate(self) -> int:
        """
        Cut the file down to the consumed-through offset.

        When a remainder is pending, the byte at ``position`` is the
        terminator of the last unread line and is kept, so that line is not
        mistaken for an end-of-file terminator by the next reader.

        Returns:
            The new file length

        Raises:
            TruncateError: the underlying truncate call failed
        """
        handle = self._require_handle()
        size = self.position
        if self._remainder is not None:
            size += 1
        try:
            await handle.truncate(size)
        except OSError as e:
            raise TruncateError(f"Failed to truncate file to {size} bytes: {e}") from e

        logger.info(f"[ReverseLineReader] truncated file to {size} bytes")
        return size

    def into_inner(self):
        """Hand the file handle back to the caller and detach it from the reader."""
        handle = self._require_handle()
        self._handle = None
        self._remainder = None
        return handle

    async def close(self) -> None:
        if self._handle is None:
            return
        handle = self.into_inner()
        await handle.close()

    async def __aenter__(self) -> "ReverseLineReader":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def __aiter__(self) -> "ReverseLineReader":
        return self

    async def __anext__(self) -> bytes:
        line = await self.read_rev_line()
        if line is None:
            raise StopAsyncIteration
        return line

    def __repr__(self) -> str:
        return (
            f"ReverseLineReader(cursor={self._cursor}, position={self.position}, "
            f"chunk_size={self._chunk_size}, closed={self.closed})"
        )
