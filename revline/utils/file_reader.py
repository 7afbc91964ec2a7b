"""File reading utilities built on ReverseLineReader."""

from pathlib import Path
from typing import AsyncIterator, List, Optional, Union

from ..core.reverse_reader import DEFAULT_CHUNK_SIZE, ReverseLineReader

Line = Union[bytes, str]


def _decode(line: bytes, encoding: Optional[str]) -> Line:
    if encoding is None:
        return line
    return line.decode(encoding, errors="replace")


async def reverse_readline(
    file_path: Union[str, Path],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    encoding: Optional[str] = None,
    skip_empty: bool = False
) -> AsyncIterator[Line]:
    """
    Read a file line by line in reverse order (from end to beginning).

    Memory efficient - only holds chunk_size bytes plus the current line.
    The file is opened read-only and left unchanged.

    Args:
        file_path: Path to the file
        chunk_size: Size of each backward read (default 8KB)
        encoding: Decode lines with this encoding; bytes are yielded if None
        skip_empty: Do not yield empty lines

    Yields:
        Lines from the file in reverse order (newest first)
    """
    file_path = Path(file_path)

    if not file_path.exists():
        return

    reader = await ReverseLineReader.open(file_path, chunk_size, writable=False)
    async with reader:
        async for line in reader:
            if skip_empty and not line:
                continue
            yield _decode(line, encoding)


async def read_last_n_lines(
    file_path: Union[str, Path],
    n: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    reverse: bool = True,
    encoding: Optional[str] = None
) -> List[Line]:
    """
    Read the last N lines from a file efficiently.

    Args:
        file_path: Path to the file
        n: Number of lines to read
        chunk_size: Size of each backward read
        reverse: If True, return newest first; if False, return oldest first
        encoding: Decode lines with this encoding; bytes are returned if None

    Returns:
        List of last N lines
    """
    lines: List[Line] = []
    if n <= 0:
        return lines

    file_path = Path(file_path)
    if not file_path.exists():
        return lines

    reader = await ReverseLineReader.open(file_path, chunk_size, writable=False)
    async with reader:
        while len(lines) < n:
            line = await reader.read_rev_line()
            if line is None:
                break
            lines.append(_decode(line, encoding))

    if not reverse:
        lines.reverse()

    return lines


async def pop_lines(
    file_path: Union[str, Path],
    n: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    encoding: Optional[str] = None
) -> List[Line]:
    """
    Remove up to N lines from the end of a file and return them.

    The file is truncated right behind the last popped line, so appending
    and popping turns it into a LIFO queue.

    Args:
        file_path: Path to the file
        n: Maximum number of lines to pop
        chunk_size: Size of each backward read
        encoding: Decode lines with this encoding; bytes are returned if None

    Returns:
        Popped lines, newest first

    Raises:
        FileNotFoundError: If the file does not exist
        TruncateError: If the file could not be shortened
    """
    lines: List[Line] = []

    reader = await ReverseLineReader.open(file_path, chunk_size)
    async with reader:
        while len(lines) < n:
            line = await reader.read_rev_line()
            if line is None:
                break
            lines.append(_decode(line, encoding))

        if lines:
            await reader.truncate()

    return lines
