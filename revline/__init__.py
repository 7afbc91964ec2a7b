"""Read files line by line from the end, and drain them as LIFO logs."""

from .core import DEFAULT_CHUNK_SIZE, ByteView, ReverseLineReader
from .exceptions import (
    InvalidChunkSizeError,
    ReaderClosedError,
    RevlineError,
    ShortReadError,
    TruncateError,
)

__version__ = "1.0.0"

__all__ = [
    "ByteView",
    "ReverseLineReader",
    "DEFAULT_CHUNK_SIZE",
    "RevlineError",
    "InvalidChunkSizeError",
    "ReaderClosedError",
    "ShortReadError",
    "TruncateError",
]
