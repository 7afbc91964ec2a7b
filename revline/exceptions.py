"""Exceptions raised by revline."""


class RevlineError(Exception):
    """Base class for all revline errors."""


class InvalidChunkSizeError(RevlineError, ValueError):
    """Chunk size is not a strictly positive integer."""

    def __init__(self, chunk_size):
        self.chunk_size = chunk_size
        super().__init__(f"chunk_size must be a positive integer, got {chunk_size!r}")


class ReaderClosedError(RevlineError):
    """The reader no longer owns a file handle."""


class ShortReadError(RevlineError, OSError):
    """A positioned read returned fewer bytes than requested.

    Happens when the file shrinks underneath the reader.
    """

    def __init__(self, offset: int, expected: int, actual: int):
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} bytes at offset {offset}, got {actual}"
        )


class TruncateError(RevlineError, OSError):
    """Setting the file length to the consumed-through offset failed."""
