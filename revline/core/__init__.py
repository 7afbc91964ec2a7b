"""Reverse line reading core."""

from .byte_view import ByteView
from .reverse_reader import DEFAULT_CHUNK_SIZE, ReverseLineReader

__all__ = ["ByteView", "ReverseLineReader", "DEFAULT_CHUNK_SIZE"]
