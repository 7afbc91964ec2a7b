"""Utilities package."""

from .logger import get_app_logger, get_logger, setup_logger, init_app_logger
from .file_reader import reverse_readline, read_last_n_lines, pop_lines

__all__ = [
    "get_app_logger",
    "get_logger",
    "setup_logger",
    "init_app_logger",
    "reverse_readline",
    "read_last_n_lines",
    "pop_lines"
]
