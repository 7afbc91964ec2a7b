"""Drainable log file service.

Log files live flat in one directory:
  {logs_base_dir}/{name}

Each file is touched by at most one reader at a time; access is serialised
with a per-file asyncio.Lock.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, List, Tuple

import aiofiles

from ..core.reverse_reader import DEFAULT_CHUNK_SIZE, validate_chunk_size
from ..models.v1.log import LogFileInfo, validate_log_name
from ..utils.file_reader import pop_lines, read_last_n_lines

logger = logging.getLogger(__name__)


class LogManager:
    """Tail, pop and append lines of log files under one directory."""

    def __init__(
        self,
        base_dir: str = "./data/logs",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = "utf-8"
    ):
        self.base_dir = Path(base_dir).resolve()
        self.chunk_size = validate_chunk_size(chunk_size)
        self.encoding = encoding
        # path -> (lock, number of tasks holding or waiting on it)
        self._locks: Dict[str, Tuple[asyncio.Lock, int]] = {}
        self.base_dir.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def _locked(self, path: Path):
        """Hold the per-file lock; it is dropped once no task uses it."""
        key = str(path)
        lock, users = self._locks.get(key, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[key]
            if users == 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, users - 1)

    def get_path(self, name: str) -> Path:
        """
        Map a log name to its file path.

        Raises:
            ValueError: If the name is not a bare file name inside base_dir
        """
        validate_log_name(name)
        path = (self.base_dir / name).resolve()
        if path.parent != self.base_dir:
            raise ValueError(f"Invalid log name '{name}'")
        return path

    def _existing_path(self, name: str) -> Path:
        path = self.get_path(name)
        if not path.is_file():
            raise FileNotFoundError(f"Log not found: {name}")
        return path

    def list_logs(self) -> List[LogFileInfo]:
        """List log files, sorted by name."""
        logs = []
        for entry in sorted(self.base_dir.iterdir()):
            if entry.is_file():
                logs.append(LogFileInfo(name=entry.name, size=entry.stat().st_size))
        return logs

    async def tail(self, name: str, lines: int) -> List[str]:
        """
        Read the last lines of a log without changing it.

        Returns:
            Lines, newest first

        Raises:
            ValueError: Invalid name
            FileNotFoundError: Log does not exist
        """
        path = self._existing_path(name)
        async with self._locked(path):
            return await read_last_n_lines(
                path, lines, self.chunk_size, encoding=self.encoding
            )

    async def pop(self, name: str, count: int) -> Tuple[List[str], int]:
        """
        Remove up to ``count`` lines from the end of a log.

        Returns:
            (popped lines newest first, remaining file size)

        Raises:
            ValueError: Invalid name
            FileNotFoundError: Log does not exist
            TruncateError: The file could not be shortened
        """
        path = self._existing_path(name)
        async with self._locked(path):
            popped = await pop_lines(path, count, self.chunk_size, encoding=self.encoding)
            remaining = os.path.getsize(path)

        logger.info(f"[LogManager] popped {len(popped)} line(s) from {name}, {remaining} bytes left")
        return popped, remaining

    async def append(self, name: str, lines: List[str]) -> int:
        """
        Append lines to a log, creating it if needed.

        A separator is written first when the file does not end with a
        terminator, as with files written by hand.

        Returns:
            File size after the append
        """
        path = self.get_path(name)
        payload = "".join(f"{line}\n" for line in lines).encode(self.encoding)

        async with self._locked(path):
            async with aiofiles.open(path, mode="ab+") as f:
                size = await f.tell()
                if size > 0:
                    await f.seek(size - 1)
                    if await f.read(1) != b"\n":
                        payload = b"\n" + payload
                await f.write(payload)
            size = os.path.getsize(path)

        logger.info(f"[LogManager] appended {len(lines)} line(s) to {name}")
        return size
