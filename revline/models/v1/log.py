"""Log API models."""

import re
from typing import List
from pydantic import BaseModel, Field, field_validator


# Log name pattern: a plain file name inside the logs directory, no path parts
LOG_NAME_PATTERN = re.compile(r'^[A-Za-z0-9][A-Za-z0-9._-]{0,254}$')


def validate_log_name(name: str) -> str:
    """Raise ValueError unless ``name`` is a bare, safe file name."""
    if not LOG_NAME_PATTERN.match(name):
        raise ValueError(
            f"Invalid log name '{name}'. Must start with a letter or digit "
            "and contain only alphanumeric characters, dots, hyphens, or underscores."
        )
    return name


class LogFileInfo(BaseModel):
    """A drainable log file."""

    name: str
    size: int = Field(description="Current file size in bytes")


class LogListResponse(BaseModel):
    """Response model for listing log files."""

    logs: List[LogFileInfo]


class TailResponse(BaseModel):
    """Lines read from the end of a log, newest first. The file is unchanged."""

    name: str
    lines: List[str]
    count: int


class PopRequest(BaseModel):
    """Request model for popping lines off the end of a log."""

    count: int = Field(default=1, ge=1, description="Maximum number of lines to pop")


class PopResponse(BaseModel):
    """Lines removed from the end of a log, newest first."""

    name: str
    lines: List[str]
    count: int
    remaining_bytes: int = Field(description="File size after truncation")


class AppendRequest(BaseModel):
    """Request model for appending lines to a log."""

    lines: List[str] = Field(min_length=1, description="Lines to append, oldest first")

    @field_validator('lines')
    @classmethod
    def validate_lines(cls, v):
        """Lines are newline-delimited on disk and a trailing CR is stripped on read."""
        for line in v:
            if "\n" in line or line.endswith("\r"):
                raise ValueError("Lines must not contain '\\n' or end with '\\r'")
        return v


class AppendResponse(BaseModel):
    """Response model after appending lines."""

    name: str
    appended: int
    size: int = Field(description="File size after the append")
