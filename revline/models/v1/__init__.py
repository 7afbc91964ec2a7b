"""V1 API models."""

from .log import (
    LOG_NAME_PATTERN,
    validate_log_name,
    LogFileInfo,
    LogListResponse,
    TailResponse,
    PopRequest,
    PopResponse,
    AppendRequest,
    AppendResponse
)

__all__ = [
    "LOG_NAME_PATTERN",
    "validate_log_name",
    "LogFileInfo",
    "LogListResponse",
    "TailResponse",
    "PopRequest",
    "PopResponse",
    "AppendRequest",
    "AppendResponse",
]
