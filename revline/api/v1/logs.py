"""Log REST API routes - V1"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query

from ...models.v1.log import (
    LogListResponse,
    TailResponse,
    PopRequest,
    PopResponse,
    AppendRequest,
    AppendResponse
)
from ...services.log_manager import LogManager
from ...exceptions import TruncateError
from ...config import settings

router = APIRouter(prefix="/api/v1", tags=["logs-v1"])

# Global log manager instance (will be set by main.py)
log_manager: LogManager = None


def get_log_manager() -> LogManager:
    """Dependency to get log manager instance."""
    if log_manager is None:
        raise HTTPException(status_code=500, detail="Log manager not initialized")
    return log_manager


def _check_line_limit(lines: int) -> None:
    if lines > settings.max_tail_lines:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_tail_lines} lines per request"
        )


@router.get("/logs", response_model=LogListResponse)
async def list_logs(manager: LogManager = Depends(get_log_manager)):
    """
    List all log files.

    Returns:
        Log names with their sizes
    """
    return LogListResponse(logs=manager.list_logs())


@router.get("/logs/{name}/tail", response_model=TailResponse)
async def tail_log(
    name: str,
    lines: Optional[int] = Query(default=None, ge=1, description="Number of lines"),
    manager: LogManager = Depends(get_log_manager)
):
    """
    Read the last lines of a log, newest first. The file is left unchanged.

    Raises:
        HTTPException: If the name is invalid or the log does not exist
    """
    if lines is None:
        lines = settings.default_tail_lines
    _check_line_limit(lines)

    try:
        result = await manager.tail(name, lines)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return TailResponse(name=name, lines=result, count=len(result))


@router.post("/logs/{name}/pop", response_model=PopResponse)
async def pop_log(
    name: str,
    request: PopRequest,
    manager: LogManager = Depends(get_log_manager)
):
    """
    Remove lines from the end of a log and return them, newest first.

    Raises:
        HTTPException: If the log does not exist or can not be truncated
    """
    _check_line_limit(request.count)

    try:
        popped, remaining = await manager.pop(name, request.count)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TruncateError as e:
        raise HTTPException(status_code=500, detail=f"Failed to truncate log: {str(e)}")

    return PopResponse(
        name=name,
        lines=popped,
        count=len(popped),
        remaining_bytes=remaining
    )


@router.post("/logs/{name}/lines", response_model=AppendResponse, status_code=201)
async def append_log(
    name: str,
    request: AppendRequest,
    manager: LogManager = Depends(get_log_manager)
):
    """
    Append lines to a log, creating it if needed.

    Raises:
        HTTPException: If the name is invalid or the write fails
    """
    try:
        size = await manager.append(name, request.lines)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Failed to append to log: {str(e)}")

    return AppendResponse(name=name, appended=len(request.lines), size=size)
