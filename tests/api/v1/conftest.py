"""Pytest fixtures for API testing."""

import pytest
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI

from revline.api.v1 import logs
from revline.services.log_manager import LogManager


@pytest.fixture(scope="function")
def log_manager(tmp_path):
    """Log manager over a fresh logs directory."""
    return LogManager(str(tmp_path / "logs"), chunk_size=8)


@pytest.fixture(scope="function")
async def client(log_manager):
    """Create async HTTP client with a fresh logs directory for each test."""
    logs.log_manager = log_manager

    # Create a test app without lifespan (to avoid conflicts)
    test_app = FastAPI(title="revline test")
    test_app.include_router(logs.router)

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    logs.log_manager = None
