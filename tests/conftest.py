"""
Test configuration and fixtures for the Accessibility Checker API.

The database URL must be set before anything under app/ is imported, because
settings and the engine are created at import time.
"""

import os
import tempfile
from typing import Generator

from dotenv import load_dotenv

import pytest
from fastapi.testclient import TestClient

load_dotenv()

test_db_url = os.getenv("TEST_DATABASE_URL")
if test_db_url:
    if "postgresql://" in test_db_url and "asyncpg" not in test_db_url:
        test_db_url = test_db_url.replace("postgresql://", "postgresql+asyncpg://")
    os.environ["DATABASE_URL"] = test_db_url
else:
    test_db_path = os.path.join(tempfile.mkdtemp(), "accessibility_checks_test.db")
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Test client that runs the app lifespan, so tables exist before the
    first request.
    """
    with TestClient(test_app) as test_client:
        yield test_client
