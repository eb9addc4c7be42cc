"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before anything imports ``user_admin`` so the
settings object is built for an in-memory database.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("DATABASE_ECHO", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from user_admin.adapters.rate_limit.in_memory import InMemoryRequestCounter  # noqa: E402
from user_admin.core.app_factory import create_app  # noqa: E402


@pytest.fixture
def clock() -> Mock:
    return Mock(return_value=1000.0)


@pytest.fixture
def counter(clock: Mock) -> InMemoryRequestCounter:
    return InMemoryRequestCounter(reset_interval_seconds=24 * 60 * 60, clock=clock)


@pytest.fixture
def app(counter: InMemoryRequestCounter) -> FastAPI:
    return create_app(request_counter=counter)


@pytest.fixture
def client(app: FastAPI):
    """Test client with the lifespan running (fresh in-memory database)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def ann() -> dict:
    return {"name": "Ann", "email": "ann@x.com", "age": 30}
