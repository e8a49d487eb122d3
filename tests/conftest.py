"""Shared pytest fixtures for segment-router tests."""

from collections.abc import Mapping
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from segment_router import Router, Settings, create_app, create_router


@pytest.fixture
def echo_handler():
    """Return a handler that echoes its bound params and records each call."""
    calls: list[dict[str, str]] = []

    def echo(params: Mapping[str, str]) -> dict[str, Any]:
        calls.append(dict(params))
        return {"params": dict(params)}

    echo.calls = calls  # type: ignore[attr-defined]
    return echo


@pytest.fixture
def make_handler():
    """Create a handler that returns a fixed body tagged with a name.

    Returns a callable that accepts:
    - name: Value placed under "handler" in the returned body
    """

    def _create(name: str):
        def handler(params: Mapping[str, str]) -> dict[str, Any]:
            return {"handler": name, "params": dict(params)}

        handler.__name__ = name
        return handler

    return _create


@pytest.fixture
def settings() -> Settings:
    """Settings with non-default values, to tell them apart in responses."""
    return Settings(
        service_name="test-service",
        greeting="Hello from tests",
        user_name="Test User",
        user_role="Tester",
    )


@pytest.fixture
def sample_router(settings: Settings) -> Router:
    """The sample service router built from test settings."""
    return create_router(settings)


@pytest.fixture
def sample_app(sample_router: Router, settings: Settings) -> FastAPI:
    """FastAPI application serving the sample router."""
    return create_app(sample_router, settings)


@pytest.fixture
def client(sample_app: FastAPI) -> TestClient:
    """TestClient for the sample application."""
    return TestClient(sample_app)
