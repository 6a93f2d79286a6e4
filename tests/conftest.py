"""Shared fixtures: settings isolated from the environment and test clients."""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.src.config import Settings
from api.src.main import create_app


def build_settings(**overrides) -> Settings:
    """Settings that ignore any local .env file, with test-friendly defaults."""
    values = {
        "environment": "development",
        "log_format": "text",
        "log_level": "WARNING",
        "rate_limit_enabled": False,
        "tracing_enabled": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def test_settings() -> Settings:
    """Default settings for tests."""
    return build_settings()


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Application built from the test settings."""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client with lifespan events run."""
    with TestClient(app) as test_client:
        yield test_client
