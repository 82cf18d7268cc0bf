"""
Shared pytest fixtures for user-service tests.
"""
import os
from unittest.mock import MagicMock, patch

import pytest

from user_service.domain.repositories.user_repository import UserRepository
from tests.fakes import InMemoryUserRepository


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGODB_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_user_service",
        "ENVIRONMENT": "development",
        "PORT": "5000",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_user_repo():
    """Mock UserRepository: async methods are AsyncMocks, is_valid_reference accepts everything."""
    repo = MagicMock(spec=UserRepository)
    repo.is_valid_reference.return_value = True
    return repo


@pytest.fixture
def memory_repo():
    return InMemoryUserRepository()


@pytest.fixture
def memory_container(memory_repo):
    """Install a DI container backed by the in-memory repository for the test."""
    from user_service.di.container import DIContainer, set_container

    container = DIContainer(user_repository=memory_repo)
    set_container(container)
    yield container
    set_container(None)


@pytest.fixture
def client(memory_container):
    """TestClient over the module-level app, wired to the in-memory repository."""
    from fastapi.testclient import TestClient
    from user_service.main import app

    with TestClient(app) as c:
        yield c
