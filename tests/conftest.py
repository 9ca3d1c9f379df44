"""
Shared fixtures for user management tests.
"""
import pytest
from fastapi.testclient import TestClient

from roster.app import create_app
from roster.modules.users.domain.user import UserInput
from roster.modules.users.repositories.user_repository import InMemoryUserRepository
from roster.modules.users.services.user_service import UserService


@pytest.fixture
def repository():
    """Fresh, empty store."""
    repo = InMemoryUserRepository()
    yield repo
    repo.clear()


@pytest.fixture
def user_service(repository):
    return UserService(repository)


@pytest.fixture
def juan_input():
    return UserInput(name="Juan", email="juan@test.com", age=25)


@pytest.fixture
def client(user_service):
    """Test client bound to an app that owns ``user_service``."""
    app = create_app(user_service)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
