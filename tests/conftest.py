import pytest

from core.config import Settings
from domain.entities import User
from services.auth_service import AuthService
from services.task_service import TaskService
from tests.fakes import InMemoryTaskRepository, InMemoryUserRepository

U1 = "665f1c2e8f1b2a3c4d5e6f01"
U2 = "665f1c2e8f1b2a3c4d5e6f02"
U3 = "665f1c2e8f1b2a3c4d5e6f03"


@pytest.fixture
def settings():
    return Settings(jwt_secret="test-secret", bcrypt_rounds=4, jwt_expires_minutes=5)


@pytest.fixture
def user_repository():
    return InMemoryUserRepository(
        [
            User(id=U1, email="alice@example.com", username="alice", first_name="Alice", last_name="Nguyen"),
            User(id=U2, email="bob@example.com", username="bob", first_name="Bob", last_name="Tran"),
            User(id=U3, email="carol@example.com", username="carol", first_name="Carol", last_name="Le"),
        ]
    )


@pytest.fixture
def task_repository():
    return InMemoryTaskRepository()


@pytest.fixture
def task_service(task_repository, user_repository):
    return TaskService(task_repository, user_repository)


@pytest.fixture
def auth_service(user_repository, settings):
    return AuthService(user_repository, settings)
