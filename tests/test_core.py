import pytest

from core.config import Settings
from core.container import Container
from core.database import MongoDB, mask_mongodb_url
from core.logger import format_exception_short
from services.task_service import ITaskService


def test_connection_url_adds_credentials():
    settings = Settings(
        mongodb_url="mongodb://db:27017",
        mongodb_root_user="admin",
        mongodb_root_password="pw",
        mongodb_database="tasks",
    )
    assert settings.mongodb_connection_url == "mongodb://admin:pw@db:27017/tasks?authSource=tasks"


def test_connection_url_keeps_embedded_credentials():
    settings = Settings(mongodb_url="mongodb://u:p@db:27017", mongodb_root_user="admin", mongodb_root_password="pw")
    assert settings.mongodb_connection_url == "mongodb://u:p@db:27017"


def test_mask_mongodb_url():
    assert mask_mongodb_url("mongodb://admin:secret@db:27017/tasks") == "mongodb://admin:****@db:27017/tasks"
    assert mask_mongodb_url("mongodb://db:27017") == "mongodb://db:27017"


def test_collection_requires_connection():
    with pytest.raises(RuntimeError):
        MongoDB(Settings()).get_collection("tasks")


@pytest.mark.asyncio
async def test_health_check_without_client():
    assert await MongoDB(Settings()).health_check() is False


def test_container_resolve_and_clear():
    service = object()
    Container.register(ITaskService, service)
    assert Container.resolve(ITaskService) is service

    Container.clear()
    with pytest.raises(KeyError):
        Container.resolve(ITaskService)


def test_format_exception_short():
    assert format_exception_short(ValueError("bad")) == "ValueError: bad"
    assert format_exception_short(ValueError("bad"), "Parsing") == "Parsing: ValueError: bad"


def test_bootstrap_builds_services_from_registered_repositories():
    from unittest.mock import MagicMock

    from core.container import bootstrap_container
    from ports.repository import TaskRepositoryPort, UserRepositoryPort
    from services.auth_service import IAuthService

    db = MagicMock()
    try:
        bootstrap_container(db, Settings())

        tasks = Container.resolve(TaskRepositoryPort)
        users = Container.resolve(UserRepositoryPort)
        assert Container.resolve(ITaskService).tasks is tasks
        assert Container.resolve(ITaskService).users is users
        assert Container.resolve(IAuthService).users is users
        db.get_collection.assert_any_call("tasks")
        db.get_collection.assert_any_call("users")
    finally:
        Container.clear()
