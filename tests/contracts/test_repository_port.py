import inspect
from unittest.mock import MagicMock

import pytest

from adapters.mongo.task_repository import MongoTaskRepository
from adapters.mongo.user_repository import MongoUserRepository
from ports.repository import TaskRepositoryPort, UserRepositoryPort
from tests.fakes import InMemoryTaskRepository, InMemoryUserRepository


@pytest.mark.parametrize(
    "port, implementations",
    [
        (TaskRepositoryPort, [MongoTaskRepository, InMemoryTaskRepository]),
        (UserRepositoryPort, [MongoUserRepository, InMemoryUserRepository]),
    ],
)
def test_adapters_implement_port(port, implementations):
    """Every adapter implements every port method as a coroutine."""
    for implementation in implementations:
        assert issubclass(implementation, port)
        assert not inspect.isabstract(implementation)
        for name in port.__abstractmethods__:
            assert inspect.iscoroutinefunction(getattr(implementation, name)), name


def test_mongo_repositories_wrap_a_collection():
    collection = MagicMock()

    assert MongoTaskRepository(collection).collection is collection
    assert MongoUserRepository(collection).collection is collection
