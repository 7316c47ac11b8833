# test/conftest.py
import pytest
from fastapi.testclient import TestClient

from todo_app.config import Settings
from todo_app.main import create_app
from todo_app.repository.memory import TodoRepositoryForMemory


@pytest.fixture()
def repository():
    """每个测试用一个全新的内存仓储"""
    return TodoRepositoryForMemory()


@pytest.fixture()
def client(repository):
    return TestClient(create_app(repository=repository, settings=Settings()))
