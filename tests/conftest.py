"""
Shared fixtures for the comment board tests.
"""

import pytest
import requests
from fastapi.testclient import TestClient

from comment_board.app.main import create_app
from comment_board.app.stores import FallbackStore, InMemoryStore, SQLiteStore
from comment_board.client.rendering import RenderPolicy


class TestClientSession:
    """requests.Session stand-in that routes calls into a FastAPI TestClient.

    Responses are converted to real ``requests.Response`` objects so the
    client's error handling runs unchanged.
    """

    __test__ = False

    def __init__(self, client: TestClient):
        self.client = client
        self.calls = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append((method, url, json))
        result = self.client.request(method, url, params=params, json=json, headers=headers)
        response = requests.Response()
        response.status_code = result.status_code
        response._content = result.content
        response.headers.update(result.headers)
        response.url = url
        response.encoding = "utf-8"
        return response


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLiteStore(str(tmp_path / "board.db"))
    store.open()
    return store


@pytest.fixture
def fallback_store(sqlite_store):
    return FallbackStore(sqlite_store, InMemoryStore())


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryStore()
    sqlite = SQLiteStore(str(tmp_path / "board.db"))
    sqlite.open()
    return FallbackStore(sqlite, InMemoryStore())


@pytest.fixture
def client(store):
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def safe_client(memory_store):
    app = create_app(store=memory_store, render_policy=RenderPolicy.SAFE)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unsafe_client(memory_store):
    app = create_app(store=memory_store, render_policy=RenderPolicy.UNSAFE)
    with TestClient(app) as test_client:
        yield test_client
