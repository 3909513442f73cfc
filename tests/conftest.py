"""
Shared pytest fixtures and configuration for firebase-rest tests.

This module provides:
- Settings cache cleanup for test isolation
- ``FakeDatabaseServer``: an in-memory JSON tree speaking the REST API,
  mounted on ``httpx.MockTransport``
- ``FakeHost``: the app/auth/storage handle the client wraps
- A ready ``firebase`` client and ``db`` handle wired to both

Usage:
    Fixtures are auto-discovered by pytest:

    @pytest.mark.asyncio
    async def test_something(db, server):
        server.tree = {"a": 1}
        snapshot = await db.ref("a").get()
"""

from __future__ import annotations

import copy
import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Generator

import httpx
import pytest

# Ensure firebase_rest package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from firebase_rest import create_firebase_rest
from firebase_rest.core.settings import FirebaseRestSettings, clear_settings_cache

DATABASE_URL = "https://demo.firebaseio.com"


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None, None, None]:
    """Clear cached settings before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Fake REST server
# =============================================================================


class FakeDatabaseServer:
    """In-memory JSON tree answering ``<path>.json`` requests like the REST API.

    Attributes:
        tree: Stored data (root node).
        requests: Every request received, in order.
        fail_with: When set, every request is answered with this status code.
    """

    def __init__(self) -> None:
        self.tree: Any = None
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self._push_counter = 0

    # -- tree helpers ---------------------------------------------------

    @staticmethod
    def _segments(request: httpx.Request) -> list[str]:
        path = request.url.path
        assert path.endswith(".json"), path
        return [segment for segment in path[: -len(".json")].split("/") if segment]

    def read(self, segments: list[str]) -> Any:
        node = self.tree
        for segment in segments:
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return copy.deepcopy(node)

    def write(self, segments: list[str], value: Any) -> None:
        if not segments:
            self.tree = value
            return
        if not isinstance(self.tree, dict):
            self.tree = {}
        node = self.tree
        for segment in segments[:-1]:
            if not isinstance(node.get(segment), dict):
                node[segment] = {}
            node = node[segment]
        if value is None:
            node.pop(segments[-1], None)
        else:
            node[segments[-1]] = value

    # -- request handling -------------------------------------------------

    def requests_for(self, method: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"error": "denied"})

        segments = self._segments(request)
        body = json.loads(request.content) if request.content else None

        if request.method == "GET":
            return httpx.Response(200, json=self.read(segments))
        if request.method == "PUT":
            self.write(segments, body)
            return httpx.Response(200, json=body)
        if request.method == "POST":
            self._push_counter += 1
            name = f"-Npush{self._push_counter:04d}"
            self.write(segments + [name], body)
            return httpx.Response(200, json={"name": name})
        if request.method == "PATCH":
            for key, value in body.items():
                self.write(segments + [s for s in key.split("/") if s], value)
            return httpx.Response(200, json=body)
        if request.method == "DELETE":
            self.write(segments, None)
            return httpx.Response(200, json=None)
        return httpx.Response(405, json={"error": "method not allowed"})


# =============================================================================
# Fake host handle
# =============================================================================


class FakeUser:
    def __init__(self, token: str | None):
        self.token = token

    def get_id_token(self) -> str | None:
        return self.token


class FakeHost:
    """App/auth/storage handle as exposed by the host environment."""

    def __init__(self, database_url: str | None = DATABASE_URL, token: str | None = None):
        options = {} if database_url is None else {"databaseURL": database_url}
        self._app = SimpleNamespace(name="[DEFAULT]", options=options)
        self._auth = SimpleNamespace(current_user=FakeUser(token) if token else None)
        self._storage = SimpleNamespace(bucket="demo.appspot.com")

    def app(self) -> SimpleNamespace:
        return self._app

    def auth(self) -> SimpleNamespace:
        return self._auth

    def storage(self) -> SimpleNamespace:
        return self._storage


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def server() -> FakeDatabaseServer:
    return FakeDatabaseServer()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def settings() -> FirebaseRestSettings:
    """Settings independent of the environment, with the default 2 s TTL."""
    return FirebaseRestSettings(_env_file=None, database_url="", cache_ttl_seconds=2.0)


@pytest.fixture
def http_client(server: FakeDatabaseServer) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(server.handler))


@pytest.fixture
def firebase(host: FakeHost, settings: FirebaseRestSettings, http_client: httpx.AsyncClient):
    return create_firebase_rest(host, settings=settings, http_client=http_client)


@pytest.fixture
def db(firebase):
    return firebase.database()


@pytest.fixture
def make_client(server: FakeDatabaseServer):
    """Factory for clients with custom host/settings sharing the fake server."""

    def factory(host: Any = None, **settings_overrides: Any):
        settings = FirebaseRestSettings(
            _env_file=None, **{"database_url": "", **settings_overrides}
        )
        return create_firebase_rest(
            host if host is not None else FakeHost(),
            settings=settings,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(server.handler)),
        )

    return factory


@pytest.fixture
def make_host():
    """The ``FakeHost`` class, for tests needing a custom host."""
    return FakeHost
