"""
Shared fixtures.

Two ways of standing in for OrientDB:

- ``handler``: a mocked OrientHandler whose ``command`` is an AsyncMock,
  for tests that only care which statements the connector renders.
- ``orient_server`` / ``transport``: a tiny in-memory imitation of the
  OrientDB REST API behind ``httpx.MockTransport``, for tests of the HTTP
  handler and the connect/open/create sequence.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from orient_connector.connector import OrientConnector

OPTIONS = {
    "server": {"host": "orient.test", "username": "root", "password": "rootpw"},
    "db": {"name": "demo", "username": "admin", "password": "adminpw"},
}


class FakeOrientServer:
    """Answers the handful of REST endpoints the handler uses."""

    def __init__(self, databases=("demo",)):
        self.databases = list(databases)
        self.requests: list[httpx.Request] = []
        self.results: dict[str, list[dict]] = {}
        self.errors: dict[str, tuple[int, str]] = {}
        self.refuse_server = False
        self.refuse_open = False

    def commands(self) -> list[str]:
        return [
            json.loads(r.content)["command"]
            for r in self.requests
            if r.url.path.startswith("/command/")
        ]

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/listDatabases":
            if self.refuse_server:
                return httpx.Response(401, text="401 Unauthorized.")
            return httpx.Response(200, json={"databases": self.databases})

        if path.startswith("/connect/"):
            name = path.split("/")[2]
            if self.refuse_open or name not in self.databases:
                return httpx.Response(401, text="401 Unauthorized.")
            return httpx.Response(204)

        if path.startswith("/database/") and request.method == "POST":
            name = path.split("/")[2]
            if name in self.databases:
                return _error(409, f"Database '{name}' already exists")
            self.databases.append(name)
            return httpx.Response(200, json={"classes": []})

        if path.startswith("/command/"):
            statement = json.loads(request.content)["command"]
            if statement in self.errors:
                return _error(*self.errors[statement])
            return httpx.Response(200, json={"result": self.results.get(statement, [])})

        if path == "/disconnect":
            return httpx.Response(401, text="Logged out")

        return httpx.Response(404, text=f"no route for {path}")


def _error(status: int, content: str) -> httpx.Response:
    return httpx.Response(
        status,
        json={"errors": [{"code": status, "reason": status, "content": content}]},
    )


@pytest.fixture
def options():
    return {key: dict(value) for key, value in OPTIONS.items()}


@pytest.fixture
def orient_server():
    return FakeOrientServer()


@pytest.fixture
def transport(orient_server):
    return httpx.MockTransport(orient_server)


@pytest.fixture
def handler():
    handler = MagicMock()
    handler.database = "demo"
    handler.connect = AsyncMock(return_value=handler)
    handler.open_database = AsyncMock()
    handler.create_database = AsyncMock()
    handler.database_exists = AsyncMock(return_value=True)
    handler.close = AsyncMock()
    handler.command = AsyncMock(return_value=[])
    return handler


@pytest.fixture
async def connector(handler, options):
    conn = OrientConnector(handler_factory=lambda _options: handler)
    await conn.connect(options)
    yield conn
    await conn.close()


@pytest.fixture
def executed(handler):
    """Statements sent through the mocked handler, in order."""

    def _executed() -> list[str]:
        return [c.args[0] for c in handler.command.await_args_list]

    return _executed
