"""Tests for connect / close, connection guards and base type registration."""

import pytest
from unittest.mock import MagicMock

from orient_connector.connector import OrientConnector
from orient_connector.connector.config import ConnectorSettings
from orient_connector.connector.models import Edge, EndpointRef, Node, TypeDefinition
from orient_connector.shared.exceptions import (
    BackendConnectionError,
    ConfigurationError,
    DatabaseOpenError,
    NotConnectedError,
)


class TestConnect:

    async def test_opens_existing_database(self, transport, orient_server, options):
        connector = OrientConnector(transport=transport)

        assert await connector.connect(options) is connector

        assert connector.is_connected
        assert orient_server.paths() == ["GET /listDatabases", "GET /connect/demo"]
        await connector.close()

    async def test_creates_missing_database_then_opens_it(self, transport, orient_server, options):
        orient_server.databases = []
        connector = OrientConnector(transport=transport)

        await connector.connect(options)

        assert connector.is_connected
        assert orient_server.paths() == [
            "GET /listDatabases",
            "GET /connect/demo",
            "GET /listDatabases",
            "POST /database/demo/plocal/graph",
            "GET /connect/demo",
        ]
        assert "demo" in orient_server.databases
        await connector.close()

    async def test_open_failure_on_existing_database_does_not_create(
        self, transport, orient_server, options
    ):
        orient_server.refuse_open = True
        connector = OrientConnector(transport=transport)

        with pytest.raises(DatabaseOpenError):
            await connector.connect(options)

        assert not connector.is_connected
        assert not any(p.startswith("POST /database") for p in orient_server.paths())

    async def test_server_refusal_is_a_connection_error(self, transport, orient_server, options):
        orient_server.refuse_server = True
        connector = OrientConnector(transport=transport)

        with pytest.raises(BackendConnectionError):
            await connector.connect(options)

        assert not connector.is_connected
        assert orient_server.paths() == ["GET /listDatabases"]

    @pytest.mark.parametrize("drop", ["server", "db"])
    async def test_missing_options_fail_without_io(self, transport, orient_server, options, drop):
        del options[drop]
        connector = OrientConnector(transport=transport)

        with pytest.raises(ConfigurationError):
            await connector.connect(options)

        assert orient_server.requests == []
        assert not connector.is_connected

    async def test_reads_settings_when_no_options_given(self, transport, orient_server):
        settings = ConnectorSettings(host="orient.test", db_name="demo")
        connector = OrientConnector(settings, transport=transport)

        await connector.connect()

        assert connector.is_connected
        assert orient_server.requests[0].url.host == "orient.test"
        await connector.close()

    async def test_connect_twice_reuses_the_connection(self, connector, handler, options):
        await connector.connect(options)
        assert handler.connect.await_count == 1

    async def test_failed_open_closes_the_session(self, handler, options):
        handler.open_database.side_effect = DatabaseOpenError("denied", database="demo")
        connector = OrientConnector(handler_factory=lambda _options: handler)

        with pytest.raises(DatabaseOpenError):
            await connector.connect(options)

        handler.close.assert_awaited()
        handler.create_database.assert_not_awaited()
        assert not connector.is_connected


class TestClose:

    async def test_close_without_connection_is_a_no_op(self):
        connector = OrientConnector()
        await connector.close()
        await connector.close()
        assert not connector.is_connected

    async def test_close_disconnects_and_clears_handle(self, transport, orient_server, options):
        connector = OrientConnector(transport=transport)
        await connector.connect(options)

        await connector.close()

        assert not connector.is_connected
        assert orient_server.paths()[-1] == "GET /disconnect"
        with pytest.raises(NotConnectedError):
            await connector.get_node("abc")

    async def test_async_context_manager(self, transport, orient_server):
        settings = ConnectorSettings(host="orient.test", db_name="demo")
        async with OrientConnector(settings, transport=transport) as connector:
            assert connector.is_connected
        assert not connector.is_connected


class TestNotConnected:

    @pytest.mark.parametrize("operation", [
        lambda c: c.find({"id": "x"}),
        lambda c: c.find({}),
        lambda c: c.get_node("abc", "Person"),
        lambda c: c.get_edge(EndpointRef("a"), EndpointRef("b"), "Knows"),
        lambda c: c.save_node(Node(type="Person", data={"id": "abc"})),
        lambda c: c.save_node(Node()),
        lambda c: c.save_edge(EndpointRef("a"), EndpointRef("b"), Edge(data={"w": 1})),
        lambda c: c.activate_node_type(TypeDefinition("Person")),
        lambda c: c.activate_edge_type(TypeDefinition("Knows")),
        lambda c: c.activate_node_types([TypeDefinition("Person")]),
        lambda c: c.execute(["SELECT FROM V"]),
    ])
    async def test_every_operation_requires_a_connection(self, operation):
        with pytest.raises(NotConnectedError):
            await operation(OrientConnector())


class TestDefineBaseTypes:

    def test_registers_scalar_types(self):
        registry = MagicMock()

        OrientConnector().define_base_types(registry)

        defined = {c.args[0]: c.kwargs for c in registry.define.call_args_list}
        assert set(defined) == {"string", "uuid", "integer", "float", "list", "set"}
        assert defined["uuid"]["alias_of"] == "string"
        assert defined["uuid"]["python_type"] is str
        assert defined["integer"]["orient_type"] == "INTEGER"
        assert defined["set"]["orient_type"] == "EMBEDDEDSET"
