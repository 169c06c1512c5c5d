"""
OrientDB Connector

Entry point used by the generic graph layer. Owns the connection
lifecycle: a server session is opened first, then the target database;
a database that does not exist yet is created and opened on the spot.
All data operations come from the mixins and borrow the live connection
through ``_require_dispatcher``.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable

import httpx

from orient_connector.connector.activation import TypeActivationMixin
from orient_connector.connector.config import ConnectOptions, ConnectorSettings, parse_options
from orient_connector.connector.dispatcher import CommandDispatcher
from orient_connector.connector.entities import EntityOperationsMixin
from orient_connector.connector.types import TypeRegistry, define_base_types
from orient_connector.shared.database import OrientHandler
from orient_connector.shared.exceptions import DatabaseOpenError, NotConnectedError
from orient_connector.shared.logging import (
    ADAPTER_CHANNEL,
    QUERY_CHANNEL,
    get_logger,
    setup_logging,
)

HandlerFactory = Callable[[ConnectOptions], OrientHandler]


class OrientConnector(TypeActivationMixin, EntityOperationsMixin):
    """
    Graph connector backed by an OrientDB server.

    Usage
    -----
    connector = OrientConnector()
    await connector.connect({
        "server": {"host": "localhost", "username": "root", "password": "pw"},
        "db": {"name": "demo", "username": "admin", "password": "admin"},
    })
    await connector.activate_node_type(TypeDefinition("Person"))
    await connector.save_node(Node(type="Person", data={"id": "abc", "name": "Ann"}))
    await connector.close()

    Or as an async context manager, reading ORIENTDB_* settings:

        async with OrientConnector.from_settings() as connector:
            await connector.get_node("abc", "Person")
    """

    def __init__(
        self,
        settings: ConnectorSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        handler_factory: HandlerFactory | None = None,
        logger: logging.Logger | None = None,
        query_logger: logging.Logger | None = None,
    ):
        self._settings = settings
        self._transport = transport
        self._handler_factory = handler_factory or self._build_handler
        self._logger = logger or get_logger(ADAPTER_CHANNEL)
        self._query_logger = query_logger or get_logger(QUERY_CHANNEL)
        self._handler: OrientHandler | None = None
        self._dispatcher: CommandDispatcher | None = None

    @classmethod
    def from_settings(cls, settings: ConnectorSettings | None = None, **kwargs: Any) -> "OrientConnector":
        """Build a connector from environment settings and configure logging."""
        settings = settings or ConnectorSettings()
        setup_logging(level=settings.log_level)
        return cls(settings, **kwargs)

    # ─── Lifecycle ──────────────────────────────────────────

    def _build_handler(self, options: ConnectOptions) -> OrientHandler:
        return OrientHandler(
            base_url=options.server.base_url,
            server_auth=(options.server.username, options.server.password),
            database=options.db.name,
            database_auth=(options.db.username, options.db.password),
            storage=options.db.storage,
            database_type=options.db.type,
            timeout=options.timeout,
            transport=self._transport,
            logger=self._logger,
        )

    async def connect(
        self, options: Mapping[str, Any] | ConnectOptions | None = None
    ) -> "OrientConnector":
        """Open the server session and the target database.

        Args:
            options: Connection options; read from ORIENTDB_* settings when
                omitted.

        Returns:
            Self for method chaining.

        Raises:
            ConfigurationError: If server or db details are missing. Raised
                before any request is made.
            BackendConnectionError: If the server or database cannot be
                reached or opened.
        """
        if self._dispatcher is not None:
            return self

        if options is None:
            options = (self._settings or ConnectorSettings()).to_options()
        options = parse_options(options)

        handler = self._handler_factory(options)
        try:
            await handler.connect()
            await self._open_or_create(handler)
        except Exception:
            await handler.close()
            raise

        self._handler = handler
        self._dispatcher = CommandDispatcher(
            handler,
            logger=self._query_logger,
            max_parallel=options.max_parallel_commands,
        )
        return self

    async def _open_or_create(self, handler: OrientHandler) -> None:
        try:
            await handler.open_database()
            return
        except DatabaseOpenError:
            if await handler.database_exists():
                raise
        self._logger.info("Database %s not found, creating it", handler.database)
        await handler.create_database()
        await handler.open_database()

    async def close(self) -> None:
        """Close the connection. Does nothing when not connected."""
        handler = self._handler
        self._handler = None
        self._dispatcher = None
        if handler is not None:
            await handler.close()

    async def __aenter__(self) -> "OrientConnector":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def is_connected(self) -> bool:
        return self._dispatcher is not None

    def _require_dispatcher(self) -> CommandDispatcher:
        if self._dispatcher is None:
            raise NotConnectedError()
        return self._dispatcher

    # ─── Type system ────────────────────────────────────────

    def define_base_types(self, registry: TypeRegistry) -> None:
        """Register the scalar types this backend stores."""
        define_base_types(registry)
