"""
OrientDB Connection Handler

Owns the HTTP session against an OrientDB server's REST API.
Server-level calls (listing and creating databases) authenticate with the
server credentials; database calls (open, command) use the database
credentials.
"""

import logging
from typing import Any

import httpx

from orient_connector.shared.exceptions import (
    BackendCommandError,
    BackendConnectionError,
    DatabaseOpenError,
    DuplicateRecordError,
    NotConnectedError,
)
from orient_connector.shared.logging import ADAPTER_CHANNEL, get_logger

_DUPLICATE_MARKERS = ("ORecordDuplicatedException", "duplicated key")


def _backend_message(response: httpx.Response) -> str:
    """Pull the server's error text out of an OrientDB error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict):
        for error in body.get("errors") or []:
            content = error.get("content") if isinstance(error, dict) else None
            if content:
                return str(content).strip()
    return response.text.strip() or response.reason_phrase


class OrientHandler:
    """
    Manages one async HTTP session with an OrientDB server.

    Usage
    -----
    handler = OrientHandler("http://localhost:2480", ("root", "pw"),
                            "demo", ("admin", "admin"))
    await handler.connect()
    await handler.open_database()
    rows = await handler.command("SELECT FROM V LIMIT 5")
    await handler.close()
    """

    def __init__(
        self,
        base_url: str,
        server_auth: tuple[str, str],
        database: str,
        database_auth: tuple[str, str],
        storage: str = "plocal",
        database_type: str = "graph",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        self._base_url = base_url
        self._server_auth = server_auth
        self._database = database
        self._database_auth = database_auth
        self._storage = storage
        self._database_type = database_type
        self._timeout = timeout
        self._transport = transport
        self._logger = logger or get_logger(ADAPTER_CHANNEL)
        self._client: httpx.AsyncClient | None = None
        self._open = False

    # ─── Lifecycle ──────────────────────────────────────────

    async def connect(self) -> "OrientHandler":
        """Create the HTTP client and verify the server accepts our credentials.

        Returns:
            Self for method chaining.

        Raises:
            BackendConnectionError: If the server is unreachable or refuses
                the server credentials.
        """
        if self._client is not None:
            return self

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        try:
            await self.list_databases()
        except BackendConnectionError:
            self._logger.error("Failed to connect to OrientDB at %s", self._base_url)
            await self.close()
            raise
        self._logger.info("Connected to OrientDB server at %s", self._base_url)
        return self

    async def open_database(self) -> None:
        """Open the configured database with the database credentials.

        Raises:
            DatabaseOpenError: If the server does not grant the session.
        """
        response = await self._request(
            "GET", f"/connect/{self._database}", auth=self._database_auth
        )
        if response.status_code >= 400:
            raise DatabaseOpenError(
                f"could not open database {self._database!r}: {_backend_message(response)}",
                database=self._database,
                status_code=response.status_code,
            )
        self._open = True
        self._logger.info("Opened database %s", self._database)

    async def create_database(self) -> None:
        """Create the configured database using the server credentials."""
        response = await self._request(
            "POST",
            f"/database/{self._database}/{self._storage}/{self._database_type}",
            auth=self._server_auth,
        )
        if response.status_code >= 400:
            raise BackendCommandError(
                _backend_message(response),
                statement=f"create database {self._database}",
                status_code=response.status_code,
            )
        self._logger.info(
            "Created %s database %s (%s)",
            self._database_type, self._database, self._storage,
        )

    async def close(self) -> None:
        """Drop the server session and close the HTTP client."""
        if self._client is None:
            return
        client, self._client = self._client, None
        try:
            if self._open:
                # OrientDB answers /disconnect with 401 by design.
                await client.get("/disconnect", auth=self._database_auth)
        except httpx.HTTPError as exc:
            self._logger.debug("Ignoring disconnect failure: %s", exc)
        finally:
            self._open = False
            await client.aclose()
        self._logger.info("OrientDB connection closed")

    async def __aenter__(self) -> "OrientHandler":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ─── Properties ─────────────────────────────────────────

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the raw HTTP client.

        Raises:
            NotConnectedError: If connect() has not been called.
        """
        if self._client is None:
            raise NotConnectedError("OrientHandler is not connected; call connect() first")
        return self._client

    @property
    def database(self) -> str:
        """Return the configured database name."""
        return self._database

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def is_open(self) -> bool:
        """True once the database session is open."""
        return self._client is not None and self._open

    # ─── Server helpers ─────────────────────────────────────

    async def list_databases(self) -> list[str]:
        """Return the names of the databases the server hosts."""
        response = await self._request("GET", "/listDatabases", auth=self._server_auth)
        if response.status_code >= 400:
            raise BackendConnectionError(
                f"server at {self._base_url} refused the session: {_backend_message(response)}"
            )
        try:
            return list(response.json().get("databases", []))
        except (ValueError, AttributeError) as exc:
            raise BackendConnectionError(
                f"unexpected /listDatabases payload from {self._base_url}"
            ) from exc

    async def database_exists(self, name: str | None = None) -> bool:
        """Check whether a database (the configured one by default) exists."""
        return (name or self._database) in await self.list_databases()

    # ─── Commands ───────────────────────────────────────────

    async def command(self, statement: str) -> list[dict[str, Any]]:
        """Execute one SQL command against the open database.

        Args:
            statement: Rendered OrientDB SQL.

        Returns:
            The records in the response's ``result`` list.

        Raises:
            NotConnectedError: If the database is not open.
            DuplicateRecordError: If a unique index rejected the write.
            BackendCommandError: For any other server-side failure.
        """
        if not self.is_open:
            raise NotConnectedError(f"database {self._database!r} is not open")

        response = await self._request(
            "POST",
            f"/command/{self._database}/sql",
            auth=self._database_auth,
            json={"command": statement},
        )
        if response.status_code >= 400:
            message = _backend_message(response)
            if response.status_code == 409 or any(m in message for m in _DUPLICATE_MARKERS):
                raise DuplicateRecordError(message, statement, response.status_code)
            raise BackendCommandError(message, statement, response.status_code)

        try:
            body = response.json()
        except ValueError:
            return []
        return list(body.get("result", [])) if isinstance(body, dict) else []

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise BackendConnectionError(
                f"{method} {url} to {self._base_url} failed: {exc}"
            ) from exc
