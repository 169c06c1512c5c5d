"""Connector configuration and connection options."""

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from orient_connector.shared.config import BaseConnectorSettings
from orient_connector.shared.exceptions import ConfigurationError

DEFAULT_PORT = 2480


class ServerOptions(BaseModel):
    """Where the OrientDB server listens and how to authenticate as its admin."""

    host: str = Field(min_length=1)
    port: int = DEFAULT_PORT
    protocol: str = "http"
    username: str = "root"
    password: str = ""

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


class DatabaseOptions(BaseModel):
    """The database to open, created on first connect when missing."""

    name: str = Field(min_length=1)
    username: str = "admin"
    password: str = "admin"
    storage: str = "plocal"
    type: str = "graph"


class ConnectOptions(BaseModel):
    server: ServerOptions
    db: DatabaseOptions
    timeout: float = 30.0
    max_parallel_commands: int = Field(default=8, ge=1)


def _server_from_url(url: str) -> dict[str, Any]:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"invalid server url {url!r}: {exc}") from exc
    if not parsed.host:
        raise ConfigurationError(f"cannot read a host from server url {url!r}")
    server: dict[str, Any] = {"host": parsed.host, "protocol": parsed.scheme or "http"}
    if parsed.port:
        server["port"] = parsed.port
    if parsed.username:
        server["username"] = parsed.username
    if parsed.password:
        server["password"] = parsed.password
    return server


def parse_options(options: Mapping[str, Any] | ConnectOptions | None) -> ConnectOptions:
    """Validate raw connect options without touching the network.

    Args:
        options: ``{"server" | "protocol": ..., "db": {...}}`` or a ready
            ``ConnectOptions``. ``server`` may be a mapping or a URL string;
            ``protocol`` is a URL string such as ``http://localhost:2480``.

    Returns:
        Validated ConnectOptions.

    Raises:
        ConfigurationError: If server or db details are missing or invalid.
    """
    if isinstance(options, ConnectOptions):
        return options

    raw = dict(options or {})
    server = raw.pop("server", None) or raw.pop("protocol", None)
    if not server:
        raise ConfigurationError(
            "server connection details required to use the orientdb connector"
        )
    if not raw.get("db"):
        raise ConfigurationError(
            "db name, username and password required to use the orientdb connector"
        )

    if isinstance(server, str):
        server = _server_from_url(server)

    try:
        return ConnectOptions.model_validate({**raw, "server": server})
    except ValidationError as exc:
        raise ConfigurationError(f"invalid connection options: {exc}") from exc


class ConnectorSettings(BaseConnectorSettings):
    """Connection settings read from ORIENTDB_* environment variables."""

    component_name: str = "orientdb"
    protocol: str = "http"
    host: str = ""
    port: int = DEFAULT_PORT
    server_username: str = "root"
    server_password: str = ""
    db_name: str = ""
    db_username: str = "admin"
    db_password: str = "admin"
    db_storage: str = "plocal"
    db_type: str = "graph"
    max_parallel_commands: int = 8

    class Config(BaseConnectorSettings.Config):
        env_prefix = "ORIENTDB_"

    def to_options(self) -> ConnectOptions:
        """Build connect options, failing when host or database name is unset."""
        server = None
        if self.host:
            server = {
                "host": self.host,
                "port": self.port,
                "protocol": self.protocol,
                "username": self.server_username,
                "password": self.server_password,
            }
        db = None
        if self.db_name:
            db = {
                "name": self.db_name,
                "username": self.db_username,
                "password": self.db_password,
                "storage": self.db_storage,
                "type": self.db_type,
            }
        return parse_options({
            "server": server,
            "db": db,
            "timeout": self.timeout,
            "max_parallel_commands": self.max_parallel_commands,
        })
