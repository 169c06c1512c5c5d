"""OrientDB connector for the generic graph layer."""

from orient_connector.connector import (
    BASE_EDGE_CLASS,
    BASE_VERTEX_CLASS,
    Edge,
    EndpointRef,
    Node,
    OrientConnector,
    SearchParams,
    TypeDefinition,
)
from orient_connector.shared.exceptions import (
    BackendCommandError,
    BackendConnectionError,
    BackendError,
    ConfigurationError,
    ConnectorError,
    DatabaseOpenError,
    DuplicateRecordError,
    InvalidArgumentError,
    NotConnectedError,
)

__all__ = [
    "OrientConnector",
    "BASE_EDGE_CLASS",
    "BASE_VERTEX_CLASS",
    "Edge",
    "EndpointRef",
    "Node",
    "SearchParams",
    "TypeDefinition",
    "BackendCommandError",
    "BackendConnectionError",
    "BackendError",
    "ConfigurationError",
    "ConnectorError",
    "DatabaseOpenError",
    "DuplicateRecordError",
    "InvalidArgumentError",
    "NotConnectedError",
]
