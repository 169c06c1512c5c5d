"""OrientDB connector: type activation, entity reads and writes, lifecycle."""

from orient_connector.connector.config import ConnectOptions, ConnectorSettings, parse_options
from orient_connector.connector.connector import OrientConnector
from orient_connector.connector.dispatcher import CommandDispatcher
from orient_connector.connector.models import (
    BASE_EDGE_CLASS,
    BASE_VERTEX_CLASS,
    Edge,
    EndpointRef,
    Node,
    SearchParams,
    TypeDefinition,
)
from orient_connector.connector.types import BASE_TYPES, TypeRegistry, define_base_types

__all__ = [
    "OrientConnector",
    "CommandDispatcher",
    "ConnectOptions",
    "ConnectorSettings",
    "parse_options",
    "BASE_EDGE_CLASS",
    "BASE_VERTEX_CLASS",
    "Edge",
    "EndpointRef",
    "Node",
    "SearchParams",
    "TypeDefinition",
    "BASE_TYPES",
    "TypeRegistry",
    "define_base_types",
]
