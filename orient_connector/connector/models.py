"""
Graph entity models

Plain records exchanged between the generic graph layer and the connector.
They live for the duration of one call; nothing is cached across calls.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

BASE_VERTEX_CLASS = "V"
BASE_EDGE_CLASS = "E"
ID_FIELD = "id"

Scalar = Union[str, int, float, bool]
Value = Union[Scalar, list, tuple, set, frozenset]


@dataclass
class TypeDefinition:
    """A node or edge class. ``active`` flips to True once the class exists."""

    type: str
    active: bool = False


@dataclass(frozen=True)
class EndpointRef:
    """Reference to the vertex at one end of an edge."""

    id: str
    type: str = BASE_VERTEX_CLASS


@dataclass
class Node:
    data: dict[str, Value] | None = None
    type: str | None = None  # defaults to BASE_VERTEX_CLASS on save


@dataclass
class Edge:
    data: dict[str, Value] | None = None
    type: str | None = None  # defaults to BASE_EDGE_CLASS on save


@dataclass
class SearchParams:
    id: str | None = None
    type: str | None = None

    @classmethod
    def coerce(cls, search: "SearchParams | Mapping[str, Any] | None") -> "SearchParams":
        """Accept either SearchParams or a plain ``{"id": ..., "type": ...}`` mapping."""
        if isinstance(search, SearchParams):
            return search
        search = search or {}
        return cls(id=search.get("id"), type=search.get("type"))
