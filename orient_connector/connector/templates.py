"""
Statement builders

One function per OrientDB SQL statement the connector issues. Each takes
typed arguments and returns the final, escaped statement text. Class and
field names are checked against an identifier pattern because they are
interpolated unquoted; values go through ``quote``.
"""

import re

from orient_connector.connector.models import ID_FIELD, EndpointRef
from orient_connector.shared.exceptions import InvalidArgumentError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def identifier(name: str, kind: str = "class") -> str:
    """Validate a class or field name.

    Raises:
        InvalidArgumentError: If ``name`` is not a plain identifier.
    """
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise InvalidArgumentError(f"invalid {kind} name: {name!r}")
    return name


def quote(value: str) -> str:
    """Render a string as an OrientDB double-quoted literal."""
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in str(value)) + '"'


def _with_sets(statement: str, sqlsets: str) -> str:
    return f"{statement} {sqlsets}" if sqlsets else statement


def _id_match(record_id: str) -> str:
    return f"{ID_FIELD} = {quote(record_id)}"


def _edge_match(source: EndpointRef, target: EndpointRef) -> str:
    # CREATE EDGE ... FROM source TO target stores source as `out`, target as `in`.
    return (
        f"out.{ID_FIELD} = {quote(source.id)} "
        f"AND in.{ID_FIELD} = {quote(target.id)}"
    )


# ─── Reads ─────────────────────────────────────────────────


def select_by_id(type_name: str, record_id: str) -> str:
    return f"SELECT FROM {identifier(type_name)} WHERE {_id_match(record_id)}"


def select_edge(type_name: str, source: EndpointRef, target: EndpointRef) -> str:
    return f"SELECT FROM {identifier(type_name)} WHERE {_edge_match(source, target)}"


# ─── Writes ────────────────────────────────────────────────


def update(type_name: str, record_id: str, sqlsets: str) -> str:
    statement = _with_sets(f"UPDATE {identifier(type_name)}", sqlsets)
    return f"{statement} RETURN AFTER WHERE {_id_match(record_id)}"


def update_edge(
    type_name: str, source: EndpointRef, target: EndpointRef, sqlsets: str
) -> str:
    statement = _with_sets(f"UPDATE {identifier(type_name)}", sqlsets)
    return f"{statement} RETURN AFTER WHERE {_edge_match(source, target)}"


def vertex_create(type_name: str, sqlsets: str) -> str:
    return _with_sets(f"CREATE VERTEX {identifier(type_name)}", sqlsets)


def edge_create(
    type_name: str, source: EndpointRef, target: EndpointRef, sqlsets: str
) -> str:
    return _with_sets(
        f"CREATE EDGE {identifier(type_name)} "
        f"FROM ({select_by_id(source.type, source.id)}) "
        f"TO ({select_by_id(target.type, target.id)})",
        sqlsets,
    )


# ─── Schema ────────────────────────────────────────────────


def create_class(type_name: str, base_class: str) -> str:
    return f"CREATE CLASS {identifier(type_name)} EXTENDS {identifier(base_class)}"


def create_id_property(type_name: str) -> str:
    return f"CREATE PROPERTY {identifier(type_name)}.{ID_FIELD} STRING"


def create_id_index(type_name: str) -> str:
    return f"CREATE INDEX {identifier(type_name)}.{ID_FIELD} UNIQUE"
