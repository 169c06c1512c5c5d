"""
Data marshaller

Turns a node or edge payload into the ``SET field = value, ...`` clause of a
CREATE or UPDATE statement. Values are restricted to strings, numbers,
booleans, lists and sets of those; anything else is rejected here so no
statement is ever rendered from it.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from orient_connector.connector.templates import identifier, quote
from orient_connector.shared.exceptions import InvalidArgumentError


def _scalar(key: str, value: Any) -> str:
    # bool is a subclass of int, so it has to be checked first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, int):
        return repr(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise InvalidArgumentError(f"field {key!r}: {value!r} has no SQL literal")
        return repr(value)
    raise InvalidArgumentError(
        f"field {key!r}: unsupported value type {type(value).__name__}"
    )


def render_value(key: str, value: Any) -> str:
    """Render one payload value as an OrientDB literal.

    Lists keep their order; sets are de-duplicated and sorted so the same
    set always renders the same text.

    Raises:
        InvalidArgumentError: If the value (or a member) is not permitted.
    """
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_scalar(key, item) for item in value) + "]"
    if isinstance(value, (set, frozenset)):
        return "[" + ", ".join(sorted({_scalar(key, item) for item in value})) + "]"
    return _scalar(key, value)


def to_set_clause(data: Mapping[str, Any], exclude: Iterable[str] = ()) -> str:
    """Render a payload as a SET clause.

    Args:
        data: Field name to value mapping.
        exclude: Keys left out of the clause (the identity field on update).

    Returns:
        ``SET a = 1, b = "x"``, or an empty string when nothing remains.

    Raises:
        InvalidArgumentError: On a bad field name or unsupported value.
    """
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(
            f"payload must be a mapping, got {type(data).__name__}"
        )
    skip = set(exclude)
    assignments = [
        f"{identifier(key, 'field')} = {render_value(key, value)}"
        for key, value in data.items()
        if key not in skip
    ]
    if not assignments:
        return ""
    return "SET " + ", ".join(assignments)
