"""Scalar types the connector registers with the generic graph layer."""

from typing import Any, Protocol


class TypeRegistry(Protocol):
    """Anything that can receive type definitions from a connector."""

    def define(self, name: str, **options: Any) -> Any: ...


# name -> (python type, OrientDB property type, alias target)
BASE_TYPES: dict[str, tuple[type, str, str | None]] = {
    "string": (str, "STRING", None),
    "uuid": (str, "STRING", "string"),
    "integer": (int, "INTEGER", None),
    "float": (float, "FLOAT", None),
    "list": (list, "EMBEDDEDLIST", None),
    "set": (set, "EMBEDDEDSET", None),
}


def define_base_types(registry: TypeRegistry) -> None:
    """Register every base scalar type with ``registry``."""
    for name, (python_type, orient_type, alias_of) in BASE_TYPES.items():
        registry.define(
            name,
            python_type=python_type,
            orient_type=orient_type,
            alias_of=alias_of,
        )
