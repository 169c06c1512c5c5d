"""
Entity Operations

find / get / save for vertices and edges. Saves read first and then
either update or create; the read and the write are separate commands, so
two concurrent saves of a new id can both choose create. The unique id
index turns the loser into a DuplicateRecordError, which the caller may
retry.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from orient_connector.connector import templates
from orient_connector.connector.marshaller import to_set_clause
from orient_connector.connector.models import (
    BASE_EDGE_CLASS,
    BASE_VERTEX_CLASS,
    ID_FIELD,
    Edge,
    EndpointRef,
    Node,
    SearchParams,
)
from orient_connector.shared.exceptions import InvalidArgumentError

Records = list[dict[str, Any]]


def _require_data(entity: Node | Edge, kind: str) -> dict[str, Any]:
    if entity is None or entity.data is None:
        raise InvalidArgumentError(f"{kind}.data is required")
    if not isinstance(entity.data, Mapping):
        raise InvalidArgumentError(f"{kind}.data must be a mapping")
    data = dict(entity.data)
    # identity values are always stored as strings, matching how lookups quote them
    if data.get(ID_FIELD) is not None:
        data[ID_FIELD] = str(data[ID_FIELD])
    return data


class EntityOperationsMixin:
    """Mixin providing vertex and edge reads and writes for the connector."""

    # ─── Reads ─────────────────────────────────────────────

    async def find(self, search: SearchParams | Mapping[str, Any] | None) -> Records:
        """Find records by id, optionally restricted to one class.

        Without a type the vertex classes are searched first and the edge
        classes only when no vertex matched.
        """
        dispatcher = self._require_dispatcher()
        params = SearchParams.coerce(search)
        if not params.id:
            return []
        if params.type:
            return await dispatcher.run(templates.select_by_id(params.type, params.id))

        for base_class in (BASE_VERTEX_CLASS, BASE_EDGE_CLASS):
            records = await dispatcher.run(templates.select_by_id(base_class, params.id))
            if records:
                return records
        return []

    async def get_node(self, node_id: str, node_type: str = BASE_VERTEX_CLASS) -> Records:
        dispatcher = self._require_dispatcher()
        return await dispatcher.run(templates.select_by_id(node_type, node_id))

    async def get_edge(
        self,
        source: EndpointRef,
        target: EndpointRef,
        edge_type: str = BASE_EDGE_CLASS,
    ) -> Records:
        dispatcher = self._require_dispatcher()
        return await dispatcher.run(templates.select_edge(edge_type, source, target))

    # ─── Writes ────────────────────────────────────────────

    async def save_node(self, node: Node) -> Records:
        """Create the vertex, or update it when one with the same id exists.

        Returns:
            The records the server returned for the create or update.

        Raises:
            NotConnectedError: If no connection is open.
            InvalidArgumentError: If ``node.data`` or its id is missing.
            DuplicateRecordError: If a concurrent save created the id first.
        """
        dispatcher = self._require_dispatcher()
        data = _require_data(node, "node")
        node_id = data.get(ID_FIELD)
        if node_id is None or node_id == "":
            raise InvalidArgumentError(f"node.data.{ID_FIELD} is required")
        node_type = node.type or BASE_VERTEX_CLASS
        create_sets = to_set_clause(data)
        update_sets = to_set_clause(data, exclude={ID_FIELD})

        existing = await dispatcher.run(templates.select_by_id(node_type, node_id))
        if existing:
            if not update_sets:
                return existing
            self._logger.debug("Updating %s %s", node_type, node_id)
            return await dispatcher.run(templates.update(node_type, node_id, update_sets))

        self._logger.debug("Creating %s %s", node_type, node_id)
        return await dispatcher.run(templates.vertex_create(node_type, create_sets))

    async def save_edge(
        self, source: EndpointRef, target: EndpointRef, entity: Edge
    ) -> Records:
        """Create or update the edge of ``entity.type`` from source to target.

        The existing edge is looked up by (type, source.id, target.id); any
        id inside ``entity.data`` plays no part in the lookup.
        """
        dispatcher = self._require_dispatcher()
        data = _require_data(entity, "entity")
        edge_type = entity.type or BASE_EDGE_CLASS
        create_sets = to_set_clause(data)
        update_sets = to_set_clause(data, exclude={ID_FIELD})

        existing = await dispatcher.run(templates.select_edge(edge_type, source, target))
        if existing:
            if not update_sets:
                return existing
            self._logger.debug("Updating %s %s -> %s", edge_type, source.id, target.id)
            return await dispatcher.run(
                templates.update_edge(edge_type, source, target, update_sets)
            )

        self._logger.debug("Creating %s %s -> %s", edge_type, source.id, target.id)
        return await dispatcher.run(
            templates.edge_create(edge_type, source, target, create_sets)
        )

    # ─── Raw batches ───────────────────────────────────────

    async def execute(self, statements: Sequence[str], parallel: bool = False) -> list[Records]:
        """Run pre-rendered statements, in order or concurrently."""
        dispatcher = self._require_dispatcher()
        if parallel:
            return await dispatcher.run_parallel(statements)
        return await dispatcher.run_series(statements)
