"""
Type Activation

Makes sure a node or edge class exists on the server before data is
written to it: the class itself, extending V or E, plus a STRING ``id``
property with a unique index. The index is what rejects a duplicate create
when two savers race on the same id.
"""

import asyncio
from collections.abc import Sequence

from orient_connector.connector import templates
from orient_connector.connector.models import BASE_EDGE_CLASS, BASE_VERTEX_CLASS, TypeDefinition
from orient_connector.shared.exceptions import BackendCommandError


def _class_exists(exc: BackendCommandError) -> bool:
    return "already exists" in exc.backend_message.lower()


class TypeActivationMixin:
    """Mixin providing class provisioning for the connector."""

    async def activate_type(
        self, definition: TypeDefinition, base_class: str
    ) -> TypeDefinition:
        """Create ``definition.type`` extending ``base_class`` if it is missing.

        An existing class counts as success and is left untouched. The three
        schema statements are not atomic: if the property or index fails the
        class stays behind without them and ``active`` stays False.

        Raises:
            NotConnectedError: If no connection is open.
            BackendCommandError: For any failure other than "already exists".
        """
        dispatcher = self._require_dispatcher()
        type_name = definition.type

        try:
            await dispatcher.run(templates.create_class(type_name, base_class))
        except BackendCommandError as exc:
            if not _class_exists(exc):
                raise
            self._logger.debug("Class %s already exists", type_name)
            definition.active = True
            return definition

        self._logger.info("Created class %s extends %s", type_name, base_class)
        await dispatcher.run_series([
            templates.create_id_property(type_name),
            templates.create_id_index(type_name),
        ])
        definition.active = True
        return definition

    async def activate_node_type(self, definition: TypeDefinition) -> TypeDefinition:
        return await self.activate_type(definition, BASE_VERTEX_CLASS)

    async def activate_edge_type(self, definition: TypeDefinition) -> TypeDefinition:
        return await self.activate_type(definition, BASE_EDGE_CLASS)

    async def activate_node_types(
        self, definitions: Sequence[TypeDefinition]
    ) -> list[TypeDefinition]:
        """Activate several unrelated vertex classes concurrently."""
        return await self._activate_many(definitions, BASE_VERTEX_CLASS)

    async def activate_edge_types(
        self, definitions: Sequence[TypeDefinition]
    ) -> list[TypeDefinition]:
        """Activate several unrelated edge classes concurrently."""
        return await self._activate_many(definitions, BASE_EDGE_CLASS)

    async def _activate_many(
        self, definitions: Sequence[TypeDefinition], base_class: str
    ) -> list[TypeDefinition]:
        self._require_dispatcher()
        results = await asyncio.gather(
            *(self.activate_type(d, base_class) for d in definitions),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)
