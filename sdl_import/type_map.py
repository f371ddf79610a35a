"""Per-document index of definitions, extensions and interface implementers."""

from __future__ import annotations

from dataclasses import dataclass, field

from graphql.language import (
    DefinitionNode,
    DirectiveDefinitionNode,
    DocumentNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TypeDefinitionNode,
    TypeExtensionNode,
)

# Named kinds the definition filter is allowed to drop
FILTERABLE_NODES = (TypeDefinitionNode, TypeExtensionNode, DirectiveDefinitionNode)


@dataclass
class TypeMap:
    types: dict[str, DefinitionNode] = field(default_factory=dict)
    extensions: dict[str, list[TypeExtensionNode]] = field(default_factory=dict)
    implementations: dict[str, list[str]] = field(default_factory=dict)  # interface -> [object types]
    schema: SchemaDefinitionNode | None = None
    schema_extensions: list[SchemaExtensionNode] = field(default_factory=list)

    def add(self, definition: DefinitionNode) -> None:
        if isinstance(definition, SchemaDefinitionNode):
            self.schema = definition
            return
        if isinstance(definition, SchemaExtensionNode):
            self.schema_extensions.append(definition)
            return

        if isinstance(definition, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
            self._add_interfaces_for(definition)

        if isinstance(definition, TypeExtensionNode):
            self.extensions.setdefault(definition.name.value, []).append(definition)
        elif isinstance(definition, (TypeDefinitionNode, DirectiveDefinitionNode)):
            # Last one wins on a repeated name
            self.types[definition.name.value] = definition

    def _add_interfaces_for(self, definition) -> None:
        for iface in definition.interfaces or ():
            self.implementations.setdefault(iface.name.value, []).append(definition.name.value)

    def get_type(self, name: str) -> DefinitionNode | None:
        return self.types.get(name)

    def get_extensions(self, name: str) -> list[TypeExtensionNode]:
        return self.extensions.get(name, [])

    def get_implementations(self, interface_name: str) -> list[str]:
        return self.implementations.get(interface_name, [])

    def names(self) -> set[str]:
        return set(self.types) | set(self.extensions)


def build_type_map(document: DocumentNode) -> TypeMap:
    """Index a document's definitions in one pass."""
    type_map = TypeMap()
    for definition in document.definitions:
        type_map.add(definition)
    return type_map
