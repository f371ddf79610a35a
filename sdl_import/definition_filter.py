"""Filter a parsed SDL document down to the requested types and their transitive dependencies."""

from __future__ import annotations

import logging
from typing import Iterable

from graphql.language import (
    DefinitionNode,
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
)

from sdl_import.models import BUILT_IN_SCALARS
from sdl_import.type_map import FILTERABLE_NODES, TypeMap, build_type_map

logger = logging.getLogger(__name__)

_FIELDED_NODES = (
    ObjectTypeDefinitionNode, ObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode, InterfaceTypeExtensionNode,
)
_INPUT_NODES = (InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode)
_UNION_NODES = (UnionTypeDefinitionNode, UnionTypeExtensionNode)
_ENUM_NODES = (EnumTypeDefinitionNode, EnumTypeExtensionNode)
_INTERFACE_NODES = (InterfaceTypeDefinitionNode, InterfaceTypeExtensionNode)


def is_built_in_type(type_name: str) -> bool:
    return type_name in BUILT_IN_SCALARS


def unwrap_type_name(type_node: TypeNode) -> str:
    """Drill through NonNull and List wrappers to the named type."""
    while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
        type_node = type_node.type
    return type_node.name.value


def _directive_names(node) -> list[str]:
    # Directive definitions carry no `directives` attribute
    return [directive.name.value for directive in getattr(node, "directives", None) or ()]


def _input_value_dependencies(values) -> list[str]:
    """Types and directives of arguments or input fields."""
    dependencies: list[str] = []
    for value in values or ():
        type_name = unwrap_type_name(value.type)
        if not is_built_in_type(type_name):
            dependencies.append(type_name)
        dependencies.extend(_directive_names(value))
    return dependencies


def definition_dependencies(definition: DefinitionNode) -> list[str]:
    """Names a single definition or extension refers to.

    Covers field and argument types, declared interfaces, union members and
    every directive used on the node, its fields, arguments or enum values.
    Interface implementers are not included here; they come from the
    document's TypeMap.
    """
    dependencies = _directive_names(definition)

    if isinstance(definition, _FIELDED_NODES):
        dependencies.extend(iface.name.value for iface in definition.interfaces or ())
        for field in definition.fields or ():
            type_name = unwrap_type_name(field.type)
            if not is_built_in_type(type_name):
                dependencies.append(type_name)
            dependencies.extend(_directive_names(field))
            dependencies.extend(_input_value_dependencies(field.arguments))
    elif isinstance(definition, _INPUT_NODES):
        dependencies.extend(_input_value_dependencies(definition.fields))
    elif isinstance(definition, _UNION_NODES):
        dependencies.extend(member.name.value for member in definition.types or ())
    elif isinstance(definition, _ENUM_NODES):
        for value in definition.values or ():
            dependencies.extend(_directive_names(value))
    elif isinstance(definition, DirectiveDefinitionNode):
        dependencies.extend(_input_value_dependencies(definition.arguments))

    return dependencies


class DocumentDefinitionFilter:
    """Prunes documents to a requested set of types plus what they need.

    Type maps are cached by document identity, so structurally equal
    documents parsed from different files keep separate entries.
    """

    def __init__(self):
        # id(document) -> (document, type map); holding the document keeps its id from being reused
        self._type_maps: dict[int, tuple[DocumentNode, TypeMap]] = {}

    def type_map_for(self, document: DocumentNode) -> TypeMap:
        cached = self._type_maps.get(id(document))
        if cached is not None and cached[0] is document:
            return cached[1]

        type_map = build_type_map(document)
        self._type_maps[id(document)] = (document, type_map)
        return type_map

    def dependencies(self, document: DocumentNode, types: Iterable[str]) -> set[str]:
        """Transitive closure of type names reachable from `types`."""
        type_map = self.type_map_for(document)
        dependencies = set(types)
        visiting = list(dependencies)
        visited: set[str] = set()

        while visiting:
            type_name = visiting.pop()
            if type_name in visited:
                continue
            visited.add(type_name)

            found: list[str] = []
            definition = type_map.get_type(type_name)
            if definition is not None:
                found.extend(definition_dependencies(definition))
                if isinstance(definition, InterfaceTypeDefinitionNode):
                    found.extend(type_map.get_implementations(type_name))

            # Extensions count even when the base type lives in another file
            extensions = type_map.get_extensions(type_name)
            for extension in extensions:
                found.extend(definition_dependencies(extension))
            if definition is None and any(isinstance(e, _INTERFACE_NODES) for e in extensions):
                found.extend(type_map.get_implementations(type_name))

            for name in found:
                if is_built_in_type(name) or name in visited:
                    continue
                dependencies.add(name)
                visiting.append(name)

        return dependencies

    def filter(self, document: DocumentNode, types: Iterable[str]) -> DocumentNode:
        """Return a new document holding only the closure of `types`."""
        dependencies = self.dependencies(document, types)

        definitions = [
            definition for definition in document.definitions
            if not isinstance(definition, FILTERABLE_NODES)
            or definition.name.value in dependencies
        ]

        logger.debug(
            "kept %d of %d definitions (%d names in closure)",
            len(definitions), len(document.definitions), len(dependencies),
        )
        return DocumentNode(definitions=tuple(definitions))

    def clear(self) -> None:
        self._type_maps.clear()
