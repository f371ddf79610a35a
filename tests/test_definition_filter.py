"""Tests for the dependency closure filter."""

from graphql import parse, print_ast
from graphql.language import TypeExtensionNode

from sdl_import.definition_filter import (
    DocumentDefinitionFilter,
    definition_dependencies,
    unwrap_type_name,
)
from sdl_import.models import BUILT_IN_SCALARS


# ── Helpers ───────────────────────────────────────────────────

def _names(document):
    return [d.name.value for d in document.definitions if getattr(d, "name", None)]


def _filter(sdl, *types):
    return DocumentDefinitionFilter().filter(parse(sdl), types)


SCHEMA = """
directive @auth(role: Role) on OBJECT | FIELD_DEFINITION
directive @tag(name: String) on ENUM_VALUE | ARGUMENT_DEFINITION
directive @never on FIELD_DEFINITION

enum Role { ADMIN USER }

interface Node { id: ID! }

type User implements Node @auth(role: ADMIN) {
  id: ID!
  friends(first: Int, after: Cursor): [[User!]!]
  avatar: Image
}

type Image { url: String }

type Team implements Node { id: ID! lead: User }

scalar Cursor

union Result = User | Image

enum Color {
  RED
  GREEN @tag(name: "g")
}

input Filter { color: Color, nested: Nested }
input Nested { q: String }

type Lonely { x: Int @never }
"""


# ── Closure ───────────────────────────────────────────────────

class TestClosure:
    def test_seed_is_always_present(self):
        deps = DocumentDefinitionFilter().dependencies(parse("type A { x: Int }"), ["Missing"])
        assert deps == {"Missing"}

    def test_field_and_argument_types(self):
        deps = DocumentDefinitionFilter().dependencies(parse(SCHEMA), ["User"])
        assert {"User", "Node", "Image", "Cursor", "auth", "Role"} <= deps
        assert "Lonely" not in deps
        assert "never" not in deps

    def test_built_ins_never_pushed(self):
        deps = DocumentDefinitionFilter().dependencies(parse(SCHEMA), ["User", "Filter", "Nested"])
        assert not deps & BUILT_IN_SCALARS

    def test_interface_pulls_in_implementations(self):
        deps = DocumentDefinitionFilter().dependencies(parse(SCHEMA), ["Node"])
        assert {"Node", "User", "Team", "Image", "Cursor", "auth", "Role"} <= deps

    def test_union_members(self):
        deps = DocumentDefinitionFilter().dependencies(parse(SCHEMA), ["Result"])
        assert {"Result", "User", "Image"} <= deps

    def test_enum_value_directives(self):
        deps = DocumentDefinitionFilter().dependencies(parse(SCHEMA), ["Color"])
        assert deps == {"Color", "tag"}

    def test_input_fields(self):
        deps = DocumentDefinitionFilter().dependencies(parse(SCHEMA), ["Filter"])
        assert deps == {"Filter", "Color", "Nested", "tag"}

    def test_self_reference_terminates(self):
        deps = DocumentDefinitionFilter().dependencies(
            parse("type A { b: B }\ntype B { a: A, self: B }"), ["A"],
        )
        assert deps == {"A", "B"}

    def test_extension_without_base_is_expanded(self):
        deps = DocumentDefinitionFilter().dependencies(
            parse("extend type User { pet: Pet }\ntype Pet { name: String }\ntype Cat { x: Int }"),
            ["User"],
        )
        assert deps == {"User", "Pet"}


# ── Pruning ───────────────────────────────────────────────────

class TestFilter:
    def test_prunes_unused(self):
        document = _filter(SCHEMA, "Color")
        assert _names(document) == ["tag", "Color"]

    def test_keeps_document_order(self):
        document = _filter(SCHEMA, "Result")
        names = _names(document)
        assert names.index("User") < names.index("Image") < names.index("Result")
        assert "Lonely" not in names

    def test_extensions_follow_their_type(self):
        sdl = """
        type User { id: ID }
        extend type User { address: Address }
        type Address { city: String }
        extend type Other { x: Int }
        """
        document = _filter(sdl, "User")
        assert _names(document) == ["User", "User", "Address"]
        assert isinstance(document.definitions[1], TypeExtensionNode)

    def test_schema_definition_passes_through(self):
        document = _filter("schema { query: Q }\ntype Q { a: Int }\ntype Z { b: Int }", "Nothing")
        assert len(document.definitions) == 1
        assert document.definitions[0].kind == "schema_definition"

    def test_does_not_mutate_input(self):
        source = parse(SCHEMA)
        before = len(source.definitions)
        DocumentDefinitionFilter().filter(source, ["Color"])
        assert len(source.definitions) == before

    def test_idempotent(self):
        definition_filter = DocumentDefinitionFilter()
        document = parse(SCHEMA)
        first = print_ast(definition_filter.filter(document, ["Node", "Filter"]))
        second = print_ast(definition_filter.filter(document, ["Node", "Filter"]))
        assert first == second

    def test_missing_names_are_not_errors(self):
        document = _filter("type A { b: B }", "A", "Ghost")
        assert _names(document) == ["A"]


# ── Type map cache ────────────────────────────────────────────

class TestTypeMapCache:
    def test_cached_by_identity(self):
        definition_filter = DocumentDefinitionFilter()
        document = parse("type A { x: Int }")
        assert definition_filter.type_map_for(document) is definition_filter.type_map_for(document)

    def test_equal_documents_get_separate_maps(self):
        definition_filter = DocumentDefinitionFilter()
        first = parse("type A { x: Int }")
        second = parse("type A { x: Int }")
        assert definition_filter.type_map_for(first) is not definition_filter.type_map_for(second)


def test_unwrap_type_name():
    field = parse("type A { x: [[B!]]! }").definitions[0].fields[0]
    assert unwrap_type_name(field.type) == "B"


def test_definition_dependencies_for_directive_definition():
    node = parse("directive @d(a: In, b: Int) on FIELD").definitions[0]
    assert definition_dependencies(node) == ["In"]
