"""Tests for the content and parser caches."""

import pytest
from graphql import GraphQLSyntaxError

from sdl_import.cache import ContentCache, ParserCache


def test_content_is_read_once_and_trimmed(tmp_path):
    path = tmp_path / "a.graphql"
    path.write_text("\n  type A { x: Int }  \n\n")

    cache = ContentCache()
    assert cache.load_file(tmp_path, "a.graphql") == "type A { x: Int }"

    path.write_text("type B { x: Int }")
    assert cache.load_file(path) == "type A { x: Int }"
    assert len(cache) == 1
    assert path in cache


def test_content_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ContentCache().load_file(tmp_path, "missing.graphql")


def test_parser_memoizes_by_path(tmp_path):
    cache = ParserCache()
    first = cache.parse(tmp_path / "a.graphql", "type A { x: Int }")
    second = cache.parse(tmp_path / "a.graphql", "type Ignored { x: Int }")
    assert first is second
    assert first.definitions[0].name.value == "A"


def test_parser_comment_only_file(tmp_path):
    document = ParserCache().parse(tmp_path / "a.graphql", '# import A from "./b.graphql"')
    assert len(document.definitions) == 0


def test_parser_syntax_error_names_file(tmp_path):
    with pytest.raises(GraphQLSyntaxError) as exc:
        ParserCache().parse(tmp_path / "bad.graphql", "type {")
    assert "bad.graphql" in str(exc.value)


def test_clear(tmp_path):
    cache = ParserCache()
    cache.parse(tmp_path / "a.graphql", "type A { x: Int }")
    cache.clear()
    assert len(cache) == 0
