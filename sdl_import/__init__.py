"""Merge GraphQL SDL files connected by `# import` directives."""

from __future__ import annotations

__version__ = "0.1.0"

from sdl_import.cache import ContentCache, ParserCache
from sdl_import.definition_filter import DocumentDefinitionFilter
from sdl_import.errors import ImportOutsideRootError, ImportSyntaxError, SDLImportError
from sdl_import.import_graph import ImportGraphBuilder
from sdl_import.loader import GraphQLFileLoader
from sdl_import.models import WILDCARD, ImportGraph, ImportStatement, LoaderOptions, LoadResult
from sdl_import.type_map import TypeMap, build_type_map

__all__ = [
    "ContentCache",
    "DocumentDefinitionFilter",
    "GraphQLFileLoader",
    "ImportGraph",
    "ImportGraphBuilder",
    "ImportOutsideRootError",
    "ImportStatement",
    "ImportSyntaxError",
    "LoadResult",
    "LoaderOptions",
    "ParserCache",
    "SDLImportError",
    "TypeMap",
    "WILDCARD",
    "build_type_map",
]
