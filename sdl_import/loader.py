"""Load a GraphQL SDL file and resolve its `#import` directives into one document."""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import os
from pathlib import Path

from graphql import print_ast
from graphql.language import DefinitionNode, DocumentNode

from sdl_import.cache import ContentCache, ParserCache
from sdl_import.definition_filter import DocumentDefinitionFilter
from sdl_import.import_graph import ImportGraphBuilder
from sdl_import.models import ImportGraph, LoaderOptions, LoadResult

logger = logging.getLogger(__name__)


class GraphQLFileLoader:
    """Merge an entry file and the types it imports into a single SDL document.

    Each loader owns its caches; build a new loader for fresh ones.
    """

    def __init__(
        self,
        content_cache: ContentCache | None = None,
        parser_cache: ParserCache | None = None,
        definition_filter: DocumentDefinitionFilter | None = None,
    ):
        self._content_cache = content_cache if content_cache is not None else ContentCache()
        self._parser_cache = parser_cache if parser_cache is not None else ParserCache()
        self._definition_filter = (
            definition_filter if definition_filter is not None else DocumentDefinitionFilter()
        )
        self._graph_builder = ImportGraphBuilder(self._content_cache)

    @staticmethod
    def resolve_entry(cwd: Path | str, file_path: Path | str) -> Path:
        # Normalised the same way as import targets so a cycle back to the entry hits one key
        return Path(os.path.abspath(Path(cwd) / file_path))

    def build_import_graph(self, entry_file: Path, root_dir: Path | None = None) -> ImportGraph:
        return self._graph_builder.build(Path(os.path.abspath(entry_file)), root_dir=root_dir)

    def load(
        self,
        cwd: Path | str,
        file_path: Path | str,
        options: LoaderOptions | None = None,
    ) -> LoadResult:
        options = options or LoaderOptions()
        entry = self.resolve_entry(cwd, file_path)

        if options.no_imports:
            return LoadResult(entry=entry, sdl=self._content_cache.load_file(entry))

        graph = self.build_import_graph(entry, root_dir=options.root_dir)
        document = self._merge(graph)
        sdl = print_ast(document).rstrip()

        logger.info(
            "loaded %s: %d file(s), %d definition(s)",
            entry, len(graph), len(document.definitions),
        )
        return LoadResult(
            entry=entry,
            sdl=sdl,
            graph=graph,
            definition_count=len(document.definitions),
        )

    def load_file(
        self,
        cwd: Path | str,
        file_path: Path | str,
        options: LoaderOptions | None = None,
    ) -> str:
        """Return merged SDL text for an entry file."""
        return self.load(cwd, file_path, options).sdl

    async def load_async(
        self,
        cwd: Path | str,
        file_path: Path | str,
        options: LoaderOptions | None = None,
    ) -> LoadResult:
        """Run `load` in a worker thread; the load itself stays sequential."""
        return await asyncio.to_thread(self.load, cwd, file_path, options)

    async def load_file_async(
        self,
        cwd: Path | str,
        file_path: Path | str,
        options: LoaderOptions | None = None,
    ) -> str:
        result = await self.load_async(cwd, file_path, options)
        return result.sdl

    def load_many(
        self,
        directory: Path | str,
        pattern: str = "**/*.graphql",
        options: LoaderOptions | None = None,
    ) -> dict[Path, str]:
        """Load every file under `directory` matching `pattern` as its own entry."""
        options = options or LoaderOptions()
        directory = Path(os.path.abspath(directory))
        results: dict[Path, str] = {}

        for path in sorted(directory.glob(pattern)):
            if path.is_dir() or _should_ignore(path.relative_to(directory), options.ignore):
                continue
            results[path] = self.load_file(directory, path, options)

        return results

    def clear_caches(self) -> None:
        self._content_cache.clear()
        self._parser_cache.clear()
        self._definition_filter.clear()

    def _merge(self, graph: ImportGraph) -> DocumentNode:
        definitions: list[DefinitionNode] = []

        # Reverse discovery order: imported files first, the entry file last
        for file_name, types in reversed(list(graph.items())):
            contents = self._content_cache.load_file(file_name)
            document = self._parser_cache.parse(file_name, contents)

            if graph.is_wildcard(file_name):
                definitions.extend(document.definitions)
                continue

            filtered = self._definition_filter.filter(document, types)
            logger.debug("%s: kept %d definition(s) for %s", file_name, len(filtered.definitions), types)
            definitions.extend(filtered.definitions)

        return DocumentNode(definitions=tuple(definitions))


def _should_ignore(relative_path: Path, ignore: list[str]) -> bool:
    for pattern in ignore:
        if fnmatch.fnmatch(str(relative_path), pattern):
            return True
        for part in relative_path.parts:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False
