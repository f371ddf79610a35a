"""Walk import directives from an entry file and accumulate per-file requests."""

from __future__ import annotations

import logging
from pathlib import Path

from sdl_import.cache import ContentCache
from sdl_import.errors import ImportOutsideRootError
from sdl_import.imports import parse_import_statements
from sdl_import.models import ImportGraph

logger = logging.getLogger(__name__)


class ImportGraphBuilder:
    """Build an ImportGraph by following `#import` lines."""

    def __init__(self, content_cache: ContentCache | None = None):
        self._content_cache = content_cache if content_cache is not None else ContentCache()

    def build(self, entry_file: Path, root_dir: Path | None = None) -> ImportGraph:
        """Follow imports from `entry_file`.

        With `root_dir` set, a file resolving outside it raises
        ImportOutsideRootError before it is read.
        """
        root = root_dir.resolve() if root_dir is not None else None
        graph = ImportGraph(entry=entry_file)
        files = [entry_file]
        visited: set[Path] = set()

        while files:
            file_name = files.pop()
            if file_name in visited:
                continue
            visited.add(file_name)

            if root is not None and not file_name.resolve().is_relative_to(root):
                raise ImportOutsideRootError(file_name, root)

            contents = self._content_cache.load_file(file_name)
            statements = parse_import_statements(file_name.parent, contents, file_name)
            logger.debug("visited %s (%d imports)", file_name, len(statements))

            for statement in statements:
                graph.request(statement.file_name, statement.types)
                # Pushed even if seen: the visited check drops repeats
                files.append(statement.file_name)
                logger.debug(
                    "%s imports %s from %s",
                    file_name, ", ".join(statement.types), statement.file_name,
                )

        return graph
