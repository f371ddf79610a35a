"""Per-loader caches for file contents and parsed SDL documents."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from graphql import Source, parse
from graphql.language import DocumentNode

logger = logging.getLogger(__name__)


class ContentCache:
    """Reads files once and keeps their trimmed text."""

    def __init__(self):
        self._cache: dict[Path, str] = {}

    def load_file(self, cwd: Path | str = ".", file_path: Path | str = "") -> str:
        absolute_path = Path(os.path.abspath(Path(cwd) / file_path))

        if absolute_path in self._cache:
            return self._cache[absolute_path]

        # OSError propagates unchanged (missing file, permissions)
        contents = absolute_path.read_text(encoding="utf-8")
        logger.debug("read %s (%d chars)", absolute_path, len(contents))

        self._cache[absolute_path] = contents.strip()
        return self._cache[absolute_path]

    def clear(self) -> None:
        self._cache.clear()

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._cache

    def __len__(self) -> int:
        return len(self._cache)


class ParserCache:
    """Parses SDL text into a document once per file path."""

    def __init__(self):
        self._cache: dict[Path, DocumentNode] = {}

    def parse(self, file_path: Path, contents: str) -> DocumentNode:
        if file_path in self._cache:
            return self._cache[file_path]

        if _only_comments(contents):
            # e.g. an entry file made of import lines only
            document = DocumentNode(definitions=())
        else:
            # GraphQLSyntaxError propagates with the file name as its source
            document = parse(Source(contents, str(file_path)))
        logger.debug("parsed %s (%d definitions)", file_path, len(document.definitions))

        self._cache[file_path] = document
        return document

    def clear(self) -> None:
        self._cache.clear()

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._cache

    def __len__(self) -> int:
        return len(self._cache)


def _only_comments(contents: str) -> bool:
    for line in contents.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return False
    return True
