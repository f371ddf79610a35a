"""Data models for the sdl-import loader."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Internal "whole file" request; never valid as a literal imported name
WILDCARD = "*"

BUILT_IN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ImportStatement:
    """One parsed `# import A, B from "./file.graphql"` line."""
    types: list[str]
    file_name: Path
    line_number: int = 0


@dataclass
class ImportGraph:
    """File -> accumulated requested type names, in discovery order."""
    entry: Path
    requests: dict[Path, list[str]] = field(default_factory=dict)

    def __post_init__(self):
        self.requests.setdefault(self.entry, [WILDCARD])

    def request(self, file_name: Path, types: list[str]) -> None:
        self.requests.setdefault(file_name, []).extend(types)

    def requested(self, file_name: Path) -> list[str]:
        return self.requests.get(file_name, [])

    def is_wildcard(self, file_name: Path) -> bool:
        return WILDCARD in self.requested(file_name)

    def files(self) -> list[Path]:
        return list(self.requests)

    def items(self):
        return self.requests.items()

    def __contains__(self, file_name: object) -> bool:
        return file_name in self.requests

    def __len__(self) -> int:
        return len(self.requests)


@dataclass
class LoaderOptions:
    """Options accepted by GraphQLFileLoader."""
    no_imports: bool = False
    ignore: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", "__pycache__", "build", "dist",
    ])
    # Imports resolving outside this directory are refused
    root_dir: Path | None = None

    def __post_init__(self):
        if not self.no_imports:
            self.no_imports = os.getenv("SDL_IMPORT_NO_IMPORTS", "").lower() in _TRUTHY


@dataclass
class LoadResult:
    """Result of a full load: merged SDL plus how it was assembled."""
    entry: Path
    sdl: str
    graph: ImportGraph | None = None
    definition_count: int = 0
